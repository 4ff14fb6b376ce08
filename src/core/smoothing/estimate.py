"""
SmoothedEstimate — Оценка position/velocity сглаженной величины

Immutable Pydantic модель пары (position, velocity) в Q.P, привязанной
к опорной эпохе 0. Экстраполяция выражается через смещение в эпохах,
поэтому один объект можно запрашивать в любой точке без мутаций.

Жизненный цикл: создаётся из наблюдения протокола, используется для
произвольного числа запросов extrapolate() и отбрасывается.
"""

from pydantic import BaseModel, Field, field_validator

from src.core.math.fixed_point import PRECISION, Fixed
from src.core.math.numerical_safeguards import validate_integer


class SmoothedEstimate(BaseModel):
    """
    Сглаженная оценка величины и скорости её изменения.

    Immutable модель (frozen=True): новая оценка — новый экземпляр.
    Обе компоненты обязаны быть в width Q.P.
    """

    position: Fixed = Field(..., description="Оценка величины в опорной эпохе (Q.P)")
    velocity: Fixed = Field(..., description="Оценка изменения за эпоху (Q.P, может быть < 0)")

    model_config = {"frozen": True}  # Immutable

    @field_validator("position", "velocity")
    @classmethod
    def validate_precision(cls, v: Fixed) -> Fixed:
        """Компоненты оценки хранятся строго в Q.P."""
        if v.width != PRECISION:
            raise ValueError(f"estimate components must be Q.{PRECISION}, got Q.{v.width}")
        return v

    @classmethod
    def from_integers(cls, position: int, velocity: int = 0) -> "SmoothedEstimate":
        """
        Оценка из целых (Q.0) значений наблюдения.

        Examples:
            >>> SmoothedEstimate.from_integers(10, 2).extrapolate(5).to_int()
            20
        """
        return cls(
            position=Fixed.from_int(position),
            velocity=Fixed.from_int(velocity),
        )

    @classmethod
    def constant(cls, position: int) -> "SmoothedEstimate":
        """Оценка с нулевой скоростью."""
        return cls.from_integers(position, 0)

    def extrapolate(self, offset: int) -> Fixed:
        """
        Линейная экстраполяция на offset эпох от опорной точки.

        position + velocity * offset, вычисляется в расширенной width,
        чтобы произведение velocity * offset не теряло дробных бит.

        Args:
            offset: Смещение в эпохах (любое целое, в т.ч. < 0)

        Returns:
            Оценка величины в Q.2P
        """
        validate_integer(offset, "offset")

        delta_t = Fixed.from_int(offset)  # Q.0 → Q.P
        extrapolation = self.velocity * delta_t  # Q.P * Q.P → Q.2P
        return self.position.rescale(2 * PRECISION) + extrapolation

    def estimate(self) -> int:
        """Целая часть position (Q.0)."""
        return self.position.to_int()
