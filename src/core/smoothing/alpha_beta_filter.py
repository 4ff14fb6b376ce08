"""Alpha-Beta Filter — обновление сглаженной оценки по новому наблюдению.

Прогноз:     x = p + v * dt
Невязка:     r = observation - x
Коррекция:   p' = x + alpha * r
             v' = v + beta * r / dt

Все величины в Q.P; наблюдение приходит как целое Q.0.
"""

import logging
from dataclasses import dataclass, field
from typing import Final

from src.core.math.fixed_point import PRECISION, Fixed
from src.core.math.numerical_safeguards import validate_integer, validate_positive_integer
from src.core.smoothing.estimate import SmoothedEstimate

logger = logging.getLogger(__name__)


# Коэффициенты сглаживания по умолчанию (Q.P)
DEFAULT_ALPHA: Final[Fixed] = Fixed.parse("0.000925")
DEFAULT_BETA: Final[Fixed] = Fixed.parse("0.000000284")


@dataclass(frozen=True)
class AlphaBetaFilterConfig:
    """Коэффициенты фильтра.

    - alpha: доля невязки, переносимая в position
    - beta: доля невязки (на эпоху), переносимая в velocity
    """
    alpha: Fixed = DEFAULT_ALPHA
    beta: Fixed = DEFAULT_BETA

    def __post_init__(self) -> None:
        for name in ("alpha", "beta"):
            value = getattr(self, name)
            if not isinstance(value, Fixed) or value.width != PRECISION:
                raise ValueError(f"{name} must be a Q.{PRECISION} Fixed value, got {value!r}")


@dataclass(frozen=True)
class AlphaBetaFilter:
    """Фильтр поверх предыдущей оценки.

    Не хранит изменяемого состояния: next_estimate() возвращает
    новую оценку, а сам фильтр остаётся прежним.
    """
    previous: SmoothedEstimate
    config: AlphaBetaFilterConfig = field(default_factory=AlphaBetaFilterConfig)

    def next_estimate(self, observation: int, epoch_delta: int) -> SmoothedEstimate:
        """Оценка после наблюдения observation, сделанного через epoch_delta эпох.

        Args:
            observation: наблюдаемое значение (целое, Q.0)
            epoch_delta: эпох с момента предыдущей оценки (> 0)

        Returns:
            новая SmoothedEstimate

        Raises:
            ValueError: epoch_delta ≤ 0
            TypeError: аргументы не int
        """
        validate_integer(observation, "observation")
        validate_positive_integer(epoch_delta, "epoch_delta")

        delta_t = Fixed.from_int(epoch_delta)  # Q.0 → Q.P
        prev = self.previous

        delta_x = (prev.velocity * delta_t).rescale(PRECISION)  # Q.2P → Q.P
        position = prev.position + delta_x

        residual = Fixed.from_int(observation) - position
        revision_x = (self.config.alpha * residual).rescale(PRECISION)
        position = position + revision_x

        revision_v = (self.config.beta * residual) / delta_t  # Q.2P / Q.P → Q.P
        velocity = prev.velocity + revision_v

        logger.debug(
            "alpha-beta update: epoch_delta=%d residual_int=%d",
            epoch_delta,
            residual.to_int(),
        )

        return SmoothedEstimate(position=position, velocity=velocity)
