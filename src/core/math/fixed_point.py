"""
Fixed Point — Детерминированная арифметика с явной width

Значение Fixed(raw, width) представляет вещественное число raw / 2^width.
raw — Python int произвольной точности, поэтому переполнения невозможны.

Width (количество дробных бит) отслеживается на каждом шаге:
- add/sub:  Q.a ± Q.a → Q.a  (разные width → WidthMismatchError)
- mul:      Q.a * Q.b → Q.(a+b)
- div:      Q.a / Q.b → Q.(a-b), усечение к нулю
- rescale:  Q.a → Q.b с сохранением значения (сужение = floor)
- shift:    умножение значения на 2^n без смены width

Для сохранения P дробных бит в частном делимое сначала расширяется:
Q.128 / Q.128 с результатом Q.128 требует делимого в Q.256 (см. div()).

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Никакая операция не смешивает width молча
2. Float не принимается ни в одном конструкторе
3. Все операции корректны для отрицательных операндов
"""

import re
from dataclasses import dataclass
from typing import Final

from src.core.math.numerical_safeguards import (
    WidthMismatchError,
    require_same_width,
    truncating_divide,
    validate_integer,
    validate_width,
)

# =============================================================================
# PRECISION
# =============================================================================

# Протокольная точность P: базовая width Q.P для позиций, скоростей и результатов
PRECISION: Final[int] = 128

# Десятичный литерал: знак, целая часть, опциональная дробная часть
_DECIMAL_LITERAL: Final = re.compile(r"([+-]?)(\d+)(?:\.(\d+))?", re.ASCII)


# =============================================================================
# FIXED
# =============================================================================


@dataclass(frozen=True)
class Fixed:
    """
    Immutable fixed-point значение raw / 2^width.

    Поддерживает +, -, *, /, унарный минус, abs и сравнения.
    Операнд любого другого типа (int, float) отвергается: целые
    числа поднимаются явно через Fixed.from_int(n, 0).

    Examples:
        >>> one = Fixed.from_int(1)
        >>> (one * one).width
        256
        >>> (one * one).rescale(PRECISION) == one
        True
    """

    raw: int
    width: int = PRECISION

    def __post_init__(self) -> None:
        validate_integer(self.raw, "raw")
        validate_width(self.width)

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def from_int(cls, value: int, width: int = PRECISION) -> "Fixed":
        """Целое Q.0 → Q.width (точно)."""
        validate_integer(value, "value")
        validate_width(width)
        return cls(value << width, width)

    @classmethod
    def from_ratio(cls, numerator: int, denominator: int, width: int = PRECISION) -> "Fixed":
        """
        Рациональное numerator / denominator в Q.width, усечение к нулю.

        Examples:
            >>> Fixed.from_ratio(1, 2).raw == 1 << (PRECISION - 1)
            True
        """
        validate_integer(numerator, "numerator")
        validate_integer(denominator, "denominator")
        validate_width(width)
        return cls(truncating_divide(numerator << width, denominator), width)

    @classmethod
    def parse(cls, text: str, width: int = PRECISION) -> "Fixed":
        """
        Десятичный литерал ("0.000925", "-12.5", "42") → Q.width.

        Разбор точный: литерал переводится в рациональное число
        и усекается к нулю только один раз.

        Raises:
            ValueError: Если строка не является десятичным литералом
        """
        match = _DECIMAL_LITERAL.fullmatch(text.strip())
        if match is None:
            raise ValueError(f"Not a decimal literal: {text!r}")

        sign, whole, fraction = match.groups()
        fraction = fraction or ""
        numerator = int(whole + fraction)
        if sign == "-":
            numerator = -numerator

        return cls.from_ratio(numerator, 10 ** len(fraction), width)

    # -------------------------------------------------------------------------
    # Width
    # -------------------------------------------------------------------------

    def rescale(self, width: int) -> "Fixed":
        """
        Перевод в Q.width с сохранением значения.

        Расширение точное; сужение отбрасывает младшие биты
        (арифметический сдвиг вправо, floor).
        """
        validate_width(width)
        delta = width - self.width
        if delta >= 0:
            return Fixed(self.raw << delta, width)
        return Fixed(self.raw >> -delta, width)

    def shift(self, bits: int) -> "Fixed":
        """Умножение значения на 2^bits без смены width (bits < 0 → floor)."""
        validate_integer(bits, "bits")
        if bits >= 0:
            return Fixed(self.raw << bits, self.width)
        return Fixed(self.raw >> -bits, self.width)

    def to_int(self) -> int:
        """Целая часть: raw сдвинутый вправо на width бит (floor)."""
        return self.raw >> self.width

    def sign(self) -> int:
        """-1, 0 или 1."""
        return (self.raw > 0) - (self.raw < 0)

    def div(self, other: "Fixed", width: int = PRECISION) -> "Fixed":
        """
        Деление с сохранением width дробных бит в частном.

        Делимое предварительно переводится в Q.(width + other.width),
        после чего Q.(width + b) / Q.b → Q.width.

        Raises:
            ZeroDivisionError: Если other == 0
        """
        if not isinstance(other, Fixed):
            raise TypeError(f"Cannot divide Fixed by {type(other).__name__}")
        return self.rescale(width + other.width) / other

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def __add__(self, other: "Fixed") -> "Fixed":
        if not isinstance(other, Fixed):
            return NotImplemented
        require_same_width(self.width, other.width, "add")
        return Fixed(self.raw + other.raw, self.width)

    def __sub__(self, other: "Fixed") -> "Fixed":
        if not isinstance(other, Fixed):
            return NotImplemented
        require_same_width(self.width, other.width, "subtract")
        return Fixed(self.raw - other.raw, self.width)

    def __mul__(self, other: "Fixed") -> "Fixed":
        # Q.a * Q.b → Q.(a+b), rescale остаётся на вызывающем коде
        if not isinstance(other, Fixed):
            return NotImplemented
        return Fixed(self.raw * other.raw, self.width + other.width)

    def __truediv__(self, other: "Fixed") -> "Fixed":
        if not isinstance(other, Fixed):
            return NotImplemented
        width = self.width - other.width
        if width < 0:
            raise WidthMismatchError(
                f"Cannot divide Q.{self.width} by Q.{other.width}: "
                f"widen the dividend to at least Q.{other.width} first"
            )
        return Fixed(truncating_divide(self.raw, other.raw), width)

    def __neg__(self) -> "Fixed":
        return Fixed(-self.raw, self.width)

    def __abs__(self) -> "Fixed":
        return Fixed(abs(self.raw), self.width)

    # -------------------------------------------------------------------------
    # Сравнения
    # -------------------------------------------------------------------------

    def _compare(self, other: "Fixed") -> int:
        require_same_width(self.width, other.width, "compare")
        return (self.raw > other.raw) - (self.raw < other.raw)

    def __lt__(self, other: "Fixed") -> bool:
        if not isinstance(other, Fixed):
            return NotImplemented
        return self._compare(other) < 0

    def __le__(self, other: "Fixed") -> bool:
        if not isinstance(other, Fixed):
            return NotImplemented
        return self._compare(other) <= 0

    def __gt__(self, other: "Fixed") -> bool:
        if not isinstance(other, Fixed):
            return NotImplemented
        return self._compare(other) > 0

    def __ge__(self, other: "Fixed") -> bool:
        if not isinstance(other, Fixed):
            return NotImplemented
        return self._compare(other) >= 0


# Единица в базовой width
ONE: Final[Fixed] = Fixed.from_int(1)

# Ноль в базовой width
ZERO: Final[Fixed] = Fixed(0)
