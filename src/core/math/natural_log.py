"""
Natural Log — Fixed-point ln(x) без float

Аппроксимация натурального логарифма положительного fixed-point
значения с точностью до единицы последнего разряда результата.

АЛГОРИТМ:
    x = m * 2^k,  m ∈ [1, 2)                   (нормализация по bit_length)
    ln(m) = 2 * atanh(y),  y = (m - 1) / (m + 1) ∈ [0, 1/3)
    atanh(y) = y + y^3/3 + y^5/5 + ...         (каждый член ≤ 1/9 предыдущего)
    ln(x) = ln(m) + k * ln(2),  ln(2) = 2 * atanh(1/3)

Вычисления идут в Q.(width + LN_GUARD_BITS); ошибки усечения членов
ряда и k * ln(2) остаются в guard-битах и отбрасываются финальным
сдвигом. Нормализация даёт одинаковую точность на всём диапазоне
входов (проверено от 1e-10 до 2e22 и шире).

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. x ≤ 0 → LogDomainError
2. ln(1) == 0 точно
3. Целая часть результата совпадает с floor(ln(x)) точного логарифма
4. Количество итераций ограничено: ряд обрывается, когда член обнуляется
"""

from functools import lru_cache
from typing import Final

from src.core.math.fixed_point import PRECISION, Fixed
from src.core.math.numerical_safeguards import LogDomainError, WidthMismatchError

# =============================================================================
# ПАРАМЕТРЫ
# =============================================================================

# Дополнительные биты рабочей точности поверх width входа
LN_GUARD_BITS: Final[int] = 64


# =============================================================================
# ВНУТРЕННИЕ ПРИМИТИВЫ
# =============================================================================


def _atanh_series(y: int, work: int) -> int:
    """
    2 * atanh(y) для y ∈ [0, 1/3) в Q.work.

    Все члены неотрицательны; при y < 1/3 каждый следующий член
    меньше предыдущего минимум в 9 раз, поэтому ряд обрывается
    не более чем через work / 3 + 1 итераций.
    """
    y_squared = (y * y) >> work
    term = y
    total = 0
    divisor = 1

    while term:
        total += term // divisor
        term = (term * y_squared) >> work
        divisor += 2

    return 2 * total


@lru_cache(maxsize=None)
def _ln2(work: int) -> int:
    """ln(2) = 2 * atanh(1/3) в Q.work (константа для каждой рабочей width)."""
    return _atanh_series((1 << work) // 3, work)


def _ln_mantissa(mantissa: int, work: int) -> int:
    """ln(m) для m ∈ [1, 2) в Q.work."""
    one = 1 << work
    y = ((mantissa - one) << work) // (mantissa + one)
    return _atanh_series(y, work)


# =============================================================================
# LN
# =============================================================================


def ln(x: Fixed) -> Fixed:
    """
    Натуральный логарифм fixed-point значения.

    Args:
        x: Положительное значение; width должна быть кратна PRECISION

    Returns:
        ln(x) в той же width, что и x

    Raises:
        LogDomainError: Если x ≤ 0
        WidthMismatchError: Если width не является положительным кратным PRECISION

    Examples:
        >>> ln(Fixed.from_int(1)).raw
        0
        >>> ln(Fixed.from_int(100)).to_int()
        4
        >>> ln(Fixed.from_ratio(1, 10)).to_int()
        -3
    """
    if not isinstance(x, Fixed):
        raise TypeError(f"ln expects a Fixed value, got {type(x).__name__}")

    width = x.width
    if width == 0 or width % PRECISION:
        raise WidthMismatchError(
            f"ln expects a width that is a positive multiple of Q.{PRECISION}, got Q.{width}"
        )

    if x.raw <= 0:
        raise LogDomainError(f"ln is undefined for non-positive input (raw={x.raw}, Q.{width})")

    work = width + LN_GUARD_BITS
    top_bit = x.raw.bit_length() - 1

    # Двоичная экспонента: x = m * 2^k
    k = top_bit - width

    # Мантисса m ∈ [1, 2) в Q.work
    shift = work - top_bit
    if shift >= 0:
        mantissa = x.raw << shift
    else:
        mantissa = x.raw >> -shift

    result = _ln_mantissa(mantissa, work) + k * _ln2(work)

    return Fixed(result >> LN_GUARD_BITS, width)


# ln(2) в базовой width Q.P
LN_2: Final[Fixed] = Fixed(_ln2(PRECISION + LN_GUARD_BITS) >> LN_GUARD_BITS)
