"""
Numerical Safeguards — Integer Guards & Error Taxonomy

Модуль задаёт таксономию ошибок и целочисленные примитивы,
на которых строится fixed-point арифметика:
- Domain-ошибки (ln от неположительного, знаменатель ≤ 0 в диапазоне)
- Ошибки смешивания width (Q.a + Q.b без явного rescale)
- Деление с усечением к нулю (детерминированное для любого знака)
- Валидация целочисленных аргументов (float запрещён)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Float никогда не попадает в вычисления (TypeError на входе)
2. Domain-ошибка прерывает вычисление, clamp не применяется
3. Деление усекает к нулю независимо от знаков операндов
4. Все операции детерминированы и воспроизводимы
"""

from typing import Any

# =============================================================================
# EXCEPTIONS
# =============================================================================


class NumericalDomainError(Exception):
    """
    Нарушение domain численной операции.

    Базовый класс для ошибок данных/программирования, которые
    должны прерывать вычисление и доходить до вызывающего кода.
    Частичный результат никогда не возвращается.
    """
    pass


class LogDomainError(NumericalDomainError):
    """ln(x) для x ≤ 0."""
    pass


class CumulativeRatioDomainError(NumericalDomainError):
    """
    Знаменатель cumulative ratio неположителен где-то в диапазоне эпох.

    Результат интеграла в этом случае не определён (ln от x ≤ 0
    или деление на ноль), поэтому вычисление прерывается.
    """
    pass


class WidthMismatchError(TypeError):
    """
    Попытка скомбинировать fixed-point значения разной width.

    Это нарушение внутреннего инварианта арифметики: Q.a и Q.b
    должны быть явно приведены к общей width через rescale().
    """
    pass


# =============================================================================
# ЦЕЛОЧИСЛЕННЫЕ ПРИМИТИВЫ
# =============================================================================


def is_integer(value: Any) -> bool:
    """
    Проверка, что значение — int (bool не считается целым).

    Examples:
        >>> is_integer(5)
        True
        >>> is_integer(5.0)
        False
        >>> is_integer(True)
        False
    """
    return isinstance(value, int) and not isinstance(value, bool)


def truncating_divide(numerator: int, denominator: int) -> int:
    """
    Целочисленное деление с усечением к нулю.

    Python `//` округляет к минус бесконечности; для fixed-point
    деления требуется усечение к нулю, одинаковое для любых знаков.

    Args:
        numerator: Делимое
        denominator: Делитель (≠ 0)

    Returns:
        trunc(numerator / denominator)

    Raises:
        ZeroDivisionError: Если denominator == 0

    Examples:
        >>> truncating_divide(7, 2)
        3
        >>> truncating_divide(-7, 2)
        -3
        >>> truncating_divide(7, -2)
        -3
    """
    quotient = abs(numerator) // abs(denominator)
    if (numerator < 0) != (denominator < 0):
        return -quotient
    return quotient


def require_same_width(left: int, right: int, operation: str) -> None:
    """
    Проверка совпадения width двух операндов.

    Raises:
        WidthMismatchError: Если left != right
    """
    if left != right:
        raise WidthMismatchError(
            f"Cannot {operation} Q.{left} and Q.{right} values; "
            f"rescale one operand explicitly first"
        )


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_integer(value: Any, name: str) -> None:
    """
    Валидация, что значение — int.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Raises:
        TypeError: Если value не int (float/bool/str и т.п.)
    """
    if not is_integer(value):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}: {value!r}")


def validate_positive_integer(value: Any, name: str) -> None:
    """
    Валидация, что значение — положительный int.

    Raises:
        TypeError: Если value не int
        ValueError: Если value ≤ 0
    """
    validate_integer(value, name)

    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")


def validate_width(width: Any, name: str = "width") -> None:
    """
    Валидация width (количество дробных бит).

    Raises:
        TypeError: Если width не int
        ValueError: Если width < 0
    """
    validate_integer(width, name)

    if width < 0:
        raise ValueError(f"{name} must be non-negative, got {width}")
