"""
Тесты для модуля Numerical Safeguards

Проверяет:
1. Деление с усечением к нулю для всех комбинаций знаков
2. Проверку совпадения width
3. Валидацию целочисленных аргументов (float/bool отвергаются)
4. Иерархию исключений
"""

import pytest

from src.core.math.numerical_safeguards import (
    CumulativeRatioDomainError,
    LogDomainError,
    NumericalDomainError,
    WidthMismatchError,
    is_integer,
    require_same_width,
    truncating_divide,
    validate_integer,
    validate_positive_integer,
    validate_width,
)

# =============================================================================
# ТЕСТЫ ДЕЛЕНИЯ
# =============================================================================


class TestTruncatingDivide:
    """Тесты для truncating_divide"""

    def test_exact_division(self) -> None:
        """Точное деление не теряет значения"""
        assert truncating_divide(10, 2) == 5
        assert truncating_divide(-10, 2) == -5

    @pytest.mark.parametrize(
        "numerator,denominator,expected",
        [
            (7, 2, 3),
            (-7, 2, -3),
            (7, -2, -3),
            (-7, -2, 3),
            (1, 3, 0),
            (-1, 3, 0),
        ],
    )
    def test_truncates_toward_zero(self, numerator: int, denominator: int, expected: int) -> None:
        """Результат усекается к нулю, а не к минус бесконечности"""
        assert truncating_divide(numerator, denominator) == expected

    def test_differs_from_floor_division_for_negative(self) -> None:
        """Для отрицательного частного отличается от //"""
        assert -7 // 2 == -4
        assert truncating_divide(-7, 2) == -3

    def test_big_operands(self) -> None:
        """Операнды произвольной длины"""
        big = 3 << 400
        assert truncating_divide(big, 3) == 1 << 400
        assert truncating_divide(-big - 1, 3) == -(1 << 400)

    def test_zero_denominator_raises(self) -> None:
        """Деление на ноль не маскируется"""
        with pytest.raises(ZeroDivisionError):
            truncating_divide(1, 0)


# =============================================================================
# ТЕСТЫ WIDTH
# =============================================================================


class TestRequireSameWidth:
    """Тесты для require_same_width"""

    def test_same_width_passes(self) -> None:
        require_same_width(128, 128, "add")

    def test_mismatch_raises(self) -> None:
        with pytest.raises(WidthMismatchError, match="Q.128 and Q.256"):
            require_same_width(128, 256, "add")

    def test_mismatch_is_type_error(self) -> None:
        """WidthMismatchError — ошибка типа, а не данных"""
        with pytest.raises(TypeError):
            require_same_width(0, 128, "compare")


# =============================================================================
# ТЕСТЫ ВАЛИДАЦИИ
# =============================================================================


class TestIntegerValidation:
    """Тесты is_integer / validate_* функций"""

    def test_is_integer(self) -> None:
        assert is_integer(0)
        assert is_integer(-5)
        assert is_integer(1 << 300)
        assert not is_integer(1.0)
        assert not is_integer(True)
        assert not is_integer("1")

    def test_validate_integer_rejects_float(self) -> None:
        with pytest.raises(TypeError, match="offset must be an int"):
            validate_integer(1.5, "offset")

    def test_validate_positive_integer(self) -> None:
        validate_positive_integer(1, "epoch_count")

        with pytest.raises(ValueError, match="epoch_count must be positive"):
            validate_positive_integer(0, "epoch_count")

        with pytest.raises(ValueError):
            validate_positive_integer(-10, "epoch_count")

        with pytest.raises(TypeError):
            validate_positive_integer(10.0, "epoch_count")

    def test_validate_width(self) -> None:
        validate_width(0)
        validate_width(256)

        with pytest.raises(ValueError, match="non-negative"):
            validate_width(-1)

        with pytest.raises(TypeError):
            validate_width(128.0)


class TestExceptionHierarchy:
    """Domain-ошибки имеют общий базовый класс"""

    def test_domain_errors_share_base(self) -> None:
        assert issubclass(LogDomainError, NumericalDomainError)
        assert issubclass(CumulativeRatioDomainError, NumericalDomainError)

    def test_width_mismatch_is_not_domain_error(self) -> None:
        assert not issubclass(WidthMismatchError, NumericalDomainError)
