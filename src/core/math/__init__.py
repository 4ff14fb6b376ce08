"""
Core math modules

Детерминированные fixed-point примитивы: арифметика с явной width,
целочисленные safeguards и натуральный логарифм без float.
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    # Exceptions
    CumulativeRatioDomainError,
    LogDomainError,
    NumericalDomainError,
    WidthMismatchError,
    # Integer primitives
    is_integer,
    require_same_width,
    truncating_divide,
    # Validation
    validate_integer,
    validate_positive_integer,
    validate_width,
)

# Fixed Point
from src.core.math.fixed_point import (
    ONE,
    PRECISION,
    ZERO,
    Fixed,
)

# Natural Log
from src.core.math.natural_log import (
    LN_2,
    LN_GUARD_BITS,
    ln,
)

__all__ = [
    # Numerical Safeguards — Exceptions
    "CumulativeRatioDomainError",
    "LogDomainError",
    "NumericalDomainError",
    "WidthMismatchError",
    # Numerical Safeguards — Integer primitives
    "is_integer",
    "require_same_width",
    "truncating_divide",
    # Numerical Safeguards — Validation
    "validate_integer",
    "validate_positive_integer",
    "validate_width",
    # Fixed Point — Constants
    "ONE",
    "PRECISION",
    "ZERO",
    # Fixed Point — Types
    "Fixed",
    # Natural Log — Constants
    "LN_2",
    "LN_GUARD_BITS",
    # Natural Log — Functions
    "ln",
]
