"""
Core math modules

Численные примитивы: [0, ∞]-арифметика, сравнения с толерантностью,
уровни двоичных приближений.
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    # Epsilon constants
    ENNREAL_TOP,
    EPS_CALC,
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    # [0, ∞]
    ennreal_mul,
    ennreal_to_real,
    is_valid_float,
    validate_ennreal,
    # Epsilon comparisons
    is_close,
    is_zero,
    vectors_close,
    # Validation
    validate_finite,
    validate_in_range,
    validate_non_negative,
    validate_positive,
)

# Dyadic levels
from src.core.math.dyadic import (
    MAX_DYADIC_LEVEL,
    dyadic_cells,
    level_for_tolerance,
)

__all__ = [
    # Numerical Safeguards — Epsilon constants
    "ENNREAL_TOP",
    "EPS_CALC",
    "EPS_FLOAT_COMPARE_ABS",
    "EPS_FLOAT_COMPARE_REL",
    # Numerical Safeguards — [0, ∞]
    "ennreal_mul",
    "ennreal_to_real",
    "is_valid_float",
    "validate_ennreal",
    # Numerical Safeguards — Epsilon comparisons
    "is_close",
    "is_zero",
    "vectors_close",
    # Numerical Safeguards — Validation
    "validate_finite",
    "validate_in_range",
    "validate_non_negative",
    "validate_positive",
    # Dyadic
    "MAX_DYADIC_LEVEL",
    "dyadic_cells",
    "level_for_tolerance",
]
