"""
Numerical Safeguards — примитивы для [0, ∞]-значений и сравнений с толерантностью

Модуль обеспечивает численную устойчивость операций над мерами и векторами:
- Конверсия значений меры из [0, ∞] в вещественные (toReal: ∞ ↦ 0)
- Проверка NaN/Inf для значений функций и констант
- Epsilon-сравнения float и numpy-векторов
- Валидация параметров с ValueError

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Значение меры никогда не бывает отрицательным или NaN
2. ennreal_to_real(∞) == 0.0 (соглашение ENNReal.toReal)
3. Float сравнения всегда учитывают машинную точность
4. Все операции детерминированы и воспроизводимы
"""

import math
from typing import Final

import numpy as np

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Epsilon для общих вычислений и сравнений
EPS_CALC: Final[float] = 1e-12

# Epsilon для сравнения float (относительная толерантность)
EPS_FLOAT_COMPARE_REL: Final[float] = 1e-9

# Epsilon для сравнения float (абсолютная толерантность)
EPS_FLOAT_COMPARE_ABS: Final[float] = 1e-12

# Бесконечность в [0, ∞]
ENNREAL_TOP: Final[float] = math.inf


# =============================================================================
# [0, ∞]-ЗНАЧЕНИЯ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение валидное (finite), False если NaN или Inf
    """
    return math.isfinite(value)


def validate_ennreal(value: float, name: str) -> float:
    """
    Валидация значения из [0, ∞].

    Args:
        value: Проверяемое значение (может быть math.inf)
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        value как float

    Raises:
        ValueError: Если value < 0 или NaN
    """
    value = float(value)
    if math.isnan(value):
        raise ValueError(f"{name} must not be NaN")
    if value < 0:
        raise ValueError(f"{name} must be in [0, inf], got {value}")
    return value


def ennreal_to_real(value: float) -> float:
    """
    Конверсия значения меры в вещественное число.

    Соглашение ENNReal.toReal: бесконечная мера отображается в 0.
    Именно поэтому weighted_smul на множестве бесконечной меры равен нулю.

    Examples:
        >>> ennreal_to_real(2.5)
        2.5
        >>> ennreal_to_real(math.inf)
        0.0
    """
    if math.isinf(value):
        return 0.0
    return float(value)


def ennreal_mul(a: float, b: float) -> float:
    """
    Умножение в [0, ∞] с соглашением 0 · ∞ = 0.
    """
    if a == 0.0 or b == 0.0:
        return 0.0
    return a * b


# =============================================================================
# EPSILON-СРАВНЕНИЯ
# =============================================================================


def is_close(
    a: float,
    b: float,
    rel_tol: float = EPS_FLOAT_COMPARE_REL,
    abs_tol: float = EPS_FLOAT_COMPARE_ABS,
) -> bool:
    """
    Сравнение float с учётом машинной точности.

    Алгоритм:
        abs(a - b) <= max(rel_tol * max(abs(a), abs(b)), abs_tol)

    Examples:
        >>> is_close(1.0, 1.0 + 1e-10)
        True
        >>> is_close(1.0, 1.1)
        False
    """
    if math.isinf(a) or math.isinf(b):
        return a == b
    return math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)


def is_zero(value: float, tol: float = EPS_FLOAT_COMPARE_ABS) -> bool:
    """
    Проверка, близко ли значение к нулю с учётом толерантности.
    """
    return abs(value) <= tol


def vectors_close(
    a: np.ndarray,
    b: np.ndarray,
    rel_tol: float = EPS_FLOAT_COMPARE_REL,
    abs_tol: float = EPS_FLOAT_COMPARE_ABS,
) -> bool:
    """
    Покомпонентное сравнение numpy-массивов одной формы.

    Returns:
        False при несовпадении форм, иначе numpy.allclose
    """
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    if a.shape != b.shape:
        return False
    return bool(np.allclose(a, b, rtol=rel_tol, atol=abs_tol))


# =============================================================================
# ВАЛИДАЦИЯ И ПРОВЕРКИ
# =============================================================================


def validate_positive(value: float, name: str, eps: float = EPS_CALC) -> None:
    """
    Валидация, что значение положительное.

    Raises:
        ValueError: Если value <= eps или NaN/Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")

    if value <= eps:
        raise ValueError(f"{name} must be positive (> {eps}), got {value}")


def validate_non_negative(value: float, name: str) -> None:
    """
    Валидация, что значение неотрицательное.

    Raises:
        ValueError: Если value < 0 или NaN/Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")

    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")


def validate_finite(value: float, name: str) -> None:
    """
    Валидация, что значение конечно (любого знака).

    Raises:
        ValueError: Если value NaN/Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")


def validate_in_range(
    value: float,
    name: str,
    min_value: float | None = None,
    max_value: float | None = None,
) -> None:
    """
    Валидация, что значение в заданном диапазоне.

    Raises:
        ValueError: Если value вне диапазона или NaN/Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")

    if min_value is not None and value < min_value:
        raise ValueError(f"{name} must be >= {min_value}, got {value}")

    if max_value is not None and value > max_value:
        raise ValueError(f"{name} must be <= {max_value}, got {value}")
