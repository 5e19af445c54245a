"""
Dyadic — уровни точности и двоичные разбиения

Модуль содержит арифметику скорости сходимости для fast Cauchy последовательностей:
- Выбор минимального уровня n с scale · 2⁻ⁿ ≤ tol
- Двоичные разбиения полуинтервала [lo, hi) на 2^level ячеек

ФОРМУЛЫ:
    level_for_tolerance(scale, tol) = min { n ≥ 0 : scale · 2⁻ⁿ ≤ tol }
    cells(lo, hi, k) = [lo + i·h, lo + (i+1)·h),  h = (hi - lo) / 2^k
"""

import math
from typing import Final

from src.core.math.numerical_safeguards import validate_non_negative, validate_positive

# Жёсткий потолок уровня разбиения (2^24 ячеек)
MAX_DYADIC_LEVEL: Final[int] = 24


def level_for_tolerance(scale: float, tol: float) -> int:
    """
    Минимальный уровень n ≥ 0, при котором scale · 2⁻ⁿ ≤ tol.

    Args:
        scale: Множитель ошибки (например, Lipschitz-константа × радиус)
        tol: Целевая толерантность (> 0)

    Returns:
        Уровень n (0 если scale ≤ tol)

    Examples:
        >>> level_for_tolerance(1.0, 0.25)
        2
        >>> level_for_tolerance(0.0, 1e-9)
        0
    """
    validate_non_negative(scale, "scale")
    validate_positive(tol, "tol", eps=0.0)

    if scale <= tol:
        return 0

    level = math.ceil(math.log2(scale / tol))
    # Защита от ошибок округления log2
    while scale * 2.0 ** (-level) > tol:
        level += 1
    return level


def dyadic_cells(lo: float, hi: float, level: int) -> list[tuple[float, float]]:
    """
    Двоичное разбиение [lo, hi) на 2^level полуинтервалов.

    Raises:
        ValueError: Если hi <= lo или level вне [0, MAX_DYADIC_LEVEL]
    """
    if not hi > lo:
        raise ValueError(f"Empty interval [{lo}, {hi})")
    if level < 0 or level > MAX_DYADIC_LEVEL:
        raise ValueError(f"level must be in [0, {MAX_DYADIC_LEVEL}], got {level}")

    count = 2**level
    width = (hi - lo) / count
    edges = [lo + i * width for i in range(count)] + [hi]
    return [(edges[i], edges[i + 1]) for i in range(count)]
