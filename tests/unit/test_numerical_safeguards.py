"""
Тесты для модуля Numerical Safeguards и двоичных уровней

Проверяет:
1. [0, ∞]-арифметику (toReal, 0 · ∞ = 0, валидацию)
2. Epsilon-сравнения float и векторов
3. Валидацию параметров
4. Выбор уровня fast Cauchy последовательности и двоичные разбиения
"""

import math

import numpy as np
import pytest

from src.core.math.dyadic import MAX_DYADIC_LEVEL, dyadic_cells, level_for_tolerance
from src.core.math.numerical_safeguards import (
    ennreal_mul,
    ennreal_to_real,
    is_close,
    is_zero,
    validate_ennreal,
    validate_finite,
    validate_in_range,
    validate_non_negative,
    validate_positive,
    vectors_close,
)

# =============================================================================
# ТЕСТЫ [0, ∞]
# =============================================================================


class TestEnnreal:
    """Тесты конверсии и арифметики значений меры"""

    def test_to_real_finite_unchanged(self) -> None:
        """Конечные значения не изменяются"""
        assert ennreal_to_real(2.5) == 2.5
        assert ennreal_to_real(0.0) == 0.0

    def test_to_real_infinity_is_zero(self) -> None:
        """∞.toReal = 0"""
        assert ennreal_to_real(math.inf) == 0.0

    def test_zero_times_infinity(self) -> None:
        """0 · ∞ = 0 в [0, ∞]"""
        assert ennreal_mul(0.0, math.inf) == 0.0
        assert ennreal_mul(math.inf, 0.0) == 0.0
        assert ennreal_mul(2.0, math.inf) == math.inf
        assert ennreal_mul(2.0, 3.0) == 6.0

    def test_validate_ennreal_rejects_negative_and_nan(self) -> None:
        """Отрицательные значения и NaN отвергаются"""
        with pytest.raises(ValueError, match="must be in"):
            validate_ennreal(-1.0, "weight")
        with pytest.raises(ValueError, match="NaN"):
            validate_ennreal(float("nan"), "weight")

    def test_validate_ennreal_accepts_infinity(self) -> None:
        assert validate_ennreal(math.inf, "weight") == math.inf
        assert validate_ennreal(3, "weight") == 3.0


# =============================================================================
# ТЕСТЫ EPSILON-СРАВНЕНИЙ
# =============================================================================


class TestComparisons:
    """Тесты сравнений с толерантностью"""

    def test_is_close(self) -> None:
        assert is_close(1.0, 1.0 + 1e-12)
        assert not is_close(1.0, 1.1)

    def test_is_close_infinities(self) -> None:
        """Бесконечности равны только сами себе"""
        assert is_close(math.inf, math.inf)
        assert not is_close(math.inf, 1e300)

    def test_is_zero(self) -> None:
        assert is_zero(1e-13)
        assert not is_zero(1e-6)

    def test_vectors_close(self) -> None:
        """Покомпонентное сравнение и несовпадение форм"""
        assert vectors_close(np.array([1.0, 2.0]), np.array([1.0, 2.0 + 1e-13]))
        assert not vectors_close(np.array([1.0, 2.0]), np.array([1.0, 2.1]))
        assert not vectors_close(np.array([1.0]), np.array([1.0, 1.0]))


# =============================================================================
# ТЕСТЫ ВАЛИДАЦИИ
# =============================================================================


class TestValidation:
    """Тесты функций валидации"""

    def test_validate_positive(self) -> None:
        validate_positive(1.0, "x")
        with pytest.raises(ValueError, match="positive"):
            validate_positive(0.0, "x")
        with pytest.raises(ValueError, match="NaN/Inf"):
            validate_positive(math.inf, "x")

    def test_validate_non_negative(self) -> None:
        validate_non_negative(0.0, "x")
        with pytest.raises(ValueError, match="non-negative"):
            validate_non_negative(-1e-3, "x")

    def test_validate_finite(self) -> None:
        validate_finite(-5.0, "x")
        with pytest.raises(ValueError):
            validate_finite(float("nan"), "x")

    def test_validate_in_range(self) -> None:
        validate_in_range(0.5, "x", 0.0, 1.0)
        with pytest.raises(ValueError, match=">="):
            validate_in_range(-0.5, "x", 0.0, 1.0)
        with pytest.raises(ValueError, match="<="):
            validate_in_range(1.5, "x", 0.0, 1.0)


# =============================================================================
# ТЕСТЫ DYADIC
# =============================================================================


class TestLevelForTolerance:
    """Тесты выбора уровня fast Cauchy последовательности"""

    def test_scale_below_tolerance(self) -> None:
        """scale ≤ tol → уровень 0"""
        assert level_for_tolerance(0.0, 1e-9) == 0
        assert level_for_tolerance(0.5, 1.0) == 0

    def test_exact_powers_of_two(self) -> None:
        assert level_for_tolerance(1.0, 0.25) == 2
        assert level_for_tolerance(1.0, 2.0**-10) == 10

    def test_level_is_minimal(self) -> None:
        """Найденный уровень минимален и достаточен"""
        for scale, tol in [(3.0, 1e-3), (0.7, 1e-5), (123.0, 0.01)]:
            n = level_for_tolerance(scale, tol)
            assert scale * 2.0**-n <= tol
            assert scale * 2.0 ** -(n - 1) > tol

    def test_invalid_tolerance(self) -> None:
        with pytest.raises(ValueError):
            level_for_tolerance(1.0, 0.0)
        with pytest.raises(ValueError):
            level_for_tolerance(-1.0, 0.1)


class TestDyadicCells:
    """Тесты двоичных разбиений"""

    def test_cells_cover_interval(self) -> None:
        cells = dyadic_cells(0.0, 1.0, 3)
        assert len(cells) == 8
        assert cells[0][0] == 0.0
        assert cells[-1][1] == 1.0
        for (_, b), (c, _) in zip(cells, cells[1:]):
            assert b == c

    def test_invalid_arguments(self) -> None:
        with pytest.raises(ValueError, match="Empty interval"):
            dyadic_cells(1.0, 1.0, 2)
        with pytest.raises(ValueError, match="level"):
            dyadic_cells(0.0, 1.0, MAX_DYADIC_LEVEL + 1)
