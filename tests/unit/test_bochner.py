"""
Тесты для интеграла Бохнера (частный случай set_to_fun)
"""

import math

import numpy as np
import pytest

from src.core.domain import (
    REAL,
    FiniteMeasurableSpace,
    IntervalMeasurableSpace,
    IntervalSet,
    LebesgueMeasure,
    PointMassMeasure,
    PointSet,
    SimpleFunction,
    counting_measure,
    dirac,
    euclidean,
)
from src.integral import integral, integral_simple, norm_integral_le, set_integral

TOL = 1e-3


@pytest.fixture
def lebesgue():
    return LebesgueMeasure(IntervalMeasurableSpace(0.0, 1.0))


class TestIntegral:
    """Тесты ∫ f dμ"""

    def test_counting_measure(self) -> None:
        space = FiniteMeasurableSpace(["a", "b", "c"])
        assert float(integral(counting_measure(space), {"a": 1.0, "b": 2.0, "c": 3.0}.get)) == 6.0

    def test_dirac(self) -> None:
        space = FiniteMeasurableSpace(["a", "b"])
        assert float(integral(dirac(space, "b"), {"a": 10.0, "b": -4.0}.get)) == -4.0

    def test_lebesgue_polynomial(self, lebesgue) -> None:
        value = integral(lebesgue, lambda x: 3.0 * x * x, tol=TOL, lipschitz=6.0)
        assert float(value) == pytest.approx(1.0, abs=TOL)

    def test_vector_valued(self, lebesgue) -> None:
        value = integral(lebesgue, lambda x: [x, 1.0 - x], euclidean(2), tol=TOL, lipschitz=2.0)
        assert np.allclose(value, [0.5, 0.5], atol=2 * TOL)

    def test_scaled_lebesgue(self, lebesgue) -> None:
        value = integral(2.0 * lebesgue, lambda x: 1.0, tol=TOL, lipschitz=0.0)
        assert float(value) == pytest.approx(2.0)

    def test_wide_interval(self) -> None:
        wide = LebesgueMeasure(IntervalMeasurableSpace(0.0, 100.0))
        assert float(integral(wide, lambda x: x, tol=1.0, lipschitz=1.0)) == pytest.approx(
            5000.0, abs=1.0
        )

    def test_reciprocal_is_zero(self, lebesgue) -> None:
        assert float(integral(lebesgue, lambda x: 1.0 / x)) == 0.0

    def test_not_integrable_is_zero(self) -> None:
        space = FiniteMeasurableSpace(["a", "b"])
        mu = PointMassMeasure(space, {"a": 1.0, "b": math.inf})
        assert float(integral(mu, lambda p: 1.0)) == 0.0

    def test_integral_simple(self) -> None:
        space = FiniteMeasurableSpace(["a", "b"])
        mu = PointMassMeasure(space, {"a": 0.5, "b": 1.5})
        f = SimpleFunction.indicator(space, REAL, PointSet.of("b"), 2.0)
        assert float(integral_simple(mu, f)) == pytest.approx(3.0)
        assert float(integral(mu, f)) == float(integral_simple(mu, f))


class TestSetIntegral:
    """Тесты ∫_s f dμ"""

    def test_half_interval(self, lebesgue) -> None:
        value = set_integral(lebesgue, IntervalSet.interval(0.0, 0.5), lambda x: x, tol=TOL)
        assert float(value) == pytest.approx(0.125, abs=TOL)

    def test_additive_over_disjoint_sets(self, lebesgue) -> None:
        left = set_integral(lebesgue, IntervalSet.interval(0.0, 0.25), lambda x: x, tol=TOL)
        right = set_integral(lebesgue, IntervalSet.interval(0.25, 1.0), lambda x: x, tol=TOL)
        total = integral(lebesgue, lambda x: x, tol=TOL)
        assert float(left) + float(right) == pytest.approx(float(total), abs=3 * TOL)

    def test_finite_space(self) -> None:
        space = FiniteMeasurableSpace(["a", "b", "c"])
        value = set_integral(
            counting_measure(space), PointSet.of("a", "c"), {"a": 1.0, "b": 5.0, "c": 2.0}.get
        )
        assert float(value) == pytest.approx(3.0)


class TestNormIntegral:
    """‖∫ f‖ ≤ ∫ ‖f‖"""

    def test_triangle_bound(self, lebesgue) -> None:
        norm, bound = norm_integral_le(lebesgue, lambda x: x - 0.5, tol=TOL)
        assert norm == pytest.approx(0.0, abs=TOL)
        assert bound == pytest.approx(0.25, abs=3 * TOL)
        assert norm <= bound

    def test_finite_space(self) -> None:
        space = FiniteMeasurableSpace(["a", "b"])
        norm, bound = norm_integral_le(counting_measure(space), {"a": 1.0, "b": -3.0}.get)
        assert norm == pytest.approx(2.0)
        assert bound == pytest.approx(4.0)
