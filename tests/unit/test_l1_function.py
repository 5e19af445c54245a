"""
Тесты для L1Function (fast Cauchy последовательности простых функций)
"""

import math

import pytest

from src.core.domain import (
    REAL,
    FiniteMeasurableSpace,
    IntervalMeasurableSpace,
    IntervalSet,
    L1Function,
    LebesgueMeasure,
    NotIntegrableError,
    NotMeasurableError,
    PointMassMeasure,
    PointSet,
    SimpleFunction,
    counting_measure,
)
from src.core.domain.l1_function import midpoint_step_approximation, tabulate_finite
from src.core.math.dyadic import MAX_DYADIC_LEVEL


@pytest.fixture
def lebesgue():
    return LebesgueMeasure(IntervalMeasurableSpace(0.0, 1.0))


class TestApproximation:
    """Тесты приближений callable простыми функциями"""

    def test_tabulate_finite(self) -> None:
        space = FiniteMeasurableSpace(["a", "b"])
        f = tabulate_finite({"a": 1.0, "b": 3.0}.get, space, REAL)
        assert float(f("b")) == 3.0

    def test_tabulate_requires_constant_on_atoms(self) -> None:
        space = FiniteMeasurableSpace(["a", "b"], atoms=[["a", "b"]])
        with pytest.raises(NotMeasurableError):
            tabulate_finite({"a": 1.0, "b": 3.0}.get, space, REAL)

    def test_midpoint_steps(self, lebesgue) -> None:
        step = midpoint_step_approximation(lambda x: x, lebesgue.space, REAL, 2)
        assert len(step.fibers()) == 4
        assert float(step(0.1)) == pytest.approx(0.125)


class TestL1Function:
    """Тесты элементов L¹"""

    def test_of_simple_is_exact(self, lebesgue) -> None:
        simple = SimpleFunction.indicator(
            lebesgue.space, REAL, IntervalSet.interval(0.0, 0.5), 2.0
        )
        f = L1Function.of_simple(simple, lebesgue)
        assert f.exact is simple
        assert f.radius == 0.0
        assert f.approximant(7) is simple
        assert f.norm() == pytest.approx(1.0)

    def test_of_simple_not_integrable(self) -> None:
        space = FiniteMeasurableSpace(["a"])
        mu = PointMassMeasure(space, {"a": math.inf})
        with pytest.raises(NotIntegrableError):
            L1Function.of_simple(SimpleFunction.const(space, REAL, 1.0), mu)

    def test_from_finite_callable(self) -> None:
        space = FiniteMeasurableSpace(["a", "b"])
        f = L1Function.from_finite_callable(lambda p: 2.0, counting_measure(space), REAL)
        assert f.exact is not None
        assert f.norm() == pytest.approx(4.0)

    def test_from_finite_callable_rejects_interval(self, lebesgue) -> None:
        with pytest.raises(TypeError):
            L1Function.from_finite_callable(lambda x: x, lebesgue, REAL)

    def test_fast_cauchy_bound(self, lebesgue) -> None:
        """‖fₙ − fₘ‖₁ ≤ radius · (2⁻ⁿ + 2⁻ᵐ), radius = 1"""
        f = L1Function.from_lipschitz(lambda x: x * x, lebesgue, REAL, lipschitz=2.0)
        assert f.exact is None
        assert f.radius == 1.0
        for n, m in [(0, 5), (3, 8), (4, 6)]:
            gap = (f.approximant(n) - f.approximant(m)).l1_norm(lebesgue)
            assert gap <= 2.0**-n + 2.0**-m

    def test_radius_grows_with_interval(self) -> None:
        """radius = L · (hi − lo) · μ(univ) / 2, fₙ — сетка уровня n"""
        wide = LebesgueMeasure(IntervalMeasurableSpace(0.0, 100.0))
        f = L1Function.from_lipschitz(lambda x: x, wide, REAL, lipschitz=1.0)
        assert f.radius == pytest.approx(5000.0)
        assert len(f.approximant(3).fibers()) == 8
        assert f.norm(level=6) == pytest.approx(5000.0, abs=5000.0 * 2.0**-6)

    def test_approximant_above_grid_cap(self, lebesgue) -> None:
        f = L1Function.from_lipschitz(lambda x: x, lebesgue, REAL, lipschitz=1.0)
        with pytest.raises(ValueError, match="exceeds"):
            f.approximant(MAX_DYADIC_LEVEL + 1)

    def test_approximants_cached(self, lebesgue) -> None:
        f = L1Function.from_lipschitz(lambda x: x, lebesgue, REAL, lipschitz=1.0)
        assert f.approximant(4) is f.approximant(4)
        with pytest.raises(ValueError):
            f.approximant(-1)

    def test_norm_of_lipschitz(self, lebesgue) -> None:
        f = L1Function.from_lipschitz(lambda x: x, lebesgue, REAL, lipschitz=1.0)
        assert f.norm(level=10) == pytest.approx(0.5, abs=2.0**-10)

    def test_infinite_measure_rejected(self, lebesgue) -> None:
        with pytest.raises(NotIntegrableError):
            L1Function.from_lipschitz(lambda x: x, math.inf * lebesgue, REAL, lipschitz=1.0)

    def test_non_finite_values_rejected_lazily(self, lebesgue) -> None:
        f = L1Function.from_lipschitz(lambda x: math.nan, lebesgue, REAL, lipschitz=1.0)
        with pytest.raises(NotIntegrableError):
            f.approximant(3)


class TestL1Algebra:
    """Тесты алгебры L¹ и пересчёта радиуса"""

    def test_exact_sum_stays_exact(self) -> None:
        space = FiniteMeasurableSpace(["a", "b"])
        mu = counting_measure(space)
        f = L1Function.from_finite_callable({"a": 1.0, "b": 2.0}.get, mu, REAL)
        g = L1Function.from_finite_callable({"a": 3.0, "b": -2.0}.get, mu, REAL)
        total = f + g
        assert total.exact is not None
        assert float(total.exact("a")) == 4.0
        assert (f - f).norm() == 0.0

    def test_mixed_sum_keeps_bound(self, lebesgue) -> None:
        f = L1Function.from_lipschitz(lambda x: x, lebesgue, REAL, lipschitz=1.0)
        g = L1Function.of_simple(SimpleFunction.const(lebesgue.space, REAL, 1.0), lebesgue)
        total = f + g
        assert total.exact is None
        assert total.radius == f.radius == 0.5
        assert total.norm(level=10) == pytest.approx(1.5, abs=2.0**-10)

    def test_scale(self, lebesgue) -> None:
        f = L1Function.from_lipschitz(lambda x: x, lebesgue, REAL, lipschitz=1.0)
        assert (3.0 * f).radius == pytest.approx(1.5)
        assert (f - f).radius == pytest.approx(1.0)
        assert (3.0 * f).norm(level=10) == pytest.approx(1.5, abs=2.0**-10)
        assert (-f).norm(level=10) == pytest.approx(0.5, abs=2.0**-10)
        assert f.scale(0.0).exact is not None

    def test_dist(self, lebesgue) -> None:
        f = L1Function.from_lipschitz(lambda x: x, lebesgue, REAL, lipschitz=1.0)
        assert f.dist(f, level=8) == pytest.approx(0.0, abs=2.0**-8)

    def test_different_measures_rejected(self, lebesgue) -> None:
        other = LebesgueMeasure(lebesgue.space)
        f = L1Function.of_simple(SimpleFunction.const(lebesgue.space, REAL, 1.0), lebesgue)
        g = L1Function.of_simple(SimpleFunction.const(lebesgue.space, REAL, 1.0), other)
        with pytest.raises(ValueError):
            f + g

    def test_indicator_norm(self) -> None:
        space = FiniteMeasurableSpace(["a", "b"])
        f = SimpleFunction.indicator(space, REAL, PointSet.of("a"), 1.0)
        assert L1Function.of_simple(f, counting_measure(space)).norm() == 1.0
