"""
Тесты для продолжения по непрерывности (DenseExtension, SetToL1)

Проверяет:
1. Точные элементы: значение без ошибки, level = None
2. Выбор уровня по толерантности и оценка ошибки
3. CompletionError при превышении max_level
4. SetToL1: согласованность с set_to_simple_func, проверки меры и codomain
"""

import numpy as np
import pytest

from src.core.domain import (
    REAL,
    FiniteMeasurableSpace,
    IntervalMeasurableSpace,
    L1Function,
    LebesgueMeasure,
    PointSet,
    SimpleFunction,
    counting_measure,
    euclidean,
)
from src.core.math.dyadic import MAX_DYADIC_LEVEL
from src.extension import (
    CompletionError,
    DenseExtension,
    ExtensionConfig,
    SetToL1,
    set_to_l1,
    set_to_simple_func,
    weighted_smul_set_function,
)


@pytest.fixture
def lebesgue():
    return LebesgueMeasure(IntervalMeasurableSpace(0.0, 1.0))


@pytest.fixture
def identity_l1(lebesgue):
    """x ↦ x как элемент L¹[0, 1)."""
    return L1Function.from_lipschitz(lambda x: x, lebesgue, REAL, lipschitz=1.0)


class TestDenseExtension:
    """Тесты общего продолжения Lipschitz-отображения"""

    def test_required_level(self) -> None:
        ext = DenseExtension(lambda f: 0.0, 4.0, REAL)
        assert ext.required_level(1.0, 0.5) == 3
        assert ext.required_level(0.0, 1e-12) == 0

    def test_level_above_max(self) -> None:
        ext = DenseExtension(lambda f: 0.0, 1.0, REAL, ExtensionConfig(max_level=5))
        with pytest.raises(CompletionError, match="max_level"):
            ext.required_level(1.0, 1e-6)

    def test_exact_element(self, lebesgue) -> None:
        simple = SimpleFunction.const(lebesgue.space, REAL, 2.0)
        element = L1Function.of_simple(simple, lebesgue)
        ext = DenseExtension(lambda f: f.l1_norm(lebesgue), 1.0, REAL)
        result = ext.value_with_error(element, tol=1e-12)
        assert result.level is None
        assert result.error_bound == 0.0
        assert float(result.value) == 2.0

    def test_error_bound_within_tolerance(self, lebesgue, identity_l1) -> None:
        ext = DenseExtension(lambda f: f.l1_norm(lebesgue), 1.0, REAL)
        result = ext.value_with_error(identity_l1, tol=1e-3)
        assert result.level == 9
        assert result.error_bound <= 1e-3
        assert float(result.value) == pytest.approx(0.5, abs=1e-3)

    def test_negative_lipschitz(self) -> None:
        with pytest.raises(ValueError):
            DenseExtension(lambda f: 0.0, -1.0, REAL)

    def test_max_level_capped_by_grid(self) -> None:
        """max_level не может превышать MAX_DYADIC_LEVEL"""
        assert ExtensionConfig().max_level <= MAX_DYADIC_LEVEL
        with pytest.raises(ValueError, match="max_level"):
            ExtensionConfig(max_level=MAX_DYADIC_LEVEL + 1)
        with pytest.raises(ValueError, match="max_level"):
            ExtensionConfig(max_level=-1)


class TestSetToL1:
    """Тесты продолжения SetToL1S(T) на L¹"""

    def test_consistent_on_simple_functions(self) -> None:
        """На простых функциях значение совпадает без ошибки аппроксимации"""
        space = FiniteMeasurableSpace(["a", "b", "c"])
        mu = counting_measure(space)
        T = weighted_smul_set_function(mu, REAL).scale(3.0)
        f = SimpleFunction(
            space,
            REAL,
            [(PointSet.of("a"), 0.1), (PointSet.of("b"), 0.2), (PointSet.of("c"), 0.7)],
        )
        value = set_to_l1(T)(L1Function.of_simple(f, mu))
        assert float(value) == float(set_to_simple_func(T, f))

    def test_opnorm_bound(self, lebesgue) -> None:
        T = weighted_smul_set_function(lebesgue, REAL).scale(-2.5)
        extension = SetToL1(T)
        assert extension.opnorm_bound == 2.5
        assert extension.norm_bound(2.0) == 5.0

    def test_lipschitz_function(self, lebesgue, identity_l1) -> None:
        T = weighted_smul_set_function(lebesgue, REAL)
        result = set_to_l1(T).value_with_error(identity_l1, tol=1e-3)
        assert result.error_bound <= 1e-3
        assert float(result.value) == pytest.approx(0.5, abs=1e-3)

    def test_default_tolerance_from_config(self, lebesgue, identity_l1) -> None:
        T = weighted_smul_set_function(lebesgue, REAL, ExtensionConfig(tolerance=1e-2))
        result = set_to_l1(T).value_with_error(identity_l1)
        assert result.level == 6

    def test_completion_error(self, lebesgue, identity_l1) -> None:
        T = weighted_smul_set_function(lebesgue, REAL)
        with pytest.raises(CompletionError):
            set_to_l1(T, ExtensionConfig(max_level=3))(identity_l1, tol=1e-6)

    def test_different_measure(self, identity_l1) -> None:
        other = LebesgueMeasure(IntervalMeasurableSpace(0.0, 1.0))
        T = weighted_smul_set_function(other, REAL)
        with pytest.raises(ValueError, match="different measure"):
            set_to_l1(T)(identity_l1)

    def test_codomain_mismatch(self, lebesgue, identity_l1) -> None:
        T = weighted_smul_set_function(lebesgue, euclidean(2))
        with pytest.raises(TypeError):
            set_to_l1(T)(identity_l1)

    def test_image_gaps_shrink(self, lebesgue, identity_l1) -> None:
        """‖L̄(fₙ) − L̄(f)‖ → 0 для fₙ = approximant(n)"""
        T = weighted_smul_set_function(lebesgue, REAL)
        steps = [L1Function.of_simple(identity_l1.approximant(n), lebesgue) for n in range(1, 6)]
        gaps = set_to_l1(T).image_gaps(steps, identity_l1, tol=1e-3)
        for n, gap in enumerate(gaps, start=1):
            assert gap <= 2.0**-n + 1e-3
        assert np.all(np.isfinite(gaps))
