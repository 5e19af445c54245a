"""
Bochner — интеграл Бохнера как частный случай set_to_fun

    ∫ f dμ = set_to_fun(weighted_smul(μ), f),   C = 1

Наследует все свойства продолжения: линейность, ‖∫ f‖ ≤ ∫ ‖f‖,
нечувствительность к нулевым множествам и 0 для неинтегрируемых f.
"""

import numpy as np

from src.core.domain.measure import Measure
from src.core.domain.normed_space import REAL, NormedSpace
from src.core.domain.sets import MeasurableSet
from src.core.domain.simple_function import SimpleFunction
from src.extension.config import ExtensionConfig
from src.extension.set_to_fun import FunctionLike, norm_set_to_fun_le, set_to_fun
from src.extension.weighted_smul import weighted_smul_set_function


def integral(
    measure: Measure,
    f: FunctionLike,
    codomain: NormedSpace = REAL,
    tol: float | None = None,
    lipschitz: float | None = None,
    config: ExtensionConfig | None = None,
) -> np.ndarray:
    """∫ f dμ; 0 для неинтегрируемой f."""
    T = weighted_smul_set_function(measure, codomain, config)
    return set_to_fun(T, f, tol, lipschitz)


def set_integral(
    measure: Measure,
    s: MeasurableSet,
    f: FunctionLike,
    codomain: NormedSpace = REAL,
    tol: float | None = None,
    lipschitz: float | None = None,
    config: ExtensionConfig | None = None,
) -> np.ndarray:
    """
    ∫_s f dμ = ∫ f d(μ.restrict s).

    Простые функции и элементы L¹ задаются относительно μ.restrict(s),
    поэтому здесь ожидается callable.
    """
    return integral(measure.restrict(s), f, codomain, tol, lipschitz, config)


def integral_simple(measure: Measure, f: SimpleFunction) -> np.ndarray:
    """Σ μ(f⁻¹{x}).toReal · x — интеграл простой функции без продолжения."""
    codomain = f.codomain
    return codomain.sum([codomain.smul(measure.to_real(s), x) for x, s in f.fibers()])


def norm_integral_le(
    measure: Measure,
    f: FunctionLike,
    codomain: NormedSpace = REAL,
    tol: float | None = None,
    lipschitz: float | None = None,
) -> tuple[float, float]:
    """(‖∫ f‖, оценка ∫ ‖f‖ с учётом ошибки аппроксимации)."""
    T = weighted_smul_set_function(measure, codomain)
    return norm_set_to_fun_le(T, f, tol, lipschitz)
