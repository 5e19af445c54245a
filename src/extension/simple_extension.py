"""
SimpleFunctionExtension — значение set-функции на простой функции

    set_to_simple_func(T, f) = Σ_{x ∈ range f} T(f⁻¹{x})(x)

Свойства (проверяются тестами):
- set_to_simple_func(T, 0) = 0
- линейность по f: сумма, разность, отрицание, умножение на скаляр
  (через pairing: f + g = map(pair(f, g), (x, y) ↦ x + y))
- линейность по T: (T + T'), (c • T)
- монотонность для вещественного F: T(s)(x) ≤ T'(s)(x) ⇒ eval(T) ≤ eval(T')
- согласованность с равенством п.в., если T зануляется на нулевых множествах
- ‖set_to_simple_func(T, f)‖ ≤ max(C, 0) · Σ μ(f⁻¹{x}).toReal · ‖x‖

Слагаемые по fibers независимы; сумма — ассоциативно-коммутативная
редукция в F, порядок не важен.
"""

import logging
from typing import Any

import numpy as np

from src.core.domain.measure import Measure
from src.core.domain.normed_space import REAL
from src.core.domain.sets import MeasurableSet
from src.core.domain.simple_function import SimpleFunction
from src.extension.dominated_additive import DominatedFinMeasAdditive

logger = logging.getLogger(__name__)


def set_to_simple_func(T: DominatedFinMeasAdditive, f: SimpleFunction) -> np.ndarray:
    """
    Σ_{x ∈ range f} T(f⁻¹{x})(x).

    Raises:
        TypeError: Если f принимает значения не в T.domain
        ValueError: Если f определена на другом пространстве
    """
    if f.codomain != T.domain:
        raise TypeError(f"Simple function takes values in {f.codomain!r}, expected {T.domain!r}")
    if f.space is not T.measure.space:
        raise ValueError("Simple function and set function live on different spaces")

    summands = [T(s)(x) for x, s in f.fibers()]
    logger.debug("Evaluating set function on %d fibers", len(summands))
    return T.codomain.sum(summands)


def set_to_simple_func_indicator(
    T: DominatedFinMeasAdditive,
    s: MeasurableSet,
    x: Any,
) -> np.ndarray:
    """Значение на s.indicator(const x): T(s)(x)."""
    f = SimpleFunction.indicator(T.measure.space, T.domain, s, x)
    return set_to_simple_func(T, f)


def set_to_simple_func_const(T: DominatedFinMeasAdditive, x: Any) -> np.ndarray:
    """Значение на константе x: T(univ)(x)."""
    return set_to_simple_func(T, SimpleFunction.const(T.measure.space, T.domain, x))


def simple_l1_norm(f: SimpleFunction, measure: Measure) -> float:
    """
    Σ μ(f⁻¹{x}).toReal · ‖x‖ — значение weighted_smul на map(f, ‖·‖).
    """
    return float(sum(measure.to_real(s) * float(v) for v, s in f.norm_fn().fibers()))


def simple_norm_bound(T: DominatedFinMeasAdditive, f: SimpleFunction) -> float:
    """Оценка max(C, 0) · ‖f‖₁ для ‖set_to_simple_func(T, f)‖."""
    return T.bound_constant * simple_l1_norm(f, T.measure)


def set_to_simple_func_mono(
    T: DominatedFinMeasAdditive,
    T_prime: DominatedFinMeasAdditive,
    f: SimpleFunction,
) -> bool:
    """
    eval(T, f) ≤ eval(T', f) для вещественного F.

    Верно, если T(s)(x) ≤ T'(s)(x) для всех s и x из range f.

    Raises:
        TypeError: Если F не ℝ
    """
    if T.codomain != REAL or T_prime.codomain != REAL:
        raise TypeError("Monotonicity is defined for real-valued set functions")
    return float(set_to_simple_func(T, f)) <= float(set_to_simple_func(T_prime, f))


def set_to_simple_func_nonneg(T: DominatedFinMeasAdditive, f: SimpleFunction) -> bool:
    """0 ≤ eval(T, f) для вещественного F."""
    if T.codomain != REAL:
        raise TypeError("Non-negativity is defined for real-valued set functions")
    return float(set_to_simple_func(T, f)) >= 0.0


def set_to_simple_func_congr_ae(
    T: DominatedFinMeasAdditive,
    f: SimpleFunction,
    g: SimpleFunction,
) -> np.ndarray:
    """
    Общее значение на f =ᵃᵉ g.

    Предусловие: T(s) = 0 при μ(s) = 0 (верно для доминируемых T).

    Raises:
        ValueError: Если f и g не равны п.в.
    """
    if not f.ae_eq(g, T.measure):
        raise ValueError("Simple functions are not equal almost everywhere")
    return set_to_simple_func(T, f)
