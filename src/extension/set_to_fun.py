"""
TotalFunctionExtension — set_to_fun(T, f) для произвольной функции f

Классификация (на каждый вызов, без состояния):

    {Undetermined} → проверка измеримости/интегрируемости →
        Integrable(l1)   → значение продолжения SetToL1(T) на l1
        NotIntegrable(r) → 0 ∈ F

ВАЖНО: set_to_fun никогда не бросает исключение из-за неинтегрируемости f.
Ноль в F — единственное наблюдаемое проявление ошибки (функция вне L¹,
неизмерима, принимает ∞/NaN). Причина пишется в лог на уровне INFO.

Тождества (аддитивность, однородность, отрицание) выполняются при условии
интегрируемости всех участвующих функций; иначе они вырождаются через
нулевой fallback.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Union

import numpy as np

from src.core.domain.l1_function import (
    L1Function,
    NotIntegrableError,
    tabulate_finite,
)
from src.core.domain.measurable_space import (
    FiniteMeasurableSpace,
    IntervalMeasurableSpace,
    NotMeasurableError,
)
from src.core.domain.measure import Measure
from src.core.domain.normed_space import NormedSpace
from src.core.domain.sets import MeasurableSet
from src.core.domain.simple_function import SimpleFunction
from src.core.math.dyadic import dyadic_cells
from src.core.math.numerical_safeguards import is_close
from src.extension.config import ExtensionConfig
from src.extension.dominated_additive import DominatedFinMeasAdditive
from src.extension.l1_simple import L1SimpleFunction
from src.extension.set_to_l1 import set_to_l1

logger = logging.getLogger(__name__)

FunctionLike = Union[L1Function, L1SimpleFunction, SimpleFunction, Callable[[Any], Any]]


# =============================================================================
# INTEGRABILITY VARIANT
# =============================================================================


@dataclass(frozen=True)
class Integrable:
    """f ∈ L¹(μ; E) с конструктивным свидетелем."""

    l1: L1Function


@dataclass(frozen=True)
class NotIntegrable:
    """f ∉ L¹(μ; E)."""

    reason: str


Integrability = Union[Integrable, NotIntegrable]


def _probe_interval_callable(
    f: Callable[[float], Any],
    space: IntervalMeasurableSpace,
    codomain: NormedSpace,
    lipschitz: float,
    level: int,
) -> str | None:
    """
    Проверка callable в серединах ячеек сетки уровня level.

    Соседние середины отстоят на h, поэтому Lipschitz-функция обязана
    удовлетворять ‖f(mᵢ) − f(mᵢ₊₁)‖ ≤ L·h. Нарушение опровергает
    заявленную константу, и ступенчатые оценки теряют силу.

    Returns:
        Причина неинтегрируемости или None
    """
    cells = dyadic_cells(space.lo, space.hi, level)
    h = cells[0][1] - cells[0][0]
    previous = None
    for a, b in cells:
        mid = 0.5 * (a + b)
        value = codomain.coerce(f(mid))
        if not codomain.is_finite(value):
            return f"non-finite value at {mid}"
        if previous is not None:
            gap = codomain.norm(codomain.sub(value, previous))
            bound = lipschitz * h
            if gap > bound and not is_close(gap, bound):
                return f"not Lipschitz with constant {lipschitz:g} near {mid}"
        previous = value
    return None


def classify(
    f: FunctionLike,
    measure: Measure,
    codomain: NormedSpace,
    lipschitz: float | None = None,
    config: ExtensionConfig | None = None,
) -> Integrability:
    """
    Классификация функции: Integrable(l1) или NotIntegrable(reason).

    Args:
        f: L1Function, L1SimpleFunction, SimpleFunction или callable α → E
        measure: Мера μ
        codomain: Пространство значений E
        lipschitz: Lipschitz-константа callable на полуинтервале
            (сверяется в серединах сетки probe_level; default: config.default_lipschitz)
        config: Конфигурация

    Raises:
        ValueError: Если f задана на другом пространстве или относительно другой меры
        TypeError: Если значения f не лежат в codomain или тип f не поддерживается
    """
    config = config or ExtensionConfig()

    if isinstance(f, L1Function):
        if f.measure is not measure:
            raise ValueError("L1 function is taken with respect to a different measure")
        if f.codomain != codomain:
            raise TypeError(f"L1 function takes values in {f.codomain!r}, expected {codomain!r}")
        return Integrable(f)

    if isinstance(f, L1SimpleFunction):
        f = f.simple

    if isinstance(f, SimpleFunction):
        if f.space is not measure.space:
            raise ValueError("Simple function lives on a different space")
        if f.codomain != codomain:
            raise TypeError(f"Simple function takes values in {f.codomain!r}, expected {codomain!r}")
        if not f.is_integrable(measure):
            return NotIntegrable("non-finite value or non-zero value on a set of infinite measure")
        return Integrable(L1Function.of_simple(f, measure))

    if not callable(f):
        raise TypeError(f"Cannot interpret {f!r} as a function")

    space = measure.space
    if isinstance(space, FiniteMeasurableSpace):
        try:
            simple = tabulate_finite(f, space, codomain)
        except NotMeasurableError as exc:
            return NotIntegrable(f"not measurable: {exc}")
        return classify(simple, measure, codomain, lipschitz, config)

    if isinstance(space, IntervalMeasurableSpace):
        if not measure.is_finite():
            return NotIntegrable("measure of the interval space is infinite")
        lip = config.default_lipschitz if lipschitz is None else lipschitz
        reason = _probe_interval_callable(f, space, codomain, lip, config.probe_level)
        if reason is not None:
            return NotIntegrable(reason)
        return Integrable(L1Function.from_lipschitz(f, measure, codomain, lip))

    raise TypeError(f"Unsupported measurable space {space!r}")


# =============================================================================
# SET TO FUN
# =============================================================================


def set_to_fun(
    T: DominatedFinMeasAdditive,
    f: FunctionLike,
    tol: float | None = None,
    lipschitz: float | None = None,
) -> np.ndarray:
    """
    Значение продолжения T на f; 0 ∈ F, если f не интегрируема.

    Args:
        T: Доминируемая аддитивная set-функция
        f: Функция (см. classify)
        tol: Точность для неточных элементов L¹ (default: T.config.tolerance)
        lipschitz: Lipschitz-константа callable на полуинтервале

    Raises:
        CompletionError: Если tol требует уровня выше T.config.max_level
    """
    status = classify(f, T.measure, T.domain, lipschitz, T.config)
    if isinstance(status, NotIntegrable):
        logger.info("Function is not integrable (%s), set_to_fun returns zero", status.reason)
        return T.codomain.zero()

    try:
        return set_to_l1(T)(status.l1, tol)
    except NotIntegrableError as exc:
        logger.info("Approximation is not integrable (%s), set_to_fun returns zero", exc)
        return T.codomain.zero()


def norm_set_to_fun_le(
    T: DominatedFinMeasAdditive,
    f: FunctionLike,
    tol: float | None = None,
    lipschitz: float | None = None,
) -> tuple[float, float]:
    """
    (‖set_to_fun(T, f)‖, max(C, 0) · ‖f‖₁ + ошибка аппроксимации).

    Для неинтегрируемой f обе величины равны 0.
    """
    status = classify(f, T.measure, T.domain, lipschitz, T.config)
    if isinstance(status, NotIntegrable):
        return 0.0, 0.0

    extension = set_to_l1(T)
    result = extension.value_with_error(status.l1, tol)
    level = 0 if result.level is None else result.level
    l1_norm = status.l1.approximant(level).l1_norm(T.measure)
    slack = extension.opnorm_bound * status.l1.radius * 2.0 ** (-level)
    bound = extension.norm_bound(l1_norm) + slack + result.error_bound
    return T.codomain.norm(result.value), bound


def set_to_fun_indicator_const(
    T: DominatedFinMeasAdditive,
    s: MeasurableSet,
    x: Any,
) -> np.ndarray:
    """set_to_fun на s.indicator(const x); равно T(s)(x) при μ(s) < ∞."""
    return set_to_fun(T, SimpleFunction.indicator(T.measure.space, T.domain, s, x))


def set_to_fun_const(T: DominatedFinMeasAdditive, x: Any) -> np.ndarray:
    """set_to_fun на константе x; равно T(univ)(x) для конечной μ."""
    return set_to_fun(T, SimpleFunction.const(T.measure.space, T.domain, x))


def set_to_fun_finset_sum(
    T: DominatedFinMeasAdditive,
    fs: Iterable[FunctionLike],
    tol: float | None = None,
) -> np.ndarray:
    """
    set_to_fun(T, Σ fᵢ) для интегрируемых fᵢ.

    Raises:
        ValueError: Если семейство пусто или одна из fᵢ не интегрируема
    """
    l1s = []
    for f in fs:
        status = classify(f, T.measure, T.domain, None, T.config)
        if isinstance(status, NotIntegrable):
            raise ValueError(f"Summand is not integrable: {status.reason}")
        l1s.append(status.l1)
    if not l1s:
        raise ValueError("Empty family of functions")

    total = l1s[0]
    for g in l1s[1:]:
        total = total + g
    return set_to_fun(T, total, tol)


def tendsto_set_to_fun_of_l1(
    T: DominatedFinMeasAdditive,
    fs: Iterable[FunctionLike],
    f: FunctionLike,
    tol: float | None = None,
) -> list[float]:
    """
    Зазоры ‖set_to_fun(T, fₙ) − set_to_fun(T, f)‖.

    Если ‖fₙ − f‖₁ → 0, зазоры стремятся к нулю (непрерывность продолжения).

    Raises:
        ValueError: Если f или одна из fₙ не интегрируема
    """
    def witness(g: FunctionLike) -> L1Function:
        status = classify(g, T.measure, T.domain, None, T.config)
        if isinstance(status, NotIntegrable):
            raise ValueError(f"Function is not integrable: {status.reason}")
        return status.l1

    return set_to_l1(T).image_gaps([witness(g) for g in fs], witness(f), tol)


def set_to_fun_add_left(
    T: DominatedFinMeasAdditive,
    T_prime: DominatedFinMeasAdditive,
    f: FunctionLike,
    tol: float | None = None,
    lipschitz: float | None = None,
) -> np.ndarray:
    """set_to_fun(T + T', f) = set_to_fun(T, f) + set_to_fun(T', f)."""
    return set_to_fun(T + T_prime, f, tol, lipschitz)


def set_to_fun_smul_left(
    c: float,
    T: DominatedFinMeasAdditive,
    f: FunctionLike,
    tol: float | None = None,
    lipschitz: float | None = None,
) -> np.ndarray:
    """set_to_fun(c • T, f) = c • set_to_fun(T, f)."""
    return set_to_fun(T.scale(c), f, tol, lipschitz)


def set_to_fun_measure_zero(T: DominatedFinMeasAdditive, f: FunctionLike) -> np.ndarray:
    """
    Значение при μ = 0: каждое множество нулевой меры, поэтому T = 0.

    Raises:
        ValueError: Если μ(univ) ≠ 0
    """
    if not T.measure.is_null(T.measure.space.universe):
        raise ValueError("Measure is not the zero measure")
    return T.codomain.zero()
