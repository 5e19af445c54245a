"""
DominatedFinMeasAdditive — доминируемая конечно-аддитивная set-функция

Пара (T, C), где T: MeasurableSet → (E →L F) и
- T(s ∪ t) = T(s) + T(t) для дизъюнктных s, t конечной меры
- ‖T(s)‖ ≤ C · μ(s).toReal для всех s конечной меры

Оба условия — документированное предусловие: конструкция их
предполагает, а не проверяет. При ExtensionConfig.check_invariants=True
каждое значение T(s) проходит debug-проверку оценки, а check_additive /
verify позволяют проверить аддитивность на выборке множеств.

Производный факт: T(∅) = 0, так как T(∅) = T(∅ ∪ ∅) = T(∅) + T(∅).
"""

import logging
import math
from itertools import combinations
from typing import Callable, Iterable

from src.core.domain.linear_map import ContinuousLinearMap
from src.core.domain.measure import Measure, ScaledMeasure
from src.core.domain.normed_space import NormedSpace
from src.core.domain.sets import MeasurableSet
from src.core.math.numerical_safeguards import validate_finite
from src.extension.config import ExtensionConfig

logger = logging.getLogger(__name__)

SetFamily = Callable[[MeasurableSet], ContinuousLinearMap]


class DominanceViolation(AssertionError):
    """
    Нарушена аддитивность или оценка ‖T(s)‖ ≤ C · μ(s).toReal.

    Поднимается только debug-проверками; без них результат продолжения
    на таком T не определён.
    """


class DominatedFinMeasAdditive:
    """
    Доминируемая конечно-аддитивная set-функция относительно меры μ.

    Args:
        measure: Мера μ
        family: s ↦ T(s) ∈ E →L F
        constant: Константа C (конечная, может быть отрицательной)
        domain: Пространство E
        codomain: Пространство F
        config: Конфигурация (debug-проверки, толерантность)
    """

    def __init__(
        self,
        measure: Measure,
        family: SetFamily,
        constant: float,
        domain: NormedSpace,
        codomain: NormedSpace,
        config: ExtensionConfig | None = None,
    ):
        validate_finite(constant, "constant")
        self.measure = measure
        self.family = family
        self.constant = float(constant)
        self.domain = domain
        self.codomain = codomain
        self.config = config or ExtensionConfig()

    def __repr__(self) -> str:
        return (
            f"DominatedFinMeasAdditive(C={self.constant}, {self.domain!r} → "
            f"{self.codomain!r}, measure={self.measure!r})"
        )

    @property
    def bound_constant(self) -> float:
        """max(C, 0) — константа во всех производных оценках."""
        return max(self.constant, 0.0)

    def __call__(self, s: MeasurableSet) -> ContinuousLinearMap:
        """
        T(s).

        Raises:
            NotMeasurableError: Если s неизмеримо
            DominanceViolation: При check_invariants и нарушении оценки
        """
        self.measure.space.require_measurable(s)
        op = self.family(s)
        if op.domain != self.domain or op.codomain != self.codomain:
            raise TypeError(
                f"Set function value acts {op.domain!r} → {op.codomain!r}, "
                f"expected {self.domain!r} → {self.codomain!r}"
            )
        if self.config.check_invariants:
            self._check_bound_value(s, op)
        return op

    def at_empty(self) -> ContinuousLinearMap:
        """T(∅) = 0."""
        return ContinuousLinearMap.zero(self.domain, self.codomain)

    # -------------------------------------------------------------------------
    # Debug-проверки
    # -------------------------------------------------------------------------

    def _check_bound_value(self, s: MeasurableSet, op: ContinuousLinearMap) -> None:
        mu = self.measure(s)
        if math.isinf(mu):
            return
        limit = self.constant * mu
        if op.opnorm() > limit + self.config.atol:
            raise DominanceViolation(
                f"‖T(s)‖ = {op.opnorm():.6g} exceeds C·μ(s) = {limit:.6g} on {s!r}"
            )

    def check_bound(self, s: MeasurableSet) -> None:
        """
        Проверка ‖T(s)‖ ≤ C · μ(s).toReal (для s конечной меры).

        Raises:
            DominanceViolation: Если оценка нарушена
        """
        self._check_bound_value(s, self(s))

    def check_additive(self, s: MeasurableSet, t: MeasurableSet) -> None:
        """
        Проверка T(s ∪ t) = T(s) + T(t) для дизъюнктных s, t конечной меры.

        Для пересекающихся множеств или множеств бесконечной меры
        условие не накладывается, проверка пропускается.

        Raises:
            DominanceViolation: Если аддитивность нарушена
        """
        if not s.isdisjoint(t):
            return
        if not (self.measure.is_finite_on(s) and self.measure.is_finite_on(t)):
            return
        union = self(s | t)
        total = self(s) + self(t)
        if not union.is_close(total, abs_tol=self.config.atol):
            raise DominanceViolation(f"T is not additive on {s!r} and {t!r}")

    def verify(self, sets: Iterable[MeasurableSet]) -> None:
        """
        Проверка оценки на каждом множестве и аддитивности на всех парах,
        включая T(∅) = 0.

        Raises:
            DominanceViolation: При первом найденном нарушении
        """
        family = list(sets)
        if not self(self.measure.space.empty()).is_zero():
            raise DominanceViolation("T(∅) is not zero")
        for s in family:
            self.check_bound(s)
        for s, t in combinations(family, 2):
            self.check_additive(s, t)
        logger.debug("Verified dominance on %d sets", len(family))

    # -------------------------------------------------------------------------
    # Алгебра по левому аргументу
    # -------------------------------------------------------------------------

    def _with(self, measure: Measure, family: SetFamily, constant: float) -> "DominatedFinMeasAdditive":
        return DominatedFinMeasAdditive(
            measure, family, constant, self.domain, self.codomain, self.config
        )

    def __add__(self, other: "DominatedFinMeasAdditive") -> "DominatedFinMeasAdditive":
        """(T + T')(s) = T(s) + T'(s), константа C + C'."""
        if other.measure is not self.measure:
            raise ValueError("Set functions are dominated by different measures")
        if other.domain != self.domain or other.codomain != self.codomain:
            raise TypeError(
                f"Cannot add set functions {self.domain!r} → {self.codomain!r} "
                f"and {other.domain!r} → {other.codomain!r}"
            )
        return self._with(
            self.measure,
            lambda s: self.family(s) + other.family(s),
            self.constant + other.constant,
        )

    def scale(self, c: float) -> "DominatedFinMeasAdditive":
        """(c • T)(s) = c • T(s), константа |c| · C."""
        validate_finite(c, "c")
        return self._with(self.measure, lambda s: self.family(s).scale(c), abs(c) * self.constant)

    def __rmul__(self, c: float) -> "DominatedFinMeasAdditive":
        return self.scale(c)

    def __neg__(self) -> "DominatedFinMeasAdditive":
        return self.scale(-1.0)

    # -------------------------------------------------------------------------
    # Смена меры
    # -------------------------------------------------------------------------

    def of_measure_le(
        self,
        larger: Measure,
        test_sets: Iterable[MeasurableSet] | None = None,
    ) -> "DominatedFinMeasAdditive":
        """
        T доминируема и относительно μ' ≥ μ с той же константой (нужно C ≥ 0).

        Raises:
            ValueError: Если C < 0 или μ ≤ μ' не выполнено на test_sets
        """
        if self.constant < 0:
            raise ValueError("Changing to a larger measure requires C >= 0")
        if not self.measure.le(larger, test_sets):
            raise ValueError("Measure is not dominated by the larger measure")
        return self._with(larger, self.family, self.constant)

    def add_measure_right(self, other: Measure) -> "DominatedFinMeasAdditive":
        """T доминируема относительно μ + ν."""
        return self.of_measure_le(self.measure + other)

    def add_measure_left(self, other: Measure) -> "DominatedFinMeasAdditive":
        """T доминируема относительно ν + μ."""
        return self.of_measure_le(other + self.measure)

    def smul_measure(self, c: float) -> "DominatedFinMeasAdditive":
        """
        T доминируема относительно c · μ с константой C / c, 0 < c < ∞.
        """
        if not (0.0 < c < math.inf):
            raise ValueError(f"Scaling factor must be in (0, inf), got {c}")
        return self._with(self.measure.scale(c), self.family, self.constant / c)

    def of_smul_measure(self, c: float, base: Measure) -> "DominatedFinMeasAdditive":
        """
        Обратное направление: T доминируема относительно c · μ, значит и
        относительно μ с константой c · C, 0 ≤ c < ∞.

        Args:
            c: Множитель, с которым текущая мера равна c · base
            base: Мера μ

        Raises:
            ValueError: Если c вне [0, ∞) или текущая мера не c · base
        """
        if not (0.0 <= c < math.inf):
            raise ValueError(f"Scaling factor must be in [0, inf), got {c}")
        scaled = self.measure
        if not (
            isinstance(scaled, ScaledMeasure) and scaled.base is base and scaled.factor == c
        ):
            raise ValueError(f"Dominating measure {scaled!r} is not {c} · {base!r}")
        return self._with(base, self.family, c * self.constant)
