"""
Measure — меры со значениями в [0, ∞]

Immutable меры над MeasurableSpace:
- PointMassMeasure: взвешенные точечные массы (counting, Dirac, атомы веса ∞)
- LebesgueMeasure: длина на IntervalMeasurableSpace
- RestrictedMeasure: μ.restrict(s)(t) = μ(t ∩ s)
- ScaledMeasure: (c · μ)(t) = c · μ(t), c ∈ [0, ∞], 0 · ∞ = 0
- SumMeasure: (μ + ν)(t) = μ(t) + ν(t)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. μ(∅) = 0
2. μ монотонна и (конечно) аддитивна на дизъюнктных измеримых множествах
3. Вызов на неизмеримом множестве → NotMeasurableError
4. to_real(s) = 0 при μ(s) = ∞
"""

import math
from abc import ABC, abstractmethod
from typing import Hashable, Iterable, Mapping

from src.core.domain.measurable_space import (
    FiniteMeasurableSpace,
    IntervalMeasurableSpace,
    MeasurableSpace,
)
from src.core.domain.sets import IntervalSet, MeasurableSet, PointSet
from src.core.math.dyadic import dyadic_cells
from src.core.math.numerical_safeguards import (
    ennreal_mul,
    ennreal_to_real,
    is_close,
    validate_ennreal,
)


class Measure(ABC):
    """Базовый класс меры."""

    def __init__(self, space: MeasurableSpace):
        self._space = space

    @property
    def space(self) -> MeasurableSpace:
        return self._space

    @abstractmethod
    def _measure(self, s: MeasurableSet) -> float:
        """Значение на заведомо измеримом множестве."""

    def __call__(self, s: MeasurableSet) -> float:
        """
        μ(s) ∈ [0, ∞].

        Raises:
            NotMeasurableError: Если s неизмеримо
        """
        self._space.require_measurable(s)
        if s.is_empty():
            return 0.0
        return validate_ennreal(self._measure(s), "measure value")

    def to_real(self, s: MeasurableSet) -> float:
        """μ(s).toReal (∞ ↦ 0)."""
        return ennreal_to_real(self(s))

    def is_null(self, s: MeasurableSet) -> bool:
        return self(s) == 0.0

    def is_finite_on(self, s: MeasurableSet) -> bool:
        return not math.isinf(self(s))

    def is_finite(self) -> bool:
        """μ(univ) < ∞."""
        return self.is_finite_on(self._space.universe)

    def restrict(self, s: MeasurableSet) -> "RestrictedMeasure":
        return RestrictedMeasure(self, s)

    def scale(self, c: float) -> "ScaledMeasure":
        return ScaledMeasure(self, c)

    def __rmul__(self, c: float) -> "ScaledMeasure":
        return self.scale(c)

    def __add__(self, other: "Measure") -> "SumMeasure":
        return SumMeasure(self, other)

    def default_test_sets(self) -> list[MeasurableSet]:
        """
        Семейство множеств для проверок μ ≤ ν.

        Для конечных пространств — атомы (проверка точна),
        для полуинтервала — двоичные ячейки уровня 8.
        """
        space = self._space
        if isinstance(space, FiniteMeasurableSpace):
            return list(space.atoms)
        if isinstance(space, IntervalMeasurableSpace):
            return [IntervalSet.interval(a, b) for a, b in dyadic_cells(space.lo, space.hi, 8)]
        return [space.universe]

    def le(self, other: "Measure", test_sets: Iterable[MeasurableSet] | None = None) -> bool:
        """
        Проверка μ ≤ ν на семействе множеств.

        Args:
            other: Мера ν на том же пространстве
            test_sets: Проверяемые множества (default: default_test_sets)
        """
        if other.space is not self._space:
            raise ValueError("Measures live on different spaces")
        sets = list(test_sets) if test_sets is not None else self.default_test_sets()
        for s in sets:
            a, b = self(s), other(s)
            if a > b and not is_close(a, b):
                return False
        return True


class PointMassMeasure(Measure):
    """
    Взвешенная сумма точечных масс Σ w_p · δ_p на конечном пространстве.

    Веса в [0, ∞]; отсутствующие точки имеют вес 0.
    """

    def __init__(self, space: FiniteMeasurableSpace, weights: Mapping[Hashable, float]):
        super().__init__(space)
        clean = {}
        for point, weight in weights.items():
            if point not in space.universe:
                raise ValueError(f"Point {point!r} is outside the space")
            clean[point] = validate_ennreal(weight, f"weight[{point!r}]")
        self._weights = clean

    def __repr__(self) -> str:
        return f"PointMassMeasure({self._weights!r})"

    @property
    def weights(self) -> dict[Hashable, float]:
        return dict(self._weights)

    def _measure(self, s: PointSet) -> float:
        return sum((self._weights.get(p, 0.0) for p in s), 0.0)


def counting_measure(space: FiniteMeasurableSpace) -> PointMassMeasure:
    """Считающая мера: μ(s) = |s|."""
    return PointMassMeasure(space, {p: 1.0 for p in space.universe})


def dirac(space: FiniteMeasurableSpace, point: Hashable) -> PointMassMeasure:
    """Мера Дирака δ_point."""
    return PointMassMeasure(space, {point: 1.0})


class LebesgueMeasure(Measure):
    """Мера Лебега (длина) на [lo, hi)."""

    def __init__(self, space: IntervalMeasurableSpace):
        super().__init__(space)

    def __repr__(self) -> str:
        return f"LebesgueMeasure({self._space!r})"

    def _measure(self, s: IntervalSet) -> float:
        return s.length()


class RestrictedMeasure(Measure):
    """μ.restrict(s)."""

    def __init__(self, base: Measure, s: MeasurableSet):
        super().__init__(base.space)
        self.base = base
        self.restriction = base.space.require_measurable(s)

    def __repr__(self) -> str:
        return f"RestrictedMeasure({self.base!r}, {self.restriction!r})"

    def _measure(self, t: MeasurableSet) -> float:
        return self.base(t & self.restriction)


class ScaledMeasure(Measure):
    """c · μ, c ∈ [0, ∞]."""

    def __init__(self, base: Measure, factor: float):
        super().__init__(base.space)
        self.base = base
        self.factor = validate_ennreal(factor, "factor")

    def __repr__(self) -> str:
        return f"ScaledMeasure({self.factor}, {self.base!r})"

    def _measure(self, t: MeasurableSet) -> float:
        return ennreal_mul(self.factor, self.base(t))


class SumMeasure(Measure):
    """μ + ν на общем пространстве."""

    def __init__(self, left: Measure, right: Measure):
        if left.space is not right.space:
            raise ValueError("Cannot add measures on different spaces")
        super().__init__(left.space)
        self.left = left
        self.right = right

    def __repr__(self) -> str:
        return f"SumMeasure({self.left!r}, {self.right!r})"

    def _measure(self, t: MeasurableSet) -> float:
        return self.left(t) + self.right(t)
