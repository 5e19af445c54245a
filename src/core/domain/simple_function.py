"""
SimpleFunction — функции с конечным множеством значений и измеримыми прообразами

Простая функция задаётся конечным измеримым разбиением пространства и
значением на каждом куске. В каноническом представлении хранится по одному
куску на каждое значение: fiber f⁻¹({x}) для x ∈ range f.

Алгебра (+, -, ·) строится через pairing:
    f + g = map(pair(f, g), (x, y) ↦ x + y)
где pair(f, g) — простая функция на общем измельчении разбиений.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Куски измеримы (иначе NotMeasurableError), попарно дизъюнктны и покрывают α
2. Значения в каноническом представлении попарно различны
3. Объект immutable: все операции возвращают новый экземпляр
"""

from typing import Any, Callable, Hashable, Iterable

import numpy as np

from src.core.domain.measurable_space import MeasurableSpace
from src.core.domain.measure import Measure
from src.core.domain.normed_space import REAL, NormedSpace, ProductSpace
from src.core.domain.sets import IntervalSet, MeasurableSet, PointSet


class SimpleFunction:
    """
    Простая функция α → codomain.

    Args:
        space: Измеримое пространство α
        codomain: NormedSpace (или ProductSpace для пар)
        pieces: Пары (измеримое множество, значение), образующие разбиение α

    Raises:
        NotMeasurableError: Если кусок неизмерим
        ValueError: Если куски пересекаются или не покрывают α
    """

    def __init__(
        self,
        space: MeasurableSpace,
        codomain: NormedSpace | ProductSpace,
        pieces: Iterable[tuple[MeasurableSet, Any]],
    ):
        self._space = space
        self._codomain = codomain

        grouped: dict[tuple, tuple[Any, list[MeasurableSet]]] = {}
        sets: list[MeasurableSet] = []
        for s, value in pieces:
            space.require_measurable(s)
            if s.is_empty():
                continue
            sets.append(s)
            value = codomain.coerce(value)
            key = codomain.key(value)
            if key in grouped:
                grouped[key][1].append(s)
            else:
                grouped[key] = (value, [s])

        _check_partition(space, sets)
        self._fibers = tuple(
            (grouped[k][0], _union(space, grouped[k][1])) for k in sorted(grouped)
        )

    def __repr__(self) -> str:
        return f"SimpleFunction({len(self._fibers)} values on {self._space!r})"

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def const(cls, space: MeasurableSpace, codomain: NormedSpace, value: Any) -> "SimpleFunction":
        return cls(space, codomain, [(space.universe, value)])

    @classmethod
    def zero(cls, space: MeasurableSpace, codomain: NormedSpace) -> "SimpleFunction":
        return cls.const(space, codomain, codomain.zero())

    @classmethod
    def indicator(
        cls,
        space: MeasurableSpace,
        codomain: NormedSpace,
        s: MeasurableSet,
        value: Any,
    ) -> "SimpleFunction":
        """s.indicator(const value): value на s, 0 вне s."""
        return cls(space, codomain, [(s, value), (space.complement(s), codomain.zero())])

    def piecewise(self, s: MeasurableSet, other: "SimpleFunction") -> "SimpleFunction":
        """self на s, other вне s."""
        self._check_same_space(other)
        outside = self._space.complement(s)
        pieces = [(a & s, v) for v, a in self._fibers]
        pieces += [(b & outside, w) for w, b in other._fibers]
        return SimpleFunction(self._space, self._codomain, pieces)

    # -------------------------------------------------------------------------
    # Доступ
    # -------------------------------------------------------------------------

    @property
    def space(self) -> MeasurableSpace:
        return self._space

    @property
    def codomain(self) -> NormedSpace | ProductSpace:
        return self._codomain

    def fibers(self) -> tuple[tuple[Any, MeasurableSet], ...]:
        """Пары (x, f⁻¹({x})) для x ∈ range f."""
        return self._fibers

    def range(self) -> list[Any]:
        return [v for v, _ in self._fibers]

    def preimage(self, value: Any) -> MeasurableSet:
        """f⁻¹({value}); пустое множество, если value ∉ range f."""
        key = self._codomain.key(value)
        for v, s in self._fibers:
            if self._codomain.key(v) == key:
                return s
        return self._space.empty()

    def __call__(self, point: Hashable) -> Any:
        for v, s in self._fibers:
            if point in s:
                return v
        raise KeyError(f"Point {point!r} is outside the space")

    def support(self) -> MeasurableSet:
        """{x | f x ≠ 0}."""
        result = self._space.empty()
        for v, s in self._fibers:
            if not self._codomain.is_zero(v):
                result = result | s
        return result

    # -------------------------------------------------------------------------
    # map / pair / алгебра
    # -------------------------------------------------------------------------

    def map(self, g: Callable[[Any], Any], codomain: NormedSpace | ProductSpace) -> "SimpleFunction":
        """g ∘ f."""
        return SimpleFunction(self._space, codomain, [(s, g(v)) for v, s in self._fibers])

    def pair(self, other: "SimpleFunction") -> "SimpleFunction":
        """x ↦ (f x, g x) на общем измельчении разбиений."""
        self._check_same_space(other)
        if isinstance(self._space.universe, IntervalSet):
            pieces = _interval_refinement(self._fibers, other._fibers)
        else:
            pieces = []
            for v, a in self._fibers:
                for w, b in other._fibers:
                    common = a & b
                    if not common.is_empty():
                        pieces.append((common, (v, w)))
        return SimpleFunction(self._space, ProductSpace(self._codomain, other._codomain), pieces)

    def _check_same_space(self, other: "SimpleFunction") -> None:
        if other._space is not self._space:
            raise ValueError("Simple functions live on different spaces")

    def _binary(self, other: "SimpleFunction", op: Callable[[Any, Any], Any]) -> "SimpleFunction":
        if other._codomain != self._codomain:
            raise TypeError("Simple functions have different codomains")
        return self.pair(other).map(lambda p: op(p[0], p[1]), self._codomain)

    def __add__(self, other: "SimpleFunction") -> "SimpleFunction":
        return self._binary(other, self._codomain.add)

    def __sub__(self, other: "SimpleFunction") -> "SimpleFunction":
        return self._binary(other, self._codomain.sub)

    def __neg__(self) -> "SimpleFunction":
        return self.map(self._codomain.neg, self._codomain)

    def scale(self, c: float) -> "SimpleFunction":
        return self.map(lambda v: self._codomain.smul(c, v), self._codomain)

    def __rmul__(self, c: float) -> "SimpleFunction":
        return self.scale(c)

    def norm_fn(self) -> "SimpleFunction":
        """x ↦ ‖f x‖."""
        return self.map(self._codomain.norm, REAL)

    # -------------------------------------------------------------------------
    # Интегрируемость и L¹
    # -------------------------------------------------------------------------

    def is_integrable(self, measure: Measure) -> bool:
        """Значения конечны и ∀ y ≠ 0: μ(f⁻¹{y}) < ∞."""
        return all(
            self._codomain.is_finite(v)
            and (self._codomain.is_zero(v) or measure.is_finite_on(s))
            for v, s in self._fibers
        )

    def l1_norm(self, measure: Measure) -> float:
        """Σ μ(f⁻¹{x}).toReal · ‖x‖."""
        return float(
            sum((measure.to_real(s) * self._codomain.norm(v) for v, s in self._fibers), 0.0)
        )

    def ae_eq(self, other: "SimpleFunction", measure: Measure) -> bool:
        """f =ᵃᵉ g: μ{x | f x ≠ g x} = 0."""
        disagreement = self._space.empty()
        for (v, w), s in self.pair(other).fibers():
            if not np.array_equal(v, w):
                disagreement = disagreement | s
        return measure.is_null(disagreement)


def _interval_refinement(
    left_fibers: tuple[tuple[Any, IntervalSet], ...],
    right_fibers: tuple[tuple[Any, IntervalSet], ...],
) -> list[tuple[IntervalSet, tuple[Any, Any]]]:
    """Общее измельчение двух разбиений полуинтервала (sweep по концам)."""
    left = sorted(((a, b, v) for v, s in left_fibers for a, b in s.intervals), key=lambda t: t[0])
    right = sorted(((a, b, w) for w, s in right_fibers for a, b in s.intervals), key=lambda t: t[0])

    pieces = []
    i = j = 0
    while i < len(left) and j < len(right):
        a1, b1, v = left[i]
        a2, b2, w = right[j]
        lo, hi = max(a1, a2), min(b1, b2)
        if hi > lo:
            pieces.append((IntervalSet.interval(lo, hi), (v, w)))
        if b1 <= b2:
            i += 1
        if b2 <= b1:
            j += 1
    return pieces


def _union(space: MeasurableSpace, sets: list[MeasurableSet]) -> MeasurableSet:
    if isinstance(space.universe, IntervalSet):
        return IntervalSet(tuple(iv for s in sets for iv in s.intervals))
    return PointSet(frozenset().union(*(s.points for s in sets)))


def _check_partition(space: MeasurableSpace, sets: list[MeasurableSet]) -> None:
    """
    Raises:
        ValueError: Если множества пересекаются или не покрывают пространство
    """
    if isinstance(space.universe, IntervalSet):
        intervals = sorted((iv for s in sets for iv in s.intervals), key=lambda iv: iv[0])
        for (_, b), (c, _) in zip(intervals, intervals[1:]):
            if c < b:
                raise ValueError(f"Pieces of a simple function overlap at {c}")
    else:
        total = sum(len(s) for s in sets)
        if total != len(_union(space, sets)):
            raise ValueError("Pieces of a simple function overlap")

    missing = space.universe - _union(space, sets)
    if not missing.is_empty():
        raise ValueError(f"Pieces do not cover the space, missing {missing!r}")
