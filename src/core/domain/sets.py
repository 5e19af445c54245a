"""
Sets — представления измеримых множеств

Два конкретных представления:
- PointSet: конечное множество точек (для конечных пространств с атомами)
- IntervalSet: конечное объединение полуинтервалов [a, b) на прямой

Оба представления immutable и замкнуты относительно ∪, ∩, \\.
Нормальная форма IntervalSet: интервалы отсортированы, непусты,
не пересекаются и не соприкасаются (смежные склеиваются).
"""

from dataclasses import dataclass
from typing import Hashable, Iterable


@dataclass(frozen=True)
class PointSet:
    """Конечное множество точек."""

    points: frozenset

    @classmethod
    def of(cls, *points: Hashable) -> "PointSet":
        return cls(frozenset(points))

    @classmethod
    def empty(cls) -> "PointSet":
        return cls(frozenset())

    def __or__(self, other: "PointSet") -> "PointSet":
        return PointSet(self.points | other.points)

    def __and__(self, other: "PointSet") -> "PointSet":
        return PointSet(self.points & other.points)

    def __sub__(self, other: "PointSet") -> "PointSet":
        return PointSet(self.points - other.points)

    def __contains__(self, point: Hashable) -> bool:
        return point in self.points

    def __iter__(self):
        return iter(self.points)

    def __len__(self) -> int:
        return len(self.points)

    def is_empty(self) -> bool:
        return not self.points

    def issubset(self, other: "PointSet") -> bool:
        return self.points <= other.points

    def isdisjoint(self, other: "PointSet") -> bool:
        return self.points.isdisjoint(other.points)


def _normalize(intervals: Iterable[tuple[float, float]]) -> tuple[tuple[float, float], ...]:
    cleaned = sorted((float(a), float(b)) for a, b in intervals if b > a)
    merged: list[tuple[float, float]] = []
    for a, b in cleaned:
        if merged and a <= merged[-1][1]:
            last_a, last_b = merged[-1]
            merged[-1] = (last_a, max(last_b, b))
        else:
            merged.append((a, b))
    return tuple(merged)


@dataclass(frozen=True)
class IntervalSet:
    """
    Конечное объединение полуинтервалов [a, b).

    Всегда хранится в нормальной форме, поэтому структурное равенство
    dataclass совпадает с равенством множеств.
    """

    intervals: tuple[tuple[float, float], ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "intervals", _normalize(self.intervals))

    @classmethod
    def interval(cls, lo: float, hi: float) -> "IntervalSet":
        return cls(((lo, hi),))

    @classmethod
    def empty(cls) -> "IntervalSet":
        return cls(())

    def __or__(self, other: "IntervalSet") -> "IntervalSet":
        return IntervalSet(self.intervals + other.intervals)

    def __and__(self, other: "IntervalSet") -> "IntervalSet":
        result = []
        for a, b in self.intervals:
            for c, d in other.intervals:
                lo, hi = max(a, c), min(b, d)
                if hi > lo:
                    result.append((lo, hi))
        return IntervalSet(tuple(result))

    def __sub__(self, other: "IntervalSet") -> "IntervalSet":
        pieces = list(self.intervals)
        for c, d in other.intervals:
            next_pieces = []
            for a, b in pieces:
                if d <= a or c >= b:
                    next_pieces.append((a, b))
                    continue
                if c > a:
                    next_pieces.append((a, c))
                if d < b:
                    next_pieces.append((d, b))
            pieces = next_pieces
        return IntervalSet(tuple(pieces))

    def __contains__(self, point: float) -> bool:
        return any(a <= point < b for a, b in self.intervals)

    def is_empty(self) -> bool:
        return not self.intervals

    def length(self) -> float:
        """Суммарная длина (мера Лебега)."""
        return sum(b - a for a, b in self.intervals)

    def issubset(self, other: "IntervalSet") -> bool:
        return (self - other).is_empty()

    def isdisjoint(self, other: "IntervalSet") -> bool:
        return (self & other).is_empty()


MeasurableSet = PointSet | IntervalSet
