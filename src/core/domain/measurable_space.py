"""
MeasurableSpace — σ-алгебры над конечными множествами и полуинтервалом

- FiniteMeasurableSpace: σ-алгебра, порождённая конечным разбиением на атомы
  (по умолчанию атомы — одноточечные множества, т.е. все подмножества измеримы)
- IntervalMeasurableSpace: [lo, hi) с алгеброй конечных объединений
  полуинтервалов, порождающей борелевскую σ-алгебру

Передача неизмеримого множества туда, где требуется измеримое, —
нарушение предусловия: NotMeasurableError, без восстановления.
"""

from abc import ABC, abstractmethod
from typing import Hashable, Iterable

from src.core.domain.sets import IntervalSet, MeasurableSet, PointSet
from src.core.math.numerical_safeguards import validate_finite


class NotMeasurableError(ValueError):
    """
    Множество не принадлежит σ-алгебре пространства.

    Нарушение предусловия при построении или вызове set-функции.
    """


class MeasurableSpace(ABC):
    """Базовый класс измеримого пространства."""

    @property
    @abstractmethod
    def universe(self) -> MeasurableSet:
        """Всё пространство α."""

    @abstractmethod
    def empty(self) -> MeasurableSet:
        """Пустое множество в представлении пространства."""

    @abstractmethod
    def is_measurable(self, s: object) -> bool:
        """Проверка принадлежности σ-алгебре."""

    def require_measurable(self, s: MeasurableSet) -> MeasurableSet:
        """
        Возвращает s, если оно измеримо.

        Raises:
            NotMeasurableError: Если s не принадлежит σ-алгебре
        """
        if not self.is_measurable(s):
            raise NotMeasurableError(f"Set {s!r} is not measurable in {self!r}")
        return s

    def complement(self, s: MeasurableSet) -> MeasurableSet:
        return self.universe - self.require_measurable(s)


class FiniteMeasurableSpace(MeasurableSpace):
    """
    Конечное пространство с σ-алгеброй, порождённой разбиением на атомы.

    Измеримы ровно объединения атомов.
    """

    def __init__(
        self,
        points: Iterable[Hashable],
        atoms: Iterable[Iterable[Hashable]] | None = None,
    ):
        """
        Args:
            points: Точки пространства
            atoms: Разбиение points на атомы (default: одноточечные атомы)

        Raises:
            ValueError: Если atoms не является разбиением points
        """
        self._universe = PointSet(frozenset(points))
        if atoms is None:
            atom_sets = [PointSet.of(p) for p in self._universe]
        else:
            atom_sets = [PointSet(frozenset(a)) for a in atoms]

        covered: set = set()
        for atom in atom_sets:
            if atom.is_empty():
                raise ValueError("Atoms must be non-empty")
            if not covered.isdisjoint(atom.points):
                raise ValueError(f"Atoms overlap at {atom!r}")
            covered |= atom.points
        if covered != self._universe.points:
            raise ValueError("Atoms must cover exactly the given points")

        self._atoms = tuple(atom_sets)
        self._atom_of = {p: atom for atom in self._atoms for p in atom}

    def __repr__(self) -> str:
        return f"FiniteMeasurableSpace(points={len(self._universe)}, atoms={len(self._atoms)})"

    @property
    def universe(self) -> PointSet:
        return self._universe

    @property
    def atoms(self) -> tuple[PointSet, ...]:
        return self._atoms

    def atom_of(self, point: Hashable) -> PointSet:
        return self._atom_of[point]

    def empty(self) -> PointSet:
        return PointSet.empty()

    def is_measurable(self, s: object) -> bool:
        if not isinstance(s, PointSet) or not s.issubset(self._universe):
            return False
        return all(atom.issubset(s) or atom.isdisjoint(s) for atom in self._atoms)


class IntervalMeasurableSpace(MeasurableSpace):
    """
    Полуинтервал [lo, hi) с алгеброй конечных объединений [a, b).
    """

    def __init__(self, lo: float, hi: float):
        validate_finite(lo, "lo")
        validate_finite(hi, "hi")
        if not hi > lo:
            raise ValueError(f"Interval space requires lo < hi, got [{lo}, {hi})")
        self.lo = float(lo)
        self.hi = float(hi)
        self._universe = IntervalSet.interval(self.lo, self.hi)

    def __repr__(self) -> str:
        return f"IntervalMeasurableSpace([{self.lo}, {self.hi}))"

    @property
    def universe(self) -> IntervalSet:
        return self._universe

    def empty(self) -> IntervalSet:
        return IntervalSet.empty()

    def is_measurable(self, s: object) -> bool:
        return isinstance(s, IntervalSet) and s.issubset(self._universe)
