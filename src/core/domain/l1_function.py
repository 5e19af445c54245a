"""
L1Function — элемент L¹(μ; E) как fast Cauchy последовательность простых функций

Класс интегрируемой функции по модулю равенства п.в. представлен
последовательностью интегрируемых простых функций fₙ с гарантией

    ‖f − fₙ‖₁ ≤ radius · 2⁻ⁿ   для всех n ≥ 0.

Радиус хранится в элементе: для Lipschitz-функции это априорная оценка
ошибки ступенчатого приближения уровня 0, и fₙ — приближение на двоичной
сетке уровня n. Уровень под заданную точность выбирает продолжение
(DenseExtension.required_level), а не сам элемент.

Если элемент построен из простой функции, он точный (exact): все fₙ
совпадают с ней и значения на нём вычисляются без ошибки аппроксимации.

Источники элементов:
- of_simple: интегрируемая простая функция (точный элемент)
- from_finite_callable: функция на FiniteMeasurableSpace (табулирование по атомам)
- from_lipschitz: Lipschitz-функция на IntervalMeasurableSpace с конечной мерой
  (ступенчатые приближения по середине двоичных ячеек)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Все аппроксиманты интегрируемы относительно μ
2. Алгебраические операции пересчитывают радиус (r₁ + r₂, |c|·r)
3. Значения зависят только от класса, а не от представителя
"""

import logging
from typing import Any, Callable, Hashable

from src.core.domain.measurable_space import (
    FiniteMeasurableSpace,
    IntervalMeasurableSpace,
    NotMeasurableError,
)
from src.core.domain.measure import Measure
from src.core.domain.normed_space import NormedSpace
from src.core.domain.sets import IntervalSet
from src.core.domain.simple_function import SimpleFunction
from src.core.math.dyadic import MAX_DYADIC_LEVEL, dyadic_cells
from src.core.math.numerical_safeguards import validate_non_negative

logger = logging.getLogger(__name__)


class NotIntegrableError(ValueError):
    """
    Функция не интегрируема (нет конечного ∫‖f‖ dμ или нет измеримости).

    Возникает только при явном построении элемента L¹; set_to_fun никогда
    не пропагирует её и возвращает 0.
    """


# =============================================================================
# ПРИБЛИЖЕНИЯ CALLABLE ПРОСТЫМИ ФУНКЦИЯМИ
# =============================================================================


def tabulate_finite(
    f: Callable[[Hashable], Any],
    space: FiniteMeasurableSpace,
    codomain: NormedSpace,
) -> SimpleFunction:
    """
    Табулирование функции на конечном пространстве.

    Функция измерима тогда и только тогда, когда она постоянна на атомах.

    Raises:
        NotMeasurableError: Если f не постоянна на некотором атоме
    """
    pieces = []
    for atom in space.atoms:
        values = [codomain.coerce(f(p)) for p in atom]
        keys = {codomain.key(v) for v in values}
        if len(keys) > 1:
            raise NotMeasurableError(f"Function is not constant on atom {atom!r}")
        pieces.append((atom, values[0]))
    return SimpleFunction(space, codomain, pieces)


def midpoint_step_approximation(
    f: Callable[[float], Any],
    space: IntervalMeasurableSpace,
    codomain: NormedSpace,
    level: int,
) -> SimpleFunction:
    """
    Ступенчатое приближение: на ячейке [a, b) значение f((a + b) / 2).
    """
    pieces = []
    for a, b in dyadic_cells(space.lo, space.hi, level):
        pieces.append((IntervalSet.interval(a, b), f(0.5 * (a + b))))
    return SimpleFunction(space, codomain, pieces)


# =============================================================================
# L1 FUNCTION
# =============================================================================


class L1Function:
    """
    Элемент L¹(μ; E).

    Args:
        measure: Мера μ
        codomain: Пространство значений E
        approximant: n ↦ fₙ с ‖f − fₙ‖₁ ≤ radius · 2⁻ⁿ
        radius: Радиус fast Cauchy последовательности (0 для exact)
        exact: Простая функция, если элемент лежит в плотном подпространстве
    """

    def __init__(
        self,
        measure: Measure,
        codomain: NormedSpace,
        approximant: Callable[[int], SimpleFunction],
        radius: float = 1.0,
        exact: SimpleFunction | None = None,
    ):
        validate_non_negative(radius, "radius")
        self._measure = measure
        self._codomain = codomain
        self._approximant = approximant
        self._radius = 0.0 if exact is not None else float(radius)
        self._exact = exact
        self._cache: dict[int, SimpleFunction] = {}

    def __repr__(self) -> str:
        kind = "exact" if self._exact is not None else f"radius={self._radius:.6g}"
        return f"L1Function({kind}, codomain={self._codomain!r})"

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def of_simple(cls, simple: SimpleFunction, measure: Measure) -> "L1Function":
        """
        Точный элемент из интегрируемой простой функции.

        Raises:
            NotIntegrableError: Если простая функция не интегрируема
        """
        if simple.space is not measure.space:
            raise ValueError("Simple function and measure live on different spaces")
        if not simple.is_integrable(measure):
            raise NotIntegrableError(
                "Simple function takes a non-zero value on a set of infinite measure"
            )
        return cls(measure, simple.codomain, lambda n: simple, exact=simple)

    @classmethod
    def from_finite_callable(
        cls,
        f: Callable[[Hashable], Any],
        measure: Measure,
        codomain: NormedSpace,
    ) -> "L1Function":
        """
        Элемент из функции на конечном пространстве.

        Raises:
            NotMeasurableError: Если f не постоянна на атомах
            NotIntegrableError: Если f не интегрируема
        """
        space = measure.space
        if not isinstance(space, FiniteMeasurableSpace):
            raise TypeError(f"Expected a finite space, got {space!r}")
        return cls.of_simple(tabulate_finite(f, space, codomain), measure)

    @classmethod
    def from_lipschitz(
        cls,
        f: Callable[[float], Any],
        measure: Measure,
        codomain: NormedSpace,
        lipschitz: float,
    ) -> "L1Function":
        """
        Элемент из Lipschitz-функции на полуинтервале.

        Оценка: на ячейке ширины h выполнено |f − f(mid)| ≤ L·h/2, поэтому
        ‖f − step_n‖₁ ≤ L · (hi − lo) · μ(univ) / 2 · 2⁻ⁿ, и это radius · 2⁻ⁿ.
        fₙ — ступенчатое приближение на сетке уровня n ≤ MAX_DYADIC_LEVEL.

        Raises:
            NotIntegrableError: Если мера бесконечна
        """
        space = measure.space
        if not isinstance(space, IntervalMeasurableSpace):
            raise TypeError(f"Expected an interval space, got {space!r}")
        validate_non_negative(lipschitz, "lipschitz")
        if not measure.is_finite():
            raise NotIntegrableError("Measure of the interval space is infinite")

        total = measure.to_real(space.universe)
        radius = lipschitz * (space.hi - space.lo) * total / 2.0

        def approximant(n: int) -> SimpleFunction:
            if n > MAX_DYADIC_LEVEL:
                raise ValueError(f"Dyadic level {n} exceeds {MAX_DYADIC_LEVEL}")
            logger.debug("Lipschitz approximant at dyadic level %d", n)
            step = midpoint_step_approximation(f, space, codomain, n)
            if not step.is_integrable(measure):
                raise NotIntegrableError("Function takes non-finite values")
            return step

        return cls(measure, codomain, approximant, radius=radius)

    # -------------------------------------------------------------------------
    # Доступ
    # -------------------------------------------------------------------------

    @property
    def measure(self) -> Measure:
        return self._measure

    @property
    def codomain(self) -> NormedSpace:
        return self._codomain

    @property
    def exact(self) -> SimpleFunction | None:
        return self._exact

    @property
    def radius(self) -> float:
        return self._radius

    def approximant(self, n: int) -> SimpleFunction:
        """fₙ с ‖f − fₙ‖₁ ≤ radius · 2⁻ⁿ."""
        if n < 0:
            raise ValueError(f"Approximation level must be >= 0, got {n}")
        if self._exact is not None:
            return self._exact
        if n not in self._cache:
            self._cache[n] = self._approximant(n)
        return self._cache[n]

    def norm(self, level: int = 12) -> float:
        """‖f‖₁ с ошибкой ≤ radius · 2⁻ˡᵉᵛᵉˡ (точно для exact)."""
        return self.approximant(level).l1_norm(self._measure)

    def dist(self, other: "L1Function", level: int = 12) -> float:
        """‖f − g‖₁ с ошибкой ≤ (r₁ + r₂) · 2⁻ˡᵉᵛᵉˡ."""
        return (self - other).norm(level)

    # -------------------------------------------------------------------------
    # Алгебра
    # -------------------------------------------------------------------------

    def _check_compatible(self, other: "L1Function") -> None:
        if other._measure is not self._measure:
            raise ValueError("L1 functions are taken with respect to different measures")
        if other._codomain != self._codomain:
            raise TypeError("L1 functions have different codomains")

    def __add__(self, other: "L1Function") -> "L1Function":
        self._check_compatible(other)
        if self._exact is not None and other._exact is not None:
            return L1Function.of_simple(self._exact + other._exact, self._measure)
        return L1Function(
            self._measure,
            self._codomain,
            lambda n: self.approximant(n) + other.approximant(n),
            radius=self._radius + other._radius,
        )

    def __neg__(self) -> "L1Function":
        if self._exact is not None:
            return L1Function.of_simple(-self._exact, self._measure)
        return L1Function(
            self._measure, self._codomain, lambda n: -self.approximant(n), radius=self._radius
        )

    def __sub__(self, other: "L1Function") -> "L1Function":
        return self + (-other)

    def scale(self, c: float) -> "L1Function":
        if self._exact is not None or c == 0.0:
            base = self._exact if self._exact is not None else self.approximant(0)
            return L1Function.of_simple(base.scale(c), self._measure)
        return L1Function(
            self._measure,
            self._codomain,
            lambda n: self.approximant(n).scale(c),
            radius=abs(c) * self._radius,
        )

    def __rmul__(self, c: float) -> "L1Function":
        return self.scale(c)
