"""
IntegrableSimpleFunctionExtension — set-функция на плотном подпространстве L¹

L1SimpleFunction — интегрируемая простая функция по модулю равенства п.в.,
нормированное пространство с нормой ‖f‖₁ = Σ μ(f⁻¹{x}).toReal · ‖x‖.

SetToL1S(T) — ограниченный линейный оператор L1SimpleFunction → F,
‖SetToL1S(T)‖ ≤ max(C, 0). Тотален: на каждой интегрируемой простой
функции значение конечно.
"""

import numpy as np

from src.core.domain.l1_function import L1Function, NotIntegrableError
from src.core.domain.measure import Measure
from src.core.domain.simple_function import SimpleFunction
from src.extension.dominated_additive import DominatedFinMeasAdditive
from src.extension.simple_extension import set_to_simple_func, simple_l1_norm


class L1SimpleFunction:
    """
    Класс интегрируемой простой функции в L¹(μ).

    Raises:
        NotIntegrableError: Если простая функция не интегрируема
    """

    def __init__(self, simple: SimpleFunction, measure: Measure):
        if simple.space is not measure.space:
            raise ValueError("Simple function and measure live on different spaces")
        if not simple.is_integrable(measure):
            raise NotIntegrableError(
                "Simple function takes a non-zero value on a set of infinite measure"
            )
        self.simple = simple
        self.measure = measure

    def __repr__(self) -> str:
        return f"L1SimpleFunction({self.simple!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, L1SimpleFunction):
            return NotImplemented
        return other.measure is self.measure and self.simple.ae_eq(other.simple, self.measure)

    __hash__ = None

    def norm(self) -> float:
        return simple_l1_norm(self.simple, self.measure)

    def dist(self, other: "L1SimpleFunction") -> float:
        return (self - other).norm()

    def to_l1(self) -> L1Function:
        """Плотное вложение в L¹."""
        return L1Function.of_simple(self.simple, self.measure)

    def _check_measure(self, other: "L1SimpleFunction") -> None:
        if other.measure is not self.measure:
            raise ValueError("L1 simple functions are taken with respect to different measures")

    def __add__(self, other: "L1SimpleFunction") -> "L1SimpleFunction":
        self._check_measure(other)
        return L1SimpleFunction(self.simple + other.simple, self.measure)

    def __sub__(self, other: "L1SimpleFunction") -> "L1SimpleFunction":
        self._check_measure(other)
        return L1SimpleFunction(self.simple - other.simple, self.measure)

    def __neg__(self) -> "L1SimpleFunction":
        return L1SimpleFunction(-self.simple, self.measure)

    def scale(self, c: float) -> "L1SimpleFunction":
        return L1SimpleFunction(self.simple.scale(c), self.measure)

    def __rmul__(self, c: float) -> "L1SimpleFunction":
        return self.scale(c)


class SetToL1S:
    """Ограниченный линейный оператор L1SimpleFunction → F, индуцированный T."""

    def __init__(self, T: DominatedFinMeasAdditive):
        self.T = T

    @property
    def opnorm_bound(self) -> float:
        """‖SetToL1S(T)‖ ≤ max(C, 0)."""
        return self.T.bound_constant

    def __call__(self, f: L1SimpleFunction | SimpleFunction) -> np.ndarray:
        simple = f.simple if isinstance(f, L1SimpleFunction) else f
        if not simple.is_integrable(self.T.measure):
            raise NotIntegrableError("SetToL1S is defined on integrable simple functions only")
        return set_to_simple_func(self.T, simple)
