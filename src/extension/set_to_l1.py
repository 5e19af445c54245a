"""
SetToL1 — продолжение SetToL1S(T) по непрерывности на всё L¹(μ; E)

- на точных элементах (простых функциях) совпадает с set_to_simple_func
- ‖set_to_l1(T)(f)‖ ≤ max(C, 0) · ‖f‖₁
- значение зависит только от класса f по модулю равенства п.в.
"""

from src.core.domain.l1_function import L1Function
from src.core.domain.simple_function import SimpleFunction
from src.extension.completion import ExtendedLinearMap, ExtensionValue
from src.extension.config import ExtensionConfig
from src.extension.dominated_additive import DominatedFinMeasAdditive
from src.extension.l1_simple import SetToL1S


class SetToL1(ExtendedLinearMap[SimpleFunction]):
    """Непрерывный линейный оператор L¹(μ; E) → F."""

    def __init__(self, T: DominatedFinMeasAdditive, config: ExtensionConfig | None = None):
        self.T = T
        self.simple_map = SetToL1S(T)
        super().__init__(
            self.simple_map,
            self.simple_map.opnorm_bound,
            T.codomain,
            config or T.config,
        )

    def value_with_error(self, x: L1Function, tol: float | None = None) -> ExtensionValue:
        """
        Raises:
            ValueError: Если f взята относительно другой меры
            TypeError: Если f принимает значения не в T.domain
        """
        if x.measure is not self.T.measure:
            raise ValueError("L1 function is taken with respect to a different measure")
        if x.codomain != self.T.domain:
            raise TypeError(f"L1 function takes values in {x.codomain!r}, expected {self.T.domain!r}")
        return super().value_with_error(x, tol)


def set_to_l1(T: DominatedFinMeasAdditive, config: ExtensionConfig | None = None) -> SetToL1:
    return SetToL1(T, config)
