"""
ContinuousCompletion — продолжение Lipschitz-отображения с плотного подпространства

Отображение L: D → F задано на плотном подпространстве D полного
метрического пространства X и Lipschitz с константой K. Элемент x ∈ X
представлен fast Cauchy последовательностью из D:

    dist(x, approximant(n)) ≤ radius · 2⁻ⁿ

Продолжение по непрерывности:

    L̄(x) = lim L(approximant(n)),   ‖L̄(x) − L(approximant(n))‖ ≤ K · radius · 2⁻ⁿ

Для заданной толерантности ε выбирается минимальный n с K · radius · 2⁻ⁿ ≤ ε.
Если x лежит в D точно (radius = 0, есть exact), значение L(exact)
возвращается без ошибки — продолжение согласовано с L на D.

Для линейного ограниченного L продолжение линейно и ‖L̄‖ ≤ ‖L‖ = K.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Generic, Iterable, Protocol, TypeVar

import numpy as np

from src.core.domain.normed_space import NormedSpace
from src.core.math.dyadic import level_for_tolerance
from src.core.math.numerical_safeguards import validate_non_negative
from src.extension.config import ExtensionConfig

logger = logging.getLogger(__name__)

D = TypeVar("D")
D_co = TypeVar("D_co", covariant=True)


class CompletionError(RuntimeError):
    """Требуемый уровень аппроксимации превышает ExtensionConfig.max_level."""


class CauchyApproximable(Protocol[D_co]):
    """Элемент пополнения, заданный fast Cauchy последовательностью."""

    @property
    def radius(self) -> float: ...

    @property
    def exact(self) -> D_co | None: ...

    def approximant(self, n: int) -> D_co: ...


@dataclass(frozen=True)
class ExtensionValue:
    """Значение продолжения с априорной оценкой ошибки."""

    value: np.ndarray
    error_bound: float
    level: int | None  # None — точное значение на плотном подпространстве


class DenseExtension(Generic[D]):
    """
    Продолжение Lipschitz-отображения apply: D → F на пополнение.

    Args:
        apply: Отображение на плотном подпространстве
        lipschitz: Константа Lipschitz K ≥ 0
        codomain: Пространство значений F
        config: Конфигурация (tolerance, max_level)
    """

    def __init__(
        self,
        apply: Callable[[D], np.ndarray],
        lipschitz: float,
        codomain: NormedSpace,
        config: ExtensionConfig | None = None,
    ):
        validate_non_negative(lipschitz, "lipschitz")
        self.apply = apply
        self.lipschitz = float(lipschitz)
        self.codomain = codomain
        self.config = config or ExtensionConfig()

    def required_level(self, radius: float, tol: float) -> int:
        """
        Минимальный n с K · radius · 2⁻ⁿ ≤ tol.

        Raises:
            CompletionError: Если n > config.max_level
        """
        level = level_for_tolerance(self.lipschitz * radius, tol)
        if level > self.config.max_level:
            raise CompletionError(
                f"Tolerance {tol} requires approximation level {level} "
                f"> max_level {self.config.max_level}"
            )
        return level

    def value_with_error(self, x: CauchyApproximable[D], tol: float | None = None) -> ExtensionValue:
        """L̄(x) и гарантированная оценка ошибки."""
        if x.exact is not None:
            return ExtensionValue(self.codomain.coerce(self.apply(x.exact)), 0.0, None)

        tol = self.config.tolerance if tol is None else tol
        level = self.required_level(x.radius, tol)
        logger.debug("Completion evaluates approximant at level %d (tol=%g)", level, tol)
        value = self.codomain.coerce(self.apply(x.approximant(level)))
        return ExtensionValue(value, self.lipschitz * x.radius * 2.0 ** (-level), level)

    def __call__(self, x: CauchyApproximable[D], tol: float | None = None) -> np.ndarray:
        return self.value_with_error(x, tol).value

    def image_gaps(
        self,
        xs: Iterable[CauchyApproximable[D]],
        limit: CauchyApproximable[D],
        tol: float | None = None,
    ) -> list[float]:
        """
        ‖L̄(xₖ) − L̄(x)‖ для последовательности xₖ → x.

        Непрерывность: если dist(xₖ, x) → 0, то зазоры → 0
        (с точностью до 2·tol на неточных элементах).
        """
        target = self(limit, tol)
        return [self.codomain.norm(self.codomain.sub(self(x, tol), target)) for x in xs]


class ExtendedLinearMap(DenseExtension[D]):
    """Продолжение ограниченного линейного оператора; ‖L̄‖ ≤ lipschitz."""

    @property
    def opnorm_bound(self) -> float:
        return self.lipschitz

    def norm_bound(self, x_norm: float) -> float:
        """Оценка ‖L̄(x)‖ ≤ ‖L̄‖ · ‖x‖."""
        return self.lipschitz * x_norm
