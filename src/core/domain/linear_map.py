"""
ContinuousLinearMap — ограниченные линейные операторы E →L F

Оператор хранится как numpy тензор формы F.shape + E.shape и применяется
через tensordot по осям E. Операторная норма — спектральная норма
матричного представления (обе нормы евклидовы).
"""

from dataclasses import dataclass, field
from typing import Any

import numpy as np

from src.core.domain.normed_space import NormedSpace
from src.core.math.numerical_safeguards import validate_finite, vectors_close


@dataclass(frozen=True, eq=False)
class ContinuousLinearMap:
    """Линейный оператор domain → codomain."""

    domain: NormedSpace
    codomain: NormedSpace
    tensor: np.ndarray = field(repr=False)

    def __post_init__(self) -> None:
        expected = self.codomain.shape + self.domain.shape
        arr = np.array(self.tensor, dtype=np.float64)
        if arr.shape != expected:
            raise TypeError(f"Operator tensor must have shape {expected}, got {arr.shape}")
        if not np.all(np.isfinite(arr)):
            raise ValueError("Operator tensor contains NaN/Inf")
        arr.setflags(write=False)
        object.__setattr__(self, "tensor", arr)

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def zero(cls, domain: NormedSpace, codomain: NormedSpace) -> "ContinuousLinearMap":
        return cls(domain, codomain, np.zeros(codomain.shape + domain.shape))

    @classmethod
    def identity(cls, space: NormedSpace) -> "ContinuousLinearMap":
        eye = np.eye(space.size).reshape(space.shape + space.shape)
        return cls(space, space, eye)

    @classmethod
    def smul_id(cls, c: float, space: NormedSpace) -> "ContinuousLinearMap":
        """x ↦ c • x."""
        validate_finite(c, "c")
        return cls.identity(space).scale(c)

    # -------------------------------------------------------------------------
    # Применение и норма
    # -------------------------------------------------------------------------

    def __call__(self, x: Any) -> np.ndarray:
        vec = self.domain.coerce(x)
        return self.codomain.coerce(np.tensordot(self.tensor, vec, axes=len(self.domain.shape)))

    def as_matrix(self) -> np.ndarray:
        return self.tensor.reshape(self.codomain.size, self.domain.size)

    def opnorm(self) -> float:
        """‖T‖ = sup_{‖x‖ ≤ 1} ‖T x‖."""
        return float(np.linalg.norm(self.as_matrix(), 2))

    # -------------------------------------------------------------------------
    # Алгебра
    # -------------------------------------------------------------------------

    def _check_compatible(self, other: "ContinuousLinearMap") -> None:
        if self.domain != other.domain or self.codomain != other.codomain:
            raise TypeError("Operators act between different spaces")

    def __add__(self, other: "ContinuousLinearMap") -> "ContinuousLinearMap":
        self._check_compatible(other)
        return ContinuousLinearMap(self.domain, self.codomain, self.tensor + other.tensor)

    def __sub__(self, other: "ContinuousLinearMap") -> "ContinuousLinearMap":
        self._check_compatible(other)
        return ContinuousLinearMap(self.domain, self.codomain, self.tensor - other.tensor)

    def __neg__(self) -> "ContinuousLinearMap":
        return ContinuousLinearMap(self.domain, self.codomain, -self.tensor)

    def scale(self, c: float) -> "ContinuousLinearMap":
        return ContinuousLinearMap(self.domain, self.codomain, float(c) * self.tensor)

    def __rmul__(self, c: float) -> "ContinuousLinearMap":
        return self.scale(c)

    def compose(self, inner: "ContinuousLinearMap") -> "ContinuousLinearMap":
        """self ∘ inner."""
        if inner.codomain != self.domain:
            raise TypeError("Cannot compose: codomain/domain mismatch")
        matrix = self.as_matrix() @ inner.as_matrix()
        return ContinuousLinearMap(
            inner.domain, self.codomain, matrix.reshape(self.codomain.shape + inner.domain.shape)
        )

    def is_close(self, other: "ContinuousLinearMap", abs_tol: float = 1e-9) -> bool:
        self._check_compatible(other)
        return vectors_close(self.tensor, other.tensor, abs_tol=abs_tol)

    def is_zero(self) -> bool:
        return not np.any(self.tensor)
