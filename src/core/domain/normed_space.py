"""
NormedSpace — конечномерные евклидовы пространства над numpy

Значения — read-only numpy массивы float64 фиксированной формы:
- shape () — вещественная прямая ℝ (REAL)
- shape (n,) — ℝⁿ с евклидовой нормой
- ProductSpace — пары (E × E') с sup-нормой, для pairing простых функций

key(v) — хешируемый ключ значения; простые функции группируют
прообразы (fibers) по этому ключу.
"""

from dataclasses import dataclass
from typing import Any

import numpy as np

from src.core.math.numerical_safeguards import vectors_close


@dataclass(frozen=True)
class NormedSpace:
    """Евклидово пространство значений заданной формы."""

    shape: tuple[int, ...] = ()

    def __repr__(self) -> str:
        if not self.shape:
            return "NormedSpace(ℝ)"
        return f"NormedSpace(ℝ^{self.shape})"

    @property
    def size(self) -> int:
        return int(np.prod(self.shape, dtype=np.int64))

    def coerce(self, value: Any) -> np.ndarray:
        """
        Приведение значения к read-only массиву формы shape.

        Raises:
            TypeError: Если форма значения не совпадает с shape
        """
        arr = np.array(value, dtype=np.float64)
        if arr.shape != self.shape:
            raise TypeError(f"Expected value of shape {self.shape}, got {arr.shape}")
        arr.setflags(write=False)
        return arr

    def zero(self) -> np.ndarray:
        return self.coerce(np.zeros(self.shape))

    def norm(self, value: Any) -> float:
        return float(np.linalg.norm(np.ravel(self.coerce(value))))

    def key(self, value: Any) -> tuple:
        return tuple(np.ravel(self.coerce(value)).tolist())

    def is_zero(self, value: Any) -> bool:
        return not np.any(self.coerce(value))

    def is_finite(self, value: Any) -> bool:
        return bool(np.all(np.isfinite(np.asarray(value, dtype=np.float64))))

    def add(self, a: Any, b: Any) -> np.ndarray:
        return self.coerce(self.coerce(a) + self.coerce(b))

    def sub(self, a: Any, b: Any) -> np.ndarray:
        return self.coerce(self.coerce(a) - self.coerce(b))

    def neg(self, a: Any) -> np.ndarray:
        return self.coerce(-self.coerce(a))

    def smul(self, c: float, a: Any) -> np.ndarray:
        return self.coerce(float(c) * self.coerce(a))

    def sum(self, values: list[np.ndarray]) -> np.ndarray:
        """Сумма конечного семейства (порядок слагаемых не важен)."""
        if not values:
            return self.zero()
        return self.coerce(np.sum(np.stack([self.coerce(v) for v in values]), axis=0))

    def close(self, a: Any, b: Any, abs_tol: float = 1e-9) -> bool:
        return vectors_close(self.coerce(a), self.coerce(b), abs_tol=abs_tol)


REAL = NormedSpace(())


def euclidean(n: int) -> NormedSpace:
    """ℝⁿ."""
    if n < 1:
        raise ValueError(f"Dimension must be >= 1, got {n}")
    return NormedSpace((n,))


@dataclass(frozen=True)
class ProductSpace:
    """E × E' с нормой max(‖x‖, ‖y‖)."""

    left: NormedSpace
    right: NormedSpace

    def coerce(self, value: Any) -> tuple[np.ndarray, np.ndarray]:
        x, y = value
        return (self.left.coerce(x), self.right.coerce(y))

    def zero(self) -> tuple[np.ndarray, np.ndarray]:
        return (self.left.zero(), self.right.zero())

    def norm(self, value: Any) -> float:
        x, y = self.coerce(value)
        return max(self.left.norm(x), self.right.norm(y))

    def key(self, value: Any) -> tuple:
        x, y = self.coerce(value)
        return (self.left.key(x), self.right.key(y))

    def is_zero(self, value: Any) -> bool:
        x, y = self.coerce(value)
        return self.left.is_zero(x) and self.right.is_zero(y)

    def is_finite(self, value: Any) -> bool:
        x, y = self.coerce(value)
        return self.left.is_finite(x) and self.right.is_finite(y)

    def sub(self, a: Any, b: Any) -> tuple[np.ndarray, np.ndarray]:
        (x1, y1), (x2, y2) = self.coerce(a), self.coerce(b)
        return (self.left.sub(x1, x2), self.right.sub(y1, y2))
