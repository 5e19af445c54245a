"""
Specs — Pydantic модели JSON описаний мер и простых функций

Immutable модели, соответствующие схемам contracts/schema/:
- FiniteMeasureSpec / IntervalMeasureSpec (measure_space.json)
- SimpleFunctionSpec (simple_function.json)

Вес "inf" в JSON означает атом бесконечной меры.
"""

import math
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, field_validator, model_validator


# =============================================================================
# MEASURE SPECS
# =============================================================================


class FiniteMeasureSpec(BaseModel):
    """Конечное пространство с точечными массами."""

    kind: Literal["finite"] = "finite"
    points: list[str] = Field(..., min_length=1, description="Точки пространства")
    atoms: list[list[str]] | None = Field(
        None, description="Разбиение на атомы (default: одноточечные)"
    )
    weights: dict[str, float] = Field(..., description="Веса точек в [0, ∞]")

    model_config = {"frozen": True}

    @field_validator("weights", mode="before")
    @classmethod
    def parse_infinite_weights(cls, v: Any) -> Any:
        if isinstance(v, dict):
            return {k: math.inf if w == "inf" else w for k, w in v.items()}
        return v

    @field_validator("weights")
    @classmethod
    def validate_weights(cls, v: dict[str, float]) -> dict[str, float]:
        for point, weight in v.items():
            if math.isnan(weight) or weight < 0:
                raise ValueError(f"weight of {point!r} must be in [0, inf], got {weight}")
        return v

    @model_validator(mode="after")
    def validate_points(self) -> "FiniteMeasureSpec":
        known = set(self.points)
        unknown = set(self.weights) - known
        if unknown:
            raise ValueError(f"weights reference unknown points: {sorted(unknown)}")
        return self


class IntervalMeasureSpec(BaseModel):
    """Полуинтервал [lo, hi) с мерой scale · Lebesgue."""

    kind: Literal["interval"] = "interval"
    lo: float = Field(..., description="Левый конец")
    hi: float = Field(..., description="Правый конец")
    scale: float = Field(1.0, ge=0, description="Множитель меры Лебега")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_bounds(self) -> "IntervalMeasureSpec":
        if not (math.isfinite(self.lo) and math.isfinite(self.hi)) or self.hi <= self.lo:
            raise ValueError(f"interval requires finite lo < hi, got [{self.lo}, {self.hi})")
        return self


MeasureSpec = Annotated[
    Union[FiniteMeasureSpec, IntervalMeasureSpec],
    Field(discriminator="kind"),
]


# =============================================================================
# SIMPLE FUNCTION SPEC
# =============================================================================


class PieceSpec(BaseModel):
    """Кусок разбиения: множество точек или объединение полуинтервалов."""

    points: list[str] | None = None
    intervals: list[tuple[float, float]] | None = None
    value: float | list[float] | list[list[float]]

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_exactly_one_set(self) -> "PieceSpec":
        if (self.points is None) == (self.intervals is None):
            raise ValueError("piece must define exactly one of 'points' or 'intervals'")
        return self


class SimpleFunctionSpec(BaseModel):
    """Простая функция: форма значений и куски разбиения."""

    shape: tuple[int, ...] = Field((), description="Форма значений (() для ℝ)")
    pieces: list[PieceSpec] = Field(..., min_length=1)

    model_config = {"frozen": True}
