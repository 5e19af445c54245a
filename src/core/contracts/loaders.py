"""
Loaders — построение мер и простых функций из JSON описаний

Конвейер: jsonschema-валидация → Pydantic модель → доменный объект.
"""

from typing import Any, Dict

from pydantic import TypeAdapter

from src.core.contracts.validators import validate_measure_space, validate_simple_function
from src.core.domain.measurable_space import (
    FiniteMeasurableSpace,
    IntervalMeasurableSpace,
    MeasurableSpace,
)
from src.core.domain.measure import LebesgueMeasure, Measure, PointMassMeasure
from src.core.domain.normed_space import NormedSpace
from src.core.domain.sets import IntervalSet, PointSet
from src.core.domain.simple_function import SimpleFunction
from src.core.domain.specs import (
    FiniteMeasureSpec,
    IntervalMeasureSpec,
    MeasureSpec,
    SimpleFunctionSpec,
)

_MEASURE_ADAPTER: TypeAdapter = TypeAdapter(MeasureSpec)


def build_measure(description: FiniteMeasureSpec | IntervalMeasureSpec) -> Measure:
    """Мера по Pydantic описанию."""
    if isinstance(description, FiniteMeasureSpec):
        space = FiniteMeasurableSpace(description.points, description.atoms)
        return PointMassMeasure(space, description.weights)

    measure = LebesgueMeasure(IntervalMeasurableSpace(description.lo, description.hi))
    if description.scale != 1.0:
        return measure.scale(description.scale)
    return measure


def load_measure(data: Dict[str, Any]) -> Measure:
    """
    Raises:
        ValidationError (jsonschema): Если данные не соответствуют схеме
        pydantic.ValidationError: Если нарушены семантические ограничения
    """
    validate_measure_space(data)
    return build_measure(_MEASURE_ADAPTER.validate_python(data))


def build_simple_function(description: SimpleFunctionSpec, space: MeasurableSpace) -> SimpleFunction:
    """Простая функция по Pydantic описанию на заданном пространстве."""
    codomain = NormedSpace(tuple(description.shape))
    pieces = []
    for piece in description.pieces:
        if piece.points is not None:
            s = PointSet(frozenset(piece.points))
        else:
            s = IntervalSet(tuple(piece.intervals))
        pieces.append((s, piece.value))
    return SimpleFunction(space, codomain, pieces)


def load_simple_function(data: Dict[str, Any], space: MeasurableSpace) -> SimpleFunction:
    """
    Raises:
        ValidationError (jsonschema): Если данные не соответствуют схеме
        NotMeasurableError: Если кусок неизмерим в space
        ValueError: Если куски не образуют разбиение
    """
    validate_simple_function(data)
    return build_simple_function(SimpleFunctionSpec.model_validate(data), space)
