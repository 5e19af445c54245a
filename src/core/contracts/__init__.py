"""
Contract Validation Module

Валидация JSON описаний мер и простых функций и построение доменных объектов.
"""

from .loaders import (
    build_measure,
    build_simple_function,
    load_measure,
    load_simple_function,
)
from .validators import (
    ContractValidator,
    MeasureSpaceValidator,
    SchemaLoader,
    SimpleFunctionValidator,
    validate_measure_space,
    validate_simple_function,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "MeasureSpaceValidator",
    "SimpleFunctionValidator",
    # Functions
    "validate_measure_space",
    "validate_simple_function",
    "build_measure",
    "build_simple_function",
    "load_measure",
    "load_simple_function",
]
