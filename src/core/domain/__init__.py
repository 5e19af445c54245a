"""
Domain models and value objects.

Contains measurable sets and spaces, measures, normed spaces,
continuous linear maps, simple functions and L¹ elements.
"""

from src.core.domain.l1_function import L1Function, NotIntegrableError
from src.core.domain.linear_map import ContinuousLinearMap
from src.core.domain.measurable_space import (
    FiniteMeasurableSpace,
    IntervalMeasurableSpace,
    MeasurableSpace,
    NotMeasurableError,
)
from src.core.domain.measure import (
    LebesgueMeasure,
    Measure,
    PointMassMeasure,
    RestrictedMeasure,
    ScaledMeasure,
    SumMeasure,
    counting_measure,
    dirac,
)
from src.core.domain.normed_space import REAL, NormedSpace, ProductSpace, euclidean
from src.core.domain.sets import IntervalSet, MeasurableSet, PointSet
from src.core.domain.simple_function import SimpleFunction
from src.core.domain.specs import (
    FiniteMeasureSpec,
    IntervalMeasureSpec,
    PieceSpec,
    SimpleFunctionSpec,
)

__all__ = [
    # Sets and spaces
    "PointSet",
    "IntervalSet",
    "MeasurableSet",
    "MeasurableSpace",
    "FiniteMeasurableSpace",
    "IntervalMeasurableSpace",
    "NotMeasurableError",
    # Measures
    "Measure",
    "PointMassMeasure",
    "LebesgueMeasure",
    "RestrictedMeasure",
    "ScaledMeasure",
    "SumMeasure",
    "counting_measure",
    "dirac",
    # Normed spaces and operators
    "NormedSpace",
    "ProductSpace",
    "REAL",
    "euclidean",
    "ContinuousLinearMap",
    # Functions
    "SimpleFunction",
    "L1Function",
    "NotIntegrableError",
    # Specs
    "FiniteMeasureSpec",
    "IntervalMeasureSpec",
    "PieceSpec",
    "SimpleFunctionSpec",
]
