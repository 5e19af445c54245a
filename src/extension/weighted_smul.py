"""
WeightedSmul — взвешенный индикатор s ↦ (x ↦ μ(s).toReal • x)

Базовая set-функция интеграла Бохнера:
- weighted_smul(μ, ∅) = 0
- аддитивна на дизъюнктных множествах конечной меры
- ‖weighted_smul(μ, s)‖ ≤ μ(s).toReal, т.е. доминируема с C = 1
- на множествах бесконечной меры равна 0 (∞.toReal = 0)
"""

from src.core.domain.linear_map import ContinuousLinearMap
from src.core.domain.measure import Measure
from src.core.domain.normed_space import NormedSpace
from src.core.domain.sets import MeasurableSet
from src.extension.config import ExtensionConfig
from src.extension.dominated_additive import DominatedFinMeasAdditive


def weighted_smul(measure: Measure, s: MeasurableSet, space: NormedSpace) -> ContinuousLinearMap:
    """
    x ↦ μ(s).toReal • x как оператор space →L space.

    Raises:
        NotMeasurableError: Если s неизмеримо
    """
    return ContinuousLinearMap.smul_id(measure.to_real(s), space)


def weighted_smul_set_function(
    measure: Measure,
    space: NormedSpace,
    config: ExtensionConfig | None = None,
) -> DominatedFinMeasAdditive:
    """weighted_smul(μ) как DominatedFinMeasAdditive с C = 1."""
    return DominatedFinMeasAdditive(
        measure,
        lambda s: weighted_smul(measure, s, space),
        1.0,
        space,
        space,
        config,
    )
