"""Extension — продолжение доминируемой set-функции до set_to_fun.

Этапы:
- weighted_smul: базовая set-функция s ↦ μ(s).toReal • id
- DominatedFinMeasAdditive: доминируемая аддитивная set-функция
- set_to_simple_func: значение на простых функциях
- SetToL1S: ограниченный оператор на интегрируемых простых функциях
- DenseExtension / SetToL1: продолжение по непрерывности на L¹
- set_to_fun: тотальное продолжение (0 вне L¹)
"""

from .completion import CompletionError, DenseExtension, ExtendedLinearMap, ExtensionValue
from .config import ExtensionConfig
from .dominated_additive import DominanceViolation, DominatedFinMeasAdditive
from .l1_simple import L1SimpleFunction, SetToL1S
from .set_to_fun import (
    Integrable,
    NotIntegrable,
    classify,
    norm_set_to_fun_le,
    set_to_fun,
    set_to_fun_add_left,
    set_to_fun_const,
    set_to_fun_finset_sum,
    set_to_fun_indicator_const,
    set_to_fun_measure_zero,
    set_to_fun_smul_left,
    tendsto_set_to_fun_of_l1,
)
from .set_to_l1 import SetToL1, set_to_l1
from .simple_extension import (
    set_to_simple_func,
    set_to_simple_func_congr_ae,
    set_to_simple_func_const,
    set_to_simple_func_indicator,
    set_to_simple_func_mono,
    set_to_simple_func_nonneg,
    simple_l1_norm,
    simple_norm_bound,
)
from .weighted_smul import weighted_smul, weighted_smul_set_function

__all__ = [
    "ExtensionConfig",
    "weighted_smul",
    "weighted_smul_set_function",
    "DominatedFinMeasAdditive",
    "DominanceViolation",
    "set_to_simple_func",
    "set_to_simple_func_congr_ae",
    "set_to_simple_func_const",
    "set_to_simple_func_indicator",
    "set_to_simple_func_mono",
    "set_to_simple_func_nonneg",
    "simple_l1_norm",
    "simple_norm_bound",
    "L1SimpleFunction",
    "SetToL1S",
    "DenseExtension",
    "ExtendedLinearMap",
    "ExtensionValue",
    "CompletionError",
    "SetToL1",
    "set_to_l1",
    "Integrable",
    "NotIntegrable",
    "classify",
    "set_to_fun",
    "norm_set_to_fun_le",
    "set_to_fun_const",
    "set_to_fun_finset_sum",
    "set_to_fun_indicator_const",
    "set_to_fun_add_left",
    "set_to_fun_smul_left",
    "set_to_fun_measure_zero",
    "tendsto_set_to_fun_of_l1",
]
