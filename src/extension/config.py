"""
ExtensionConfig — параметры построения продолжения set-функции
"""

from dataclasses import dataclass

from src.core.math.dyadic import MAX_DYADIC_LEVEL
from src.core.math.numerical_safeguards import validate_non_negative, validate_positive


@dataclass(frozen=True)
class ExtensionConfig:
    """Конфигурация продолжения по непрерывности.

    - tolerance: целевая точность значения на неточных элементах L¹
    - max_level: максимальный уровень fast Cauchy последовательности
      (не выше MAX_DYADIC_LEVEL: уровень n — это 2ⁿ ячеек сетки)
    - default_lipschitz: Lipschitz-константа для callable на полуинтервале,
      если она не передана явно (проверяется на сетке probe_level)
    - probe_level: уровень двоичной сетки для проверки конечности значений
      и заявленной Lipschitz-константы
    - check_invariants: debug-проверка аддитивности и оценки ‖T s‖ ≤ C·μ(s)
    - atol: абсолютная толерантность debug-проверок
    """

    tolerance: float = 1e-4
    max_level: int = 20
    default_lipschitz: float = 1.0
    probe_level: int = 8
    check_invariants: bool = False
    atol: float = 1e-9

    def __post_init__(self) -> None:
        validate_positive(self.tolerance, "tolerance", eps=0.0)
        validate_non_negative(self.default_lipschitz, "default_lipschitz")
        validate_non_negative(self.atol, "atol")
        if not 0 <= self.max_level <= MAX_DYADIC_LEVEL:
            raise ValueError(
                f"max_level must be in [0, {MAX_DYADIC_LEVEL}], got {self.max_level}"
            )
        if not 0 <= self.probe_level <= MAX_DYADIC_LEVEL:
            raise ValueError(
                f"probe_level must be in [0, {MAX_DYADIC_LEVEL}], got {self.probe_level}"
            )
