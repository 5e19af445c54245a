"""Integral — интеграл Бохнера поверх set_to_fun."""

from .bochner import integral, integral_simple, norm_integral_le, set_integral

__all__ = [
    "integral",
    "integral_simple",
    "norm_integral_le",
    "set_integral",
]
