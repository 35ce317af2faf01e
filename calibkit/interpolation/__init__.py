"""
Interpolation strategies for piecewise term structures.

An interpolation strategy is an :class:`Interpolator` subclass: calling it
with node times and values builds the interpolated function.
"""

from .base import Interpolator
from .factory import (
    create_interpolator,
    discount_factor_to_zero_rate,
    get_interpolator_class,
    zero_rate_to_discount_factor,
)
from .linear import BackwardFlatInterpolator, LinearInterpolator, LogLinearInterpolator

__all__ = [
    "Interpolator",
    "LinearInterpolator",
    "LogLinearInterpolator",
    "BackwardFlatInterpolator",
    "create_interpolator",
    "get_interpolator_class",
    "discount_factor_to_zero_rate",
    "zero_rate_to_discount_factor",
]
