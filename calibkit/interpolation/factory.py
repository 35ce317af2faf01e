"""
Factory functions and utilities for creating interpolators.
"""
import math
from typing import Dict, Sequence, Type, Union

from calibkit.errors import InvalidArgument, require

from .base import Interpolator
from .linear import BackwardFlatInterpolator, LinearInterpolator, LogLinearInterpolator

INTERPOLATORS: Dict[str, Type[Interpolator]] = {
    "LINEAR": LinearInterpolator,
    "LOG_LINEAR": LogLinearInterpolator,
    "LOGLINEAR": LogLinearInterpolator,
    "BACKWARD_FLAT": BackwardFlatInterpolator,
}


def get_interpolator_class(method: Union[str, Type[Interpolator]]) -> Type[Interpolator]:
    """Resolve an interpolation method name (classes pass through)."""
    if isinstance(method, type) and issubclass(method, Interpolator):
        return method
    try:
        return INTERPOLATORS[str(method).upper()]
    except KeyError as exc:
        raise InvalidArgument(
            f"Unknown interpolation method: {method}. Available: {sorted(INTERPOLATORS)}"
        ) from exc


def create_interpolator(method: Union[str, Type[Interpolator]],
                        times: Sequence[float],
                        values: Sequence[float]) -> Interpolator:
    """
    Build an interpolator over the given nodes.

    Args:
        method: Interpolation method name or Interpolator subclass
        times: Node times
        values: Node values

    Returns:
        Configured interpolator
    """
    return get_interpolator_class(method)(times, values)


def discount_factor_to_zero_rate(df: float, time: float) -> float:
    """Convert discount factor to continuously compounded zero rate."""
    require(df > 0, f"Discount factor must be positive: {df}")
    require(time > 0, f"Time must be positive: {time}")
    return -math.log(df) / time


def zero_rate_to_discount_factor(rate: float, time: float) -> float:
    """Convert continuously compounded zero rate to discount factor."""
    return math.exp(-rate * time)
