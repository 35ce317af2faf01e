"""
Bootstrap traits: what the curve nodes represent.

Traits tell the bootstrapper which value sits at the reference time, how
to seed and bound each segment's solve, and how an interpolated node value
turns into a discount factor.
"""

import math
import sys
from typing import Dict, List, Type, Union

from calibkit.errors import InvalidArgument


class BootstrapTraits:
    """Interface shared by all curve traits."""

    name = ""
    requires_positive_values = False

    def initial_value(self) -> float:
        """Node value at the reference time."""
        raise NotImplementedError

    def initial_guess(self) -> float:
        """Seed for the first segment."""
        raise NotImplementedError

    def guess(self, data: List[float], i: int) -> float:
        """Seed for segment ``i``: the previous node value."""
        return data[i - 1]

    def min_value_after(self, data: List[float], i: int) -> float:
        raise NotImplementedError

    def max_value_after(self, data: List[float], i: int) -> float:
        raise NotImplementedError

    def update_guess(self, data: List[float], value: float, i: int) -> None:
        """Store the trial value of segment ``i`` in ``data``."""
        data[i] = value

    def discount(self, value: float, t: float) -> float:
        """Discount factor at time ``t`` given the interpolated node value."""
        raise NotImplementedError

    def __str__(self) -> str:
        return self.name


class Discount(BootstrapTraits):
    """Nodes are discount factors."""

    name = "DISCOUNT"
    requires_positive_values = True

    def initial_value(self) -> float:
        return 1.0

    def initial_guess(self) -> float:
        return 0.9

    def min_value_after(self, data, i):
        return sys.float_info.epsilon

    def max_value_after(self, data, i):
        # discount factors may increase under negative rates
        return 3.0

    def discount(self, value, t):
        return value


class ZeroYield(BootstrapTraits):
    """Nodes are continuously compounded zero rates."""

    name = "ZERO_YIELD"

    def initial_value(self) -> float:
        # placeholder; replaced by the first solved rate
        return self.initial_guess()

    def initial_guess(self) -> float:
        return 0.02

    def min_value_after(self, data, i):
        return -1.0

    def max_value_after(self, data, i):
        return 3.0

    def update_guess(self, data, value, i):
        data[i] = value
        if i == 1:
            # the rate at the reference time is the first segment's rate
            data[0] = value

    def discount(self, value, t):
        return math.exp(-value * t)


TRAITS: Dict[str, Type[BootstrapTraits]] = {
    "DISCOUNT": Discount,
    "ZERO_YIELD": ZeroYield,
    "ZERO": ZeroYield,
}


def get_traits(traits: Union[str, BootstrapTraits, Type[BootstrapTraits]]) -> BootstrapTraits:
    """Resolve traits from a name, class or instance."""
    if isinstance(traits, BootstrapTraits):
        return traits
    if isinstance(traits, type) and issubclass(traits, BootstrapTraits):
        return traits()
    try:
        return TRAITS[str(traits).upper()]()
    except KeyError as exc:
        raise InvalidArgument(f"Unknown curve traits: {traits}. Available: {sorted(TRAITS)}") from exc
