"""
Base class for curve interpolation methods.
"""
from abc import ABC, abstractmethod
from typing import Sequence

import numpy as np

from calibkit.errors import require


class Interpolator(ABC):
    """Interpolates a function known at strictly increasing node times.

    Every implementation must return exactly ``values[i]`` at ``times[i]``;
    the bootstrap relies on this to keep already calibrated nodes intact.
    """

    def __init__(self, times: Sequence[float], values: Sequence[float]):
        """
        Initialize interpolator.

        Args:
            times: Node times in years, strictly increasing
            values: Node values (discount factors, zero rates, ...)
        """
        require(len(times) == len(values), "Times and values must have same length")
        require(len(times) >= 2, "Need at least 2 points for interpolation")

        self.times = np.asarray(times, dtype=float)
        self.values = np.asarray(values, dtype=float)

        require(bool(np.all(np.diff(self.times) > 0.0)),
                f"Node times must be strictly increasing: {list(times)}")

    @abstractmethod
    def interpolate(self, t: float) -> float:
        """Interpolate value at time t."""

    def __call__(self, t: float) -> float:
        return self.interpolate(t)

    def interpolate_many(self, times: Sequence[float]) -> list:
        """Interpolate values at multiple times."""
        return [self.interpolate(t) for t in times]

    def _locate(self, t: float) -> int:
        """Index ``i`` of the segment [times[i], times[i+1]] used for ``t``.

        Times outside the node range map onto the first or last segment.
        """
        i = int(np.searchsorted(self.times, t, side="right")) - 1
        return min(max(i, 0), len(self.times) - 2)
