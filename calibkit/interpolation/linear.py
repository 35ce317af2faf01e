"""
Linear, log-linear and backward-flat interpolation.
"""
import math

import numpy as np

from calibkit.errors import require

from .base import Interpolator


class LinearInterpolator(Interpolator):
    """Linear interpolation on node values.

    Outside the node range the first/last segment is extended.
    """

    def interpolate(self, t: float) -> float:
        i = self._locate(t)
        t1, t2 = self.times[i], self.times[i + 1]
        v1, v2 = self.values[i], self.values[i + 1]
        if t == t2:
            return float(v2)
        weight = (t - t1) / (t2 - t1)
        return float(v1 + weight * (v2 - v1))


class LogLinearInterpolator(Interpolator):
    """Linear interpolation on the logarithm of node values.

    On discount factors this gives piecewise constant forward rates, and
    extending the last segment is flat-forward extrapolation.
    """

    def __init__(self, times, values):
        super().__init__(times, values)
        require(bool(np.all(self.values > 0.0)),
                f"Log-linear interpolation requires positive values: {list(values)}")
        self.log_values = np.log(self.values)

    def interpolate(self, t: float) -> float:
        i = self._locate(t)
        if t == self.times[i]:
            return float(self.values[i])
        if t == self.times[i + 1]:
            return float(self.values[i + 1])
        t1, t2 = self.times[i], self.times[i + 1]
        weight = (t - t1) / (t2 - t1)
        return math.exp(self.log_values[i] + weight * (self.log_values[i + 1] - self.log_values[i]))


class BackwardFlatInterpolator(Interpolator):
    """Piecewise constant interpolation taking the value of the right node.

    On (times[i], times[i+1]] the value is values[i+1]; flat outside the
    node range.
    """

    def interpolate(self, t: float) -> float:
        if t <= self.times[0]:
            return float(self.values[0])
        if t >= self.times[-1]:
            return float(self.values[-1])
        i = int(np.searchsorted(self.times, t, side="left"))
        return float(self.values[i])
