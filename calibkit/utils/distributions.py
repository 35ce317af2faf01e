"""Standard normal distribution with tail clamping."""

import math

from scipy.stats import norm

# Beyond +/-8 standard deviations the CDF is 0 or 1 in double precision.
MAX_STANDARD_DEVIATIONS = 8.0

_INV_SQRT_2PI = 1.0 / math.sqrt(2.0 * math.pi)


def normal_cdf(x: float) -> float:
    """Cumulative standard normal distribution."""
    if x > MAX_STANDARD_DEVIATIONS:
        return 1.0
    if x < -MAX_STANDARD_DEVIATIONS:
        return 0.0
    return float(norm.cdf(x))


def normal_pdf(x: float) -> float:
    """Standard normal density, i.e. the derivative of :func:`normal_cdf`."""
    if abs(x) > 38.0:
        return 0.0
    return _INV_SQRT_2PI * math.exp(-0.5 * x * x)
