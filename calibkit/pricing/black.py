"""
Black (1976) and Bachelier closed-form prices.

Prices are forward prices multiplied by ``discount``; ``std_dev`` is the
cumulative volatility ``sigma * sqrt(T)``. The shifted-lognormal variant
adds ``displacement`` to both strike and forward.
"""

import math
import sys

from calibkit.errors import ensure, require
from calibkit.utils.distributions import normal_cdf, normal_pdf

from .types import OptionType, OptionTypeLike

_EPSILON = sys.float_info.epsilon


def _check_black_inputs(strike: float, forward: float, discount: float, displacement: float) -> None:
    require(strike >= 0.0, f"strike ({strike}) must be non-negative")
    require(forward > 0.0, f"forward ({forward}) must be positive")
    require(discount > 0.0, f"positive discount required: {discount} not allowed")
    require(displacement >= 0.0, f"displacement ({displacement}) must be non-negative")


def black_formula(
    option_type: OptionTypeLike,
    strike: float,
    forward: float,
    std_dev: float,
    discount: float = 1.0,
    displacement: float = 0.0,
) -> float:
    """Discounted Black price of a vanilla option.

    Examples:
        >>> round(black_formula("call", 100.0, 100.0, 0.2), 6)
        7.965567
    """
    sign = OptionType.parse(option_type)
    _check_black_inputs(strike, forward, discount, displacement)
    require(std_dev >= 0.0, f"stdDev ({std_dev}) must be non-negative")

    forward = forward + displacement
    strike = strike + displacement
    if std_dev == 0.0:
        return max((forward - strike) * sign, 0.0) * discount
    if strike == 0.0:
        return forward * discount if sign is OptionType.CALL else 0.0

    d1 = math.log(forward / strike) / std_dev + 0.5 * std_dev
    d2 = d1 - std_dev
    result = discount * sign * (forward * normal_cdf(sign * d1) - strike * normal_cdf(sign * d2))
    # Cancellation between the two terms leaves round-off of order eps * forward.
    tolerance = 16.0 * _EPSILON * max(forward, strike) * discount
    ensure(
        result >= -tolerance,
        f"negative value ({result}) for a {std_dev} stdDev {sign.name.lower()} option "
        f"struck at {strike} on a {forward} forward",
    )
    return max(result, 0.0)


def black_formula_std_dev_derivative(
    strike: float,
    forward: float,
    std_dev: float,
    discount: float = 1.0,
    displacement: float = 0.0,
) -> float:
    """Sensitivity of the Black price to ``std_dev`` (identical for calls and puts)."""
    _check_black_inputs(strike, forward, discount, displacement)
    require(std_dev >= 0.0, f"stdDev ({std_dev}) must be non-negative")

    forward = forward + displacement
    strike = strike + displacement
    if std_dev == 0.0 or strike == 0.0:
        return 0.0
    d1 = math.log(forward / strike) / std_dev + 0.5 * std_dev
    return discount * forward * normal_pdf(d1)


def black_formula_cash_itm_probability(
    option_type: OptionTypeLike,
    strike: float,
    forward: float,
    std_dev: float,
    displacement: float = 0.0,
) -> float:
    """Probability that the option ends in the money, N(sign * d2)."""
    sign = OptionType.parse(option_type)
    if std_dev == 0.0:
        return 1.0 if forward * sign > strike * sign else 0.0
    if strike + displacement == 0.0:
        return 1.0 if sign is OptionType.CALL else 0.0
    d1 = math.log((forward + displacement) / (strike + displacement)) / std_dev + 0.5 * std_dev
    d2 = d1 - std_dev
    return normal_cdf(sign * d2)


def bachelier_black_formula(
    option_type: OptionTypeLike,
    strike: float,
    forward: float,
    std_dev: float,
    discount: float = 1.0,
) -> float:
    """Discounted price under the normal (Bachelier) model; ``std_dev`` is absolute."""
    sign = OptionType.parse(option_type)
    require(std_dev >= 0.0, f"stdDev ({std_dev}) must be non-negative")
    require(discount > 0.0, f"positive discount required: {discount} not allowed")

    d = (forward - strike) * sign
    if std_dev == 0.0:
        return discount * max(d, 0.0)
    h = d / std_dev
    result = discount * (std_dev * normal_pdf(h) + d * normal_cdf(h))
    ensure(
        result >= 0.0,
        f"negative value ({result}) for a {std_dev} stdDev {sign.name.lower()} option "
        f"struck at {strike} on a {forward} forward (Bachelier model)",
    )
    return result
