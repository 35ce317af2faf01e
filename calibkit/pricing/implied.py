"""
Implied standard deviation from Black prices.

The inversion runs the safeguarded Newton solver on
:class:`BlackImpliedStdDevObjective`, seeded by the closed-form
Brenner-Subrahmanyam / Corrado-Miller approximation.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from calibkit.config import DEFAULT_MAX_EVALUATIONS
from calibkit.errors import ensure, require
from calibkit.utils.distributions import normal_cdf, normal_pdf
from calibkit.utils.rootfinding import SafeguardedSolver

from .types import OptionType, OptionTypeLike

logger = logging.getLogger(__name__)

MIN_STD_DEV = 0.0
MAX_STD_DEV = 3.0
DEFAULT_IMPLIED_ACCURACY = 1.0e-6

# Relative slack allowed when checking a price against its no-arbitrage bounds.
_BOUNDS_TOLERANCE = 1.0e-12


class BlackImpliedStdDevObjective:
    """Undiscounted Black price under a trial std-dev minus the target price.

    Inputs are validated on construction, so an instance is always a
    well-posed objective for the solver.
    """

    def __init__(
        self,
        option_type: OptionTypeLike,
        strike: float,
        forward: float,
        undiscounted_price: float,
        displacement: float = 0.0,
    ):
        require(strike >= 0.0, f"strike ({strike}) must be non-negative")
        require(forward > 0.0, f"forward ({forward}) must be positive")
        require(undiscounted_price >= 0.0,
                f"undiscounted Black price ({undiscounted_price}) must be non-negative")
        require(displacement >= 0.0, f"displacement ({displacement}) must be non-negative")

        self.option_type = OptionType.parse(option_type)
        sign = int(self.option_type)
        self.undiscounted_price = undiscounted_price
        self._half_sign = 0.5 * sign
        self._forward = forward + displacement
        self._strike = strike + displacement
        self._signed_forward = sign * self._forward
        self._signed_strike = sign * self._strike
        if self._strike > 0.0:
            self._signed_moneyness = sign * math.log(self._forward / self._strike)
        else:
            self._signed_moneyness = sign * math.inf

    def __call__(self, std_dev: float) -> float:
        if std_dev == 0.0:
            return max(self._signed_forward - self._signed_strike, 0.0) - self.undiscounted_price
        temp = self._half_sign * std_dev
        d = self._signed_moneyness / std_dev
        signed_d1 = d + temp
        signed_d2 = d - temp
        result = (self._signed_forward * normal_cdf(signed_d1)
                  - self._signed_strike * normal_cdf(signed_d2))
        # round-off can push deep out-of-the-money values slightly below zero
        return max(0.0, result) - self.undiscounted_price

    evaluate = __call__

    def derivative(self, std_dev: float) -> float:
        """Vega with respect to std-dev: ``forward * phi(d1)``."""
        if std_dev == 0.0 or self._strike == 0.0:
            return 0.0
        d1 = math.log(self._forward / self._strike) / std_dev + 0.5 * std_dev
        return self._forward * normal_pdf(d1)


def black_formula_implied_std_dev_approximation(
    option_type: OptionTypeLike,
    strike: float,
    forward: float,
    black_price: float,
    discount: float = 1.0,
    displacement: float = 0.0,
) -> float:
    """Closed-form implied std-dev, accurate enough to seed the solver.

    At the money this is the Brenner-Subrahmanyam (1988) / Feinstein (1988)
    formula; elsewhere the Corrado-Miller (1996) extended moneyness formula.
    When the Corrado-Miller discriminant is negative it is set to zero.
    """
    sign = OptionType.parse(option_type)
    require(strike >= 0.0, f"strike ({strike}) must be non-negative")
    require(forward > 0.0, f"forward ({forward}) must be positive")
    require(black_price >= 0.0, f"blackPrice ({black_price}) must be non-negative")
    require(discount > 0.0, f"positive discount required: {discount} not allowed")
    require(displacement >= 0.0, f"displacement ({displacement}) must be non-negative")

    forward = forward + displacement
    strike = strike + displacement
    if strike == forward:
        std_dev = black_price / discount * math.sqrt(2.0 * math.pi) / forward
    else:
        moneyness_delta = sign * (forward - strike)
        temp = black_price / discount - 0.5 * moneyness_delta
        discriminant = temp * temp - moneyness_delta * moneyness_delta / math.pi
        if discriminant < 0.0:
            logger.warning(
                "Corrado-Miller approximation breaks down (discriminant=%s) for strike=%s "
                "forward=%s price=%s; seed quality is reduced",
                discriminant, strike, forward, black_price,
            )
            discriminant = 0.0
        temp += math.sqrt(discriminant)
        std_dev = temp * math.sqrt(2.0 * math.pi) / (forward + strike)

    ensure(math.isfinite(std_dev) and std_dev >= 0.0,
           f"stdDev ({std_dev}) must be finite and non-negative")
    return std_dev


approximate_implied_volatility = black_formula_implied_std_dev_approximation


def _check_price_bounds(objective: BlackImpliedStdDevObjective) -> None:
    """Reject prices outside [intrinsic, upper bound] before solving."""
    price = objective.undiscounted_price
    intrinsic = objective(0.0) + price
    if objective.option_type is OptionType.CALL:
        upper = objective._forward
    else:
        upper = objective._strike
    slack = _BOUNDS_TOLERANCE * max(upper, 1.0)
    require(price >= intrinsic - slack,
            f"undiscounted price ({price}) below intrinsic value ({intrinsic})")
    require(price <= upper + slack,
            f"undiscounted price ({price}) above upper bound ({upper})")


def black_formula_implied_std_dev(
    option_type: OptionTypeLike,
    strike: float,
    forward: float,
    black_price: float,
    discount: float = 1.0,
    guess: Optional[float] = None,
    accuracy: float = DEFAULT_IMPLIED_ACCURACY,
    displacement: float = 0.0,
    max_evaluations: int = DEFAULT_MAX_EVALUATIONS,
) -> float:
    """Std-dev reproducing ``black_price`` under the Black formula.

    Args:
        option_type: OptionType, +1/-1 or 'call'/'put'
        strike: Option strike (before displacement)
        forward: Underlying forward (before displacement)
        black_price: Discounted option price
        discount: Discount factor to the payment date
        guess: Starting std-dev; the closed-form approximation when None
        accuracy: Solver accuracy on the undiscounted price
        displacement: Shift for the shifted-lognormal model
        max_evaluations: Evaluation cap for the solver

    Returns:
        Implied std-dev in [0, 3]

    Raises:
        InvalidArgument: On invalid inputs or a price outside arbitrage bounds
        ConvergenceError: If the solver does not converge or the guess is above 3
    """
    require(black_price >= 0.0, f"blackPrice ({black_price}) must be non-negative")
    require(discount > 0.0, f"positive discount required: {discount} not allowed")

    objective = BlackImpliedStdDevObjective(
        option_type, strike, forward, black_price / discount, displacement
    )
    _check_price_bounds(objective)

    if guess is None:
        guess = black_formula_implied_std_dev_approximation(
            option_type, strike, forward, black_price, discount, displacement
        )
        guess = min(max(guess, MIN_STD_DEV), MAX_STD_DEV)
    else:
        require(guess >= 0.0, f"stdDev guess ({guess}) must be non-negative")

    solver = SafeguardedSolver(max_evaluations)
    std_dev = solver.solve(objective, accuracy, guess, MIN_STD_DEV, MAX_STD_DEV)
    ensure(std_dev >= 0.0, f"stdDev ({std_dev}) must be non-negative")
    return std_dev


price_to_implied_std_dev = black_formula_implied_std_dev


def implied_volatility(
    option_type: OptionTypeLike,
    strike: float,
    forward: float,
    black_price: float,
    time_to_expiry: float,
    discount: float = 1.0,
    guess: Optional[float] = None,
    accuracy: float = DEFAULT_IMPLIED_ACCURACY,
    displacement: float = 0.0,
) -> float:
    """Annualised Black volatility, ``std_dev / sqrt(time_to_expiry)``."""
    require(time_to_expiry > 0.0, f"time to expiry ({time_to_expiry}) must be positive")
    std_guess = guess * math.sqrt(time_to_expiry) if guess is not None else None
    std_dev = black_formula_implied_std_dev(
        option_type, strike, forward, black_price, discount,
        guess=std_guess, accuracy=accuracy, displacement=displacement,
    )
    return std_dev / math.sqrt(time_to_expiry)
