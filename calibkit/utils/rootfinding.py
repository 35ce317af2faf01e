"""Root-finding utilities (safeguarded Newton with bisection fallback)."""

from __future__ import annotations

import logging
import math
import sys
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, runtime_checkable

from calibkit.config import DEFAULT_MAX_EVALUATIONS
from calibkit.errors import ConvergenceError, require

logger = logging.getLogger(__name__)

_EPSILON = sys.float_info.epsilon


@runtime_checkable
class ObjectiveFunction(Protocol):
    """Residual function whose root is sought.

    Implementations may also expose ``derivative(x)``; the solver falls back
    to bisection steps when it is absent.
    """

    def __call__(self, x: float) -> float:
        ...


@dataclass
class RootResult:
    root: float
    iterations: int
    converged: bool
    method: str


def _derivative_of(func) -> Optional[Callable[[float], float]]:
    derivative = getattr(func, "derivative", None)
    return derivative if callable(derivative) else None


class SafeguardedSolver:
    """Newton-safe solver: Newton steps kept inside a shrinking bracket.

    Each iteration takes a Newton step when the step stays inside the
    current bracket and reduces the bracket at least as fast as bisection;
    otherwise it bisects. The residual sign at each new point shrinks the
    bracket, so the search always terminates within ``max_evaluations``.
    """

    def __init__(self, max_evaluations: int = DEFAULT_MAX_EVALUATIONS):
        require(max_evaluations > 0,
                f"max_evaluations ({max_evaluations}) must be positive")
        self.max_evaluations = max_evaluations

    def solve(
        self,
        func: ObjectiveFunction,
        accuracy: float,
        guess: float,
        lower_bound: float,
        upper_bound: float,
    ) -> float:
        """Return ``x`` in ``[lower_bound, upper_bound]`` with ``func(x) ~ 0``."""
        return self.solve_with_result(func, accuracy, guess, lower_bound, upper_bound).root

    def solve_with_result(
        self,
        func: ObjectiveFunction,
        accuracy: float,
        guess: float,
        lower_bound: float,
        upper_bound: float,
    ) -> RootResult:
        require(accuracy > 0.0, f"accuracy ({accuracy}) must be positive")
        require(lower_bound < upper_bound,
                f"invalid range: lower bound ({lower_bound}) >= upper bound ({upper_bound})")
        if not lower_bound <= guess <= upper_bound:
            raise ConvergenceError(
                f"guess ({guess}) outside range [{lower_bound}, {upper_bound}]"
            )

        f_lower = func(lower_bound)
        if abs(f_lower) < accuracy:
            return RootResult(lower_bound, 1, True, "bound")
        f_upper = func(upper_bound)
        if abs(f_upper) < accuracy:
            return RootResult(upper_bound, 2, True, "bound")
        evaluations = 2

        if f_lower * f_upper > 0.0:
            raise ConvergenceError(
                f"root not bracketed: f[{lower_bound}, {upper_bound}] -> [{f_lower}, {f_upper}]"
            )

        # Orient the search so that f(x_low) < 0 < f(x_high).
        if f_lower < 0.0:
            x_low, x_high = lower_bound, upper_bound
        else:
            x_low, x_high = upper_bound, lower_bound

        derivative = _derivative_of(func)
        dx_old = upper_bound - lower_bound
        dx = dx_old

        root = guess
        value = func(root)
        slope = derivative(root) if derivative is not None else 0.0
        evaluations += 1
        method = "bisect" if derivative is None else "newton"

        while evaluations <= self.max_evaluations:
            logger.debug(
                "Newton-safe eval %s: x=%s value=%s deriv=%s bracket=[%s, %s]",
                evaluations, root, value, slope, x_low, x_high,
            )
            if abs(value) < accuracy:
                return RootResult(root, evaluations, True, method)

            if self._bisection_required(root, value, slope, x_low, x_high, dx_old):
                dx_old = dx
                dx = 0.5 * (x_high - x_low)
                root = x_low + dx
            else:
                dx_old = dx
                dx = value / slope
                root -= dx

            if abs(dx) < accuracy or abs(x_high - x_low) < 4.0 * _EPSILON * max(1.0, abs(root)):
                return RootResult(root, evaluations, True, method)

            value = func(root)
            slope = derivative(root) if derivative is not None else 0.0
            evaluations += 1

            if value < 0.0:
                x_low = root
            else:
                x_high = root

        raise ConvergenceError(
            f"maximum number of function evaluations ({self.max_evaluations}) exceeded; "
            f"last x={root}, f(x)={value}"
        )

    @staticmethod
    def _bisection_required(
        root: float,
        value: float,
        slope: float,
        x_low: float,
        x_high: float,
        dx_old: float,
    ) -> bool:
        if slope == 0.0 or not math.isfinite(slope):
            return True
        # Newton step would leave the bracket.
        if ((root - x_high) * slope - value) * ((root - x_low) * slope - value) > 0.0:
            return True
        # Newton step is not shrinking fast enough.
        return abs(2.0 * value) > abs(dx_old * slope)


def newton_safe(
    func: ObjectiveFunction,
    accuracy: float,
    guess: float,
    lower_bound: float,
    upper_bound: float,
    *,
    max_evaluations: int = DEFAULT_MAX_EVALUATIONS,
) -> float:
    """Functional shortcut for :meth:`SafeguardedSolver.solve`."""
    solver = SafeguardedSolver(max_evaluations)
    return solver.solve(func, accuracy, guess, lower_bound, upper_bound)
