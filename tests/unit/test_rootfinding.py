"""
Unit tests for the safeguarded Newton solver.

This module validates:
1. Convergence with and without an analytic derivative
2. Range and bracketing preconditions
3. The evaluation cap
4. Fallback to bisection on degenerate derivatives
"""

import math

import pytest

from calibkit.errors import ConvergenceError, InvalidArgument
from calibkit.utils.rootfinding import SafeguardedSolver, newton_safe


class Quadratic:
    """x^2 - 2 with its derivative."""

    def __init__(self):
        self.calls = 0

    def __call__(self, x):
        self.calls += 1
        return x * x - 2.0

    def derivative(self, x):
        return 2.0 * x


class FlatDerivative:
    """x^3 - 1 whose reported derivative is always zero."""

    def __call__(self, x):
        return x ** 3 - 1.0

    def derivative(self, x):
        return 0.0


# ===========================
# Convergence
# ===========================


def test_newton_converges_to_sqrt_two():
    """With a derivative the solver should take Newton steps and converge fast."""
    func = Quadratic()
    result = SafeguardedSolver().solve_with_result(func, 1e-12, 1.0, 0.0, 2.0)

    assert result.converged
    assert result.method == "newton"
    assert abs(result.root - math.sqrt(2.0)) < 1e-10
    assert result.iterations <= 10, f"Too many evaluations: {result.iterations}"


def test_plain_callable_uses_bisection():
    """Without a derivative every step is a bisection."""
    result = SafeguardedSolver().solve_with_result(lambda x: math.cos(x) - x, 1e-12, 0.5, 0.0, 1.0)

    assert result.method == "bisect"
    assert abs(result.root - 0.7390851332151607) < 1e-10


def test_zero_derivative_falls_back_to_bisection():
    root = SafeguardedSolver().solve(FlatDerivative(), 1e-12, 0.5, 0.0, 2.0)
    assert abs(root - 1.0) < 1e-10


def test_decreasing_function():
    """Bracket orientation should not depend on the sign of the slope."""
    root = SafeguardedSolver().solve(lambda x: 3.0 - x, 1e-12, 0.0, -10.0, 10.0)
    assert abs(root - 3.0) < 1e-10


def test_root_at_bound_is_returned_exactly():
    result = SafeguardedSolver().solve_with_result(lambda x: x - 1.0, 1e-12, 0.5, 0.0, 1.0)
    assert result.root == 1.0
    assert result.method == "bound"


def test_newton_safe_shortcut():
    root = newton_safe(Quadratic(), 1e-12, 1.5, 1.0, 2.0)
    assert abs(root - math.sqrt(2.0)) < 1e-10


# ===========================
# Preconditions and failures
# ===========================


@pytest.mark.parametrize(
    "accuracy,guess,lower,upper",
    [
        (1e-12, 1.0, 2.0, 0.0),   # inverted range
        (0.0, 1.0, 0.0, 2.0),     # non-positive accuracy
    ],
)
def test_invalid_arguments(accuracy, guess, lower, upper):
    with pytest.raises(InvalidArgument):
        SafeguardedSolver().solve(Quadratic(), accuracy, guess, lower, upper)


@pytest.mark.parametrize("guess", [3.0, -1.0])
def test_guess_outside_range_raises(guess):
    with pytest.raises(ConvergenceError, match="outside range"):
        SafeguardedSolver().solve(lambda x: x - 1.0, 1e-12, guess, 0.0, 2.0)


def test_unbracketed_root_raises():
    with pytest.raises(ConvergenceError, match="not bracketed"):
        SafeguardedSolver().solve(lambda x: x * x + 1.0, 1e-12, 0.0, -1.0, 1.0)


def test_evaluation_cap_raises():
    with pytest.raises(ConvergenceError, match="maximum number of function evaluations"):
        SafeguardedSolver(max_evaluations=5).solve(lambda x: x * x - 2.0, 1e-14, 1.0, 0.0, 2.0)


def test_max_evaluations_must_be_positive():
    with pytest.raises(InvalidArgument):
        SafeguardedSolver(max_evaluations=0)


def test_convergence_error_is_runtime_error():
    """Callers catching RuntimeError should see solver failures."""
    with pytest.raises(RuntimeError):
        SafeguardedSolver().solve(lambda x: 1.0, 1e-12, 0.0, -1.0, 1.0)
