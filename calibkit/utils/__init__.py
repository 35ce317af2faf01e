"""Numerical utilities: root finding and normal distribution helpers."""

from .distributions import normal_cdf, normal_pdf
from .rootfinding import ObjectiveFunction, RootResult, SafeguardedSolver, newton_safe

__all__ = [
    "ObjectiveFunction",
    "RootResult",
    "SafeguardedSolver",
    "newton_safe",
    "normal_cdf",
    "normal_pdf",
]
