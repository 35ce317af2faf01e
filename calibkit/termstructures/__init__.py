"""
Term structures: lazy recalculation, bootstrap traits and piecewise curves.

Main API:
    PiecewiseYieldCurve - curve bootstrapped from rate helpers
    IterativeBootstrap - sequential segment-by-segment calibration
    LazyObject / Observable - invalidation and recompute-on-read
"""

from .base import YieldTermStructure
from .bootstrap import BootstrapObjective, BootstrapResult, IterativeBootstrap
from .lazy import CalculationState, CurveState, LazyObject, Observable, Observer
from .piecewise import Node, PiecewiseYieldCurve
from .traits import BootstrapTraits, Discount, ZeroYield, get_traits

__all__ = [
    "YieldTermStructure",
    "PiecewiseYieldCurve",
    "Node",
    "IterativeBootstrap",
    "BootstrapObjective",
    "BootstrapResult",
    "CalculationState",
    "CurveState",
    "LazyObject",
    "Observable",
    "Observer",
    "BootstrapTraits",
    "Discount",
    "ZeroYield",
    "get_traits",
]
