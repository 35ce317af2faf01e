"""Sequential bootstrap of piecewise curves."""

from .engine import IterativeBootstrap
from .objective import BootstrapObjective
from .results import BootstrapResult

__all__ = [
    "IterativeBootstrap",
    "BootstrapObjective",
    "BootstrapResult",
]
