"""Configuration for curve bootstrapping."""

from __future__ import annotations

from dataclasses import dataclass

from calibkit.errors import require

DEFAULT_MAX_EVALUATIONS = 100
DEFAULT_CURVE_ACCURACY = 1.0e-12


@dataclass(frozen=True)
class BootstrapConfig:
    """Configuration for the piecewise curve bootstrap."""

    interpolation_method: str = "LOG_LINEAR"
    traits: str = "DISCOUNT"
    day_count_convention: str = "ACT/365F"
    accuracy: float = DEFAULT_CURVE_ACCURACY
    max_evaluations: int = DEFAULT_MAX_EVALUATIONS
    allow_extrapolation: bool = False
    verbose: bool = False

    def __post_init__(self):
        require(self.max_evaluations > 0,
                f"max_evaluations ({self.max_evaluations}) must be positive")
        require(self.accuracy > 0.0,
                f"accuracy ({self.accuracy}) must be positive")
