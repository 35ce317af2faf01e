"""Calibration engine: safeguarded root finding, lazy piecewise curve
bootstrapping and Black implied volatility.

Key modules:
- utils: safeguarded Newton solver and normal distribution
- termstructures: lazy recalculation, traits, piecewise curves and bootstrap
- instruments: observable quotes and rate helpers
- pricing: Black formulas and implied std-dev inversion
- interpolation: interpolation strategies
- conventions: day counts, calendars and tenors
"""

from calibkit.config import BootstrapConfig
from calibkit.errors import (
    CalibrationError,
    ConvergenceError,
    DuplicateMaturityError,
    InvalidArgument,
    NumericalInconsistency,
)
from calibkit.instruments import (
    DepositRateHelper,
    DiscountFactorHelper,
    FraRateHelper,
    SimpleQuote,
    SwapRateHelper,
)
from calibkit.pricing import (
    OptionType,
    approximate_implied_volatility,
    black_formula,
    black_formula_implied_std_dev,
    black_formula_implied_std_dev_approximation,
    implied_volatility,
)
from calibkit.termstructures import CalculationState, IterativeBootstrap, Node, PiecewiseYieldCurve
from calibkit.utils import SafeguardedSolver

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "BootstrapConfig",
    "CalibrationError",
    "ConvergenceError",
    "DuplicateMaturityError",
    "InvalidArgument",
    "NumericalInconsistency",
    "SafeguardedSolver",
    "PiecewiseYieldCurve",
    "IterativeBootstrap",
    "Node",
    "CalculationState",
    "SimpleQuote",
    "DepositRateHelper",
    "FraRateHelper",
    "SwapRateHelper",
    "DiscountFactorHelper",
    "OptionType",
    "black_formula",
    "black_formula_implied_std_dev",
    "black_formula_implied_std_dev_approximation",
    "approximate_implied_volatility",
    "implied_volatility",
]
