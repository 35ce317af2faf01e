"""Black-model pricing formulas and implied volatility inversion."""

from .black import (
    bachelier_black_formula,
    black_formula,
    black_formula_cash_itm_probability,
    black_formula_std_dev_derivative,
)
from .implied import (
    BlackImpliedStdDevObjective,
    approximate_implied_volatility,
    black_formula_implied_std_dev,
    black_formula_implied_std_dev_approximation,
    implied_volatility,
    price_to_implied_std_dev,
)
from .types import OptionType

__all__ = [
    "OptionType",
    "black_formula",
    "black_formula_std_dev_derivative",
    "black_formula_cash_itm_probability",
    "bachelier_black_formula",
    "BlackImpliedStdDevObjective",
    "black_formula_implied_std_dev",
    "black_formula_implied_std_dev_approximation",
    "approximate_implied_volatility",
    "price_to_implied_std_dev",
    "implied_volatility",
]
