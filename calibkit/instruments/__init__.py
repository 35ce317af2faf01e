"""
Calibrating instruments and market quotes.

Main API:
    SimpleQuote - observable market quote
    DepositRateHelper / FraRateHelper / SwapRateHelper / DiscountFactorHelper
"""

from .helpers import (
    DepositRateHelper,
    DiscountFactorHelper,
    FraRateHelper,
    RateHelper,
    SwapRateHelper,
    create_helper,
    quote_errors,
)
from .quotes import SimpleQuote

__all__ = [
    "SimpleQuote",
    "RateHelper",
    "DepositRateHelper",
    "FraRateHelper",
    "SwapRateHelper",
    "DiscountFactorHelper",
    "create_helper",
    "quote_errors",
]
