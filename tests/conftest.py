"""
Pytest configuration and shared fixtures.
"""

from datetime import date

import pytest

from calibkit.instruments import DepositRateHelper, SimpleQuote, SwapRateHelper

CURVE_DATE = date(2024, 1, 2)

DEPOSIT_QUOTES = [
    ("1M", 0.0390),
    ("3M", 0.0385),
    ("6M", 0.0380),
]

SWAP_QUOTES = [
    ("2Y", 0.0340),
    ("3Y", 0.0320),
    ("5Y", 0.0300),
    ("7Y", 0.0300),
    ("10Y", 0.0305),
]


@pytest.fixture
def curve_date():
    return CURVE_DATE


@pytest.fixture
def market_quotes():
    """Observable quotes keyed by tenor."""
    return {tenor: SimpleQuote(rate) for tenor, rate in DEPOSIT_QUOTES + SWAP_QUOTES}


@pytest.fixture
def rate_helpers(market_quotes, curve_date):
    """Deposits followed by par swaps, deliberately out of maturity order."""
    deposits = [
        DepositRateHelper(market_quotes[tenor], tenor, curve_date)
        for tenor, _ in DEPOSIT_QUOTES
    ]
    swaps = [
        SwapRateHelper(market_quotes[tenor], tenor, curve_date)
        for tenor, _ in SWAP_QUOTES
    ]
    return swaps[::-1] + deposits


@pytest.fixture
def black_params():
    """At-the-money Black parameters."""
    return {
        "strike": 100.0,
        "forward": 100.0,
        "std_dev": 0.20,
        "discount": 1.0,
        "displacement": 0.0,
    }
