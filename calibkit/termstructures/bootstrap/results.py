"""Result records produced by the curve bootstrap."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class BootstrapResult:
    """Single node solved during the bootstrap."""

    instrument: str
    maturity_date: date
    time: float
    value: float
    discount_factor: float
    zero_rate: float
    iterations: int
