"""
Base class for yield term structures.
"""

import math
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Union

from calibkit.conventions.daycount import DayCountConvention, get_day_count_convention
from calibkit.conventions.dates import to_date
from calibkit.errors import require

TimeLike = Union[date, datetime, float, int]


class YieldTermStructure(ABC):
    """Discount curve anchored at a reference date.

    Dates are mapped to times with the curve's day count; every accessor
    accepts either a date or a time in years.
    """

    def __init__(
        self,
        reference_date: Union[date, datetime, str],
        day_count: Union[str, DayCountConvention] = "ACT/365F",
        allow_extrapolation: bool = False,
        name: str = "",
    ):
        """
        Initialize term structure.

        Args:
            reference_date: Curve reference/valuation date
            day_count: Day count used to convert dates to curve times
            allow_extrapolation: Whether reads beyond max_time() are allowed
            name: Optional curve name for identification
        """
        self.reference_date = to_date(reference_date)
        self.day_count = get_day_count_convention(day_count)
        self.allow_extrapolation = allow_extrapolation
        self.name = name

    def time_from_reference(self, dt: TimeLike) -> float:
        """Convert a date to the curve's time axis (floats pass through)."""
        if isinstance(dt, (int, float)):
            return float(dt)
        return self.day_count.year_fraction(self.reference_date, to_date(dt))

    @abstractmethod
    def max_time(self) -> float:
        """Latest time for which the curve can return values."""

    @abstractmethod
    def discount_impl(self, t: float) -> float:
        """Discount factor at time t, without range checks."""

    def _check_range(self, t: float) -> None:
        require(t >= 0.0, f"negative time ({t}) given")
        require(
            self.allow_extrapolation or t <= self.max_time(),
            f"time ({t}) is past max curve time ({self.max_time()})",
        )

    def discount(self, t: TimeLike) -> float:
        """Discount factor at a date or time."""
        time_frac = self.time_from_reference(t)
        self._check_range(time_frac)
        return self.discount_impl(time_frac)

    def zero_rate(self, t: TimeLike) -> float:
        """Continuously compounded zero rate at a date or time."""
        time_frac = self.time_from_reference(t)
        if time_frac == 0.0:
            # instantaneous rate over the first day
            time_frac = 1.0 / 365.0
        df_val = self.discount(time_frac)
        require(df_val > 0.0, f"Non-positive discount factor: {df_val}")
        return -math.log(df_val) / time_frac

    def forward_rate(self, t1: TimeLike, t2: TimeLike) -> float:
        """Continuously compounded forward rate between two dates or times."""
        time1 = self.time_from_reference(t1)
        time2 = self.time_from_reference(t2)
        require(time2 > time1, f"Forward period must be positive: [{time1}, {time2}]")
        return math.log(self.discount(time1) / self.discount(time2)) / (time2 - time1)

    def simple_forward_rate(
        self,
        start: Union[date, datetime],
        end: Union[date, datetime],
        day_count: Union[str, DayCountConvention] = "ACT/360",
    ) -> float:
        """Simply compounded forward rate between two dates."""
        alpha = get_day_count_convention(day_count).year_fraction(to_date(start), to_date(end))
        require(alpha > 0, "Forward period must be positive")
        return (self.discount(start) / self.discount(end) - 1.0) / alpha

    def __str__(self) -> str:
        return (
            f"{self.__class__.__name__}({self.name})"
            if self.name
            else self.__class__.__name__
        )
