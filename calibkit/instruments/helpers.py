"""Calibrating instruments (rate helpers) used by the curve bootstrap."""

from __future__ import annotations

import math
from abc import abstractmethod
from datetime import date
from typing import List, Optional, Union

from calibkit.conventions.calendars import Calendar, get_calendar
from calibkit.conventions.daycount import DayCountConvention, get_day_count_convention
from calibkit.conventions.dates import BusinessDayAdjustment, add_tenor, parse_tenor, to_date
from calibkit.errors import InvalidArgument, require
from calibkit.termstructures.lazy import Observable, Observer

from .quotes import SimpleQuote

QuoteLike = Union[SimpleQuote, float]


class RateHelper(Observable, Observer):
    """Instrument that the bootstrap reprices on a trial curve.

    A helper observes its quote and forwards quote changes to the curves
    observing it. It never changes the curve; it only reads discount
    factors from the term structure it is bound to.
    """

    def __init__(self, quote: QuoteLike):
        Observable.__init__(self)
        self._quote = quote if isinstance(quote, SimpleQuote) else SimpleQuote(quote)
        self._quote.register_observer(self)
        self._term_structure = None

    def update(self) -> None:
        self.notify_observers()

    @property
    def quote(self) -> SimpleQuote:
        return self._quote

    def set_term_structure(self, term_structure) -> None:
        self._term_structure = term_structure

    @property
    def term_structure(self):
        if self._term_structure is None:
            raise InvalidArgument(f"{self} is not bound to a term structure")
        return self._term_structure

    @property
    @abstractmethod
    def maturity_date(self) -> date:
        """Last date the instrument depends on."""

    def maturity_time(self) -> float:
        """Maturity on the time axis of the bound term structure."""
        return self.term_structure.time_from_reference(self.maturity_date)

    @abstractmethod
    def implied_quote(self) -> float:
        """Quote implied by the bound term structure."""

    def quote_error(self) -> float:
        """Market quote minus implied quote; zero once calibrated."""
        require(self._quote.is_valid(), f"invalid quote for {self}")
        return self._quote.value - self.implied_quote()


class DepositRateHelper(RateHelper):
    """Money-market deposit quoted as a simple rate.

    Implied rate: (DF(start) / DF(maturity) - 1) / accrual.
    """

    def __init__(
        self,
        rate: QuoteLike,
        tenor: str,
        reference_date: Union[date, str],
        settlement_days: int = 2,
        calendar: Union[str, Calendar] = "TARGET",
        day_count: Union[str, DayCountConvention] = "ACT/360",
        adjustment: BusinessDayAdjustment = BusinessDayAdjustment.MODIFIED_FOLLOWING,
    ):
        super().__init__(rate)
        self.tenor = tenor.upper().strip()
        parse_tenor(self.tenor)
        self.calendar = get_calendar(calendar)
        self.day_count = get_day_count_convention(day_count)

        self.start_date = self.calendar.add_business_days(to_date(reference_date), settlement_days)
        self.end_date = add_tenor(self.start_date, self.tenor, self.calendar, adjustment)
        self.accrual = self.day_count.year_fraction(self.start_date, self.end_date)
        require(self.accrual > 0.0, f"empty accrual period for deposit {self.tenor}")

    @property
    def maturity_date(self) -> date:
        return self.end_date

    def implied_quote(self) -> float:
        ts = self.term_structure
        return (ts.discount(self.start_date) / ts.discount(self.end_date) - 1.0) / self.accrual

    def __str__(self) -> str:
        return f"Deposit({self.tenor})"


class FraRateHelper(RateHelper):
    """Forward rate agreement between two month offsets from spot, e.g. 3x6."""

    def __init__(
        self,
        rate: QuoteLike,
        months_to_start: int,
        months_to_end: int,
        reference_date: Union[date, str],
        settlement_days: int = 2,
        calendar: Union[str, Calendar] = "TARGET",
        day_count: Union[str, DayCountConvention] = "ACT/360",
        adjustment: BusinessDayAdjustment = BusinessDayAdjustment.MODIFIED_FOLLOWING,
    ):
        super().__init__(rate)
        require(0 <= months_to_start < months_to_end,
                f"invalid FRA period {months_to_start}x{months_to_end}")
        self.months_to_start = months_to_start
        self.months_to_end = months_to_end
        self.calendar = get_calendar(calendar)
        self.day_count = get_day_count_convention(day_count)

        spot = self.calendar.add_business_days(to_date(reference_date), settlement_days)
        self.start_date = add_tenor(spot, f"{months_to_start}M", self.calendar, adjustment)
        self.end_date = add_tenor(spot, f"{months_to_end}M", self.calendar, adjustment)
        self.accrual = self.day_count.year_fraction(self.start_date, self.end_date)

    @property
    def maturity_date(self) -> date:
        return self.end_date

    def implied_quote(self) -> float:
        ts = self.term_structure
        return (ts.discount(self.start_date) / ts.discount(self.end_date) - 1.0) / self.accrual

    def __str__(self) -> str:
        return f"FRA({self.months_to_start}x{self.months_to_end})"


class SwapRateHelper(RateHelper):
    """Spot-starting par swap quoted as its fixed rate.

    Single-curve valuation: the floating leg is worth DF(start) - DF(end),
    so the par rate is that amount over the fixed-leg annuity.
    """

    def __init__(
        self,
        rate: QuoteLike,
        tenor: str,
        reference_date: Union[date, str],
        settlement_days: int = 2,
        calendar: Union[str, Calendar] = "TARGET",
        fixed_frequency_months: int = 12,
        fixed_day_count: Union[str, DayCountConvention] = "30E/360",
        adjustment: BusinessDayAdjustment = BusinessDayAdjustment.MODIFIED_FOLLOWING,
    ):
        super().__init__(rate)
        self.tenor = tenor.upper().strip()
        length, unit = parse_tenor(self.tenor)
        require(unit in ("M", "Y"), f"swap tenor must be in months or years: {tenor}")
        require(fixed_frequency_months > 0,
                f"fixed frequency ({fixed_frequency_months} months) must be positive")
        self.calendar = get_calendar(calendar)
        self.fixed_day_count = get_day_count_convention(fixed_day_count)
        self.fixed_frequency_months = fixed_frequency_months
        self.adjustment = adjustment

        self.start_date = self.calendar.add_business_days(to_date(reference_date), settlement_days)
        self.end_date = add_tenor(self.start_date, self.tenor, self.calendar, adjustment)
        self.fixed_schedule = self._build_fixed_schedule(length * (12 if unit == "Y" else 1))

    def _build_fixed_schedule(self, total_months: int) -> List[date]:
        """Payment dates rolled forward from the start date; the last one is the maturity."""
        dates: List[date] = [self.start_date]
        months = self.fixed_frequency_months
        while months < total_months:
            dates.append(add_tenor(self.start_date, f"{months}M", self.calendar, self.adjustment))
            months += self.fixed_frequency_months
        dates.append(self.end_date)
        return dates

    @property
    def maturity_date(self) -> date:
        return self.end_date

    def annuity(self) -> float:
        ts = self.term_structure
        contributions = [
            self.fixed_day_count.year_fraction(start, end) * ts.discount(end)
            for start, end in zip(self.fixed_schedule, self.fixed_schedule[1:])
        ]
        return math.fsum(contributions)

    def implied_quote(self) -> float:
        ts = self.term_structure
        floating_pv = ts.discount(self.start_date) - ts.discount(self.end_date)
        return floating_pv / self.annuity()

    def __str__(self) -> str:
        return f"Swap({self.tenor})"


class DiscountFactorHelper(RateHelper):
    """Zero-coupon price quote: the discount factor to a given date."""

    def __init__(self, discount_factor: QuoteLike, maturity: Union[date, str]):
        super().__init__(discount_factor)
        self._maturity = to_date(maturity)

    @property
    def maturity_date(self) -> date:
        return self._maturity

    def implied_quote(self) -> float:
        return self.term_structure.discount(self._maturity)

    def __str__(self) -> str:
        return f"DiscountFactor({self._maturity})"


def create_helper(
    kind: str,
    rate: QuoteLike,
    tenor: str,
    reference_date: Union[date, str],
    **kwargs,
) -> RateHelper:
    """Create a helper from an instrument kind ('DEPOSIT' or 'SWAP') and tenor."""
    kind_upper = kind.upper()
    if kind_upper == "DEPOSIT":
        return DepositRateHelper(rate, tenor, reference_date, **kwargs)
    if kind_upper == "SWAP":
        return SwapRateHelper(rate, tenor, reference_date, **kwargs)
    raise InvalidArgument(f"Unsupported instrument type: {kind}")


def quote_errors(helpers: Optional[List[RateHelper]]) -> List[float]:
    """Quote errors of bound helpers, in the given order."""
    return [helper.quote_error() for helper in helpers or []]
