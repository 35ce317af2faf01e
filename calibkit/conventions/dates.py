"""Tenor arithmetic and business day adjustment."""

from __future__ import annotations

import re
from datetime import date, datetime
from enum import Enum
from typing import Tuple, Union

from dateutil.relativedelta import relativedelta

from calibkit.errors import InvalidArgument

from .calendars import Calendar, get_calendar

DATE_FMT = "%Y-%m-%d"
COMPACT_FMT = "%Y%m%d"

_TENOR_RE = re.compile(r"^\s*(\d+)\s*([DWMY])\s*$", re.IGNORECASE)


class BusinessDayAdjustment(Enum):
    """Business day adjustment rules."""

    NO_ADJUSTMENT = "NO_ADJUSTMENT"
    FOLLOWING = "FOLLOWING"
    MODIFIED_FOLLOWING = "MODIFIED_FOLLOWING"
    PRECEDING = "PRECEDING"


def to_date(date_like: Union[str, date, datetime]) -> date:
    """
    Convert a string, date or datetime to a date.
    Accepts 'YYYY-MM-DD' and 'YYYYMMDD' string formats.
    """
    if isinstance(date_like, datetime):
        return date_like.date()
    if isinstance(date_like, date):
        return date_like
    if isinstance(date_like, str):
        for fmt in (DATE_FMT, COMPACT_FMT):
            try:
                return datetime.strptime(date_like, fmt).date()
            except ValueError:
                continue
        raise InvalidArgument(f"Unsupported date string format: {date_like!r}")
    raise InvalidArgument(f"Unsupported type for date: {type(date_like)}")


def parse_tenor(tenor: str) -> Tuple[int, str]:
    """Split a tenor such as '3M' or '10Y' into (length, unit)."""
    match = _TENOR_RE.match(tenor)
    if match is None:
        raise InvalidArgument(f"Unsupported tenor: {tenor}")
    return int(match.group(1)), match.group(2).upper()


def tenor_delta(tenor: str) -> relativedelta:
    length, unit = parse_tenor(tenor)
    if unit == "D":
        return relativedelta(days=length)
    if unit == "W":
        return relativedelta(weeks=length)
    if unit == "M":
        return relativedelta(months=length)
    return relativedelta(years=length)


def adjust_date(
    dt: date,
    adjustment: BusinessDayAdjustment,
    calendar: Calendar,
) -> date:
    """Roll ``dt`` onto a business day of ``calendar``."""
    if adjustment is BusinessDayAdjustment.NO_ADJUSTMENT:
        return dt
    if adjustment is BusinessDayAdjustment.PRECEDING:
        return calendar.preceding(dt)
    adjusted = calendar.following(dt)
    if adjustment is BusinessDayAdjustment.MODIFIED_FOLLOWING and adjusted.month != dt.month:
        return calendar.preceding(dt)
    return adjusted


def add_tenor(
    start_date: Union[date, datetime],
    tenor: str,
    calendar: Union[str, Calendar, None] = None,
    adjustment: BusinessDayAdjustment = BusinessDayAdjustment.MODIFIED_FOLLOWING,
) -> date:
    """Add a tenor to a date and adjust the result (default: TARGET + Modified Following)."""
    cal = get_calendar(calendar or "TARGET")
    unadjusted = to_date(start_date) + tenor_delta(tenor)
    return adjust_date(unadjusted, adjustment, cal)
