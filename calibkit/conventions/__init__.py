"""Market conventions: day counts, calendars and tenor arithmetic."""

from .calendars import Calendar, get_calendar
from .daycount import DayCountConvention, get_day_count_convention
from .dates import BusinessDayAdjustment, add_tenor, adjust_date, parse_tenor, to_date

__all__ = [
    "BusinessDayAdjustment",
    "Calendar",
    "DayCountConvention",
    "add_tenor",
    "adjust_date",
    "get_calendar",
    "get_day_count_convention",
    "parse_tenor",
    "to_date",
]
