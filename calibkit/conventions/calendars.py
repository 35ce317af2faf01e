"""QuantLib-backed business day calendars."""

from datetime import date
from typing import Union

import QuantLib as ql

from calibkit.errors import InvalidArgument

from .daycount import DateLike, to_ql_date


def to_py_date(ql_date: ql.Date) -> date:
    """Convert QuantLib Date to Python date."""
    return date(ql_date.year(), ql_date.month(), ql_date.dayOfMonth())


class Calendar:
    """Business day calculations delegated to a QuantLib calendar."""

    def __init__(self, name: str, ql_calendar: ql.Calendar):
        self.name = name
        self._ql_calendar = ql_calendar

    def is_business_day(self, dt: DateLike) -> bool:
        return self._ql_calendar.isBusinessDay(to_ql_date(dt))

    def add_business_days(self, start_date: DateLike, days: int) -> date:
        ql_result = self._ql_calendar.advance(to_ql_date(start_date), days, ql.Days)
        return to_py_date(ql_result)

    def following(self, dt: DateLike) -> date:
        return to_py_date(self._ql_calendar.adjust(to_ql_date(dt), ql.Following))

    def preceding(self, dt: DateLike) -> date:
        return to_py_date(self._ql_calendar.adjust(to_ql_date(dt), ql.Preceding))

    def __str__(self) -> str:
        return self.name


_CALENDARS = {
    "TARGET": lambda: Calendar("TARGET", ql.TARGET()),
    "WEEKEND": lambda: Calendar("WEEKEND", ql.WeekendsOnly()),
    "NULL": lambda: Calendar("NULL", ql.NullCalendar()),
}


def get_calendar(name: Union[str, Calendar] = "TARGET") -> Calendar:
    """Get a calendar by name (instances pass through)."""
    if isinstance(name, Calendar):
        return name
    key = name.upper()
    if key not in _CALENDARS:
        raise InvalidArgument(f"Unknown calendar: {name}. Available: {list(_CALENDARS)}")
    return _CALENDARS[key]()
