"""Option type encoding shared by the Black formulas."""

from enum import IntEnum
from typing import Union

from calibkit.errors import InvalidArgument


class OptionType(IntEnum):
    """Vanilla payoff direction, encoded as the payoff sign."""

    CALL = 1
    PUT = -1

    @classmethod
    def parse(cls, value: Union["OptionType", int, str]) -> "OptionType":
        """Accept an OptionType, +1/-1 or 'call'/'put'."""
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError as exc:
                raise InvalidArgument(f"Unknown option type: {value!r}") from exc
        try:
            return cls(int(value))
        except ValueError as exc:
            raise InvalidArgument(f"Unknown option type: {value!r}") from exc


OptionTypeLike = Union[OptionType, int, str]
