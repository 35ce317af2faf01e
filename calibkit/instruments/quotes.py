"""
Observable market quotes.
"""

import math

from calibkit.termstructures.lazy import Observable


class SimpleQuote(Observable):
    """Market quote whose changes are pushed to registered observers."""

    def __init__(self, value: float = math.nan):
        super().__init__()
        self._value = float(value)

    @property
    def value(self) -> float:
        return self._value

    def set_value(self, value: float) -> float:
        """Set a new value; observers are notified only if it changed.

        Returns the difference between the new and the old value.
        """
        value = float(value)
        diff = value - self._value
        if diff != 0.0 or math.isnan(self._value):
            self._value = value
            self.notify_observers()
        return diff

    def is_valid(self) -> bool:
        return not math.isnan(self._value)

    def __repr__(self) -> str:
        return f"SimpleQuote({self._value})"
