"""
Observer wiring and lazy recalculation.

Market changes are pushed: an :class:`Observable` notifies its observers,
which only mark themselves dirty. Results are pulled: a :class:`LazyObject`
recomputes in :meth:`LazyObject.calculate`, which every public accessor
calls before reading. Several notifications between two reads therefore
cost a single recomputation.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import List

logger = logging.getLogger(__name__)


class CalculationState(Enum):
    """Lifecycle of a lazily computed object."""

    DIRTY = "DIRTY"
    IN_PROGRESS = "IN_PROGRESS"
    CLEAN = "CLEAN"
    FAILED = "FAILED"


CurveState = CalculationState


class Observer(ABC):
    """Receives change notifications through :meth:`update`."""

    @abstractmethod
    def update(self) -> None:
        """Called by observed objects when they change."""

    def register_with(self, observable: "Observable") -> None:
        observable.register_observer(self)

    def unregister_with(self, observable: "Observable") -> None:
        observable.unregister_observer(self)


class Observable:
    """Keeps a list of observers and notifies them of changes."""

    def __init__(self):
        self._observers: List[Observer] = []

    def register_observer(self, observer: Observer) -> None:
        if not any(o is observer for o in self._observers):
            self._observers.append(observer)

    def unregister_observer(self, observer: Observer) -> None:
        self._observers = [o for o in self._observers if o is not observer]

    @property
    def observers(self) -> List[Observer]:
        return list(self._observers)

    def notify_observers(self) -> None:
        for observer in list(self._observers):
            observer.update()


class LazyObject(Observable, Observer):
    """Object whose results are recomputed on demand after a change.

    Subclasses implement :meth:`perform_calculations` and call
    :meth:`calculate` at the top of every public accessor.
    """

    def __init__(self):
        Observable.__init__(self)
        self._state = CalculationState.DIRTY
        self._frozen = False
        self._pending_update = False
        self._calculation_count = 0

    # ------------------------------------------------------------------
    # Observer interface
    # ------------------------------------------------------------------
    def update(self) -> None:
        """Mark dirty; forward the notification on the first change only."""
        if self._frozen:
            self._pending_update = True
            return
        previous = self._state
        self._state = CalculationState.DIRTY
        if previous is not CalculationState.DIRTY:
            logger.debug("%s marked dirty", self)
            self.notify_observers()

    mark_dirty = update

    # ------------------------------------------------------------------
    # Calculation
    # ------------------------------------------------------------------
    def calculate(self) -> None:
        """Run :meth:`perform_calculations` if results are out of date.

        Re-entrant calls made while the calculation is running return
        immediately. A failed calculation leaves the object in the FAILED
        state and is retried on the next call.
        """
        if self._state in (CalculationState.CLEAN, CalculationState.IN_PROGRESS):
            return
        self._state = CalculationState.IN_PROGRESS
        try:
            self.perform_calculations()
        except Exception:
            self._state = CalculationState.FAILED
            raise
        self._state = CalculationState.CLEAN
        self._calculation_count += 1

    def recalculate(self) -> None:
        """Force a recomputation and notify observers of the new results."""
        was_frozen = self._frozen
        self._frozen = False
        self._state = CalculationState.DIRTY
        try:
            self.calculate()
        finally:
            self._frozen = was_frozen
        self.notify_observers()

    @abstractmethod
    def perform_calculations(self) -> None:
        """Compute and store results."""

    # ------------------------------------------------------------------
    # Freezing
    # ------------------------------------------------------------------
    def freeze(self) -> None:
        """Keep clean results even if inputs change.

        A failed calculation is still retried on the next read.
        """
        self._frozen = True

    def unfreeze(self) -> None:
        """Resume normal behaviour, applying any change seen while frozen."""
        self._frozen = False
        if self._pending_update:
            self._pending_update = False
            self.update()

    # ------------------------------------------------------------------
    # Inspectors
    # ------------------------------------------------------------------
    @property
    def state(self) -> CalculationState:
        return self._state

    @property
    def is_dirty(self) -> bool:
        return self._state is not CalculationState.CLEAN

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    @property
    def calculation_count(self) -> int:
        """Number of successful recomputations so far."""
        return self._calculation_count
