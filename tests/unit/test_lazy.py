"""
Unit tests for observers and lazy recalculation.

This module validates:
1. Notification coalescing between reads
2. Propagation along observer chains
3. Failure and retry
4. Freezing and forced recalculation
"""

import pytest

from calibkit.instruments import SimpleQuote
from calibkit.termstructures.lazy import CalculationState, LazyObject, Observable, Observer


class Doubler(LazyObject):
    """Lazily doubles the value of a quote."""

    def __init__(self, quote):
        super().__init__()
        self.quote = quote
        self.quote.register_observer(self)
        self._result = None
        self.fail = False

    def perform_calculations(self):
        if self.fail:
            raise RuntimeError("pricing failed")
        self._result = 2.0 * self.quote.value

    @property
    def result(self):
        self.calculate()
        return self._result


class Summer(LazyObject):
    """Lazily adds one to a Doubler's result."""

    def __init__(self, source):
        super().__init__()
        self.source = source
        self.source.register_observer(self)
        self._result = None

    def perform_calculations(self):
        self._result = self.source.result + 1.0

    @property
    def result(self):
        self.calculate()
        return self._result


class Recorder(Observer):
    def __init__(self):
        self.updates = 0

    def update(self):
        self.updates += 1


# ===========================
# Observable basics
# ===========================


def test_registration_is_idempotent():
    observable = Observable()
    recorder = Recorder()
    recorder.register_with(observable)
    observable.register_observer(recorder)
    observable.notify_observers()
    assert recorder.updates == 1

    recorder.unregister_with(observable)
    observable.notify_observers()
    assert recorder.updates == 1
    assert observable.observers == []


def test_quote_notifies_only_on_change():
    quote = SimpleQuote(0.01)
    recorder = Recorder()
    quote.register_observer(recorder)

    assert quote.set_value(0.02) == pytest.approx(0.01)
    quote.set_value(0.02)
    assert recorder.updates == 1


# ===========================
# Lazy recalculation
# ===========================


def test_nothing_is_computed_before_first_read():
    node = Doubler(SimpleQuote(1.0))
    assert node.calculation_count == 0
    assert node.state is CalculationState.DIRTY


def test_repeated_changes_cost_one_recalculation():
    quote = SimpleQuote(1.0)
    node = Doubler(quote)
    assert node.result == 2.0

    for value in (2.0, 3.0, 4.0):
        quote.set_value(value)

    assert node.calculation_count == 1
    assert node.result == 8.0
    assert node.calculation_count == 2
    assert node.state is CalculationState.CLEAN


def test_dirty_object_notifies_once():
    quote = SimpleQuote(1.0)
    node = Doubler(quote)
    recorder = Recorder()
    node.register_observer(recorder)
    node.result

    quote.set_value(2.0)
    quote.set_value(3.0)

    assert recorder.updates == 1


def test_change_propagates_along_chain():
    quote = SimpleQuote(1.0)
    summer = Summer(Doubler(quote))
    assert summer.result == 3.0

    quote.set_value(5.0)

    assert summer.is_dirty
    assert summer.result == 11.0


def test_failure_is_recorded_and_retried():
    quote = SimpleQuote(1.0)
    node = Doubler(quote)
    node.fail = True

    with pytest.raises(RuntimeError):
        node.result
    assert node.state is CalculationState.FAILED

    node.fail = False
    assert node.result == 2.0
    assert node.state is CalculationState.CLEAN


def test_reentrant_calculate_returns_immediately():
    class Reentrant(LazyObject):
        def __init__(self):
            super().__init__()
            self.runs = 0
            self.seen_state = None

        def perform_calculations(self):
            self.runs += 1
            self.seen_state = self.state
            self.calculate()

    node = Reentrant()
    node.calculate()
    assert node.runs == 1
    assert node.seen_state is CalculationState.IN_PROGRESS


# ===========================
# Freezing
# ===========================


def test_frozen_object_keeps_results_until_unfrozen():
    quote = SimpleQuote(1.0)
    node = Doubler(quote)
    node.result
    node.freeze()

    quote.set_value(10.0)
    assert node.result == 2.0

    node.unfreeze()
    assert node.result == 20.0


def test_recalculate_forces_a_run_and_notifies():
    node = Doubler(SimpleQuote(1.0))
    recorder = Recorder()
    node.register_observer(recorder)
    node.result

    node.recalculate()

    assert node.calculation_count == 2
    assert recorder.updates == 1


def test_frozen_failed_object_is_retried():
    quote = SimpleQuote(1.0)
    node = Doubler(quote)
    node.result
    node.fail = True
    quote.set_value(2.0)
    with pytest.raises(RuntimeError):
        node.result

    node.freeze()
    with pytest.raises(RuntimeError):
        node.result
    assert node.state is CalculationState.FAILED

    node.fail = False
    assert node.result == 4.0
