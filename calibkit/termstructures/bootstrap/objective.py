"""Objective function for one bootstrap segment."""

from __future__ import annotations


class BootstrapObjective:
    """Quote error of one instrument as a function of its node value.

    Evaluating the objective writes the trial value into the curve, so the
    instrument reprices on the curve built from the already calibrated
    nodes plus the trial node. No analytic derivative is offered; the
    solver takes bisection steps.
    """

    def __init__(self, curve, segment: int, instrument):
        self.curve = curve
        self.segment = segment
        self.instrument = instrument

    def __call__(self, value: float) -> float:
        self.curve.set_node_value(self.segment, value)
        return self.instrument.quote_error()

    evaluate = __call__
