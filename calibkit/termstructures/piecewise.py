"""
Piecewise yield curve bootstrapped from calibrating instruments.

Each instrument's maturity marks the end of one interpolated segment.
Segments are determined sequentially, earliest first, so that the
instrument closing a segment reprices exactly on the curve. The curve is
lazy: a quote change only marks it dirty, and the bootstrap runs again on
the next read.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional, Sequence, Type, Union

from calibkit.config import BootstrapConfig
from calibkit.conventions.daycount import DayCountConvention
from calibkit.errors import InvalidArgument, require
from calibkit.interpolation import Interpolator, get_interpolator_class
from calibkit.interpolation.linear import LogLinearInterpolator

from .base import TimeLike, YieldTermStructure
from .bootstrap.engine import IterativeBootstrap
from .bootstrap.results import BootstrapResult
from .lazy import LazyObject
from .traits import BootstrapTraits, get_traits

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Node:
    """Calibrated (time, value) pair anchoring the curve."""

    time: float
    value: float


class PiecewiseYieldCurve(YieldTermStructure, LazyObject):
    """
    Yield curve whose nodes are bootstrapped from rate helpers.

    Args:
        reference_date: Curve reference date (time zero)
        instruments: Calibrating instruments; referenced, not copied
        day_count: Day count mapping dates to curve times
        accuracy: Target accuracy of each segment's solve
        interpolation: Interpolation method name or Interpolator subclass
        traits: What the nodes represent ("DISCOUNT" or "ZERO_YIELD")
        config: Bootstrap configuration; explicit arguments override it
        bootstrap: Bootstrap algorithm (an IterativeBootstrap by default)
        name: Optional curve name
    """

    def __init__(
        self,
        reference_date: Union[date, datetime, str],
        instruments: Sequence,
        day_count: Union[str, DayCountConvention, None] = None,
        accuracy: Optional[float] = None,
        interpolation: Union[str, Type[Interpolator], None] = None,
        traits: Union[str, BootstrapTraits, None] = None,
        config: Optional[BootstrapConfig] = None,
        bootstrap: Optional[IterativeBootstrap] = None,
        allow_extrapolation: Optional[bool] = None,
        name: str = "",
    ):
        self.config = config or BootstrapConfig()
        YieldTermStructure.__init__(
            self,
            reference_date,
            day_count or self.config.day_count_convention,
            self.config.allow_extrapolation if allow_extrapolation is None else allow_extrapolation,
            name,
        )
        LazyObject.__init__(self)

        self.accuracy = self.config.accuracy if accuracy is None else accuracy
        require(self.accuracy > 0.0, f"accuracy ({self.accuracy}) must be positive")

        self._interpolator_cls = get_interpolator_class(
            interpolation or self.config.interpolation_method
        )
        self._traits = get_traits(traits or self.config.traits)
        if (issubclass(self._interpolator_cls, LogLinearInterpolator)
                and not self._traits.requires_positive_values):
            raise InvalidArgument(
                f"{self._interpolator_cls.__name__} cannot interpolate {self._traits} nodes"
            )

        self._instruments = instruments
        for instrument in self._instruments:
            instrument.register_observer(self)

        self._bootstrap = bootstrap or IterativeBootstrap(
            max_evaluations=self.config.max_evaluations,
            verbose=self.config.verbose,
        )

        self._times: List[float] = []
        self._data: List[float] = []
        self._interpolation: Optional[Interpolator] = None
        self._results: List[BootstrapResult] = []

    # ------------------------------------------------------------------
    # Lazy calculation
    # ------------------------------------------------------------------
    def perform_calculations(self) -> None:
        self._bootstrap.calculate(self)

    # ------------------------------------------------------------------
    # Public inspectors (each one brings the curve up to date first)
    # ------------------------------------------------------------------
    def value_at(self, t: TimeLike) -> float:
        """Interpolated node value (discount factor or zero rate) at t."""
        self.calculate()
        time_frac = self.time_from_reference(t)
        self._check_range(time_frac)
        return self._interpolated_value(time_frac)

    def discount_impl(self, t: float) -> float:
        self.calculate()
        return self._traits.discount(self._interpolated_value(t), t)

    def max_time(self) -> float:
        self.calculate()
        return self._times[-1]

    def max_date(self) -> date:
        self.calculate()
        return self._results[-1].maturity_date

    def times(self) -> List[float]:
        self.calculate()
        return list(self._times)

    def data(self) -> List[float]:
        self.calculate()
        return list(self._data)

    def nodes(self) -> List[Node]:
        self.calculate()
        return [Node(t, v) for t, v in zip(self._times, self._data)]

    def dates(self) -> List[date]:
        self.calculate()
        return [self.reference_date] + [r.maturity_date for r in self._results]

    def results(self) -> List[BootstrapResult]:
        self.calculate()
        return list(self._results)

    @property
    def instruments(self) -> Sequence:
        return self._instruments

    @property
    def traits(self) -> BootstrapTraits:
        return self._traits

    @property
    def interpolation_method(self) -> Type[Interpolator]:
        return self._interpolator_cls

    # ------------------------------------------------------------------
    # Mutation interface reserved for the bootstrapper
    # ------------------------------------------------------------------
    def reset_nodes(self, initial_value: float) -> None:
        """Start a rebuild with the single node (0, initial_value)."""
        self._times = [0.0]
        self._data = [initial_value]
        self._interpolation = None
        self._results = []

    def clear_nodes(self) -> None:
        """Drop every node; used when a bootstrap attempt fails."""
        self._times = []
        self._data = []
        self._interpolation = None
        self._results = []

    def open_node(self, time: float, guess: float) -> int:
        """Append a trial node at ``time``; returns its index."""
        self._times.append(time)
        self._data.append(guess)
        index = len(self._times) - 1
        self.set_node_value(index, guess)
        return index

    def set_node_value(self, index: int, value: float) -> None:
        """Set the trial value of node ``index`` and rebuild the interpolation."""
        self._traits.update_guess(self._data, value, index)
        self._rebuild_interpolation()

    def commit_node(self, index: int, time: float, value: float) -> None:
        """Fix the solved value of node ``index``."""
        require(self._times[index] == time,
                f"node {index} is at time {self._times[index]}, not {time}")
        self.set_node_value(index, value)
        logger.debug("%s: committed node %s (t=%.6f, value=%.12f)", self, index, time, value)

    def set_results(self, results: List[BootstrapResult]) -> None:
        self._results = list(results)

    def trial_data(self) -> List[float]:
        """Node values as they stand during a rebuild, without triggering one."""
        return list(self._data)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _rebuild_interpolation(self) -> None:
        if len(self._times) >= 2:
            self._interpolation = self._interpolator_cls(self._times, self._data)
        else:
            self._interpolation = None

    def _interpolated_value(self, t: float) -> float:
        require(self._data, f"{self} has no nodes")
        if self._interpolation is None:
            return self._data[0]
        return self._interpolation(t)

    def __repr__(self) -> str:
        return (f"PiecewiseYieldCurve(reference_date={self.reference_date}, "
                f"instruments={len(self._instruments)}, traits={self._traits}, "
                f"interpolation={self._interpolator_cls.__name__}, state={self.state.value})")
