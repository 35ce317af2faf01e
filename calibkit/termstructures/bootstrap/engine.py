"""Numerical engine for piecewise curve bootstrapping."""

from __future__ import annotations

import logging
import math
from typing import List, Optional

from calibkit.config import DEFAULT_MAX_EVALUATIONS
from calibkit.errors import (
    ConvergenceError,
    DuplicateMaturityError,
    require,
)
from calibkit.utils.rootfinding import SafeguardedSolver

from .objective import BootstrapObjective
from .results import BootstrapResult

logger = logging.getLogger(__name__)


class IterativeBootstrap:
    """Solves the curve one segment at a time, in increasing maturity order.

    Segment ``i`` depends only on nodes ``0..i-1`` and its own trial value,
    so the calibration is a chain of one-dimensional root searches.
    """

    def __init__(
        self,
        max_evaluations: int = DEFAULT_MAX_EVALUATIONS,
        solver: Optional[SafeguardedSolver] = None,
        verbose: bool = False,
    ):
        self.solver = solver or SafeguardedSolver(max_evaluations)
        self.verbose = verbose

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def calculate(self, curve) -> None:
        """Rebuild every node of ``curve`` from its instruments.

        On failure the curve is left without nodes and the error propagates.
        """
        curve.clear_nodes()
        try:
            instruments = self._prepare_instruments(curve)
            self._solve_segments(curve, instruments)
        except Exception:
            curve.clear_nodes()
            raise

    # ------------------------------------------------------------------
    # Bootstrap helpers
    # ------------------------------------------------------------------
    def _prepare_instruments(self, curve) -> List:
        """Bind instruments to the curve, sort them and check maturities."""
        require(len(curve.instruments) > 0, "no instruments given")
        for instrument in curve.instruments:
            instrument.set_term_structure(curve)

        ordered = sorted(curve.instruments, key=lambda inst: inst.maturity_time())
        for previous, current in zip(ordered, ordered[1:]):
            if previous.maturity_time() == current.maturity_time():
                raise DuplicateMaturityError(
                    f"more than one instrument with maturity {current.maturity_date} "
                    f"({previous} and {current})"
                )
        first_time = ordered[0].maturity_time()
        require(first_time > 0.0,
                f"instrument {ordered[0]} matures at time {first_time}, "
                f"not after the reference date {curve.reference_date}")
        return ordered

    def _solve_segments(self, curve, instruments: List) -> None:
        traits = curve.traits
        curve.reset_nodes(traits.initial_value())

        if self.verbose:
            logger.info("Bootstrapping %s over %d instruments", curve, len(instruments))

        results: List[BootstrapResult] = []
        for segment, instrument in enumerate(instruments, start=1):
            time = instrument.maturity_time()
            data = curve.trial_data()

            if segment == 1:
                guess = traits.initial_guess()
            else:
                guess = traits.guess(data, segment)
            lower = traits.min_value_after(data, segment)
            upper = traits.max_value_after(data, segment)
            guess = min(max(guess, lower), upper)

            curve.open_node(time, guess)
            objective = BootstrapObjective(curve, segment, instrument)
            try:
                result = self.solver.solve_with_result(
                    objective, curve.accuracy, guess, lower, upper
                )
            except ConvergenceError as exc:
                logger.error(
                    "Bootstrap of %s failed at segment %d (%s, quote=%s): %s",
                    curve, segment, instrument, instrument.quote.value, exc,
                )
                raise ConvergenceError(
                    f"{segment}. instrument ({instrument}, maturity {instrument.maturity_date}) "
                    f"could not be bootstrapped: {exc}"
                ) from exc

            curve.commit_node(segment, time, result.root)
            entry = self._result_entry(curve, instrument, time, result.root, result.iterations)
            if results and entry.discount_factor > results[-1].discount_factor:
                logger.warning(
                    "%s: discount factor increases from %.10f to %.10f at %s (negative forward rate)",
                    curve, results[-1].discount_factor, entry.discount_factor, instrument,
                )
            results.append(entry)

        curve.set_results(results)

        if self.verbose:
            logger.info("Bootstrapped %s: %d nodes", curve, len(results) + 1)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _result_entry(curve, instrument, time: float, value: float, iterations: int) -> BootstrapResult:
        df = curve.traits.discount(value, time)
        zero_cc = -math.log(df) / time
        return BootstrapResult(
            instrument=str(instrument),
            maturity_date=instrument.maturity_date,
            time=time,
            value=value,
            discount_factor=df,
            zero_rate=zero_cc,
            iterations=iterations,
        )
