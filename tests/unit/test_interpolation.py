"""Unit tests for interpolation strategies."""

import math

import pytest

from calibkit.errors import InvalidArgument
from calibkit.interpolation import (
    BackwardFlatInterpolator,
    LinearInterpolator,
    LogLinearInterpolator,
    create_interpolator,
    discount_factor_to_zero_rate,
    get_interpolator_class,
    zero_rate_to_discount_factor,
)

TIMES = [0.0, 0.25, 1.0, 2.0, 5.0, 10.0]
DISCOUNTS = [1.0, 0.99, 0.962, 0.93, 0.85, 0.74]


@pytest.mark.parametrize("method", ["LINEAR", "LOG_LINEAR", "BACKWARD_FLAT"])
def test_nodes_are_reproduced_exactly(method):
    interp = create_interpolator(method, TIMES, DISCOUNTS)
    for t, v in zip(TIMES, DISCOUNTS):
        assert interp(t) == v, f"{method} at t={t}: {interp(t)} != {v}"


def test_linear_midpoint():
    interp = LinearInterpolator([0.0, 1.0], [1.0, 3.0])
    assert interp(0.5) == pytest.approx(2.0)


def test_linear_extends_end_segments():
    interp = LinearInterpolator([1.0, 2.0], [1.0, 2.0])
    assert interp(3.0) == pytest.approx(3.0)
    assert interp(0.0) == pytest.approx(0.0)


def test_log_linear_gives_geometric_mean():
    interp = LogLinearInterpolator([0.0, 1.0], [1.0, 0.81])
    assert interp(0.5) == pytest.approx(0.9, rel=1e-12)


def test_log_linear_is_flat_forward_beyond_last_node():
    interp = LogLinearInterpolator([0.0, 1.0, 2.0], [1.0, 0.95, 0.9])
    forward = math.log(0.95 / 0.9)
    assert interp(3.0) == pytest.approx(0.9 * math.exp(-forward), rel=1e-12)


def test_backward_flat_takes_right_node_value():
    interp = BackwardFlatInterpolator([0.0, 1.0, 2.0], [0.01, 0.02, 0.03])
    assert interp(0.5) == 0.02
    assert interp(1.5) == 0.03
    assert interp(5.0) == 0.03
    assert interp(-1.0) == 0.01


def test_interpolate_many():
    interp = LinearInterpolator([0.0, 2.0], [0.0, 2.0])
    assert interp.interpolate_many([0.5, 1.0, 1.5]) == pytest.approx([0.5, 1.0, 1.5])


@pytest.mark.parametrize(
    "times,values",
    [
        ([0.0, 1.0, 1.0], [1.0, 0.9, 0.8]),  # repeated time
        ([0.0, 2.0, 1.0], [1.0, 0.9, 0.8]),  # decreasing time
        ([0.0], [1.0]),                       # single node
        ([0.0, 1.0], [1.0]),                  # length mismatch
    ],
)
def test_invalid_nodes_raise(times, values):
    with pytest.raises(InvalidArgument):
        LinearInterpolator(times, values)


def test_log_linear_rejects_non_positive_values():
    with pytest.raises(InvalidArgument):
        LogLinearInterpolator([0.0, 1.0], [1.0, -0.5])


def test_method_lookup():
    assert get_interpolator_class("log_linear") is LogLinearInterpolator
    assert get_interpolator_class(BackwardFlatInterpolator) is BackwardFlatInterpolator
    with pytest.raises(InvalidArgument):
        get_interpolator_class("CUBIC")


def test_rate_conversions():
    df = zero_rate_to_discount_factor(0.03, 2.0)
    assert discount_factor_to_zero_rate(df, 2.0) == pytest.approx(0.03, rel=1e-14)
    with pytest.raises(InvalidArgument):
        discount_factor_to_zero_rate(0.0, 1.0)
