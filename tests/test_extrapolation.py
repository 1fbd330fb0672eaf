from __future__ import annotations

import math

import numpy as np
import pytest

from quant_analytics.exceptions import InvalidInterpolationDataError
from quant_analytics.interpolation import (
    CombinedInterpolatorExtrapolator,
    CurveExtrapolator,
    DataBundle,
    FlatExtrapolator1D,
    LinearExtrapolator1D,
    LinearInterpolator1D,
    LogLinearExtrapolator1D,
    get_extrapolator,
)


def fd_node_sensitivities(interp, bundle: DataBundle, x: float, h: float = 1e-7) -> np.ndarray:
    out = np.zeros(bundle.size)
    for j in range(bundle.size):
        up = interp.interpolate(bundle.with_value(j, bundle.value(j) + h), x)
        dn = interp.interpolate(bundle.with_value(j, bundle.value(j) - h), x)
        out[j] = (up - dn) / (2.0 * h)
    return out


def test_of_defaults_right_to_left() -> None:
    c = CombinedInterpolatorExtrapolator.of("Linear", "Linear")
    assert isinstance(c.left, LinearExtrapolator1D)
    assert isinstance(c.right, LinearExtrapolator1D)
    assert isinstance(c.interpolator, LinearInterpolator1D)


def test_combined_equality() -> None:
    a = CombinedInterpolatorExtrapolator.of("Linear", "Flat", "Flat")
    b = CombinedInterpolatorExtrapolator.of(
        "linear", CurveExtrapolator.FLAT, CurveExtrapolator.FLAT
    )
    assert a == b
    assert a != CombinedInterpolatorExtrapolator.of("Linear", "Flat", "Linear")


@pytest.mark.parametrize("name", ["Cubic", "", "Flatish"])
def test_unknown_extrapolator_name_raises(name: str) -> None:
    with pytest.raises(InvalidInterpolationDataError):
        get_extrapolator(name)
    with pytest.raises(InvalidInterpolationDataError):
        CombinedInterpolatorExtrapolator.of("Linear", name)


def test_flat_both_sides(linear_flat, bundle5: DataBundle) -> None:
    assert linear_flat.interpolate(bundle5, -3.0) == bundle5.first_value
    assert linear_flat.interpolate(bundle5, 40.0) == bundle5.last_value
    assert linear_flat.first_derivative(bundle5, -3.0) == 0.0
    assert linear_flat.first_derivative(bundle5, 40.0) == 0.0
    np.testing.assert_array_equal(
        linear_flat.node_sensitivities(bundle5, -3.0), [1.0, 0.0, 0.0, 0.0, 0.0]
    )
    np.testing.assert_array_equal(
        linear_flat.node_sensitivities(bundle5, 40.0), [0.0, 0.0, 0.0, 0.0, 1.0]
    )


def test_inside_range_delegates_to_interpolator(linear_flat, bundle5: DataBundle) -> None:
    linear = LinearInterpolator1D()
    for x in (0.5, 0.9, 3.0, 10.0):
        assert linear_flat.interpolate(bundle5, x) == linear.interpolate(bundle5, x)
        assert linear_flat.first_derivative(bundle5, x) == linear.first_derivative(bundle5, x)


def test_linear_extrapolation_continues_boundary_tangent(bundle5: DataBundle) -> None:
    c = CombinedInterpolatorExtrapolator.of("Linear", "Linear", "Linear")
    left_slope = (bundle5.value(1) - bundle5.value(0)) / (bundle5.key(1) - bundle5.key(0))
    right_slope = (bundle5.value(4) - bundle5.value(3)) / (bundle5.key(4) - bundle5.key(3))

    assert c.interpolate(bundle5, 0.0) == pytest.approx(
        bundle5.first_value - 0.5 * left_slope, abs=1e-15
    )
    assert c.interpolate(bundle5, 12.0) == pytest.approx(
        bundle5.last_value + 2.0 * right_slope, abs=1e-15
    )
    assert c.first_derivative(bundle5, 12.0) == pytest.approx(right_slope)
    assert c.first_derivative(bundle5, 0.0) == pytest.approx(left_slope)


@pytest.mark.parametrize("x", [0.1, 14.0])
def test_linear_extrapolation_node_sensitivities(bundle5: DataBundle, x: float) -> None:
    c = CombinedInterpolatorExtrapolator.of("Linear", "Linear", "Linear")
    w = c.node_sensitivities(bundle5, x)
    np.testing.assert_allclose(w, fd_node_sensitivities(c, bundle5, x), atol=1e-7)
    assert math.isclose(float(w.sum()), 1.0, abs_tol=1e-12)


def test_log_linear_extrapolation_is_continuous(bundle5: DataBundle) -> None:
    c = CombinedInterpolatorExtrapolator.of("LogLinear", "LogLinear", "LogLinear")
    eps = 1e-9
    for xb in (bundle5.first_key, bundle5.last_key):
        outside = xb - eps if xb == bundle5.first_key else xb + eps
        assert c.interpolate(bundle5, outside) == pytest.approx(
            c.interpolate(bundle5, xb), abs=1e-9
        )


def test_log_linear_extrapolation_value(bundle5: DataBundle) -> None:
    c = CombinedInterpolatorExtrapolator.of("Linear", "Flat", "LogLinear")
    yb = bundle5.last_value
    db = c.interpolator.first_derivative(bundle5, bundle5.last_key)
    assert c.interpolate(bundle5, 13.0) == pytest.approx(yb * math.exp(db / yb * 3.0))


@pytest.mark.parametrize("x", [0.2, 12.0])
def test_log_linear_extrapolation_node_sensitivities(bundle5: DataBundle, x: float) -> None:
    c = CombinedInterpolatorExtrapolator.of("Linear", "LogLinear", "LogLinear")
    np.testing.assert_allclose(
        c.node_sensitivities(bundle5, x), fd_node_sensitivities(c, bundle5, x), atol=1e-6
    )


def test_log_linear_extrapolation_requires_positive_end_values() -> None:
    c = CombinedInterpolatorExtrapolator.of("Linear", "LogLinear", "LogLinear")
    with pytest.raises(InvalidInterpolationDataError):
        c.data_bundle([1.0, 2.0, 3.0], [-1.0, 1.0, 2.0])


def test_right_log_linear_accepts_negative_first_value() -> None:
    c = CombinedInterpolatorExtrapolator.of("Linear", "Flat", "LogLinear")
    b = c.data_bundle([0.5, 1.0, 2.0], [-0.001, 0.01, 0.02])
    assert c.interpolate(b, 0.0) == pytest.approx(-0.001)
    assert c.interpolate(b, 3.0) == pytest.approx(0.02 * math.exp(0.5))


def test_left_log_linear_accepts_negative_last_value() -> None:
    c = CombinedInterpolatorExtrapolator.of("Linear", "LogLinear", "Flat")
    b = c.data_bundle([0.5, 1.0, 2.0], [0.01, 0.02, -0.001])
    assert c.interpolate(b, 3.0) == pytest.approx(-0.001)
    assert c.interpolate(b, 0.0) == pytest.approx(0.01 * math.exp(-1.0))


def test_log_linear_side_rejects_non_positive_end_value() -> None:
    c = CombinedInterpolatorExtrapolator.of("Linear", "Flat", "LogLinear")
    with pytest.raises(InvalidInterpolationDataError):
        c.data_bundle([0.5, 1.0, 2.0], [0.01, 0.02, 0.0])
    with pytest.raises(InvalidInterpolationDataError):
        c.data_bundle([0.5, 1.0, 2.0], [0.01, 0.02, -0.02])


def test_log_linear_zero_end_value_raises_at_query() -> None:
    # DataBundle.of skips the combined interpolator's checks
    b = DataBundle.of([0.5, 1.0, 2.0], [0.01, 0.02, 0.0])
    c = CombinedInterpolatorExtrapolator.of("Linear", "Flat", "LogLinear")
    for query in (c.interpolate, c.first_derivative, c.node_sensitivities):
        with pytest.raises(InvalidInterpolationDataError, match="at key 2.0"):
            query(b, 3.0)
    assert c.interpolate(b, 1.5) == pytest.approx(0.01)


def test_extrapolators_compare_by_type() -> None:
    assert FlatExtrapolator1D() == get_extrapolator("flat")
    assert LogLinearExtrapolator1D() != FlatExtrapolator1D()
    assert repr(get_extrapolator(CurveExtrapolator.LINEAR)) == "LinearExtrapolator1D()"


def test_combined_min_nodes_follows_interpolator() -> None:
    c = CombinedInterpolatorExtrapolator.of("NaturalCubicSpline", "Flat")
    assert c.min_nodes == 2
    with pytest.raises(InvalidInterpolationDataError):
        c.data_bundle([1.0], [1.0])
