from __future__ import annotations

import itertools

import numpy as np
import pytest

from quant_analytics.exceptions import InvalidInterpolationDataError
from quant_analytics.interpolation import (
    CombinedInterpolatorExtrapolator,
    GridData2D,
    GridInterpolator2D,
)
from quant_analytics.market import InterpolatedNodalSurface, linear_flat_grid

EXPIRY = [0.5, 1.0, 5.0, 0.5, 1.0, 5.0]
TENOR = [2.0, 2.0, 2.0, 10.0, 10.0, 10.0]
VOL = [0.35, 0.34, 0.25, 0.30, 0.25, 0.20]


def test_grid_data_groups_nodes_by_y() -> None:
    data = GridData2D.of(EXPIRY, TENOR, VOL)
    np.testing.assert_array_equal(data.x_keys, [0.5, 1.0, 5.0])
    np.testing.assert_array_equal(data.y_keys, [2.0, 10.0])
    assert len(data.slices) == 2
    assert data.slices[0].node_index == (0, 1, 2)
    assert data.slices[1].node_index == (3, 4, 5)
    np.testing.assert_array_equal(data.slices[1].bundle.values, [0.30, 0.25, 0.20])


def test_grid_data_keeps_input_order_for_unsorted_nodes() -> None:
    data = GridData2D.of([5.0, 0.5, 1.0, 1.0], [2.0, 2.0, 2.0, 3.0], [1.0, 2.0, 3.0, 4.0])
    assert data.slices[0].node_index == (1, 2, 0)
    np.testing.assert_array_equal(data.slices[0].bundle.keys, [0.5, 1.0, 5.0])
    np.testing.assert_array_equal(data.z, [1.0, 2.0, 3.0, 4.0])


@pytest.mark.parametrize(
    "x, y, z",
    [
        ([1.0, 2.0], [1.0, 1.0], [1.0]),
        ([1.0, 1.0, 2.0], [1.0, 1.0, 1.0], [1.0, 2.0, 3.0]),
        ([1.0, np.inf], [1.0, 1.0], [1.0, 2.0]),
        ([], [], []),
    ],
)
def test_grid_data_rejects_bad_input(x, y, z) -> None:
    with pytest.raises(InvalidInterpolationDataError):
        GridData2D.of(x, y, z)


def test_surface_reproduces_every_node(swaption_surface: InterpolatedNodalSurface) -> None:
    for k in range(len(VOL)):
        assert swaption_surface.z_value(EXPIRY[k], TENOR[k]) == pytest.approx(
            VOL[k], abs=1e-15
        )


def test_surface_bilinear_value(swaption_surface: InterpolatedNodalSurface) -> None:
    # expiry 0.75 between 0.5 and 1.0, tenor 6 halfway between 2 and 10
    v2 = 0.5 * (0.35 + 0.34)
    v10 = 0.5 * (0.30 + 0.25)
    assert swaption_surface.z_value(0.75, 6.0) == pytest.approx(0.5 * (v2 + v10))


def test_surface_flat_outside_on_both_axes(swaption_surface: InterpolatedNodalSurface) -> None:
    assert swaption_surface.z_value(0.1, 1.0) == pytest.approx(0.35)
    assert swaption_surface.z_value(20.0, 30.0) == pytest.approx(0.20)
    assert swaption_surface.z_value(20.0, 1.0) == pytest.approx(0.25)


@pytest.mark.parametrize(
    "x, y", list(itertools.product([0.2, 0.5, 0.8, 3.0, 5.0, 7.0], [1.0, 2.0, 4.5, 10.0, 12.0]))
)
def test_node_sensitivities_match_bumped_surface(
    swaption_surface: InterpolatedNodalSurface, x: float, y: float
) -> None:
    w = swaption_surface.z_value_parameter_sensitivity(x, y)
    base = swaption_surface.z_value(x, y)
    h = 1e-6
    z = np.array(VOL)
    for k in range(z.size):
        bumped = z.copy()
        bumped[k] += h
        up = swaption_surface.with_z_values(bumped).z_value(x, y)
        assert w[k] == pytest.approx((up - base) / h, abs=1e-8)
    assert float(w.sum()) == pytest.approx(1.0, abs=1e-12)


def test_first_derivatives_match_finite_differences(
    swaption_surface: InterpolatedNodalSurface,
) -> None:
    x, y, h = 2.0, 6.0, 1e-6
    dzdx, dzdy = swaption_surface.first_derivatives(x, y)
    fx = (swaption_surface.z_value(x + h, y) - swaption_surface.z_value(x - h, y)) / (2 * h)
    fy = (swaption_surface.z_value(x, y + h) - swaption_surface.z_value(x, y - h)) / (2 * h)
    assert dzdx == pytest.approx(fx, abs=1e-8)
    assert dzdy == pytest.approx(fy, abs=1e-8)


def test_single_y_value_raises_at_query() -> None:
    surface = InterpolatedNodalSurface.of([1.0, 2.0, 3.0], [5.0, 5.0, 5.0], [0.1, 0.2, 0.3])
    with pytest.raises(InvalidInterpolationDataError):
        surface.z_value(1.5, 5.0)


def test_single_node_slice_raises_at_query() -> None:
    surface = InterpolatedNodalSurface.of(
        [1.0, 2.0, 1.0], [5.0, 5.0, 6.0], [0.1, 0.2, 0.3]
    )
    with pytest.raises(InvalidInterpolationDataError):
        surface.z_value(1.5, 5.5)


def test_sparse_grid_slices_have_their_own_x_keys() -> None:
    surface = InterpolatedNodalSurface.of(
        [1.0, 2.0, 1.0, 3.0], [1.0, 1.0, 2.0, 2.0], [1.0, 2.0, 10.0, 30.0]
    )
    # slice y=1 at x=2 -> 2.0, slice y=2 at x=2 -> 20.0, midway in y
    assert surface.z_value(2.0, 1.5) == pytest.approx(11.0)
    w = surface.z_value_parameter_sensitivity(2.0, 1.5)
    np.testing.assert_allclose(w, [0.0, 0.5, 0.25, 0.25], atol=1e-15)


def test_axis_order_is_x_then_y() -> None:
    # linear in x, step in y: order matters for the result
    linear = CombinedInterpolatorExtrapolator.of("Linear", "Flat")
    step = CombinedInterpolatorExtrapolator.of("StepUpper", "Flat")
    data = GridData2D.of([0.0, 1.0, 0.0, 1.0], [0.0, 0.0, 1.0, 1.0], [0.0, 1.0, 2.0, 5.0])
    grid = GridInterpolator2D(linear, step)
    # y stage picks the upper slice (y=1) evaluated linearly in x
    assert grid.interpolate(data, 0.5, 0.5) == pytest.approx(3.5)


def test_default_interpolator_is_linear_flat() -> None:
    surface = InterpolatedNodalSurface.of(EXPIRY, TENOR, VOL)
    assert surface.interpolator == linear_flat_grid()
    assert surface.parameter_count == 6
