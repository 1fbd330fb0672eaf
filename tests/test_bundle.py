from __future__ import annotations

import numpy as np
import pytest

from quant_analytics.exceptions import InvalidInterpolationDataError
from quant_analytics.interpolation import DataBundle


def test_of_sorts_and_copies_inputs() -> None:
    x = np.array([3.0, 1.0, 2.0])
    y = np.array([30.0, 10.0, 20.0])
    b = DataBundle.of(x, y)

    np.testing.assert_array_equal(b.keys, [1.0, 2.0, 3.0])
    np.testing.assert_array_equal(b.values, [10.0, 20.0, 30.0])

    # bundle owns its data
    x[0] = 99.0
    y[:] = 0.0
    np.testing.assert_array_equal(b.keys, [1.0, 2.0, 3.0])
    np.testing.assert_array_equal(b.values, [10.0, 20.0, 30.0])

    with pytest.raises(ValueError):
        b.keys[0] = 5.0


def test_accessors() -> None:
    b = DataBundle.of_sorted([1.0, 2.0, 4.0], [5.0, 6.0, 7.0])
    assert b.size == len(b) == 3
    assert b.key(1) == 2.0
    assert b.value(2) == 7.0
    assert b.first_key == 1.0
    assert b.last_key == 4.0


@pytest.mark.parametrize(
    "x, y",
    [
        ([1.0, 2.0], [1.0]),  # mismatched lengths
        ([1.0], [1.0]),  # too few nodes
        ([], []),
        ([1.0, 1.0, 2.0], [1.0, 2.0, 3.0]),  # duplicate keys
        ([1.0, np.nan], [1.0, 2.0]),
    ],
)
def test_of_rejects_malformed_input(x, y) -> None:
    with pytest.raises(InvalidInterpolationDataError):
        DataBundle.of(x, y)


@pytest.mark.parametrize(
    "x",
    [
        [1.0, 3.0, 2.0],  # unsorted
        [1.0, 2.0, 2.0],  # duplicate
    ],
)
def test_already_sorted_still_validates(x) -> None:
    with pytest.raises(InvalidInterpolationDataError):
        DataBundle.of(x, [1.0, 2.0, 3.0], already_sorted=True)


def test_invalid_input_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        DataBundle.of([1.0, 2.0], [1.0, 2.0, 3.0])


def test_lower_bound_index_clamps() -> None:
    b = DataBundle.of_sorted([1.0, 2.0, 3.0], [0.0, 0.0, 0.0])
    assert b.lower_bound_index(-10.0) == 0
    assert b.lower_bound_index(1.0) == 0
    assert b.lower_bound_index(1.999) == 0
    assert b.lower_bound_index(2.0) == 1
    assert b.lower_bound_index(3.0) == 2
    assert b.lower_bound_index(100.0) == 2


def test_lower_bound_index_at_and_between_nodes() -> None:
    keys = [0.1, 0.7, 1.5, 4.0, 9.0]
    b = DataBundle.of(keys, [1.0, 2.0, 3.0, 4.0, 5.0])
    for k in range(len(keys)):
        assert b.lower_bound_index(keys[k]) == k
    for k in range(len(keys) - 1):
        mid = keys[k] + 0.5 * (keys[k + 1] - keys[k])
        assert b.lower_bound_index(mid) == k


def test_with_value_returns_new_bundle() -> None:
    b = DataBundle.of([1.0, 2.0], [3.0, 4.0])
    b2 = b.with_value(0, 10.0)
    assert b.value(0) == 3.0
    assert b2.value(0) == 10.0
    assert b2.keys is b.keys

    with pytest.raises(InvalidInterpolationDataError):
        b.with_values([1.0, 2.0, 3.0])
