"""Pytest helpers for the quant_analytics library."""

from __future__ import annotations

import datetime as dt

import numpy as np
import pytest

from quant_analytics.interpolation import CombinedInterpolatorExtrapolator, DataBundle
from quant_analytics.market import InterpolatedNodalSurface, linear_flat_grid


@pytest.fixture
def bundle5() -> DataBundle:
    """Five strictly increasing, unevenly spaced nodes."""
    return DataBundle.of([0.5, 1.0, 2.0, 5.0, 10.0], [0.020, 0.025, 0.021, 0.030, 0.028])


@pytest.fixture
def linear_flat() -> CombinedInterpolatorExtrapolator:
    return CombinedInterpolatorExtrapolator.of("Linear", "Flat", "Flat")


@pytest.fixture
def swaption_surface() -> InterpolatedNodalSurface:
    """Expiry x tenor Black volatility surface, 3 expiries by 2 tenors."""
    return InterpolatedNodalSurface.of(
        [0.5, 1.0, 5.0, 0.5, 1.0, 5.0],
        [2.0, 2.0, 2.0, 10.0, 10.0, 10.0],
        [0.35, 0.34, 0.25, 0.30, 0.25, 0.20],
        linear_flat_grid(),
        name="Black Vol",
    )


@pytest.fixture
def val_date_time() -> dt.datetime:
    return dt.datetime(2012, 1, 10, tzinfo=dt.timezone.utc)


@pytest.fixture
def rng():
    """Seeded RNG factory."""

    def _rng(seed: int) -> np.random.Generator:
        return np.random.default_rng(seed)

    return _rng
