# src/quant_analytics/vol/types.py
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import numpy as np

from quant_analytics.typing import FloatArray


@dataclass(frozen=True, slots=True)
class VolatilitySensitivity:
    """A volatility and its sensitivity to each node of the underlying data.

    ``node_weights[k]`` is ``d value / d node_k`` holding all other nodes fixed,
    in the node order of the surface (or smile) that produced it.
    """

    value: float
    node_weights: FloatArray

    def scaled(self, factor: float) -> FloatArray:
        """Node weights multiplied by ``factor`` (e.g. a vega to bucket it)."""
        return np.asarray(factor * self.node_weights, dtype=np.float64)


@runtime_checkable
class Volatilities(Protocol):
    """What a pricer needs from a volatility provider."""

    @property
    def valuation_date_time(self) -> dt.datetime: ...

    def relative_time(self, expiry: dt.datetime) -> float: ...

    def volatility(
        self, expiry: dt.datetime, tenor: float, strike: float, forward: float
    ) -> float: ...

    def volatility_sensitivity(
        self, expiry: dt.datetime, tenor: float, strike: float, forward: float
    ) -> VolatilitySensitivity: ...
