from __future__ import annotations

from functools import lru_cache

import numpy as np

from quant_analytics.typing import FloatArray

from .base import Interpolator1D
from .bundle import DataBundle


def fritsch_carlson_slopes(x: FloatArray, y: FloatArray) -> FloatArray:
    """Nodal slopes of the Fritsch–Carlson monotone Hermite cubic."""
    h = np.diff(x)
    delta = np.diff(y) / h  # shape (n-1,)

    n = x.size
    d = np.empty(n, dtype=np.float64)
    if n == 2:
        d[:] = delta[0]
        return d

    # three-point nonuniform derivative, one-sided at the ends
    d[1:-1] = (h[1:] * delta[:-1] + h[:-1] * delta[1:]) / (h[:-1] + h[1:])
    d[0] = ((2.0 * h[0] + h[1]) * delta[0] - h[0] * delta[1]) / (h[0] + h[1])
    d[-1] = ((2.0 * h[-1] + h[-2]) * delta[-1] - h[-1] * delta[-2]) / (h[-1] + h[-2])

    # Step 1: delta==0 => set both adjacent derivatives to 0
    mask_zero = delta == 0.0
    d[:-1][mask_zero] = 0.0
    d[1:][mask_zero] = 0.0

    # Sign consistency: sgn(d_i) = sgn(d_{i+1}) = sgn(delta_i)
    d[:-1] = np.where(d[:-1] * delta > 0.0, d[:-1], 0.0)
    d[1:] = np.where(d[1:] * delta > 0.0, d[1:], 0.0)

    # Step 2: S1 square via ray scaling (tau = 3/max(alpha,beta))
    for i in range(delta.size):
        if delta[i] == 0.0:
            continue
        alpha = d[i] / delta[i]
        beta = d[i + 1] / delta[i]
        m = max(abs(alpha), abs(beta))
        if m > 3.0:
            tau = 3.0 / m
            d[i] *= tau
            d[i + 1] *= tau
    return d


@lru_cache(maxsize=128)
def _cached_slopes(keys: bytes, values: bytes) -> FloatArray:
    d = fritsch_carlson_slopes(
        np.frombuffer(keys, dtype=np.float64), np.frombuffer(values, dtype=np.float64)
    )
    d.setflags(write=False)
    return d


class MonotoneCubicInterpolator1D(Interpolator1D):
    """Fritsch–Carlson monotonicity-preserving cubic Hermite interpolation.

    Monotone stretches of the data stay monotone and local extrema are not
    overshot. Outside the node range the value is flat at the end values.

    The limiter makes the scheme nonlinear in the node values, so node
    sensitivities are computed by central finite differences.

    Nodal slopes are cached on the bundle's keys and values. Each bumped
    bundle has new values, so a sensitivity query still costs O(n^2).
    """

    def _segment(self, bundle: DataBundle, x: float):
        x_nodes = bundle.keys
        y_nodes = bundle.values
        d = _cached_slopes(x_nodes.tobytes(), y_nodes.tobytes())
        i = min(bundle.lower_bound_index(x), bundle.size - 2)
        hloc = x_nodes[i + 1] - x_nodes[i]
        t = (x - x_nodes[i]) / hloc
        return (
            t,
            hloc,
            float(y_nodes[i]),
            float(y_nodes[i + 1]),
            float(d[i]),
            float(d[i + 1]),
        )

    def interpolate(self, bundle: DataBundle, x: float) -> float:
        if x <= bundle.first_key:
            return bundle.first_value
        if x >= bundle.last_key:
            return bundle.last_value
        t, hloc, y0, y1, d0, d1 = self._segment(bundle, x)

        h00 = 2 * t**3 - 3 * t**2 + 1
        h10 = t**3 - 2 * t**2 + t
        h01 = -2 * t**3 + 3 * t**2
        h11 = t**3 - t**2
        return h00 * y0 + h10 * hloc * d0 + h01 * y1 + h11 * hloc * d1

    def first_derivative(self, bundle: DataBundle, x: float) -> float:
        if x < bundle.first_key or x > bundle.last_key:
            return 0.0
        t, hloc, y0, y1, d0, d1 = self._segment(bundle, x)

        dh00 = 6 * t**2 - 6 * t
        dh10 = 3 * t**2 - 4 * t + 1
        dh01 = -6 * t**2 + 6 * t
        dh11 = 3 * t**2 - 2 * t
        return (dh00 * y0 + dh01 * y1) / hloc + dh10 * d0 + dh11 * d1

    def node_sensitivities(self, bundle: DataBundle, x: float) -> FloatArray:
        return self._fd_node_sensitivities(bundle, x)
