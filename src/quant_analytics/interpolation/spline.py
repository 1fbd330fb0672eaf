from __future__ import annotations

from functools import lru_cache

import numpy as np

from quant_analytics.numerics.tridiag import Tridiag, solve_tridiag_thomas
from quant_analytics.typing import FloatArray

from .base import Interpolator1D
from .bundle import DataBundle


@lru_cache(maxsize=128)
def _second_derivative_weights(keys: bytes) -> FloatArray:
    """Matrix ``W`` (n x n) with ``M = W @ y``; first and last rows are zero.

    ``W`` depends on the keys only, so it is cached on their raw float64
    bytes and shared by every bundle (and bumped bundle) with the same keys.
    The returned array is read-only.
    """
    x = np.frombuffer(keys, dtype=np.float64)
    n = x.size
    W = np.zeros((n, n), dtype=np.float64)
    if n >= 3:
        h = np.diff(x)
        m = n - 2
        # interior rows i = 1..n-2 of the continuity equations
        D = np.zeros((m, n), dtype=np.float64)
        rows = np.arange(m)
        D[rows, rows] = 6.0 / h[:-1]
        D[rows, rows + 1] = -6.0 / h[:-1] - 6.0 / h[1:]
        D[rows, rows + 2] = 6.0 / h[1:]

        tri = Tridiag(
            lower=h[1:-1].copy(),
            diag=2.0 * (h[:-1] + h[1:]),
            upper=h[1:-1].copy(),
        )
        W[1:-1, :] = solve_tridiag_thomas(tri, D)
    W.setflags(write=False)
    return W


class NaturalCubicSplineInterpolator1D(Interpolator1D):
    """Natural cubic spline (zero second derivative at both end nodes).

    The spline is linear in the node values: with ``M`` the vector of nodal
    second derivatives, ``M = W @ y`` where ``W`` comes from the tridiagonal
    continuity system. Values, derivatives and their node sensitivities are
    all evaluated from the same weight vectors, so the sensitivities are exact.

    Outside the node range the cubic of the end interval is continued; wrap
    with an extrapolator to change that.
    """

    def _weights(self, bundle: DataBundle, x: float) -> tuple[FloatArray, FloatArray]:
        """Weights ``(c, g)`` with ``y(x) = c @ y`` and ``y'(x) = g @ y``."""
        n = bundle.size
        i = min(bundle.lower_bound_index(x), n - 2)
        x1 = bundle.key(i)
        x2 = bundle.key(i + 1)
        h = x2 - x1
        a = (x2 - x) / h
        b = 1.0 - a

        W = _second_derivative_weights(bundle.keys.tobytes())

        c = (h * h / 6.0) * ((a**3 - a) * W[i] + (b**3 - b) * W[i + 1])
        c[i] += a
        c[i + 1] += b

        g = (h / 6.0) * (-(3.0 * a * a - 1.0) * W[i] + (3.0 * b * b - 1.0) * W[i + 1])
        g[i] -= 1.0 / h
        g[i + 1] += 1.0 / h
        return c, g

    def interpolate(self, bundle: DataBundle, x: float) -> float:
        c, _ = self._weights(bundle, x)
        return float(c @ bundle.values)

    def first_derivative(self, bundle: DataBundle, x: float) -> float:
        _, g = self._weights(bundle, x)
        return float(g @ bundle.values)

    def node_sensitivities(self, bundle: DataBundle, x: float) -> FloatArray:
        c, _ = self._weights(bundle, x)
        return c

    def first_derivative_node_sensitivities(
        self, bundle: DataBundle, x: float, **kwargs
    ) -> FloatArray:
        _, g = self._weights(bundle, x)
        return g
