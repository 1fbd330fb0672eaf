from __future__ import annotations

import numpy as np

from quant_analytics.typing import FloatArray

from .base import Interpolator1D, _unit
from .bundle import DataBundle


class LinearInterpolator1D(Interpolator1D):
    """Piecewise-linear interpolation.

    Between nodes ``(x1, y1)`` and ``(x2, y2)``::

        y = y1 + (x - x1) * (y2 - y1) / (x2 - x1)

    At or beyond the last node the value is the last node value (flat), even
    without an extrapolator. The derivative is 0 strictly beyond the last key
    but exactly at the last key it is the slope of the last interval.
    """

    def interpolate(self, bundle: DataBundle, x: float) -> float:
        i = bundle.lower_bound_index(x)
        y1 = bundle.value(i)
        if i == bundle.size - 1:
            return y1
        x1 = bundle.key(i)
        x2 = bundle.key(i + 1)
        y2 = bundle.value(i + 1)
        return y1 + (x - x1) / (x2 - x1) * (y2 - y1)

    def first_derivative(self, bundle: DataBundle, x: float) -> float:
        i = bundle.lower_bound_index(x)
        if i == bundle.size - 1:
            if x > bundle.last_key:
                return 0.0
            i -= 1
        x1 = bundle.key(i)
        y1 = bundle.value(i)
        x2 = bundle.key(i + 1)
        y2 = bundle.value(i + 1)
        return (y2 - y1) / (x2 - x1)

    def node_sensitivities(self, bundle: DataBundle, x: float) -> FloatArray:
        n = bundle.size
        i = bundle.lower_bound_index(x)
        if i == n - 1:
            return _unit(n, n - 1)
        x1 = bundle.key(i)
        x2 = bundle.key(i + 1)
        a = (x2 - x) / (x2 - x1)
        out = np.zeros(n, dtype=np.float64)
        out[i] = a
        out[i + 1] = 1.0 - a
        return out

    def first_derivative_node_sensitivities(
        self, bundle: DataBundle, x: float, **kwargs
    ) -> FloatArray:
        n = bundle.size
        out = np.zeros(n, dtype=np.float64)
        i = bundle.lower_bound_index(x)
        if i == n - 1:
            if x > bundle.last_key:
                return out
            i -= 1
        inv_dx = 1.0 / (bundle.key(i + 1) - bundle.key(i))
        out[i] = -inv_dx
        out[i + 1] = inv_dx
        return out
