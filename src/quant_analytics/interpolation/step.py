from __future__ import annotations

import numpy as np

from quant_analytics.typing import FloatArray

from .base import Interpolator1D, _unit
from .bundle import DataBundle


class StepUpperInterpolator1D(Interpolator1D):
    """Piecewise-constant interpolation taking the upper node of each interval.

    For ``x1 < x <= x2`` the value is ``y2``; below the first key it is the
    first value and at or beyond the last key the last value.
    """

    def _index(self, bundle: DataBundle, x: float) -> int:
        i = bundle.lower_bound_index(x)
        if x <= bundle.first_key or i == bundle.size - 1 or x == bundle.key(i):
            return i
        return i + 1

    def interpolate(self, bundle: DataBundle, x: float) -> float:
        return bundle.value(self._index(bundle, x))

    def first_derivative(self, bundle: DataBundle, x: float) -> float:
        return 0.0

    def node_sensitivities(self, bundle: DataBundle, x: float) -> FloatArray:
        return _unit(bundle.size, self._index(bundle, x))

    def first_derivative_node_sensitivities(
        self, bundle: DataBundle, x: float, **kwargs
    ) -> FloatArray:
        return np.zeros(bundle.size, dtype=np.float64)
