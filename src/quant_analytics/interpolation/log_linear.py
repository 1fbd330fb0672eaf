from __future__ import annotations

import math

import numpy as np

from quant_analytics.exceptions import InvalidInterpolationDataError
from quant_analytics.typing import FloatArray

from .base import Interpolator1D, _unit
from .bundle import DataBundle


class LogLinearInterpolator1D(Interpolator1D):
    """Linear interpolation of ``ln(y)``; node values must be strictly positive.

    Typical use is interpolation of discount factors. Like the linear scheme,
    the value is flat at and beyond the last node.
    """

    def check_bundle(self, bundle: DataBundle) -> None:
        super().check_bundle(bundle)
        if np.any(bundle.values <= 0.0):
            raise InvalidInterpolationDataError(
                "log-linear interpolation requires strictly positive values"
            )

    def interpolate(self, bundle: DataBundle, x: float) -> float:
        i = bundle.lower_bound_index(x)
        y1 = bundle.value(i)
        if i == bundle.size - 1:
            return y1
        x1 = bundle.key(i)
        x2 = bundle.key(i + 1)
        y2 = bundle.value(i + 1)
        return y1 * math.exp((x - x1) / (x2 - x1) * math.log(y2 / y1))

    def first_derivative(self, bundle: DataBundle, x: float) -> float:
        i = bundle.lower_bound_index(x)
        if i == bundle.size - 1:
            if x > bundle.last_key:
                return 0.0
            i -= 1
        x1 = bundle.key(i)
        x2 = bundle.key(i + 1)
        slope = math.log(bundle.value(i + 1) / bundle.value(i)) / (x2 - x1)
        return self.interpolate(bundle, x) * slope

    def node_sensitivities(self, bundle: DataBundle, x: float) -> FloatArray:
        n = bundle.size
        i = bundle.lower_bound_index(x)
        if i == n - 1:
            return _unit(n, n - 1)
        x1 = bundle.key(i)
        x2 = bundle.key(i + 1)
        a = (x2 - x) / (x2 - x1)
        y = self.interpolate(bundle, x)
        out = np.zeros(n, dtype=np.float64)
        out[i] = y * a / bundle.value(i)
        out[i + 1] = y * (1.0 - a) / bundle.value(i + 1)
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
        x1 = bundle.key(i)
        x2 = bundle.key(i + 1)
        y1 = bundle.value(i)
        y2 = bundle.value(i + 1)
        dx = x2 - x1
        a = (x2 - x) / dx
        y = self.interpolate(bundle, x)
        slope = math.log(y2 / y1) / dx
        out[i] = y * a / y1 * slope - y / (y1 * dx)
        out[i + 1] = y * (1.0 - a) / y2 * slope + y / (y2 * dx)
        return out
