from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Protocol

import numpy as np

from quant_analytics.interpolation import (
    CombinedInterpolatorExtrapolator,
    DataBundle,
    Interpolator1D,
)
from quant_analytics.typing import ArrayLike, FloatArray


class DiscountCurve(Protocol):
    def df(self, T: float) -> float: ...
    def __call__(self, T: float) -> float: ...


class ForwardCurve(Protocol):
    def forward(self, T: float, t: float = 0.0) -> float: ...
    def __call__(self, T: float) -> float: ...


@dataclass(frozen=True, slots=True)
class InterpolatedNodalCurve:
    """Curve defined by nodes ``(x_i, y_i)`` and a 1-D interpolator.

    The interpolator is usually a :class:`CombinedInterpolatorExtrapolator`
    so that behaviour outside the nodes is explicit.
    """

    bundle: DataBundle
    interpolator: Interpolator1D

    @classmethod
    def of(
        cls,
        x: ArrayLike,
        y: ArrayLike,
        interpolator: Interpolator1D | None = None,
    ) -> InterpolatedNodalCurve:
        if interpolator is None:
            interpolator = CombinedInterpolatorExtrapolator.of("Linear", "Flat", "Flat")
        return cls(bundle=interpolator.data_bundle(x, y), interpolator=interpolator)

    @property
    def x_values(self) -> FloatArray:
        return self.bundle.keys

    @property
    def y_values(self) -> FloatArray:
        return self.bundle.values

    @property
    def parameter_count(self) -> int:
        return self.bundle.size

    def y_value(self, x: float) -> float:
        return self.interpolator.interpolate(self.bundle, float(x))

    def first_derivative(self, x: float) -> float:
        return self.interpolator.first_derivative(self.bundle, float(x))

    def y_value_parameter_sensitivity(self, x: float) -> FloatArray:
        """``dy(x)/dy_i`` for every node."""
        return self.interpolator.node_sensitivities(self.bundle, float(x))

    def with_y_values(self, y: ArrayLike) -> InterpolatedNodalCurve:
        return InterpolatedNodalCurve(
            bundle=self.bundle.with_values(y), interpolator=self.interpolator
        )


@dataclass(frozen=True, slots=True)
class ZeroRateDiscountCurve:
    """Discount factors from an interpolated continuously-compounded zero curve.

    ``df(T) = exp(-r(T) * T)``
    """

    curve: InterpolatedNodalCurve

    def df(self, T: float) -> float:
        T = float(T)
        if T < 0:
            raise ValueError("T must be >= 0")
        return math.exp(-self.curve.y_value(T) * T)

    def __call__(self, T: float) -> float:
        return self.df(T)

    def zero_rate(self, T: float) -> float:
        return self.curve.y_value(T)

    def df_parameter_sensitivity(self, T: float) -> FloatArray:
        """``d df(T) / d r_i`` for every zero-rate node."""
        T = float(T)
        return np.asarray(
            -T * self.df(T) * self.curve.y_value_parameter_sensitivity(T),
            dtype=np.float64,
        )


@dataclass(frozen=True, slots=True)
class FlatDiscountCurve:
    r: float

    def df(self, T: float) -> float:
        T = float(T)
        if T < 0:
            raise ValueError("T must be >= 0")
        return math.exp(-self.r * T)

    def __call__(self, T: float) -> float:
        return self.df(T)


@dataclass(frozen=True, slots=True)
class FlatCarryForwardCurve:
    """
    Forward curve with constant (continuous) carry.

    F(t,T) = S_t * exp((r - q) * (T - t))

    - r: domestic / risk-free rate (continuous)
    - q: dividend yield / foreign rate / carry yield (continuous)
    """

    spot: float
    r: float
    q: float = 0.0

    def forward(self, T: float, t: float = 0.0) -> float:
        tau = float(T) - float(t)
        if tau < 0.0:
            raise ValueError("T must be >= t")
        if self.spot <= 0.0:
            raise ValueError("spot must be > 0")
        return self.spot * math.exp((self.r - self.q) * tau)

    def __call__(self, T: float) -> float:
        return self.forward(T)
