from __future__ import annotations

from dataclasses import dataclass

from quant_analytics.interpolation import (
    CombinedInterpolatorExtrapolator,
    GridData2D,
    GridInterpolator2D,
)
from quant_analytics.typing import ArrayLike, FloatArray


def linear_flat_grid() -> GridInterpolator2D:
    """Linear interpolation with flat extrapolation on both axes."""
    linear_flat = CombinedInterpolatorExtrapolator.of("Linear", "Flat", "Flat")
    return GridInterpolator2D(linear_flat, linear_flat)


@dataclass(frozen=True, slots=True)
class InterpolatedNodalSurface:
    """Surface ``z(x, y)`` defined by scattered nodes and a grid interpolator.

    Node order is that of the constructor arrays; parameter sensitivities are
    reported in the same order.

    Parameters
    ----------
    data : GridData2D
        Surface nodes.
    interpolator : GridInterpolator2D
        x-then-y repeated interpolation.
    name : str
        Label used by diagnostics.
    """

    data: GridData2D
    interpolator: GridInterpolator2D
    name: str = "surface"

    @classmethod
    def of(
        cls,
        x: ArrayLike,
        y: ArrayLike,
        z: ArrayLike,
        interpolator: GridInterpolator2D | None = None,
        *,
        name: str = "surface",
    ) -> InterpolatedNodalSurface:
        return cls(
            data=GridData2D.of(x, y, z),
            interpolator=linear_flat_grid() if interpolator is None else interpolator,
            name=name,
        )

    @property
    def parameter_count(self) -> int:
        return self.data.size

    def z_value(self, x: float, y: float) -> float:
        return self.interpolator.interpolate(self.data, float(x), float(y))

    def first_derivatives(self, x: float, y: float) -> tuple[float, float]:
        return self.interpolator.first_derivative(self.data, float(x), float(y))

    def z_value_parameter_sensitivity(self, x: float, y: float) -> FloatArray:
        return self.interpolator.node_sensitivities(self.data, float(x), float(y))

    def with_z_values(self, z: ArrayLike) -> InterpolatedNodalSurface:
        return InterpolatedNodalSurface(
            data=self.data.with_z(z), interpolator=self.interpolator, name=self.name
        )
