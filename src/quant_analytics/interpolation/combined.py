from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from quant_analytics.exceptions import InvalidInterpolationDataError
from quant_analytics.typing import FloatArray

from .base import Interpolator1D
from .bundle import DataBundle
from .extrapolation import CurveExtrapolator, Extrapolator1D, get_extrapolator
from .linear import LinearInterpolator1D
from .log_linear import LogLinearInterpolator1D
from .monotone import MonotoneCubicInterpolator1D
from .spline import NaturalCubicSplineInterpolator1D
from .step import StepUpperInterpolator1D


class CurveInterpolator(str, Enum):
    LINEAR = "Linear"
    LOG_LINEAR = "LogLinear"
    STEP_UPPER = "StepUpper"
    NATURAL_CUBIC_SPLINE = "NaturalCubicSpline"
    MONOTONE_CUBIC = "MonotoneCubic"

    @classmethod
    def of(cls, name: CurveInterpolator | str) -> CurveInterpolator:
        """Parse an interpolator name (case-insensitive, ``_``/``-`` ignored)."""
        if isinstance(name, CurveInterpolator):
            return name
        key = str(name).replace("_", "").replace("-", "").lower()
        for member in cls:
            if member.value.lower() == key:
                return member
        raise InvalidInterpolationDataError(f"Unknown interpolator name: {name!r}")


_INTERPOLATORS: dict[CurveInterpolator, Interpolator1D] = {
    CurveInterpolator.LINEAR: LinearInterpolator1D(),
    CurveInterpolator.LOG_LINEAR: LogLinearInterpolator1D(),
    CurveInterpolator.STEP_UPPER: StepUpperInterpolator1D(),
    CurveInterpolator.NATURAL_CUBIC_SPLINE: NaturalCubicSplineInterpolator1D(),
    CurveInterpolator.MONOTONE_CUBIC: MonotoneCubicInterpolator1D(),
}


def get_interpolator(kind: CurveInterpolator | str) -> Interpolator1D:
    return _INTERPOLATORS[CurveInterpolator.of(kind)]


@dataclass(frozen=True, slots=True, eq=True)
class CombinedInterpolatorExtrapolator(Interpolator1D):
    """An interpolator with explicit left and right extrapolation policies.

    Inside ``[keys[0], keys[-1]]`` every call goes to ``interpolator``.
    Below the first key ``left`` applies, above the last key ``right``.

    Examples
    --------
    >>> linear_flat = CombinedInterpolatorExtrapolator.of("Linear", "Flat", "Flat")
    """

    interpolator: Interpolator1D
    left: Extrapolator1D
    right: Extrapolator1D

    @classmethod
    def of(
        cls,
        interpolator: CurveInterpolator | str,
        left: CurveExtrapolator | str = CurveExtrapolator.FLAT,
        right: CurveExtrapolator | str | None = None,
    ) -> CombinedInterpolatorExtrapolator:
        """Build from names; ``right`` defaults to ``left``.

        Raises
        ------
        InvalidInterpolationDataError
            If any name is unknown.
        """
        return cls(
            interpolator=get_interpolator(interpolator),
            left=get_extrapolator(left),
            right=get_extrapolator(left if right is None else right),
        )

    @property
    def min_nodes(self) -> int:  # type: ignore[override]
        return self.interpolator.min_nodes

    def check_bundle(self, bundle: DataBundle) -> None:
        self.interpolator.check_bundle(bundle)
        self.left.check_bundle(bundle, 0)
        self.right.check_bundle(bundle, bundle.size - 1)

    def _outside(self, bundle: DataBundle, x: float) -> Extrapolator1D | None:
        if x < bundle.first_key:
            return self.left
        if x > bundle.last_key:
            return self.right
        return None

    def interpolate(self, bundle: DataBundle, x: float) -> float:
        ext = self._outside(bundle, x)
        if ext is None:
            return self.interpolator.interpolate(bundle, x)
        return ext.extrapolate(bundle, x, self.interpolator)

    def first_derivative(self, bundle: DataBundle, x: float) -> float:
        ext = self._outside(bundle, x)
        if ext is None:
            return self.interpolator.first_derivative(bundle, x)
        return ext.first_derivative(bundle, x, self.interpolator)

    def node_sensitivities(self, bundle: DataBundle, x: float) -> FloatArray:
        ext = self._outside(bundle, x)
        if ext is None:
            return self.interpolator.node_sensitivities(bundle, x)
        return ext.node_sensitivities(bundle, x, self.interpolator)

    def first_derivative_node_sensitivities(
        self, bundle: DataBundle, x: float, **kwargs
    ) -> FloatArray:
        if self._outside(bundle, x) is None:
            return self.interpolator.first_derivative_node_sensitivities(
                bundle, x, **kwargs
            )
        return super(CombinedInterpolatorExtrapolator, self).first_derivative_node_sensitivities(
            bundle, x, **kwargs
        )

    def __repr__(self) -> str:
        return (
            f"CombinedInterpolatorExtrapolator({self.interpolator!r}, "
            f"left={self.left!r}, right={self.right!r})"
        )
