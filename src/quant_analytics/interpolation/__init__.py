# src/quant_analytics/interpolation/__init__.py
"""
Interpolation framework.

One-dimensional schemes share the value / first-derivative / node-sensitivity
contract of :class:`Interpolator1D`; extrapolation policies decorate them via
:class:`CombinedInterpolatorExtrapolator`; :class:`GridInterpolator2D`
composes two of them into a surface interpolator.
"""

from .base import Interpolator1D
from .bundle import DataBundle
from .combined import (
    CombinedInterpolatorExtrapolator,
    CurveInterpolator,
    get_interpolator,
)
from .extrapolation import (
    CurveExtrapolator,
    Extrapolator1D,
    FlatExtrapolator1D,
    LinearExtrapolator1D,
    LogLinearExtrapolator1D,
    get_extrapolator,
)
from .grid2d import GridData2D, GridInterpolator2D, GridSlice
from .linear import LinearInterpolator1D
from .log_linear import LogLinearInterpolator1D
from .monotone import MonotoneCubicInterpolator1D, fritsch_carlson_slopes
from .spline import NaturalCubicSplineInterpolator1D
from .step import StepUpperInterpolator1D

__all__ = [
    "DataBundle",
    "Interpolator1D",
    # 1-D schemes
    "LinearInterpolator1D",
    "LogLinearInterpolator1D",
    "StepUpperInterpolator1D",
    "NaturalCubicSplineInterpolator1D",
    "MonotoneCubicInterpolator1D",
    "fritsch_carlson_slopes",
    "CurveInterpolator",
    "get_interpolator",
    # Extrapolation
    "Extrapolator1D",
    "FlatExtrapolator1D",
    "LinearExtrapolator1D",
    "LogLinearExtrapolator1D",
    "CurveExtrapolator",
    "get_extrapolator",
    "CombinedInterpolatorExtrapolator",
    # 2-D
    "GridData2D",
    "GridSlice",
    "GridInterpolator2D",
]
