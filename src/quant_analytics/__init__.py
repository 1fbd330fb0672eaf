"""
quant_analytics

Interpolation and volatility-surface evaluation for option pricing.

This package exposes the main user-facing objects at the top level, so you
can write, for example:

    from quant_analytics import CombinedInterpolatorExtrapolator, ExpiryTenorVolatilities
"""

from .exceptions import (
    DomainViolationError,
    ExpiredOptionError,
    InvalidInterpolationDataError,
)
from .interpolation import (
    CombinedInterpolatorExtrapolator,
    CurveExtrapolator,
    CurveInterpolator,
    DataBundle,
    GridData2D,
    GridInterpolator2D,
    Interpolator1D,
    LinearInterpolator1D,
    get_extrapolator,
    get_interpolator,
)
from .market import DayCount, InterpolatedNodalCurve, InterpolatedNodalSurface
from .pricers import PricerResult, price_with_volatilities
from .types import EuropeanOptionSpec, OptionType, VolatilityModel
from .vol import (
    ExpiryStrikeVolatilities,
    ExpiryTenorVolatilities,
    FxSmileVolatilities,
    SmileDeltaTermStructure,
    VolatilitySensitivity,
)

__all__ = [
    # Errors
    "InvalidInterpolationDataError",
    "DomainViolationError",
    "ExpiredOptionError",
    # Interpolation
    "DataBundle",
    "Interpolator1D",
    "LinearInterpolator1D",
    "CurveInterpolator",
    "CurveExtrapolator",
    "get_interpolator",
    "get_extrapolator",
    "CombinedInterpolatorExtrapolator",
    "GridData2D",
    "GridInterpolator2D",
    # Market data
    "DayCount",
    "InterpolatedNodalCurve",
    "InterpolatedNodalSurface",
    # Volatilities
    "VolatilitySensitivity",
    "ExpiryTenorVolatilities",
    "ExpiryStrikeVolatilities",
    "SmileDeltaTermStructure",
    "FxSmileVolatilities",
    # Pricing
    "OptionType",
    "VolatilityModel",
    "EuropeanOptionSpec",
    "PricerResult",
    "price_with_volatilities",
]
