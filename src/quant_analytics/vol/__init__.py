from .smile import (
    FxSmileVolatilities,
    SmileDeltaParameters,
    SmileDeltaTermStructure,
    strike_from_forward_delta,
)
from .surface import ExpiryStrikeVolatilities, ExpiryTenorVolatilities, relative_time
from .types import Volatilities, VolatilitySensitivity

__all__ = [
    "Volatilities",
    "VolatilitySensitivity",
    "relative_time",
    "ExpiryTenorVolatilities",
    "ExpiryStrikeVolatilities",
    "SmileDeltaParameters",
    "SmileDeltaTermStructure",
    "FxSmileVolatilities",
    "strike_from_forward_delta",
]
