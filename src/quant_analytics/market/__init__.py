from .curves import (
    DiscountCurve,
    FlatCarryForwardCurve,
    FlatDiscountCurve,
    ForwardCurve,
    InterpolatedNodalCurve,
    ZeroRateDiscountCurve,
)
from .daycount import DayCount
from .surface import InterpolatedNodalSurface, linear_flat_grid

__all__ = [
    "DayCount",
    "DiscountCurve",
    "ForwardCurve",
    "FlatDiscountCurve",
    "FlatCarryForwardCurve",
    "InterpolatedNodalCurve",
    "ZeroRateDiscountCurve",
    "InterpolatedNodalSurface",
    "linear_flat_grid",
]
