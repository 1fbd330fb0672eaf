from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from enum import Enum


class OptionType(str, Enum):
    """Option contract type.

    Attributes
    ----------
    CALL : str
        Call option ("call"); a payer swaption on rates.
    PUT : str
        Put option ("put"); a receiver swaption on rates.
    """

    CALL = "call"
    PUT = "put"


class VolatilityModel(str, Enum):
    """How a quoted volatility is turned into a price."""

    BLACK = "black"  # lognormal, Black-76
    NORMAL = "normal"  # Bachelier


@dataclass(frozen=True, slots=True)
class EuropeanOptionSpec:
    """Specification of a European option read off a volatility provider.

    Parameters
    ----------
    kind : OptionType
        Call or put.
    strike : float
        Strike (rate or price level, in forward units).
    expiry : datetime.datetime
        Expiry date-time.
    tenor : float, default 0.0
        Length of the underlying in years (swaptions); ignored by strike-based
        volatilities.
    notional : float, default 1.0
        Signed notional; negative for a short position.

    Notes
    -----
    Plain immutable record; no trade lifecycle is attached.
    """

    kind: OptionType
    strike: float
    expiry: dt.datetime
    tenor: float = 0.0
    notional: float = 1.0

    @property
    def is_call(self) -> bool:
        return self.kind == OptionType.CALL
