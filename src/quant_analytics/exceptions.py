from __future__ import annotations

import datetime as dt


class InvalidInterpolationDataError(ValueError):
    """Raised when interpolation inputs are malformed at construction time.

    Covers node arrays of different lengths, too few nodes for the selected
    scheme, duplicate keys, keys claimed sorted that are not strictly
    increasing, non-positive values for log-space schemes and unknown
    interpolator or extrapolator names.

    The object being built is never returned partially initialised.
    """


class DomainViolationError(ValueError):
    """Raised when a well-formed object is queried outside its domain.

    Unlike :class:`InvalidInterpolationDataError` this reflects the caller's
    state at query time (an expired option, a delta outside ``(0, 1)``).

    Parameters
    ----------
    message : str
        Human readable description.
    value : object, optional
        The offending input, kept for diagnostics.
    """

    def __init__(self, message: str, value: object = None) -> None:
        super().__init__(message)
        self.value = value


class ExpiredOptionError(DomainViolationError):
    """Raised when a volatility is requested for an expiry before valuation."""

    def __init__(self, expiry: dt.datetime, valuation: dt.datetime) -> None:
        super().__init__(
            f"Option expired: expiry {expiry.isoformat()} is before "
            f"valuation date-time {valuation.isoformat()}",
            value=expiry,
        )
        self.expiry = expiry
        self.valuation = valuation
