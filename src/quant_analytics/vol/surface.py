from __future__ import annotations

import datetime as dt
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass

from quant_analytics.exceptions import DomainViolationError, ExpiredOptionError
from quant_analytics.interpolation import GridInterpolator2D
from quant_analytics.market.daycount import DayCount
from quant_analytics.market.surface import InterpolatedNodalSurface

from .types import VolatilitySensitivity

logger = logging.getLogger(__name__)


def relative_time(
    valuation: dt.datetime, expiry: dt.datetime, day_count: DayCount
) -> float:
    """Year fraction from the valuation date-time to an option expiry.

    - ``expiry > valuation``: the day-count year fraction (``0.0`` for an
      expiry later on the valuation day).
    - ``expiry == valuation``: ``0.0``; the volatility can still be read, the
      pricer treats the option as expired.
    - ``expiry < valuation``: :class:`ExpiredOptionError`.

    Both date-times must be timezone-aware, or both naive; mixing the two
    raises :class:`DomainViolationError`.
    """
    if (expiry.utcoffset() is None) != (valuation.utcoffset() is None):
        raise DomainViolationError(
            f"cannot compare timezone-aware and naive date-times: "
            f"expiry {expiry.isoformat()}, valuation {valuation.isoformat()}",
            value=expiry,
        )
    if expiry < valuation:
        raise ExpiredOptionError(expiry, valuation)
    return day_count.relative_year_fraction(valuation, expiry)


@dataclass(frozen=True, slots=True)
class _SurfaceVolatilities(ABC):
    surface: InterpolatedNodalSurface
    valuation_date_time: dt.datetime
    day_count: DayCount = DayCount.ACT_365F

    def __post_init__(self) -> None:
        logger.debug(
            "%s on %r: %d nodes, valuation %s, %s",
            type(self).__name__,
            self.surface.name,
            self.surface.parameter_count,
            self.valuation_date_time.isoformat(),
            self.day_count.value,
        )

    def relative_time(self, expiry: dt.datetime) -> float:
        return relative_time(self.valuation_date_time, expiry, self.day_count)

    @abstractmethod
    def _coordinates(
        self, expiry: dt.datetime, tenor: float, strike: float, forward: float
    ) -> tuple[float, float]: ...

    def volatility(
        self, expiry: dt.datetime, tenor: float, strike: float, forward: float
    ) -> float:
        x, y = self._coordinates(expiry, tenor, strike, forward)
        return self.surface.z_value(x, y)

    def volatility_sensitivity(
        self, expiry: dt.datetime, tenor: float, strike: float, forward: float
    ) -> VolatilitySensitivity:
        x, y = self._coordinates(expiry, tenor, strike, forward)
        return VolatilitySensitivity(
            value=self.surface.z_value(x, y),
            node_weights=self.surface.z_value_parameter_sensitivity(x, y),
        )

    def with_surface(self, surface: InterpolatedNodalSurface):
        return type(self)(
            surface=surface,
            valuation_date_time=self.valuation_date_time,
            day_count=self.day_count,
        )


@dataclass(frozen=True, slots=True)
class ExpiryTenorVolatilities(_SurfaceVolatilities):
    """Swaption-style volatilities on an (expiry year fraction, tenor) surface.

    Strike and forward are accepted for a uniform signature but not used.

    Examples
    --------
    >>> surface = InterpolatedNodalSurface.of(
    ...     [0.5, 1.0, 5.0, 0.5, 1.0, 5.0],
    ...     [2, 2, 2, 10, 10, 10],
    ...     [0.35, 0.34, 0.25, 0.30, 0.25, 0.20],
    ... )
    >>> vols = ExpiryTenorVolatilities(surface, dt.datetime(2012, 1, 10))
    """

    def _coordinates(self, expiry, tenor, strike, forward):
        return self.relative_time(expiry), float(tenor)


@dataclass(frozen=True, slots=True)
class ExpiryStrikeVolatilities(_SurfaceVolatilities):
    """Volatilities on an (expiry year fraction, strike) surface; tenor is unused."""

    def _coordinates(self, expiry, tenor, strike, forward):
        return self.relative_time(expiry), float(strike)

    @classmethod
    def from_rows(
        cls,
        rows: Iterable[tuple[float, float, float]],  # (T, K, vol)
        valuation_date_time: dt.datetime,
        *,
        day_count: DayCount = DayCount.ACT_365F,
        interpolator: GridInterpolator2D | None = None,
        name: str = "expiry-strike",
    ) -> ExpiryStrikeVolatilities:
        """Construct from scattered ``(T, K, vol)`` points.

        Raises
        ------
        InvalidInterpolationDataError
            If a ``(T, K)`` pair repeats or the rows are not finite.
        """
        pts = [(float(T), float(K), float(v)) for T, K, v in rows]
        surface = InterpolatedNodalSurface.of(
            [p[0] for p in pts],
            [p[1] for p in pts],
            [p[2] for p in pts],
            interpolator,
            name=name,
        )
        return cls(surface=surface, valuation_date_time=valuation_date_time, day_count=day_count)
