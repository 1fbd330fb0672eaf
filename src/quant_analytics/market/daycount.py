from __future__ import annotations

import calendar
import datetime as dt
from enum import Enum
from typing import TypeAlias

from quant_analytics.exceptions import InvalidInterpolationDataError

DateLike: TypeAlias = dt.date | dt.datetime


def _to_date(d: DateLike) -> dt.date:
    return d.date() if isinstance(d, dt.datetime) else d


def _act_act_isda(d1: dt.date, d2: dt.date) -> float:
    if d1.year == d2.year:
        return (d2 - d1).days / (366.0 if calendar.isleap(d1.year) else 365.0)
    start_year_end = dt.date(d1.year + 1, 1, 1)
    end_year_start = dt.date(d2.year, 1, 1)
    first = (start_year_end - d1).days / (366.0 if calendar.isleap(d1.year) else 365.0)
    last = (d2 - end_year_start).days / (366.0 if calendar.isleap(d2.year) else 365.0)
    return first + (d2.year - d1.year - 1) + last


class DayCount(str, Enum):
    """Day count conventions converting a pair of dates to a year fraction.

    Date-times are reduced to their dates, so two instants on the same day
    are 0 years apart.
    """

    ACT_365F = "Act/365F"
    ACT_360 = "Act/360"
    ACT_ACT_ISDA = "Act/Act ISDA"

    @classmethod
    def of(cls, name: DayCount | str) -> DayCount:
        if isinstance(name, DayCount):
            return name
        key = str(name).replace(" ", "").replace("_", "").lower()
        for member in cls:
            if member.value.replace(" ", "").replace("_", "").lower() == key:
                return member
        raise InvalidInterpolationDataError(f"Unknown day count: {name!r}")

    def year_fraction(self, d1: DateLike, d2: DateLike) -> float:
        """Year fraction from ``d1`` to ``d2``; requires ``d1 <= d2``."""
        a = _to_date(d1)
        b = _to_date(d2)
        if b < a:
            raise ValueError(f"year_fraction requires d1 <= d2, got {a} > {b}")
        if self is DayCount.ACT_365F:
            return (b - a).days / 365.0
        if self is DayCount.ACT_360:
            return (b - a).days / 360.0
        return _act_act_isda(a, b)

    def relative_year_fraction(self, d1: DateLike, d2: DateLike) -> float:
        """Signed year fraction: negative when ``d2`` is before ``d1``."""
        if _to_date(d2) < _to_date(d1):
            return -self.year_fraction(d2, d1)
        return self.year_fraction(d1, d2)
