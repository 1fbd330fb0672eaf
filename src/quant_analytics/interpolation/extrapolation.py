from __future__ import annotations

import math
from abc import ABC, abstractmethod
from enum import Enum

from quant_analytics.exceptions import InvalidInterpolationDataError
from quant_analytics.typing import FloatArray

from .base import Interpolator1D, _unit
from .bundle import DataBundle


def _boundary(bundle: DataBundle, x: float) -> int:
    """Index of the end node nearest to an out-of-range ``x``."""
    return 0 if x < bundle.first_key else bundle.size - 1


def _require_positive(y: float, x: float) -> None:
    if not y > 0.0:
        raise InvalidInterpolationDataError(
            f"log-linear extrapolation requires a strictly positive boundary value, "
            f"got {y} at key {x}"
        )


class Extrapolator1D(ABC):
    """Policy for queries outside ``[keys[0], keys[-1]]``.

    Extrapolators only see the bundle and the wrapped interpolator; the
    boundary slope is always the interpolator's derivative at the end key.
    """

    @abstractmethod
    def extrapolate(
        self, bundle: DataBundle, x: float, interpolator: Interpolator1D
    ) -> float: ...

    @abstractmethod
    def first_derivative(
        self, bundle: DataBundle, x: float, interpolator: Interpolator1D
    ) -> float: ...

    @abstractmethod
    def node_sensitivities(
        self, bundle: DataBundle, x: float, interpolator: Interpolator1D
    ) -> FloatArray: ...

    def check_bundle(self, bundle: DataBundle, end: int) -> None:
        """Validate the boundary node ``end`` (0 or ``n-1``) this policy extends."""
        return None

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self)

    def __hash__(self) -> int:
        return hash(type(self))

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class FlatExtrapolator1D(Extrapolator1D):
    """Boundary value, zero slope."""

    def extrapolate(self, bundle, x, interpolator):
        return bundle.value(_boundary(bundle, x))

    def first_derivative(self, bundle, x, interpolator):
        return 0.0

    def node_sensitivities(self, bundle, x, interpolator):
        return _unit(bundle.size, _boundary(bundle, x))


class LinearExtrapolator1D(Extrapolator1D):
    """Extends the tangent at the boundary node: ``y_b + y'_b (x - x_b)``."""

    def extrapolate(self, bundle, x, interpolator):
        b = _boundary(bundle, x)
        xb = bundle.key(b)
        return bundle.value(b) + interpolator.first_derivative(bundle, xb) * (x - xb)

    def first_derivative(self, bundle, x, interpolator):
        return interpolator.first_derivative(bundle, bundle.key(_boundary(bundle, x)))

    def node_sensitivities(self, bundle, x, interpolator):
        b = _boundary(bundle, x)
        xb = bundle.key(b)
        dsens = interpolator.first_derivative_node_sensitivities(bundle, xb)
        return _unit(bundle.size, b) + dsens * (x - xb)


class LogLinearExtrapolator1D(Extrapolator1D):
    """Extends ``ln(y)`` linearly: ``y_b * exp(y'_b / y_b * (x - x_b))``.

    Value and slope are continuous at the boundary. The boundary value must
    be strictly positive.
    """

    def check_bundle(self, bundle: DataBundle, end: int) -> None:
        _require_positive(bundle.value(end), bundle.key(end))

    def _parts(self, bundle, x, interpolator):
        b = _boundary(bundle, x)
        xb = bundle.key(b)
        yb = bundle.value(b)
        _require_positive(yb, xb)
        db = interpolator.first_derivative(bundle, xb)
        return b, xb, yb, db

    def extrapolate(self, bundle, x, interpolator):
        _, xb, yb, db = self._parts(bundle, x, interpolator)
        return yb * math.exp(db / yb * (x - xb))

    def first_derivative(self, bundle, x, interpolator):
        _, xb, yb, db = self._parts(bundle, x, interpolator)
        return db * math.exp(db / yb * (x - xb))

    def node_sensitivities(self, bundle, x, interpolator):
        b, xb, yb, db = self._parts(bundle, x, interpolator)
        dx = x - xb
        growth = math.exp(db / yb * dx)
        unit_b = _unit(bundle.size, b)
        dsens = interpolator.first_derivative_node_sensitivities(bundle, xb)
        # d(slope)/dy_j with slope = db / yb
        dslope = dsens / yb - (db / (yb * yb)) * unit_b
        return growth * (unit_b + yb * dx * dslope)


class CurveExtrapolator(str, Enum):
    FLAT = "Flat"
    LINEAR = "Linear"
    LOG_LINEAR = "LogLinear"

    @classmethod
    def of(cls, name: CurveExtrapolator | str) -> CurveExtrapolator:
        """Parse an extrapolator name (case-insensitive, ``_``/``-`` ignored)."""
        if isinstance(name, CurveExtrapolator):
            return name
        key = str(name).replace("_", "").replace("-", "").lower()
        for member in cls:
            if member.value.lower() == key:
                return member
        raise InvalidInterpolationDataError(f"Unknown extrapolator name: {name!r}")


_EXTRAPOLATORS: dict[CurveExtrapolator, Extrapolator1D] = {
    CurveExtrapolator.FLAT: FlatExtrapolator1D(),
    CurveExtrapolator.LINEAR: LinearExtrapolator1D(),
    CurveExtrapolator.LOG_LINEAR: LogLinearExtrapolator1D(),
}


def get_extrapolator(kind: CurveExtrapolator | str) -> Extrapolator1D:
    return _EXTRAPOLATORS[CurveExtrapolator.of(kind)]


__all__ = [
    "CurveExtrapolator",
    "Extrapolator1D",
    "FlatExtrapolator1D",
    "LinearExtrapolator1D",
    "LogLinearExtrapolator1D",
    "get_extrapolator",
]
