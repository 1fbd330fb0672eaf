from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from quant_analytics.exceptions import InvalidInterpolationDataError
from quant_analytics.typing import ArrayLike, FloatArray


def _as_vector(a: ArrayLike, name: str) -> FloatArray:
    arr = np.array(a, dtype=np.float64, copy=True)
    if arr.ndim != 1:
        raise InvalidInterpolationDataError(f"{name} must be 1D, got shape {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise InvalidInterpolationDataError(f"{name} must be finite")
    return arr


@dataclass(frozen=True, slots=True)
class DataBundle:
    """Ordered interpolation nodes ``(keys[i], values[i])``.

    Keys are strictly increasing. The arrays are private read-only copies, so
    a bundle can be shared between threads and callers may reuse their input
    arrays freely.

    Build instances with :meth:`of` (or :meth:`of_sorted`), which validate the
    nodes; the raw constructor trusts its arguments.
    """

    keys: FloatArray
    values: FloatArray

    @classmethod
    def of(
        cls,
        keys: ArrayLike,
        values: ArrayLike,
        already_sorted: bool = False,
    ) -> DataBundle:
        """Build a bundle from node keys and values.

        Parameters
        ----------
        keys, values : ArrayLike
            Node coordinates, same length, at least 2 entries.
        already_sorted : bool, default False
            Skip sorting. Strict ascending order is still checked.

        Raises
        ------
        InvalidInterpolationDataError
            On mismatched lengths, fewer than 2 nodes, duplicate keys or keys
            that are not strictly increasing when ``already_sorted`` is set.
        """
        x = _as_vector(keys, "keys")
        y = _as_vector(values, "values")
        if x.size != y.size:
            raise InvalidInterpolationDataError(
                f"keys and values must have the same length, got {x.size} and {y.size}"
            )
        if x.size < 2:
            raise InvalidInterpolationDataError(
                f"at least 2 nodes are required, got {x.size}"
            )

        if not already_sorted:
            order = np.argsort(x, kind="stable")
            x = x[order]
            y = y[order]
            if np.any(np.diff(x) == 0.0):
                dup = x[:-1][np.diff(x) == 0.0]
                raise InvalidInterpolationDataError(f"duplicate keys: {dup.tolist()}")
        elif np.any(np.diff(x) <= 0.0):
            raise InvalidInterpolationDataError(
                "keys claimed sorted must be strictly increasing"
            )

        x.setflags(write=False)
        y.setflags(write=False)
        return cls(keys=x, values=y)

    @classmethod
    def of_sorted(cls, keys: ArrayLike, values: ArrayLike) -> DataBundle:
        return cls.of(keys, values, already_sorted=True)

    @property
    def size(self) -> int:
        return int(self.keys.size)

    def __len__(self) -> int:
        return self.size

    def key(self, i: int) -> float:
        return float(self.keys[i])

    def value(self, i: int) -> float:
        return float(self.values[i])

    @property
    def first_key(self) -> float:
        return float(self.keys[0])

    @property
    def last_key(self) -> float:
        return float(self.keys[-1])

    @property
    def first_value(self) -> float:
        return float(self.values[0])

    @property
    def last_value(self) -> float:
        return float(self.values[-1])

    def lower_bound_index(self, x: float) -> int:
        """Highest ``i`` with ``keys[i] <= x``, clamped to ``[0, n-1]``."""
        i = int(np.searchsorted(self.keys, x, side="right")) - 1
        if i < 0:
            return 0
        return min(i, self.size - 1)

    def contains(self, x: float) -> bool:
        return self.first_key <= x <= self.last_key

    def with_value(self, i: int, y: float) -> DataBundle:
        """Copy of this bundle with node ``i`` set to ``y``."""
        values = self.values.copy()
        values[i] = y
        values.setflags(write=False)
        return DataBundle(keys=self.keys, values=values)

    def with_values(self, values: ArrayLike) -> DataBundle:
        """Copy of this bundle with all node values replaced, same keys."""
        y = _as_vector(values, "values")
        if y.size != self.size:
            raise InvalidInterpolationDataError(
                f"expected {self.size} values, got {y.size}"
            )
        y.setflags(write=False)
        return DataBundle(keys=self.keys, values=y)
