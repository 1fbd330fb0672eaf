from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from quant_analytics.exceptions import InvalidInterpolationDataError
from quant_analytics.typing import ArrayLike, FloatArray

from .base import Interpolator1D
from .bundle import DataBundle


@dataclass(frozen=True, slots=True)
class GridSlice:
    """Nodes sharing one y value: the x-axis bundle and their node positions."""

    y: float
    bundle: DataBundle
    node_index: tuple[int, ...]


@dataclass(frozen=True, slots=True)
class GridData2D:
    """Node triples ``(x_k, y_k, z_k)`` of a surface, grouped by y.

    The node order of the inputs is kept: ``z`` and every node-sensitivity
    vector returned by :class:`GridInterpolator2D` follow it. Axis keys are
    sorted and de-duplicated internally. The grid may be sparse: each y slice
    carries its own set of x keys.
    """

    x: FloatArray
    y: FloatArray
    z: FloatArray
    x_keys: FloatArray
    y_keys: FloatArray
    slices: tuple[GridSlice, ...]

    @classmethod
    def of(cls, x: ArrayLike, y: ArrayLike, z: ArrayLike) -> GridData2D:
        """Group node triples into y slices.

        Raises
        ------
        InvalidInterpolationDataError
            On arrays of different lengths, non-finite entries or an ``(x, y)``
            pair that appears more than once.
        """
        xa = np.array(x, dtype=np.float64, copy=True).ravel()
        ya = np.array(y, dtype=np.float64, copy=True).ravel()
        za = np.array(z, dtype=np.float64, copy=True).ravel()
        if not (xa.size == ya.size == za.size):
            raise InvalidInterpolationDataError(
                f"x, y and z must have the same length, got {xa.size}, {ya.size}, {za.size}"
            )
        if xa.size == 0:
            raise InvalidInterpolationDataError("no surface nodes")
        if not (np.all(np.isfinite(xa)) and np.all(np.isfinite(ya)) and np.all(np.isfinite(za))):
            raise InvalidInterpolationDataError("surface nodes must be finite")

        pairs = set(zip(xa.tolist(), ya.tolist(), strict=True))
        if len(pairs) != xa.size:
            raise InvalidInterpolationDataError("every (x, y) node must appear exactly once")

        y_keys = np.unique(ya)
        slices: list[GridSlice] = []
        for yk in y_keys:
            idx = np.flatnonzero(ya == yk)
            order = idx[np.argsort(xa[idx], kind="stable")]
            keys = xa[order]
            values = za[order]
            keys.setflags(write=False)
            values.setflags(write=False)
            # single-node slices are kept so a degenerate grid fails at query time
            bundle = DataBundle(keys=keys, values=values)
            slices.append(
                GridSlice(y=float(yk), bundle=bundle, node_index=tuple(int(k) for k in order))
            )

        x_keys = np.unique(xa)
        for a in (xa, ya, za, x_keys, y_keys):
            a.setflags(write=False)
        return cls(x=xa, y=ya, z=za, x_keys=x_keys, y_keys=y_keys, slices=tuple(slices))

    @property
    def size(self) -> int:
        return int(self.z.size)

    def with_z(self, z: ArrayLike) -> GridData2D:
        """Same nodes with new z values (same order)."""
        return GridData2D.of(self.x, self.y, z)


@dataclass(frozen=True, slots=True)
class GridInterpolator2D:
    """Repeated 1-D interpolation on a grid: along x first, then along y.

    For a query ``(x, y)``, every y slice is interpolated at ``x`` with
    ``x_interpolator``; the slice results form a bundle over the y keys that is
    interpolated at ``y`` with ``y_interpolator``. The axis order is fixed.
    """

    x_interpolator: Interpolator1D
    y_interpolator: Interpolator1D

    def _check(self, data: GridData2D) -> None:
        if data.x_keys.size < 2 or data.y_keys.size < 2:
            raise InvalidInterpolationDataError(
                "2-D interpolation needs at least 2 distinct values on each axis, got "
                f"{data.x_keys.size} x values and {data.y_keys.size} y values"
            )
        for s in data.slices:
            if s.bundle.size < 2:
                raise InvalidInterpolationDataError(
                    f"slice y={s.y:g} has a single x node; at least 2 are required"
                )
            self.x_interpolator.check_bundle(s.bundle)

    def _y_bundle(self, data: GridData2D, x: float) -> DataBundle:
        zs = [self.x_interpolator.interpolate(s.bundle, x) for s in data.slices]
        bundle = DataBundle.of_sorted(data.y_keys, zs)
        self.y_interpolator.check_bundle(bundle)
        return bundle

    def interpolate(self, data: GridData2D, x: float, y: float) -> float:
        self._check(data)
        return self.y_interpolator.interpolate(self._y_bundle(data, x), y)

    def first_derivative(self, data: GridData2D, x: float, y: float) -> tuple[float, float]:
        """Partial derivatives ``(dz/dx, dz/dy)`` at ``(x, y)``."""
        self._check(data)
        y_bundle = self._y_bundle(data, x)
        dz_dy = self.y_interpolator.first_derivative(y_bundle, y)
        w_y = self.y_interpolator.node_sensitivities(y_bundle, y)
        dslice_dx = np.array(
            [self.x_interpolator.first_derivative(s.bundle, x) for s in data.slices],
            dtype=np.float64,
        )
        return float(w_y @ dslice_dx), float(dz_dy)

    def node_sensitivities(self, data: GridData2D, x: float, y: float) -> FloatArray:
        """``dz/dz_k`` for every node ``k``, in the input node order.

        Each entry is the y-stage weight of the node's slice times the
        x-stage weight of the node within that slice.
        """
        self._check(data)
        y_bundle = self._y_bundle(data, x)
        w_y = self.y_interpolator.node_sensitivities(y_bundle, y)
        out = np.zeros(data.size, dtype=np.float64)
        for j, s in enumerate(data.slices):
            if w_y[j] == 0.0:
                continue
            w_x = self.x_interpolator.node_sensitivities(s.bundle, x)
            out[list(s.node_index)] += w_y[j] * w_x
        return out
