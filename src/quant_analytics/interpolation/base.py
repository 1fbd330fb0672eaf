from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from quant_analytics.config import DEFAULT_FD_CONFIG, FiniteDifferenceConfig
from quant_analytics.exceptions import InvalidInterpolationDataError
from quant_analytics.typing import ArrayLike, FloatArray

from .bundle import DataBundle


class Interpolator1D(ABC):
    """One-dimensional interpolation scheme over a :class:`DataBundle`.

    Implementations are stateless: every method is a pure function of the
    bundle and the query point, so one instance can serve any number of
    curves and threads.

    Every scheme provides

    - ``interpolate(bundle, x)``: the interpolated value,
    - ``first_derivative(bundle, x)``: ``dy/dx`` at ``x``,
    - ``node_sensitivities(bundle, x)``: ``dy(x)/dy_j`` for every node ``j``,
      holding the keys and the other node values fixed.
    """

    #: Minimum number of nodes the scheme needs.
    min_nodes: int = 2

    @abstractmethod
    def interpolate(self, bundle: DataBundle, x: float) -> float: ...

    @abstractmethod
    def first_derivative(self, bundle: DataBundle, x: float) -> float: ...

    @abstractmethod
    def node_sensitivities(self, bundle: DataBundle, x: float) -> FloatArray: ...

    def first_derivative_node_sensitivities(
        self,
        bundle: DataBundle,
        x: float,
        *,
        fd: FiniteDifferenceConfig = DEFAULT_FD_CONFIG,
    ) -> FloatArray:
        """``d(dy/dx)/dy_j`` for every node, by central differences on node values.

        Schemes that are linear in the node values override this with the
        exact weights.
        """
        out = np.zeros(bundle.size, dtype=np.float64)
        for j in range(bundle.size):
            yj = bundle.value(j)
            h = fd.bump * max(1.0, abs(yj))
            up = self.first_derivative(bundle.with_value(j, yj + h), x)
            dn = self.first_derivative(bundle.with_value(j, yj - h), x)
            out[j] = (up - dn) / (2.0 * h)
        return out

    def _fd_node_sensitivities(
        self,
        bundle: DataBundle,
        x: float,
        *,
        fd: FiniteDifferenceConfig = DEFAULT_FD_CONFIG,
    ) -> FloatArray:
        out = np.zeros(bundle.size, dtype=np.float64)
        for j in range(bundle.size):
            yj = bundle.value(j)
            h = fd.bump * max(1.0, abs(yj))
            up = self.interpolate(bundle.with_value(j, yj + h), x)
            dn = self.interpolate(bundle.with_value(j, yj - h), x)
            out[j] = (up - dn) / (2.0 * h)
        return out

    def check_bundle(self, bundle: DataBundle) -> None:
        """Scheme-specific validation of a bundle (node count by default)."""
        if bundle.size < self.min_nodes:
            raise InvalidInterpolationDataError(
                f"{type(self).__name__} needs at least {self.min_nodes} nodes, "
                f"got {bundle.size}"
            )

    def data_bundle(self, x: ArrayLike, y: ArrayLike) -> DataBundle:
        bundle = DataBundle.of(x, y)
        self.check_bundle(bundle)
        return bundle

    def data_bundle_from_sorted(self, x: ArrayLike, y: ArrayLike) -> DataBundle:
        bundle = DataBundle.of_sorted(x, y)
        self.check_bundle(bundle)
        return bundle

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self)

    def __hash__(self) -> int:
        return hash(type(self))

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def _unit(n: int, i: int) -> FloatArray:
    out = np.zeros(n, dtype=np.float64)
    out[i] = 1.0
    return out
