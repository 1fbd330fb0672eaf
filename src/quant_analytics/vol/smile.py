"""Delta-quoted volatility smiles (FX style).

A smile at one expiry is quoted as an at-the-money volatility plus, for each
delta level, a risk reversal and a strangle. The smile points are placed in
strike space by inverting the forward Black delta, then interpolated in strike.
A term structure interpolates each smile point in time first.
"""

from __future__ import annotations

import datetime as dt
import logging
import math
from dataclasses import dataclass, field

import numpy as np

from quant_analytics.config import DEFAULT_SMILE_CONFIG, SmileConfig
from quant_analytics.exceptions import DomainViolationError, InvalidInterpolationDataError
from quant_analytics.interpolation import (
    CombinedInterpolatorExtrapolator,
    DataBundle,
    Interpolator1D,
)
from quant_analytics.market.daycount import DayCount
from quant_analytics.models.black import black_forward_delta
from quant_analytics.numerics.root_finding import ensure_bracket, get_root_method
from quant_analytics.typing import ArrayLike, FloatArray

from .surface import relative_time
from .types import VolatilitySensitivity

logger = logging.getLogger(__name__)


def strike_from_forward_delta(
    delta: float,
    *,
    is_call: bool,
    forward: float,
    tau: float,
    sigma: float,
    config: SmileConfig = DEFAULT_SMILE_CONFIG,
) -> float:
    """Strike whose forward Black delta equals ``delta`` (``-delta`` for puts).

    The root is searched in log-strike with the configured bracketing method
    (Brent by default), starting from ``ln F +/- bracket_std * sigma * sqrt(tau)``.

    Raises
    ------
    DomainViolationError
        If ``delta`` is not in ``(0, 1)`` or forward, tau or sigma are not positive.
    RootFindingError
        If no bracket is found or the root finder does not converge.
    """
    if not 0.0 < delta < 1.0:
        raise DomainViolationError(f"delta must be in (0, 1), got {delta}", value=delta)
    if forward <= 0.0 or tau <= 0.0 or sigma <= 0.0:
        raise DomainViolationError(
            f"forward, tau and sigma must be > 0, got {forward}, {tau}, {sigma}",
            value=(forward, tau, sigma),
        )

    target = delta if is_call else -delta

    def residual(k: float) -> float:
        return (
            black_forward_delta(
                forward=forward, strike=math.exp(k), sigma=sigma, tau=tau, is_call=is_call
            )
            - target
        )

    centre = math.log(forward) + 0.5 * sigma * sigma * tau
    half_width = config.bracket_std * sigma * math.sqrt(tau)
    lo, hi = ensure_bracket(
        residual,
        centre - half_width,
        centre + half_width,
        max_steps=config.max_bracket_steps,
    )
    root_fn = get_root_method(config.root.root_method)
    res = root_fn(
        residual,
        lo,
        hi,
        tol_f=config.root.tol_f,
        tol_x=config.root.tol_x,
        max_iter=config.root.max_iter,
    )
    return math.exp(res.root)


def _check_deltas(deltas: FloatArray) -> None:
    # a delta of 0.5 or more would put the call wing below the ATM strike
    if np.any((deltas <= 0.0) | (deltas >= 0.5)):
        raise InvalidInterpolationDataError(
            f"smile deltas must lie in (0, 0.5), got {deltas.tolist()}"
        )
    if np.any(np.diff(deltas) <= 0.0):
        raise InvalidInterpolationDataError("deltas must be strictly increasing")


@dataclass(frozen=True, slots=True)
class SmileDeltaParameters:
    """Smile at a single expiry: volatilities at put deltas, ATM and call deltas.

    ``volatilities`` has ``2n + 1`` entries for ``n`` deltas, ordered by
    increasing strike: put ``deltas[0]``, ..., put ``deltas[n-1]``, ATM,
    call ``deltas[n-1]``, ..., call ``deltas[0]``.
    """

    expiry: float
    deltas: FloatArray
    volatilities: FloatArray

    def __post_init__(self) -> None:
        if self.volatilities.size != 2 * self.deltas.size + 1:
            raise InvalidInterpolationDataError(
                f"expected {2 * self.deltas.size + 1} volatilities for "
                f"{self.deltas.size} deltas, got {self.volatilities.size}"
            )
        _check_deltas(self.deltas)

    @classmethod
    def of(
        cls,
        expiry: float,
        deltas: ArrayLike,
        atm: float,
        risk_reversal: ArrayLike,
        strangle: ArrayLike,
    ) -> SmileDeltaParameters:
        d = np.array(deltas, dtype=np.float64, copy=True)
        rr = np.asarray(risk_reversal, dtype=np.float64)
        st = np.asarray(strangle, dtype=np.float64)
        if not (d.shape == rr.shape == st.shape) or d.ndim != 1:
            raise InvalidInterpolationDataError(
                "deltas, risk_reversal and strangle must be 1D with the same length"
            )
        n = d.size
        vols = np.empty(2 * n + 1, dtype=np.float64)
        vols[n] = atm
        vols[:n] = atm + st - 0.5 * rr
        vols[2 * n : n : -1] = atm + st + 0.5 * rr
        d.setflags(write=False)
        vols.setflags(write=False)
        return cls(expiry=float(expiry), deltas=d, volatilities=vols)

    @property
    def atm(self) -> float:
        return float(self.volatilities[self.deltas.size])

    def strikes(
        self, forward: float, config: SmileConfig = DEFAULT_SMILE_CONFIG
    ) -> FloatArray:
        """Strikes of the smile points for a forward, in volatility order.

        The ATM strike is the delta-neutral straddle ``F exp(sigma^2 T / 2)``.
        """
        n = self.deltas.size
        T = self.expiry
        out = np.empty(2 * n + 1, dtype=np.float64)
        for i, delta in enumerate(self.deltas):
            out[i] = strike_from_forward_delta(
                float(delta),
                is_call=False,
                forward=forward,
                tau=T,
                sigma=float(self.volatilities[i]),
                config=config,
            )
            out[2 * n - i] = strike_from_forward_delta(
                float(delta),
                is_call=True,
                forward=forward,
                tau=T,
                sigma=float(self.volatilities[2 * n - i]),
                config=config,
            )
        atm = self.atm
        out[n] = forward * math.exp(0.5 * atm * atm * T)
        return out


def _linear_flat() -> Interpolator1D:
    return CombinedInterpolatorExtrapolator.of("Linear", "Flat", "Flat")


@dataclass(frozen=True, slots=True)
class SmileDeltaTermStructure:
    """Delta smiles at several expiries, interpolated in time then in strike.

    ``node_volatilities[e, p]`` is the volatility of smile point ``p`` (see
    :class:`SmileDeltaParameters` for the ordering) at ``expiries[e]``. Node
    sensitivities are reported flattened in that row-major order.

    For a query at time ``t``:

    1. each smile point's volatility is interpolated at ``t`` over the
       expiries with ``time_interpolator``;
    2. the strikes of the resulting smile are found by delta inversion;
    3. the volatility is interpolated at the query strike with
       ``strike_interpolator``.

    Strikes are held fixed when computing node sensitivities.

    At ``t == 0`` the smile has no width in strike space and the interpolated
    ATM volatility is returned.
    """

    expiries: FloatArray
    deltas: FloatArray
    node_volatilities: FloatArray
    time_interpolator: Interpolator1D = field(default_factory=_linear_flat)
    strike_interpolator: Interpolator1D = field(default_factory=_linear_flat)
    config: SmileConfig = DEFAULT_SMILE_CONFIG

    def __post_init__(self) -> None:
        n_exp = self.expiries.size
        n_pts = 2 * self.deltas.size + 1
        if self.node_volatilities.shape != (n_exp, n_pts):
            raise InvalidInterpolationDataError(
                f"node_volatilities must have shape {(n_exp, n_pts)}, "
                f"got {self.node_volatilities.shape}"
            )
        _check_deltas(self.deltas)
        if np.any(np.diff(self.expiries) <= 0.0):
            raise InvalidInterpolationDataError("expiries must be strictly increasing")
        if n_exp < self.time_interpolator.min_nodes:
            raise InvalidInterpolationDataError(
                f"at least {self.time_interpolator.min_nodes} expiries are required"
            )
        logger.debug(
            "SmileDeltaTermStructure: %d expiries in [%g, %g], deltas %s",
            n_exp,
            float(self.expiries[0]),
            float(self.expiries[-1]),
            self.deltas.tolist(),
        )

    @classmethod
    def of(
        cls,
        expiries: ArrayLike,
        deltas: ArrayLike,
        atm: ArrayLike,
        risk_reversal: ArrayLike,
        strangle: ArrayLike,
        *,
        time_interpolator: Interpolator1D | None = None,
        strike_interpolator: Interpolator1D | None = None,
        config: SmileConfig = DEFAULT_SMILE_CONFIG,
    ) -> SmileDeltaTermStructure:
        """Build from ATM, risk-reversal and strangle quotes.

        ``risk_reversal`` and ``strangle`` have one row per expiry and one
        column per delta.
        """
        t = np.array(expiries, dtype=np.float64, copy=True)
        a = np.asarray(atm, dtype=np.float64)
        rr = np.asarray(risk_reversal, dtype=np.float64)
        st = np.asarray(strangle, dtype=np.float64)
        if a.shape != t.shape or rr.shape[:1] != t.shape or st.shape != rr.shape:
            raise InvalidInterpolationDataError(
                "atm, risk_reversal and strangle must have one entry/row per expiry"
            )
        smiles = [
            SmileDeltaParameters.of(t[e], deltas, a[e], rr[e], st[e]) for e in range(t.size)
        ]
        vols = np.vstack([s.volatilities for s in smiles])
        d = smiles[0].deltas if smiles else np.asarray(deltas, dtype=np.float64)
        t.setflags(write=False)
        vols.setflags(write=False)
        return cls(
            expiries=t,
            deltas=d,
            node_volatilities=vols,
            time_interpolator=_linear_flat() if time_interpolator is None else time_interpolator,
            strike_interpolator=(
                _linear_flat() if strike_interpolator is None else strike_interpolator
            ),
            config=config,
        )

    @property
    def smile_point_count(self) -> int:
        return 2 * self.deltas.size + 1

    @property
    def parameter_count(self) -> int:
        return int(self.node_volatilities.size)

    def _time_stage(self, time: float) -> tuple[FloatArray, FloatArray]:
        """Interpolated smile volatilities and their weights on the expiries.

        Returns ``(vols, weights)`` with ``weights[p, e] = d vols[p] / d node[e, p]``.
        """
        n_pts = self.smile_point_count
        vols = np.empty(n_pts, dtype=np.float64)
        weights = np.empty((n_pts, self.expiries.size), dtype=np.float64)
        for p in range(n_pts):
            bundle = DataBundle(keys=self.expiries, values=self.node_volatilities[:, p])
            vols[p] = self.time_interpolator.interpolate(bundle, time)
            weights[p] = self.time_interpolator.node_sensitivities(bundle, time)
        return vols, weights

    def smile_for_time(self, time: float) -> SmileDeltaParameters:
        vols, _ = self._time_stage(float(time))
        vols.setflags(write=False)
        return SmileDeltaParameters(expiry=float(time), deltas=self.deltas, volatilities=vols)

    def _strike_stage(
        self, time: float, strike: float, forward: float
    ) -> tuple[float, FloatArray, FloatArray]:
        vols, time_w = self._time_stage(time)
        n = self.deltas.size
        if time <= 0.0:
            strike_w = np.zeros(vols.size, dtype=np.float64)
            strike_w[n] = 1.0
            return float(vols[n]), strike_w, time_w

        vols.setflags(write=False)
        smile = SmileDeltaParameters(expiry=time, deltas=self.deltas, volatilities=vols)
        strikes = smile.strikes(forward, self.config)
        bundle = self.strike_interpolator.data_bundle_from_sorted(strikes, vols)
        value = self.strike_interpolator.interpolate(bundle, strike)
        strike_w = self.strike_interpolator.node_sensitivities(bundle, strike)
        return value, strike_w, time_w

    def volatility(self, time: float, strike: float, forward: float) -> float:
        value, _, _ = self._strike_stage(float(time), float(strike), float(forward))
        return value

    def volatility_sensitivity(
        self, time: float, strike: float, forward: float
    ) -> VolatilitySensitivity:
        value, strike_w, time_w = self._strike_stage(
            float(time), float(strike), float(forward)
        )
        # weights[e, p] = d vol / d strike-node p * d strike-node p / d node[e, p]
        weights = (time_w * strike_w[:, None]).T
        return VolatilitySensitivity(value=value, node_weights=weights.ravel())

    def with_node_volatilities(self, vols: ArrayLike) -> SmileDeltaTermStructure:
        v = np.array(vols, dtype=np.float64, copy=True).reshape(self.node_volatilities.shape)
        v.setflags(write=False)
        return SmileDeltaTermStructure(
            expiries=self.expiries,
            deltas=self.deltas,
            node_volatilities=v,
            time_interpolator=self.time_interpolator,
            strike_interpolator=self.strike_interpolator,
            config=self.config,
        )


@dataclass(frozen=True, slots=True)
class FxSmileVolatilities:
    """Date-time adapter over a :class:`SmileDeltaTermStructure`.

    Tenor is accepted for a uniform signature but not used.
    """

    smile: SmileDeltaTermStructure
    valuation_date_time: dt.datetime
    day_count: DayCount = DayCount.ACT_365F

    def relative_time(self, expiry: dt.datetime) -> float:
        return relative_time(self.valuation_date_time, expiry, self.day_count)

    def volatility(
        self, expiry: dt.datetime, tenor: float, strike: float, forward: float
    ) -> float:
        return self.smile.volatility(self.relative_time(expiry), strike, forward)

    def volatility_sensitivity(
        self, expiry: dt.datetime, tenor: float, strike: float, forward: float
    ) -> VolatilitySensitivity:
        return self.smile.volatility_sensitivity(self.relative_time(expiry), strike, forward)
