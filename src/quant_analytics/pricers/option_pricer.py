from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from ..models.black import black_greeks
from ..models.normal import normal_greeks
from ..types import EuropeanOptionSpec, VolatilityModel
from ..typing import FloatArray
from ..vol.types import Volatilities


@dataclass(frozen=True, slots=True)
class PricerResult:
    """Present value and Greeks of one option.

    ``vega_buckets[k]`` is the present-value sensitivity to node ``k`` of the
    volatility data, ``vega * d vol / d node_k``.
    """

    pv: float
    delta: float
    gamma: float
    vega: float
    theta: float
    volatility: float
    vega_buckets: FloatArray


def _greeks(
    model: VolatilityModel,
    *,
    forward: float,
    strike: float,
    sigma: float,
    tau: float,
    is_call: bool,
) -> dict[str, float]:
    if model == VolatilityModel.BLACK:
        return black_greeks(
            forward=forward, strike=strike, sigma=sigma, tau=tau, is_call=is_call
        )
    if model == VolatilityModel.NORMAL:
        return normal_greeks(
            forward=forward, strike=strike, sigma=sigma, tau=tau, is_call=is_call
        )
    raise ValueError(f"Unsupported volatility model: {model}")


def price_with_volatilities(
    spec: EuropeanOptionSpec,
    *,
    forward: float,
    discount_factor: float,
    vols: Volatilities,
    model: VolatilityModel = VolatilityModel.BLACK,
) -> PricerResult:
    """
    Price a European option with a volatility read from ``vols``.

    Greeks are discounted and scaled by the notional; delta and gamma are with
    respect to the forward. At expiry (relative time 0) the option pays its
    intrinsic value and all Greeks are zero. Expiries before the valuation
    date-time raise :class:`~quant_analytics.exceptions.ExpiredOptionError`.
    """
    tau = vols.relative_time(spec.expiry)
    sens = vols.volatility_sensitivity(spec.expiry, spec.tenor, spec.strike, forward)
    scale = spec.notional * discount_factor

    if tau <= 0.0:
        intrinsic = max(forward - spec.strike, 0.0) if spec.is_call else max(
            spec.strike - forward, 0.0
        )
        return PricerResult(
            pv=scale * intrinsic,
            delta=0.0,
            gamma=0.0,
            vega=0.0,
            theta=0.0,
            volatility=sens.value,
            vega_buckets=np.zeros_like(sens.node_weights),
        )

    g = _greeks(
        model,
        forward=forward,
        strike=spec.strike,
        sigma=sens.value,
        tau=tau,
        is_call=spec.is_call,
    )
    vega = scale * g["vega"]
    return PricerResult(
        pv=scale * g["price"],
        delta=scale * g["delta"],
        gamma=scale * g["gamma"],
        vega=vega,
        theta=scale * g["theta"],
        volatility=sens.value,
        vega_buckets=sens.scaled(vega),
    )
