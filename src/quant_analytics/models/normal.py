from __future__ import annotations

import math

from scipy.stats import norm


def _validate_scalar_inputs(*, sigma: float, tau: float) -> None:
    if sigma <= 0.0:
        raise ValueError("sigma must be positive")
    if tau <= 0.0:
        raise ValueError("tau must be positive")


def normal_price(
    *, forward: float, strike: float, sigma: float, tau: float, is_call: bool
) -> float:
    """
    Undiscounted Bachelier (normal model) price; sigma is an absolute volatility.
    """
    return normal_greeks(
        forward=forward, strike=strike, sigma=sigma, tau=tau, is_call=is_call
    )["price"]


def normal_greeks(
    *, forward: float, strike: float, sigma: float, tau: float, is_call: bool
) -> dict[str, float]:
    """
    Undiscounted Bachelier price and Greeks.

    Forward and strike may be negative (rates). theta is ``-dPrice/dtau``.
    """
    _validate_scalar_inputs(sigma=sigma, tau=tau)
    sqrt_tau = math.sqrt(tau)
    std = sigma * sqrt_tau
    sign = 1.0 if is_call else -1.0
    d = sign * (forward - strike) / std
    phi_d = norm.pdf(d)

    return {
        "price": float(sign * (forward - strike) * norm.cdf(d) + std * phi_d),
        "delta": float(sign * norm.cdf(d)),
        "gamma": float(phi_d / std),
        "vega": float(sqrt_tau * phi_d),
        "theta": float(-sigma * phi_d / (2.0 * sqrt_tau)),
    }
