from __future__ import annotations

import math

from scipy.stats import norm


def _validate_scalar_inputs(
    *, forward: float, strike: float, sigma: float, tau: float
) -> None:
    if forward <= 0.0:
        raise ValueError("forward must be positive")
    if strike <= 0.0:
        raise ValueError("strike must be positive")
    if sigma <= 0.0:
        raise ValueError("sigma must be positive")
    if tau <= 0.0:
        raise ValueError("tau must be positive")


def d1_d2(
    *, forward: float, strike: float, sigma: float, tau: float
) -> tuple[float, float]:
    _validate_scalar_inputs(forward=forward, strike=strike, sigma=sigma, tau=tau)
    vol_sqrt_t = sigma * math.sqrt(tau)
    d1 = (math.log(forward / strike) + 0.5 * sigma * sigma * tau) / vol_sqrt_t
    return float(d1), float(d1 - vol_sqrt_t)


def black_price(
    *, forward: float, strike: float, sigma: float, tau: float, is_call: bool
) -> float:
    """
    Undiscounted Black-76 price of a European option on a forward.
    """
    d1, d2 = d1_d2(forward=forward, strike=strike, sigma=sigma, tau=tau)
    if is_call:
        return forward * norm.cdf(d1) - strike * norm.cdf(d2)
    return strike * norm.cdf(-d2) - forward * norm.cdf(-d1)


def black_forward_delta(
    *, forward: float, strike: float, sigma: float, tau: float, is_call: bool
) -> float:
    """dPrice/dForward: ``N(d1)`` for calls, ``N(d1) - 1`` for puts."""
    d1, _ = d1_d2(forward=forward, strike=strike, sigma=sigma, tau=tau)
    return float(norm.cdf(d1)) if is_call else float(norm.cdf(d1)) - 1.0


def black_greeks(
    *, forward: float, strike: float, sigma: float, tau: float, is_call: bool
) -> dict[str, float]:
    """
    Undiscounted Black-76 price and Greeks.

    delta and gamma are with respect to the forward, vega with respect to the
    Black volatility, theta is the driftless theta ``-dPrice/dtau``.
    """
    d1, d2 = d1_d2(forward=forward, strike=strike, sigma=sigma, tau=tau)
    sqrt_tau = math.sqrt(tau)
    phi_d1 = norm.pdf(d1)

    if is_call:
        price = forward * norm.cdf(d1) - strike * norm.cdf(d2)
        delta = norm.cdf(d1)
    else:
        price = strike * norm.cdf(-d2) - forward * norm.cdf(-d1)
        delta = norm.cdf(d1) - 1.0

    return {
        "price": float(price),
        "delta": float(delta),
        "gamma": float(phi_d1 / (forward * sigma * sqrt_tau)),
        "vega": float(forward * phi_d1 * sqrt_tau),
        "theta": float(-forward * phi_d1 * sigma / (2.0 * sqrt_tau)),
    }
