from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

logger = logging.getLogger(__name__)

# ---------------------------
# Results + Exceptions
# ---------------------------


@dataclass(frozen=True, slots=True)
class RootResult:
    root: float
    converged: bool
    iterations: int
    method: str
    f_at_root: float
    bracket: tuple[float, float] | None = None


class RootFindingError(Exception):
    """Base class for root-finding failures."""


class NotBracketedError(RootFindingError):
    """Raised when a bracketing method is called without a valid sign change."""


class NoConvergenceError(RootFindingError):
    """Raised when the method fails to converge within max_iter."""


class NoBracketError(NotBracketedError):
    """Raised by ensure_bracket when it cannot find a bracketing interval."""


# ---------------------------
# Root finders (unified signature)
# All root methods accept:
#   (Fn, lo, hi, *, tol_f=..., tol_x=..., max_iter=..., **kwargs)
# and return RootResult
# ---------------------------


def bisection_method(
    Fn: Callable[[float], float],
    lo: float,
    hi: float,
    *,
    tol_f: float = 1e-12,
    tol_x: float = 1e-12,
    max_iter: int = 10_000,
    **ignored_kwargs: Any,
) -> RootResult:
    a, b = (lo, hi) if lo <= hi else (hi, lo)

    fa = Fn(a)
    if abs(fa) <= tol_f:
        return RootResult(
            root=a,
            converged=True,
            iterations=0,
            method="bisection",
            f_at_root=fa,
            bracket=(a, b),
        )

    fb = Fn(b)
    if abs(fb) <= tol_f:
        return RootResult(
            root=b,
            converged=True,
            iterations=0,
            method="bisection",
            f_at_root=fb,
            bracket=(a, b),
        )

    if fa * fb > 0:
        raise NotBracketedError(
            "Bisection requires Fn(lo) and Fn(hi) to have opposite signs."
        )

    for it in range(1, max_iter + 1):
        mid = a + (b - a) / 2.0
        fmid = Fn(mid)

        if abs(fmid) <= tol_f:
            return RootResult(
                root=mid,
                converged=True,
                iterations=it,
                method="bisection",
                f_at_root=fmid,
                bracket=(a, b),
            )

        # Maintain the bracket
        if fa * fmid < 0:
            b, fb = mid, fmid
        else:
            a, fa = mid, fmid

        if (b - a) / 2.0 <= tol_x:
            root = a + (b - a) / 2.0
            return RootResult(
                root=root,
                converged=True,
                iterations=it,
                method="bisection",
                f_at_root=Fn(root),
                bracket=(a, b),
            )

    raise NoConvergenceError("Bisection did not converge within max_iter.")


def brent_method(
    Fn: Callable[[float], float],
    lo: float,
    hi: float,
    *,
    tol_f: float = 1e-12,
    tol_x: float = 1e-12,
    max_iter: int = 100,
    **ignored_kwargs: Any,
) -> RootResult:
    """Brent's method: inverse quadratic / secant steps safeguarded by bisection.

    Requires ``Fn(lo)`` and ``Fn(hi)`` to have opposite signs (or one of them to
    vanish). Convergence is declared when ``|Fn(x)| <= tol_f`` or when the
    bracket half-width drops below ``tol_x`` (plus a machine-epsilon term
    relative to the current iterate).
    """
    a, b = (lo, hi) if lo <= hi else (hi, lo)

    fa = Fn(a)
    fb = Fn(b)
    if abs(fa) <= tol_f:
        return RootResult(
            root=a, converged=True, iterations=0, method="brent", f_at_root=fa,
            bracket=(a, b),
        )
    if abs(fb) <= tol_f:
        return RootResult(
            root=b, converged=True, iterations=0, method="brent", f_at_root=fb,
            bracket=(a, b),
        )
    if fa * fb > 0:
        raise NotBracketedError(
            "Root not bracketed: Fn(lo) and Fn(hi) must have opposite signs."
        )

    # b is the best estimate, c the contrapoint, so that f(b)*f(c) < 0
    c, fc = a, fa
    d = e = b - a

    for it in range(1, max_iter + 1):
        if fb * fc > 0:
            c, fc = a, fa
            d = e = b - a
        if abs(fc) < abs(fb):
            a, b, c = b, c, b
            fa, fb, fc = fb, fc, fb

        tol1 = 2.0 * 2.2e-16 * abs(b) + 0.5 * tol_x
        xm = 0.5 * (c - b)
        if abs(xm) <= tol1 or abs(fb) <= tol_f:
            lo_b, hi_b = (b, c) if b <= c else (c, b)
            return RootResult(
                root=b,
                converged=True,
                iterations=it,
                method="brent",
                f_at_root=fb,
                bracket=(lo_b, hi_b),
            )

        if abs(e) >= tol1 and abs(fa) > abs(fb):
            s = fb / fa
            if a == c:
                # secant
                p = 2.0 * xm * s
                q = 1.0 - s
            else:
                # inverse quadratic
                q = fa / fc
                r = fb / fc
                p = s * (2.0 * xm * q * (q - r) - (b - a) * (r - 1.0))
                q = (q - 1.0) * (r - 1.0) * (s - 1.0)
            if p > 0:
                q = -q
            p = abs(p)
            if 2.0 * p < min(3.0 * xm * q - abs(tol1 * q), abs(e * q)):
                e, d = d, p / q
            else:
                d = e = xm
        else:
            d = e = xm

        a, fa = b, fb
        b = b + d if abs(d) > tol1 else b + math.copysign(tol1, xm)
        fb = Fn(b)

    raise NoConvergenceError("Brent did not converge within max_iter.")


def ensure_bracket(
    Fn: Callable[[float], float],
    lo: float,
    hi: float,
    *,
    grow: float = 1.6,
    max_steps: int = 50,
) -> tuple[float, float]:
    """
    Widen ``[lo, hi]`` outwards until Fn(lo) and Fn(hi) have opposite signs.

    Each step moves the end with the smaller ``|Fn|`` away from the other end
    by ``grow`` times the current width.

    Returns (lo, hi) such that Fn(lo) == 0 or Fn(hi) == 0 or Fn(lo)*Fn(hi) < 0.
    """
    if hi <= lo:
        raise ValueError("Require lo < hi.")
    if grow <= 0.0:
        raise ValueError("Require grow > 0.")

    a, b = lo, hi
    f_lo = Fn(a)
    f_hi = Fn(b)

    for step in range(max_steps):
        if f_lo == 0.0 or f_hi == 0.0 or f_lo * f_hi < 0:
            return a, b
        width = b - a
        if abs(f_lo) < abs(f_hi):
            a -= grow * width
            f_lo = Fn(a)
        else:
            b += grow * width
            f_hi = Fn(b)
        logger.debug("ensure_bracket step %d: widened to [%g, %g]", step + 1, a, b)

    if f_lo == 0.0 or f_hi == 0.0 or f_lo * f_hi < 0:
        return a, b

    raise NoBracketError(
        f"No bracket found: Fn stayed {'positive' if f_lo > 0 else 'negative'} "
        f"on [{a:g}, {b:g}] after widening."
    )


# ---------------------------
# Method selection
# ---------------------------


class RootFn(Protocol):
    def __call__(
        self,
        Fn: Callable[[float], float],
        lo: float,
        hi: float,
        **kwargs: Any,
    ) -> RootResult: ...


class RootMethod(str, Enum):
    BISECTION = "bisection"
    BRENT = "brent"


_ROOT_METHODS: dict[RootMethod, RootFn] = {
    RootMethod.BISECTION: bisection_method,
    RootMethod.BRENT: brent_method,
}


def get_root_method(method: RootMethod | str) -> RootFn:
    """Resolve a :class:`RootMethod` (or its string value) to a root finder."""
    try:
        return _ROOT_METHODS[RootMethod(method)]
    except ValueError as e:
        raise ValueError(f"Unknown root method: {method!r}") from e
