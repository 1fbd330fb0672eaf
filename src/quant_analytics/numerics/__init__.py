# src/quant_analytics/numerics/__init__.py
"""
Numerical building blocks (advanced API).

Root finders used by the smile delta-to-strike inversion and the tridiagonal
solver behind the natural cubic spline.
"""

from .root_finding import (
    NoBracketError,
    NoConvergenceError,
    NotBracketedError,
    RootFindingError,
    RootMethod,
    RootResult,
    bisection_method,
    brent_method,
    ensure_bracket,
    get_root_method,
)
from .tridiag import Tridiag, solve_tridiag_thomas, tridiag_to_dense

__all__ = [
    # Root finding
    "RootMethod",
    "RootResult",
    "RootFindingError",
    "NotBracketedError",
    "NoBracketError",
    "NoConvergenceError",
    "bisection_method",
    "brent_method",
    "ensure_bracket",
    "get_root_method",
    # Tridiagonal
    "Tridiag",
    "solve_tridiag_thomas",
    "tridiag_to_dense",
]
