# src/quant_analytics/numerics/tridiag.py
from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

__all__ = [
    "Tridiag",
    "solve_tridiag_thomas",
    "tridiag_to_dense",
]


@dataclass(frozen=True, slots=True)
class Tridiag:
    lower: NDArray[np.floating]
    diag: NDArray[np.floating]
    upper: NDArray[np.floating]

    def check(self) -> int:
        """Validate internal shapes and return M (system size)."""
        diag = np.asarray(self.diag)
        if diag.ndim != 1:
            raise ValueError("diag must be 1D")

        M = int(diag.shape[0])
        if M == 0:
            raise ValueError("empty tridiagonal system")

        lower = np.asarray(self.lower)
        upper = np.asarray(self.upper)
        if lower.shape != (M - 1,) or upper.shape != (M - 1,):
            raise ValueError(f"lower/upper must have shape {(M - 1,)}")
        return M


def solve_tridiag_thomas(
    A: Tridiag,
    rhs: NDArray[np.floating],
) -> NDArray[np.floating]:
    """
    Solve A x = rhs for tridiagonal A.

    `rhs` may be a vector of shape (M,) or a matrix of shape (M, k) holding k
    right-hand sides, which are solved together (the spline node sensitivities
    solve against the identity).

    Notes:
    - Thomas algorithm without pivoting. Prefer diagonally-dominant systems.
    - Raises np.linalg.LinAlgError on (near-)zero pivots.
    - Inputs are never mutated.
    """
    M = A.check()

    rhs = np.asarray(rhs, dtype=np.float64)
    if rhs.shape[0] != M or rhs.ndim not in (1, 2):
        raise ValueError(f"rhs must have shape {(M,)} or {(M, 'k')} got {rhs.shape}")

    lower = np.asarray(A.lower, dtype=np.float64)
    diag = np.asarray(A.diag, dtype=np.float64)
    upper = np.array(A.upper, dtype=np.float64, copy=True)
    d = np.array(rhs, dtype=np.float64, copy=True)

    tol = 100.0 * np.finfo(np.float64).eps

    denom = diag[0]
    if abs(denom) < tol:
        raise np.linalg.LinAlgError("Near-zero pivot at row 0")
    if M == 1:
        return d / denom
    upper[0] = upper[0] / denom
    d[0] = d[0] / denom

    # Forward sweep
    for i in range(1, M):
        denom = diag[i] - lower[i - 1] * upper[i - 1]
        if abs(denom) < tol:
            raise np.linalg.LinAlgError(f"Near-zero pivot at row {i}")
        if i < M - 1:
            upper[i] = upper[i] / denom
        d[i] = (d[i] - lower[i - 1] * d[i - 1]) / denom

    # Back substitution
    x = np.empty_like(d)
    x[M - 1] = d[M - 1]
    for i in range(M - 2, -1, -1):
        x[i] = d[i] - upper[i] * x[i + 1]
    return x


def tridiag_to_dense(A: Tridiag) -> NDArray[np.floating]:
    """Convert a tridiagonal to a dense matrix."""
    M = A.check()
    out = np.zeros((M, M), dtype=np.float64)
    out[np.arange(M), np.arange(M)] = A.diag
    out[np.arange(1, M), np.arange(M - 1)] = A.lower
    out[np.arange(M - 1), np.arange(1, M)] = A.upper
    return out
