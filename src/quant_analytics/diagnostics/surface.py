from __future__ import annotations

import datetime as dt
from collections.abc import Sequence

import numpy as np
import pandas as pd

from ..vol.types import Volatilities


def _get_plt():
    try:
        import matplotlib.pyplot as plt
    except ModuleNotFoundError as e:
        raise ModuleNotFoundError(
            "Plotting requires matplotlib. Install it with: pip install matplotlib"
        ) from e
    return plt


def surface_table(
    vols: Volatilities,
    *,
    expiries: Sequence[dt.datetime],
    strikes: Sequence[float],
    forward: float,
    tenor: float = 0.0,
) -> pd.DataFrame:
    """Sample a volatility provider on an expiry x strike grid.

    Returns a long DataFrame with columns ``expiry``, ``T``, ``strike``,
    ``volatility``. Expired dates raise, as they would for a pricer.
    """
    rows = []
    for expiry in expiries:
        T = vols.relative_time(expiry)
        for K in strikes:
            rows.append(
                {
                    "expiry": expiry,
                    "T": T,
                    "strike": float(K),
                    "volatility": vols.volatility(expiry, tenor, float(K), forward),
                }
            )
    return pd.DataFrame(rows, columns=["expiry", "T", "strike", "volatility"])


def node_sensitivity_table(
    vols: Volatilities,
    *,
    expiry: dt.datetime,
    strike: float,
    forward: float,
    tenor: float = 0.0,
    atol: float = 0.0,
) -> pd.DataFrame:
    """Non-zero node weights of one volatility query, largest first.

    Columns: ``node`` (index in the provider's node order), ``weight``.
    """
    sens = vols.volatility_sensitivity(expiry, tenor, strike, forward)
    w = np.asarray(sens.node_weights, dtype=np.float64)
    idx = np.flatnonzero(np.abs(w) > atol)
    df = pd.DataFrame({"node": idx, "weight": w[idx]})
    return df.sort_values("weight", key=np.abs, ascending=False, ignore_index=True)


def plot_surface_table(
    df: pd.DataFrame,
    *,
    title: str = "Volatility smiles",
    figsize=(9, 4),
):
    """Plot strike vs volatility, one line per expiry, from :func:`surface_table`."""
    missing = [c for c in ("T", "strike", "volatility") if c not in df.columns]
    if missing:
        raise ValueError(f"DataFrame missing required columns: {missing}")

    plt = _get_plt()
    fig, ax = plt.subplots(figsize=figsize)
    for T, grp in df.groupby("T", sort=True):
        ax.plot(grp["strike"], grp["volatility"], marker="o", linewidth=1, label=f"T={T:.3g}y")
    ax.set_xlabel("Strike")
    ax.set_ylabel("Volatility")
    ax.set_title(title)
    ax.grid(True, alpha=0.3)
    ax.legend()
    return fig, ax
