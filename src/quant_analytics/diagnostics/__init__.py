"""Tabular and plotting diagnostics for volatility providers (pandas / matplotlib)."""

from .surface import node_sensitivity_table, plot_surface_table, surface_table

__all__ = ["surface_table", "node_sensitivity_table", "plot_surface_table"]
