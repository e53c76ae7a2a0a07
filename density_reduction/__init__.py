"""Quantile-based reduction of large sample sets for density plotting."""

from density_reduction.approx.grid import uniform_grid, validate_grid
from density_reduction.approx.grouped import approximate_frame, approximate_grouped, approximate_pairs
from density_reduction.approx.quantile import approximate

__version__ = "0.1.0"

__all__ = [
    "approximate",
    "approximate_frame",
    "approximate_grouped",
    "approximate_pairs",
    "uniform_grid",
    "validate_grid",
]
