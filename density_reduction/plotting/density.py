"""
Density plots of quantile-reduced sample sets.

Each group is drawn as a Gaussian KDE of its approximated values, one panel per
group, mirroring a faceted density plot of the raw data at a fraction of the
memory cost.
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Hashable, Mapping, Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from scipy.stats import gaussian_kde

from density_reduction.approx.quantile import as_samples
from density_reduction.exceptions import InvalidInputError
from density_reduction.utils.logging import get_logger

log = get_logger(__name__, component="plotting")

KDE_POINTS = 512

# Wong palette
RAW_COLOR = "#0072B2"
REDUCED_COLOR = "#E69F00"


def _format_key(key: Hashable) -> str:
    if isinstance(key, tuple):
        return " / ".join(str(k) for k in key)
    return str(key)


def _draw_kde(
    ax: Axes,
    values: np.ndarray,
    *,
    bandwidth: Optional[float],
    color: str,
    label: str | None = None,
    linestyle: str = "-",
) -> None:
    # A constant sample has a singular covariance; draw it as a spike.
    if values.size < 2 or np.ptp(values) == 0:
        ax.axvline(values[0], color=color, linestyle=linestyle, linewidth=2, label=label)
        return
    kde = gaussian_kde(values, bw_method=bandwidth)
    pad = 0.05 * np.ptp(values)
    x_range = np.linspace(values.min() - pad, values.max() + pad, KDE_POINTS)
    density = kde(x_range)
    ax.plot(x_range, density, color=color, linestyle=linestyle, linewidth=2, label=label)
    ax.fill_between(x_range, density, color=color, alpha=0.15)


def _finish(fig: Figure, output_path: Optional[Path], show_plot: bool) -> Figure:
    fig.tight_layout()
    if output_path:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(output_path, dpi=150, bbox_inches="tight")
        log.info(f"Saved density plot to {output_path}")
    if show_plot:
        plt.show()
    return fig


def plot_density_facets(
    approximations: Mapping[Hashable, Sequence[float] | np.ndarray],
    output_path: Optional[Path] = None,
    show_plot: bool = False,
    *,
    bandwidth: Optional[float] = None,
    ncols: int = 3,
    title: str = "Density by group",
    xlabel: str = "x",
) -> Figure:
    """
    Draw one KDE panel per group of approximated values.

    Parameters
    ----------
    approximations : Mapping[Hashable, array-like]
        Group key to approximated values, as returned by ``approximate_grouped``
    output_path : Optional[Path]
        If provided, save figure to this path
    show_plot : bool
        If True, display plot interactively
    bandwidth : Optional[float]
        KDE bandwidth factor passed to ``gaussian_kde``; Scott's rule when None
    ncols : int
        Maximum panels per row

    Returns
    -------
    Figure
        Matplotlib figure object
    """
    if not approximations:
        raise InvalidInputError("at least one group is required to plot")
    if ncols < 1:
        raise InvalidInputError("ncols must be >= 1")

    n_groups = len(approximations)
    cols = min(ncols, n_groups)
    rows = math.ceil(n_groups / cols)
    fig, axes = plt.subplots(rows, cols, figsize=(4.5 * cols, 3.2 * rows), sharex=True, squeeze=False)
    fig.suptitle(title, fontsize=14, fontweight="bold")

    flat = axes.ravel()
    for ax, (key, values) in zip(flat, approximations.items()):
        arr = as_samples(values)
        _draw_kde(ax, arr, bandwidth=bandwidth, color=REDUCED_COLOR)
        ax.set_title(_format_key(key))
        ax.set_xlabel(xlabel)
        ax.set_ylabel("Density")
        ax.grid(True, alpha=0.3)
    for ax in flat[n_groups:]:
        ax.set_visible(False)

    return _finish(fig, output_path, show_plot)


def plot_density_comparison(
    raw: Sequence[float] | np.ndarray,
    approximated: Sequence[float] | np.ndarray,
    output_path: Optional[Path] = None,
    show_plot: bool = False,
    *,
    bandwidth: Optional[float] = None,
    title: str = "Raw vs quantile-reduced density",
    xlabel: str = "x",
    raw_label: str | None = None,
    reduced_label: str | None = None,
) -> Figure:
    """Overlay KDEs of the raw sample and its approximation on one axis."""
    raw_arr = as_samples(raw)
    approx_arr = as_samples(approximated)

    fig, ax = plt.subplots(figsize=(8, 5))
    _draw_kde(
        ax,
        raw_arr,
        bandwidth=bandwidth,
        color=RAW_COLOR,
        label=raw_label or f"Raw (n={raw_arr.size:,})",
    )
    _draw_kde(
        ax,
        approx_arr,
        bandwidth=bandwidth,
        color=REDUCED_COLOR,
        linestyle="--",
        label=reduced_label or f"Quantile grid (n={approx_arr.size:,})",
    )
    ax.set_title(title)
    ax.set_xlabel(xlabel)
    ax.set_ylabel("Density")
    ax.legend(loc="upper right", fontsize=9)
    ax.grid(True, alpha=0.3)
    return _finish(fig, output_path, show_plot)


__all__ = ["plot_density_comparison", "plot_density_facets"]
