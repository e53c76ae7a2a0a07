"""Memory preflight for density plots of large sample sets."""

from __future__ import annotations

from typing import Literal, Tuple

import psutil

from density_reduction.exceptions import ResourceLimitError
from density_reduction.utils.logging import get_logger

log = get_logger(__name__, component="resources")

PlotPolicy = Literal["raw", "quantile"]

# float64 input, sorted copy, KDE deviations and weights per sample.
_BYTES_PER_SAMPLE = 8 * 4


def detect_total_ram_gb() -> float:
    return float(psutil.virtual_memory().total / 1e9)


def estimate_plot_footprint_gb(n_rows: int, kde_points: int = 512) -> float:
    """Estimate memory a KDE plot of ``n_rows`` values needs, with 10% overhead.

    The KDE evaluation matrix is ``n_rows x kde_points`` float64 values.
    """
    if n_rows < 0 or kde_points <= 0:
        raise ValueError("n_rows must be >= 0 and kde_points > 0")
    per_sample = _BYTES_PER_SAMPLE + 8 * kde_points
    return n_rows * per_sample * 1.1 / 1e9


def select_plot_policy(
    n_rows: int,
    grid_size: int,
    total_ram_gb: float | None = None,
    kde_points: int = 512,
) -> Tuple[PlotPolicy, float]:
    """Return recommended plot policy and the footprint of the chosen path.

    Thresholds: raw <25% RAM -> raw, otherwise quantile; quantile ≥50% -> abort.
    """

    if total_ram_gb is None:
        total_ram_gb = detect_total_ram_gb()

    raw_gb = estimate_plot_footprint_gb(n_rows, kde_points)
    if raw_gb < 0.25 * total_ram_gb:
        return "raw", raw_gb

    reduced_gb = estimate_plot_footprint_gb(min(n_rows, grid_size), kde_points)
    if reduced_gb >= 0.5 * total_ram_gb:
        raise ResourceLimitError(
            f"Estimated footprint {reduced_gb:.3f} GB exceeds 50% of RAM ({total_ram_gb:.3f} GB) even after reduction."
        )
    log.warning(
        "Raw density plot exceeds memory band; using quantile reduction",
        extra={"n_samples": n_rows, "grid_size": grid_size, "raw_gb": round(raw_gb, 3), "ram_gb": round(total_ram_gb, 3)},
    )
    return "quantile", reduced_gb
