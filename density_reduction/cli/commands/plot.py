"""Plot CLI command wiring."""

from __future__ import annotations

import json
from pathlib import Path

import matplotlib.pyplot as plt
import typer

from density_reduction.approx.grouped import approximate_by, samples_by
from density_reduction.cli.validation import load_reduction_config, output_groups, require_input
from density_reduction.data.io import load_samples
from density_reduction.plotting.density import KDE_POINTS, plot_density_facets
from density_reduction.utils.logging import get_logger
from density_reduction.utils.profiling import track_time
from density_reduction.utils.resources import select_plot_policy

log = get_logger(__name__, component="cli_plot")


def plot(
    input_path: Path = typer.Option(..., "--input", help="CSV or Parquet sample file"),
    output: Path = typer.Option(Path("density.png"), "--output", help="Image path"),
    config: Path | None = typer.Option(None, "--config", help="Optional YAML/JSON config path"),
    column: str | None = typer.Option(None, help="Numeric sample column"),
    group_by: str | None = typer.Option(None, "--group-by", help="Comma-delimited facet columns"),
    grid_step: float | None = typer.Option(None, "--grid-step", help="Quantile grid step (default 0.0001)"),
    grid_points: int | None = typer.Option(None, "--grid-points", help="Quantile grid point count"),
    bandwidth: float | None = typer.Option(None, help="KDE bandwidth factor"),
    ncols: int = typer.Option(3, help="Facet panels per row"),
) -> None:
    """Draw faceted densities, reducing to quantile values when raw data would not fit in memory."""
    require_input(input_path)
    cfg = load_reduction_config(
        config,
        {
            "column": column,
            "group_by": group_by,
            "grid_step": grid_step,
            "grid_points": grid_points,
            "bandwidth": bandwidth,
        },
    )
    grid = cfg.build_grid()
    df = load_samples(input_path, cfg.column, cfg.group_by)

    n_groups = len(df.groupby(cfg.group_by, observed=True, dropna=False)) if cfg.group_by else 1
    # ResourceLimitError propagates; the entry point maps it to exit code 4.
    policy, estimated_gb = select_plot_policy(len(df), grid.size * n_groups, kde_points=KDE_POINTS)
    log.info(
        "Plot policy selected",
        extra={"policy": policy, "estimated_gb": round(estimated_gb, 4), "n_samples": len(df), "grid_size": grid.size},
    )

    with track_time("plot"):
        if policy == "raw":
            mapping = samples_by(df, cfg.column, cfg.group_by)
        else:
            mapping = approximate_by(df, cfg.column, cfg.group_by, grid, max_workers=cfg.max_workers)
        fig = plot_density_facets(
            mapping,
            output_path=output,
            bandwidth=cfg.bandwidth,
            ncols=ncols,
            title=f"Density of {cfg.column}" + (f" by {', '.join(cfg.group_by)}" if cfg.group_by else ""),
            xlabel=cfg.column,
        )
    log.info("Density plot rendered", extra={"groups": output_groups(mapping), "policy": policy})
    plt.close(fig)
    typer.echo(
        json.dumps(
            {
                "plot_policy": policy,
                "groups": len(mapping),
                "points_per_group": max(len(values) for values in mapping.values()),
                "output": str(output),
            }
        )
    )
