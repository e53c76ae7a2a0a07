"""Approximate CLI command wiring."""

from __future__ import annotations

import json
from pathlib import Path

import typer

from density_reduction.approx.grouped import approximate_frame
from density_reduction.cli.validation import load_reduction_config, require_input
from density_reduction.data.io import load_samples, write_frame
from density_reduction.utils.logging import get_logger
from density_reduction.utils.profiling import track_time
from density_reduction.utils.resources import select_plot_policy

log = get_logger(__name__, component="cli_approximate")


def approximate(
    input_path: Path = typer.Option(..., "--input", help="CSV or Parquet sample file"),
    output: Path = typer.Option(..., "--output", help="Output path (.csv/.parquet/.json)"),
    config: Path | None = typer.Option(None, "--config", help="Optional YAML/JSON config path"),
    column: str | None = typer.Option(None, help="Numeric sample column"),
    group_by: str | None = typer.Option(None, "--group-by", help="Comma-delimited group columns"),
    grid_step: float | None = typer.Option(None, "--grid-step", help="Quantile grid step (default 0.0001)"),
    grid_points: int | None = typer.Option(None, "--grid-points", help="Quantile grid point count"),
    max_workers: int | None = typer.Option(None, "--max-workers", help="Worker processes for grouped runs"),
) -> None:
    """Reduce a sample column to quantile-grid values per group."""
    require_input(input_path)
    cfg = load_reduction_config(
        config,
        {
            "column": column,
            "group_by": group_by,
            "grid_step": grid_step,
            "grid_points": grid_points,
            "max_workers": max_workers,
        },
    )
    grid = cfg.build_grid()
    df = load_samples(input_path, cfg.column, cfg.group_by)

    n_groups = len(df.groupby(cfg.group_by, observed=True, dropna=False)) if cfg.group_by else 1
    policy, estimated_gb = select_plot_policy(len(df), grid.size * n_groups)
    log.info(
        "Plot policy selected",
        extra={"policy": policy, "estimated_gb": round(estimated_gb, 4), "n_samples": len(df), "grid_size": grid.size},
    )

    with track_time("approximate"):
        result = approximate_frame(df, cfg.column, cfg.group_by, grid, max_workers=cfg.max_workers)
    write_frame(result, output)

    typer.echo(
        json.dumps(
            {
                "rows_in": len(df),
                "rows_out": len(result),
                "groups": n_groups,
                "grid_size": int(grid.size),
                "plot_policy": policy,
                "output": str(output),
            }
        )
    )
