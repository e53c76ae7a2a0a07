"""Generate CLI command wiring."""

from __future__ import annotations

import json
from pathlib import Path

import typer

from density_reduction.cli.validation import require_positive
from density_reduction.data.io import write_frame
from density_reduction.data.synthetic import generate_frame
from density_reduction.utils.logging import get_logger
from density_reduction.utils.profiling import track_time

log = get_logger(__name__, component="cli_generate")


def generate(
    rows: int = typer.Option(1_000_000, help="Number of rows to generate"),
    seed: int = typer.Option(42, help="Random seed"),
    y_levels: int = typer.Option(5, help="Levels of the y key"),
    w_levels: int = typer.Option(2, help="Levels of the w key"),
    z_levels: int = typer.Option(3, help="Levels of the z key"),
    output: Path = typer.Option(Path("data/synthetic.parquet"), help="Output path (.parquet/.csv)"),
) -> None:
    """Write a synthetic frame with numeric x and categorical y, w, z."""
    require_positive("rows", rows)
    with track_time("generate"):
        df = generate_frame(rows, seed, y_levels=y_levels, w_levels=w_levels, z_levels=z_levels)
        write_frame(df, output)
    typer.echo(json.dumps({"rows": len(df), "columns": list(df.columns), "output": str(output)}))
