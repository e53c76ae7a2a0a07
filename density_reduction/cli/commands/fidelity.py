"""Fidelity CLI command wiring."""

from __future__ import annotations

from pathlib import Path

import typer

from density_reduction.cli.validation import parse_resolutions, require_input
from density_reduction.data.io import load_samples
from density_reduction.fidelity.ks import fidelity_curve
from density_reduction.utils.logging import get_logger
from density_reduction.utils.profiling import track_time

log = get_logger(__name__, component="cli_fidelity")


def fidelity(
    input_path: Path = typer.Option(..., "--input", help="CSV or Parquet sample file"),
    column: str = typer.Option("x", help="Numeric sample column"),
    resolutions: str = typer.Option("11,101,1001,10001", help="Comma-delimited grid point counts"),
    reference: str | None = typer.Option(
        None,
        help="scipy.stats distribution name to compare against (default: the input sample)",
    ),
) -> None:
    """Print the KS distance of the approximation at each grid resolution."""
    require_input(input_path)
    points = parse_resolutions(resolutions)
    df = load_samples(input_path, column)
    with track_time("fidelity"):
        curve = fidelity_curve(df[column].to_numpy(), points, cdf=reference)
    typer.echo(curve.to_json(orient="records", indent=2))
