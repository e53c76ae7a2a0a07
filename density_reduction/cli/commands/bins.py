"""Bins CLI command wiring."""

from __future__ import annotations

from pathlib import Path

import typer

from density_reduction.approx.binning import bin_means_frame
from density_reduction.cli.validation import require_input, require_positive
from density_reduction.config.loader import parse_list
from density_reduction.data.io import load_samples, write_frame
from density_reduction.utils.logging import get_logger

log = get_logger(__name__, component="cli_bins")


def bins(
    input_path: Path = typer.Option(..., "--input", help="CSV or Parquet sample file"),
    column: str = typer.Option("x", help="Numeric sample column"),
    group_by: str = typer.Option("", "--group-by", help="Comma-delimited group columns"),
    n_bins: int = typer.Option(10, "--n-bins", help="Quantile bins per group (10 = deciles)"),
    output: Path | None = typer.Option(None, "--output", help="Optional output path; prints JSON when omitted"),
) -> None:
    """Report the mean of each quantile bin, optionally per group."""
    require_input(input_path)
    require_positive("n_bins", n_bins)
    keys = parse_list(group_by)
    df = load_samples(input_path, column, keys)
    table = bin_means_frame(df, column, keys, n_bins)
    log.info("Bin means computed", extra={"rows": len(table), "n_samples": len(df)})
    if output is not None:
        write_frame(table, output)
        typer.echo(str(output))
    else:
        typer.echo(table.to_json(orient="records", indent=2))
