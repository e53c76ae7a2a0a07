"""Lightweight performance budget checks for quantile reduction.

Times synthetic generation, ungrouped and grouped approximation, and quantile
binning on a configurable row count so regressions show up in CI.
"""

from __future__ import annotations

import argparse
import json
import time
from pathlib import Path

import numpy as np

from density_reduction.approx.binning import bin_means
from density_reduction.approx.grid import uniform_grid
from density_reduction.approx.grouped import approximate_by
from density_reduction.approx.quantile import approximate
from density_reduction.data.synthetic import generate_frame


def _ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000


def main() -> None:
    parser = argparse.ArgumentParser(description="Performance budget checks")
    parser.add_argument("--rows", type=int, default=5_000_000, help="Rows of synthetic data")
    parser.add_argument("--step", type=float, default=0.0001, help="Quantile grid step")
    parser.add_argument("--workers", type=int, default=None, help="Worker processes for grouped runs")
    parser.add_argument("--out", type=Path, default=None, help="Optional file to write timings (JSON)")
    args = parser.parse_args()

    start = time.perf_counter()
    df = generate_frame(args.rows, seed=0)
    metrics = {"generate_ms": _ms(start)}

    grid = uniform_grid(step=args.step)
    x = df["x"].to_numpy(dtype=np.float64)

    start = time.perf_counter()
    approximate(x, grid)
    metrics["approximate_ms"] = _ms(start)

    start = time.perf_counter()
    approximate_by(df, "x", ["y", "w", "z"], grid, max_workers=args.workers)
    metrics["approximate_grouped_ms"] = _ms(start)

    start = time.perf_counter()
    bin_means(x, n_bins=10)
    metrics["bin_means_ms"] = _ms(start)

    for key, value in metrics.items():
        print(f"{key}: {value:.2f} ms")

    if args.out:
        args.out.write_text(json.dumps(metrics, indent=2))


if __name__ == "__main__":
    main()
