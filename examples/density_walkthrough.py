"""Walkthrough of reducing a large sample set before density plotting.

This script demonstrates:
1. Generating a synthetic frame (numeric x, categorical y/w/z)
2. The memory preflight that rejects a raw density plot at scale
3. Quantile-bin means as the naive reduction
4. Quantile-grid approximation of the whole column and per group
5. Fidelity of the approximation across grid resolutions
"""

from __future__ import annotations

import argparse
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
from scipy import stats

from density_reduction.approx.binning import bin_means
from density_reduction.approx.grid import uniform_grid
from density_reduction.approx.grouped import approximate_by
from density_reduction.approx.quantile import approximate
from density_reduction.data.synthetic import generate_frame
from density_reduction.fidelity.ks import fidelity_curve
from density_reduction.plotting.density import plot_density_comparison, plot_density_facets
from density_reduction.utils.resources import estimate_plot_footprint_gb, select_plot_policy


def run_walkthrough(rows: int, out_dir: Path) -> None:
    out_dir.mkdir(parents=True, exist_ok=True)
    df = generate_frame(rows, seed=42)
    grid = uniform_grid(step=0.0001)

    print("=" * 80)
    print(f"Synthetic frame: {len(df):,} rows")
    print(f"Raw KDE footprint estimate: {estimate_plot_footprint_gb(len(df)):.2f} GB")
    # Pretend the machine has 4 GB so the preflight demonstrates the switch.
    policy, est = select_plot_policy(len(df), grid.size * df["y"].nunique(), total_ram_gb=4.0)
    print(f"Plot policy on a 4 GB machine: {policy} ({est:.3f} GB)")
    print("=" * 80)

    print("Quantile-bin means (deciles):")
    print(bin_means(df["x"].to_numpy(), n_bins=10).to_string(index=False))
    print()

    x = df["x"].to_numpy()
    reduced = approximate(x, grid)
    fig = plot_density_comparison(x[: min(rows, 200_000)], reduced, output_path=out_dir / "comparison.png")
    plt.close(fig)

    mapping = approximate_by(df, "x", ["y", "w"], grid)
    fig = plot_density_facets(mapping, output_path=out_dir / "facets.png", ncols=4, title="Density of x by y / w")
    plt.close(fig)

    # x is a mixture, so compare against the sample itself and, for a sanity
    # check, a single normal component against its true CDF.
    print("Fidelity against the full sample:")
    print(fidelity_curve(x, [11, 101, 1001, 10001]).to_string(index=False))
    normal = stats.norm.rvs(size=rows, random_state=7)
    print("Fidelity of a standard normal against its CDF:")
    print(fidelity_curve(normal, [11, 101, 1001, 10001], cdf=stats.norm.cdf).to_string(index=False))
    print("=" * 80)
    print(f"Plots written to {out_dir}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Density reduction walkthrough")
    parser.add_argument("--rows", type=int, default=2_000_000, help="Rows to generate")
    parser.add_argument("--out-dir", type=Path, default=Path("output/walkthrough"), help="Directory for plots")
    args = parser.parse_args()
    run_walkthrough(args.rows, args.out_dir)


if __name__ == "__main__":
    main()
