import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pytest

from density_reduction.approx.grouped import approximate_by
from density_reduction.approx.grid import uniform_grid
from density_reduction.data.synthetic import generate_frame
from density_reduction.exceptions import InvalidInputError
from density_reduction.plotting.density import plot_density_comparison, plot_density_facets


def test_facets_one_visible_panel_per_group(tmp_path):
    df = generate_frame(3000, seed=9)
    mapping = approximate_by(df, "x", ["z"], uniform_grid(n_points=201))
    out = tmp_path / "plots" / "facets.png"
    fig = plot_density_facets(mapping, output_path=out, ncols=2)
    try:
        visible = [ax for ax in fig.axes if ax.get_visible()]
        assert len(visible) == 3
        assert sorted(ax.get_title() for ax in visible) == ["z1", "z2", "z3"]
        assert out.exists() and out.stat().st_size > 0
    finally:
        plt.close(fig)


def test_facets_with_tuple_keys_and_constant_group():
    mapping = {("A", "w1"): np.linspace(0, 1, 50), ("B", "w2"): np.full(50, 3.0)}
    fig = plot_density_facets(mapping)
    try:
        assert [ax.get_title() for ax in fig.axes] == ["A / w1", "B / w2"]
        assert len(fig.axes[1].lines) == 1
    finally:
        plt.close(fig)


def test_facets_require_groups():
    with pytest.raises(InvalidInputError):
        plot_density_facets({})


def test_comparison_overlays_two_curves():
    rng = np.random.default_rng(10)
    raw = rng.normal(size=5000)
    approx = np.quantile(raw, np.linspace(0, 1, 101))
    fig = plot_density_comparison(raw, approx, bandwidth=0.3)
    try:
        ax = fig.axes[0]
        labels = [line.get_label() for line in ax.get_lines()]
        assert labels == ["Raw (n=5,000)", "Quantile grid (n=101)"]
    finally:
        plt.close(fig)
