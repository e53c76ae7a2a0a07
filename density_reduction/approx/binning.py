"""Quantile-bin means: the naive reduction that plots one mean per bin."""

from __future__ import annotations

from typing import Sequence

import numpy as np
import pandas as pd

from density_reduction.approx.quantile import as_samples
from density_reduction.exceptions import InvalidInputError, SchemaError

BIN_COLUMNS = ["bin", "lower", "upper", "mean", "count"]


def bin_edges(samples: Sequence[float] | np.ndarray, n_bins: int = 10) -> np.ndarray:
    """Unique quantile cutoffs splitting ``samples`` into up to ``n_bins`` bins."""
    if int(n_bins) != n_bins or n_bins < 1:
        raise InvalidInputError("n_bins must be an integer >= 1")
    arr = as_samples(samples)
    return np.unique(np.quantile(arr, np.linspace(0.0, 1.0, int(n_bins) + 1)))


def bin_means(samples: Sequence[float] | np.ndarray, n_bins: int = 10) -> pd.DataFrame:
    """Assign samples to quantile bins and report the mean of each bin.

    Bins are closed on the left; the maximum belongs to the last bin. Heavily
    tied data collapses duplicate cutoffs, so fewer than ``n_bins`` rows may
    come back. Empty bins are omitted.
    """
    arr = as_samples(samples)
    edges = bin_edges(arr, n_bins)
    if edges.size < 2:
        value = float(edges[0])
        return pd.DataFrame([[0, value, value, value, arr.size]], columns=BIN_COLUMNS)

    codes = np.clip(np.searchsorted(edges, arr, side="right") - 1, 0, edges.size - 2)
    stats = pd.Series(arr).groupby(codes).agg(["mean", "count"])
    out = pd.DataFrame(
        {
            "bin": stats.index.to_numpy(),
            "lower": edges[stats.index.to_numpy()],
            "upper": edges[stats.index.to_numpy() + 1],
            "mean": stats["mean"].to_numpy(),
            "count": stats["count"].to_numpy(),
        }
    )
    return out.reset_index(drop=True)


def bin_means_frame(df: pd.DataFrame, column: str, group_by: Sequence[str] = (), n_bins: int = 10) -> pd.DataFrame:
    """Apply :func:`bin_means` to ``df[column]`` per ``group_by`` combination."""
    group_by = list(group_by)
    missing = [c for c in [column, *group_by] if c not in df.columns]
    if missing:
        raise SchemaError(f"Missing required columns: {missing}")
    if not group_by:
        return bin_means(df[column].to_numpy(dtype=np.float64), n_bins)

    frames = []
    for key, group in df.groupby(group_by, observed=True, sort=True, dropna=False):
        labels = key if isinstance(key, tuple) else (key,)
        table = bin_means(group[column].to_numpy(dtype=np.float64), n_bins)
        for col, label in zip(group_by, labels):
            table.insert(group_by.index(col), col, label)
        frames.append(table)
    if not frames:
        raise InvalidInputError("samples must be non-empty")
    return pd.concat(frames, ignore_index=True)


__all__ = ["BIN_COLUMNS", "bin_edges", "bin_means", "bin_means_frame"]
