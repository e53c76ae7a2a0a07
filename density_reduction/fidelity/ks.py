"""Kolmogorov–Smirnov fidelity of approximated sample sets."""

from __future__ import annotations

from typing import Callable, Iterable, Sequence

import numpy as np
import pandas as pd
from scipy import stats

from density_reduction.approx.grid import uniform_grid
from density_reduction.approx.quantile import approximate, as_samples
from density_reduction.exceptions import InvalidInputError
from density_reduction.utils.logging import get_logger

log = get_logger(__name__, component="fidelity")

CDF = Callable[[np.ndarray], np.ndarray]


def ks_distance(values: Sequence[float] | np.ndarray, cdf: CDF | str) -> float:
    """One-sample KS statistic of ``values`` against a reference CDF.

    ``cdf`` is a callable or the name of a scipy.stats distribution with
    default parameters (e.g. ``"norm"``).
    """
    return float(stats.kstest(as_samples(values), cdf).statistic)


def ks_distance_samples(values: Sequence[float] | np.ndarray, reference: Sequence[float] | np.ndarray) -> float:
    """Two-sample KS statistic between ``values`` and a reference sample."""
    return float(stats.ks_2samp(as_samples(values), as_samples(reference)).statistic)


def fidelity_curve(
    samples: Sequence[float] | np.ndarray,
    resolutions: Iterable[int],
    cdf: CDF | str | None = None,
) -> pd.DataFrame:
    """KS distance of the quantile approximation at each grid resolution.

    Each resolution is a point count for :func:`uniform_grid`. The distance is
    measured against ``cdf`` when given, otherwise against ``samples``.
    """
    arr = as_samples(samples)
    points = sorted({int(n) for n in resolutions})
    if not points:
        raise InvalidInputError("at least one resolution is required")

    rows = []
    for n_points in points:
        approx = approximate(arr, uniform_grid(n_points=n_points))
        distance = ks_distance(approx, cdf) if cdf is not None else ks_distance_samples(approx, arr)
        rows.append({"n_points": n_points, "output_size": int(approx.size), "ks_distance": distance})
        log.debug("Fidelity point", extra={"grid_size": n_points, "ks_distance": distance})
    return pd.DataFrame(rows, columns=["n_points", "output_size", "ks_distance"])


__all__ = ["ks_distance", "ks_distance_samples", "fidelity_curve"]
