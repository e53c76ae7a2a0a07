"""Quantile-based approximation of a sample set.

A sample set of any size is replaced by its empirical quantile function
evaluated on a fixed probability grid. The result has exactly ``len(grid)``
values, so memory used by a downstream density plot no longer depends on the
size of the input.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from density_reduction.approx.grid import validate_grid
from density_reduction.exceptions import InvalidInputError


def as_samples(samples: Sequence[float] | np.ndarray) -> np.ndarray:
    """Return ``samples`` as a finite, non-empty float64 vector."""
    try:
        arr = np.asarray(samples, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"samples must be numeric: {exc}") from exc
    if arr.ndim != 1:
        raise InvalidInputError(f"samples must be one-dimensional, got shape {arr.shape}")
    if arr.size == 0:
        raise InvalidInputError("samples must be non-empty")
    if not np.isfinite(arr).all():
        raise InvalidInputError("samples must not contain NaN or infinite values")
    return arr


def approximate(samples: Sequence[float] | np.ndarray, grid: Sequence[float] | np.ndarray) -> np.ndarray:
    """Evaluate the empirical quantile function of ``samples`` at every grid point.

    Uses linear interpolation between the two nearest order statistics
    (Hyndman & Fan type 7), so ``0.0`` maps to the minimum, ``1.0`` to the
    maximum and ``0.5`` to the conventional median.

    >>> approximate(range(1, 11), [0.0, 0.25, 0.5, 0.75, 1.0]).tolist()
    [1.0, 3.25, 5.5, 7.75, 10.0]
    """
    arr = as_samples(samples)
    probs = validate_grid(grid)
    return np.quantile(arr, probs, method="linear")


__all__ = ["approximate", "as_samples"]
