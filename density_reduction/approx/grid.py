"""Quantile grid construction and validation."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from density_reduction.exceptions import InvalidInputError

# Tolerance when deciding whether a step lands exactly on 1.0.
_EDGE_TOL = 1e-9


def validate_grid(grid: Sequence[float] | np.ndarray) -> np.ndarray:
    """Return ``grid`` as a float64 array or raise InvalidInputError.

    A valid grid is one-dimensional, non-empty, finite, within [0, 1] and
    non-decreasing. Repeated probabilities are allowed.
    """
    try:
        arr = np.asarray(grid, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"grid must be numeric: {exc}") from exc
    if arr.ndim != 1:
        raise InvalidInputError(f"grid must be one-dimensional, got shape {arr.shape}")
    if arr.size == 0:
        raise InvalidInputError("grid must contain at least one probability")
    if not np.isfinite(arr).all():
        raise InvalidInputError("grid must not contain NaN or infinite values")
    if arr.min() < 0.0 or arr.max() > 1.0:
        raise InvalidInputError(f"grid values must be within [0, 1], got [{arr.min()}, {arr.max()}]")
    if arr.size > 1 and (np.diff(arr) < 0).any():
        raise InvalidInputError("grid must be non-decreasing")
    return arr


def uniform_grid(step: float | None = None, n_points: int | None = None) -> np.ndarray:
    """Build an evenly spaced grid from 0.0 to 1.0 inclusive.

    Exactly one of ``step`` or ``n_points`` is required. When ``step`` does not
    divide 1 evenly the final point is still 1.0, so the grid always covers the
    sample minimum and maximum.

    >>> uniform_grid(step=0.25).tolist()
    [0.0, 0.25, 0.5, 0.75, 1.0]
    """
    if (step is None) == (n_points is None):
        raise InvalidInputError("exactly one of step or n_points is required")

    if n_points is not None:
        if int(n_points) != n_points or n_points < 2:
            raise InvalidInputError("n_points must be an integer >= 2")
        return np.linspace(0.0, 1.0, int(n_points))

    if not np.isfinite(step) or not 0.0 < step <= 1.0:
        raise InvalidInputError("step must be in (0, 1]")
    n_steps = int(np.floor(1.0 / step + _EDGE_TOL))
    grid = np.arange(n_steps + 1, dtype=np.float64) * step
    if 1.0 - grid[-1] > _EDGE_TOL:
        grid = np.append(grid, 1.0)
    else:
        grid[-1] = 1.0
    return grid


__all__ = ["uniform_grid", "validate_grid"]
