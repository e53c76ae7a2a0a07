"""Synthetic sample frames shaped like large measurement datasets."""

from __future__ import annotations

import string

import numpy as np
import pandas as pd

from density_reduction.exceptions import InvalidInputError


def generate_frame(
    n_rows: int,
    seed: int | None = 42,
    *,
    y_levels: int = 5,
    w_levels: int = 2,
    z_levels: int = 3,
) -> pd.DataFrame:
    """Return ``n_rows`` of a numeric measurement ``x`` with categorical keys.

    ``x`` is normal with a location and spread that grow with the ``y`` level,
    shifted by a lognormal skew term when ``w`` is its second level and by a
    small offset per ``z`` level, so groups have visibly different densities.
    """
    if n_rows <= 0:
        raise InvalidInputError("n_rows must be > 0")
    if not 1 <= y_levels <= 26 or w_levels < 1 or z_levels < 1:
        raise InvalidInputError("y_levels must be in [1, 26]; w_levels and z_levels must be >= 1")

    rng = np.random.default_rng(seed)
    y = rng.integers(0, y_levels, size=n_rows)
    w = rng.integers(0, w_levels, size=n_rows)
    z = rng.integers(0, z_levels, size=n_rows)

    x = rng.normal(loc=2.0 * y, scale=1.0 + 0.5 * y)
    x += (w == 1) * rng.lognormal(mean=0.0, sigma=0.5, size=n_rows)
    x += 0.25 * z

    return pd.DataFrame(
        {
            "x": x,
            "y": pd.Categorical.from_codes(y, categories=list(string.ascii_uppercase[:y_levels])),
            "w": pd.Categorical.from_codes(w, categories=[f"w{i + 1}" for i in range(w_levels)]),
            "z": pd.Categorical.from_codes(z, categories=[f"z{i + 1}" for i in range(z_levels)]),
        }
    )


__all__ = ["generate_frame"]
