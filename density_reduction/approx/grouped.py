"""Grouped quantile approximation.

Samples are partitioned by a group key (one label or a tuple of labels) and
each partition is reduced independently with :func:`approximate`. Groups share
no state, so they can be reduced in a process pool.
"""

from __future__ import annotations

import os
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Any, Hashable, Iterable, Sequence

import numpy as np
import pandas as pd

from density_reduction.approx.grid import validate_grid
from density_reduction.approx.quantile import approximate, as_samples
from density_reduction.exceptions import InvalidInputError, SchemaError
from density_reduction.utils.logging import get_logger

log = get_logger(__name__, component="approx.grouped")


def _clamp_workers(max_workers: int | None) -> int:
    cpu_count = os.cpu_count() or 1
    if max_workers is None:
        return 1
    return max(1, min(int(max_workers), 6, cpu_count))


def partition(samples: Sequence[float] | np.ndarray, keys: Sequence[Hashable] | pd.Index) -> dict[Hashable, np.ndarray]:
    """Split ``samples`` by ``keys`` into an exact partition.

    Keys keep their order of first appearance. Missing labels (None/NaN) form
    a single group of their own so no row is dropped; that group is keyed by
    the first missing label the caller supplied, so ``None`` stays ``None``.
    """
    values = as_samples(samples)
    if isinstance(keys, pd.Index):
        index = labels = keys
    elif isinstance(keys, (np.ndarray, pd.Series, pd.Categorical)):
        index = labels = pd.Index(keys)
    else:
        labels = list(keys)
        # a list of tuples becomes a MultiIndex and factorizes to tuple keys
        index = pd.Index(labels)
    if len(index) != values.size:
        raise InvalidInputError(f"samples and keys must have the same length ({values.size} != {len(index)})")

    codes, uniques = index.factorize(use_na_sentinel=False)
    _, first_seen = np.unique(codes, return_index=True)
    group_keys = [labels[first_seen[code]] if _is_missing(key) else key for code, key in enumerate(uniques)]
    order = np.argsort(codes, kind="stable")
    counts = np.bincount(codes, minlength=len(uniques))
    parts = np.split(values[order], np.cumsum(counts)[:-1])
    return {key: part for key, part in zip(group_keys, parts)}


def _is_missing(key: Hashable) -> bool:
    return not isinstance(key, tuple) and bool(pd.isna(key))


def approximate_grouped(
    samples: Sequence[float] | np.ndarray,
    keys: Sequence[Hashable] | pd.Index,
    grid: Sequence[float] | np.ndarray,
    *,
    max_workers: int | None = None,
) -> dict[Hashable, np.ndarray]:
    """Approximate each group of ``samples`` on ``grid``.

    Returns one entry per distinct key, each of length ``len(grid)``. Groups
    with fewer samples than grid points are reduced anyway (values repeat) and
    reported at INFO level. Any failure propagates; no partial mapping is
    returned.
    """
    probs = validate_grid(grid)
    groups = partition(samples, keys)

    for key, part in groups.items():
        if part.size < probs.size:
            log.info(
                "Sparse group; quantile values will repeat",
                extra={"group": key, "n_samples": int(part.size), "grid_size": int(probs.size)},
            )

    worker_count = _clamp_workers(max_workers)
    if worker_count == 1 or len(groups) == 1:
        return {key: approximate(part, probs) for key, part in groups.items()}

    results: dict[Hashable, np.ndarray] = {}
    with ProcessPoolExecutor(max_workers=worker_count) as executor:
        futures = {executor.submit(approximate, part, probs): key for key, part in groups.items()}
        for fut in as_completed(futures):
            results[futures[fut]] = fut.result()
    log.info("Grouped approximation complete", extra={"groups": len(results), "workers": worker_count})
    return {key: results[key] for key in groups}


def approximate_pairs(
    pairs: Iterable[tuple[float, Hashable]],
    grid: Sequence[float] | np.ndarray,
    *,
    max_workers: int | None = None,
) -> dict[Hashable, np.ndarray]:
    """Same as :func:`approximate_grouped` for ``(value, key)`` pairs."""
    pairs = list(pairs)
    if not pairs:
        raise InvalidInputError("samples must be non-empty")
    values = [value for value, _ in pairs]
    keys = [key for _, key in pairs]
    return approximate_grouped(values, keys, grid, max_workers=max_workers)


def _require_columns(df: pd.DataFrame, columns: Sequence[str]) -> None:
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise SchemaError(f"Missing required columns: {missing}")


def _frame_keys(df: pd.DataFrame, group_by: list[str]) -> pd.Index:
    if len(group_by) == 1:
        return pd.Index(df[group_by[0]])
    return pd.MultiIndex.from_frame(df[group_by])


def samples_by(df: pd.DataFrame, column: str, group_by: Sequence[str]) -> dict[Any, np.ndarray]:
    """Raw ``df[column]`` values per ``group_by`` combination, keyed like :func:`approximate_by`."""
    group_by = list(group_by)
    _require_columns(df, [column, *group_by])
    values = as_samples(df[column].to_numpy(dtype=np.float64))
    if not group_by:
        return {column: values}
    return partition(values, _frame_keys(df, group_by))


def approximate_by(
    df: pd.DataFrame,
    column: str,
    group_by: Sequence[str],
    grid: Sequence[float] | np.ndarray,
    *,
    max_workers: int | None = None,
) -> dict[Any, np.ndarray]:
    """Approximate ``df[column]`` per combination of ``group_by`` columns.

    With no group columns the result holds a single entry keyed by ``column``.
    With several group columns keys are tuples in column order.
    """
    group_by = list(group_by)
    _require_columns(df, [column, *group_by])
    values = df[column].to_numpy(dtype=np.float64)
    if not group_by:
        return {column: approximate(values, grid)}
    return approximate_grouped(values, _frame_keys(df, group_by), grid, max_workers=max_workers)


def approximate_frame(
    df: pd.DataFrame,
    column: str,
    group_by: Sequence[str],
    grid: Sequence[float] | np.ndarray,
    *,
    max_workers: int | None = None,
) -> pd.DataFrame:
    """Return a long frame of ``group_by..., quantile, value`` rows."""
    probs = validate_grid(grid)
    group_by = list(group_by)
    mapping = approximate_by(df, column, group_by, probs, max_workers=max_workers)
    if not group_by:
        return pd.DataFrame({"quantile": probs, "value": mapping[column]})

    frames = []
    for key, values in mapping.items():
        labels = key if isinstance(key, tuple) else (key,)
        block = {col: [label] * probs.size for col, label in zip(group_by, labels)}
        block["quantile"] = probs
        block["value"] = values
        frames.append(pd.DataFrame(block))
    return pd.concat(frames, ignore_index=True)


__all__ = [
    "approximate_by",
    "approximate_frame",
    "approximate_grouped",
    "approximate_pairs",
    "partition",
    "samples_by",
]
