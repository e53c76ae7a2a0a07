"""Helpers for reading sample columns and writing reduced frames."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import pandas as pd
import pyarrow.parquet as pq

from density_reduction.exceptions import ConfigValidationError, DataSourceError, SchemaError
from density_reduction.utils.logging import get_logger

log = get_logger(__name__, component="data.io")

READ_SUFFIXES = {".csv", ".parquet", ".pq"}
WRITE_SUFFIXES = {".csv", ".parquet", ".pq", ".json"}


def _columns(path: Path) -> list[str]:
    if path.suffix.lower() == ".csv":
        return list(pd.read_csv(path, nrows=0).columns)
    return list(pq.read_schema(path).names)


def load_samples(path: Path, column: str, group_by: Sequence[str] = ()) -> pd.DataFrame:
    """Load ``column`` and ``group_by`` columns from a CSV or Parquet file.

    The sample column is coerced to float; rows with a missing or non-numeric
    sample are dropped and counted in a warning.
    """
    path = Path(path)
    if not path.exists():
        raise DataSourceError(f"Sample file not found: {path}")
    suffix = path.suffix.lower()
    if suffix not in READ_SUFFIXES:
        raise DataSourceError(f"Unsupported sample file type: {suffix or path.name}")

    wanted = [column, *group_by]
    missing = [c for c in wanted if c not in _columns(path)]
    if missing:
        raise SchemaError(f"Missing required columns: {missing}")

    if suffix == ".csv":
        df = pd.read_csv(path, usecols=wanted)
    else:
        df = pd.read_parquet(path, columns=wanted, engine="pyarrow")

    df[column] = pd.to_numeric(df[column], errors="coerce")
    valid = df[column].notna()
    dropped = int((~valid).sum())
    if dropped:
        log.warning(
            "Dropped rows with missing or non-numeric samples",
            extra={"path": str(path), "dropped": dropped, "n_samples": int(valid.sum())},
        )
        df = df.loc[valid].reset_index(drop=True)
    if df.empty:
        raise DataSourceError(f"No usable samples in column {column!r} of {path}")
    log.info("Samples loaded", extra={"path": str(path), "n_samples": len(df)})
    return df


def write_frame(df: pd.DataFrame, path: Path) -> Path:
    """Write ``df`` as CSV, Parquet or JSON records depending on the suffix."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in WRITE_SUFFIXES:
        raise ConfigValidationError(f"Output must be one of {sorted(WRITE_SUFFIXES)}, got {suffix or path.name}")
    path.parent.mkdir(parents=True, exist_ok=True)
    if suffix == ".csv":
        df.to_csv(path, index=False)
    elif suffix == ".json":
        df.to_json(path, orient="records", indent=2)
    else:
        df.to_parquet(path, index=False, engine="pyarrow", compression="snappy")
    log.info("Frame written", extra={"path": str(path), "rows": len(df)})
    return path


__all__ = ["load_samples", "write_frame"]
