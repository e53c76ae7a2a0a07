"""CLI validation and configuration helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable

from density_reduction.config.loader import load_config_with_precedence, parse_list
from density_reduction.exceptions import ConfigValidationError
from density_reduction.schema.reduction_config import DEFAULT_GRID_STEP, ReductionConfig

ENV_PREFIX = "DR_"
GRID_SETTING = ("grid_step", "grid_points")

REDUCTION_DEFAULTS: dict[str, Any] = {
    "column": "x",
    "group_by": [],
    "grid_step": DEFAULT_GRID_STEP,
    "grid_points": None,
    "max_workers": None,
    "bandwidth": None,
}

REDUCTION_CASTERS = {
    "column": str,
    "group_by": parse_list,
    "grid_step": float,
    "grid_points": int,
    "max_workers": int,
    "bandwidth": float,
}


def require_positive(name: str, value: int | float) -> None:
    if value <= 0:
        raise ConfigValidationError(f"{name} must be > 0")


def require_input(path: Path) -> None:
    if not path.exists():
        raise ConfigValidationError(f"Input file not found: {path}")


def parse_resolutions(raw: str) -> list[int]:
    """Parse ``"11,101,1001"`` into sorted unique point counts (each >= 2)."""
    try:
        values = sorted({int(part) for part in parse_list(raw)})
    except ValueError as exc:
        raise ConfigValidationError(f"resolutions must be integers: {raw!r}") from exc
    if not values:
        raise ConfigValidationError("at least one resolution is required")
    if values[0] < 2:
        raise ConfigValidationError("resolutions must be >= 2 grid points")
    return values


def load_reduction_config(config_path: Path | None, cli_values: dict[str, Any]) -> ReductionConfig:
    """Resolve reduction settings (CLI > ENV > file > defaults) and validate them.

    ``grid_step`` and ``grid_points`` resolve as one setting: whichever comes
    from the higher-precedence source wins.
    """
    merged = load_config_with_precedence(
        config_path=config_path,
        env_prefix=ENV_PREFIX,
        cli_values=cli_values,
        defaults=REDUCTION_DEFAULTS,
        casters=REDUCTION_CASTERS,
        exclusive=[GRID_SETTING],
    )
    return ReductionConfig.from_dict(merged)


def output_groups(keys: Iterable[Any]) -> list[str]:
    return [" / ".join(map(str, k)) if isinstance(k, tuple) else str(k) for k in keys]


__all__ = [
    "load_reduction_config",
    "output_groups",
    "parse_resolutions",
    "require_input",
    "require_positive",
]
