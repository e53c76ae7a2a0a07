"""Layered configuration loading: CLI > ENV > file > defaults."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping

import yaml

from density_reduction.exceptions import ConfigValidationError
from density_reduction.utils.logging import get_logger

log = get_logger(__name__, component="config")

_SOURCE_RANK = {"default": 0, "file": 1, "env": 2, "cli": 3}


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ConfigValidationError(f"Config file not found: {path}")
    suffix = path.suffix.lower()
    if suffix == ".json":
        try:
            content = json.loads(path.read_text())
        except json.JSONDecodeError as exc:
            raise ConfigValidationError(f"Invalid JSON config {path}: {exc}") from exc
    elif suffix in {".yml", ".yaml"}:
        try:
            content = yaml.safe_load(path.read_text())
        except yaml.YAMLError as exc:
            raise ConfigValidationError(f"Invalid YAML config {path}: {exc}") from exc
    else:
        raise ConfigValidationError("Config file must be JSON or YAML")
    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigValidationError(f"Config file {path} must contain a mapping")
    return content


def load_config_with_precedence(
    *,
    config_path: Path | None,
    env_prefix: str,
    cli_values: Mapping[str, Any],
    defaults: Mapping[str, Any],
    casters: Mapping[str, Callable[[Any], Any]] | None = None,
    exclusive: Iterable[tuple[str, ...]] = (),
) -> dict[str, Any]:
    """Merge configuration sources for the keys in ``defaults``.

    Environment variables are looked up as ``{env_prefix}{KEY}`` in upper case.
    ``None`` CLI values do not override lower-precedence sources.

    Each tuple in ``exclusive`` names keys that form one setting: the key set by
    the highest-precedence source wins and the others resolve to ``None``. Two
    keys of a group set by the same source raise ``ConfigValidationError``.
    """

    casters = casters or {}
    file_values = _load_yaml(config_path) if config_path else {}
    unknown = sorted(set(file_values) - set(defaults))
    if unknown:
        log.warning("Ignoring unknown config keys", extra={"keys": unknown})

    merged: dict[str, Any] = {}
    sources: dict[str, str] = {}
    for key, default in defaults.items():
        value: Any = default
        source = "default"
        if key in file_values and file_values[key] is not None:
            value, source = file_values[key], "file"
        env_value = os.environ.get(f"{env_prefix}{key.upper()}")
        if env_value is not None and env_value != "":
            value, source = env_value, "env"
        if cli_values.get(key) is not None:
            value, source = cli_values[key], "cli"

        caster = casters.get(key)
        if caster is not None and value is not None:
            try:
                value = caster(value)
            except (TypeError, ValueError) as exc:
                raise ConfigValidationError(f"Invalid value for {key} from {source}: {value!r}") from exc
        merged[key] = value
        sources[key] = source

    for group in exclusive:
        top = max(_SOURCE_RANK[sources[key]] for key in group)
        if top == 0:
            continue
        winners = [key for key in group if _SOURCE_RANK[sources[key]] == top]
        if len(winners) > 1:
            raise ConfigValidationError(
                f"{' and '.join(winners)} are mutually exclusive (both set via {sources[winners[0]]})"
            )
        for key in group:
            if key != winners[0]:
                merged[key] = None
                sources[key] = f"overridden by {winners[0]}"

    log.info("Configuration resolved", extra={"sources": sources})
    return merged


def parse_list(raw: Any) -> list[str]:
    """Accept a list or a comma-delimited string of names."""
    if isinstance(raw, (list, tuple)):
        return [str(v).strip() for v in raw if str(v).strip()]
    return [part.strip() for part in str(raw).split(",") if part.strip()]


__all__ = ["load_config_with_precedence", "parse_list"]
