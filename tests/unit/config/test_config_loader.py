import json

import pytest

from density_reduction.config.loader import load_config_with_precedence, parse_list
from density_reduction.exceptions import ConfigValidationError

DEFAULTS = {"column": "x", "grid_step": 0.0001, "max_workers": None}
CASTERS = {"column": str, "grid_step": float, "max_workers": int}


def _load(config_path=None, cli=None):
    return load_config_with_precedence(
        config_path=config_path,
        env_prefix="DR_",
        cli_values=cli or {},
        defaults=DEFAULTS,
        casters=CASTERS,
    )


def test_defaults_when_nothing_supplied(monkeypatch):
    monkeypatch.delenv("DR_COLUMN", raising=False)
    monkeypatch.delenv("DR_GRID_STEP", raising=False)
    monkeypatch.delenv("DR_MAX_WORKERS", raising=False)
    assert _load() == DEFAULTS


def test_precedence_cli_over_env_over_file(tmp_path, monkeypatch):
    path = tmp_path / "cfg.yaml"
    monkeypatch.delenv("DR_COLUMN", raising=False)
    path.write_text("column: value\ngrid_step: 0.01\nmax_workers: 2\n")
    monkeypatch.setenv("DR_GRID_STEP", "0.05")
    monkeypatch.setenv("DR_MAX_WORKERS", "3")
    cfg = _load(path, {"max_workers": 4, "column": None})
    assert cfg == {"column": "value", "grid_step": 0.05, "max_workers": 4}


def test_json_config_file(tmp_path, monkeypatch):
    monkeypatch.delenv("DR_COLUMN", raising=False)
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({"column": "price"}))
    assert _load(path)["column"] == "price"


def test_bad_cast_raises(monkeypatch):
    monkeypatch.setenv("DR_MAX_WORKERS", "many")
    with pytest.raises(ConfigValidationError):
        _load()


@pytest.mark.parametrize("name,content", [("cfg.yaml", "- a\n- b\n"), ("cfg.toml", "a = 1"), ("cfg.yaml", "a: [")])
def test_invalid_files_raise(tmp_path, name, content):
    path = tmp_path / name
    path.write_text(content)
    with pytest.raises(ConfigValidationError):
        _load(path)


def test_missing_file_raises(tmp_path):
    with pytest.raises(ConfigValidationError):
        _load(tmp_path / "missing.yaml")


def test_parse_list():
    assert parse_list("y, w,,z") == ["y", "w", "z"]
    assert parse_list(["y", " w "]) == ["y", "w"]
    assert parse_list("") == []


def _load_grid(monkeypatch, config_path=None, cli=None):
    for name in ("DR_GRID_STEP", "DR_GRID_POINTS"):
        monkeypatch.delenv(name, raising=False)
    return load_config_with_precedence(
        config_path=config_path,
        env_prefix="DR_",
        cli_values=cli or {},
        defaults={"grid_step": 0.0001, "grid_points": None},
        casters={"grid_step": float, "grid_points": int},
        exclusive=[("grid_step", "grid_points")],
    )


def test_exclusive_keys_default_untouched(monkeypatch):
    assert _load_grid(monkeypatch) == {"grid_step": 0.0001, "grid_points": None}


def test_exclusive_keys_file_points_clear_default_step(tmp_path, monkeypatch):
    path = tmp_path / "cfg.yaml"
    path.write_text("grid_points: 11\n")
    assert _load_grid(monkeypatch, path) == {"grid_step": None, "grid_points": 11}


def test_exclusive_keys_same_source_raises(tmp_path, monkeypatch):
    path = tmp_path / "cfg.yaml"
    path.write_text("grid_points: 11\ngrid_step: 0.1\n")
    with pytest.raises(ConfigValidationError):
        _load_grid(monkeypatch, path)
