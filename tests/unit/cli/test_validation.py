import pytest

from density_reduction.cli.validation import load_reduction_config, parse_resolutions
from density_reduction.exceptions import ConfigValidationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("DR_COLUMN", "DR_GROUP_BY", "DR_GRID_STEP", "DR_GRID_POINTS", "DR_MAX_WORKERS", "DR_BANDWIDTH"):
        monkeypatch.delenv(name, raising=False)


def test_cli_step_beats_env_points(monkeypatch):
    monkeypatch.setenv("DR_GRID_POINTS", "11")
    cfg = load_reduction_config(None, {"grid_step": 0.25})
    assert cfg.grid_points is None
    assert cfg.build_grid().tolist() == [0.0, 0.25, 0.5, 0.75, 1.0]


def test_env_points_beat_file_step(tmp_path, monkeypatch):
    path = tmp_path / "cfg.yaml"
    path.write_text("grid_step: 0.25\n")
    monkeypatch.setenv("DR_GRID_POINTS", "11")
    cfg = load_reduction_config(path, {})
    assert cfg.grid_step is None
    assert cfg.build_grid().size == 11


def test_env_step_beats_file_points(tmp_path, monkeypatch):
    path = tmp_path / "cfg.yaml"
    path.write_text("grid_points: 11\n")
    monkeypatch.setenv("DR_GRID_STEP", "0.5")
    cfg = load_reduction_config(path, {})
    assert cfg.build_grid().tolist() == [0.0, 0.5, 1.0]


def test_cli_step_and_points_together_rejected():
    with pytest.raises(ConfigValidationError):
        load_reduction_config(None, {"grid_step": 0.1, "grid_points": 5})


def test_parse_resolutions_sorts_and_dedupes():
    assert parse_resolutions("101, 11,101") == [11, 101]
    with pytest.raises(ConfigValidationError):
        parse_resolutions("1,5")
