import numpy as np
import pytest

from density_reduction.approx.grid import uniform_grid, validate_grid
from density_reduction.exceptions import InvalidInputError


def test_uniform_grid_quarter_step():
    assert uniform_grid(step=0.25).tolist() == [0.0, 0.25, 0.5, 0.75, 1.0]


def test_uniform_grid_fine_step_ends_exactly_at_one():
    grid = uniform_grid(step=0.0001)
    assert grid.size == 10001
    assert grid[0] == 0.0
    assert grid[-1] == 1.0
    assert (np.diff(grid) > 0).all()


def test_uniform_grid_uneven_step_appends_one():
    grid = uniform_grid(step=0.3)
    assert grid.tolist() == pytest.approx([0.0, 0.3, 0.6, 0.9, 1.0])
    assert grid[-1] == 1.0


def test_uniform_grid_by_point_count():
    grid = uniform_grid(n_points=5)
    assert grid.tolist() == [0.0, 0.25, 0.5, 0.75, 1.0]


@pytest.mark.parametrize(
    "kwargs",
    [{}, {"step": 0.1, "n_points": 11}, {"step": 0.0}, {"step": 1.5}, {"step": -0.1}, {"n_points": 1}, {"n_points": 2.5}],
)
def test_uniform_grid_rejects_bad_arguments(kwargs):
    with pytest.raises(InvalidInputError):
        uniform_grid(**kwargs)


def test_validate_grid_returns_float_array():
    grid = validate_grid([0, 0.5, 0.5, 1])
    assert grid.dtype == np.float64
    assert grid.tolist() == [0.0, 0.5, 0.5, 1.0]


@pytest.mark.parametrize("grid", [[], [0.2, 0.1], [-0.01], [1.01], [float("nan")], [[0.1, 0.2]]])
def test_validate_grid_rejects_invalid(grid):
    with pytest.raises(InvalidInputError):
        validate_grid(grid)
