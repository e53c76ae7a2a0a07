import pandas as pd
import pytest

from density_reduction.data.synthetic import generate_frame
from density_reduction.exceptions import InvalidInputError


def test_generate_frame_shape_and_dtypes():
    df = generate_frame(1000, seed=1)
    assert list(df.columns) == ["x", "y", "w", "z"]
    assert len(df) == 1000
    assert df["x"].dtype == "float64"
    for col in ["y", "w", "z"]:
        assert isinstance(df[col].dtype, pd.CategoricalDtype)
    assert list(df["y"].cat.categories) == ["A", "B", "C", "D", "E"]
    assert list(df["w"].cat.categories) == ["w1", "w2"]


def test_generate_frame_is_deterministic_for_seed():
    pd.testing.assert_frame_equal(generate_frame(500, seed=3), generate_frame(500, seed=3))
    assert not generate_frame(500, seed=3)["x"].equals(generate_frame(500, seed=4)["x"])


def test_groups_have_distinct_locations():
    df = generate_frame(20_000, seed=2)
    medians = df.groupby("y", observed=True)["x"].median()
    assert medians.is_monotonic_increasing


@pytest.mark.parametrize("kwargs", [{"n_rows": 0}, {"n_rows": 10, "y_levels": 27}, {"n_rows": 10, "w_levels": 0}])
def test_generate_frame_rejects_bad_arguments(kwargs):
    with pytest.raises(InvalidInputError):
        generate_frame(**kwargs)
