import pytest

from density_reduction.exceptions import ResourceLimitError
from density_reduction.utils.resources import detect_total_ram_gb, estimate_plot_footprint_gb, select_plot_policy


def test_footprint_scales_linearly():
    one = estimate_plot_footprint_gb(1_000_000)
    assert one == pytest.approx(1_000_000 * (32 + 8 * 512) * 1.1 / 1e9)
    assert estimate_plot_footprint_gb(2_000_000) == pytest.approx(2 * one)


def test_footprint_rejects_negative_rows():
    with pytest.raises(ValueError):
        estimate_plot_footprint_gb(-1)


def test_small_sample_plots_raw():
    policy, est = select_plot_policy(10_000, 10_001, total_ram_gb=16.0)
    assert policy == "raw"
    assert est == pytest.approx(estimate_plot_footprint_gb(10_000))


def test_large_sample_switches_to_quantile(caplog):
    policy, est = select_plot_policy(1_000_000, 10_001, total_ram_gb=16.0)
    assert policy == "quantile"
    assert est == pytest.approx(estimate_plot_footprint_gb(10_001))
    assert any("quantile reduction" in r.message for r in caplog.records)


def test_reduction_that_still_exceeds_ram_aborts():
    with pytest.raises(ResourceLimitError):
        select_plot_policy(1_000_000, 1_000_000, total_ram_gb=8.0)


def test_detect_total_ram_is_positive():
    assert detect_total_ram_gb() > 0
