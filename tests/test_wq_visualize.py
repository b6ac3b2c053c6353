"""Smoke tests for the exploratory plots."""

from __future__ import annotations

from wq_cleaner import normalize_observations
from wq_reshape import aggregate_observations, pivot_wide
from wq_visualize import plot_all, plot_timeseries


def test_plot_all_writes_png_files(make_observations, tmp_path) -> None:
    raw = make_observations(
        {"date": "2020-05-01", "raw_value": "7.1"},
        {"date": "2020-06-01", "raw_value": "7.3"},
        {"date": "2020-05-01", "category": "Dissolved oxygen (DO)", "raw_value": "9.0"},
        {"date": "2020-06-01", "category": "Dissolved oxygen (DO)", "raw_value": "8.2"},
        {"date": "2020-07-01", "category": "Dissolved oxygen (DO)", "raw_value": "7.6"},
    )
    long_df = aggregate_observations(normalize_observations(raw))
    wide = pivot_wide(long_df)

    written = plot_all(long_df, wide, ["pH", "DO_mgL"], tmp_path)

    names = {p.name for p in written}
    assert {"pH_timeseries.png", "DO_mgL_monthly.png", "correlation.png"} <= names
    assert all(p.stat().st_size > 0 for p in written)


def test_plot_skips_variable_without_numbers(make_observations, tmp_path) -> None:
    long_df = aggregate_observations(normalize_observations(make_observations({"raw_value": "ND"})))

    assert plot_timeseries(long_df, "pH", tmp_path / "pH.png") is None
    assert not (tmp_path / "pH.png").exists()
