"""End-to-end tests for the pipeline runner with the portal stubbed out."""

from __future__ import annotations

import pandas as pd
import pytest

import run_pipeline
import wqp_download


@pytest.fixture
def stub_portal(monkeypatch, make_observations, site_metadata):
    raw = make_observations(
        {"raw_value": "7.2"},
        {"raw_value": "7.4"},
        {"category": "Ammonia", "fraction": "Total", "raw_value": "0.3"},
        {"category": "Ammonia", "fraction": "Dissolved", "raw_value": "ND"},
        {"category": "Dissolved oxygen (DO)", "raw_value": "8.4", "date": "2021-08-10"},
        {"category": "Temperature, water", "raw_value": "24.1"},
        {"category": "pH", "raw_value": "6.1", "depth": 4.0},
    )
    monkeypatch.setattr(wqp_download, "fetch_observations", lambda site_ids: raw)
    monkeypatch.setattr(wqp_download, "fetch_site_metadata", lambda site_ids: site_metadata)


def test_run_writes_long_and_wide_csv(stub_portal, tmp_path) -> None:
    result = run_pipeline.run(site_ids=["USGS-01491000"], out_dir=tmp_path, make_plots=False)

    long_df = pd.read_csv(result["long_path"])
    wide_df = pd.read_csv(result["wide_path"])

    ph = long_df[long_df["variable"] == "pH"]
    assert len(ph) == 1
    assert ph["value"].iloc[0] == pytest.approx(7.3)
    assert set(long_df["variable"]) == {"pH", "NH3_mgL", "DO_mgL"}
    assert long_df.loc[long_df["variable"] == "NH3_mgL", "value"].isna().all()
    assert list(long_df.columns) == [
        "org_id", "org_name", "conducting_org", "site_id", "depth", "date",
        "variable", "value", "month", "year",
    ]

    assert len(wide_df) == 2
    assert {"pH", "NH3_mgL", "DO_mgL", "site_name", "latitude", "longitude", "huc"} <= set(wide_df.columns)
    assert wide_df["site_name"].notna().all()
    assert wide_df["date"].tolist() == ["2020-06-01", "2021-08-10"]


def test_run_writes_summary_tables(stub_portal, tmp_path) -> None:
    run_pipeline.run(site_ids=["USGS-01491000"], out_dir=tmp_path, make_plots=False, write_summary=True)

    crosswalk = pd.read_csv(tmp_path / "wq_category_crosswalk.csv")

    assert (tmp_path / "wq_variable_summary.csv").exists()
    assert "Ammonia" in crosswalk["category"].tolist()
    assert set(crosswalk["variable"]) == {"pH", "NH3_mgL", "DO_mgL"}


def test_ingestion_failure_writes_nothing(monkeypatch, tmp_path) -> None:
    def _fail(site_ids):
        raise RuntimeError("Download of sample results failed. HTTP 503")

    monkeypatch.setattr(wqp_download, "fetch_observations", _fail)
    out_dir = tmp_path / "out"

    with pytest.raises(RuntimeError, match="HTTP 503"):
        run_pipeline.run(site_ids=["USGS-01491000"], out_dir=out_dir)

    assert not out_dir.exists()
