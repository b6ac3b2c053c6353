"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pandas as pd
import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


OBSERVATION_DEFAULTS = {
    "org_id": "USGS-MD",
    "org_name": "USGS Maryland Water Science Center",
    "conducting_org": None,
    "site_id": "USGS-01491000",
    "date": "2020-06-01",
    "depth": None,
    "category": "pH",
    "fraction": None,
    "raw_value": "7.0",
    "qualifier": None,
    "detection_condition": None,
    "detection_limit": None,
}


@pytest.fixture
def make_observations():
    """Build a tidy observation frame; each row overrides the defaults."""

    def _make(*rows: dict) -> pd.DataFrame:
        df = pd.DataFrame([{**OBSERVATION_DEFAULTS, **row} for row in rows], columns=list(OBSERVATION_DEFAULTS))
        df["date"] = pd.to_datetime(df["date"])
        df["depth"] = pd.to_numeric(df["depth"], errors="coerce")
        df["detection_limit"] = pd.to_numeric(df["detection_limit"], errors="coerce")
        return df

    return _make


@pytest.fixture
def site_metadata() -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "org_id": "USGS-MD",
                "site_id": "USGS-01491000",
                "site_name": "CHOPTANK RIVER NEAR GREENSBORO, MD",
                "site_description": None,
                "huc": "02060005",
                "latitude": 38.997,
                "longitude": -75.786,
            }
        ]
    )
