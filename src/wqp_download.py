# ============================================================
# Water Quality Portal – result and station download
# ============================================================
# Retrieves sample results and monitoring-location metadata for a
# fixed set of sites from WaterQualityData.us as zipped CSV.
# ============================================================

import io
import zipfile

import pandas as pd
import requests
from tqdm import tqdm

import wq_config as cfg

RESULT_REQUIRED = ["org_id", "site_id", "date", "category", "raw_value"]
STATION_REQUIRED = ["org_id", "site_id"]


def _query_params(site_ids):
    # WQP takes repeated keys, so use list-of-tuples
    params = [("siteid", s) for s in sorted(set(site_ids))]
    params += [("mimeType", "csv"), ("zip", "yes")]
    return params


def download_zipped_csv(url, params, label="WQP data"):
    """Stream a zipped CSV from the portal and return its first member as a DataFrame (all text)."""
    print(f"📡 Downloading {label} from {url} ...")
    try:
        r = requests.get(url, params=params, stream=True, timeout=cfg.TIMEOUT)
    except requests.RequestException as e:
        raise RuntimeError(f"Download of {label} failed: {e}") from e

    if r.status_code != 200:
        raise RuntimeError(f"Download of {label} failed. HTTP {r.status_code}")

    buf = io.BytesIO()
    total = int(r.headers.get("Content-Length", 0)) or None
    with tqdm(total=total, unit="B", unit_scale=True, desc=label, leave=False) as bar:
        for chunk in r.iter_content(chunk_size=1 << 16):
            if chunk:
                buf.write(chunk)
                bar.update(len(chunk))

    if buf.tell() == 0:
        raise RuntimeError(f"Download of {label} returned an empty document.")

    try:
        z = zipfile.ZipFile(buf)
    except zipfile.BadZipFile as e:
        raise RuntimeError(f"Download of {label} did not return a zip archive.") from e

    names = z.namelist()
    if not names:
        raise RuntimeError(f"Download of {label} returned an empty archive.")

    df = pd.read_csv(z.open(names[0]), dtype=str, keep_default_na=False, na_values=[""])
    print(f"✅ {label}: {len(df):,} rows from {names[0]}")
    return df


def select_columns(df: pd.DataFrame, rename_map: dict, required: list) -> pd.DataFrame:
    """Keep and rename the WQP columns in `rename_map`; absent optional columns come back empty."""
    df = df.rename(columns=rename_map)
    fields = list(rename_map.values())

    missing = [c for c in required if c not in df.columns]
    if missing:
        raise ValueError(f"Missing expected columns: {missing}")

    for col in fields:
        if col not in df.columns:
            df[col] = None
    return df[fields].copy()


def tidy_observations(raw: pd.DataFrame) -> pd.DataFrame:
    """Rename raw result columns and type the non-measurement fields."""
    df = select_columns(raw, cfg.RESULT_COLUMNS, RESULT_REQUIRED)
    df["date"] = pd.to_datetime(df["date"], errors="coerce")
    df["depth"] = pd.to_numeric(df["depth"], errors="coerce")
    df["detection_limit"] = pd.to_numeric(df["detection_limit"], errors="coerce")
    # raw_value stays text until coercion
    return df


def tidy_site_metadata(raw: pd.DataFrame) -> pd.DataFrame:
    df = select_columns(raw, cfg.STATION_COLUMNS, STATION_REQUIRED)
    df["latitude"] = pd.to_numeric(df["latitude"], errors="coerce")
    df["longitude"] = pd.to_numeric(df["longitude"], errors="coerce")
    return df


def fetch_observations(site_ids) -> pd.DataFrame:
    raw = download_zipped_csv(cfg.RESULT_URL, _query_params(site_ids), label="sample results")
    return tidy_observations(raw)


def fetch_site_metadata(site_ids) -> pd.DataFrame:
    raw = download_zipped_csv(cfg.STATION_URL, _query_params(site_ids), label="site metadata")
    return tidy_site_metadata(raw)
