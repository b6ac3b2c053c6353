"""
Water Quality Cleaner

Narrows raw WQP results to the recognized characteristics, coerces the
free-text result field to numbers and recodes each characteristic (plus its
sample fraction) to one normalized variable name.
"""

import numpy as np
import pandas as pd

import wq_config as cfg

_ANY_FRACTION = {cat: var for (cat, frac), var in cfg.VARIABLE_MAP.items() if frac is None}
_BY_FRACTION = {(cat, frac): var for (cat, frac), var in cfg.VARIABLE_MAP.items() if frac is not None}


def filter_categories(df: pd.DataFrame) -> pd.DataFrame:
    """Keep only rows whose characteristic is on the allow-list."""
    return df[df["category"].isin(cfg.CATEGORIES)].copy()


def coerce_numeric(values: pd.Series) -> pd.Series:
    # "ND", "*Non-detect", blanks -> NaN; nothing is substituted here
    return pd.to_numeric(values, errors="coerce").astype(float)


def map_variable(category, fraction):
    """Return the normalized variable for a (characteristic, fraction) pair, or None to exclude it."""
    if category in _ANY_FRACTION:
        return _ANY_FRACTION[category]
    if isinstance(fraction, str):
        fraction = fraction.strip()
    return _BY_FRACTION.get((category, fraction))


def assign_variables(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()
    df["variable"] = [map_variable(c, f) for c, f in zip(df["category"], df["fraction"])]
    return df


def substitute_below_detection(df: pd.DataFrame, fraction=0.5) -> pd.DataFrame:
    """
    Fill missing non-detect results with `fraction` x detection limit.

    Only rows that are missing a value, carry a non-detect flag (detection
    condition or qualifier code) and report a numeric detection limit are
    touched. Not part of the default pipeline.
    """
    df = df.copy()
    flagged = (
        df["detection_condition"].isin(cfg.BDL_CONDITIONS)
        | df["qualifier"].isin(cfg.BDL_QUALIFIERS)
    )
    limit = pd.to_numeric(df["detection_limit"], errors="coerce")
    mask = df["value"].isna() & flagged & limit.notna()
    df.loc[mask, "value"] = limit[mask] * fraction
    print(f"🧪 Substituted {int(mask.sum()):,} non-detects with {fraction} × detection limit")
    return df


def normalize_observations(df: pd.DataFrame, bdl_fraction=None) -> pd.DataFrame:
    """Filter, coerce and recode raw observations into the normalized long table."""
    print(f"🧹 Normalizing {len(df):,} raw results ...")

    out = df.copy()
    for col in ["category", "fraction"]:
        out[col] = out[col].where(out[col].isna(), out[col].astype(str).str.strip())

    out = filter_categories(out)
    print(f"✅ {len(out):,} rows on the characteristic allow-list")

    out["value"] = coerce_numeric(out["raw_value"])
    n_bad = int((out["value"].isna() & out["raw_value"].notna()).sum())
    if n_bad:
        print(f"⚠️ {n_bad:,} non-numeric results set to missing")

    if bdl_fraction is not None:
        out = substitute_below_detection(out, bdl_fraction)

    out = assign_variables(out)
    excluded = out["variable"].isna()
    if excluded.any():
        print(f"⚠️ Dropped {int(excluded.sum()):,} rows with no variable mapping")
    out = out.loc[~excluded].reset_index(drop=True)
    out["value"] = out["value"].astype(np.float64)
    return out
