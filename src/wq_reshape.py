"""
Water Quality Reshape

Deduplicates normalized observations by averaging, pivots the long table to
one row per site/date sample event and attaches site metadata.
"""

import pandas as pd

import wq_config as cfg


def aggregate_observations(df: pd.DataFrame, max_depth=cfg.MAX_DEPTH) -> pd.DataFrame:
    """
    Average repeated measurements sharing site, organization, depth, date and variable.

    Missing values are skipped in the mean; a group with no numeric value
    stays missing. Blank key fields are kept as their own group. Groups
    deeper than `max_depth` are discarded (exactly `max_depth` is kept).
    """
    df = df.dropna(subset=["variable"])

    agg = (
        df.groupby(cfg.OBSERVATION_KEYS, dropna=False, sort=True)["value"]
          .mean()
          .reset_index()
    )

    dates = pd.to_datetime(agg["date"])
    agg["month"] = dates.dt.month
    agg["year"] = dates.dt.year

    deep = agg["depth"] > max_depth
    if deep.any():
        print(f"⚠️ Dropped {int(deep.sum()):,} aggregated rows deeper than {max_depth}")
    agg = agg.loc[~deep].reset_index(drop=True)

    print(f"✅ Aggregated to {len(agg):,} site/date/variable rows")
    return agg


def pivot_wide(df: pd.DataFrame) -> pd.DataFrame:
    """One row per sample event, one column per variable present in `df`."""
    id_cols = [c for c in df.columns if c not in ("variable", "value")]

    dupes = df.duplicated(subset=id_cols + ["variable"], keep=False)
    if dupes.any():
        raise ValueError(
            f"{int(dupes.sum())} rows share an event key and variable; aggregate before pivoting"
        )

    # Number the events so blank key fields survive the pivot
    events = df.groupby(id_cols, dropna=False, sort=True).ngroup().rename("_event")
    long = df.assign(_event=events)

    values = long.pivot(index="_event", columns="variable", values="value")
    ordered = [v for v in cfg.VARIABLES if v in values.columns]
    extra = sorted(c for c in values.columns if c not in cfg.VARIABLES)
    values = values[ordered + extra]

    keys = long.drop_duplicates("_event").set_index("_event")[id_cols]
    wide = keys.join(values).sort_index().reset_index(drop=True)
    wide.columns.name = None

    print(f"📊 Pivoted to {len(wide):,} sample events × {len(values.columns)} variables")
    return wide


def melt_long(wide: pd.DataFrame, variables=None) -> pd.DataFrame:
    """Inverse of `pivot_wide` for the values actually present."""
    if variables is None:
        variables = [c for c in wide.columns if c in cfg.VARIABLES]
    id_cols = [c for c in wide.columns if c not in variables]
    long = wide.melt(id_vars=id_cols, value_vars=variables, var_name="variable", value_name="value")
    return long.dropna(subset=["value"]).reset_index(drop=True)


def join_site_metadata(wide: pd.DataFrame, sites: pd.DataFrame) -> pd.DataFrame:
    """Left-join site metadata on organization and location; every wide row is kept once."""
    dupes = sites["site_id"][sites["site_id"].duplicated()]
    if not dupes.empty:
        raise ValueError(f"Site metadata has duplicate location ids: {sorted(dupes.unique())}")

    keys = [c for c in cfg.JOIN_KEYS if c in wide.columns and c in sites.columns]
    enriched = wide.merge(sites, on=keys, how="left", validate="many_to_one", indicator=True)

    unmatched = enriched.loc[enriched["_merge"] == "left_only", "site_id"]
    if not unmatched.empty:
        print(f"⚠️ No metadata for {unmatched.nunique()} site(s): {sorted(unmatched.dropna().unique())}")
    return enriched.drop(columns="_merge")
