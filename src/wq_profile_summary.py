#!/usr/bin/env python3
"""
Water Quality Profile Summary

Summary tables for the aggregated long CSV: per-variable statistics,
per-site record counts, per-site annual trends and the characteristic
crosswalk showing which portal categories were merged into each variable.
"""

import argparse
import os
import sys

import numpy as np
import pandas as pd
from scipy.stats import linregress


def variable_summary(long_df: pd.DataFrame) -> pd.DataFrame:
    return (
        long_df.groupby("variable")
        .agg(
            n_results=("value", "count"),
            mean_value=("value", "mean"),
            min_value=("value", "min"),
            max_value=("value", "max"),
            first_date=("date", "min"),
            last_date=("date", "max"),
        )
        .sort_values("n_results", ascending=False)
    )


def site_summary(long_df: pd.DataFrame) -> pd.DataFrame:
    return (
        long_df.groupby("site_id")
        .agg(
            n_results=("value", "count"),
            n_variables=("variable", "nunique"),
            first_date=("date", "min"),
            last_date=("date", "max"),
        )
        .sort_values("n_results", ascending=False)
    )


def annual_trends(long_df: pd.DataFrame) -> pd.DataFrame:
    """Slope of the annual mean per site and variable (needs more than two distinct years)."""
    df = long_df.dropna(subset=["value"])
    yearly = df.groupby(["site_id", "variable", "year"])["value"].mean().reset_index()

    rows = []
    for (site, var), g in yearly.groupby(["site_id", "variable"]):
        n_years = g["year"].nunique()
        slope = np.nan
        if n_years > 2:
            slope = linregress(g["year"].astype(int), g["value"].astype(float)).slope
        rows.append({"site_id": site, "variable": var, "n_years": n_years, "trend_per_year": slope})
    return pd.DataFrame(rows, columns=["site_id", "variable", "n_years", "trend_per_year"])


def category_crosswalk(normalized_df: pd.DataFrame) -> pd.DataFrame:
    """Row counts for every (variable, characteristic, fraction) combination that was merged."""
    return (
        normalized_df.groupby(["variable", "category", "fraction"], dropna=False)
        .size()
        .reset_index(name="n_results")
        .sort_values(["variable", "n_results"], ascending=[True, False])
        .reset_index(drop=True)
    )


def summarize_long(file_path):
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"❌ File not found: {file_path}")

    print(f"\n🔍 Summarizing {os.path.basename(file_path)} ...")
    df = pd.read_csv(file_path, parse_dates=["date"])

    required_cols = ["site_id", "date", "variable", "value", "year"]
    missing = [c for c in required_cols if c not in df.columns]
    if missing:
        print(f"⚠️ Missing expected columns: {missing}")
        sys.exit(1)

    param = variable_summary(df)
    sites = site_summary(df)
    trends = annual_trends(df)

    base = os.path.splitext(file_path)[0]
    param.to_csv(f"{base}_variable_summary.csv")
    sites.to_csv(f"{base}_site_summary.csv")
    trends.to_csv(f"{base}_trends.csv", index=False)

    print(f"✅ Variable summary → {base}_variable_summary.csv")
    print(f"✅ Site summary → {base}_site_summary.csv")
    print(f"✅ Trends → {base}_trends.csv")

    print("\n📈 Variables by record count:")
    print(param.to_string())
    return param, sites, trends


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Summary stats for the aggregated water quality long CSV.")
    parser.add_argument("--input", required=True, help="Path to the long CSV written by run_pipeline.py")
    args = parser.parse_args()

    summarize_long(args.input)
