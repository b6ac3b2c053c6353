#!/usr/bin/env python3
# ============================================================
# Water Quality Portal – site pipeline
# ============================================================
# fetch → filter → recode → aggregate → pivot → join → plot → save
# ============================================================

import argparse
import time
from pathlib import Path

import wq_config as cfg
import wqp_download
from wq_cleaner import normalize_observations
from wq_profile_summary import category_crosswalk, variable_summary
from wq_reshape import aggregate_observations, join_site_metadata, pivot_wide
from wq_visualize import plot_all


def run(site_ids=None, out_dir=None, max_depth=cfg.MAX_DEPTH, bdl_fraction=None,
        make_plots=True, write_summary=False):
    t0 = time.time()
    site_ids = list(site_ids or cfg.SITES)
    out_dir = Path(out_dir or cfg.OUTPUT_DIR)
    print(f"🚀 Running water quality pipeline for {len(site_ids)} site(s): {', '.join(site_ids)}")

    # Both downloads must succeed before anything is written
    raw = wqp_download.fetch_observations(site_ids)
    sites = wqp_download.fetch_site_metadata(site_ids)

    normalized = normalize_observations(raw, bdl_fraction=bdl_fraction)
    long_df = aggregate_observations(normalized, max_depth=max_depth)
    wide = pivot_wide(long_df)
    enriched = join_site_metadata(wide, sites)

    out_dir.mkdir(parents=True, exist_ok=True)
    long_path = out_dir / cfg.LONG_CSV
    wide_path = out_dir / cfg.WIDE_CSV
    long_df.to_csv(long_path, index=False, date_format="%Y-%m-%d")
    enriched.to_csv(wide_path, index=False, date_format="%Y-%m-%d")
    print(f"💾 Long table → {long_path} ({len(long_df):,} rows)")
    print(f"💾 Wide table → {wide_path} ({len(enriched):,} rows, {enriched.shape[1]} columns)")

    if write_summary:
        variable_summary(long_df).to_csv(out_dir / "wq_variable_summary.csv")
        category_crosswalk(normalized).to_csv(out_dir / "wq_category_crosswalk.csv", index=False)
        print(f"💾 Summary tables → {out_dir}")

    plots = []
    if make_plots:
        present = [v for v in cfg.VARIABLES if v in wide.columns]
        plots = plot_all(long_df, enriched, present, out_dir / cfg.PLOT_DIR)

    print(f"🏁 Pipeline completed in {time.time() - t0:.2f} seconds.")
    return {
        "normalized": normalized,
        "long": long_df,
        "wide": enriched,
        "long_path": long_path,
        "wide_path": wide_path,
        "plots": plots,
    }


if __name__ == "__main__":
    ap = argparse.ArgumentParser(description="Download, normalize and reshape WQP results for a set of sites.")
    ap.add_argument("--sites", nargs="+", default=cfg.SITES, help="WQP monitoring location ids")
    ap.add_argument("--out-dir", default=str(cfg.OUTPUT_DIR), help="Directory for CSV and plot output")
    ap.add_argument("--max-depth", type=float, default=cfg.MAX_DEPTH, help="Drop samples deeper than this")
    ap.add_argument("--bdl-fraction", type=float, default=None,
                    help="Fill non-detects with this fraction of the detection limit (off by default)")
    ap.add_argument("--no-plots", action="store_true", help="Skip the exploratory plots")
    ap.add_argument("--summary", action="store_true", help="Also write summary and crosswalk tables")
    args = ap.parse_args()

    run(
        site_ids=args.sites,
        out_dir=args.out_dir,
        max_depth=args.max_depth,
        bdl_fraction=args.bdl_fraction,
        make_plots=not args.no_plots,
        write_summary=args.summary,
    )
