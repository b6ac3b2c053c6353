# ============================================================
# Water Quality – exploratory plots
# ============================================================

from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns


def _save(fig, out_path):
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(out_path, dpi=120)
    plt.close(fig)
    print(f"💾 Plot saved → {out_path}")
    return out_path


def plot_distribution(long_df: pd.DataFrame, variable, out_path):
    """Histogram and boxplot of one variable."""
    values = long_df.loc[long_df["variable"] == variable, "value"].dropna()
    if values.empty:
        print(f"⚠️ No numeric data for {variable}; skipping distribution plot")
        return None

    fig, axes = plt.subplots(1, 2, figsize=(10, 4))
    sns.histplot(values, kde=len(values) > 1, ax=axes[0], color="steelblue")
    axes[0].set_title(f"Histogram: {variable}")
    sns.boxplot(x=values, ax=axes[1], color="orange")
    axes[1].set_title(f"Boxplot: {variable}")
    return _save(fig, out_path)


def plot_timeseries(long_df: pd.DataFrame, variable, out_path):
    """Values over time, one line per site."""
    sub = long_df.loc[long_df["variable"] == variable].dropna(subset=["value"])
    if sub.empty:
        print(f"⚠️ No numeric data for {variable}; skipping time series")
        return None

    sub = sub.assign(date=pd.to_datetime(sub["date"])).sort_values("date")
    fig, ax = plt.subplots(figsize=(10, 4))
    sns.lineplot(data=sub, x="date", y="value", hue="site_id", marker="o", ax=ax)
    ax.set_title(f"{variable} by site")
    ax.set_ylabel(variable)
    return _save(fig, out_path)


def plot_monthly(long_df: pd.DataFrame, variable, out_path):
    """Seasonal spread of a variable by calendar month."""
    sub = long_df.loc[long_df["variable"] == variable].dropna(subset=["value"])
    if sub.empty:
        print(f"⚠️ No numeric data for {variable}; skipping monthly plot")
        return None

    fig, ax = plt.subplots(figsize=(10, 4))
    sns.boxplot(data=sub, x="month", y="value", hue="site_id", ax=ax)
    ax.set_title(f"{variable} by month")
    ax.set_ylabel(variable)
    return _save(fig, out_path)


def plot_correlation(wide_df: pd.DataFrame, variables, out_path):
    num_df = wide_df[[v for v in variables if v in wide_df.columns]].apply(pd.to_numeric, errors="coerce")
    num_df = num_df.dropna(axis=1, how="all")
    if num_df.shape[1] < 2:
        print("⚠️ Not enough populated variables for a correlation matrix")
        return None

    fig, ax = plt.subplots(figsize=(8, 6))
    sns.heatmap(num_df.corr(), cmap="RdBu_r", center=0, annot=True, fmt=".2f", ax=ax)
    ax.set_title("Correlation between variables")
    return _save(fig, out_path)


def plot_all(long_df: pd.DataFrame, wide_df: pd.DataFrame, variables, out_dir):
    """Write the standard set of exploratory plots; returns the paths written."""
    out_dir = Path(out_dir)
    written = []
    for v in variables:
        written.append(plot_timeseries(long_df, v, out_dir / f"{v}_timeseries.png"))
        written.append(plot_monthly(long_df, v, out_dir / f"{v}_monthly.png"))
        written.append(plot_distribution(long_df, v, out_dir / f"{v}_distribution.png"))
    written.append(plot_correlation(wide_df, variables, out_dir / "correlation.png"))
    return [p for p in written if p is not None]
