from __future__ import annotations

from typing import List

import pandas as pd


ALGORITHM_NAMES = {
    "gonzalez": "Gonzalez",
    "arya": "Arya",
    "one_median_approx": "1-Median (sampled)",
    "one_median_exhaustive": "1-Median (exhaustive)",
}

METRICS = ["value", "radius", "cost_sum", "silhouette", "ari", "runtime_sec"]


def _format_mean_std(mean_val: float | None, std_val: float | None, precision: int = 3) -> str:
    if mean_val is None or std_val is None:
        return "N/A"
    fmt = f"{{:.{precision}f}} ± {{:.{precision}f}}"
    return fmt.format(mean_val, std_val)


def aggregate(df: pd.DataFrame) -> pd.DataFrame:
    """Mean and standard deviation of every metric per (algorithm, k)."""
    group_cols = ["algorithm", "objective", "k"]
    metrics = [m for m in METRICS if m in df.columns]

    agg = df.groupby(group_cols, dropna=False)[metrics].agg(["mean", "std"])
    # Flatten MultiIndex columns
    agg.columns = [f"{m}_{stat}" for m, stat in agg.columns]
    agg = agg.reset_index()
    return agg


def algorithm_comparison_table(summary: pd.DataFrame) -> pd.DataFrame:
    """Readable "mean ± std" table, one row per algorithm and k."""
    rows: List[dict] = []
    for _, entry in summary.sort_values(["algorithm", "k"]).iterrows():
        row = {
            "Algorithm": ALGORITHM_NAMES.get(entry["algorithm"], entry["algorithm"]),
            "k": entry["k"],
        }
        for metric, label, precision in [
            ("radius", "Radius", 3),
            ("cost_sum", "Cost sum", 3),
            ("silhouette", "Silhouette", 3),
            ("ari", "ARI", 3),
            ("runtime_sec", "Runtime (s)", 4),
        ]:
            mean_col, std_col = f"{metric}_mean", f"{metric}_std"
            if mean_col not in summary.columns:
                continue
            mean_val = None if pd.isna(entry[mean_col]) else float(entry[mean_col])
            # a single repetition has no spread
            std_val = 0.0 if pd.isna(entry[std_col]) else float(entry[std_col])
            if mean_val is None:
                std_val = None
            row[label] = _format_mean_std(mean_val, std_val, precision=precision)
        rows.append(row)
    return pd.DataFrame(rows)
