# src/museum_insights/viz.py
import os
from typing import Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from .config import FIGURE_DPI, MEASURES
from .metrics import FitResult, group_shares
from .narrative import MEASURE_LABELS, summaries_to_frame
from .records import SummaryRecord


def _ensure_dir(p: Optional[str]) -> None:
    if p:
        d = os.path.dirname(p)
        if d and not os.path.exists(d):
            os.makedirs(d, exist_ok=True)

def _finish(fig: plt.Figure, out_path: Optional[str], show: bool) -> Optional[str]:
    fig.tight_layout()
    saved = None
    if out_path:
        _ensure_dir(out_path)
        fig.savefig(out_path, dpi=FIGURE_DPI, bbox_inches="tight")
        saved = out_path
    if show:
        plt.show()
    else:
        plt.close(fig)
    return saved


def plot_group_counts(
    summaries: Sequence[SummaryRecord],
    out_path: Optional[str] = None,
    show: bool = False,
    *,
    key_name: str = "Museum type",
    measure: str = "museum_count",
    top_n: Optional[int] = 15,
) -> Tuple[plt.Figure, plt.Axes, Optional[str]]:
    """
    Horizontal bar chart of one measure per group, largest on top.
    """
    if measure not in MEASURES:
        raise ValueError(f"unknown measure {measure!r}")
    if not summaries:
        raise ValueError("nothing to plot: no summaries")
    df = summaries_to_frame(summaries, "key").sort_values(measure, ascending=False, kind="mergesort")
    if top_n:
        df = df.head(top_n)
    df = df.iloc[::-1]

    fig, ax = plt.subplots(figsize=(10, max(3.0, 0.4 * len(df) + 1)))
    ax.barh(df["key"].astype(str), df[measure])
    for y, v in enumerate(df[measure]):
        ax.text(v, y, f" {v:,.0f}", va="center", fontsize=8)
    ax.set_title(f"{MEASURE_LABELS[measure].capitalize()} by {key_name.lower()}")
    ax.set_xlabel(MEASURE_LABELS[measure].capitalize())
    ax.set_ylabel(key_name)
    return fig, ax, _finish(fig, out_path, show)

def plot_group_shares(
    summaries: Sequence[SummaryRecord],
    out_path: Optional[str] = None,
    show: bool = False,
    *,
    measure: str = "museum_count",
    key_name: str = "Museum type",
    top_n: Optional[int] = 6,
) -> Tuple[plt.Figure, plt.Axes, Optional[str], pd.DataFrame]:
    """
    Pie chart of each group's share of a measure; the tail beyond top_n is "Other".
    Returns the share table too.
    """
    shares = group_shares(summaries, measure, top_n=top_n)
    if not (shares["value"] > 0).any():
        raise ValueError(f"nothing to plot: {measure} is zero for every group")

    fig, ax = plt.subplots(figsize=(7, 7))
    ax.pie(shares["value"], labels=shares["key"].astype(str), autopct="%1.1f%%",
           startangle=90, counterclock=False, textprops={"fontsize": 9})
    ax.set_title(f"Share of {MEASURE_LABELS[measure]} by {key_name.lower()}")
    ax.axis("equal")
    return fig, ax, _finish(fig, out_path, show), shares

def plot_income_vs_revenue(
    income,
    revenue,
    out_path: Optional[str] = None,
    show: bool = False,
    *,
    fit: Optional[FitResult] = None,
    labels: Optional[Sequence[str]] = None,
    title: str = "Income vs revenue",
    log_scale: bool = False,
) -> Tuple[plt.Figure, plt.Axes, Optional[str]]:
    """
    Scatter of income (x) against revenue (y), with the fitted line when given.
    labels annotates each point (used for the per-group averages plot).
    """
    x = np.asarray(income, dtype=float)
    y = np.asarray(revenue, dtype=float)
    if x.shape != y.shape:
        raise ValueError(f"income and revenue differ in length: {x.shape} vs {y.shape}")
    if x.size == 0:
        raise ValueError("nothing to plot: no points")

    fig, ax = plt.subplots(figsize=(8, 6))
    ax.scatter(x, y, s=14, alpha=0.6)
    if labels is not None:
        for xi, yi, lab in zip(x, y, labels):
            ax.annotate(str(lab), (xi, yi), fontsize=7, xytext=(3, 3), textcoords="offset points")
    if fit is not None:
        xs = np.linspace(x.min(), x.max(), 50)
        ax.plot(xs, fit.predict(xs), linewidth=1.5, color="black",
                label=f"revenue = {fit.slope:.2f} x income + {fit.intercept:,.0f} (r² = {fit.r2:.2f})")
        ax.legend(fontsize=8)
    if log_scale:
        ax.set_xscale("symlog")
        ax.set_yscale("symlog")
    ax.set_title(title)
    ax.set_xlabel("Income ($)")
    ax.set_ylabel("Revenue ($)")
    return fig, ax, _finish(fig, out_path, show)

def write_summary_table(
    summaries: Sequence[SummaryRecord],
    out_csv_path: Optional[str] = None,
    key_name: str = "key",
    sort_by: str = "museum_count",
) -> pd.DataFrame:
    """
    Save (and return) the summary table, sorted by sort_by descending.
    """
    if sort_by not in MEASURES:
        raise ValueError(f"unknown measure {sort_by!r}")
    table = summaries_to_frame(summaries, key_name).sort_values(sort_by, ascending=False, kind="mergesort")
    table = table.reset_index(drop=True)
    if out_csv_path:
        _ensure_dir(out_csv_path)
        table.to_csv(out_csv_path, index=False)
    return table
