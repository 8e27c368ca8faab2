# src/museum_insights/metrics.py
import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence, Union

import numpy as np
import pandas as pd
from sklearn.linear_model import LinearRegression

from .config import MEASURES, RECORD_FIELDS
from .records import Direction, EmptyInputError, ExtremaReport, MuseumRecord, SummaryRecord

logger = logging.getLogger(__name__)

KeySelector = Union[str, Callable[[MuseumRecord], object]]


def summarize_frame(df: pd.DataFrame, by: str) -> pd.DataFrame:
    """
    One pass per group: count, mean and sum of income and revenue.
    Groups keep order of first appearance; sums run in row order.
    """
    need = {by, "income", "revenue"}
    miss = need - set(df.columns)
    if miss:
        raise ValueError(f"frame is missing columns: {miss}")
    if df.empty:
        raise EmptyInputError("cannot summarize an empty frame")
    agg = df.groupby(by, sort=False, dropna=False).agg(
        museum_count=("income", "size"),
        average_income=("income", "mean"),
        total_income=("income", "sum"),
        average_revenue=("revenue", "mean"),
        total_revenue=("revenue", "sum"),
    ).reset_index()
    return agg

def _selector(key: KeySelector) -> Callable[[MuseumRecord], object]:
    if callable(key):
        return key
    if key not in RECORD_FIELDS:
        raise ValueError(f"unknown group key {key!r}; expected one of {RECORD_FIELDS}")
    return lambda r: getattr(r, key)

def aggregate(records: Iterable[MuseumRecord], key: KeySelector = "museum_type") -> List[SummaryRecord]:
    """Group records by `key` (field name or callable) and summarize each group."""
    records = list(records)
    if not records:
        raise EmptyInputError("cannot aggregate zero records")
    select = _selector(key)
    # key -> group code, first appearance order; grouping stays plain Python equality
    codes = {}
    group = [codes.setdefault(select(r), len(codes)) for r in records]
    keys = list(codes)
    df = pd.DataFrame({
        "group": group,
        "income": [r.income for r in records],
        "revenue": [r.revenue for r in records],
    })
    agg = summarize_frame(df, "group")
    logger.debug("aggregated %d records into %d groups", len(records), len(agg))
    return [
        SummaryRecord(
            key=keys[int(row.group)],
            museum_count=int(row.museum_count),
            average_income=float(row.average_income),
            total_income=float(row.total_income),
            average_revenue=float(row.average_revenue),
            total_revenue=float(row.total_revenue),
        )
        for row in agg.itertuples(index=False)
    ]

def find_extrema(summaries: Iterable[SummaryRecord],
                 direction: Union[Direction, str] = Direction.MAX) -> ExtremaReport:
    """
    For each measured field, every summary holding the max (or min) value.
    Exact equality against the extremum, so ties all come back.
    """
    summaries = list(summaries)
    if not summaries:
        raise EmptyInputError("cannot rank zero summaries")
    direction = Direction.coerce(direction)
    pick = max if direction is Direction.MAX else min
    by_field = {}
    for m in MEASURES:
        target = pick(getattr(s, m) for s in summaries)
        by_field[m] = tuple(s for s in summaries if getattr(s, m) == target)
    return ExtremaReport(direction=direction, by_field=by_field)

def count_zero_financials(records: Iterable[MuseumRecord]) -> int:
    """Number of museums reporting zero income AND zero revenue."""
    return sum(1 for r in records if r.income == 0 and r.revenue == 0)

def group_shares(summaries: Sequence[SummaryRecord], measure: str = "museum_count",
                 top_n: Optional[int] = None) -> pd.DataFrame:
    # share of the measure's total per group, largest first; tail folded into "Other"
    if measure not in MEASURES:
        raise ValueError(f"unknown measure {measure!r}; expected one of {MEASURES}")
    if not summaries:
        raise EmptyInputError("cannot compute shares of zero summaries")
    df = pd.DataFrame({"key": [s.key for s in summaries],
                       "value": [float(getattr(s, measure)) for s in summaries]})
    df = df.sort_values("value", ascending=False, kind="mergesort").reset_index(drop=True)
    if top_n is not None and len(df) > top_n:
        head, tail = df.iloc[:top_n], df.iloc[top_n:]
        df = pd.concat([head, pd.DataFrame([{"key": "Other", "value": tail["value"].sum()}])],
                       ignore_index=True)
    total = df["value"].sum()
    df["share"] = df["value"] / total if total > 0 else np.nan
    return df


@dataclass(frozen=True)
class FitResult:
    slope: float
    intercept: float
    r2: float
    n: int

    def predict(self, x):
        return self.intercept + self.slope * np.asarray(x, dtype=float)


def income_revenue_fit(records: Iterable[MuseumRecord]) -> FitResult:
    """Least-squares line of revenue on income."""
    records = list(records)
    if len(records) < 2:
        raise EmptyInputError("need at least two museums to fit a line")
    x = np.array([[r.income] for r in records], dtype=float)
    y = np.array([r.revenue for r in records], dtype=float)
    if np.var(x) == 0:
        raise ValueError("income is constant; cannot fit revenue on income")
    model = LinearRegression().fit(x, y)
    r2 = float(model.score(x, y)) if np.var(y) > 0 else 1.0
    return FitResult(slope=float(model.coef_[0]), intercept=float(model.intercept_), r2=r2, n=len(records))
