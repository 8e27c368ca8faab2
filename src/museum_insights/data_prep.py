# src/museum_insights/data_prep.py
import logging
import re
from dataclasses import asdict
from typing import Iterable, List

import pandas as pd

from .config import COLUMN_MAP, MONEY_FIELDS, RECORD_FIELDS, TEXT_FIELDS
from .records import MuseumRecord

logger = logging.getLogger(__name__)


def normalize_text(s: str) -> str:
    s = (s or "").strip()
    s = re.sub(r"\s+", " ", s)
    return s

def load_museums(path: str) -> pd.DataFrame:
    """
    Load CSV and normalize the columns we need:
      museum_id, legal_name, museum_type, city, state, zip_code, income, revenue
    Accepts the raw dataset headers ("Museum Type", "City (Administrative Location)", ...)
    or the snake_case names, case-insensitive. Other columns are dropped.
    """
    df = pd.read_csv(path, dtype=str, keep_default_na=True)
    return normalize_columns(df)

def normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    lookup = dict(COLUMN_MAP)
    lookup.update({f: f for f in RECORD_FIELDS})
    rename = {}
    for c in df.columns:
        target = lookup.get(str(c).strip().lower())
        if target and target not in rename.values():
            rename[c] = target
    missing = [f for f in RECORD_FIELDS if f not in rename.values()]
    if missing:
        raise ValueError(f"CSV is missing required columns: {missing}. Found: {list(df.columns)}")
    out = df.rename(columns=rename)[RECORD_FIELDS].copy()
    logger.debug("loaded %d rows", len(out))
    return out

def clean_museums(df: pd.DataFrame) -> pd.DataFrame:
    """
    Drop rows with missing or negative income/revenue, rows missing any
    text field, and duplicate legal names (first kept).
    Returns a cleaned copy with float money columns and string text columns.
    """
    out = df.copy()
    n0 = len(out)

    for c in TEXT_FIELDS:
        out[c] = out[c].map(lambda x: normalize_text(str(x)) if pd.notna(x) else None)
        out.loc[out[c] == "", c] = None
    for c in MONEY_FIELDS:
        out[c] = pd.to_numeric(out[c], errors="coerce")

    out = out.dropna(subset=RECORD_FIELDS)
    n_missing = n0 - len(out)

    neg = (out["income"] < 0) | (out["revenue"] < 0)
    out = out.loc[~neg].copy()
    n_negative = int(neg.sum())

    before = len(out)
    out = out.drop_duplicates(subset=["legal_name"], keep="first")
    n_dupes = before - len(out)

    logger.info("cleaning: %d rows in, dropped %d missing, %d negative, %d duplicate names, %d left",
                n0, n_missing, n_negative, n_dupes, len(out))

    out[MONEY_FIELDS] = out[MONEY_FIELDS].astype(float)
    return out.reset_index(drop=True)

def to_records(df: pd.DataFrame) -> List[MuseumRecord]:
    """Cleaned frame -> typed records (validated once here)."""
    miss = set(RECORD_FIELDS) - set(df.columns)
    if miss:
        raise ValueError(f"frame is missing columns: {sorted(miss)}")
    recs = []
    for row in df[RECORD_FIELDS].itertuples(index=False):
        income, revenue = float(row.income), float(row.revenue)
        if pd.isna(income) or pd.isna(revenue) or income < 0 or revenue < 0:
            raise ValueError(f"uncleaned money values for {row.legal_name!r}: income={income}, revenue={revenue}")
        recs.append(MuseumRecord(
            museum_id=str(row.museum_id),
            legal_name=str(row.legal_name),
            museum_type=str(row.museum_type),
            city=str(row.city),
            state=str(row.state),
            zip_code=str(row.zip_code),
            income=income,
            revenue=revenue,
        ))
    return recs

def records_to_frame(records: Iterable[MuseumRecord]) -> pd.DataFrame:
    return pd.DataFrame([asdict(r) for r in records], columns=RECORD_FIELDS)
