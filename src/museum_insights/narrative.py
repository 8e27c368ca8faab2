# src/museum_insights/narrative.py
from __future__ import annotations
from typing import Callable, List, Optional, Sequence

import pandas as pd

from .config import MEASURES
from .records import Direction, ExtremaReport, SummaryRecord

MEASURE_LABELS = {
    "museum_count": "number of museums",
    "average_income": "average income",
    "total_income": "total income",
    "average_revenue": "average revenue",
    "total_revenue": "total revenue",
}


def summaries_to_frame(summaries: Sequence[SummaryRecord], key_name: str = "key") -> pd.DataFrame:
    rows = [{key_name: s.key, **{m: getattr(s, m) for m in MEASURES}} for s in summaries]
    return pd.DataFrame(rows, columns=[key_name, *MEASURES])

def _fmt(measure: str, value) -> str:
    if measure == "museum_count":
        return f"{int(value):,}"
    return f"${value:,.2f}"

def _join(keys: List[str]) -> str:
    if len(keys) <= 1:
        return "".join(keys)
    return ", ".join(keys[:-1]) + " and " + keys[-1]

def describe_extrema(report: ExtremaReport, key_name: str = "group") -> str:
    """
    One sentence per measure, e.g.
      "The highest average income is $150.00, held by the museum_type Art."
    Tied groups are listed together.
    """
    word = "highest" if report.direction is Direction.MAX else "lowest"
    lines = []
    for m in MEASURES:
        if m not in report.by_field:
            continue
        keys = [str(k) for k in report.keys_for(m)]
        holder = f"the {key_name} {keys[0]}" if len(keys) == 1 else f"the {key_name}s {_join(keys)} (tied)"
        lines.append(f"The {word} {MEASURE_LABELS[m]} is {_fmt(m, report.value_for(m))}, held by {holder}.")
    return "\n".join(lines)

def build_llm_prompt(summaries: Sequence[SummaryRecord], reports: Sequence[ExtremaReport],
                     key_name: str, zero_financials: Optional[int] = None) -> str:
    table = summaries_to_frame(summaries, key_name).to_csv(index=False, float_format="%.2f")
    facts = "\n".join(describe_extrema(r, key_name) for r in reports)
    extra = f"\nMuseums reporting zero income and zero revenue: {zero_financials}" if zero_financials is not None else ""
    return (f"Summary of US museums grouped by {key_name} (CSV):\n{table}\n"
            f"Key facts:\n{facts}{extra}\n\nWrite the executive summary:")

def narrate_with_llm(
    summaries: Sequence[SummaryRecord],
    reports: Sequence[ExtremaReport],
    key_name: str = "group",
    *,
    llm_call_fn: Optional[Callable[[str], str]] = None,
    zero_financials: Optional[int] = None,
) -> str:
    """Executive summary written by an LLM from the summary table and extrema facts."""
    if llm_call_fn is None:
        from .openai_llm import openai_llm_call
        llm_call_fn = openai_llm_call
    prompt = build_llm_prompt(summaries, reports, key_name, zero_financials)
    return llm_call_fn(prompt).strip()
