# src/museum_insights/cli.py
import argparse
import logging
import os
import sys
from typing import List, Optional

from openai import OpenAIError

from .config import GROUP_KEYS, LOG_DIR
from .data_prep import clean_museums, load_museums, to_records
from .log_setup import setup_logging
from .metrics import aggregate, count_zero_financials, find_extrema, income_revenue_fit
from .narrative import describe_extrema, narrate_with_llm
from .records import Direction

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="museum-insights",
        description="Summarize US museum income and revenue by type, city or state.",
    )
    p.add_argument("csv", help="museums CSV (raw dataset headers or snake_case)")
    p.add_argument("--by", choices=sorted(GROUP_KEYS), default="type", help="group key (default: type)")
    p.add_argument("--direction", choices=["max", "min", "both"], default="both",
                   help="which extrema to report (default: both)")
    p.add_argument("--out", help="directory for the summary table and charts")
    p.add_argument("--llm", action="store_true", help="append an LLM-written executive summary (needs OPENAI_API_KEY)")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging on the console")
    return p

def run(args: argparse.Namespace) -> None:
    key = GROUP_KEYS[args.by]

    df = clean_museums(load_museums(args.csv))
    records = to_records(df)
    summaries = aggregate(records, key)
    logger.info("%d museums in %d groups by %s", len(records), len(summaries), key)

    directions = [Direction.MAX, Direction.MIN] if args.direction == "both" else [Direction.coerce(args.direction)]
    reports = [find_extrema(summaries, d) for d in directions]
    zero = count_zero_financials(records)

    for r in reports:
        print(describe_extrema(r, key))
        print()
    print(f"Museums reporting zero income and zero revenue: {zero}")

    if args.out:
        _write_outputs(args.out, key, records, summaries)

    if args.llm:
        print()
        print(narrate_with_llm(summaries, reports, key, zero_financials=zero))

def _write_outputs(out_dir: str, key: str, records, summaries) -> None:
    from . import viz

    label = key.replace("_", " ").capitalize()
    table = viz.write_summary_table(summaries, os.path.join(out_dir, f"summary_by_{key}.csv"), key_name=key)
    logger.info("wrote summary table (%d rows)", len(table))

    viz.plot_group_counts(summaries, os.path.join(out_dir, f"count_by_{key}.png"), key_name=label)
    viz.plot_group_shares(summaries, os.path.join(out_dir, f"count_share_by_{key}.png"),
                          measure="museum_count", key_name=label)
    if any(s.total_revenue > 0 for s in summaries):
        viz.plot_group_shares(summaries, os.path.join(out_dir, f"revenue_share_by_{key}.png"),
                              measure="total_revenue", key_name=label)
    else:
        logger.warning("skipping revenue share chart: total revenue is zero everywhere")

    try:
        fit = income_revenue_fit(records)
        logger.info("revenue ~ income: slope=%.3f intercept=%.1f r2=%.3f", fit.slope, fit.intercept, fit.r2)
    except ValueError as e:
        logger.warning("no trend line: %s", e)
        fit = None
    viz.plot_income_vs_revenue([r.income for r in records], [r.revenue for r in records],
                               os.path.join(out_dir, "income_vs_revenue.png"),
                               fit=fit, title="Income vs revenue per museum", log_scale=True)
    viz.plot_income_vs_revenue([s.average_income for s in summaries], [s.average_revenue for s in summaries],
                               os.path.join(out_dir, f"average_income_vs_revenue_by_{key}.png"),
                               labels=[s.key for s in summaries],
                               title=f"Average income vs average revenue by {label.lower()}")
    logger.info("charts written to %s", out_dir)

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging("museum_insights", log_dir=LOG_DIR, level=logging.DEBUG if args.verbose else logging.WARNING)
    try:
        run(args)
    except (ValueError, RuntimeError, OpenAIError) as e:
        logger.error("%s", e)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
