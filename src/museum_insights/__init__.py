"""
museum_insights
---------------
Group US museums by type, city or state and report income/revenue extremes.
"""

from .records import Direction, EmptyInputError, ExtremaReport, MuseumRecord, SummaryRecord
from .metrics import aggregate, count_zero_financials, find_extrema

__all__ = [
    "Direction",
    "EmptyInputError",
    "ExtremaReport",
    "MuseumRecord",
    "SummaryRecord",
    "aggregate",
    "count_zero_financials",
    "find_extrema",
]
