# src/museum_insights/records.py
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, Tuple, Union


class EmptyInputError(ValueError):
    """Raised when an aggregate or extremum is requested over nothing."""


@dataclass(frozen=True)
class MuseumRecord:
    museum_id: str
    legal_name: str
    museum_type: str
    city: str
    state: str
    zip_code: str
    income: float
    revenue: float


@dataclass(frozen=True)
class SummaryRecord:
    """One row per distinct group key value."""
    key: Any
    museum_count: int
    average_income: float
    total_income: float
    average_revenue: float
    total_revenue: float


class Direction(Enum):
    MAX = "max"
    MIN = "min"

    @classmethod
    def coerce(cls, value: Union["Direction", str]) -> "Direction":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"direction must be 'max' or 'min', got {value!r}") from None


@dataclass(frozen=True)
class ExtremaReport:
    """
    Measured field -> summaries attaining the extremum.
    Ties are all kept, in the order the summaries were given.
    """
    direction: Direction
    by_field: Dict[str, Tuple[SummaryRecord, ...]] = field(default_factory=dict)

    # by_field is a dict
    __hash__ = None

    def __getitem__(self, measure: str) -> Tuple[SummaryRecord, ...]:
        return self.by_field[measure]

    def __iter__(self) -> Iterator[str]:
        return iter(self.by_field)

    def keys_for(self, measure: str) -> Tuple[Any, ...]:
        return tuple(s.key for s in self.by_field[measure])

    def value_for(self, measure: str):
        return getattr(self.by_field[measure][0], measure)
