from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from autodash.core.values import naive_utc


@dataclass(frozen=True)
class NumericRange:
    """Inclusive [min, max] restriction on a number column."""
    min: float
    max: float

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max


@dataclass(frozen=True)
class DateRange:
    """Global date window; either end may be open."""
    start: Optional[datetime] = None
    end: Optional[datetime] = None

    def __post_init__(self):
        # Cells are compared as naive UTC, so bounds must be too
        if self.start is not None:
            object.__setattr__(self, "start", naive_utc(self.start))
        if self.end is not None:
            object.__setattr__(self, "end", naive_utc(self.end))

    @property
    def is_active(self) -> bool:
        return self.start is not None or self.end is not None


def _parse_iso(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


@dataclass(frozen=True)
class FilterState:
    """
    Represents the current user restrictions on the loaded dataset.

    Fields:

    - categories: column -> allowed string values. An empty list (or a missing
      column) means no restriction.
    - numeric_ranges: column -> inclusive NumericRange.
    - date_range: one window applied to every date-typed column.

    The neutral state (FilterState()) lets every row through.
    """

    categories: Dict[str, List[str]] = field(default_factory=dict)
    numeric_ranges: Dict[str, NumericRange] = field(default_factory=dict)
    date_range: DateRange = field(default_factory=DateRange)

    def is_neutral(self) -> bool:
        return self.active_count() == 0

    def active_count(self) -> int:
        count = sum(1 for values in self.categories.values() if values)
        count += len(self.numeric_ranges)
        if self.date_range.is_active:
            count += 1
        return count

    # ------------------------------------------------------------------
    # Updaters (return a new state, never mutate)
    # ------------------------------------------------------------------
    def with_category(self, column: str, values: Iterable[str]) -> FilterState:
        categories = dict(self.categories)
        categories[column] = [str(v) for v in values]
        return replace(self, categories=categories)

    def with_numeric_range(self, column: str, rng: Optional[NumericRange]) -> FilterState:
        ranges = dict(self.numeric_ranges)
        if rng is None:
            ranges.pop(column, None)
        else:
            ranges[column] = rng
        return replace(self, numeric_ranges=ranges)

    def with_date_range(self, start: Optional[datetime], end: Optional[datetime]) -> FilterState:
        return replace(self, date_range=DateRange(start=start, end=end))

    # ------------------------------------------------------------------
    # Serialisation for dcc.Store
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "categories": {c: list(v) for c, v in self.categories.items()},
            "numeric_ranges": {c: asdict(r) for c, r in self.numeric_ranges.items()},
            "date_range": {
                "start": self.date_range.start.isoformat() if self.date_range.start else None,
                "end": self.date_range.end.isoformat() if self.date_range.end else None,
            },
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> FilterState:
        if not data:
            return cls()
        date_range = data.get("date_range") or {}
        return cls(
            categories={
                str(c): [str(v) for v in (values or [])]
                for c, values in (data.get("categories") or {}).items()
            },
            numeric_ranges={
                str(c): NumericRange(min=float(r["min"]), max=float(r["max"]))
                for c, r in (data.get("numeric_ranges") or {}).items()
            },
            date_range=DateRange(
                start=_parse_iso(date_range.get("start")),
                end=_parse_iso(date_range.get("end")),
            ),
        )
