from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Sequence

from autodash.core.schema import ColumnType
from autodash.core.values import to_number, to_text


@dataclass(frozen=True)
class NumericBounds:
    """
    min/max over the values of a column that convert to numbers.
    An empty column gives (inf, -inf).
    """
    min: float
    max: float

    @property
    def is_filterable(self) -> bool:
        return math.isfinite(self.min) and math.isfinite(self.max) and self.min != self.max


@dataclass(frozen=True)
class FilterOptions:
    """
    What the filter panel may offer for the current dataset.

    - categories: column -> sorted allowed values (only columns with 1..max_values values)
    - numeric: column -> bounds (only finite, non-degenerate ranges)
    - date_columns: columns typed as dates; the date range control is shown if any exist
    """
    categories: Dict[str, List[str]] = field(default_factory=dict)
    numeric: Dict[str, NumericBounds] = field(default_factory=dict)
    date_columns: List[str] = field(default_factory=list)

    @property
    def has_date_filter(self) -> bool:
        return bool(self.date_columns)


def unique_values(rows: Sequence[Mapping[str, Any]], column: str) -> List[str]:
    """
    Sorted string forms of every non-null value in `column`, across all rows.
    """
    values = {
        to_text(row.get(column))
        for row in rows
        if row.get(column) is not None
    }
    return sorted(values)


def numeric_range(rows: Sequence[Mapping[str, Any]], column: str) -> NumericBounds:
    numbers = [n for n in (to_number(row.get(column)) for row in rows) if n is not None]
    if not numbers:
        return NumericBounds(min=math.inf, max=-math.inf)
    return NumericBounds(min=min(numbers), max=max(numbers))


def build_filter_options(
    rows: Sequence[Mapping[str, Any]],
    schema: Mapping[str, ColumnType],
    max_values: int = 50,
) -> FilterOptions:
    """
    Scan the full row set once per column and keep only the controls worth showing.
    """
    categories: Dict[str, List[str]] = {}
    numeric: Dict[str, NumericBounds] = {}
    date_columns: List[str] = []

    for column, kind in schema.items():
        if kind is ColumnType.CATEGORY:
            values = unique_values(rows, column)
            if 0 < len(values) <= max_values:
                categories[column] = values
        elif kind is ColumnType.NUMBER:
            bounds = numeric_range(rows, column)
            if bounds.is_filterable:
                numeric[column] = bounds
        elif kind is ColumnType.DATE:
            date_columns.append(column)

    return FilterOptions(categories=categories, numeric=numeric, date_columns=date_columns)
