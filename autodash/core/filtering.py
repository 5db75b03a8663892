from __future__ import annotations

from typing import Any, List, Mapping, Sequence, Set, Tuple

from autodash.core.filter_state import DateRange, FilterState, NumericRange
from autodash.core.schema import ColumnType
from autodash.core.values import to_datetime, to_number, to_text

Row = Mapping[str, Any]


def _row_passes(
    row: Row,
    categories: List[Tuple[str, Set[str]]],
    ranges: List[Tuple[str, NumericRange]],
    date_columns: List[str],
    date_range: DateRange,
) -> bool:
    for column, allowed in categories:
        if to_text(row.get(column)) not in allowed:
            return False

    for column, rng in ranges:
        number = to_number(row.get(column))
        # Cells that are not numbers are not restricted by a numeric range
        if number is not None and not rng.contains(number):
            return False

    for column in date_columns:
        value = to_datetime(row.get(column))
        if value is None:
            continue
        if date_range.start is not None and value < date_range.start:
            return False
        if date_range.end is not None and value > date_range.end:
            return False

    return True


def filter_rows(
    rows: Sequence[Row],
    state: FilterState,
    schema: Mapping[str, ColumnType],
) -> List[Row]:
    """
    Return the rows that satisfy every active restriction in `state`, in their original order.

    - category lists: the cell's string form must be in the list (empty list = no restriction)
    - numeric ranges: numeric cells must lie in [min, max]; non-numeric cells pass
    - date range: every date-typed column whose cell parses must lie inside the window
    """
    categories = [
        (column, set(values))
        for column, values in state.categories.items()
        if values
    ]
    ranges = list(state.numeric_ranges.items())

    date_columns: List[str] = []
    if state.date_range.is_active:
        date_columns = [c for c, kind in schema.items() if kind is ColumnType.DATE]

    if not categories and not ranges and not date_columns:
        return list(rows)

    return [
        row
        for row in rows
        if _row_passes(row, categories, ranges, date_columns, state.date_range)
    ]
