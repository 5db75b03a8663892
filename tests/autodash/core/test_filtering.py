from __future__ import annotations

from datetime import datetime

from autodash.core.filter_state import FilterState, NumericRange
from autodash.core.filtering import filter_rows
from autodash.core.schema import ColumnType

SCHEMA = {"city": ColumnType.CATEGORY, "pop": ColumnType.NUMBER}


def _rows():
    return [
        {"city": "NYC", "pop": "100"},
        {"city": "LA", "pop": "200"},
        {"city": "NYC", "pop": "150"},
    ]


def test_neutral_state_keeps_every_row():
    rows = _rows()
    assert filter_rows(rows, FilterState(), SCHEMA) == rows


def test_category_filter_keeps_order():
    state = FilterState(categories={"city": ["NYC"]})
    assert filter_rows(_rows(), state, SCHEMA) == [
        {"city": "NYC", "pop": "100"},
        {"city": "NYC", "pop": "150"},
    ]


def test_empty_category_list_is_no_restriction():
    state = FilterState(categories={"city": []})
    assert len(filter_rows(_rows(), state, SCHEMA)) == 3


def test_numeric_range_filter():
    state = FilterState(numeric_ranges={"pop": NumericRange(min=120, max=300)})
    assert filter_rows(_rows(), state, SCHEMA) == [
        {"city": "LA", "pop": "200"},
        {"city": "NYC", "pop": "150"},
    ]


def test_non_numeric_cells_pass_numeric_range():
    rows = _rows() + [{"city": "SF", "pop": "unknown"}, {"city": "SF", "pop": None}]
    state = FilterState(numeric_ranges={"pop": NumericRange(min=120, max=300)})
    kept = filter_rows(rows, state, SCHEMA)
    assert [r["city"] for r in kept] == ["LA", "NYC", "SF", "SF"]


def test_category_and_numeric_combine_with_and():
    state = FilterState(
        categories={"city": ["NYC"]},
        numeric_ranges={"pop": NumericRange(min=120, max=300)},
    )
    assert filter_rows(_rows(), state, SCHEMA) == [{"city": "NYC", "pop": "150"}]


def test_category_filter_matches_string_form_of_numbers():
    rows = [{"year": 2023}, {"year": 2024.0}, {"year": 2025}]
    state = FilterState(categories={"year": ["2024"]})
    assert filter_rows(rows, state, {"year": ColumnType.CATEGORY}) == [{"year": 2024.0}]


def test_date_range_applies_to_every_date_column():
    schema = {"ordered": ColumnType.DATE, "shipped": ColumnType.DATE}
    rows = [
        {"ordered": "2024-01-05", "shipped": "2024-01-07"},
        {"ordered": "2024-01-20", "shipped": "2024-02-03"},
        {"ordered": "2024-01-25", "shipped": "not a date"},
    ]
    state = FilterState().with_date_range(datetime(2024, 1, 1), datetime(2024, 1, 31))

    kept = filter_rows(rows, state, schema)

    # Second row ships after the window; unparseable dates do not exclude a row
    assert kept == [rows[0], rows[2]]


def test_open_ended_date_range():
    schema = {"d": ColumnType.DATE}
    rows = [{"d": "2023-12-31"}, {"d": "2024-01-01"}, {"d": "2024-06-01"}]

    since = FilterState().with_date_range(datetime(2024, 1, 1), None)
    until = FilterState().with_date_range(None, datetime(2024, 1, 1))

    assert filter_rows(rows, since, schema) == rows[1:]
    assert filter_rows(rows, until, schema) == rows[:2]


def test_timezone_aware_bounds_compare_with_naive_cells():
    schema = {"d": ColumnType.DATE}
    rows = [{"d": "2024-01-15"}, {"d": "2024-02-15"}, {"d": "2024-03-15"}]
    state = FilterState.from_dict(
        {"date_range": {"start": "2024-02-01T00:00:00+00:00", "end": "2024-03-01T05:00:00+05:00"}}
    )

    assert filter_rows(rows, state, schema) == [rows[1]]


def test_filtering_twice_changes_nothing():
    schema = {"city": ColumnType.CATEGORY, "pop": ColumnType.NUMBER, "d": ColumnType.DATE}
    rows = [
        {"city": "NYC", "pop": "100", "d": "2024-01-05"},
        {"city": "LA", "pop": "200", "d": "2024-02-10"},
        {"city": "NYC", "pop": "150", "d": "2024-03-15"},
        {"city": "SF", "pop": None, "d": "bad"},
    ]
    states = [
        FilterState(),
        FilterState(categories={"city": ["NYC", "SF"]}),
        FilterState(numeric_ranges={"pop": NumericRange(min=120, max=300)}),
        FilterState().with_date_range(datetime(2024, 2, 1), None),
        FilterState(
            categories={"city": ["NYC"]},
            numeric_ranges={"pop": NumericRange(min=0, max=120)},
        ).with_date_range(None, datetime(2024, 2, 1)),
    ]

    for state in states:
        once = filter_rows(rows, state, schema)
        assert filter_rows(once, state, schema) == once
