from __future__ import annotations

import math

from autodash.core.schema import ColumnType
from autodash.core.statistics import (
    NumericBounds,
    build_filter_options,
    numeric_range,
    unique_values,
)


def test_unique_values_sorted_without_nulls():
    rows = [{"c": "b"}, {"c": "a"}, {"c": None}, {"c": "b"}, {"c": 3}]
    assert unique_values(rows, "c") == ["3", "a", "b"]


def test_numeric_range_ignores_non_numbers():
    rows = [{"n": "5"}, {"n": 2}, {"n": "x"}, {"n": None}, {"n": 9.5}]
    assert numeric_range(rows, "n") == NumericBounds(min=2.0, max=9.5)


def test_numeric_range_of_empty_column():
    bounds = numeric_range([{"n": "x"}], "n")
    assert bounds.min == math.inf
    assert bounds.max == -math.inf
    assert not bounds.is_filterable


def test_degenerate_range_is_not_filterable():
    assert not NumericBounds(min=3.0, max=3.0).is_filterable
    assert NumericBounds(min=1.0, max=3.0).is_filterable


def test_build_filter_options():
    rows = [
        {"city": "NYC", "pop": 100, "const": 1, "when": "2024-01-01", "id": f"id{i}"}
        for i in range(60)
    ]
    rows[1] = dict(rows[1], city="LA", pop=200)
    schema = {
        "city": ColumnType.CATEGORY,
        "pop": ColumnType.NUMBER,
        "const": ColumnType.NUMBER,
        "when": ColumnType.DATE,
        "id": ColumnType.CATEGORY,
    }

    options = build_filter_options(rows, schema, max_values=50)

    assert options.categories == {"city": ["LA", "NYC"]}
    # 60 distinct ids is too many for a dropdown
    assert "id" not in options.categories
    assert options.numeric == {"pop": NumericBounds(min=100.0, max=200.0)}
    assert "const" not in options.numeric
    assert options.date_columns == ["when"]
    assert options.has_date_filter


def test_all_null_category_column_is_skipped():
    rows = [{"c": None}, {"c": None}]
    options = build_filter_options(rows, {"c": ColumnType.CATEGORY})
    assert options.categories == {}
    assert not options.has_date_filter
