from __future__ import annotations

from autodash.config.model import InferenceSettings
from autodash.core.schema import (
    ColumnType,
    infer_column_type,
    infer_schema,
    sample_column,
    schema_to_dict,
)


def _city_rows():
    return [
        {"city": "NYC", "pop": "100"},
        {"city": "LA", "pop": "200"},
        {"city": "NYC", "pop": "150"},
    ]


def test_infer_schema_city_population():
    schema = infer_schema(_city_rows(), ["city", "pop"])
    assert schema == {"city": ColumnType.CATEGORY, "pop": ColumnType.NUMBER}


def test_infer_schema_preserves_column_order():
    rows = [{"b": 1, "a": "x", "c": "2024-01-01"}]
    schema = infer_schema(rows, ["c", "a", "b"])
    assert list(schema) == ["c", "a", "b"]
    assert schema["c"] is ColumnType.DATE


def test_date_strings_win_over_numbers():
    values = ["2024-01-01", "2024-01-02", "2024-02-10", "2024-03-01"]
    assert infer_column_type(values) is ColumnType.DATE


def test_numeric_strings_are_numbers_not_dates():
    assert infer_column_type(["1", "2", "3", "2024"]) is ColumnType.NUMBER


def test_weekday_and_month_names_are_categories():
    assert infer_column_type(["Mon", "Tue", "Wed", "Thu", "Fri"]) is ColumnType.CATEGORY
    assert infer_column_type(["January", "February", "March", "April", "May"]) is ColumnType.CATEGORY


def test_empty_sample_falls_back_to_category():
    assert infer_column_type([]) is ColumnType.CATEGORY

    rows = [{"empty": None}, {"empty": ""}, {"empty": None}]
    assert infer_schema(rows, ["empty"]) == {"empty": ColumnType.CATEGORY}


def test_mixed_column_is_category():
    assert infer_column_type(["1", "2", "x", "y"]) is ColumnType.CATEGORY


def test_threshold_is_strictly_greater():
    seven_of_ten = ["1"] * 7 + ["a", "b", "c"]
    eight_of_ten = ["1"] * 8 + ["a", "b"]
    assert infer_column_type(seven_of_ten, threshold=0.7) is ColumnType.CATEGORY
    assert infer_column_type(eight_of_ten, threshold=0.7) is ColumnType.NUMBER


def test_missing_values_do_not_count_towards_the_vote():
    rows = [{"n": "1"}, {"n": None}, {"n": ""}, {"n": "2"}]
    assert sample_column(rows, "n", 100) == ["1", "2"]
    assert infer_schema(rows, ["n"]) == {"n": ColumnType.NUMBER}


def test_only_the_first_rows_are_sampled():
    rows = [{"v": 1}, {"v": 2}] + [{"v": "text"}] * 10
    settings = InferenceSettings(sample_size=2)
    assert infer_schema(rows, ["v"], settings) == {"v": ColumnType.NUMBER}
    assert infer_schema(rows, ["v"]) == {"v": ColumnType.CATEGORY}


def test_schema_to_dict_uses_type_names():
    schema = {"a": ColumnType.NUMBER, "b": ColumnType.DATE, "c": ColumnType.CATEGORY}
    assert schema_to_dict(schema) == {"a": "number", "b": "date", "c": "category"}
