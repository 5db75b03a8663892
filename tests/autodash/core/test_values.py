from __future__ import annotations

import math
from datetime import datetime

import numpy as np
import pandas as pd

from autodash.core.values import (
    CellKind,
    cell_kind,
    is_date_like,
    is_missing,
    is_number_like,
    normalise_cell,
    to_datetime,
    to_number,
    to_text,
)


def test_normalise_cell_unwraps_numpy_and_pandas_values():
    assert normalise_cell(np.int64(3)) == 3
    assert isinstance(normalise_cell(np.int64(3)), int)
    assert normalise_cell(np.float64(2.5)) == 2.5
    assert normalise_cell(float("nan")) is None
    assert normalise_cell(pd.NaT) is None
    assert normalise_cell(pd.Timestamp("2024-01-05")) == datetime(2024, 1, 5)
    assert normalise_cell(None) is None
    assert normalise_cell("NYC") == "NYC"


def test_normalise_cell_turns_booleans_into_text():
    assert normalise_cell(True) == "true"
    assert normalise_cell(np.bool_(False)) == "false"


def test_cell_kind_and_missing():
    assert cell_kind(None) is CellKind.NULL
    assert cell_kind(4) is CellKind.NUMBER
    assert cell_kind("4") is CellKind.TEXT
    assert cell_kind(datetime(2024, 1, 1)) is CellKind.DATETIME

    assert is_missing(None)
    assert is_missing("")
    assert not is_missing(0)
    assert not is_missing(" ")


def test_to_number_accepts_numeric_text():
    assert to_number("42") == 42.0
    assert to_number(" 3.5 ") == 3.5
    assert to_number("-7") == -7.0
    assert to_number("1e3") == 1000.0
    assert to_number("0x1A") == 26.0
    assert to_number("Infinity") == math.inf


def test_to_number_rejects_non_numbers():
    assert to_number(None) is None
    assert to_number("") is None
    assert to_number("   ") is None
    assert to_number("abc") is None
    assert to_number("1_000") is None
    assert to_number("nan") is None
    assert to_number(float("nan")) is None


def test_to_number_of_datetime_is_epoch_milliseconds():
    assert to_number(datetime(1970, 1, 2)) == 86_400_000.0


def test_to_datetime_parses_supported_shapes():
    expected = datetime(2024, 1, 15)
    assert to_datetime("2024-01-15") == expected
    assert to_datetime("01/15/2024") == expected
    assert to_datetime("01-15-2024") == expected
    assert to_datetime("Jan 15, 2024") == expected
    assert to_datetime(expected) == expected


def test_to_datetime_rejects_plain_numbers_and_words():
    assert to_datetime("42") is None
    assert to_datetime("hello") is None
    assert to_datetime("") is None
    assert to_datetime(None) is None


def test_to_datetime_reads_numbers_as_epoch_milliseconds():
    assert to_datetime(0) == datetime(1970, 1, 1)
    assert to_datetime(86_400_000) == datetime(1970, 1, 2)


def test_to_text_forms():
    assert to_text(None) == "null"
    assert to_text(3.0) == "3"
    assert to_text(2.5) == "2.5"
    assert to_text(7) == "7"
    assert to_text(datetime(2024, 1, 5)) == "2024-01-05"
    assert to_text(datetime(2024, 1, 5, 10, 30)) == "2024-01-05T10:30:00"
    assert to_text("NYC") == "NYC"


def test_is_date_like():
    assert is_date_like("2024-01-15")
    assert is_date_like("03/05/2024")
    assert is_date_like("Mar 5, 2024")
    assert is_date_like("2024/03/05")
    assert is_date_like(datetime(2024, 3, 5))

    # Shape alone is enough, even when the date itself is impossible
    assert is_date_like("2024-13-45")

    assert not is_date_like("12345")
    assert not is_date_like("hello")
    assert not is_date_like(12345)
    assert not is_date_like(None)


def test_bare_day_and_month_names_are_not_dates():
    for word in ["Mon", "Tuesday", "May", "January", "Dec"]:
        assert not is_date_like(word)
        assert to_datetime(word) is None

    # A digit alongside the name still reaches the generic parser
    assert is_date_like("5 May 2024")
    assert to_datetime("5 May 2024") == datetime(2024, 5, 5)


def test_is_number_like():
    assert is_number_like(5)
    assert is_number_like(2.5)
    assert is_number_like("5")
    assert not is_number_like("abc")
    assert not is_number_like(None)
    assert not is_number_like("")
