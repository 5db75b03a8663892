from __future__ import annotations

import base64
import io

import pandas as pd
import pytest

from autodash.core.exceptions import (
    EmptyFileError,
    FileParseError,
    UnsupportedFormatError,
)
from autodash.core.schema import ColumnType
from autodash.importing.file_loader import (
    decode_upload_contents,
    file_extension,
    parse_file,
)

CITY_CSV = b"city,pop,founded\nNYC,100,2024-01-05\nLA,200,2024-02-10\n\nNYC,150,2024-03-15\n"


def _excel_bytes(df: pd.DataFrame) -> bytes:
    buf = io.BytesIO()
    df.to_excel(buf, index=False, engine="openpyxl")
    return buf.getvalue()


def test_file_extension_is_case_insensitive():
    assert file_extension("Report.XLSX") == ".xlsx"
    assert file_extension("data.csv") == ".csv"
    assert file_extension("noext") == ""


def test_parse_csv_infers_schema_and_skips_blank_lines():
    ds = parse_file("cities.csv", CITY_CSV)

    assert ds.name == "cities.csv"
    assert ds.columns == ("city", "pop", "founded")
    assert ds.n_rows == 3
    assert ds.schema == {
        "city": ColumnType.CATEGORY,
        "pop": ColumnType.NUMBER,
        "founded": ColumnType.DATE,
    }
    assert ds.rows[2]["city"] == "NYC"
    assert ds.rows[2]["pop"] == 150


def test_parse_csv_keeps_missing_cells_as_none():
    ds = parse_file("gaps.csv", b"a,b\n1,\n,x\n")
    assert ds.rows[0]["b"] is None
    assert ds.rows[1]["a"] is None


def test_parse_csv_header_only_gives_empty_dataset():
    ds = parse_file("header.csv", b"a,b\n")
    assert ds.n_rows == 0
    assert ds.columns == ("a", "b")
    assert ds.schema == {"a": ColumnType.CATEGORY, "b": ColumnType.CATEGORY}


def test_parse_empty_csv_fails():
    with pytest.raises(FileParseError):
        parse_file("empty.csv", b"")


def test_parse_csv_rejects_rows_with_extra_fields():
    # pandas would otherwise turn the extra leading field into the index
    with pytest.raises(FileParseError, match="Expected 2 fields in line 2, saw 3"):
        parse_file("ragged.csv", b"a,b\n1,2,3\n4,5,6\n")


def test_parse_csv_rejects_rows_with_missing_fields():
    with pytest.raises(FileParseError, match="Expected 3 fields"):
        parse_file("short.csv", b"a,b,c\n1,2,3\n4,5\n")


def test_parse_csv_field_check_ignores_blank_lines():
    ds = parse_file("blanks.csv", b"a,b\n\n1,2\n\n3,4\n")
    assert ds.n_rows == 2
    assert ds.rows[1] == {"a": 3, "b": 4}


def test_parse_excel_first_sheet():
    df = pd.DataFrame(
        {"city": ["NYC", "LA", "NYC"], "pop": [100, 200, 150], "note": [None, None, None]}
    )
    ds = parse_file("cities.xlsx", _excel_bytes(df))

    # Columns come from the header, even when a column has no values
    assert ds.columns == ("city", "pop", "note")
    assert ds.n_rows == 3
    assert ds.schema["pop"] is ColumnType.NUMBER
    assert ds.schema["note"] is ColumnType.CATEGORY


def test_parse_excel_without_rows_is_empty_error():
    df = pd.DataFrame({"city": [], "pop": []})
    with pytest.raises(EmptyFileError, match="appears to be empty"):
        parse_file("empty.xlsx", _excel_bytes(df))


def test_parse_corrupt_excel():
    with pytest.raises(FileParseError, match="Failed to parse Excel file"):
        parse_file("broken.xlsx", b"definitely not a workbook")


def test_unsupported_extension_is_rejected_before_decoding():
    with pytest.raises(UnsupportedFormatError, match="Please upload CSV or Excel files"):
        parse_file("notes.txt", b"a,b\n1,2\n")


def test_size_limit():
    with pytest.raises(FileParseError, match="too large"):
        parse_file("cities.csv", CITY_CSV, max_bytes=10)


def test_decode_upload_contents():
    payload = base64.b64encode(CITY_CSV).decode("ascii")
    contents = f"data:text/csv;base64,{payload}"
    assert decode_upload_contents(contents) == CITY_CSV

    with pytest.raises(FileParseError):
        decode_upload_contents("")
