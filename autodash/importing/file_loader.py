from __future__ import annotations

import base64
import binascii
import csv
import io
import logging
from pathlib import PurePath
from typing import Optional

import pandas as pd

from autodash.config.model import InferenceSettings
from autodash.core.dataset import Dataset
from autodash.core.exceptions import EmptyFileError, FileParseError, UnsupportedFormatError
from autodash.core.schema import schema_to_dict

logger = logging.getLogger(__name__)

CSV_EXTENSIONS = {".csv"}
EXCEL_EXTENSIONS = {".xlsx", ".xls"}
SUPPORTED_EXTENSIONS = CSV_EXTENSIONS | EXCEL_EXTENSIONS


def file_extension(file_name: str) -> str:
    return PurePath(file_name).suffix.lower()


def decode_upload_contents(contents: str) -> bytes:
    """
    Decode a dcc.Upload `contents` string ("data:<mime>;base64,<payload>").
    """
    if not contents:
        raise FileParseError("Failed to read file.")
    _, _, payload = contents.partition(",")
    try:
        return base64.b64decode(payload or contents, validate=False)
    except (binascii.Error, ValueError) as e:
        raise FileParseError("Failed to read file.") from e


def _frame_to_dataset(
    name: str,
    df: pd.DataFrame,
    settings: Optional[InferenceSettings],
) -> Dataset:
    columns = [str(c) for c in df.columns]
    df.columns = columns
    # Object dtype keeps None instead of NaN for missing cells
    records = df.astype(object).where(pd.notna(df), None).to_dict(orient="records")
    return Dataset.from_rows(name, records, columns=columns, settings=settings)


def _check_field_counts(content: bytes) -> None:
    """Every non-blank record must have as many fields as the header."""
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise FileParseError(str(e)) from e

    reader = csv.reader(io.StringIO(text, newline=""))
    expected = None
    try:
        for record in reader:
            if not record or record == [""]:
                continue
            if expected is None:
                expected = len(record)
            elif len(record) != expected:
                raise FileParseError(
                    f"Expected {expected} fields in line {reader.line_num}, saw {len(record)}"
                )
    except csv.Error as e:
        raise FileParseError(str(e)) from e


def parse_csv(name: str, content: bytes, settings: Optional[InferenceSettings] = None) -> Dataset:
    """
    Header row = column names; blank lines skipped; cell types guessed by pandas.
    A record whose field count differs from the header rejects the file.
    """
    _check_field_counts(content)
    try:
        df = pd.read_csv(io.BytesIO(content), skip_blank_lines=True, index_col=False)
    except (pd.errors.EmptyDataError, pd.errors.ParserError, UnicodeDecodeError) as e:
        raise FileParseError(str(e)) from e

    return _frame_to_dataset(name, df, settings)


def parse_excel(name: str, content: bytes, settings: Optional[InferenceSettings] = None) -> Dataset:
    """
    First sheet only; first row = column names. A sheet without data rows is rejected.
    """
    try:
        df = pd.read_excel(io.BytesIO(content), sheet_name=0)
    except ImportError:
        raise
    except Exception as e:
        logger.warning(
            "Excel decoding failed",
            extra={"file_name": name, "error": str(e)},
        )
        raise FileParseError("Failed to parse Excel file.") from e

    df = df.dropna(how="all")
    if df.empty:
        raise EmptyFileError("The file appears to be empty.")

    return _frame_to_dataset(name, df, settings)


def parse_file(
    file_name: str,
    content: bytes,
    settings: Optional[InferenceSettings] = None,
    max_bytes: Optional[int] = None,
) -> Dataset:
    """
    Decode an uploaded CSV / Excel file into a Dataset with an inferred schema.

    :param file_name: original file name; the extension picks the decoder
    :param content: raw file bytes
    :param settings: schema inference settings
    :param max_bytes: optional size limit
    :raises UnsupportedFormatError: unknown extension (checked before any decoding)
    :raises FileParseError: decoder failure, empty Excel sheet, or file too large
    """
    ext = file_extension(file_name)
    if ext not in SUPPORTED_EXTENSIONS:
        raise UnsupportedFormatError("Unsupported file format. Please upload CSV or Excel files.")

    if max_bytes is not None and len(content) > max_bytes:
        raise FileParseError(
            f"File is too large ({len(content)} bytes, limit is {max_bytes} bytes)."
        )

    if ext in CSV_EXTENSIONS:
        dataset = parse_csv(file_name, content, settings)
    else:
        dataset = parse_excel(file_name, content, settings)

    logger.info(
        "File parsed",
        extra={
            "file_name": file_name,
            "n_rows": dataset.n_rows,
            "n_columns": dataset.n_columns,
            "schema": schema_to_dict(dataset.schema),
        },
    )
    return dataset
