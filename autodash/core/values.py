"""
Cell values and the per-value classifier.

Decoders hand us loosely-typed cells (numpy scalars, NaN, pandas Timestamps,
plain strings...). `normalise_cell` collapses every cell into one of four
kinds at ingestion time:

    NULL      -> None
    NUMBER    -> int | float
    TEXT      -> str
    DATETIME  -> datetime.datetime (naive, UTC)

Everything downstream (schema inference, statistics, filtering, chart
aggregation) goes through `to_number` / `to_datetime` / `to_text`, which never
raise: a failed conversion is reported as None.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime, time, timedelta, timezone
from enum import Enum
from numbers import Real
from typing import Any, Optional

import numpy as np
import pandas as pd
from dateutil import parser as dateparser

EPOCH = datetime(1970, 1, 1)

# Shapes that count as dates without any further parsing
DATE_PATTERNS = (
    re.compile(r"^\d{4}-\d{2}-\d{2}$"),               # YYYY-MM-DD
    re.compile(r"^\d{2}/\d{2}/\d{4}$"),               # MM/DD/YYYY
    re.compile(r"^\d{2}-\d{2}-\d{4}$"),               # MM-DD-YYYY
    re.compile(r"^[A-Za-z]{3}\s\d{1,2},?\s\d{4}$"),   # Mon D, YYYY
)

# strptime equivalents of DATE_PATTERNS, tried before the generic parser
_DATE_FORMATS = ("%Y-%m-%d", "%m/%d/%Y", "%m-%d-%Y", "%b %d, %Y", "%b %d %Y")

_PREFIXED_INT = re.compile(r"^[+-]?0[xXoObB][0-9a-fA-F]+$")
_HAS_DIGIT = re.compile(r"\d")

NULL_TEXT = "null"


class CellKind(str, Enum):
    NULL = "null"
    NUMBER = "number"
    TEXT = "text"
    DATETIME = "datetime"


def _is_nan(value: Any) -> bool:
    # NaN and NaT are the only values not equal to themselves
    try:
        return bool(value != value)
    except (TypeError, ValueError):
        return False


def naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def normalise_cell(raw: Any) -> Any:
    """
    Convert a decoder cell into None / int / float / str / datetime.
    """
    if raw is None:
        return None

    if isinstance(raw, (bool, np.bool_)):
        return "true" if raw else "false"

    if isinstance(raw, pd.Timestamp):
        if pd.isna(raw):
            return None
        return naive_utc(raw.to_pydatetime())

    if isinstance(raw, np.datetime64):
        if np.isnat(raw):
            return None
        return pd.Timestamp(raw).to_pydatetime()

    if isinstance(raw, np.generic):
        raw = raw.item()

    if isinstance(raw, float):
        return None if math.isnan(raw) else raw

    if isinstance(raw, (int, str)):
        return raw

    if isinstance(raw, datetime):
        return None if _is_nan(raw) else naive_utc(raw)

    if isinstance(raw, date):
        return datetime(raw.year, raw.month, raw.day)

    if isinstance(raw, time):
        return raw.isoformat()

    if _is_nan(raw):
        return None

    return str(raw)


def cell_kind(value: Any) -> CellKind:
    if value is None or _is_nan(value):
        return CellKind.NULL
    if isinstance(value, datetime):
        return CellKind.DATETIME
    if isinstance(value, Real) and not isinstance(value, bool):
        return CellKind.NUMBER
    return CellKind.TEXT


def is_missing(value: Any) -> bool:
    """Null or empty string: the values schema inference ignores."""
    return cell_kind(value) is CellKind.NULL or value == ""


# ---------------------------------------------------------------------------
# Conversions
# ---------------------------------------------------------------------------

def _text_to_number(text: str) -> Optional[float]:
    text = text.strip()
    if not text or "_" in text:
        return None

    if _PREFIXED_INT.match(text):
        try:
            return float(int(text, 0))
        except ValueError:
            return None

    try:
        number = float(text)
    except ValueError:
        return None

    if not math.isfinite(number):
        # "Infinity" is a number, "nan" / "inf" are not
        if text.lstrip("+-") == "Infinity":
            return number
        return None
    return number


def to_number(value: Any) -> Optional[float]:
    """
    Numeric value of a cell, or None when it does not convert.

    Datetimes convert to milliseconds since the epoch.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, datetime):
        if _is_nan(value):
            return None
        return (naive_utc(value) - EPOCH) / timedelta(milliseconds=1)
    if isinstance(value, Real):
        number = float(value)
        return None if math.isnan(number) else number
    if isinstance(value, str):
        return _text_to_number(value)
    return None


def _parse_generic(text: str) -> Optional[datetime]:
    # Bare words ("May", "Mon") are names, not dates
    if not _HAS_DIGIT.search(text):
        return None
    try:
        return naive_utc(dateparser.parse(text))
    except (ValueError, OverflowError, TypeError):
        return None


def _text_to_datetime(text: str) -> Optional[datetime]:
    text = text.strip()
    if not text:
        return None

    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue

    # Bare numbers are values, not dates
    if _text_to_number(text) is not None:
        return None

    return _parse_generic(text)


def to_datetime(value: Any) -> Optional[datetime]:
    """
    Datetime value of a cell, or None when it does not parse.

    Numbers are read as milliseconds since the epoch.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return None if _is_nan(value) else naive_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, Real):
        if not math.isfinite(value):
            return None
        try:
            return EPOCH + timedelta(milliseconds=float(value))
        except OverflowError:
            return None
    if isinstance(value, str):
        return _text_to_datetime(value)
    return None


def to_text(value: Any) -> str:
    """
    String form of a cell, as used for category membership and counting.
    """
    if value is None or _is_nan(value):
        return NULL_TEXT
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, datetime):
        if value.time() == time(0, 0):
            return value.date().isoformat()
        return value.isoformat()
    return str(value)


# ---------------------------------------------------------------------------
# Classifier
# ---------------------------------------------------------------------------

def is_number_like(value: Any) -> bool:
    if isinstance(value, Real) and not isinstance(value, bool):
        return True
    return to_number(value) is not None


def is_date_like(value: Any) -> bool:
    if isinstance(value, datetime):
        return not _is_nan(value)
    if isinstance(value, date):
        return True
    if not isinstance(value, str):
        return False

    if any(pattern.match(value) for pattern in DATE_PATTERNS):
        return True

    text = value.strip()
    if not text or _text_to_number(text) is not None:
        return False
    return _parse_generic(text) is not None
