from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from autodash.config.model import InferenceSettings
from autodash.core.values import is_date_like, is_missing, is_number_like

logger = logging.getLogger(__name__)


class ColumnType(str, Enum):
    NUMBER = "number"
    CATEGORY = "category"
    DATE = "date"


Schema = Dict[str, ColumnType]


def sample_column(
    rows: Sequence[Mapping[str, Any]],
    column: str,
    sample_size: int,
) -> List[Any]:
    """
    Values of `column` in the first `sample_size` rows, with null / empty cells dropped.
    """
    return [
        value
        for value in (row.get(column) for row in rows[:sample_size])
        if not is_missing(value)
    ]


def infer_column_type(values: Iterable[Any], threshold: float = 0.7) -> ColumnType:
    """
    Majority vote over already-sampled, non-missing values.

    Dates win over numbers: a column where both shares pass the threshold is a date column.
    An empty sample falls back to CATEGORY.
    """
    values = list(values)
    total = len(values)
    if total == 0:
        return ColumnType.CATEGORY

    date_count = sum(1 for v in values if is_date_like(v))
    if date_count / total > threshold:
        return ColumnType.DATE

    number_count = sum(1 for v in values if is_number_like(v))
    if number_count / total > threshold:
        return ColumnType.NUMBER

    return ColumnType.CATEGORY


def infer_schema(
    rows: Sequence[Mapping[str, Any]],
    columns: Sequence[str],
    settings: Optional[InferenceSettings] = None,
) -> Schema:
    """
    Assign a ColumnType to every column, looking only at the first
    `settings.sample_size` rows. The result preserves column order.
    """
    settings = settings or InferenceSettings()

    schema: Schema = {}
    for column in columns:
        sample = sample_column(rows, column, settings.sample_size)
        schema[column] = infer_column_type(sample, settings.threshold)

    logger.debug(
        "Schema inferred",
        extra={
            "n_rows": len(rows),
            "n_columns": len(schema),
            "schema": schema_to_dict(schema),
        },
    )
    return schema


def schema_to_dict(schema: Mapping[str, ColumnType]) -> Dict[str, str]:
    return {column: kind.value for column, kind in schema.items()}
