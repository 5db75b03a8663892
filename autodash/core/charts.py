"""
Chart configuration and chart-ready aggregation.

Which chart a column gets is derived from the schema alone:

    category -> bar (and the first category column also gets a pie)
    number   -> line
    date     -> area

Aggregations are bounded so the rendering layer never sees more than a
handful of points per chart.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence

from autodash.config.model import ChartLimits
from autodash.core.schema import ColumnType
from autodash.core.values import to_datetime, to_number, to_text

INVALID_DATE_LABEL = "Invalid Date"


class ChartKind(str, Enum):
    BAR = "bar"
    PIE = "pie"
    LINE = "line"
    AREA = "area"


_SUBTITLES = {
    ColumnType.CATEGORY: "Distribution",
    ColumnType.DATE: "Timeline",
    ColumnType.NUMBER: "Values",
}


@dataclass(frozen=True)
class ChartConfig:
    column: str
    kind: ChartKind
    title: str
    data_type: ColumnType

    @property
    def key(self) -> str:
        return f"{self.column}-{self.kind.value}"

    @property
    def subtitle(self) -> str:
        return _SUBTITLES[self.data_type]


def build_chart_configs(
    schema: Mapping[str, ColumnType],
    max_charts: int = 8,
) -> List[ChartConfig]:
    configs: List[ChartConfig] = []
    has_pie = False

    for column, kind in schema.items():
        if kind is ColumnType.CATEGORY:
            configs.append(ChartConfig(column, ChartKind.BAR, f"{column} Distribution", kind))
            if not has_pie:
                configs.append(ChartConfig(column, ChartKind.PIE, f"{column} Breakdown", kind))
                has_pie = True
        elif kind is ColumnType.NUMBER:
            configs.append(ChartConfig(column, ChartKind.LINE, f"{column} Trend", kind))
        elif kind is ColumnType.DATE:
            configs.append(ChartConfig(column, ChartKind.AREA, f"{column} Timeline", kind))

    return configs[:max_charts]


# ---------------------------------------------------------------------------
# Aggregations
# ---------------------------------------------------------------------------

def aggregate_categories(
    rows: Sequence[Mapping[str, Any]],
    column: str,
    top_n: int = 10,
) -> List[Dict[str, Any]]:
    """
    Top `top_n` string values by count, most frequent first.
    Ties keep first-seen order.
    """
    counts = Counter(to_text(row.get(column)) for row in rows)
    # Counter keeps insertion order and sorted() is stable
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [{"name": name, "count": count} for name, count in ranked[:top_n]]


def aggregate_numbers(
    rows: Sequence[Mapping[str, Any]],
    column: str,
    max_points: int = 50,
) -> List[Dict[str, Any]]:
    """
    The first `max_points` rows as (1-based index, value); non-numeric cells plot as 0.
    """
    series = []
    for i, row in enumerate(rows[:max_points]):
        number = to_number(row.get(column))
        series.append({"index": i + 1, "value": number if number is not None else 0})
    return series


def format_short_date(value: Optional[datetime]) -> str:
    if value is None:
        return INVALID_DATE_LABEL
    return f"{value:%b} {value.day}"


def aggregate_dates(
    rows: Sequence[Mapping[str, Any]],
    column: str,
    max_points: int = 30,
) -> List[Dict[str, Any]]:
    """
    Rows ordered by date (unparseable dates last), truncated to `max_points`.
    Each point is a presence marker with value 1.
    """
    parsed = [to_datetime(row.get(column)) for row in rows]
    order = sorted(
        range(len(parsed)),
        key=lambda i: (parsed[i] is None, parsed[i] or datetime.min),
    )
    return [
        {"date": format_short_date(parsed[i]), "value": 1}
        for i in order[:max_points]
    ]


def aggregate(
    config: ChartConfig,
    rows: Sequence[Mapping[str, Any]],
    limits: Optional[ChartLimits] = None,
) -> List[Dict[str, Any]]:
    """
    Chart-ready series for `config` over the (already filtered) rows.
    """
    limits = limits or ChartLimits()

    if config.data_type is ColumnType.CATEGORY:
        return aggregate_categories(rows, config.column, limits.category_top_n)
    if config.data_type is ColumnType.NUMBER:
        return aggregate_numbers(rows, config.column, limits.number_points)
    if config.data_type is ColumnType.DATE:
        return aggregate_dates(rows, config.column, limits.date_points)
    return []
