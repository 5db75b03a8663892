from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, List, Optional, Sequence

import dash_bootstrap_components as dbc
from dash import dcc, html
from dash.exceptions import PreventUpdate

from autodash.core.filter_state import FilterState, NumericRange
from autodash.core.statistics import FilterOptions
from autodash.ui.ids import category_filter_id, numeric_filter_id

if TYPE_CHECKING:
    from autodash.services.session_service import DataSession
    from autodash.ui.config import AppConfig

logger = logging.getLogger(__name__)

ALL_VALUES = "__all__"


def get_session(ctx: AppConfig, session_id: Optional[str]) -> DataSession:
    """Session for the browser tab; callbacks fired before the id exists are skipped."""
    if not session_id:
        raise PreventUpdate
    return ctx.sessions[session_id]


def format_number(value: float) -> str:
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.2f}"


def error_alert(title: str, message: str) -> dbc.Alert:
    return dbc.Alert(
        [html.Strong(title), html.Div(message)],
        color="danger",
        dismissable=True,
        className="mt-3",
    )


def success_alert(title: str, message: str) -> dbc.Alert:
    return dbc.Alert(
        [html.Strong(title), html.Div(message)],
        color="success",
        dismissable=True,
        duration=5000,
        className="mt-3",
    )


def _filter_label(column: str) -> html.Label:
    return html.Label(column, className="form-label fw-semibold mt-2")


def build_filter_controls(options: FilterOptions, state: FilterState) -> List:
    """
    One control per filterable column:
    - category columns: single-select dropdown ("All values" = no restriction)
    - number columns: range slider over the column's min/max
    """
    children: List = []

    for column, values in options.categories.items():
        selected = state.categories.get(column) or []
        children.append(
            html.Div(
                [
                    _filter_label(column),
                    dcc.Dropdown(
                        id=category_filter_id(column),
                        options=[{"label": "All values", "value": ALL_VALUES}]
                        + [{"label": v, "value": v} for v in values],
                        value=selected[0] if selected else ALL_VALUES,
                        clearable=False,
                        className="mb-2",
                    ),
                ]
            )
        )

    for column, bounds in options.numeric.items():
        current = state.numeric_ranges.get(column)
        value = [current.min, current.max] if current else [bounds.min, bounds.max]
        children.append(
            html.Div(
                [
                    _filter_label(column),
                    dcc.RangeSlider(
                        id=numeric_filter_id(column),
                        min=bounds.min,
                        max=bounds.max,
                        step=(bounds.max - bounds.min) / 100,
                        value=value,
                        marks={
                            bounds.min: format_number(bounds.min),
                            bounds.max: format_number(bounds.max),
                        },
                        tooltip={"placement": "bottom"},
                    ),
                ],
                className="mb-2",
            )
        )

    if not options.categories and not options.numeric and not options.has_date_filter:
        children.insert(0, html.P("No filterable columns in this dataset.", className="text-muted"))

    return children


def _parse_picker_date(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    return datetime.fromisoformat(str(value)[:10])


def filter_state_from_controls(
    options: FilterOptions,
    category_ids: Sequence[dict],
    category_values: Sequence[Optional[str]],
    numeric_ids: Sequence[dict],
    numeric_values: Sequence[Optional[Sequence[float]]],
    start_date: Optional[str],
    end_date: Optional[str],
) -> FilterState:
    """
    Translate the sidebar controls into a FilterState.

    - "All values" clears a category restriction
    - a slider left at the column's full extent is not a restriction
    - the picker's end day is inclusive (the window ends at 23:59:59.999999)
    """
    state = FilterState()

    for cid, value in zip(category_ids, category_values):
        column = cid["column"]
        if value and value != ALL_VALUES:
            state = state.with_category(column, [value])

    for nid, value in zip(numeric_ids, numeric_values):
        column = nid["column"]
        bounds = options.numeric.get(column)
        if not value or len(value) != 2 or bounds is None:
            continue
        lo, hi = float(value[0]), float(value[1])
        if lo <= bounds.min and hi >= bounds.max:
            continue
        state = state.with_numeric_range(column, NumericRange(min=lo, max=hi))

    start = _parse_picker_date(start_date)
    end = _parse_picker_date(end_date)
    if end is not None:
        end = end + timedelta(days=1) - timedelta(microseconds=1)
    return state.with_date_range(start, end)


def filter_state_from_store(data: Optional[dict], fallback: FilterState) -> FilterState:
    """FilterState kept in the browser store; `fallback` when it cannot be read."""
    try:
        return FilterState.from_dict(data)
    except (AttributeError, KeyError, TypeError, ValueError):
        logger.warning("Ignoring malformed filter state", exc_info=True)
        return fallback
