from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import dash
from dash import ALL, Input, Output, State, html

from autodash.core.filter_state import FilterState
from autodash.ui.helpers import build_filter_controls, filter_state_from_controls, get_session
from autodash.ui.ids import IDs

if TYPE_CHECKING:
    from autodash.ui.config import AppConfig

logger = logging.getLogger(__name__)

HIDDEN = {"display": "none"}
VISIBLE: dict = {}


def register_filter_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # Rebuild the sidebar whenever the dataset changes (or on reset)
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.FILTER_CONTROLS, "children"),
        Output(IDs.Control.DATE_RANGE_CONTAINER, "style"),
        Output(IDs.Control.DATE_COLUMNS_LABEL, "children"),
        Output(IDs.Control.DATE_RANGE, "start_date"),
        Output(IDs.Control.DATE_RANGE, "end_date"),
        Input(IDs.Store.SESSION_ID, "data"),
        Input(IDs.Store.DATA_VERSION, "data"),
        Input(IDs.Control.RESET_FILTERS_BTN, "n_clicks"),
    )
    def rebuild_filter_controls(session_id, _version, _reset_clicks):
        session = get_session(ctx, session_id)

        if dash.ctx.triggered_id == IDs.Control.RESET_FILTERS_BTN:
            session.reset_filters()
            logger.info("Filters reset", extra={"session_id": session_id})

        if session.dataset is None:
            placeholder = html.P("Load a dataset to see filters.", className="text-muted")
            return [placeholder], HIDDEN, "", None, None

        options = session.filter_options()
        state = session.filters
        date_label = ""
        if options.has_date_filter:
            date_label = "Applies to: " + ", ".join(options.date_columns)

        return (
            build_filter_controls(options, state),
            VISIBLE if options.has_date_filter else HIDDEN,
            date_label,
            state.date_range.start.date().isoformat() if state.date_range.start else None,
            state.date_range.end.date().isoformat() if state.date_range.end else None,
        )

    # ---------------------------------------------------------
    # Controls -> FilterState
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.FILTER_STATE, "data"),
        Output(IDs.Control.ACTIVE_FILTERS_BADGE, "children"),
        Input({"type": IDs.Pattern.CATEGORY_FILTER, "column": ALL}, "value"),
        Input({"type": IDs.Pattern.NUMERIC_FILTER, "column": ALL}, "value"),
        Input(IDs.Control.DATE_RANGE, "start_date"),
        Input(IDs.Control.DATE_RANGE, "end_date"),
        State({"type": IDs.Pattern.CATEGORY_FILTER, "column": ALL}, "id"),
        State({"type": IDs.Pattern.NUMERIC_FILTER, "column": ALL}, "id"),
        State(IDs.Store.SESSION_ID, "data"),
    )
    def apply_filters(
        category_values,
        numeric_values,
        start_date,
        end_date,
        category_ids,
        numeric_ids,
        session_id,
    ):
        session = get_session(ctx, session_id)
        if session.dataset is None:
            return FilterState().to_dict(), ""

        state = filter_state_from_controls(
            session.filter_options(),
            category_ids or [],
            category_values or [],
            numeric_ids or [],
            numeric_values or [],
            start_date,
            end_date,
        )
        state = session.set_filters(state)

        active = state.active_count()
        logger.debug(
            "Filters applied",
            extra={"session_id": session_id, "active_filters": active},
        )
        return state.to_dict(), f"{active} active" if active else ""
