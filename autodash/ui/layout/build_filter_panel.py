from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

from autodash.ui.ids import IDs


def build_filter_panel() -> dbc.Card:
    """
    Sidebar shell. Category / numeric controls are filled in per dataset by the
    filter callbacks; the date range picker is static and hidden when the dataset
    has no date columns.
    """
    return dbc.Card(
        [
            dbc.CardHeader(
                html.Div(
                    [
                        html.Span("Filters", className="fw-semibold"),
                        dbc.Badge(
                            id=IDs.Control.ACTIVE_FILTERS_BADGE,
                            color="primary",
                            className="ms-auto",
                        ),
                    ],
                    className="d-flex align-items-center",
                )
            ),
            dbc.CardBody(
                [
                    html.Div(
                        html.P("Load a file or a demo template to filter it.", className="text-muted"),
                        id=IDs.Control.FILTER_CONTROLS,
                    ),
                    html.Div(
                        id=IDs.Control.DATE_RANGE_CONTAINER,
                        children=[
                            html.Label("Date range", className="form-label fw-semibold mt-2"),
                            html.Small(
                                id=IDs.Control.DATE_COLUMNS_LABEL,
                                className="text-muted d-block mb-1",
                            ),
                            dcc.DatePickerRange(
                                id=IDs.Control.DATE_RANGE,
                                clearable=True,
                            ),
                        ],
                        style={"display": "none"},
                        className="mb-2",
                    ),
                    dbc.Button(
                        "Reset all filters",
                        id=IDs.Control.RESET_FILTERS_BTN,
                        color="link",
                        size="sm",
                        className="mt-3 w-100",
                    ),
                ]
            ),
        ],
        id=IDs.Control.FILTER_PANEL,
        className="adb-sidebar",
    )
