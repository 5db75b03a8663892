from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

from autodash.ui.ids import IDs


def build_chart_panel() -> html.Div:
    return html.Div(
        [
            html.Div(id=IDs.Control.STATS_BAR),
            dcc.Loading(
                id="chart-grid-loading",
                type="default",
                children=html.Div(id=IDs.Control.CHART_GRID, className="mt-3"),
            ),
            html.Div(
                [
                    dbc.Button(
                        "Download filtered rows (CSV)",
                        id=IDs.Control.DOWNLOAD_DATA_BTN,
                        color="secondary",
                        size="sm",
                        className="mt-2 ms-auto",
                    ),
                    dcc.Download(id=IDs.Control.DOWNLOAD_DATA),
                ],
                className="d-flex justify-content-end align-items-center",
            ),
        ]
    )
