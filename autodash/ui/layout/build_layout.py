from __future__ import annotations

from typing import TYPE_CHECKING

import dash_bootstrap_components as dbc
from dash import dcc

from autodash.ui.ids import IDs
from autodash.ui.layout.build_chart_panel import build_chart_panel
from autodash.ui.layout.build_filter_panel import build_filter_panel
from autodash.ui.layout.build_navbar import build_auth_modal, build_navbar
from autodash.ui.layout.build_upload_panel import build_upload_panel

if TYPE_CHECKING:
    from autodash.ui.config import AppConfig


def build_layout(ctx: AppConfig) -> dbc.Container:
    return dbc.Container(
        fluid=True,
        className="adb-root",
        children=[
            build_navbar(ctx.settings),
            build_auth_modal(),

            # App-level stores
            dcc.Store(id=IDs.Store.SESSION_ID, storage_type="session"),
            dcc.Store(id=IDs.Store.DATA_VERSION, data=0),
            dcc.Store(id=IDs.Store.FILTER_STATE),

            build_upload_panel(ctx.templates),
            dbc.Row(
                [
                    dbc.Col(build_filter_panel(), md=3, className="mt-3"),
                    dbc.Col(build_chart_panel(), md=9, className="mt-3"),
                ],
                className="gx-3",
            ),
        ],
    )
