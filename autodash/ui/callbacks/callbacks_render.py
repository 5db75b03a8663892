from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

import dash
import dash_bootstrap_components as dbc
import plotly.graph_objs as go
from dash import Input, Output, State, dcc, html
from dash.exceptions import PreventUpdate

from autodash.core.charts import ChartConfig
from autodash.core.filtering import filter_rows
from autodash.services.session_service import DashboardSummary
from autodash.ui.helpers import filter_state_from_store, format_number, get_session
from autodash.ui.ids import IDs, chart_graph_id

if TYPE_CHECKING:
    from autodash.ui.config import AppConfig

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Helper: Empty/Error Figures
# -----------------------------------------------------------------------------
def _message_figure(title: str, details: Optional[str] = None) -> go.Figure:
    fig = go.Figure()
    text = title if details is None else f"{title}<br><br>{details}"
    fig.add_annotation(
        text=text,
        showarrow=False,
        xref="paper",
        yref="paper",
        x=0.5,
        y=0.5,
    )
    fig.update_xaxes(visible=False)
    fig.update_yaxes(visible=False)
    fig.update_layout(height=280, margin=dict(l=20, r=20, t=20, b=20))
    return fig


def _error_figure(details: str) -> go.Figure:
    return _message_figure("Something went wrong while rendering this chart.", details)


def _stat(label: str, value: int) -> dbc.Col:
    return dbc.Col(
        dbc.Card(
            dbc.CardBody(
                [
                    html.Div(format_number(value), className="fs-4 fw-bold"),
                    html.Small(label, className="text-muted"),
                ]
            ),
            className="shadow-sm",
        ),
        md=4,
    )


def build_stats_bar(summary: DashboardSummary) -> dbc.Row:
    return dbc.Row(
        [
            _stat("Rows after filtering", summary.n_rows),
            _stat("Columns", summary.n_columns),
            _stat("Charts generated", summary.n_charts),
        ],
        className="g-3",
    )


def build_chart_card(config: ChartConfig, figure: go.Figure) -> dbc.Col:
    return dbc.Col(
        dbc.Card(
            [
                dbc.CardHeader(
                    [
                        html.Div(config.title, className="fw-semibold"),
                        html.Small(config.subtitle, className="text-muted"),
                    ]
                ),
                dbc.CardBody(
                    dcc.Graph(
                        id=chart_graph_id(config.key),
                        figure=figure,
                        config={"displayModeBar": False},
                    )
                ),
            ],
            className="shadow-sm h-100",
        ),
        lg=6,
        className="mb-3",
    )


def _welcome() -> html.Div:
    return html.Div(
        [
            html.H4("No data loaded"),
            html.P(
                "Upload a CSV or Excel file, or pick one of the demo templates, "
                "and a dashboard is generated from its columns.",
                className="text-muted",
            ),
        ],
        className="text-center p-5 border rounded bg-light",
    )


def register_render_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # Dashboard: (dataset, FilterState) -> stats + chart cards
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.CHART_GRID, "children"),
        Output(IDs.Control.STATS_BAR, "children"),
        Input(IDs.Store.FILTER_STATE, "data"),
        Input(IDs.Store.DATA_VERSION, "data"),
        Input(IDs.Store.SESSION_ID, "data"),
    )
    def render_dashboard(fs_data, _version, session_id):
        session = get_session(ctx, session_id)
        dataset = session.dataset
        if dataset is None:
            return _welcome(), []

        # A new dataset resets the session filters before the store catches up
        state = session.filters
        if dash.ctx.triggered_id == IDs.Store.FILTER_STATE:
            state = filter_state_from_store(fs_data, fallback=state)

        rows = filter_rows(dataset.rows, state, dataset.schema)
        configs = session.chart_configs()
        limits = ctx.settings.charts

        cards: List[dbc.Col] = []
        for index, config in enumerate(configs):
            try:
                view = ctx.registry.create(config, limits, index=index)
                figure = view.render_figure(view.compute_data(rows))
            except Exception as e:
                logger.exception(
                    "Chart rendering failed",
                    extra={"column": config.column, "chart_kind": config.kind.value},
                )
                figure = _error_figure(str(e))
            cards.append(build_chart_card(config, figure))

        summary = DashboardSummary(n_rows=len(rows), n_columns=dataset.n_columns, n_charts=len(configs))
        logger.debug(
            "Dashboard rendered",
            extra={"dataset": dataset.name, "rows": summary.n_rows, "charts": summary.n_charts},
        )

        if not cards:
            grid = html.P("No charts could be generated for this dataset.", className="text-muted")
        else:
            grid = dbc.Row(cards)
        return grid, build_stats_bar(summary)

    # ---------------------------------------------------------
    # Download filtered rows
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.DOWNLOAD_DATA, "data"),
        Input(IDs.Control.DOWNLOAD_DATA_BTN, "n_clicks"),
        State(IDs.Store.SESSION_ID, "data"),
        prevent_initial_call=True,
    )
    def download_filtered_rows(n_clicks, session_id):
        if not n_clicks:
            raise PreventUpdate

        session = get_session(ctx, session_id)
        dataset = session.dataset
        if dataset is None:
            raise PreventUpdate

        data = dataset.to_frame(session.filtered_rows())
        stem = (session.file_name or dataset.name).rsplit(".", 1)[0]
        return dcc.send_data_frame(data.to_csv, f"{stem}_filtered.csv", index=False)
