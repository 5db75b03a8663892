from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional, Sequence

import plotly.graph_objs as go

from autodash.config.model import ChartLimits
from autodash.core.charts import ChartConfig, ChartKind, aggregate

CHART_COLORS = [
    "hsl(187, 85%, 53%)",  # cyan
    "hsl(262, 83%, 58%)",  # violet
    "hsl(330, 80%, 60%)",  # rose
    "hsl(38, 92%, 50%)",   # amber
    "hsl(160, 84%, 39%)",  # emerald
]


class BaseView(ABC):
    """
    Abstract base class for all chart views.

    Defines the contract that every chart in the dashboard must follow
    - expose a 'kind' - the ChartKind this view draws, used as registry key
    - expose a 'label' - used for UI/human-readable applications
    - 'compute_data' - the bounded aggregation for the view's column over the filtered rows
    - implement 'render_figure' - used to render the figure using Plotly
    """

    kind: ChartKind = None
    label: str = None

    def __init__(self, config: ChartConfig, limits: Optional[ChartLimits] = None, index: int = 0):
        self.config = config
        self.limits = limits or ChartLimits()
        self.index = index

    def compute_data(self, rows: Sequence[Mapping[str, Any]]) -> List[Dict[str, Any]]:
        """
        Compute the chart series for the given (already filtered) rows
        :param rows: rows surviving the current FilterState
        :return: data: a list of points, at most a few dozen long
        """
        return aggregate(self.config, rows, self.limits)

    @abstractmethod
    def render_figure(self, data: List[Dict[str, Any]]) -> go.Figure:
        """
        Render the figure given the computed data
        :param data: the data provided by {@link compute_data()}
        :return: the Plotly figure for this chart
        """
        raise NotImplementedError()

    # ------------------------------------------------------------------
    # Common helpers for all views
    # ------------------------------------------------------------------
    @property
    def primary_color(self) -> str:
        return CHART_COLORS[self.index % len(CHART_COLORS)]

    def style_figure(self, fig: go.Figure) -> go.Figure:
        fig.update_layout(
            height=280,
            margin=dict(l=20, r=10, t=10, b=20),
            showlegend=False,
            plot_bgcolor="rgba(0,0,0,0)",
            paper_bgcolor="rgba(0,0,0,0)",
        )
        return fig

    @staticmethod
    def empty_figure(message: str) -> go.Figure:
        """
        Standardised 'no data' figure used by all views.
        """
        fig = go.Figure()
        fig.update_layout(
            title=message,
            xaxis={"visible": False},
            yaxis={"visible": False},
        )
        return fig
