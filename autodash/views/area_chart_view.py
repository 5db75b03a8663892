from __future__ import annotations

from typing import Any, Dict, List

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from autodash.core.base_view import BaseView
from autodash.core.charts import ChartKind


class AreaChartView(BaseView):
    """
    Timeline of the earliest dates in the column; every row is a presence marker.
    """

    kind = ChartKind.AREA
    label = "Area chart"

    def render_figure(self, data: List[Dict[str, Any]]) -> go.Figure:
        if not data:
            return self.empty_figure("No rows after filtering - adjust filters")

        df = pd.DataFrame(data)
        # Repeated labels ("Jan 5" twice) must stay separate points
        df["position"] = range(len(df))
        fig = px.area(df, x="position", y="value")
        fig.update_traces(line=dict(color=self.primary_color, width=2))
        fig.update_xaxes(
            tickmode="array",
            tickvals=list(df["position"]),
            ticktext=list(df["date"]),
            title=None,
        )
        fig.update_layout(yaxis_title=None)
        return self.style_figure(fig)
