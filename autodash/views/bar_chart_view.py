from __future__ import annotations

from typing import Any, Dict, List

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from autodash.core.base_view import CHART_COLORS, BaseView
from autodash.core.charts import ChartKind


class BarChartView(BaseView):
    """
    Category distribution: one bar per value, most frequent first.
    """

    kind = ChartKind.BAR
    label = "Bar chart"

    def render_figure(self, data: List[Dict[str, Any]]) -> go.Figure:
        if not data:
            return self.empty_figure("No rows after filtering - adjust filters")

        df = pd.DataFrame(data)
        fig = px.bar(
            df,
            x="name",
            y="count",
            color="name",
            color_discrete_sequence=CHART_COLORS,
        )
        fig.update_layout(xaxis_title=None, yaxis_title="Count")
        return self.style_figure(fig)
