from __future__ import annotations

from typing import Any, Dict, List

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from autodash.core.base_view import CHART_COLORS, BaseView
from autodash.core.charts import ChartKind


class PieChartView(BaseView):
    """
    Category breakdown as a donut chart.
    """

    kind = ChartKind.PIE
    label = "Pie chart"

    def render_figure(self, data: List[Dict[str, Any]]) -> go.Figure:
        if not data:
            return self.empty_figure("No rows after filtering - adjust filters")

        df = pd.DataFrame(data)
        fig = px.pie(
            df,
            names="name",
            values="count",
            hole=0.45,
            color_discrete_sequence=CHART_COLORS,
        )
        fig.update_traces(textinfo="label+percent")
        return self.style_figure(fig)
