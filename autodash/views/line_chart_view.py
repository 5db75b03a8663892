from __future__ import annotations

from typing import Any, Dict, List

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from autodash.core.base_view import BaseView
from autodash.core.charts import ChartKind


class LineChartView(BaseView):
    """
    Numeric values in row order (first rows only).
    """

    kind = ChartKind.LINE
    label = "Line chart"

    def render_figure(self, data: List[Dict[str, Any]]) -> go.Figure:
        if not data:
            return self.empty_figure("No rows after filtering - adjust filters")

        df = pd.DataFrame(data)
        fig = px.line(df, x="index", y="value", markers=True)
        fig.update_traces(line=dict(color=self.primary_color, width=3))
        fig.update_layout(xaxis_title="Row", yaxis_title=self.config.column)
        return self.style_figure(fig)
