from .bar_chart_view import BarChartView
from .pie_chart_view import PieChartView
from .line_chart_view import LineChartView
from .area_chart_view import AreaChartView

__all__ = ["BarChartView", "PieChartView", "LineChartView", "AreaChartView"]
