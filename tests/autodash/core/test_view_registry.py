from __future__ import annotations

import pytest

from autodash.config.model import ChartLimits
from autodash.core.charts import ChartConfig, ChartKind
from autodash.core.schema import ColumnType
from autodash.core.view_registry import ViewRegistry
from autodash.views import BarChartView, LineChartView


def test_register_and_create():
    registry = ViewRegistry()
    registry.register(BarChartView)

    config = ChartConfig("city", ChartKind.BAR, "city Distribution", ColumnType.CATEGORY)
    limits = ChartLimits(category_top_n=3)
    view = registry.create(config, limits, index=2)

    assert isinstance(view, BarChartView)
    assert view.config is config
    assert view.limits is limits
    assert view.index == 2
    assert registry.all_classes() == [BarChartView]


def test_register_rejects_non_views_and_duplicates():
    registry = ViewRegistry()
    with pytest.raises(TypeError):
        registry.register(object)

    registry.register(LineChartView)
    with pytest.raises(ValueError):
        registry.register(LineChartView)


def test_create_unknown_kind():
    registry = ViewRegistry()
    config = ChartConfig("d", ChartKind.AREA, "d Timeline", ColumnType.DATE)
    with pytest.raises(KeyError):
        registry.create(config)
