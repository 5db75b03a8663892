from __future__ import annotations

from typing import Dict, List, Optional, Type

from autodash.config.model import ChartLimits
from autodash.core.base_view import BaseView
from autodash.core.charts import ChartConfig, ChartKind


class ViewRegistry:
    """
    Registry for chart view classes so the dashboard can build its chart grid from chart configs

    Purpose:
    - Decouples the Dash layer from concrete chart implementations by exposing {@link create(config)}
    - Each ChartConfig names a ChartKind; the registry maps that kind to the view class drawing it

    Design Notes:
    - Stores the subclasses of {@link BaseView}, not instances; views are cheap and built per render
    - Enforces variants:
        * only {@link BaseView} subclasses can be registered
        * each view 'kind' is unique across the registry
    """

    def __init__(self):
        self._views: Dict[ChartKind, Type[BaseView]] = {}

    def register(self, view_cls: Type[BaseView]) -> None:
        """
        Register a {@link BaseView} with the registry

        :param view_cls: the subclass of {@link BaseView}

        Raises:
            TypeError: if view_cls is not a subclass of {@link BaseView}
            ValueError: if a view for the same 'kind' already exists
        """
        if not isinstance(view_cls, type) or not issubclass(view_cls, BaseView):
            raise TypeError(f"View '{view_cls!r}' must be a subclass of BaseView")

        if view_cls.kind in self._views:
            raise ValueError(f"View for '{view_cls.kind.value}' already registered")

        self._views[view_cls.kind] = view_cls

    def create(
        self,
        config: ChartConfig,
        limits: Optional[ChartLimits] = None,
        index: int = 0,
    ) -> BaseView:
        """
        Instantiate the view drawing `config.kind`
        :param config: the chart config
        :param limits: aggregation bounds
        :param index: position in the chart grid, picks the colour
        :return: the instantiated view

        Raises:
            KeyError: if no view for the config's kind exists in the registry
        """
        try:
            cls = self._views[config.kind]
        except KeyError:
            raise KeyError(f"No view registered for chart kind '{config.kind.value}'")
        return cls(config, limits=limits, index=index)

    def all_classes(self) -> List[Type[BaseView]]:
        return list(self._views.values())
