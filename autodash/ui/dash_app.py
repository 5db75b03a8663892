from __future__ import annotations

import logging
from pathlib import Path

import dash_bootstrap_components as dbc
from dash import Dash

from .config import AppConfig
from autodash.config.loader import load_app_settings
from autodash.core.view_registry import ViewRegistry
from autodash.importing.demo_templates import list_templates
from autodash.services.auth_service import AuthService
from autodash.services.session_service import SessionRegistry
from autodash.services.storage import InMemoryStorage, LocalFileSystemStorage, StorageBackend
from autodash.ui.layout.build_layout import build_layout
from autodash.ui.callbacks.callbacks_auth import register_auth_callbacks
from autodash.ui.callbacks.callbacks_filters import register_filter_callbacks
from autodash.ui.callbacks.callbacks_render import register_render_callbacks
from autodash.ui.callbacks.callbacks_upload import register_upload_callbacks

logger = logging.getLogger(__name__)


def _build_view_registry() -> ViewRegistry:
    from autodash.views import AreaChartView, BarChartView, LineChartView, PieChartView

    registry = ViewRegistry()
    registry.register(BarChartView)
    registry.register(PieChartView)
    registry.register(LineChartView)
    registry.register(AreaChartView)
    return registry


def create_dash_app(config_root: Path | str = Path("config")) -> Dash:
    config_root = Path(config_root)

    # 1) Load Config
    settings = load_app_settings(config_root)

    # 2) Services
    # Without a storage_dir, accounts only live as long as the process
    storage: StorageBackend
    if settings.storage_dir is not None:
        storage = LocalFileSystemStorage(settings.storage_dir)
    else:
        storage = InMemoryStorage()

    # 3) App Context
    ctx = AppConfig(
        config_root=config_root,
        settings=settings,
        sessions=SessionRegistry(settings),
        templates=list_templates(),
        registry=_build_view_registry(),
        auth_service=AuthService(storage),
    )
    ctx.validate()

    app = Dash(
        __name__,
        external_stylesheets=[dbc.themes.FLATLY],
        suppress_callback_exceptions=True,
    )
    app.title = settings.ui_title
    app.layout = build_layout(ctx)

    # Register callbacks
    register_upload_callbacks(app, ctx)
    register_filter_callbacks(app, ctx)
    register_render_callbacks(app, ctx)
    register_auth_callbacks(app, ctx)

    logger.info(
        "Dash app created",
        extra={
            "config_root": str(config_root),
            "templates": len(ctx.templates),
            "persistent_accounts": settings.storage_dir is not None,
        },
    )
    return app
