"""
Dash web UI for the dashboard.

create_dash_app() wires settings, per-session state and the chart views
into a single Dash application.
"""

from .dash_app import create_dash_app

__all__ = ["create_dash_app"]
