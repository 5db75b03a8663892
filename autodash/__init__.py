"""
Top-level package for the auto dashboard.

This package exposes the core architecture (domain, views, UI adapters).
Most code should import from submodules such as:
    autodash.core
    autodash.views
    autodash.ui
"""

__all__: list[str] = []
