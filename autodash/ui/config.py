from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from autodash.config.model import AppSettings
from autodash.core.view_registry import ViewRegistry
from autodash.importing.demo_templates import DemoTemplate
from autodash.services.auth_service import AuthService
from autodash.services.session_service import SessionRegistry


@dataclass
class AppConfig:
    """
    Holds shared state for the Dash app: settings, per-user sessions, the chart view
    registry and services. Passed into layout + callback registration functions
    instead of using module-level globals.
    """
    config_root: Path
    settings: AppSettings
    sessions: SessionRegistry
    templates: List[DemoTemplate] = field(default_factory=list)

    registry: Optional[ViewRegistry] = None
    auth_service: Optional[AuthService] = None

    def validate(self) -> None:
        """Ensure all required services are attached before the app starts."""
        if self.registry is None:
            raise RuntimeError("AppConfig.registry must be initialized.")
        if self.auth_service is None:
            raise RuntimeError("AppConfig.auth_service must be initialized.")
