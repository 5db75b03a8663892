from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from autodash.core.exceptions import ConfigError


@dataclass(frozen=True)
class InferenceSettings:
    """
    Knobs for schema inference.

    - sample_size: number of leading rows looked at per column
    - threshold: share of sampled values that must be date-like / number-like
      (strictly greater than) for the column to get that type
    """
    sample_size: int = 100
    threshold: float = 0.7

    def validate(self) -> None:
        if int(self.sample_size) < 1:
            raise ConfigError(f"inference.sample_size must be >= 1, got {self.sample_size}")
        if not 0 < float(self.threshold) <= 1:
            raise ConfigError(f"inference.threshold must be in (0, 1], got {self.threshold}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> InferenceSettings:
        defaults = cls()
        settings = cls(
            sample_size=int(data.get("sample_size", defaults.sample_size)),
            threshold=float(data.get("threshold", defaults.threshold)),
        )
        settings.validate()
        return settings


@dataclass(frozen=True)
class ChartLimits:
    """
    Bounds on generated charts and filter controls.
    """
    max_charts: int = 8
    category_top_n: int = 10
    number_points: int = 50
    date_points: int = 30
    max_filter_values: int = 50

    def validate(self) -> None:
        for name in ("max_charts", "category_top_n", "number_points", "date_points", "max_filter_values"):
            value = getattr(self, name)
            if int(value) < 1:
                raise ConfigError(f"charts.{name} must be >= 1, got {value}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ChartLimits:
        defaults = cls()
        limits = cls(
            max_charts=int(data.get("max_charts", defaults.max_charts)),
            category_top_n=int(data.get("category_top_n", defaults.category_top_n)),
            number_points=int(data.get("number_points", defaults.number_points)),
            date_points=int(data.get("date_points", defaults.date_points)),
            max_filter_values=int(data.get("max_filter_values", defaults.max_filter_values)),
        )
        limits.validate()
        return limits


@dataclass
class AppSettings:
    ui_title: str = "Auto Dashboard"
    subtitle: str = "Upload a table, get a dashboard"
    max_upload_bytes: int = 50_000_000
    storage_dir: Optional[Path] = None
    inference: InferenceSettings = field(default_factory=InferenceSettings)
    charts: ChartLimits = field(default_factory=ChartLimits)
