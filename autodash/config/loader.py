from __future__ import annotations

import json
import logging
from pathlib import Path

from autodash.config.model import AppSettings, ChartLimits, InferenceSettings
from autodash.core.exceptions import ConfigError

logger = logging.getLogger(__name__)


def load_app_settings(root: Path) -> AppSettings:
    """
    Load application settings from `root/global.json`.

    Expected structure (every key optional):

        {
            "ui_title": "Auto Dashboard",
            "subtitle": "...",
            "max_upload_bytes": 50000000,
            "storage_dir": "storage",
            "inference": {"sample_size": 100, "threshold": 0.7},
            "charts": {"max_charts": 8, "category_top_n": 10, ...}
        }

    A missing file gives the defaults. Relative `storage_dir` paths are resolved
    against the config root.

    :param root: directory containing 'global.json'
    :return: an AppSettings instance
    :raises ConfigError: if the file is not valid JSON or holds invalid values
    """
    root = Path(root)
    global_path = root / "global.json"

    logger.info("Loading app settings", extra={"config_root": str(root)})

    if not global_path.is_file():
        logger.warning(
            "No global.json found; using default settings",
            extra={"path": str(global_path)},
        )
        return AppSettings()

    try:
        with global_path.open() as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {global_path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"{global_path} must contain a JSON object")

    try:
        inference = InferenceSettings.from_dict(raw.get("inference") or {})
        charts = ChartLimits.from_dict(raw.get("charts") or {})
        max_upload_bytes = int(raw.get("max_upload_bytes", AppSettings.max_upload_bytes))
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid value in {global_path}: {e}") from e

    if max_upload_bytes < 1:
        raise ConfigError(f"max_upload_bytes must be >= 1, got {max_upload_bytes}")

    storage_raw = raw.get("storage_dir")
    if storage_raw is None:
        storage_dir = None
    else:
        storage_path = Path(storage_raw)
        storage_dir = storage_path if storage_path.is_absolute() else (root / storage_path).resolve()

    defaults = AppSettings()
    return AppSettings(
        ui_title=raw.get("ui_title", defaults.ui_title),
        subtitle=raw.get("subtitle", defaults.subtitle),
        max_upload_bytes=max_upload_bytes,
        storage_dir=storage_dir,
        inference=inference,
        charts=charts,
    )
