from __future__ import annotations

import logging
import os
from typing import Optional, Union

from pythonjsonlogger import jsonlogger

PLAIN_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

# Request logs from the dev server drown out our own messages
NOISY_LOGGERS = ("werkzeug", "urllib3")


def _resolve_level(level: Optional[Union[int, str]]) -> int:
    if level is None:
        level = os.getenv("AUTODASH_LOG_LEVEL", "INFO")
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(
        level: Optional[Union[int, str]] = None,
        force_format: Optional[str] = None,
) -> None:
    """
    Configure the root logger for the dashboard.

    Modes:
    - JSON (default): one object per line, `extra={...}` fields become keys
    - plain text (dev mode)

    Selection order for the format:
        1) force_format argument ("json" or "plain") if provided
        2) env var AUTODASH_LOG_FORMAT
        3) default = "json"

    The level comes from `level`, else AUTODASH_LOG_LEVEL, else INFO.
    """
    if force_format is not None:
        format_mode = force_format.lower()
    else:
        format_mode = os.getenv("AUTODASH_LOG_FORMAT", "json").lower()

    root = logging.getLogger()
    root.setLevel(_resolve_level(level))

    handler = logging.StreamHandler()
    if format_mode == "plain":
        formatter: logging.Formatter = logging.Formatter(PLAIN_FORMAT)
    else:
        formatter = jsonlogger.JsonFormatter(
            JSON_FORMAT,
            rename_fields={"asctime": "time", "levelname": "level", "name": "logger"},
        )
    handler.setFormatter(formatter)

    # Replace any existing handlers to avoid duplicate logs
    root.handlers.clear()
    root.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
