"""
holidaycore Logging Setup

The library only creates module loggers under the "holidaycore" namespace;
handlers are installed by the application (or the CLI) via configure_logging.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Optional

from .config import LOG_FORMATS, LOG_LEVELS, get_settings

ROOT_LOGGER = "holidaycore"

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # Add extra fields if present
        if hasattr(record, "holiday"):
            log_entry["holiday"] = record.holiday
        if hasattr(record, "year"):
            log_entry["year"] = record.year
        if hasattr(record, "pack_id"):
            log_entry["pack_id"] = record.pack_id
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, ensure_ascii=False)


def configure_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> logging.Logger:
    """
    Install a stream handler on the holidaycore logger.

    Calling it again replaces the previous handler instead of stacking.

    Args:
        level: Level name, defaults to settings.log_level
        fmt: "text" or "json", defaults to settings.log_format

    Returns:
        The configured "holidaycore" logger

    Raises:
        ValueError: If the level or format is not recognised
    """
    settings = get_settings()
    level = (level or settings.log_level).upper()
    fmt = (fmt or settings.log_format).lower()
    if level not in LOG_LEVELS:
        raise ValueError(f"Log level must be one of {LOG_LEVELS}, got {level!r}")
    if fmt not in LOG_FORMATS:
        raise ValueError(f"Log format must be one of {LOG_FORMATS}, got {fmt!r}")

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, level))

    for existing in list(logger.handlers):
        if getattr(existing, "_holidaycore_handler", False):
            logger.removeHandler(existing)

    handler = logging.StreamHandler()
    handler._holidaycore_handler = True  # type: ignore[attr-defined]
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    logger.addHandler(handler)
    return logger
