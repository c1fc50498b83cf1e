"""Logging setup driven by LoggingSettings."""

import json
import logging
from datetime import datetime, timezone
from typing import Optional

from .config import LoggingSettings, get_settings

PACKAGE_LOGGER = "promptcomposer"
TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """Formats records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def configure_logging(settings: Optional[LoggingSettings] = None) -> logging.Logger:
    """
    Configure the package logger.

    Safe to call more than once; the handler installed by a previous call
    is replaced.

    Args:
        settings: Logging settings (defaults to the global settings)

    Returns:
        The configured package logger
    """
    settings = settings or get_settings().logging

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(settings.level.upper())

    for handler in list(logger.handlers):
        if getattr(handler, "_promptcomposer", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler()
    if settings.format.lower() == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    handler._promptcomposer = True
    logger.addHandler(handler)

    return logger
