"""Logging setup for the travel guide.

Adapters log through ``logging.getLogger(__name__)`` and pass structured
fields with ``extra={...}``. This module installs one root handler,
either plain text or one JSON object per line.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, Dict, Optional

from .config import ObservabilityConfig, get_config

# Attributes every LogRecord has; anything else came from ``extra``
_RECORD_ATTRS = set(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime"}

_HANDLER_NAME = "travel_guide"


class JsonFormatter(logging.Formatter):
    """Render a record and its ``extra`` fields as a JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRS and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logging(config: Optional[ObservabilityConfig] = None) -> logging.Logger:
    """Configure the root logger once.

    Args:
        config: Logging settings; defaults to the application config.

    Returns:
        The configured root logger.
    """
    config = config or get_config().observability
    root = logging.getLogger()
    root.setLevel(config.level.upper())

    for handler in root.handlers:
        if handler.get_name() == _HANDLER_NAME:
            return root

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    if config.structured:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(config.format))
    root.addHandler(handler)

    return root
