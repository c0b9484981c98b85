# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Structured JSON logging for processes hosting the bridge.

The library itself only emits records through logging.getLogger(__name__);
host processes call configure_logging() once at startup.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import IO

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


class JSONFormatter(logging.Formatter):
    """Formatter that outputs one JSON object per log record."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON-formatted log string
        """
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc)
            .isoformat()
            .replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Add extra fields if present
        if hasattr(record, "extra") and record.extra:
            log_entry["extra"] = record.extra

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def configure_logging(
    level: str | None = None,
    name: str = "goqueue_bridge",
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Attach a JSON stdout handler to the named logger.

    Calling it again replaces the handler installed by the previous call.

    Args:
        level: DEBUG, INFO, WARNING or ERROR. Defaults to LOG_LEVEL env or "INFO".
        name: Logger to configure (the package logger by default)
        stream: Output stream (defaults to sys.stdout)

    Returns:
        The configured logger

    Raises:
        ValueError: If level is not recognized
    """
    level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    if level not in _LEVELS:
        raise ValueError(f"Invalid log level: {level}. Must be one of {list(_LEVELS.keys())}")

    target = logging.getLogger(name)
    for handler in list(target.handlers):
        if getattr(handler, "_goqueue_json", False):
            target.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JSONFormatter())
    handler._goqueue_json = True  # type: ignore[attr-defined]

    target.addHandler(handler)
    target.setLevel(_LEVELS[level])
    target.propagate = False
    return target
