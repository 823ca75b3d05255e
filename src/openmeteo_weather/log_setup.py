"""JSON console logging for the weather CLI and request policy."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any

from .redaction import sanitize_for_logging, sanitize_text

# LogRecord attributes copied into the event when a caller passes them via `extra`.
CONTEXT_FIELDS = ("mode", "request_token", "error_code", "state")


class JsonConsoleFormatter(logging.Formatter):
    """One JSON object per line, with request context and secrets redacted."""

    def format(self, record: logging.LogRecord) -> str:
        event: dict[str, Any] = {
            "ts": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": sanitize_text(record.getMessage()),
        }
        context = {
            field: getattr(record, field)
            for field in CONTEXT_FIELDS
            if hasattr(record, field)
        }
        if context:
            event["context"] = sanitize_for_logging(context)
        if record.exc_info:
            event["exception"] = sanitize_text(self.formatException(record.exc_info))
        return json.dumps(event, default=str)


def setup_logger(
    name: str = "openmeteo_weather", level: int | str = logging.INFO
) -> logging.Logger:
    """Create the package logger once; later calls only adjust the level."""
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(JsonConsoleFormatter())
    logger.addHandler(handler)
    return logger
