"""Logging setup for the body parser: plain text or JSON records."""
from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

_LOGGING_FIELDS = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "taskName",
}


class StructuredFormatter(logging.Formatter):
    """Render log records as JSON for easier ingestion."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key in _LOGGING_FIELDS or key.startswith("_"):
                continue
            payload[key] = value

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            payload["stack"] = record.stack_info

        return json.dumps(payload, ensure_ascii=False, default=str)


def _resolve_level(level_name: str) -> int:
    level = logging.getLevelName(level_name.upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> None:
    """Configure logging on stderr, leaving stdout for parser output.

    ``level`` and ``fmt`` override ``BODYPARSER_LOG_LEVEL`` and
    ``BODYPARSER_LOG_FORMAT`` (``plain``, ``json`` or ``structured``).
    """

    level_name = level or os.getenv("BODYPARSER_LOG_LEVEL", "INFO")
    fmt = (fmt or os.getenv("BODYPARSER_LOG_FORMAT", "plain")).lower()
    structured = fmt in {"json", "structured"}

    handler = logging.StreamHandler(sys.stderr)
    if structured:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(_resolve_level(level_name))
    root_logger.handlers = [handler]


__all__ = ["configure_logging", "StructuredFormatter"]
