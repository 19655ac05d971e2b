"""Centralized logging configuration for the backend.

Call ``setup_logging()`` once at application startup (from ``main.py``).

Individual modules should obtain their own logger with::

    import logging
    LOG = logging.getLogger(__name__)
"""
from __future__ import annotations

import json
import logging
import os
import sys
from typing import Optional

TEXT_FORMAT = "%(asctime)s [%(levelname)-8s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


class JsonLineFormatter(logging.Formatter):
    """One JSON object per record, suited for log aggregation tools."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record, DATE_FORMAT),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def setup_logging(level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """Configure the root logger.

    • **LOG_FORMAT=json** (default): JSON lines.
    • **LOG_FORMAT=text**: human-friendly format for local development.

    The log level comes from ``level`` or the ``LOG_LEVEL`` env-var
    (default: INFO).
    """
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    resolved_level = getattr(logging, level_name, logging.INFO)

    fmt_name = (log_format or os.getenv("LOG_FORMAT", "json")).lower()
    if fmt_name == "json":
        formatter: logging.Formatter = JsonLineFormatter()
    else:
        formatter = logging.Formatter(TEXT_FORMAT, datefmt=DATE_FORMAT)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    # Remove any existing handlers to avoid duplicates on reload
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(resolved_level)

    # Quiet noisy third-party loggers
    for noisy in ("httpcore", "httpx", "urllib3", "google_genai", "uvicorn.access"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
