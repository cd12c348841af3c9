"""Structured JSON logging configuration.

All log output goes to stdout in JSON format, one object per line:
    {"ts": "2025-03-01T12:00:00+00:00", "level": "INFO", "logger": "codequality.services.analysis_service", "msg": "...", ...}

Records logged during an analysis carry an ``analysis_id`` extra so the
prompt, provider call and normalization of one request can be correlated.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone

_EXTRA_FIELDS = ("analysis_id", "feature", "provider")


class JSONFormatter(logging.Formatter):
    """Emit each log record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }

        # Correlation fields attached via extra={}
        for name in _EXTRA_FIELDS:
            if hasattr(record, name):
                payload[name] = getattr(record, name)

        if record.exc_info and record.exc_info[0] is not None:
            payload["exc"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


def setup_logging() -> None:
    """Configure root logger with JSON output to stdout.

    The log level is controlled by the ``LOG_LEVEL`` env var
    (default ``INFO``).
    """
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())

    root = logging.getLogger()
    root.setLevel(level)

    # Remove any pre-existing handlers (e.g. uvicorn defaults)
    root.handlers.clear()
    root.addHandler(handler)

    # SDK loggers echo request bodies at DEBUG, which would include the code under analysis
    for noisy in ("uvicorn.access", "httpcore", "httpx", "openai", "anthropic"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
