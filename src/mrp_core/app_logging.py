"""
# path: src/mrp_core/app_logging.py

Shared JSON logger for the planning services.

Not named logging.py so it never shadows the stdlib module.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from mrp_core.config import LOG_LEVEL


class JsonFormatter(logging.Formatter):
    """Renders a LogRecord as one JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "time": datetime.now(timezone.utc).isoformat(timespec="seconds"),
            "level": record.levelname,
            "logger": record.name,
            "func": record.funcName,
            "message": record.getMessage(),
        }

        extra: Optional[Dict[str, Any]] = getattr(record, "extra", None)
        if isinstance(extra, dict) and extra:
            payload.update(extra)

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


class JsonLoggerAdapter(logging.LoggerAdapter):
    """Moves user `extra` under record.extra so it cannot clash with LogRecord attributes."""

    def process(self, msg: str, kwargs: Dict[str, Any]):
        user_extra = kwargs.pop("extra", None)
        kwargs["extra"] = {"extra": user_extra} if user_extra else {}
        return msg, kwargs


def get_logger(name: str) -> JsonLoggerAdapter:
    """Returns a configured stdout JSON logger (idempotent)."""
    logger = logging.getLogger(name)

    if logger.handlers:
        return JsonLoggerAdapter(logger, {})

    level = getattr(logging, LOG_LEVEL, logging.INFO)
    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(JsonFormatter())

    logger.addHandler(handler)
    return JsonLoggerAdapter(logger, {})
