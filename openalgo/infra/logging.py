"""Logging configuration helpers."""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional, TextIO


class JsonFormatter(logging.Formatter):
    """Emit one JSON object per record, merging ``extra=`` fields in."""

    _standard_attrs = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 - logging interface name
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            payload["stack_info"] = record.stack_info

        extras = {key: value for key, value in record.__dict__.items() if key not in self._standard_attrs}
        payload.update(extras)
        return json.dumps(payload, default=str)


def configure_logging(default_level: str = "INFO", stream: Optional[TextIO] = None) -> None:
    """Configure the root logger using the ``LOG_LEVEL`` environment override.

    The ``websockets`` library logger is held at ``WS_LOG_LEVEL``, WARNING
    unless set, independently of the client's own level.
    """

    level = _level_from_env("LOG_LEVEL", default_level)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    handler = logging.StreamHandler(stream=stream or sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(JsonFormatter())
    root.addHandler(handler)

    logging.getLogger("websockets").setLevel(_level_from_env("WS_LOG_LEVEL", "WARNING"))


def _level_from_env(env_key: str, default: str) -> int:
    level_name = os.getenv(env_key, default)
    return getattr(logging, level_name.upper(), logging.INFO)
