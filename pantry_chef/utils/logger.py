"""Logging for Pantry Chef.

One named logger ("pantry_chef") writing to stderr, so query.py can keep stdout
for rendered recipes. Configured via environment variables:
- LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: INFO)
- LOG_TYPE: text, json (default: text)

Each suggestion request logs with ``extra={"request_id": ..., "model": ...}``
and the final line adds ``recipe_count``. Both formatters surface those fields.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Optional, TextIO


EXTRA_FIELDS = ("request_id", "model", "recipe_count")


def _extras(record: logging.LogRecord) -> dict[str, Any]:
    return {field: getattr(record, field) for field in EXTRA_FIELDS if hasattr(record, field)}


class JSONFormatter(logging.Formatter):
    """One JSON object per line, suitable for log shipping."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(timespec="seconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_extras(record),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


class ConsoleFormatter(logging.Formatter):
    """Compact terminal line: ``HH:MM:SS LEVEL [request_id] message (model=..., recipes=N)``.

    Colors the level name when ``use_color`` is set.
    """

    LEVEL_COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
    }
    RESET = "\033[0m"

    def __init__(self, use_color: bool = True) -> None:
        super().__init__()
        self.use_color = use_color

    def _level(self, levelname: str) -> str:
        color = self.LEVEL_COLORS.get(levelname) if self.use_color else None
        padded = f"{levelname:<7}"
        return f"{color}{padded}{self.RESET}" if color else padded

    def format(self, record: logging.LogRecord) -> str:
        extras = _extras(record)
        request_id = extras.pop("request_id", None)

        parts = [self.formatTime(record, "%H:%M:%S"), self._level(record.levelname)]
        if request_id:
            parts.append(f"[{request_id}]")
        parts.append(record.getMessage())
        line = " ".join(parts)

        if extras:
            details = ", ".join(
                f"recipes={value}" if key == "recipe_count" else f"{key}={value}" for key, value in extras.items()
            )
            line += f" ({details})"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def get_logger(name: str, stream: Optional[TextIO] = None) -> logging.Logger:
    """Return the named logger, attaching a handler on first use.

    Args:
        name: Logger name.
        stream: Output stream (default: stderr).
    """
    logger_instance = logging.getLogger(name)
    if logger_instance.handlers:
        return logger_instance

    level = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)
    stream = stream or sys.stderr

    handler = logging.StreamHandler(stream)
    if os.getenv("LOG_TYPE", "text").lower() == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(ConsoleFormatter(use_color=stream.isatty()))

    logger_instance.setLevel(level)
    logger_instance.addHandler(handler)
    return logger_instance


logger = get_logger("pantry_chef")

# The SDK logs every request at INFO
logging.getLogger("google.genai").setLevel(logging.WARNING)
