"""Structured logging utilities emitting JSON Lines payloads."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping, MutableMapping
from uuid import uuid4

from ..parsers.merge import ParseResult

__all__ = [
    "JsonLogFormatter",
    "configure_json_logger",
    "flush_handlers",
    "generate_trace_id",
    "log_event",
    "log_parse_result",
]

LOGGER_NAME = "durationparser"


class JsonLogFormatter(logging.Formatter):
    """Format log records as single-line JSON payloads."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        payload: MutableMapping[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc)
            .isoformat(timespec="milliseconds")
            .replace("+00:00", "Z"),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": message,
        }

        trace_id = getattr(record, "trace_id", None)
        if trace_id:
            payload["trace_id"] = trace_id

        event = getattr(record, "event", None) or message
        payload["event"] = event

        extra_fields = getattr(record, "extra_fields", None)
        if isinstance(extra_fields, Mapping):
            payload.update(extra_fields)

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_json_logger(log_path: Path | str | None, level: int = logging.INFO) -> logging.Logger:
    """Configure the package logger with a JSONL handler.

    ``log_path`` of ``"-"`` writes to stderr, ``None`` silences the logger.
    """

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if log_path is None:
        handler: logging.Handler = logging.NullHandler()
    elif str(log_path) == "-":
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(JsonLogFormatter())
    else:
        log_path = Path(log_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path, encoding="utf-8")
        handler.setFormatter(JsonLogFormatter())

    handler.setLevel(level)
    logger.addHandler(handler)
    return logger


def flush_handlers(logger: logging.Logger) -> None:
    """Ensure all handlers flush their buffers."""

    for handler in logger.handlers:
        handler.flush()


def generate_trace_id() -> str:
    """Return a unique trace identifier suitable for correlating log events."""

    return uuid4().hex


def log_event(
    logger: logging.Logger,
    event: str,
    *,
    trace_id: str | None = None,
    level: int = logging.INFO,
    message: str | None = None,
    **fields: Any,
) -> str:
    """Emit a structured event on the provided ``logger``."""

    event_trace_id = trace_id or generate_trace_id()
    extra = {
        "trace_id": event_trace_id,
        "event": event,
        "extra_fields": fields,
    }

    logger.log(level, message or event, extra=extra)
    return event_trace_id


def log_parse_result(
    logger: logging.Logger,
    text: str,
    result: ParseResult,
    *,
    trace_id: str | None = None,
) -> str:
    """Emit a ``parse.completed`` event (``parse.failed`` at warning level) for ``result``."""

    return log_event(
        logger,
        "parse.completed" if result.success else "parse.failed",
        trace_id=trace_id,
        level=logging.INFO if result.success else logging.WARNING,
        input=text,
        success=result.success,
        seconds=[duration.total_seconds() for duration in result.durations],
        errors=[error.as_dict() for error in result.errors],
    )
