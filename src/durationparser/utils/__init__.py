"""Shared utilities (structured logging)."""

from .logging import configure_json_logger, flush_handlers, generate_trace_id, log_event, log_parse_result

__all__ = [
    "configure_json_logger",
    "flush_handlers",
    "generate_trace_id",
    "log_event",
    "log_parse_result",
]
