"""durationparser – turn human-typed duration text into timedeltas."""

from ._version import __version__
from .parsers import (
    DurationParseError,
    InvalidConfigurationError,
    ParserOptions,
    ParseResult,
    Unit,
    format_colon,
    parse,
    parse_all,
    try_parse,
    try_parse_multiple,
    try_parse_prefixed,
)

__all__ = [
    "__version__",
    "DurationParseError",
    "InvalidConfigurationError",
    "ParserOptions",
    "ParseResult",
    "Unit",
    "format_colon",
    "parse",
    "parse_all",
    "try_parse",
    "try_parse_multiple",
    "try_parse_prefixed",
]
