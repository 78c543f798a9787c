"""Parser primitives for free-form duration text."""

from .api import parse, parse_all, resolve_options, try_parse, try_parse_multiple
from .errors import (
    DurationParseError,
    DurationParserError,
    ErrorKind,
    InvalidConfigurationError,
    MalformedNumberError,
    TokenError,
)
from .formatting import format_colon
from .merge import Accumulator, MergeEngine, MergeOutcome, ParseResult, merge_token
from .numbers import NumberRun, normalize_text, parse_decimal, scan_numbers
from .options import ParserOptions, check_options
from .prefixed import try_parse_prefixed
from .tokens import ColonToken, PlainToken, RejectedToken, build_tokens, widen
from .units import UNIT_ALIASES, Unit, resolve_suffix

__all__ = [
    "Accumulator",
    "ColonToken",
    "DurationParseError",
    "DurationParserError",
    "ErrorKind",
    "InvalidConfigurationError",
    "MalformedNumberError",
    "MergeEngine",
    "MergeOutcome",
    "NumberRun",
    "ParseResult",
    "ParserOptions",
    "PlainToken",
    "RejectedToken",
    "TokenError",
    "UNIT_ALIASES",
    "Unit",
    "build_tokens",
    "check_options",
    "format_colon",
    "merge_token",
    "normalize_text",
    "parse",
    "parse_all",
    "parse_decimal",
    "resolve_options",
    "resolve_suffix",
    "scan_numbers",
    "try_parse",
    "try_parse_multiple",
    "try_parse_prefixed",
    "widen",
]
