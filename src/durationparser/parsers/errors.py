"""Error kinds and exceptions raised by the duration parser."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "ErrorKind",
    "TokenError",
    "DurationParserError",
    "DurationParseError",
    "InvalidConfigurationError",
    "MalformedNumberError",
]


class ErrorKind(str, Enum):
    """Reasons why part of the input did not produce a duration."""

    UNRESOLVED_UNIT = "unresolved_unit"
    AMBIGUOUS_UNIT = "ambiguous_unit"
    TOO_MANY_UNITS = "too_many_units"
    MALFORMED_NUMBER = "malformed_number"
    INVALID_CONFIGURATION = "invalid_configuration"


@dataclass(frozen=True)
class TokenError:
    """A problem found while parsing one numeric run of the input."""

    kind: ErrorKind
    raw: str
    message: str = ""

    def as_dict(self) -> dict[str, str]:
        return {"kind": self.kind.value, "raw": self.raw, "message": self.message}


class DurationParserError(ValueError):
    """Base class for all errors raised by :mod:`durationparser`."""


class DurationParseError(DurationParserError):
    """The text could not be converted into a duration."""

    def __init__(self, text: str, errors: tuple[TokenError, ...] = ()) -> None:
        self.text = text
        self.errors = errors
        details = "; ".join(f"{error.kind.value} at {error.raw!r}" for error in errors)
        message = f"Failed to parse duration from {text!r}"
        if details:
            message = f"{message}: {details}"
        super().__init__(message)


class InvalidConfigurationError(DurationParserError):
    """Parser options are unusable (e.g. an error sentinel as default unit)."""


class MalformedNumberError(DurationParserError):
    """A numeric run matched the grammar but is not a representable decimal."""
