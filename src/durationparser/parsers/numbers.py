"""Locate numeric runs (plain or colon separated) in free text."""
from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from functools import lru_cache
from typing import Iterator

from .errors import MalformedNumberError
from .options import ParserOptions

__all__ = [
    "NumberRun",
    "build_number_pattern",
    "normalize_text",
    "parse_decimal",
    "scan_numbers",
]

_EXPONENT = r"(?:[eE][-+]?[0-9]+)?"


@dataclass(frozen=True)
class NumberRun:
    """A numeric run and the text that follows it up to the next run."""

    raw: str
    suffix: str
    start: int
    end: int
    index: int

    @property
    def coloned(self) -> bool:
        return ":" in self.raw


def normalize_text(text: str) -> str:
    """Fold fullwidth digits and compatibility characters, underscores to spaces."""

    return unicodedata.normalize("NFKC", text).replace("_", " ")


@lru_cache(maxsize=32)
def _compile(decimal_chars: str, group: str | None) -> re.Pattern[str]:
    dec = "[" + re.escape(decimal_chars) + "]"
    body = rf"[0-9]*{dec}?[0-9]+"
    if group is not None:
        grouped = rf"[0-9]{{1,3}}(?:{re.escape(group)}[0-9]{{3}})+(?:{dec}[0-9]+)?"
        body = rf"(?:{grouped}|{body})"
    column = rf"[-+]?{body}{_EXPONENT}"
    return re.compile(rf"(?:[-+]?:)?{column}(?::{column})*:?")


def build_number_pattern(options: ParserOptions) -> re.Pattern[str]:
    """Return the compiled run grammar for the separators in ``options``."""

    group = options.group_separator if options.allow_thousands_separator else None
    return _compile(options.decimal_characters, group)


def scan_numbers(text: str, options: ParserOptions) -> Iterator[NumberRun]:
    """Yield numeric runs of ``text`` from left to right.

    ``text`` is expected to be normalised already (see :func:`normalize_text`).
    Each run owns the suffix up to the start of the next run, so suffix text is
    never shared.
    """

    pattern = build_number_pattern(options)
    previous: re.Match[str] | None = None
    index = 0
    for match in pattern.finditer(text):
        if previous is not None:
            yield _run(text, previous, match.start(), index)
            index += 1
        previous = match
    if previous is not None:
        yield _run(text, previous, len(text), index)


def _run(text: str, match: re.Match[str], suffix_end: int, index: int) -> NumberRun:
    return NumberRun(
        raw=match.group(0),
        suffix=text[match.end():suffix_end],
        start=match.start(),
        end=match.end(),
        index=index,
    )


@lru_cache(maxsize=32)
def _grouped(decimal: str, group: str) -> re.Pattern[str]:
    return re.compile(
        rf"[-+]?[0-9]{{1,3}}(?:{re.escape(group)}[0-9]{{3}})+(?:{re.escape(decimal)}[0-9]+)?{_EXPONENT}"
    )


def parse_decimal(raw: str, options: ParserOptions) -> Decimal:
    """Convert one column of a run into an exact :class:`~decimal.Decimal`.

    Group separators are only stripped from a well-formed ``1.234.567`` style
    integer part; anywhere else they make the number malformed.
    """

    candidate = raw.strip()
    if options.allow_thousands_separator and options.group_separator in candidate:
        if not _grouped(options.decimal_separator, options.group_separator).fullmatch(candidate):
            raise MalformedNumberError(f"Misplaced group separator in number {raw!r}")
        candidate = candidate.replace(options.group_separator, "")
    if options.decimal_separator != ".":
        if "." in candidate:
            raise MalformedNumberError(f"Unexpected '.' in number {raw!r}")
        candidate = candidate.replace(options.decimal_separator, ".")
    try:
        value = Decimal(candidate)
    except InvalidOperation as exc:
        raise MalformedNumberError(f"Invalid numeric value: {raw!r}") from exc
    if not value.is_finite():
        raise MalformedNumberError(f"Invalid numeric value: {raw!r}")
    return value
