"""Turn numeric runs into typed tokens and lay colon columns out on units."""
from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterator, List, Optional, Tuple, Union

from .errors import ErrorKind, MalformedNumberError
from .numbers import NumberRun, normalize_text, parse_decimal, scan_numbers
from .options import ParserOptions
from .units import Unit, resolve_suffix

__all__ = [
    "Contribution",
    "PlainToken",
    "ColonToken",
    "RejectedToken",
    "Token",
    "build_token",
    "build_tokens",
    "widen",
]

Contribution = Tuple[Unit, Decimal]

_DAY_HOUR = re.compile(r"^\s*(?P<sign>[-+]?)(?P<days>[0-9]+)\.(?P<hours>[0-9]+)\s*$")


def _has_sign(raw: str) -> bool:
    return raw.strip()[:1] in ("+", "-")


def _is_negative(raw: str) -> bool:
    return raw.strip()[:1] == "-"


def widen(unit: Unit, column_count: int) -> Unit:
    """Return the starting unit implied by the number of colon columns.

    ``32:18:10`` read as minutes cannot be right, so three columns starting
    below hours start at hours, four columns start at days and two columns
    starting at seconds start at minutes. Weeks are never inferred.
    """

    if column_count == 4 and Unit.HOURS <= unit < Unit.MILLISECONDS:
        return Unit.DAYS
    if column_count == 3 and unit in (Unit.MINUTES, Unit.SECONDS):
        return Unit.HOURS
    if column_count == 2 and unit is Unit.SECONDS:
        return Unit.MINUTES
    return unit


@dataclass(frozen=True)
class PlainToken:
    """A single number with its unit."""

    raw: str
    value: Decimal
    unit: Unit
    negative: bool = False
    explicit_sign: bool = False

    coloned = False

    def layout(self, unit: Unit) -> Union[List[Contribution], ErrorKind]:
        if not unit.is_time_unit:
            return ErrorKind.UNRESOLVED_UNIT
        return [(unit, self.value)]


@dataclass(frozen=True)
class ColonToken:
    """A colon separated run such as ``1:08:18:10``.

    ``columns`` holds one value per column, ``None`` for empty columns and
    for a leading sign-only column. ``day_hour`` is set when the first column
    reads ``D.H`` and may denote days and hours rather than a decimal.
    """

    raw: str
    columns: Tuple[Optional[Decimal], ...]
    unit: Unit
    negative: bool = False
    explicit_sign: bool = False
    day_hour: Optional[Tuple[Decimal, Decimal]] = None

    coloned = True

    def layout(self, unit: Unit) -> Union[List[Contribution], ErrorKind]:
        """Assign successive units to the columns, starting at ``unit`` (widened)."""

        if not unit.is_time_unit:
            return ErrorKind.UNRESOLVED_UNIT
        current = widen(unit, len(self.columns))
        contributions: List[Contribution] = []
        for position, value in enumerate(self.columns):
            if current >= Unit.MILLISECONDS:
                return ErrorKind.TOO_MANY_UNITS
            if position == 0 and self.day_hour is not None and current is Unit.HOURS:
                days, hours = self.day_hour
                contributions.append((Unit.DAYS, days))
                contributions.append((Unit.HOURS, hours))
            elif position == 0 and self.day_hour is not None and value is None:
                # only readable as days.hours
                return ErrorKind.MALFORMED_NUMBER
            elif value is not None:
                contributions.append((current, value))
            current = current.finer()
        return contributions


@dataclass(frozen=True)
class RejectedToken:
    """A run that could not become a token."""

    raw: str
    kind: ErrorKind
    message: str = ""
    unit: Unit = Unit.ERROR

    coloned = False


Token = Union[PlainToken, ColonToken, RejectedToken]


def _plain_token(run: NumberRun, unit: Unit, options: ParserOptions) -> PlainToken:
    return PlainToken(
        raw=run.raw,
        value=parse_decimal(run.raw, options),
        unit=unit,
        negative=_is_negative(run.raw),
        explicit_sign=_has_sign(run.raw),
    )


def _colon_token(run: NumberRun, unit: Unit, options: ParserOptions) -> ColonToken:
    parts = run.raw.split(":")
    head = parts[0].strip()
    negative = _is_negative(head)
    explicit_sign = _has_sign(head)

    day_hour = None
    if options.allow_dot_day_hour_separator:
        match = _DAY_HOUR.match(head)
        if match is not None:
            days, hours = Decimal(match.group("days")), Decimal(match.group("hours"))
            if negative:
                days, hours = days.copy_negate(), hours.copy_negate()
            day_hour = (days, hours)

    columns: List[Optional[Decimal]] = []
    for position, part in enumerate(parts):
        text = part.strip()
        if not text or text in ("+", "-"):
            # empty column, or a sign-only marker in front of the first colon
            columns.append(None)
            continue
        if position == 0 and day_hour is not None and options.decimal_separator != ".":
            columns.append(None)
            continue
        value = parse_decimal(text, options)
        if negative and not _has_sign(text):
            value = value.copy_negate()
        columns.append(value)

    return ColonToken(
        raw=run.raw,
        columns=tuple(columns),
        unit=unit,
        negative=negative,
        explicit_sign=explicit_sign,
        day_hour=day_hour,
    )


def build_token(run: NumberRun, options: ParserOptions) -> Token:
    """Resolve the suffix of ``run`` and build the matching token.

    Only the first run of the text inherits the caller's default unit; later
    runs without a recognised suffix keep :attr:`Unit.NONE` and are dealt with
    by the merge engine.
    """

    unit = resolve_suffix(run.suffix)
    if unit is Unit.NONE and run.index == 0:
        unit = options.default_for(run.coloned)
    try:
        if run.coloned:
            return _colon_token(run, unit, options)
        return _plain_token(run, unit, options)
    except MalformedNumberError as exc:
        return RejectedToken(raw=run.raw, kind=ErrorKind.MALFORMED_NUMBER, message=str(exc))


def build_tokens(text: str, options: ParserOptions) -> Iterator[Token]:
    """Lazily yield one token per numeric run of ``text``."""

    for run in scan_numbers(normalize_text(text), options):
        yield build_token(run, options)
