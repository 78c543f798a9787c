"""Time units, their textual aliases and the suffix resolver."""
from __future__ import annotations

import re
from decimal import Decimal
from enum import IntEnum
from types import MappingProxyType
from typing import Mapping, Optional

__all__ = ["Unit", "UNIT_ALIASES", "resolve_suffix"]


class Unit(IntEnum):
    """Magnitude classes ordered from coarsest to finest.

    The integer order is meaningful: colon columns step through it one unit at
    a time and the merge engine compares units with ``<``/``>``. Sentinels
    live outside the ``YEARS..PICOSECONDS`` range.
    """

    NONE = 0
    ERROR = 1
    AMBIGUOUS = 2
    YEARS = 3
    MONTHS = 4
    WEEKS = 5
    DAYS = 6
    HOURS = 7
    MINUTES = 8
    SECONDS = 9
    MILLISECONDS = 10
    MICROSECONDS = 11
    NANOSECONDS = 12
    PICOSECONDS = 13
    TOO_MANY_UNITS = 14
    ZERO_ONLY = 15

    @property
    def is_time_unit(self) -> bool:
        return Unit.YEARS <= self <= Unit.PICOSECONDS

    @property
    def is_zero_only(self) -> bool:
        """Calendar units whose length depends on a date: only zero is accepted."""

        return self in (Unit.YEARS, Unit.MONTHS, Unit.ZERO_ONLY)

    @property
    def is_error(self) -> bool:
        return self in (Unit.ERROR, Unit.AMBIGUOUS, Unit.TOO_MANY_UNITS, Unit.ZERO_ONLY)

    @property
    def seconds(self) -> Decimal:
        """Exact length of one unit in seconds (zero for calendar units)."""

        try:
            return _SECONDS_PER_UNIT[self]
        except KeyError:
            raise ValueError(f"{self.name} is not a time unit") from None

    def finer(self) -> "Unit":
        """Return the next finer time unit."""

        if not self.is_time_unit:
            raise ValueError(f"{self.name} is not a time unit")
        if self is Unit.PICOSECONDS:
            return Unit.TOO_MANY_UNITS
        return Unit(self + 1)

    @classmethod
    def coerce(cls, value: "Unit | str | int") -> "Unit":
        """Return the :class:`Unit` named by ``value``.

        Accepts members, member names in any case (``"hours"``) and any alias
        from :data:`UNIT_ALIASES` (``"hrs"``). Used by configuration files and
        the command line.
        """

        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return cls(value)
        if isinstance(value, str):
            cleaned = value.strip()
            member = cls.__members__.get(cleaned.upper())
            if member is not None:
                return member
            alias = UNIT_ALIASES.get(cleaned.lower())
            if alias is not None:
                return alias
        raise ValueError(f"Unknown unit: {value!r}")


_SECONDS_PER_UNIT: Mapping[Unit, Decimal] = MappingProxyType(
    {
        Unit.YEARS: Decimal(0),
        Unit.MONTHS: Decimal(0),
        Unit.WEEKS: Decimal(7 * 24 * 60 * 60),
        Unit.DAYS: Decimal(24 * 60 * 60),
        Unit.HOURS: Decimal(60 * 60),
        Unit.MINUTES: Decimal(60),
        Unit.SECONDS: Decimal(1),
        Unit.MILLISECONDS: Decimal("1e-3"),
        Unit.MICROSECONDS: Decimal("1e-6"),
        Unit.NANOSECONDS: Decimal("1e-9"),
        Unit.PICOSECONDS: Decimal("1e-12"),
    }
)

_ALIASES_BY_UNIT = {
    Unit.PICOSECONDS: ("ps", "picosec", "picosecs", "picosecond", "picoseconds"),
    Unit.NANOSECONDS: ("ns", "nanosec", "nanosecs", "nanosecond", "nanoseconds"),
    Unit.MICROSECONDS: ("μs", "us", "microsec", "microsecs", "microsecond", "microseconds"),
    Unit.MILLISECONDS: ("ms", "millisec", "millisecs", "millisecond", "milliseconds"),
    Unit.SECONDS: ("s", "sec", "secs", "second", "seconds"),
    Unit.MINUTES: ("m", "min", "mins", "minute", "minutes"),
    Unit.HOURS: ("h", "hr", "hrs", "hour", "hours"),
    Unit.DAYS: ("d", "day", "days"),
    Unit.WEEKS: ("w", "wk", "wks", "week", "weeks"),
    # calendar units: only zero is unambiguous
    Unit.MONTHS: ("month", "months"),
    Unit.YEARS: ("y", "yr", "yrs", "year", "years"),
}

UNIT_ALIASES: Mapping[str, Unit] = MappingProxyType(
    {alias: unit for unit, aliases in _ALIASES_BY_UNIT.items() for alias in aliases}
)

# Leading punctuation/whitespace is ignored, then the whole word is the candidate.
_SUFFIX_WORD = re.compile(r"^[\W\d_]*?([^\W\d_]+)")


def resolve_suffix(suffix: Optional[str]) -> Unit:
    """Return the unit denoted by the text following a number.

    Only the first word counts and it must equal an alias exactly (ignoring
    case): ``"sec"`` never matches inside ``"second"`` and ``"m"`` never
    matches the start of ``"months"``. Returns :attr:`Unit.NONE` when the
    word is not a known alias or the suffix contains no letters before the
    next number.
    """

    if suffix is None:
        raise TypeError("suffix must be a string")
    match = _SUFFIX_WORD.match(suffix)
    if match is None:
        return Unit.NONE
    return UNIT_ALIASES.get(match.group(1).lower(), Unit.NONE)
