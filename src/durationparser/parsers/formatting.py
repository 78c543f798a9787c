"""Render durations in the colon notation accepted by the parser."""
from __future__ import annotations

from datetime import timedelta
from typing import Optional

from .options import ParserOptions

__all__ = ["format_colon"]


def format_colon(duration: timedelta, options: Optional[ParserOptions] = None) -> str:
    """Return ``[-]D:HH:MM:SS[.ffffff]`` for ``duration``.

    The fraction uses the decimal separator of ``options`` (``.`` by default).
    The four columns always widen to days when parsed back with an hours
    default, so ``parse(format_colon(d, options), options) == d``.
    """

    separator = options.decimal_separator if options is not None else "."
    sign = "-" if duration < timedelta(0) else ""
    magnitude = -duration if sign else duration
    hours, remainder = divmod(magnitude.seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    rendered = f"{sign}{magnitude.days}:{hours:02d}:{minutes:02d}:{seconds:02d}"
    if magnitude.microseconds:
        rendered += f"{separator}{magnitude.microseconds:06d}"
    return rendered
