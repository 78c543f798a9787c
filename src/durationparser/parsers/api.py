"""Public entry points: ``parse``, ``try_parse`` and ``try_parse_multiple``."""
from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any, List, Optional, Tuple

from pydantic import ValidationError

from .errors import DurationParseError, InvalidConfigurationError
from .merge import MergeEngine, ParseResult
from .options import ParserOptions, check_options
from .tokens import build_tokens

__all__ = ["parse", "parse_all", "resolve_options", "try_parse", "try_parse_multiple"]

LOGGER = logging.getLogger(__name__)


def resolve_options(options: Optional[ParserOptions] = None, **overrides: Any) -> ParserOptions:
    """Return validated options: ``options`` (or the configured defaults) plus ``overrides``."""

    if options is None:
        from ..config import get_settings

        options = get_settings().parser
    if overrides:
        try:
            options = ParserOptions.model_validate({**options.model_dump(), **overrides})
        except ValidationError as exc:
            raise InvalidConfigurationError(str(exc)) from exc
    return check_options(options)


def parse_all(
    text: str,
    options: Optional[ParserOptions] = None,
    max_results: Optional[int] = None,
    **overrides: Any,
) -> ParseResult:
    """Parse every duration in ``text`` and report errors instead of raising.

    Only :class:`InvalidConfigurationError` is raised, for unusable options or
    a ``max_results`` below one.
    """

    resolved = resolve_options(options, **overrides)
    if max_results is not None and max_results < 1:
        raise InvalidConfigurationError(f"max_results must be at least 1, got {max_results}")
    if text is None:
        raise TypeError("text must be a string")
    result = MergeEngine(resolved, max_results=max_results).run(build_tokens(text, resolved))
    LOGGER.debug(
        "parse.completed",
        extra={
            "event": "parse.completed",
            "extra_fields": {
                "input": text,
                "success": result.success,
                "durations": len(result.durations),
                "errors": len(result.errors),
            },
        },
    )
    return result


def parse(text: str, options: Optional[ParserOptions] = None, **overrides: Any) -> timedelta:
    """Return the first duration in ``text``.

    Raises :class:`DurationParseError` when the text holds no duration or an
    error occurs before the first duration is complete.
    """

    result = parse_all(text, options, max_results=1, **overrides)
    if not result.success or result.first is None:
        raise DurationParseError(text, result.errors)
    return result.first


def try_parse(
    text: str, options: Optional[ParserOptions] = None, **overrides: Any
) -> Tuple[bool, Optional[timedelta]]:
    """Like :func:`parse` but returns ``(success, duration)`` instead of raising."""

    result = parse_all(text, options, max_results=1, **overrides)
    if not result.success or result.first is None:
        return False, None
    return True, result.first


def try_parse_multiple(
    text: str,
    options: Optional[ParserOptions] = None,
    max_results: Optional[int] = None,
    **overrides: Any,
) -> Tuple[bool, List[timedelta]]:
    """Return ``(success, durations)``; durations are best effort even on failure."""

    result = parse_all(text, options, max_results=max_results, **overrides)
    return result.success, list(result.durations)
