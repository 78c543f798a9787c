"""Extract durations introduced by keyword labels (e.g. 'for 5 min in 2h')."""
from __future__ import annotations

import re
from datetime import timedelta
from typing import Any, Dict, Iterable, Optional, Tuple

from .api import parse_all, resolve_options, try_parse
from .errors import InvalidConfigurationError
from .options import ParserOptions

__all__ = ["build_label_pattern", "try_parse_prefixed"]


def build_label_pattern(labels: Iterable[str]) -> re.Pattern[str]:
    """Compile a case-insensitive, word-bounded splitter for ``labels``."""

    cleaned = sorted({label.strip().lower() for label in labels if label and label.strip()}, key=len, reverse=True)
    if not cleaned:
        raise InvalidConfigurationError("at least one label is required")
    # the capturing group keeps the labels in the output of re.split
    return re.compile(r"\b(" + "|".join(re.escape(label) for label in cleaned) + r")\b", re.IGNORECASE)


def try_parse_prefixed(
    text: str,
    labels: Iterable[str],
    options: Optional[ParserOptions] = None,
    **overrides: Any,
) -> Tuple[bool, Dict[str, Optional[timedelta]]]:
    """Map each label found in ``text`` to the duration that follows it.

    Durations before the first label are stored under ``"0"``, ``"1"``, ...
    A label whose text is not a valid duration maps to ``None``; text after
    that first duration is ignored. Success means at least one entry was
    recorded and the leading text (if any) parsed cleanly.
    """

    resolved = resolve_options(options, **overrides)
    pattern = build_label_pattern(labels)
    parts = pattern.split(text)

    matches: Dict[str, Optional[timedelta]] = {}
    leading_ok = True

    # re.split with one group alternates text, label, text, label, ...
    leading = parts[0]
    if leading.strip():
        result = parse_all(leading, resolved)
        leading_ok = result.success
        for position, duration in enumerate(result.durations):
            matches[str(position)] = duration

    for index in range(1, len(parts), 2):
        label = parts[index].lower()
        region = parts[index + 1] if index + 1 < len(parts) else ""
        _, duration = try_parse(region, resolved)
        matches[label] = duration

    return bool(matches) and leading_ok, matches
