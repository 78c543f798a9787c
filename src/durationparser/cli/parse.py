"""CLI commands running the duration parser on a text argument."""
from __future__ import annotations

import json
import logging
from datetime import timedelta
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer

from ..config import Settings, get_settings
from ..parsers import (
    InvalidConfigurationError,
    ParserOptions,
    format_colon,
    parse_all,
    resolve_options,
    try_parse_prefixed,
)
from ..utils.logging import configure_json_logger, flush_handlers, log_event, log_parse_result

__all__ = ["multiple_command", "parse_command", "prefixed_command"]

_UNCOLONED_OPTION = typer.Option(
    None, "--uncoloned-default", help="Unit of a leading number without suffix (e.g. 'seconds', 'h')."
)
_COLONED_OPTION = typer.Option(
    None, "--coloned-default", help="Unit of a leading colon run without suffix (default: hours)."
)
_DECIMAL_OPTION = typer.Option(None, "--decimal-separator", help="Decimal separator, e.g. ',' for Italian input.")
_GROUP_OPTION = typer.Option(None, "--group-separator", help="Thousands separator used with --allow-thousands.")
_THOUSANDS_OPTION = typer.Option(
    None, "--allow-thousands/--no-allow-thousands", help="Accept thousands separators inside numbers."
)
_LENIENT_OPTION = typer.Option(
    False, "--lenient", help="Do not fail on unitless or ambiguous numbers; skip them instead."
)
_CONFIG_OPTION = typer.Option(
    None,
    "--config-file",
    exists=True,
    dir_okay=False,
    readable=True,
    help="TOML/YAML configuration to use instead of environment variables.",
)
_LOG_OPTION = typer.Option(None, "--log-file", dir_okay=False, help="JSONL file for structured events ('-' for stderr).")


def _describe(duration: Optional[timedelta], options: ParserOptions) -> Optional[Dict[str, Any]]:
    if duration is None:
        return None
    return {"seconds": duration.total_seconds(), "colon": format_colon(duration, options)}


def _build_options(
    settings: Settings,
    *,
    uncoloned_default: Optional[str],
    coloned_default: Optional[str],
    decimal_separator: Optional[str],
    group_separator: Optional[str],
    allow_thousands: Optional[bool],
    lenient: bool,
) -> ParserOptions:
    overrides: Dict[str, Any] = {
        "uncoloned_default": uncoloned_default,
        "coloned_default": coloned_default,
        "decimal_separator": decimal_separator,
        "group_separator": group_separator,
        "allow_thousands_separator": allow_thousands,
    }
    if lenient:
        overrides["fail_on_unitless_number"] = False
    try:
        return resolve_options(settings.parser, **{key: value for key, value in overrides.items() if value is not None})
    except InvalidConfigurationError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _settings(config_file: Optional[Path]) -> Settings:
    try:
        return get_settings(config_file=config_file) if config_file else get_settings()
    except InvalidConfigurationError as exc:
        raise typer.BadParameter(str(exc), param_hint="--config-file") from exc


def _logger(settings: Settings, log_file: Optional[Path]) -> logging.Logger:
    return configure_json_logger(log_file or settings.log_path, level=settings.log_level)


def parse_command(
    text: str = typer.Argument(..., help="Text holding the duration, e.g. '2 weeks, 1 day, 30s'."),
    uncoloned_default: Optional[str] = _UNCOLONED_OPTION,
    coloned_default: Optional[str] = _COLONED_OPTION,
    decimal_separator: Optional[str] = _DECIMAL_OPTION,
    group_separator: Optional[str] = _GROUP_OPTION,
    allow_thousands: Optional[bool] = _THOUSANDS_OPTION,
    lenient: bool = _LENIENT_OPTION,
    config_file: Optional[Path] = _CONFIG_OPTION,
    log_file: Optional[Path] = _LOG_OPTION,
) -> None:
    """Print the first duration found in TEXT as JSON; exit code 1 on failure."""

    settings = _settings(config_file)
    options = _build_options(
        settings,
        uncoloned_default=uncoloned_default,
        coloned_default=coloned_default,
        decimal_separator=decimal_separator,
        group_separator=group_separator,
        allow_thousands=allow_thousands,
        lenient=lenient,
    )
    logger = _logger(settings, log_file)

    result = parse_all(text, options, max_results=1)
    success = result.success and result.first is not None
    log_parse_result(logger, text, result)
    flush_handlers(logger)

    payload = {
        "input": text,
        "success": success,
        "duration": _describe(result.first, options) if success else None,
        "errors": [error.as_dict() for error in result.errors],
    }
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))
    if not success:
        raise typer.Exit(code=1)


def multiple_command(
    text: str = typer.Argument(..., help="Text holding one or more durations, e.g. '3h 18m 1h'."),
    max_results: Optional[int] = typer.Option(None, "--max", min=1, help="Stop after this many durations."),
    uncoloned_default: Optional[str] = _UNCOLONED_OPTION,
    coloned_default: Optional[str] = _COLONED_OPTION,
    decimal_separator: Optional[str] = _DECIMAL_OPTION,
    group_separator: Optional[str] = _GROUP_OPTION,
    allow_thousands: Optional[bool] = _THOUSANDS_OPTION,
    lenient: bool = _LENIENT_OPTION,
    config_file: Optional[Path] = _CONFIG_OPTION,
    log_file: Optional[Path] = _LOG_OPTION,
) -> None:
    """Print every duration found in TEXT as JSON; exit code 1 on failure."""

    settings = _settings(config_file)
    options = _build_options(
        settings,
        uncoloned_default=uncoloned_default,
        coloned_default=coloned_default,
        decimal_separator=decimal_separator,
        group_separator=group_separator,
        allow_thousands=allow_thousands,
        lenient=lenient,
    )
    logger = _logger(settings, log_file)

    result = parse_all(text, options, max_results=max_results)
    log_parse_result(logger, text, result)
    flush_handlers(logger)

    payload = {
        "input": text,
        "success": result.success,
        "durations": [_describe(duration, options) for duration in result.durations],
        "errors": [error.as_dict() for error in result.errors],
    }
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))
    if not result.success:
        raise typer.Exit(code=1)


def prefixed_command(
    text: str = typer.Argument(..., help="Text such as 'remind me in 5 min for 1h'."),
    labels: List[str] = typer.Option(..., "--label", "-l", help="Keyword introducing a duration (repeatable)."),
    uncoloned_default: Optional[str] = _UNCOLONED_OPTION,
    coloned_default: Optional[str] = _COLONED_OPTION,
    decimal_separator: Optional[str] = _DECIMAL_OPTION,
    group_separator: Optional[str] = _GROUP_OPTION,
    allow_thousands: Optional[bool] = _THOUSANDS_OPTION,
    lenient: bool = _LENIENT_OPTION,
    config_file: Optional[Path] = _CONFIG_OPTION,
    log_file: Optional[Path] = _LOG_OPTION,
) -> None:
    """Print a JSON mapping from each label (or leading position) to its duration."""

    settings = _settings(config_file)
    options = _build_options(
        settings,
        uncoloned_default=uncoloned_default,
        coloned_default=coloned_default,
        decimal_separator=decimal_separator,
        group_separator=group_separator,
        allow_thousands=allow_thousands,
        lenient=lenient,
    )
    logger = _logger(settings, log_file)

    try:
        success, matches = try_parse_prefixed(text, labels, options)
    except InvalidConfigurationError as exc:
        raise typer.BadParameter(str(exc), param_hint="--label") from exc

    log_event(
        logger,
        "prefixed.completed",
        input=text,
        labels=list(labels),
        success=success,
        matched=sorted(matches),
    )
    flush_handlers(logger)

    payload = {
        "input": text,
        "success": success,
        "matches": {key: _describe(value, options) for key, value in matches.items()},
    }
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))
    if not success:
        raise typer.Exit(code=1)
