"""Centralized configuration for durationparser.

This module exposes :func:`get_settings` returning the default
:class:`~durationparser.parsers.options.ParserOptions` used when callers do not
pass their own, plus logging preferences for the command line. Values can be
customized via environment variables or by pointing
``DURATIONPARSER_CONFIG_FILE`` to a TOML/YAML document with ``[parser]`` and
``[logging]`` sections.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from pydantic import ValidationError

from .parsers.errors import InvalidConfigurationError
from .parsers.options import ParserOptions

try:  # Python 3.11+
    import tomllib  # type: ignore[import-not-found]
except ModuleNotFoundError:  # pragma: no cover - safety for Python <3.11
    tomllib = None  # type: ignore[assignment]

try:  # Optional dependency
    import yaml  # type: ignore[import-not-found]
except ImportError:  # pragma: no cover - PyYAML is optional at runtime
    yaml = None  # type: ignore[assignment]

__all__ = ["Settings", "get_settings", "reset_settings"]

_LOAD_ERRORS: tuple = (OSError, RuntimeError, ValueError)
if yaml is not None:
    _LOAD_ERRORS += (yaml.YAMLError,)

_ENV_PREFIX = "DURATIONPARSER_"
_CONFIG_CACHE: Optional["Settings"] = None
_CONFIG_SOURCE: Optional[Path] = None

# environment variable suffix -> ParserOptions field
_PARSER_ENV = {
    "UNCOLONED_DEFAULT": "uncoloned_default",
    "COLONED_DEFAULT": "coloned_default",
    "DECIMAL_SEPARATOR": "decimal_separator",
    "GROUP_SEPARATOR": "group_separator",
    "ALLOW_THOUSANDS": "allow_thousands_separator",
    "ALLOW_DOT_DAY_HOUR": "allow_dot_day_hour_separator",
    "FAIL_ON_UNITLESS": "fail_on_unitless_number",
}


@dataclass(frozen=True)
class Settings:
    """Resolved runtime configuration."""

    parser: ParserOptions
    log_path: Optional[Path] = None
    log_level: int = logging.INFO
    config_source: Optional[Path] = None

    def as_dict(self) -> Dict[str, Any]:
        """Expose the settings as plain JSON-friendly values."""

        parser = self.parser.model_dump()
        parser["uncoloned_default"] = self.parser.uncoloned_default.name.lower()
        parser["coloned_default"] = self.parser.coloned_default.name.lower()
        return {
            "config_source": str(self.config_source) if self.config_source else "environment",
            "parser": parser,
            "logging": {
                "path": str(self.log_path) if self.log_path else None,
                "level": logging.getLevelName(self.log_level),
            },
        }


def _load_config_file(path: Path) -> Mapping[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Config file '{path}' does not exist")
    suffix = path.suffix.lower()
    if suffix == ".toml":
        if tomllib is None:  # pragma: no cover - Python <3.11 fallback
            raise RuntimeError("TOML configuration requires Python 3.11 or tomllib")
        with path.open("rb") as handle:
            return tomllib.load(handle)
    if suffix in {".yaml", ".yml"}:
        if yaml is None:
            raise RuntimeError("YAML configuration requires the 'PyYAML' package")
        with path.open("r", encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle)
            return loaded or {}
    raise ValueError(f"Unsupported config file format: '{suffix}'")


def _coalesce_mapping(source: Mapping[str, Any] | None) -> Mapping[str, Any]:
    if not isinstance(source, Mapping):
        return {}
    return source


def _parse_level(value: Any) -> int:
    if isinstance(value, int):
        return value
    level = logging.getLevelName(str(value).upper())
    if not isinstance(level, int):
        raise InvalidConfigurationError(f"Unknown log level: {value!r}")
    return level


def _build_settings(config_file: Optional[Path]) -> Settings:
    config_data: Mapping[str, Any] = {}
    config_dir: Optional[Path] = None
    if config_file is not None:
        config_file = config_file.expanduser().resolve()
        try:
            config_data = _load_config_file(config_file)
        except _LOAD_ERRORS as exc:
            raise InvalidConfigurationError(f"Cannot load config file '{config_file}': {exc}") from exc
        if not isinstance(config_data, Mapping):
            raise InvalidConfigurationError(f"Config file '{config_file}' must hold a mapping")
        config_dir = config_file.parent

    parser_section = dict(_coalesce_mapping(config_data.get("parser")))
    logging_section = _coalesce_mapping(config_data.get("logging"))

    env = os.environ
    for suffix, field_name in _PARSER_ENV.items():
        value = env.get(_ENV_PREFIX + suffix)
        if value is not None and value != "":
            parser_section[field_name] = value

    try:
        parser = ParserOptions.model_validate(parser_section)
    except ValidationError as exc:
        raise InvalidConfigurationError(f"Invalid parser configuration: {exc}") from exc

    raw_log_path = env.get(_ENV_PREFIX + "LOG_PATH") or logging_section.get("path")
    log_path: Optional[Path] = None
    if raw_log_path:
        log_path = Path(raw_log_path).expanduser()
        if not log_path.is_absolute() and config_dir is not None:
            log_path = config_dir / log_path

    log_level = _parse_level(env.get(_ENV_PREFIX + "LOG_LEVEL") or logging_section.get("level") or "INFO")

    return Settings(parser=parser, log_path=log_path, log_level=log_level, config_source=config_file)


def get_settings(*, refresh: bool = False, config_file: str | Path | None = None) -> Settings:
    """Return the cached :class:`Settings` configuration.

    Parameters
    ----------
    refresh:
        When ``True`` the cached configuration is discarded and recomputed.
    config_file:
        Optional explicit path to the configuration document. When provided the
        returned instance is not cached globally, allowing callers (e.g. tests)
        to override settings temporarily.
    """

    global _CONFIG_CACHE, _CONFIG_SOURCE

    explicit_path = Path(config_file).expanduser() if config_file is not None else None

    if explicit_path is not None:
        return _build_settings(explicit_path)

    env_path = os.getenv(_ENV_PREFIX + "CONFIG_FILE")
    source_path = Path(env_path).expanduser() if env_path else None

    if refresh or _CONFIG_CACHE is None or _CONFIG_SOURCE != source_path:
        _CONFIG_CACHE = _build_settings(source_path)
        _CONFIG_SOURCE = source_path

    return _CONFIG_CACHE


def reset_settings() -> None:
    """Clear the cached configuration (mainly useful for tests)."""

    global _CONFIG_CACHE, _CONFIG_SOURCE
    _CONFIG_CACHE = None
    _CONFIG_SOURCE = None
