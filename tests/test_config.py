import logging
from datetime import timedelta
from pathlib import Path

import pytest

from durationparser.config import get_settings, reset_settings
from durationparser.parsers import InvalidConfigurationError, ParserOptions, Unit, try_parse, try_parse_multiple


def test_defaults_without_configuration() -> None:
    settings = get_settings()
    assert settings.parser.uncoloned_default is Unit.NONE
    assert settings.parser.coloned_default is Unit.HOURS
    assert settings.parser.fail_on_unitless_number
    assert settings.log_path is None
    assert settings.log_level == logging.INFO
    assert settings.as_dict()["config_source"] == "environment"


def test_settings_are_cached() -> None:
    assert get_settings() is get_settings()
    first = get_settings()
    reset_settings()
    assert get_settings() is not first


def test_toml_config_file(tmp_path: Path) -> None:
    config = tmp_path / "durationparser.toml"
    config.write_text(
        '[parser]\nuncoloned_default = "minutes"\ndecimal_separator = ","\n'
        '[logging]\npath = "logs/events.jsonl"\nlevel = "debug"\n',
        encoding="utf-8",
    )
    settings = get_settings(config_file=config)
    assert settings.parser.uncoloned_default is Unit.MINUTES
    assert settings.parser.decimal_separator == ","
    assert settings.log_path == tmp_path.resolve() / "logs" / "events.jsonl"
    assert settings.log_level == logging.DEBUG


def test_yaml_config_file_from_environment(tmp_path: Path, monkeypatch) -> None:
    config = tmp_path / "durationparser.yaml"
    config.write_text("parser:\n  coloned_default: minutes\n  fail_on_unitless_number: false\n", encoding="utf-8")
    monkeypatch.setenv("DURATIONPARSER_CONFIG_FILE", str(config))
    settings = get_settings()
    assert settings.parser.coloned_default is Unit.MINUTES
    assert not settings.parser.fail_on_unitless_number


def test_environment_overrides_file(tmp_path: Path, monkeypatch) -> None:
    config = tmp_path / "durationparser.toml"
    config.write_text('[parser]\nuncoloned_default = "minutes"\n', encoding="utf-8")
    monkeypatch.setenv("DURATIONPARSER_UNCOLONED_DEFAULT", "s")
    monkeypatch.setenv("DURATIONPARSER_ALLOW_THOUSANDS", "true")
    settings = get_settings(config_file=config)
    assert settings.parser.uncoloned_default is Unit.SECONDS
    assert settings.parser.allow_thousands_separator


def test_invalid_values(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("DURATIONPARSER_COLONED_DEFAULT", "ambiguous")
    with pytest.raises(InvalidConfigurationError):
        get_settings(refresh=True)
    monkeypatch.delenv("DURATIONPARSER_COLONED_DEFAULT")

    monkeypatch.setenv("DURATIONPARSER_LOG_LEVEL", "chatty")
    with pytest.raises(InvalidConfigurationError):
        get_settings(refresh=True)


def test_config_file_errors(tmp_path: Path) -> None:
    with pytest.raises(InvalidConfigurationError):
        get_settings(config_file=tmp_path / "missing.toml")
    ini = tmp_path / "config.ini"
    ini.write_text("[parser]\n", encoding="utf-8")
    with pytest.raises(InvalidConfigurationError):
        get_settings(config_file=ini)
    broken = tmp_path / "broken.yaml"
    broken.write_text("parser: [unclosed\n", encoding="utf-8")
    with pytest.raises(InvalidConfigurationError):
        get_settings(config_file=broken)
    listing = tmp_path / "listing.yaml"
    listing.write_text("- parser\n", encoding="utf-8")
    with pytest.raises(InvalidConfigurationError):
        get_settings(config_file=listing)


def test_unreadable_config_file_surfaces_as_configuration_error(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("DURATIONPARSER_CONFIG_FILE", str(tmp_path / "missing.yaml"))
    with pytest.raises(InvalidConfigurationError):
        try_parse("3h")
    with pytest.raises(InvalidConfigurationError):
        try_parse_multiple("3h 18m")
    assert try_parse("3h", ParserOptions()) == (True, timedelta(hours=3))
