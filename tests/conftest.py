import pytest

from durationparser.config import reset_settings

_ENV_VARS = (
    "DURATIONPARSER_CONFIG_FILE",
    "DURATIONPARSER_UNCOLONED_DEFAULT",
    "DURATIONPARSER_COLONED_DEFAULT",
    "DURATIONPARSER_DECIMAL_SEPARATOR",
    "DURATIONPARSER_GROUP_SEPARATOR",
    "DURATIONPARSER_ALLOW_THOUSANDS",
    "DURATIONPARSER_ALLOW_DOT_DAY_HOUR",
    "DURATIONPARSER_FAIL_ON_UNITLESS",
    "DURATIONPARSER_LOG_PATH",
    "DURATIONPARSER_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()
