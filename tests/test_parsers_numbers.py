from decimal import Decimal

import pytest

from durationparser.parsers.errors import MalformedNumberError
from durationparser.parsers.numbers import NumberRun, normalize_text, parse_decimal, scan_numbers
from durationparser.parsers.options import ParserOptions

DEFAULT = ParserOptions()
ITALIAN = ParserOptions(decimal_separator=",", group_separator=".", allow_thousands_separator=True)
THOUSANDS = ParserOptions(allow_thousands_separator=True)


@pytest.mark.parametrize(
    "text, expected",
    [
        (
            "2 weeks, 1 day, 1 hour, 30 seconds, 20 milliseconds",
            [("2", " weeks, "), ("1", " day, "), ("1", " hour, "), ("30", " seconds, "), ("20", " milliseconds")],
        ),
        ("32:18h 10s", [("32:18", "h "), ("10", "s")]),
        ("-3h18m", [("-3", "h"), ("18", "m")]),
        ("8.64e+6 seconds", [("8.64e+6", " seconds")]),
        (":30 min", [(":30", " min")]),
        ("-:30", [("-:30", "")]),
        ("1.08:18:10", [("1.08:18:10", "")]),
        ("3: later", [("3:", " later")]),
        ("no numbers here", []),
    ],
)
def test_scan_numbers(text: str, expected: list[tuple[str, str]]) -> None:
    runs = list(scan_numbers(text, DEFAULT))
    assert [(run.raw, run.suffix) for run in runs] == expected
    for position, run in enumerate(runs):
        assert isinstance(run, NumberRun)
        assert run.index == position
        assert text[run.start:run.end] == run.raw


def test_suffixes_cover_the_text_after_the_first_run() -> None:
    text = "about 1h, then 20 min and 5s!"
    runs = list(scan_numbers(text, DEFAULT))
    assert "".join(run.raw + run.suffix for run in runs) == text[runs[0].start:]


def test_coloned_classification() -> None:
    runs = list(scan_numbers("1:30 and 45", DEFAULT))
    assert [run.coloned for run in runs] == [True, False]


def test_thousands_separator_only_when_enabled() -> None:
    assert [run.raw for run in scan_numbers("1,000,000 ms", DEFAULT)] == ["1", "000", "000"]
    assert [run.raw for run in scan_numbers("1,000,000 ms", THOUSANDS)] == ["1,000,000"]


def test_locale_decimal_separator() -> None:
    assert [run.raw for run in scan_numbers("1,5 ore e 2.000 ms", ITALIAN)] == ["1,5", "2.000"]


def test_normalize_text_folds_fullwidth_and_underscores() -> None:
    assert normalize_text("１２ｈ") == "12h"
    assert normalize_text("1_hour") == "1 hour"
    assert normalize_text("5 µs") == "5 μs"


@pytest.mark.parametrize(
    "raw, options, expected",
    [
        ("0", DEFAULT, Decimal(0)),
        ("42", DEFAULT, Decimal(42)),
        ("-7", DEFAULT, Decimal(-7)),
        ("+12", DEFAULT, Decimal(12)),
        ("1.5", DEFAULT, Decimal("1.5")),
        ("8.64e+6", DEFAULT, Decimal(8640000)),
        ("1,234.5", THOUSANDS, Decimal("1234.5")),
        ("1,5", ITALIAN, Decimal("1.5")),
        ("1.234,75", ITALIAN, Decimal("1234.75")),
        (" 3 ", DEFAULT, Decimal(3)),
    ],
)
def test_parse_decimal(raw: str, options: ParserOptions, expected: Decimal) -> None:
    assert parse_decimal(raw, options) == expected


@pytest.mark.parametrize(
    "raw, options",
    [
        ("abc", DEFAULT),
        ("", DEFAULT),
        ("1,5", DEFAULT),
        ("1.5", ParserOptions(decimal_separator=",")),
        ("1.5", ITALIAN),
        ("1,23", THOUSANDS),
        ("12.34.567", ITALIAN),
    ],
)
def test_parse_decimal_invalid(raw: str, options: ParserOptions) -> None:
    with pytest.raises(MalformedNumberError):
        parse_decimal(raw, options)
