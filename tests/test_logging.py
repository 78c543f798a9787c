import json
import logging
from pathlib import Path

from durationparser import parse_all
from durationparser.utils.logging import configure_json_logger, flush_handlers, log_event, log_parse_result


def _read(path: Path) -> list[dict]:
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines() if line.strip()]


def test_structured_logger_emits_jsonl(tmp_path: Path) -> None:
    log_file = tmp_path / "events.jsonl"
    logger = configure_json_logger(log_file)

    trace_id = log_event(logger, "test.start", input="3h 18m")
    log_event(logger, "test.completed", trace_id=trace_id, durations=1)
    flush_handlers(logger)

    lines = _read(log_file)
    assert len(lines) == 2
    assert all(line["trace_id"] == trace_id for line in lines)
    assert {line["event"] for line in lines} == {"test.start", "test.completed"}
    assert lines[0]["input"] == "3h 18m"
    assert lines[1]["durations"] == 1
    assert lines[0]["logger"] == "durationparser"


def test_parse_result_events(tmp_path: Path) -> None:
    log_file = tmp_path / "parse.jsonl"
    logger = configure_json_logger(log_file)

    log_parse_result(logger, "3h 18m 1h", parse_all("3h 18m 1h"))
    log_parse_result(logger, "3 months", parse_all("3 months"))
    flush_handlers(logger)

    completed, failed = _read(log_file)
    assert completed["event"] == "parse.completed"
    assert completed["seconds"] == [11880.0, 3600.0]
    assert failed["event"] == "parse.failed"
    assert failed["level"] == "warning"
    assert failed["errors"][0]["kind"] == "ambiguous_unit"


def test_logger_without_path_is_silent(tmp_path: Path) -> None:
    logger = configure_json_logger(None)
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], logging.NullHandler)


def test_debug_events_from_the_parser(caplog, monkeypatch) -> None:
    monkeypatch.setattr(logging.getLogger("durationparser"), "propagate", True)
    with caplog.at_level(logging.DEBUG, logger="durationparser.parsers"):
        parse_all("3h 5 months")
    events = [record.getMessage() for record in caplog.records]
    assert "token.rejected" in events
    assert "duration.sealed" in events
    assert "parse.completed" in events


def test_parser_debug_events_keep_their_fields(tmp_path: Path) -> None:
    log_file = tmp_path / "debug.jsonl"
    logger = configure_json_logger(log_file, level=logging.DEBUG)

    parse_all("3h 5 months")
    flush_handlers(logger)

    events = {line["event"]: line for line in _read(log_file)}
    assert events["token.rejected"]["raw"] == "5"
    assert events["token.rejected"]["kind"] == "ambiguous_unit"
    assert events["duration.sealed"]["seconds"] == 10800.0
    assert events["duration.sealed"]["logger"] == "durationparser.parsers.merge"
    assert events["parse.completed"]["input"] == "3h 5 months"
    assert events["parse.completed"]["durations"] == 1
