"""Tests for the logging helpers."""

import io
import logging
import sys
from collections.abc import Iterator

import pytest

from sqlproc._serialization import decode_json
from sqlproc.core.binder import ParameterDescriptor, ParameterDirection
from sqlproc.core.extractor import parse_call
from sqlproc.utils.logging import StructuredFormatter, call_fields, configure_logging, get_logger


@pytest.fixture
def log_stream() -> "Iterator[io.StringIO]":
    stream = io.StringIO()
    configure_logging(level="DEBUG", stream=stream)
    yield stream
    root = logging.getLogger("sqlproc")
    root.handlers.clear()
    root.propagate = True
    root.setLevel(logging.NOTSET)


def _record(message: str = "hello %s", args: "tuple[object, ...]" = ("world",)) -> logging.LogRecord:
    return logging.LogRecord("sqlproc.test", logging.INFO, __file__, 10, message, args, None)


def _entries(stream: io.StringIO, logger_name: str) -> "list[dict[str, object]]":
    entries = [decode_json(line) for line in stream.getvalue().splitlines()]
    return [entry for entry in entries if entry["logger"] == logger_name]


def test_get_logger_uses_package_namespace() -> None:
    assert get_logger().name == "sqlproc"
    assert get_logger("core.binder").name == "sqlproc.core.binder"
    assert get_logger("sqlproc.core.lexer").name == "sqlproc.core.lexer"


def test_call_fields_omit_missing_counts() -> None:
    assert call_fields("dbo.p") == {"procedure": "dbo.p", "return_variable": None}
    assert call_fields("dbo.p", "@ret", slot_count=2, parameter_count=3) == {
        "procedure": "dbo.p",
        "return_variable": "@ret",
        "slot_count": 2,
        "parameter_count": 3,
    }


def test_structured_formatter_emits_json() -> None:
    entry = decode_json(StructuredFormatter().format(_record()))

    assert entry["message"] == "hello world"
    assert entry["level"] == "INFO"
    assert entry["logger"] == "sqlproc.test"
    assert "procedure" not in entry


def test_structured_formatter_lifts_call_fields() -> None:
    record = _record()
    for key, value in call_fields("dbo.p", "@ret", slot_count=1).items():
        setattr(record, key, value)
    record.unrelated = "dropped"  # type: ignore[attr-defined]

    entry = decode_json(StructuredFormatter().format(record))

    assert entry["procedure"] == "dbo.p"
    assert entry["return_variable"] == "@ret"
    assert entry["slot_count"] == 1
    assert "parameter_count" not in entry
    assert "unrelated" not in entry


def test_structured_formatter_includes_exception() -> None:
    try:
        raise ValueError("boom")
    except ValueError:
        record = logging.LogRecord("sqlproc.test", logging.ERROR, __file__, 10, "failed", (), sys.exc_info())

    entry = decode_json(StructuredFormatter().format(record))

    assert "ValueError: boom" in entry["exception"]


def test_parse_logs_call_fields(log_stream: io.StringIO) -> None:
    parse_call("EXEC @ret = dbo.GetUser @Id = 5, @Name = 'x'")

    (entry,) = _entries(log_stream, "sqlproc.core.extractor")
    assert entry["level"] == "DEBUG"
    assert entry["procedure"] == "dbo.GetUser"
    assert entry["return_variable"] == "@ret"
    assert entry["slot_count"] == 2


def test_bind_logs_parameter_count(log_stream: io.StringIO) -> None:
    result = parse_call("dbo.p 1")
    declared = [
        ParameterDescriptor("@RETURN_VALUE", 0, ParameterDirection.RETURN_VALUE),
        ParameterDescriptor("@a", 1),
    ]
    result.bind(declared)

    (entry,) = _entries(log_stream, "sqlproc.core.binder")
    assert entry["procedure"] == "dbo.p"
    assert entry["return_variable"] is None
    assert entry["slot_count"] == 1
    assert entry["parameter_count"] == 2


def test_configure_logging_replaces_handlers() -> None:
    root = logging.getLogger("sqlproc")
    try:
        configure_logging(level="WARNING")
        configure_logging(level="debug", structured=False)

        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert root.propagate is False
        assert not isinstance(root.handlers[0].formatter, StructuredFormatter)
    finally:
        root.handlers.clear()
        root.propagate = True
        root.setLevel(logging.NOTSET)


def test_library_logs_nothing_above_debug(log_stream: io.StringIO) -> None:
    logging.getLogger("sqlproc").setLevel(logging.INFO)

    parse_call("dbo.p 1").bind([ParameterDescriptor("@a", 1)])

    assert log_stream.getvalue() == ""
