"""Tests for literal evaluation."""

import pickle

import pytest

from sqlproc.core.config import ParserConfig
from sqlproc.core.evaluator import NULL, NullType, evaluate_literal, is_variable_reference, quote_literal
from sqlproc.core.slots import parse_slots
from sqlproc.exceptions import EvaluationError


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("'Bob'", "Bob"),
        ("''", ""),
        ("'O''Brien'", "O'Brien"),
        ("''''", "'"),
        ("'a, b = c'", "a, b = c"),
        ("5", 5),
        ("0042", 42),
        ("9223372036854775807", 9223372036854775807),
        ("1.5", 1.5),
        (".25", 0.25),
        ("10.0", 10.0),
    ],
)
def test_literal_values(raw: str, expected: object) -> None:
    value = evaluate_literal(raw)

    assert value == expected
    assert type(value) is type(expected)


@pytest.mark.parametrize("raw", ["NULL", "null", "Null"])
def test_null_literal(raw: str) -> None:
    assert evaluate_literal(raw) is NULL


@pytest.mark.parametrize("raw", ["-1", "1.", "1e5", "abc", "@var", "{@Value}", "N'x'", "1.2.3", "TRUE", "'", "5\n"])
def test_unsupported_literal_raises(raw: str) -> None:
    with pytest.raises(EvaluationError) as exc_info:
        evaluate_literal(raw)

    assert exc_info.value.raw_value == raw
    assert repr(raw) in str(exc_info.value)


@pytest.mark.parametrize("raw", ["9223372036854775808", "18446744073709551616", "99999999999999999999999"])
def test_integer_beyond_int64_raises(raw: str) -> None:
    with pytest.raises(EvaluationError) as exc_info:
        evaluate_literal(raw)

    assert exc_info.value.raw_value == raw


def test_int64_bound_ignores_leading_zeros() -> None:
    assert evaluate_literal("009223372036854775807") == 9223372036854775807


@pytest.mark.parametrize("text", ["", "plain", "it's", "''", "a'b'c", " spaced  out ", "ünïcödé ''x"])
def test_quoted_literal_round_trip(text: str) -> None:
    assert evaluate_literal(quote_literal(text)) == text


def test_round_trip_through_slot_parser() -> None:
    text = "O'Brien, Jr. = 'the' one"
    slots = parse_slots(f"@Name = {quote_literal(text)}")

    assert evaluate_literal(slots[0].value) == text


def test_null_marker_is_singleton() -> None:
    assert NullType() is NULL
    assert repr(NULL) == "NULL"
    assert not NULL
    assert NULL is not None
    assert pickle.loads(pickle.dumps(NULL)) is NULL


def test_is_variable_reference() -> None:
    assert is_variable_reference("@ret")
    assert not is_variable_reference("{@ret}")
    assert not is_variable_reference("'@ret'")
    assert is_variable_reference(":ret", ParserConfig(variable_prefixes=(":",)))
