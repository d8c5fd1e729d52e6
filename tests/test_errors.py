"""Tests for the error taxonomy."""

import pytest

from whitescan import (
    ErrorLocation,
    IoFailure,
    Leftovers,
    ParseError,
    TooShort,
    WhiteError,
    ok_or_none,
    parse_string,
)


def test_taxonomy_shares_a_base_class():
    for cls in (TooShort, Leftovers, ParseError, IoFailure):
        assert issubclass(cls, WhiteError)


@pytest.mark.parametrize(
    "cls, code",
    [(TooShort, "TOO_SHORT"), (Leftovers, "LEFTOVERS"), (ParseError, "PARSE_ERROR")],
)
def test_default_messages_and_codes(cls, code):
    error = cls()
    assert error.code == code
    assert error.message == cls.default_message
    assert str(error) == f"{cls.default_message} ({code})"


def test_format_includes_details_and_location():
    error = ParseError(expected="i32", found="seven", line=4, column=2)
    assert str(error) == "parse error occurred: expected i32, found 'seven' (line 4, column 2; PARSE_ERROR)"


def test_io_failure_wraps_error():
    cause = OSError("broken pipe")
    error = IoFailure(cause, line=7)
    assert error.error is cause
    assert error.message == "broken pipe"
    assert error.line == 7


@pytest.mark.parametrize(
    "location, expected",
    [
        (ErrorLocation(), "unknown location"),
        (ErrorLocation(line=3), "line 3"),
        (ErrorLocation(column=5), "column 5"),
        (ErrorLocation(line=3, column=5), "line 3, column 5"),
    ],
)
def test_location_description(location, expected):
    assert location.describe() == expected


def test_ok_or_none():
    assert ok_or_none(parse_string, "5", int) == 5
    assert ok_or_none(parse_string, "", int) is None
    with pytest.raises(ParseError):
        ok_or_none(parse_string, "five", int)
    with pytest.raises(Leftovers):
        ok_or_none(parse_string, "5 6", int)
