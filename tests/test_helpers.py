"""Tests for parse_string and parse_line."""

import io

import pytest
from hypothesis import assume, given
from hypothesis import strategies as st

from whitescan import (
    CHAR,
    U8,
    U16,
    Leftovers,
    ParseError,
    TooShort,
    parse_line,
    parse_string,
)


def test_parse_string_basics():
    assert parse_string(" 123  ", int) == 123
    assert parse_string("  answer  42 ", (str, int)) == ("answer", 42)


@pytest.mark.parametrize(
    "text, shape, error",
    [
        ("1", (U8, U16), TooShort),
        ("x y z", CHAR, Leftovers),
        ("seven", int, ParseError),
    ],
)
def test_parse_string_error_kinds(text, shape, error):
    with pytest.raises(error):
        parse_string(text, shape)


def test_leftovers_point_at_first_extra_token():
    with pytest.raises(Leftovers) as excinfo:
        parse_string("1 2", int)
    assert excinfo.value.found == "2"
    assert excinfo.value.column == 3


@given(
    st.tuples(
        st.integers(min_value=-(10**30), max_value=10**30),
        st.floats(allow_nan=False),
        st.text(alphabet=st.characters(exclude_categories=("Cc", "Cs", "Zs", "Zl", "Zp")), min_size=1),
    )
)
def test_round_trip_of_whitespace_joined_tuples(value):
    number, real, word = value
    text = " ".join([str(number), repr(real), word])
    # str.split() agrees with the token pattern on what counts as whitespace
    assume(len(text.split()) == 3)
    assert parse_string(text, (int, float, str)) == value


class TestParseLine:
    """Reads exactly one line from the given source."""

    def test_reads_one_line(self):
        source = io.StringIO("1 2\n3\n")
        assert parse_line((int, int), source) == (1, 2)
        assert parse_line(int, source) == 3
        with pytest.raises(TooShort):
            parse_line(int, source)

    def test_byte_source(self):
        assert parse_line([int], io.BytesIO(b"4 5 6\n")) == [4, 5, 6]

    def test_line_must_be_consumed(self):
        with pytest.raises(Leftovers):
            parse_line(int, io.StringIO("1 2\n"))

    def test_defaults_to_stdin(self, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("9\n"))
        assert parse_line(int) == 9
