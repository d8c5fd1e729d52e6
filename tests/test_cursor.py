"""Tests for token cursors and token views."""

import pytest

from whitescan import LineBuffer, StaleTokenError, StringCursor, TokenCursor, tokenize


class TestStringCursor:
    """One-shot cursor over a fixed string."""

    def test_yields_maximal_whitespace_runs(self):
        cursor = tokenize("  answer\t42 \n -7  ")
        assert [token for token in cursor] == ["answer", "42", "-7"]

    def test_views_point_into_source(self):
        cursor = StringCursor("ab  cde")
        first = cursor.advance()
        second = cursor.advance()
        assert (first.start, first.end) == (0, 2)
        assert (second.start, second.end) == (4, 7)
        assert second.text == "cde"
        assert second.column == 5
        assert len(second) == 3

    def test_exhaustion_is_idempotent(self):
        cursor = StringCursor("x")
        assert cursor.advance().text == "x"
        for _ in range(3):
            assert cursor.advance() is None
        assert cursor.exhausted

    def test_empty_and_blank_strings_have_no_tokens(self):
        assert StringCursor("").advance() is None
        blank = StringCursor(" \t\n ")
        assert blank.advance() is None
        assert blank.advance() is None

    def test_views_stay_valid_for_immutable_source(self):
        cursor = StringCursor("a b")
        first = cursor.advance()
        cursor.advance()
        cursor.advance()
        assert first.valid
        assert str(first) == "a"

    def test_satisfies_cursor_protocol(self):
        assert isinstance(StringCursor(""), TokenCursor)


class TestLineBufferViews:
    """Views handed out by a LineBuffer are invalidated by refills."""

    def test_view_is_stale_after_refill(self, make_reader):
        reader = make_reader("first\nsecond\n")
        reader.start_line()
        token = reader.advance()
        assert token.text == "first"

        reader.start_line()
        assert not token.valid
        with pytest.raises(StaleTokenError):
            token.text
        assert "stale" in repr(token)

    def test_cross_line_cursor_refills(self, make_reader):
        reader = make_reader("a\n\n b c\n")
        texts = []
        while True:
            token = reader.advance()
            if token is None:
                break
            texts.append(token.text)
        assert texts == ["a", "b", "c"]
        assert reader.advance() is None
        assert reader.exhausted

    def test_line_cursor_stops_at_end_of_line(self, make_reader):
        reader = make_reader("a b\nc\n")
        reader.start_line()
        cursor = reader.line_cursor()
        assert cursor.advance().text == "a"
        assert cursor.advance().text == "b"
        assert cursor.advance() is None
        assert cursor.advance() is None
        assert reader.line_number == 1

    def test_line_buffer_satisfies_cursor_protocol(self, make_reader):
        reader = make_reader("")
        assert isinstance(reader, TokenCursor)
        assert isinstance(reader.line_cursor(), TokenCursor)
        assert isinstance(reader, LineBuffer)
