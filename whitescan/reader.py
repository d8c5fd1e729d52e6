"""Line-buffered token reader.

:class:`LineBuffer` owns a readable source and the text of the line it read
most recently. Tokens are handed out as offset-based views into that text;
every refill bumps a generation counter so a view kept past the refill that
replaced its line can no longer be read.

Overview of how the entry points treat newlines, for the input
``"1 2\\n\\n3 4 5\\n6 7\\n8\\n"``::

    reader.start_line(int)        # 1
    reader.parse((int, int))      # (2, 3)  continue_line would raise TooShort
    reader.continue_line(int)     # 4       finish_line would raise Leftovers
    reader.start_line(int)        # 6       line would raise Leftovers
    reader.line(int)              # 8
    # from here on every call raises TooShort

A LineBuffer is not thread-safe. Sharing one between threads is unsupported.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Optional

from .config import ReaderSettings, get_settings
from .cursor import TokenView, scan_token
from .errors import IoFailure, Leftovers, TooShort, WhiteError
from .observability import get_logger
from .shapes import UNIT, as_shape

logger = get_logger(__name__)


class _CurrentLineCursor:
    """Cursor over the remaining tokens of the buffer's current line only."""

    def __init__(self, buffer: "LineBuffer") -> None:
        self._buffer = buffer

    def advance(self) -> Optional[TokenView]:
        return self._buffer._next_on_line()


class LineBuffer:
    """Wraps a line-readable source for newline-aware and scanf-like parsing.

    ``source`` is any object with a ``readline()`` method returning ``bytes``
    (decoded with the configured encoding) or ``str``; an empty result marks
    the end of input. The buffer never closes the source; :meth:`detach`
    hands it back.

    The buffer is itself a cross-line :class:`~whitescan.cursor.TokenCursor`:
    :meth:`advance` refills transparently whenever the current line runs out.
    """

    def __init__(
        self,
        source: Any,
        *,
        encoding: Optional[str] = None,
        errors: Optional[str] = None,
        settings: Optional[ReaderSettings] = None,
    ) -> None:
        if settings is None and (encoding is None or errors is None):
            settings = get_settings()
        self._source = source
        self._encoding = encoding if encoding is not None else settings.encoding
        self._errors = errors if errors is not None else settings.decode_errors
        self._text = ""
        self._generation = 0
        self._pos = 0
        self._line_number = 0
        self._consumed = 0
        self._exhausted = False
        self._detached = False
        self._line_cursor = _CurrentLineCursor(self)

    # Introspection ------------------------------------------------------

    @property
    def line_number(self) -> int:
        """Number of physical lines read so far."""
        return self._line_number

    @property
    def current_line(self) -> str:
        return self._text

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    def line_cursor(self) -> _CurrentLineCursor:
        """Cursor limited to the current line; it never triggers a refill."""
        return self._line_cursor

    # Refill -------------------------------------------------------------

    def _refill(self) -> bool:
        if self._detached:
            raise ValueError("LineBuffer has been detached from its source")
        self._generation += 1
        self._text = ""
        self._pos = 0
        if self._exhausted:
            return False
        try:
            raw = self._source.readline()
            if isinstance(raw, bytes):
                raw = raw.decode(self._encoding, self._errors)
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("I/O failure while reading line %d: %s", self._line_number + 1, exc)
            raise IoFailure(exc, line=self._line_number + 1) from exc
        if not raw:
            self._exhausted = True
            logger.debug("Source exhausted after %d lines", self._line_number)
            return False
        self._text = raw
        self._line_number += 1
        logger.debug("Read line %d (%d chars)", self._line_number, len(raw))
        return True

    def _next_on_line(self) -> Optional[TokenView]:
        if self._detached:
            raise ValueError("LineBuffer has been detached from its source")
        match = scan_token(self._text, self._pos)
        if match is None:
            self._pos = len(self._text)
            return None
        self._pos = match.end()
        self._consumed += 1
        return TokenView(self, self._generation, match.start(), match.end())

    def advance(self) -> Optional[TokenView]:
        while True:
            token = self._next_on_line()
            if token is not None:
                return token
            if not self._refill():
                return None

    @contextmanager
    def _locating(self) -> Iterator[None]:
        try:
            yield
        except WhiteError as exc:
            if exc.location.line is None:
                exc.location.line = self._line_number
            raise

    # Parsing ------------------------------------------------------------

    def parse(self, shape: Any) -> Any:
        """Parse a value without treating newlines specially (like ``scanf``)."""
        with self._locating():
            return as_shape(shape).read(self)

    def start_line(self, shape: Any = None) -> Any:
        """Read a new line, then parse ``shape`` from the start of it.

        Unconsumed tokens of the previous line are discarded. Without a
        shape the line is only loaded and ``None`` is returned.
        """
        with self._locating():
            if not self._refill():
                raise TooShort("no more lines")
        if shape is None:
            return None
        return self.continue_line(shape)

    def continue_line(self, shape: Any) -> Any:
        """Parse ``shape`` from the rest of the current line, never refilling."""
        with self._locating():
            return as_shape(shape).read(self._line_cursor)

    def finish_line(self, shape: Any = UNIT) -> Any:
        """Parse the remainder of the current line as ``shape`` exactly.

        With the default UNIT shape this just checks the line is used up.

        Raises:
            Leftovers: tokens remain on the line after ``shape`` was read.
        """
        value = self.continue_line(shape)
        extra = self._next_on_line()
        if extra is not None:
            raise Leftovers(found=extra.text, line=self._line_number, column=extra.column)
        return value

    def line(self, shape: Any) -> Any:
        """Read a new line and parse it as a whole into ``shape``."""
        self.start_line()
        return self.finish_line(shape)

    def peek_line(self) -> str:
        """Read a new line and return its raw text.

        The line is not considered consumed: its tokens stay available to
        :meth:`continue_line` and :meth:`parse`.
        """
        with self._locating():
            if not self._refill():
                raise TooShort("no more lines")
        return self._text

    def iter_parse(self, shape: Any) -> Iterator[Any]:
        """Yield values of ``shape`` until the input runs out.

        Iteration also ends at the first read that consumes no token, so
        shapes that never run short (``[int]``, ``UNIT``) terminate.
        """
        shape = as_shape(shape)
        while True:
            if self._exhausted and scan_token(self._text, self._pos) is None:
                return
            before = self._consumed
            try:
                value = self.parse(shape)
            except TooShort:
                return
            if self._consumed == before:
                return
            yield value

    def detach(self) -> Any:
        """Give the underlying source back; the buffer is unusable afterwards."""
        if self._detached:
            raise ValueError("LineBuffer has already been detached")
        self._detached = True
        self._generation += 1
        self._text = ""
        self._pos = 0
        source, self._source = self._source, None
        return source

    def __repr__(self) -> str:
        state = "detached" if self._detached else "exhausted" if self._exhausted else "open"
        return f"LineBuffer(line={self._line_number}, {state})"


__all__ = ["LineBuffer"]
