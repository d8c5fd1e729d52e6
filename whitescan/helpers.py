"""Whole-string and single-line convenience entry points."""

from __future__ import annotations

import sys
from typing import Any, Optional

from .config import get_settings
from .cursor import StringCursor
from .errors import IoFailure, Leftovers, TooShort
from .shapes import as_shape


def parse_string(text: str, shape: Any) -> Any:
    """Parse ``text`` as a whole into ``shape``.

    Example:
        >>> parse_string(" 123  ", int)
        123
        >>> parse_string("answer 42", (str, int))
        ('answer', 42)

    Raises:
        TooShort: ``text`` ran out before ``shape`` was complete.
        Leftovers: tokens remained after ``shape`` was read.
        ParseError: a token did not convert.
    """

    cursor = StringCursor(text)
    value = as_shape(shape).read(cursor)
    extra = cursor.advance()
    if extra is not None:
        raise Leftovers(found=extra.text, column=extra.column)
    return value


def parse_line(shape: Any, source: Optional[Any] = None) -> Any:
    """Read one line from ``source`` (standard input by default) and parse it whole.

    Reads a single line per call, so prefer :class:`~whitescan.reader.LineBuffer`
    for anything longer than a few lines.
    """

    source = source if source is not None else sys.stdin
    try:
        line = source.readline()
        if isinstance(line, bytes):
            settings = get_settings()
            line = line.decode(settings.encoding, settings.decode_errors)
    except (OSError, UnicodeDecodeError) as exc:
        raise IoFailure(exc) from exc
    if not line:
        raise TooShort("no more lines")
    return parse_string(line, shape)


__all__ = ["parse_string", "parse_line"]
