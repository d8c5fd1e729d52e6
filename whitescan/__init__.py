"""
Whitespace-separated value reading.

``whitescan`` parses integers, floats, characters, strings, tuples and
sequences out of loosely formatted text, the kind of input programming
contest problems and numeric tools tend to consume.

The package is organised into several modules:

* ``cursor`` – token cursors. A token is a maximal run of non-whitespace
  characters, handed out as an offset view into the text that holds it.
* ``shapes`` – value shapes. Each shape knows how to read itself from a
  cursor; scalars take one token, tuples and sequences recurse.
* ``reader`` – :class:`LineBuffer`, a line-buffered reader over a byte or
  text source offering both line-aware and newline-agnostic parsing.
* ``helpers`` – ``parse_string`` and ``parse_line`` for one-off parsing.
* ``errors`` – the ``TooShort`` / ``Leftovers`` / ``ParseError`` /
  ``IoFailure`` taxonomy and the ``ok_or_none`` combinator.

Example::

    >>> from whitescan import parse_string, Lengthed
    >>> parse_string("2 1 3 4", ((int, int), (int, int)))
    ((2, 1), (3, 4))
    >>> parse_string("2 1 3", Lengthed(int))
    [1, 3]
"""

from importlib import metadata as _metadata

from .config import ReaderSettings, get_settings, reset_settings
from .cursor import StringCursor, TokenCursor, TokenView, tokenize
from .errors import (
    ErrorLocation,
    IoFailure,
    Leftovers,
    ParseError,
    StaleTokenError,
    TooShort,
    WhiteError,
    ok_or_none,
)
from .helpers import parse_line, parse_string
from .observability import configure_logging, get_logger
from .reader import LineBuffer
from .shapes import (
    BOOL,
    CHAR,
    F32,
    F64,
    I8,
    I16,
    I32,
    I64,
    INT,
    ISIZE,
    STR,
    U8,
    U16,
    U32,
    U64,
    UNIT,
    USIZE,
    Lengthed,
    Scalar,
    Seq,
    Shape,
    Tuple,
    Zeroed,
    as_shape,
    read_value,
)


try:
    __version__ = _metadata.version("whitescan")
except _metadata.PackageNotFoundError:  # pragma: no cover - running from a source checkout
    __version__ = "0.1.0"

__all__ = [
    "__version__",
    "LineBuffer",
    "StringCursor",
    "TokenCursor",
    "TokenView",
    "tokenize",
    "parse_string",
    "parse_line",
    "ErrorLocation",
    "WhiteError",
    "TooShort",
    "Leftovers",
    "ParseError",
    "IoFailure",
    "StaleTokenError",
    "ok_or_none",
    "ReaderSettings",
    "get_settings",
    "reset_settings",
    "get_logger",
    "configure_logging",
    "Shape",
    "Scalar",
    "Tuple",
    "Seq",
    "Lengthed",
    "Zeroed",
    "as_shape",
    "read_value",
    "BOOL",
    "CHAR",
    "F32",
    "F64",
    "I8",
    "I16",
    "I32",
    "I64",
    "INT",
    "ISIZE",
    "STR",
    "U8",
    "U16",
    "U32",
    "U64",
    "UNIT",
    "USIZE",
]
