"""Error taxonomy shared by token cursors, shapes and the line buffer.

Every failure raised while parsing belongs to one of four kinds:

- ``TooShort``  - not enough tokens (or lines) to complete a value
- ``Leftovers`` - tokens remained where exact consumption was required
- ``ParseError`` - a token's text did not convert to the expected scalar
- ``IoFailure`` - the underlying source failed while refilling
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar

T = TypeVar("T")


@dataclass
class ErrorLocation:
    line: Optional[int] = None
    column: Optional[int] = None

    def describe(self) -> str:
        if self.line is not None and self.column is not None:
            return f"line {self.line}, column {self.column}"
        if self.line is not None:
            return f"line {self.line}"
        if self.column is not None:
            return f"column {self.column}"
        return "unknown location"


class WhiteError(Exception):
    """Base class for every parse failure surfaced to callers."""

    code: str = "WHITE_ERROR"
    default_message: str = "parsing failed"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        line: Optional[int] = None,
        column: Optional[int] = None,
        expected: Optional[str] = None,
        found: Optional[str] = None,
    ) -> None:
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.location = ErrorLocation(line=line, column=column)
        self.expected = expected
        self.found = found

    @property
    def line(self) -> Optional[int]:
        return self.location.line

    @property
    def column(self) -> Optional[int]:
        return self.location.column

    def format(self) -> str:
        text = self.message
        details = []
        if self.expected:
            details.append(f"expected {self.expected}")
        if self.found is not None:
            details.append(f"found {self.found!r}")
        if details:
            text = f"{text}: {', '.join(details)}"
        location = self.location.describe()
        if location != "unknown location":
            text = f"{text} ({location}; {self.code})"
        else:
            text = f"{text} ({self.code})"
        return text

    def __str__(self) -> str:
        return self.format()


class TooShort(WhiteError):
    """There was not enough input to parse a value."""

    code = "TOO_SHORT"
    default_message = "not enough input to parse a value"


class Leftovers(WhiteError):
    """Excessive input was provided."""

    code = "LEFTOVERS"
    default_message = "excessive input provided"


class ParseError(WhiteError):
    """A token was not in the format its scalar shape expects."""

    code = "PARSE_ERROR"
    default_message = "parse error occurred"


class IoFailure(WhiteError):
    """The underlying source reported an error while reading a line."""

    code = "IO_FAILURE"

    def __init__(self, error: BaseException, *, line: Optional[int] = None) -> None:
        super().__init__(str(error) or type(error).__name__, line=line)
        self.error = error


class StaleTokenError(RuntimeError):
    """Raised when a token view is read after its buffer was refilled."""


def ok_or_none(func: Callable[..., T], *args: Any, **kwargs: Any) -> Optional[T]:
    """Call ``func``, turning ``TooShort`` into ``None``.

    Any other error propagates. Handy for loops that should stop quietly at
    the natural end of input::

        total = 0
        while (value := ok_or_none(reader.parse, int)) is not None:
            total += value
    """

    try:
        return func(*args, **kwargs)
    except TooShort:
        return None


__all__ = [
    "ErrorLocation",
    "WhiteError",
    "TooShort",
    "Leftovers",
    "ParseError",
    "IoFailure",
    "StaleTokenError",
    "ok_or_none",
]
