"""Token cursors: lazy, non-restartable streams of whitespace-delimited tokens.

A token is handed out as a :class:`TokenView`, a pair of offsets into the
text owned by whoever produced it. Nothing is copied until the caller asks
for :attr:`TokenView.text`, and a view refuses to materialize once its owner
has replaced the text it points into.
"""

from __future__ import annotations

import re
from typing import Iterator, Optional, Protocol, runtime_checkable

from .errors import StaleTokenError

TOKEN_PATTERN = re.compile(r"\S+")


class TokenView:
    """Borrowed view of one token inside its owner's current text."""

    __slots__ = ("_owner", "_generation", "start", "end")

    def __init__(self, owner, generation: int, start: int, end: int) -> None:
        self._owner = owner
        self._generation = generation
        self.start = start
        self.end = end

    @property
    def valid(self) -> bool:
        return self._owner._generation == self._generation

    @property
    def text(self) -> str:
        if not self.valid:
            raise StaleTokenError(
                f"token at offsets {self.start}:{self.end} outlived the buffer it pointed into"
            )
        return self._owner._text[self.start:self.end]

    @property
    def column(self) -> int:
        return self.start + 1

    def __len__(self) -> int:
        return self.end - self.start

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        if self.valid:
            return f"TokenView({self.text!r}, {self.start}:{self.end})"
        return f"TokenView(<stale>, {self.start}:{self.end})"


@runtime_checkable
class TokenCursor(Protocol):
    """Anything that yields tokens on demand.

    ``advance()`` returns the next token, or ``None`` once the input is
    exhausted. After the first ``None`` every further call returns ``None``.
    Providers backed by I/O raise :class:`~whitescan.errors.IoFailure`.
    """

    def advance(self) -> Optional[TokenView]:
        ...


def scan_token(text: str, pos: int) -> Optional[re.Match]:
    """Locate the first token in ``text`` at or after ``pos``."""

    return TOKEN_PATTERN.search(text, pos)


class StringCursor:
    """One-shot cursor over a fixed string."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._generation = 0
        self._pos = 0

    @property
    def exhausted(self) -> bool:
        return self._pos >= len(self._text)

    def advance(self) -> Optional[TokenView]:
        if self.exhausted:
            return None
        match = scan_token(self._text, self._pos)
        if match is None:
            self._pos = len(self._text)
            return None
        self._pos = match.end()
        return TokenView(self, self._generation, match.start(), match.end())

    def __iter__(self) -> Iterator[str]:
        while True:
            token = self.advance()
            if token is None:
                return
            yield token.text


def tokenize(text: str) -> StringCursor:
    """Return a cursor over the whitespace-separated tokens of ``text``."""

    return StringCursor(text)


__all__ = ["TokenView", "TokenCursor", "StringCursor", "scan_token", "tokenize", "TOKEN_PATTERN"]
