"""Value shapes: how each kind of value pulls itself out of a token cursor.

A shape is any object with a ``read(cursor)`` method. Scalars consume one
token, tuples read their components left to right, sequences read items
until the cursor runs dry. Shapes compose freely, so
``Seq(Tuple(CHAR, INT))`` reads ``"a 1 b 2"`` as ``[("a", 1), ("b", 2)]``.
"""

from __future__ import annotations

import math
import re
import struct
from fractions import Fraction
from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple as TupleT, TypeVar, runtime_checkable

from .cursor import TokenCursor, TokenView
from .errors import ParseError, TooShort

T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class Shape(Protocol[T_co]):
    """Structural parsing definition for one kind of value."""

    def read(self, cursor: TokenCursor) -> T_co:
        ...


class Scalar:
    """Shape consuming exactly one token and converting its text."""

    def __init__(self, name: str, convert: Callable[[str], Any]) -> None:
        self.name = name
        self.convert = convert

    def read(self, cursor: TokenCursor) -> Any:
        token = cursor.advance()
        if token is None:
            raise TooShort(expected=self.name)
        text = token.text
        try:
            return self.convert(text)
        except (ValueError, OverflowError) as exc:
            raise ParseError(expected=self.name, found=text, column=token.column) from exc

    def __repr__(self) -> str:
        return self.name.upper()


# Scalar conversions -------------------------------------------------------

_SIGNED_INTEGER = re.compile(r"[+-]?[0-9]+", re.ASCII)
_UNSIGNED_INTEGER = re.compile(r"\+?[0-9]+", re.ASCII)
_FLOAT = re.compile(
    r"[+-]?(?:inf|infinity|nan|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:e[+-]?[0-9]+)?)",
    re.ASCII | re.IGNORECASE,
)


def _parse_int(text: str) -> int:
    if not _SIGNED_INTEGER.fullmatch(text):
        raise ValueError(f"invalid integer literal {text!r}")
    return int(text)


def _bounded_int(bits: int, signed: bool) -> Callable[[str], int]:
    if signed:
        low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
        pattern = _SIGNED_INTEGER
    else:
        low, high = 0, (1 << bits) - 1
        pattern = _UNSIGNED_INTEGER

    def convert(text: str) -> int:
        if not pattern.fullmatch(text):
            raise ValueError(f"invalid integer literal {text!r}")
        value = int(text)
        if not low <= value <= high:
            raise OverflowError(f"{value} out of range [{low}, {high}]")
        return value

    return convert


def _parse_f64(text: str) -> float:
    if not _FLOAT.fullmatch(text):
        raise ValueError(f"invalid float literal {text!r}")
    return float(text)


_F32_INF_BITS = 0x7F800000


def _f32_bits(value: float) -> int:
    return struct.unpack("<I", struct.pack("<f", value))[0]


def _f32_value(bits: int) -> Fraction:
    # infinity sits where the next binade would start, so halfway cases round to it
    if bits == _F32_INF_BITS:
        return Fraction(2**128)
    return Fraction(struct.unpack("<f", struct.pack("<I", bits))[0])


def _parse_f32(text: str) -> float:
    value = _parse_f64(text)
    if value == 0.0 or not math.isfinite(value):
        return value
    # Rounding through f64 first can land on an f32 midpoint, so pick among
    # the neighbours of the f64 guess using the exact decimal value.
    try:
        guess = _f32_bits(abs(value))
    except OverflowError:
        guess = _F32_INF_BITS
    exact = abs(Fraction(text))
    candidates = [bits for bits in (guess - 1, guess, guess + 1) if 0 <= bits <= _F32_INF_BITS]
    best = min(candidates, key=lambda bits: (abs(_f32_value(bits) - exact), bits & 1))
    if best == _F32_INF_BITS:
        return math.copysign(math.inf, value)
    return math.copysign(float(_f32_value(best)), value)


def _parse_bool(text: str) -> bool:
    if text == "true":
        return True
    if text == "false":
        return False
    raise ValueError(f"invalid boolean literal {text!r}")


_INTEGER_WIDTHS: Dict[str, TupleT[int, bool]] = {
    "i8": (8, True),
    "i16": (16, True),
    "i32": (32, True),
    "i64": (64, True),
    "isize": (64, True),
    "u8": (8, False),
    "u16": (16, False),
    "u32": (32, False),
    "u64": (64, False),
    "usize": (64, False),
}

SCALARS: Dict[str, Scalar] = {
    name: Scalar(name, _bounded_int(bits, signed)) for name, (bits, signed) in _INTEGER_WIDTHS.items()
}
SCALARS.update(
    {
        "int": Scalar("int", _parse_int),
        "f32": Scalar("f32", _parse_f32),
        "f64": Scalar("f64", _parse_f64),
        "bool": Scalar("bool", _parse_bool),
        "str": Scalar("str", str),
    }
)

I8 = SCALARS["i8"]
I16 = SCALARS["i16"]
I32 = SCALARS["i32"]
I64 = SCALARS["i64"]
ISIZE = SCALARS["isize"]
U8 = SCALARS["u8"]
U16 = SCALARS["u16"]
U32 = SCALARS["u32"]
U64 = SCALARS["u64"]
USIZE = SCALARS["usize"]
INT = SCALARS["int"]
F32 = SCALARS["f32"]
F64 = SCALARS["f64"]
BOOL = SCALARS["bool"]
STR = SCALARS["str"]


class Char:
    """First character of the next token."""

    def read(self, cursor: TokenCursor) -> str:
        token = cursor.advance()
        if token is None or not len(token):
            raise TooShort(expected="char")
        return token.text[0]

    def __repr__(self) -> str:
        return "CHAR"


class Unit:
    """Consumes nothing and always succeeds.

    Paired with :meth:`LineBuffer.finish_line` it asserts that the current
    line has no tokens left.
    """

    def read(self, cursor: TokenCursor) -> TupleT[()]:
        return ()

    def __repr__(self) -> str:
        return "UNIT"


CHAR = Char()
UNIT = Unit()


# Composite shapes -----------------------------------------------------------


class Tuple:
    """Fixed-arity tuple, components read left to right."""

    def __init__(self, *shapes: Any) -> None:
        self.shapes = tuple(as_shape(shape) for shape in shapes)

    def read(self, cursor: TokenCursor) -> tuple:
        return tuple(shape.read(cursor) for shape in self.shapes)

    def __repr__(self) -> str:
        return f"Tuple({', '.join(map(repr, self.shapes))})"


class _CountingCursor:
    """Forwards to another cursor, counting the tokens handed out."""

    def __init__(self, cursor: TokenCursor) -> None:
        self._cursor = cursor
        self.count = 0

    def advance(self) -> Optional[TokenView]:
        token = self._cursor.advance()
        if token is not None:
            self.count += 1
        return token


class Seq:
    """Eager sequence: reads items until the cursor runs out of input.

    Reading also stops at the first item that consumed no token, so item
    shapes such as ``UNIT`` or a nested ``Seq`` cannot repeat forever.
    """

    def __init__(self, item: Any) -> None:
        self.item = as_shape(item)

    def read(self, cursor: TokenCursor) -> List[Any]:
        counting = _CountingCursor(cursor)
        items: List[Any] = []
        while True:
            before = counting.count
            try:
                item = self.item.read(counting)
            except TooShort:
                return items
            if counting.count == before:
                return items
            items.append(item)

    def __repr__(self) -> str:
        return f"Seq({self.item!r})"


class Lengthed:
    """Sequence prefixed by its element count.

    ``"3 5 6 7"`` reads as ``[5, 6, 7]``. Reading stops right after the last
    counted item, so trailing tokens stay available on the cursor.
    """

    def __init__(self, item: Any) -> None:
        self.item = as_shape(item)

    def read(self, cursor: TokenCursor) -> List[Any]:
        count = USIZE.read(cursor)
        return [self.item.read(cursor) for _ in range(count)]

    def __repr__(self) -> str:
        return f"Lengthed({self.item!r})"


class Zeroed:
    """Sequence terminated by a zero value (the terminator is dropped)."""

    def __init__(self, item: Any = INT, zero: Any = 0) -> None:
        self.item = as_shape(item)
        self.zero = zero

    def read(self, cursor: TokenCursor) -> List[Any]:
        counting = _CountingCursor(cursor)
        items: List[Any] = []
        while True:
            before = counting.count
            value = self.item.read(counting)
            if value == self.zero:
                return items
            if counting.count == before:
                raise TooShort(expected=f"{self.zero!r} terminating {self!r}")
            items.append(value)

    def __repr__(self) -> str:
        return f"Zeroed({self.item!r})"


_BUILTIN_SHAPES: Dict[type, Any] = {
    int: INT,
    float: F64,
    str: STR,
    bool: BOOL,
}


def as_shape(spec: Any) -> Shape:
    """Coerce a shape spec into a shape.

    Accepts shapes and any object (or class) with a ``read(cursor)`` method,
    plus the shorthands ``int``, ``float``, ``str``, ``bool``, ``None`` /
    ``()`` for UNIT, a tuple of specs and a one-item list ``[spec]`` for a
    sequence.
    """

    if spec is None:
        return UNIT
    if isinstance(spec, type) and spec in _BUILTIN_SHAPES:
        return _BUILTIN_SHAPES[spec]
    if callable(getattr(spec, "read", None)):
        return spec
    if isinstance(spec, tuple):
        return Tuple(*spec) if spec else UNIT
    if isinstance(spec, list):
        if len(spec) != 1:
            raise TypeError(f"sequence spec must hold exactly one item shape, got {spec!r}")
        return Seq(spec[0])
    raise TypeError(f"cannot parse values of shape {spec!r}")


def read_value(spec: Any, cursor: TokenCursor) -> Any:
    """Read one value of shape ``spec`` from ``cursor``."""

    return as_shape(spec).read(cursor)


__all__ = [
    "Shape",
    "Scalar",
    "SCALARS",
    "I8",
    "I16",
    "I32",
    "I64",
    "ISIZE",
    "U8",
    "U16",
    "U32",
    "U64",
    "USIZE",
    "INT",
    "F32",
    "F64",
    "BOOL",
    "STR",
    "CHAR",
    "UNIT",
    "Char",
    "Unit",
    "Tuple",
    "Seq",
    "Lengthed",
    "Zeroed",
    "as_shape",
    "read_value",
]
