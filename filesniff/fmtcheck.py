"""Check that a printf-style format consumes the same arguments as another."""

from __future__ import annotations

import enum
from collections.abc import Iterator

__all__ = ["FormatKind", "format_kinds", "fmtcheck"]

_DIGITS = "0123456789"


class FormatKind(enum.Enum):
    """The kind of argument a printf directive consumes."""

    START = enum.auto()
    SHORT = enum.auto()
    INT = enum.auto()
    LONG = enum.auto()
    QUAD = enum.auto()
    SHORTPOINTER = enum.auto()
    INTPOINTER = enum.auto()
    LONGPOINTER = enum.auto()
    QUADPOINTER = enum.auto()
    DOUBLE = enum.auto()
    LONGDOUBLE = enum.auto()
    STRING = enum.auto()
    WIDTH = enum.auto()
    PRECISION = enum.auto()
    DONE = enum.auto()
    UNKNOWN = enum.auto()


def _at(fmt: str, pos: int) -> str:
    return fmt[pos] if pos < len(fmt) else ""


def _from_precision(fmt: str, pos: int) -> tuple[FormatKind, int]:
    short = long_ = quad = long_double = False
    ch = _at(fmt, pos)
    if ch == "h":
        pos += 1
        short = True
    elif ch == "l":
        pos += 1
        if not _at(fmt, pos):
            return FormatKind.UNKNOWN, pos
        if fmt[pos] == "l":
            pos += 1
            quad = True
        else:
            long_ = True
    elif ch == "q":
        pos += 1
        quad = True
    elif ch == "L":
        pos += 1
        long_double = True

    conv = _at(fmt, pos)
    if not conv:
        return FormatKind.UNKNOWN, pos
    any_modifier = short or long_ or quad or long_double

    if conv in "diouxX":
        if long_double:
            kind = FormatKind.UNKNOWN
        elif long_:
            kind = FormatKind.LONG
        elif quad:
            kind = FormatKind.QUAD
        else:
            kind = FormatKind.INT
    elif conv == "n":
        if long_double:
            kind = FormatKind.UNKNOWN
        elif short:
            kind = FormatKind.SHORTPOINTER
        elif long_:
            kind = FormatKind.LONGPOINTER
        elif quad:
            kind = FormatKind.QUADPOINTER
        else:
            kind = FormatKind.INTPOINTER
    elif conv in "DOU":
        kind = FormatKind.UNKNOWN if any_modifier else FormatKind.LONG
    elif conv in "eEfg":
        if long_double:
            kind = FormatKind.LONGDOUBLE
        elif short or long_ or quad:
            kind = FormatKind.UNKNOWN
        else:
            kind = FormatKind.DOUBLE
    elif conv == "c":
        kind = FormatKind.UNKNOWN if any_modifier else FormatKind.INT
    elif conv == "s":
        kind = FormatKind.UNKNOWN if any_modifier else FormatKind.STRING
    elif conv == "p":
        kind = FormatKind.UNKNOWN if any_modifier else FormatKind.LONG
    else:
        kind = FormatKind.UNKNOWN
    return kind, pos


def _from_width(fmt: str, pos: int) -> tuple[FormatKind, int]:
    if _at(fmt, pos) == ".":
        pos += 1
        if _at(fmt, pos) == "*":
            return FormatKind.PRECISION, pos
        while _at(fmt, pos) and fmt[pos] in _DIGITS:
            pos += 1
        if not _at(fmt, pos):
            return FormatKind.UNKNOWN, pos
    return _from_precision(fmt, pos)


def _next_directive(fmt: str, pos: int) -> tuple[FormatKind, int]:
    while True:
        found = fmt.find("%", pos)
        if found < 0:
            return FormatKind.DONE, len(fmt)
        pos = found + 1
        if not _at(fmt, pos):
            return FormatKind.UNKNOWN, pos
        if fmt[pos] != "%":
            break
        pos += 1

    while _at(fmt, pos) and fmt[pos] in "#0- +":
        pos += 1
    if _at(fmt, pos) == "*":
        return FormatKind.WIDTH, pos
    while _at(fmt, pos) and fmt[pos] in _DIGITS:
        pos += 1
    if not _at(fmt, pos):
        return FormatKind.UNKNOWN, pos
    return _from_width(fmt, pos)


def format_kinds(fmt: str) -> Iterator[FormatKind]:
    """Yield the argument kind of each directive in fmt, in order.

    Stops after the last directive; an unparsable directive yields
    FormatKind.UNKNOWN and ends the sequence.
    """
    pos = 0
    previous = FormatKind.START
    while True:
        if previous is FormatKind.WIDTH:
            kind, pos = _from_width(fmt, pos + 1)
        elif previous is FormatKind.PRECISION:
            kind, pos = _from_precision(fmt, pos + 1)
        else:
            kind, pos = _next_directive(fmt, pos)
        if kind is FormatKind.DONE:
            return
        yield kind
        if kind is FormatKind.UNKNOWN:
            return
        previous = kind


def fmtcheck(f1: str | None, f2: str) -> str:
    """Return f1 if its directives agree with those of f2, otherwise f2."""
    if f1 is None:
        return f2
    theirs = format_kinds(f2)
    for kind in format_kinds(f1):
        if kind is FormatKind.UNKNOWN:
            return f2
        if next(theirs, FormatKind.DONE) is not kind:
            return f2
    return f1