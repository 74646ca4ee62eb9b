"""Recognise comma-separated values text (RFC 4180)."""

from __future__ import annotations

from .output import Flags, Output

__all__ = ["CSV_LINES", "csv_parse", "describe_csv"]

CSV_LINES = 10

_QUOTE = ord('"')
_COMMA = ord(",")
_NEWLINE = ord("\n")


def _eat_quote(data: bytes, pos: int) -> int:
    """Skip a quoted field body; return the position after its closing quote."""
    end = len(data)
    quote = False
    while pos < end:
        c = data[pos]
        pos += 1
        if c != _QUOTE:
            if quote:
                return pos - 1
            continue
        # A doubled quote is an escaped quote.
        quote = not quote
    return end


def csv_parse(data: bytes, max_lines: int = CSV_LINES) -> bool:
    """Return True if data looks like CSV with a constant field count.

    Only the first max_lines lines are checked; 0 means all of them.
    """
    data = bytes(data)
    end = len(data)
    fields = expected = lines = 0
    pos = 0
    while pos < end:
        c = data[pos]
        pos += 1
        if c == _QUOTE:
            pos = _eat_quote(data, pos)
        elif c == _COMMA:
            fields += 1
        elif c == _NEWLINE:
            lines += 1
            if max_lines and lines == max_lines:
                return expected > 1 and expected == fields
            if expected == 0:
                if fields == 0:
                    return False
                expected = fields
            elif expected != fields:
                return False
            fields = 0
    return expected > 1 and lines >= 2


def describe_csv(out: Output, data: bytes, looks_text: bool,
                 code: str | None) -> bool:
    """Describe data as CSV text if it is; return True on a match."""
    if not looks_text:
        return False
    if out.flags & (Flags.APPLE | Flags.EXTENSION):
        return False
    if not csv_parse(data):
        return False
    mime = out.flags & Flags.MIME
    if mime == Flags.MIME_ENCODING:
        return True
    if mime:
        out.printf("text/csv")
        return True
    out.printf("CSV %s%stext", code or "", " " if code else "")
    return True