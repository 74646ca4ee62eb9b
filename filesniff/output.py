"""Accumulating description buffer with printf-style appends and error state."""

from __future__ import annotations

import enum
import os
import re
import uuid
from dataclasses import dataclass

__all__ = [
    "Flags",
    "MagicError",
    "Output",
    "check_format",
    "check_regex",
    "printable",
    "parse_guid",
    "format_guid",
    "strtrim",
]

SEPARATOR = "\n- "
_MAX_PIECE = 1024
_MAX_TOTAL = 1024 * 1024
_FIELD_LIMIT = 1024
_REGEX_BOUND_LIMIT = 1000
_C_WHITESPACE = " \t\n\v\f\r"


class Flags(enum.IntFlag):
    """Options that control classification and output."""

    NONE = 0
    DEBUG = 0x0000001
    SYMLINK = 0x0000002
    COMPRESS = 0x0000004
    DEVICES = 0x0000008
    MIME_TYPE = 0x0000010
    CONTINUE = 0x0000020
    CHECK = 0x0000040
    PRESERVE_ATIME = 0x0000080
    RAW = 0x0000100
    ERROR = 0x0000200
    MIME_ENCODING = 0x0000400
    MIME = MIME_TYPE | MIME_ENCODING
    APPLE = 0x0000800
    NO_CHECK_COMPRESS = 0x0001000
    NO_CHECK_TAR = 0x0002000
    NO_CHECK_SOFT = 0x0004000
    NO_CHECK_APPTYPE = 0x0008000
    NO_CHECK_ELF = 0x0010000
    NO_CHECK_TEXT = 0x0020000
    NO_CHECK_CDF = 0x0040000
    NO_CHECK_CSV = 0x0080000
    NO_CHECK_TOKENS = 0x0100000
    NO_CHECK_ENCODING = 0x0200000
    NO_CHECK_JSON = 0x0400000
    NO_CHECK_SIMH = 0x0800000
    EXTENSION = 0x1000000
    COMPRESS_TRANSP = 0x2000000
    NO_COMPRESS_FORK = 0x4000000


class MagicError(Exception):
    """An error recorded in an Output buffer."""

    def __init__(self, message: str, errno: int = 0) -> None:
        super().__init__(message)
        self.errno = errno


@dataclass(frozen=True)
class _Saved:
    buf: str | None
    offset: int


def _octal(byte: int) -> str:
    return "\\%o%o%o" % ((byte >> 6) & 7, (byte >> 3) & 7, byte & 7)


def _is_c_print(byte: int) -> bool:
    return 0x20 <= byte < 0x7F


def _to_bytes(text: str) -> bytes:
    try:
        return text.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        return text.encode("utf-8", "surrogatepass")


def _check_field(fmt: str, pos: int, what: str) -> int:
    match = re.match(r"[0-9]*", fmt[pos:])
    digits = match.group(0)
    if digits and int(digits) >= _FIELD_LIMIT:
        raise ValueError(f"field {what} too large: {int(digits)}")
    return pos + len(digits)


def check_format(fmt: str) -> None:
    """Reject printf formats with '*', oversized fields or bad conversions."""
    pos, end = 0, len(fmt)
    while pos < end:
        if fmt[pos] != "%":
            pos += 1
            continue
        pos += 1
        if pos < end and fmt[pos] == "%":
            pos += 1
            continue
        while pos < end and fmt[pos] in "#0.'+- ":
            pos += 1
        if pos < end and fmt[pos] == "*":
            raise ValueError("* not allowed in format")
        pos = _check_field(fmt, pos, "width")
        if pos < end and fmt[pos] == ".":
            pos = _check_field(fmt, pos + 1, "precision")
        ch = fmt[pos] if pos < end else ""
        if not (ch.isascii() and ch.isalpha()):
            raise ValueError(f"bad format char: {ch}")
        pos += 1
    return None


def check_regex(pattern: str) -> None:
    """Reject regexes with doubled repetition, huge bounds or odd characters."""
    previous = ""
    for pos, ch in enumerate(pattern):
        if ch == previous and ch in "?*+{":
            raise ValueError(
                f"repetition-operator operand `{ch}' invalid in regex "
                f"`{printable(pattern, False)}'"
            )
        if ch == "{":
            first = re.match(r"[0-9]*", pattern[pos + 1:]).group(0)
            if first and int(first) > _REGEX_BOUND_LIMIT:
                raise ValueError(
                    f"bounds too large {int(first)} in regex `{pattern}'")
            after = pos + 1 + len(first)
            if after < len(pattern) and pattern[after] == ",":
                second = re.match(r"[0-9]*", pattern[after + 1:]).group(0)
                if second and int(second) > _REGEX_BOUND_LIMIT:
                    raise ValueError(
                        f"bounds too large {int(second)} in regex `{pattern}'")
        previous = ch
        code = ord(ch)
        if _is_c_print(code) or ch in _C_WHITESPACE or ch == "\b" or code == 0x8A:
            continue
        raise ValueError(
            f"non-ascii characters in regex \\0{code:o} "
            f"`{printable(pattern, False)}'"
        )
    return None


def printable(data: bytes | str, raw: bool) -> str:
    """Return data up to its first NUL, with unprintable bytes in octal."""
    if isinstance(data, str):
        data = _to_bytes(data)
    data = data.split(b"\0", 1)[0]
    if raw:
        return data.decode("utf-8", "surrogateescape")
    return "".join(chr(b) if _is_c_print(b) else _octal(b) for b in data)


_GUID_RE = re.compile(
    r"\s*([0-9a-fA-F]{1,8})-([0-9a-fA-F]{1,4})-([0-9a-fA-F]{1,4})-"
    r"([0-9a-fA-F]{1,2})([0-9a-fA-F]{1,2})-"
    r"([0-9a-fA-F]{1,2})([0-9a-fA-F]{1,2})([0-9a-fA-F]{1,2})"
    r"([0-9a-fA-F]{1,2})([0-9a-fA-F]{1,2})([0-9a-fA-F]{1,2})"
)


def parse_guid(text: str) -> uuid.UUID:
    """Parse a GUID in its dashed hexadecimal form."""
    match = _GUID_RE.match(text)
    if match is None:
        raise ValueError(f"invalid GUID: {text!r}")
    parts = [int(group, 16) for group in match.groups()]
    node = 0
    for part in parts[5:]:
        node = (node << 8) | part
    return uuid.UUID(fields=(parts[0], parts[1], parts[2], parts[3], parts[4], node))


def format_guid(guid: uuid.UUID) -> str:
    """Format a GUID in upper-case dashed hexadecimal."""
    return str(guid).upper()


def strtrim(text: str) -> str:
    """Strip leading and trailing whitespace."""
    return text.strip(_C_WHITESPACE)


class Output:
    """The description being built for one file, plus its error state."""

    def __init__(self, flags: Flags | int = Flags.NONE) -> None:
        self.flags = Flags(flags)
        self.buf: str | None = None
        self.offset = 0
        self.had_error = False
        self.error_code = -1

    def append(self, text: str) -> None:
        """Append already formatted text, enforcing the size limits."""
        if self.had_error:
            return
        blen = len(self.buf) if self.buf is not None else 0
        if len(text) > _MAX_PIECE or len(text) + blen > _MAX_TOTAL:
            self.buf = None
            self.error(f"Output buffer space exceeded {len(text)}+{blen}", 0)
        self.buf = (self.buf or "") + text

    def printf(self, fmt: str, *args: object) -> None:
        """Format with printf-style conversions and append."""
        if self.had_error:
            return
        try:
            check_format(fmt)
        except ValueError as exc:
            self.buf = None
            self.error(f"Bad magic format `{fmt}' ({exc})", 0)
        self.append(fmt % args)

    def _error_core(self, message: str, errno: int, lineno: int) -> None:
        if not self.had_error:
            if lineno:
                self.buf = f"line {lineno}:"
            text = " " + message if self.buf else message
            if errno > 0:
                text += f" ({os.strerror(errno)})"
            self.buf = (self.buf or "") + text
            self.had_error = True
            self.error_code = errno
        raise MagicError(self.buf or "", self.error_code)

    def error(self, message: str, errno: int = 0) -> None:
        """Record the first error and raise MagicError."""
        self._error_core(message, errno, 0)

    def magic_error(self, message: str, lineno: int = 0) -> None:
        """Record an error tagged with a magic-file line number and raise."""
        self._error_core(message, 0, lineno)

    def separator(self) -> None:
        self.printf(SEPARATOR)

    def trim_separator(self) -> None:
        """Drop a trailing separator left by the last continued match."""
        if self.buf is None or len(self.buf) < len(SEPARATOR) + 1:
            return
        if self.buf.endswith(SEPARATOR):
            self.buf = self.buf[: -len(SEPARATOR)]

    def reset(self) -> None:
        self.buf = None
        self.had_error = False
        self.error_code = -1

    def getbuffer(self) -> str | None:
        """Return the description with unprintable characters escaped."""
        if self.had_error or self.buf is None:
            return None
        if self.flags & Flags.RAW:
            return self.buf
        data = _to_bytes(self.buf.split("\0", 1)[0])
        try:
            decoded = data.decode("utf-8")
        except UnicodeDecodeError:
            return "".join(chr(b) if _is_c_print(b) else _octal(b) for b in data)
        return "".join(
            ch if ch.isprintable() else "".join(_octal(b) for b in ch.encode("utf-8"))
            for ch in decoded
        )

    def push(self) -> _Saved:
        """Save and clear the buffer so a nested description can be built."""
        if self.had_error:
            raise MagicError(self.buf or "", self.error_code)
        saved = _Saved(self.buf, self.offset)
        self.buf = None
        self.offset = 0
        return saved

    def pop(self, saved: _Saved) -> str | None:
        """Restore a saved buffer and return what was built since the push."""
        if self.had_error:
            return None
        result = self.buf
        self.buf = saved.buf
        self.offset = saved.offset
        return result

    def replace(self, pattern: str, replacement: str) -> int:
        """Replace every match of pattern in the buffer; return the count."""
        check_regex(pattern)
        try:
            rx = re.compile(pattern)
        except re.error as exc:
            raise ValueError(f"regex error for `{pattern}' ({exc})") from exc
        count = 0
        while not self.had_error and self.buf is not None:
            match = rx.search(self.buf)
            if match is None:
                break
            rest = self.buf[match.end():] if match.end() else ""
            self.buf = self.buf[: match.start()]
            self.append(replacement + rest)
            count += 1
            if match.start() == match.end():
                break
        return count

    def default(self, nbytes: int) -> bool:
        """Write the fallback description for the active mode, if any."""
        if self.flags & Flags.MIME:
            if self.flags & Flags.MIME_TYPE:
                self.printf("application/%s",
                            "octet-stream" if nbytes else "x-empty")
            return True
        if self.flags & Flags.APPLE:
            self.printf("UNKNUNKN")
            return True
        if self.flags & Flags.EXTENSION:
            self.printf("???")
            return True
        return False