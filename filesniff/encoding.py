"""Guess the character encoding of a buffer that may hold text."""

from __future__ import annotations

from dataclasses import dataclass, field

from .charclass import (
    CharClass,
    char_class,
    from_ebcdic,
    looks_ascii,
    looks_extended,
    looks_latin1,
    looks_utf8,
)

__all__ = [
    "FILE_ENCODING_MAX",
    "TextEncoding",
    "detect_encoding",
    "looks_utf8_with_bom",
    "looks_utf7",
    "looks_ucs16",
    "looks_ucs32",
]

FILE_ENCODING_MAX = 64 * 1024

_UTF8_BOM = b"\xef\xbb\xbf"


@dataclass(frozen=True)
class TextEncoding:
    """Outcome of encoding detection.

    ``chars`` holds the decoded code points where the detector produced them.
    """

    looks_text: bool
    code: str
    code_mime: str
    kind: str
    chars: list[int] = field(default_factory=list)


def looks_utf8_with_bom(data: bytes) -> tuple[int, list[int]]:
    """Scan the text after a UTF-8 byte-order mark.

    Returns (-1, []) when there is no mark, otherwise the verdict and code
    points of the UTF-8 scan of the rest.
    """
    if len(data) > 3 and data[:3] == _UTF8_BOM:
        return looks_utf8(data[3:])
    return -1, []


def looks_utf7(data: bytes) -> bool:
    """Return True if data starts with a UTF-7 signature."""
    return len(data) > 4 and data[:3] == b"+/v" and data[3:4] in (b"8", b"9", b"+", b"/")


def _is_nochar16(code: int) -> bool:
    return 0xFDD0 <= code <= 0xFDEF


def _is_high_surrogate(code: int) -> bool:
    return 0xD800 <= code <= 0xDBFF


def _is_low_surrogate(code: int) -> bool:
    return 0xDC00 <= code <= 0xDFFF


def _is_plain_text(code: int) -> bool:
    return code >= 128 or char_class(code) == CharClass.ASCII


def looks_ucs16(data: bytes) -> tuple[int, list[int]]:
    """Scan data as UTF-16 with a byte-order mark.

    Returns (0, []) if it is not, (1, chars) for little-endian and
    (2, chars) for big-endian.
    """
    if len(data) < 2:
        return 0, []
    if data[:2] == b"\xff\xfe":
        order = "little"
    elif data[:2] == b"\xfe\xff":
        order = "big"
    else:
        return 0, []

    chars: list[int] = []
    high = 0
    end = len(data) - (len(data) % 2)
    for pos in range(2, end, 2):
        code = int.from_bytes(data[pos:pos + 2], order)
        if code in (0xFFFE, 0xFFFF) or _is_nochar16(code):
            return 0, []
        if high:
            if not _is_low_surrogate(code):
                return 0, []
            code = 0x10000 + 0x400 * (high - 1) + (code - 0xDC00)
            high = 0
        if not _is_plain_text(code):
            return 0, []
        chars.append(code)
        if _is_high_surrogate(code):
            high = code - 0xD800 + 1
        if _is_low_surrogate(code):
            return 0, []
    return (1 if order == "little" else 2), chars


def looks_ucs32(data: bytes) -> tuple[int, list[int]]:
    """Scan data as UTF-32 with a byte-order mark.

    Returns (0, []) if it is not, (1, chars) for little-endian and
    (2, chars) for big-endian.
    """
    if len(data) < 4:
        return 0, []
    if data[:4] == b"\xff\xfe\x00\x00":
        order = "little"
    elif data[:4] == b"\x00\x00\xfe\xff":
        order = "big"
    else:
        return 0, []

    chars: list[int] = []
    end = len(data) - (len(data) % 4)
    for pos in range(4, end, 4):
        code = int.from_bytes(data[pos:pos + 4], order)
        if code == 0xFFFE or not _is_plain_text(code):
            return 0, []
        chars.append(code)
    return (1 if order == "little" else 2), chars


def detect_encoding(data: bytes, max_bytes: int = FILE_ENCODING_MAX) -> TextEncoding:
    """Determine which character encoding, if any, data appears to use."""
    data = bytes(data[:max_bytes])

    chars = looks_ascii(data)
    if chars is not None:
        if looks_utf7(data):
            return TextEncoding(True, "Unicode text, UTF-7", "utf-7", "text", [])
        return TextEncoding(True, "ASCII", "us-ascii", "text", chars)

    verdict, chars = looks_utf8_with_bom(data)
    if verdict > 0:
        return TextEncoding(True, "Unicode text, UTF-8 (with BOM)", "utf-8",
                            "text", chars)

    verdict, chars = looks_utf8(data)
    if verdict > 1:
        return TextEncoding(True, "Unicode text, UTF-8", "utf-8", "text", chars)

    order, chars = looks_ucs32(data)
    if order == 1:
        return TextEncoding(True, "Unicode text, UTF-32, little-endian",
                            "utf-32le", "text", chars)
    if order == 2:
        return TextEncoding(True, "Unicode text, UTF-32, big-endian",
                            "utf-32be", "text", chars)

    order, chars = looks_ucs16(data)
    if order == 1:
        return TextEncoding(True, "Unicode text, UTF-16, little-endian",
                            "utf-16le", "text", chars)
    if order == 2:
        return TextEncoding(True, "Unicode text, UTF-16, big-endian",
                            "utf-16be", "text", chars)

    chars = looks_latin1(data)
    if chars is not None:
        return TextEncoding(True, "ISO-8859", "iso-8859-1", "text", chars)

    chars = looks_extended(data)
    if chars is not None:
        return TextEncoding(True, "Non-ISO extended-ASCII", "unknown-8bit",
                            "text", chars)

    translated = from_ebcdic(data)
    chars = looks_ascii(translated)
    if chars is not None:
        return TextEncoding(True, "EBCDIC", "ebcdic", "text", chars)
    chars = looks_latin1(translated)
    if chars is not None:
        return TextEncoding(True, "International EBCDIC", "ebcdic", "text", chars)

    return TextEncoding(False, "unknown", "binary", "binary", [])