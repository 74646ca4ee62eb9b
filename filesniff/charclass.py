"""Byte classes for text detection, UTF-8 scanning and EBCDIC translation."""

from __future__ import annotations

import enum

__all__ = [
    "CharClass",
    "char_class",
    "looks_ascii",
    "looks_latin1",
    "looks_extended",
    "looks_utf8",
    "from_ebcdic",
]


class CharClass(enum.IntEnum):
    """Which kind of text a byte may appear in."""

    NEVER = 0  # never appears in text
    ASCII = 1  # plain ASCII text
    ISO = 2  # ISO-8859 text
    EXTENDED = 3  # non-ISO extended ASCII (Mac, IBM PC)


def _build_text_chars() -> tuple[CharClass, ...]:
    table = [CharClass.NEVER] * 256
    # BEL BS HT LF VT FF CR
    for byte in range(0x07, 0x0E):
        table[byte] = CharClass.ASCII
    table[0x1B] = CharClass.ASCII  # ESC
    for byte in range(0x20, 0x7F):
        table[byte] = CharClass.ASCII
    for byte in range(0x80, 0xA0):
        table[byte] = CharClass.EXTENDED
    table[0x85] = CharClass.ASCII  # NEL
    for byte in range(0xA0, 0x100):
        table[byte] = CharClass.ISO
    return tuple(table)


_TEXT_CHARS = _build_text_chars()


def char_class(byte: int) -> CharClass:
    """Return the text class of a single byte value."""
    return _TEXT_CHARS[byte]


def _looks(data: bytes, allowed: frozenset[CharClass]) -> list[int] | None:
    if all(_TEXT_CHARS[byte] in allowed for byte in data):
        return list(data)
    return None


_ASCII_SET = frozenset({CharClass.ASCII})
_LATIN1_SET = frozenset({CharClass.ASCII, CharClass.ISO})
_EXTENDED_SET = frozenset({CharClass.ASCII, CharClass.ISO, CharClass.EXTENDED})


def looks_ascii(data: bytes) -> list[int] | None:
    """Return the code points if every byte is ASCII text, else None."""
    return _looks(data, _ASCII_SET)


def looks_latin1(data: bytes) -> list[int] | None:
    """Return the code points if every byte is ISO-8859 text, else None."""
    return _looks(data, _LATIN1_SET)


def looks_extended(data: bytes) -> list[int] | None:
    """Return the code points if every byte is extended-ASCII text, else None."""
    return _looks(data, _EXTENDED_SET)


# Lead-byte information: high nibble selects the accept range of the
# second byte, low nibble is the sequence size.
_XX = 0xF1  # invalid
_AS = 0xF0  # ASCII
_S1 = 0x02
_S2 = 0x13
_S3 = 0x03
_S4 = 0x23
_S5 = 0x34
_S6 = 0x04
_S7 = 0x44


def _build_first() -> tuple[int, ...]:
    table = [_AS] * 0x80 + [_XX] * 0x42 + [_S1] * 0x1E
    table += [_S2] + [_S3] * 12 + [_S4] + [_S3] * 2
    table += [_S5, _S6, _S6, _S6, _S7] + [_XX] * 11
    return tuple(table)


_FIRST = _build_first()
_ACCEPT_RANGES = (
    (0x80, 0xBF),
    (0xA0, 0xBF),
    (0x80, 0x9F),
    (0x90, 0xBF),
    (0x80, 0x8F),
)


def looks_utf8(data: bytes) -> tuple[int, list[int]]:
    """Scan data as UTF-8.

    Returns (verdict, code points) where verdict is -1 for invalid UTF-8,
    0 for text with odd control characters, 1 for 7-bit text and 2 for
    text that holds valid multi-byte sequences.
    """
    decoded: list[int] = []
    gotone = False
    ctrl = False
    nbytes = len(data)
    i = 0
    while i < nbytes:
        lead = data[i]
        if lead & 0x80 == 0:
            if _TEXT_CHARS[lead] != CharClass.ASCII:
                ctrl = True
            decoded.append(lead)
            i += 1
            continue
        if lead & 0x40 == 0:
            return -1, decoded
        info = _FIRST[lead]
        if info == _XX:
            return -1, decoded
        lo, hi = _ACCEPT_RANGES[info >> 4]
        if lead & 0x20 == 0:
            code, following = lead & 0x1F, 1
        elif lead & 0x10 == 0:
            code, following = lead & 0x0F, 2
        elif lead & 0x08 == 0:
            code, following = lead & 0x07, 3
        elif lead & 0x04 == 0:
            code, following = lead & 0x03, 4
        elif lead & 0x02 == 0:
            code, following = lead & 0x01, 5
        else:
            return -1, decoded
        for n in range(following):
            i += 1
            if i >= nbytes:
                return (0 if ctrl else (2 if gotone else 1)), decoded
            byte = data[i]
            if n == 0 and not lo <= byte <= hi:
                return -1, decoded
            if byte & 0x80 == 0 or byte & 0x40:
                return -1, decoded
            code = (code << 6) + (byte & 0x3F)
        decoded.append(code)
        gotone = True
        i += 1
    return (0 if ctrl else (2 if gotone else 1)), decoded


_EBCDIC_TO_ASCII = bytes([
    0, 1, 2, 3, 156, 9, 134, 127, 151, 141, 142, 11, 12, 13, 14, 15,
    16, 17, 18, 19, 157, 133, 8, 135, 24, 25, 146, 143, 28, 29, 30, 31,
    128, 129, 130, 131, 132, 10, 23, 27, 136, 137, 138, 139, 140, 5, 6, 7,
    144, 145, 22, 147, 148, 149, 150, 4, 152, 153, 154, 155, 20, 21, 158, 26,
    32, 160, 161, 162, 163, 164, 165, 166, 167, 168, 213, 46, 60, 40, 43, 124,
    38, 169, 170, 171, 172, 173, 174, 175, 176, 177, 33, 36, 42, 41, 59, 126,
    45, 47, 178, 179, 180, 181, 182, 183, 184, 185, 203, 44, 37, 95, 62, 63,
    186, 187, 188, 189, 190, 191, 192, 193, 194, 96, 58, 35, 64, 39, 61, 34,
    195, 97, 98, 99, 100, 101, 102, 103, 104, 105, 196, 197, 198, 199, 200, 201,
    202, 106, 107, 108, 109, 110, 111, 112, 113, 114, 94, 204, 205, 206, 207, 208,
    209, 229, 115, 116, 117, 118, 119, 120, 121, 122, 210, 211, 212, 91, 214, 215,
    216, 217, 218, 219, 220, 221, 222, 223, 224, 225, 226, 227, 228, 93, 230, 231,
    123, 65, 66, 67, 68, 69, 70, 71, 72, 73, 232, 233, 234, 235, 236, 237,
    125, 74, 75, 76, 77, 78, 79, 80, 81, 82, 238, 239, 240, 241, 242, 243,
    92, 159, 83, 84, 85, 86, 87, 88, 89, 90, 244, 245, 246, 247, 248, 249,
    48, 49, 50, 51, 52, 53, 54, 55, 56, 57, 250, 251, 252, 253, 254, 255,
])


def from_ebcdic(data: bytes) -> bytes:
    """Translate EBCDIC bytes to (8-bit extended) ASCII."""
    return bytes(data).translate(_EBCDIC_TO_ASCII)