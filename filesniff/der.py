"""Minimal DER (ASN.1 Distinguished Encoding Rules) header parsing and matching."""

from __future__ import annotations

__all__ = [
    "DerError",
    "get_tag",
    "get_length",
    "tag_name",
    "format_data",
    "der_offset",
    "der_compare",
]

_DER_BAD = 0xFFFFFFFF
_UINT32_MAX = 0xFFFFFFFF
_BUF_SIZE = 128

_TAG_UTF8_STRING = 0x0C
_TAG_PRINTABLE_STRING = 0x13
_TAG_IA5_STRING = 0x16
_TAG_UTCTIME = 0x17

_TAG_NAMES = (
    "eoc", "bool", "int", "bit_str", "octet_str",
    "null", "obj_id", "obj_desc", "ext", "real",
    "enum", "embed", "utf8_str", "rel_oid", "time",
    "res2", "seq", "set", "num_str", "prt_str",
    "t61_str", "vid_str", "ia5_str", "utc_time", "gen_time",
    "gr_str", "vis_str", "gen_str", "univ_str", "char_str",
    "bmp_str", "date", "tod", "datetime", "duration",
    "oid-iri", "rel-oid-iri",
)
_TAG_LAST = 0x25


class DerError(ValueError):
    """The data does not hold a well-formed DER tag or length."""


def get_tag(data: bytes, pos: int) -> tuple[int, int]:
    """Read a tag number at pos; return (tag, position after it)."""
    end = len(data)
    if pos >= end:
        raise DerError("no tag: end of input")
    tag = data[pos] & 0x1F
    pos += 1
    if tag != 0x1F:
        return tag, pos
    if pos >= end:
        raise DerError("truncated long-form tag")
    while data[pos] >= 0x80:
        tag = (tag * 128 + data[pos] - 0x80) & _UINT32_MAX
        pos += 1
        if pos >= end:
            raise DerError("truncated long-form tag")
    if tag == _DER_BAD:
        raise DerError("tag out of range")
    return tag, pos


def get_length(data: bytes, pos: int) -> tuple[int, int]:
    """Read a length at pos; return (length, position after it).

    Raises DerError if the input ends early or the length exceeds what
    remains of it.
    """
    end = len(data)
    if pos >= end:
        raise DerError("no length: end of input")
    one_byte = (data[pos] & 0x80) == 0
    digits = data[pos] & 0x7F
    pos += 1
    if pos + digits >= end:
        raise DerError(f"length {digits} at {pos} exceeds input of {end}")
    if one_byte:
        return digits, pos
    length = int.from_bytes(data[pos:pos + digits], "big")
    pos += digits
    if length > _UINT32_MAX - pos or pos + length > end:
        raise DerError(f"bad length {length} at {pos} for input of {end}")
    return length, pos


def tag_name(tag: int) -> str:
    """Return the short name of a universal tag, or its number in hex."""
    if tag < _TAG_LAST:
        return _TAG_NAMES[tag]
    return f"{tag:#x}"


def _as_text(raw: bytes) -> str:
    return raw.decode("utf-8", "surrogateescape")


def format_data(tag: int, data: bytes) -> str:
    """Render the contents of an element as text, as used for matching."""
    if tag in (_TAG_PRINTABLE_STRING, _TAG_UTF8_STRING, _TAG_IA5_STRING):
        raw = bytes(data).split(b"\0", 1)[0][:_BUF_SIZE - 1]
        return _as_text(raw)
    if tag == _TAG_UTCTIME and len(data) >= 12:
        d = "".join(chr(b) for b in data[:12])
        return (f"20{d[0:2]}-{d[2:4]}-{d[4:6]} "
                f"{d[6:8]}:{d[8:10]}:{d[10:12]} GMT")
    limit = (_BUF_SIZE - 2 + 1) // 2
    return bytes(data[:limit]).hex()


def der_offset(data: bytes, base_offset: int = 0) -> tuple[int, int]:
    """Locate the contents of the element at the start of data.

    Returns (start, end) of its contents, each shifted by base_offset.
    """
    _, pos = get_tag(data, 0)
    length, pos = get_length(data, pos)
    start = pos + base_offset
    return start, start + length


def der_compare(data: bytes, expected: str) -> str | None:
    """Match the element at the start of data against an expression.

    The expression is a tag name, optionally followed by a decimal length
    and by ``=value`` (``=x`` matches any value). Returns None if it does
    not match, the rendered value if a value was compared, and an empty
    string for a match on tag and length alone.
    """
    tag, pos = get_tag(data, 0)
    length, pos = get_length(data, pos)
    name = tag_name(tag)
    if not expected.startswith(name):
        return None
    rest = expected[len(name):]
    while True:
        if not rest:
            return ""
        if rest[0] == "=":
            rest = rest[1:]
            break
        digits = len(rest) - len(rest.lstrip("0123456789"))
        if digits == 0:
            return None
        if int(rest[:digits]) != length:
            return None
        rest = rest[digits:]
    value = format_data(tag, data[pos:pos + length])
    if value != rest and rest != "x":
        return None
    return value