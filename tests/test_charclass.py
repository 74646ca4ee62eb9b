import pytest

from filesniff.charclass import (
    CharClass,
    char_class,
    from_ebcdic,
    looks_ascii,
    looks_extended,
    looks_latin1,
    looks_utf8,
)


@pytest.mark.parametrize(
    "byte, expected",
    [
        (0x00, CharClass.NEVER),
        (0x07, CharClass.ASCII),
        (0x0B, CharClass.ASCII),
        (0x0E, CharClass.NEVER),
        (0x1B, CharClass.ASCII),
        (ord("A"), CharClass.ASCII),
        (0x7F, CharClass.NEVER),
        (0x80, CharClass.EXTENDED),
        (0x85, CharClass.ASCII),
        (0x9F, CharClass.EXTENDED),
        (0xA0, CharClass.ISO),
        (0xFF, CharClass.ISO),
    ],
)
def test_char_class(byte, expected):
    assert char_class(byte) == expected


def test_looks_ascii_accepts_text():
    assert looks_ascii(b"hi there\n") == list(b"hi there\n")


def test_looks_ascii_rejects_high_and_control():
    assert looks_ascii(b"caf\xe9") is None
    assert looks_ascii(b"a\x00b") is None


def test_looks_latin1():
    assert looks_latin1(b"caf\xe9") == list(b"caf\xe9")
    assert looks_latin1(b"\x80") is None


def test_looks_extended():
    assert looks_extended(b"\x80\xe9a") == list(b"\x80\xe9a")
    assert looks_extended(b"\x00") is None


def test_hierarchy_invariant():
    data = bytes(range(256))
    for n in range(0, 256, 7):
        chunk = data[n:n + 7]
        if looks_ascii(chunk) is not None:
            assert looks_latin1(chunk) == list(chunk)
        if looks_latin1(chunk) is not None:
            assert looks_extended(chunk) == list(chunk)


def test_looks_utf8_plain_ascii():
    assert looks_utf8(b"abc") == (1, [97, 98, 99])


@pytest.mark.parametrize("text", ["héllo", "naïve €", "😀 smile"])
def test_looks_utf8_multibyte(text):
    verdict, points = looks_utf8(text.encode("utf-8"))
    assert verdict == 2
    assert points == [ord(c) for c in text]


def test_looks_utf8_control_characters():
    assert looks_utf8(b"a\x01b")[0] == 0


@pytest.mark.parametrize(
    "data",
    [b"\x80", b"\xc0\x80", b"\xed\xa0\x80", b"\xf5\x80\x80\x80", b"\xc3a"],
)
def test_looks_utf8_invalid(data):
    assert looks_utf8(data)[0] == -1


def test_looks_utf8_truncated_tail_is_ignored():
    assert looks_utf8(b"a\xc3") == (1, [97])


def test_from_ebcdic_hello():
    assert from_ebcdic(b"\xc8\x85\x93\x93\x96") == b"Hello"


def test_from_ebcdic_digits_and_space():
    assert from_ebcdic(bytes(range(0xF0, 0xFA))) == b"0123456789"
    assert from_ebcdic(b"\x40") == b" "


def test_from_ebcdic_is_a_permutation():
    out = from_ebcdic(bytes(range(256)))
    assert sorted(out) == list(range(256))