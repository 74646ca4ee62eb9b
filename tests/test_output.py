import errno as errno_codes
import os

import pytest

from filesniff.output import (
    Flags,
    MagicError,
    Output,
    check_format,
    check_regex,
    format_guid,
    parse_guid,
    printable,
    strtrim,
)


def test_printf_appends_formatted_text():
    out = Output(0)
    out.printf("%s-%d", "ab", 3)
    out.printf("x")
    assert out.getbuffer() == "ab-3x"


def test_check_format_rejects_star():
    with pytest.raises(ValueError, match="not allowed"):
        check_format("%*d")


def test_check_format_width_limit():
    assert check_format("%1023d") is None
    with pytest.raises(ValueError, match="field width too large"):
        check_format("%1024d")
    with pytest.raises(ValueError, match="field precision too large"):
        check_format("%5.2000f")


def test_check_format_bad_char():
    with pytest.raises(ValueError, match="bad format char"):
        check_format("%5!")
    with pytest.raises(ValueError, match="bad format char"):
        check_format("abc%")
    assert check_format("100%% done %s") is None


def test_printf_bad_format_records_error():
    out = Output(0)
    with pytest.raises(MagicError, match="Bad magic format"):
        out.printf("%*d", 3, 4)
    assert out.had_error
    assert out.getbuffer() is None


def test_append_too_long_raises():
    out = Output(0)
    with pytest.raises(MagicError, match="Output buffer space exceeded"):
        out.append("a" * 2000)
    assert out.getbuffer() is None


def test_only_first_error_is_kept():
    out = Output(0)
    with pytest.raises(MagicError):
        out.error("first", 0)
    with pytest.raises(MagicError) as info:
        out.error("second", 0)
    assert "first" in str(info.value)
    assert "second" not in out.buf


def test_error_includes_strerror():
    out = Output(0)
    with pytest.raises(MagicError) as info:
        out.error("cannot open", errno_codes.ENOENT)
    assert os.strerror(errno_codes.ENOENT) in str(info.value)
    assert info.value.errno == errno_codes.ENOENT
    assert out.error_code == errno_codes.ENOENT


def test_error_appends_to_existing_text():
    out = Output(0)
    out.printf("prefix")
    with pytest.raises(MagicError) as info:
        out.error("broken", 0)
    assert str(info.value).startswith("prefix")
    assert str(info.value).endswith("broken")


def test_magic_error_has_line_number():
    out = Output(0)
    out.printf("discarded")
    with pytest.raises(MagicError) as info:
        out.magic_error("oops", 7)
    message = str(info.value)
    assert message.startswith("line 7:")
    assert message.endswith("oops")
    assert "discarded" not in message


def test_separator_trimmed():
    out = Output(0)
    out.printf("a")
    out.separator()
    assert out.buf.endswith("\n- ")
    out.trim_separator()
    assert out.getbuffer() == "a"


def test_lone_separator_not_trimmed():
    out = Output(0)
    out.separator()
    out.trim_separator()
    assert out.buf == "\n- "


def test_reset_clears_error():
    out = Output(0)
    with pytest.raises(MagicError):
        out.error("bad", 0)
    out.reset()
    assert not out.had_error
    out.printf("fine")
    assert out.getbuffer() == "fine"


def test_getbuffer_escapes_control_characters():
    out = Output(0)
    out.printf("%s", "a\x01b")
    assert out.getbuffer() == "a\\001b"


def test_getbuffer_keeps_printable_unicode():
    out = Output(0)
    out.printf("%s", "café")
    assert out.getbuffer() == "café"


def test_getbuffer_raw_returns_unchanged():
    out = Output(Flags.RAW)
    out.printf("%s", "a\x01b")
    assert out.getbuffer() == "a\x01b"


def test_push_pop_round_trip():
    out = Output(0)
    out.printf("outer")
    out.offset = 12
    saved = out.push()
    assert out.buf is None
    assert out.offset == 0
    out.printf("inner")
    assert out.pop(saved) == "inner"
    assert out.buf == "outer"
    assert out.offset == 12


def test_pop_after_error_returns_none():
    out = Output(0)
    saved = out.push()
    with pytest.raises(MagicError):
        out.error("bad", 0)
    assert out.pop(saved) is None


def test_push_after_error_raises():
    out = Output(0)
    with pytest.raises(MagicError):
        out.error("bad", 0)
    with pytest.raises(MagicError):
        out.push()


def test_replace_all_matches():
    out = Output(0)
    out.printf("foo bar foo")
    assert out.replace("foo", "baz") == 2
    assert "foo" not in out.buf
    assert out.buf.count("baz") == 2
    assert "bar" in out.buf


def test_replace_rejects_bad_regex():
    out = Output(0)
    out.printf("text")
    with pytest.raises(ValueError):
        out.replace("a**", "b")


@pytest.mark.parametrize(
    "flags, nbytes, expected",
    [
        (Flags.MIME_TYPE, 5, "application/octet-stream"),
        (Flags.MIME_TYPE, 0, "application/x-empty"),
        (Flags.APPLE, 5, "UNKNUNKN"),
        (Flags.EXTENSION, 5, "???"),
    ],
)
def test_default_descriptions(flags, nbytes, expected):
    out = Output(flags)
    assert out.default(nbytes) is True
    assert out.getbuffer() == expected


def test_default_mime_encoding_only_writes_nothing():
    out = Output(Flags.MIME_ENCODING)
    assert out.default(5) is True
    assert out.buf is None


def test_default_plain_returns_false():
    out = Output(0)
    assert out.default(5) is False
    assert out.buf is None


def test_check_regex_cases():
    with pytest.raises(ValueError, match="repetition-operator"):
        check_regex("a**")
    with pytest.raises(ValueError, match="bounds too large"):
        check_regex("a{1001}")
    with pytest.raises(ValueError, match="bounds too large"):
        check_regex("a{1,2000}")
    with pytest.raises(ValueError, match="non-ascii"):
        check_regex("a\x01")
    assert check_regex("a{1000}[ \t]+b") is None


def test_printable():
    assert printable(b"a\x01", False) == "a\\001"
    assert printable(b"a\x01", True) == "a\x01"
    assert printable(b"ab\x00cd", False) == "ab"


def test_guid_round_trip():
    text = "12345678-9ABC-DEF0-1234-56789ABCDEF0"
    assert format_guid(parse_guid(text)) == text
    assert format_guid(parse_guid(text.lower())) == text


def test_parse_guid_invalid():
    with pytest.raises(ValueError):
        parse_guid("not-a-guid")


def test_strtrim():
    assert strtrim("  hi there \n") == "hi there"
    assert strtrim("\t\v") == ""