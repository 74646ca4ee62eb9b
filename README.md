# filesniff

Content-based file type identification for Python. `filesniff` works out
what a buffer of bytes holds by examining the bytes. For a path it can
also use what the filesystem reports. It has no dependencies outside
the standard library.

## Modules

- `filesniff.output`: `Output` collects the description of one file.
  `Flags` selects plain descriptions or MIME output. The module also has
  these helpers:
  - `check_format` checks printf-style formats.
  - `check_regex` checks regular expressions.
  - `printable` escapes unprintable bytes in octal.
  - `parse_guid` and `format_guid` convert GUIDs to and from text.
  - `strtrim` strips whitespace.
- `filesniff.charclass` classifies bytes. `char_class` and `CharClass`
  give the class of a byte. `looks_ascii`, `looks_latin1`,
  `looks_extended` and `looks_utf8` scan a buffer, and `from_ebcdic`
  translates EBCDIC.
- `filesniff.encoding`: `detect_encoding` decides between ASCII, UTF-7,
  UTF-8 with or without a byte order mark, UTF-16 and UTF-32 in either
  byte order, ISO-8859, non-ISO extended ASCII, EBCDIC and binary. It
  returns a `TextEncoding`.
- `filesniff.fmtcheck`: `fmtcheck(f1, f2)` returns `f1` if its directives
  take the same arguments as those of `f2`, and `f2` otherwise.
  `format_kinds` lists the argument kinds of a format.
- `filesniff.der` reads DER / ASN.1 headers:
  - `get_tag`, `get_length`, `tag_name` and `format_data` decode an
    element.
  - `der_offset` locates the contents of an element.
  - `der_compare` matches an element against expressions such as `seq`,
    `int1=05` or `utc_time=x`.
- `filesniff.csvdetect`: `csv_parse` looks for a field count that stays
  the same from line to line, with quoted fields handled. `describe_csv`
  writes the description.
- `filesniff.fsmagic`: `describe_path` describes directories, character
  and block devices, fifos, sockets, doors, symbolic links (broken ones
  included) and empty files. It also reports the setuid, setgid and
  sticky bits.

## Installation

```
pip install filesniff
```

## Usage

```python
from filesniff.output import Flags, Output
from filesniff.encoding import detect_encoding
from filesniff.csvdetect import describe_csv

data = b"name,age,city\nalice,30,paris\nbob,41,rome\n"

encoding = detect_encoding(data, 64 * 1024)
print(encoding.code)          # ASCII

out = Output(Flags(0))
describe_csv(out, data, encoding.looks_text, encoding.code)
print(out.getbuffer())        # CSV ASCII text
```

If you pass `Flags.MIME_TYPE` instead, the output is `text/csv`.

Describing a path from its filesystem metadata:

```python
from filesniff.output import Flags, Output
from filesniff.fsmagic import describe_path

out = Output(Flags(0))
handled = describe_path(out, "/tmp")
print(out.getbuffer())        # e.g. "sticky, directory"
```

`describe_path` returns `False` when the path is a regular file that
still needs its contents examined.

DER elements:

```python
from filesniff.der import der_compare, der_offset

print(der_offset(b"\x30\x03\x02\x01\x05\x00"))   # (2, 5)
print(der_compare(b"\x02\x01\x05\x00", "int1=05"))  # 05
```

Format strings:

```python
from filesniff.fmtcheck import fmtcheck

fmtcheck("%d items", "%d")    # "%d items"
fmtcheck("%s", "%d")          # "%d"
```

## Errors

- `MagicError` is raised by `Output` in two cases. The first is a bad
  format passed to `Output.printf`. The second is output that grows past
  its limits (1024 characters for each piece, 1 MiB in total). It is
  also raised by `Output.error` and by `describe_path` when
  `Flags.ERROR` is set.
- `ValueError` is raised by `check_format`, `check_regex`,
  `parse_guid` and `Output.replace`.
- `DerError`, a subclass of `ValueError`, is raised for malformed DER
  data.

## Limitations

- `filesniff` does not recognise or decompress compressed data.
- It has no magic-file rule engine, so it gives no general content
  descriptions beyond text encodings, CSV and DER matching.
- It has no command-line program. It is a library only.

## Development

```
pip install -e .[test]
pytest
```