"""Identify text encodings, CSV, DER elements and filesystem objects."""

__version__ = "0.1.0"

__all__ = [
    "charclass",
    "csvdetect",
    "der",
    "encoding",
    "fmtcheck",
    "fsmagic",
    "output",
]