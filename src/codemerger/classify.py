"""
Decide whether a file holds text worth merging.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import chardet

SAMPLE_SIZE = 8000

# Lower-cased substrings of chardet encoding names treated as text.
TEXT_ENCODING_FAMILIES = ("utf", "ascii", "iso-8859", "windows-125")

_UNICODE_BOMS = (
    b"\xef\xbb\xbf",
    b"\xff\xfe",
    b"\xfe\xff",
    b"\x00\x00\xfe\xff",
)
_TEXT_CONTROL = frozenset(b"\n\r\t\b\f\x1b")


def is_binary(data: bytes) -> bool:
    sample = data[:SAMPLE_SIZE]
    if not sample:
        return False
    if sample.startswith(_UNICODE_BOMS):
        return False
    if b"\0" in sample:
        return True
    control = sum(1 for byte in sample if byte < 32 and byte not in _TEXT_CONTROL)
    return control / len(sample) > 0.30


def detect_encoding(data: bytes) -> Optional[str]:
    """Return chardet's guess for *data*, or ``None`` when it has no idea."""
    return chardet.detect(data).get("encoding")


def is_text_encoding(encoding: Optional[str]) -> bool:
    if not encoding:
        return False
    enc = encoding.lower()
    return any(family in enc for family in TEXT_ENCODING_FAMILIES)


def is_text(path: Path) -> bool:
    try:
        data = Path(path).read_bytes()
    except OSError:
        return False
    if not data:
        return True
    if is_binary(data):
        return False
    return is_text_encoding(detect_encoding(data))
