# this_file: glyphstrip/text.py
"""
Input text to codepoints.
"""

from __future__ import annotations

import os
import re

from .base import TextDecodeError

MAX_CODEPOINT = 0x10FFFF
_HEX_PREFIX = re.compile(r"^(?:u\+|0x)", re.IGNORECASE)


def decode_codepoints(text: bytes | str) -> list[int]:
    """
    Decode UTF-8 text into codepoints.

    ``str`` input is encoded back with the filesystem encoding and
    ``surrogateescape`` first, so undecodable bytes that reached ``sys.argv``
    are reported instead of silently passed through.

    Raises:
        TextDecodeError: at the first invalid byte sequence
    """
    if isinstance(text, str):
        try:
            data = os.fsencode(text)
        except UnicodeEncodeError as exc:
            raise TextDecodeError(f"Invalid input text at character {exc.start}", exc.start) from exc
    else:
        data = bytes(text)

    try:
        decoded = data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise TextDecodeError(
            f"Invalid input text: byte 0x{data[exc.start]:02X} at offset {exc.start} ({exc.reason})",
            exc.start,
        ) from exc
    return [ord(char) for char in decoded]


def parse_hex_codepoints(spec: str) -> list[int]:
    """Parse ``"1F600"``, ``"U+1F600 0x41"``, ``"41,42"`` into codepoints."""
    codepoints = []
    for token in spec.replace(",", " ").split():
        digits = _HEX_PREFIX.sub("", token)
        try:
            value = int(digits, 16)
        except ValueError as exc:
            raise TextDecodeError(f"Invalid hex codepoint: {token!r}") from exc
        if value < 0 or value > MAX_CODEPOINT or 0xD800 <= value <= 0xDFFF:
            raise TextDecodeError(f"Not a Unicode scalar value: {token!r}")
        codepoints.append(value)
    return codepoints
