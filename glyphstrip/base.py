# this_file: glyphstrip/base.py
"""
Shared types and the exception taxonomy.
"""

from __future__ import annotations

import enum
from typing import NamedTuple


class GlyphStripError(RuntimeError):
    """Base class for every error raised by glyphstrip."""


class FontLoadError(GlyphStripError):
    """Raised when a font file cannot be turned into a glyph source."""

    def __init__(self, path, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path


class FontOpenError(FontLoadError):
    """FreeType could not open or parse the font file."""


class MissingFixedSizesError(FontLoadError):
    """A color bitmap font that embeds no bitmap sizes at all."""


class TextDecodeError(GlyphStripError, ValueError):
    """Raised for input text that is not a valid codepoint sequence."""

    def __init__(self, message: str, offset: int | None = None):
        super().__init__(message)
        self.offset = offset


class ExportError(GlyphStripError):
    """Raised when a canvas cannot be serialized."""


class PixelFormat(enum.Enum):
    """Pixel layout of the bitmaps a font produces, fixed when the font is loaded."""

    COLOR = "color"
    MONOCHROME = "monochrome"


class GlyphSize(NamedTuple):
    """Advance and height (whole pixels) of the last rendered glyph."""

    advance: int
    height: int
