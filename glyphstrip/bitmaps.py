# this_file: glyphstrip/bitmaps.py
"""
Conversion of FreeType glyph bitmaps into RGBA blocks.

Color fonts hand back BGRA pixels, outline fonts hand back one coverage byte
per pixel (or one bit, for embedded monochrome strikes). Both end up as a
``(rows, width, 4)`` uint8 array ready for ``PixelCanvas.blit``.
"""

from __future__ import annotations

import numpy as np
from freetype import FT_PIXEL_MODE_BGRA, FT_PIXEL_MODE_GRAY, FT_PIXEL_MODE_MONO


def _empty(bitmap) -> np.ndarray:
    return np.zeros((bitmap.rows, bitmap.width, 4), dtype=np.uint8)


def bitmap_rows(bitmap, row_bytes: int) -> np.ndarray:
    """
    Return the bitmap as a ``(rows, row_bytes)`` array, top row first.

    FreeType pads each row to ``abs(pitch)`` bytes; a negative pitch means the
    rows are stored bottom-up.
    """
    pitch = bitmap.pitch
    data = np.array(bitmap.buffer, dtype=np.uint8).reshape(bitmap.rows, abs(pitch))
    if pitch < 0:
        data = data[::-1]
    return data[:, :row_bytes]


def color_to_rgba(bitmap) -> np.ndarray:
    """Reorder BGRA pixels to RGBA. Values are copied unchanged."""
    if bitmap.pixel_mode != FT_PIXEL_MODE_BGRA:
        raise ValueError(f"Expected a BGRA bitmap, got pixel mode {bitmap.pixel_mode}")
    if not bitmap.rows or not bitmap.width:
        return _empty(bitmap)

    bgra = bitmap_rows(bitmap, bitmap.width * 4).reshape(bitmap.rows, bitmap.width, 4)
    return np.ascontiguousarray(bgra[:, :, [2, 1, 0, 3]])


def coverage(bitmap) -> np.ndarray:
    """Per-pixel coverage (0..255) of a gray or 1-bit bitmap."""
    if bitmap.pixel_mode == FT_PIXEL_MODE_GRAY:
        return bitmap_rows(bitmap, bitmap.width)
    if bitmap.pixel_mode == FT_PIXEL_MODE_MONO:
        packed = bitmap_rows(bitmap, (bitmap.width + 7) // 8)
        bits = np.unpackbits(packed, axis=1)[:, : bitmap.width]
        return bits * np.uint8(255)
    raise ValueError(f"Expected a coverage bitmap, got pixel mode {bitmap.pixel_mode}")


def coverage_to_rgba(bitmap) -> np.ndarray:
    """Ink is black; coverage becomes alpha and the inverted coverage the color."""
    if not bitmap.rows or not bitmap.width:
        return _empty(bitmap)

    cov = coverage(bitmap)
    ink = 255 - cov
    return np.dstack((ink, ink, ink, cov)).astype(np.uint8)
