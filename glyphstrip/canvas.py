# this_file: glyphstrip/canvas.py
"""
Fixed-size RGBA pixel buffer with a horizontal write cursor.
"""

from __future__ import annotations

import numpy as np

from .constants import BYTES_PER_PIXEL


class PixelCanvas:
    """
    Zero-initialized RGBA strip.

    The buffer is a ``(height, width, 4)`` uint8 array. Its size is fixed at
    construction. ``cursor`` is the column where the next glyph goes; it only
    moves forward.
    """

    def __init__(self, width: int, height: int):
        if width < 0 or height < 0:
            raise ValueError(f"Canvas size must be non-negative, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self.cursor = 0
        self.pixels = np.zeros((self.height, self.width, BYTES_PER_PIXEL), dtype=np.uint8)

    def __repr__(self) -> str:
        return f"PixelCanvas({self.width}x{self.height}, cursor={self.cursor})"

    @property
    def nbytes(self) -> int:
        return self.pixels.nbytes

    def advance(self, dx: int) -> int:
        """Move the cursor right by ``dx`` pixels and return the new position."""
        if dx < 0:
            raise ValueError(f"Cursor only moves forward, got dx={dx}")
        self.cursor += int(dx)
        return self.cursor

    def blit(self, rgba: np.ndarray, x: int, y: int) -> int:
        """
        Copy an RGBA block into the canvas with its top-left corner at (x, y).

        Parts of the block outside the canvas are clipped.

        Returns:
            Number of pixels written
        """
        gh, gw = rgba.shape[:2]
        ih, iw = self.height, self.width

        x1 = max(0, x)
        y1 = max(0, y)
        x2 = min(iw, x + gw)
        y2 = min(ih, y + gh)

        if x2 <= x1 or y2 <= y1:
            return 0

        gx1 = max(0, -x)
        gy1 = max(0, -y)
        gx2 = gx1 + (x2 - x1)
        gy2 = gy1 + (y2 - y1)

        self.pixels[y1:y2, x1:x2] = rgba[gy1:gy2, gx1:gx2]
        return (x2 - x1) * (y2 - y1)

    def rgb(self) -> np.ndarray:
        """Row-major RGB view of the buffer (alpha dropped)."""
        return self.pixels[:, :, :3]

    def tobytes(self) -> bytes:
        """Raw RGBA dump, top-to-bottom, left-to-right."""
        return self.pixels.tobytes()
