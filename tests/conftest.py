# this_file: tests/conftest.py

"""FreeType face doubles shared by the glyphstrip tests."""

from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock

import numpy as np
import pytest
from freetype import FT_Exception, FT_PIXEL_MODE_BGRA, FT_PIXEL_MODE_GRAY

from glyphstrip import FontLibrary


class FakeBitmap:
    """Mimics freetype.Bitmap: rows, width, pitch, pixel_mode, flat buffer list."""

    def __init__(self, rows, width, pitch, pixel_mode, buffer):
        self.rows = rows
        self.width = width
        self.pitch = pitch
        self.pixel_mode = pixel_mode
        self.buffer = list(buffer)


def gray_bitmap(coverage):
    arr = np.asarray(coverage, dtype=np.uint8)
    rows, width = arr.shape
    return FakeBitmap(rows, width, width, FT_PIXEL_MODE_GRAY, arr.ravel().tolist())


def bgra_bitmap(pixels):
    arr = np.asarray(pixels, dtype=np.uint8)
    rows, width, _ = arr.shape
    return FakeBitmap(rows, width, width * 4, FT_PIXEL_MODE_BGRA, arr.ravel().tolist())


def solid_gray(rows, width, value=255):
    return gray_bitmap(np.full((rows, width), value, dtype=np.uint8))


def solid_bgra(rows, width, bgra=(10, 20, 30, 255)):
    return bgra_bitmap(np.tile(np.array(bgra, dtype=np.uint8), (rows, width, 1)))


class FakeFace:
    """
    Stand-in for freetype.Face.

    ``glyphs`` maps codepoint -> (advance_px, height_px, bitmap). Codepoints
    listed in ``broken`` have a glyph index but fail to load.
    """

    def __init__(self, glyphs=None, fixed_sizes=(), broken=()):
        self.glyphs = dict(glyphs or {})
        self.broken = set(broken)
        self.available_sizes = [SimpleNamespace(width=w, height=w) for w in fixed_sizes]
        self._order = list(self.glyphs) + [c for c in self.broken if c not in self.glyphs]
        self.glyph = None
        self.loaded = []
        self.set_pixel_sizes = MagicMock()
        self.select_size = MagicMock()

    def get_char_index(self, codepoint):
        if codepoint in self._order:
            return self._order.index(codepoint) + 1
        return 0

    def load_glyph(self, index, flags):
        codepoint = self._order[index - 1]
        self.loaded.append((codepoint, flags))
        if codepoint in self.broken:
            raise FT_Exception(0x10)
        advance, height, bitmap = self.glyphs[codepoint]
        self.glyph = SimpleNamespace(
            advance=SimpleNamespace(x=advance << 6),
            metrics=SimpleNamespace(height=height << 6),
            bitmap=bitmap,
            render=MagicMock(),
        )


@pytest.fixture
def make_library():
    """Build a FontLibrary whose faces come from a {path: FakeFace} mapping."""

    def _make(faces, color=()):
        color_paths = {str(Path(p)) for p in color}

        def face_factory(path):
            try:
                return faces[path]
            except KeyError:
                raise FT_Exception(0x01) from None

        def table_length(face, tag):
            for path, candidate in faces.items():
                if candidate is face and path in color_paths:
                    return 1024
            return 0

        return FontLibrary(face_factory=face_factory, table_length=table_length)

    return _make
