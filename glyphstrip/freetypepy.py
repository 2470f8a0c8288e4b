# this_file: glyphstrip/freetypepy.py
"""
Glyph sources backed by FreeType (freetype-py).

A ``GlyphSource`` wraps one loaded face. Faces are classified once, at load
time, as color bitmap fonts (they carry a CBDT table) or monochrome outline
fonts, and that classification picks the load flags, the sizing strategy and
the compositing function for the lifetime of the source.
"""

from __future__ import annotations

import logging
from ctypes import POINTER, byref, c_int, c_void_p
from pathlib import Path
from typing import Callable, Sequence

import freetype
from freetype import FT_Exception, FT_LOAD_COLOR, FT_LOAD_DEFAULT, FT_RENDER_MODE_NORMAL
from freetype.ft_types import FT_Long, FT_ULong
from freetype.raw import _lib

from .base import FontOpenError, GlyphSize, MissingFixedSizesError, PixelFormat
from .bitmaps import color_to_rgba, coverage_to_rgba
from .canvas import PixelCanvas
from .constants import COLOR_BITMAP_TABLE, DEFAULT_PIXEL_SIZE

logger = logging.getLogger(__name__)

# Own function pointer, separate from any binding freetype-py makes
_load_sfnt_table = _lib["FT_Load_Sfnt_Table"]
_load_sfnt_table.argtypes = [c_void_p, FT_ULong, FT_Long, c_void_p, POINTER(FT_ULong)]
_load_sfnt_table.restype = c_int

COMPOSITORS = {
    PixelFormat.COLOR: color_to_rgba,
    PixelFormat.MONOCHROME: coverage_to_rgba,
}


def make_tag(tag: str) -> int:
    """Pack a four-letter table tag the way FT_MAKE_TAG does."""
    if len(tag) != 4:
        raise ValueError(f"Table tags are four characters, got {tag!r}")
    value = 0
    for char in tag:
        value = (value << 8) | (ord(char) & 0xFF)
    return value


def sfnt_table_length(face, tag: str) -> int:
    """Length in bytes of an sfnt table, 0 when the face has no such table."""
    length = FT_ULong(0)
    error = _load_sfnt_table(face._FT_Face, make_tag(tag), 0, None, byref(length))
    if error:
        return 0
    return length.value


def classify_face(face, table_length: Callable[[object, str], int] = sfnt_table_length) -> PixelFormat:
    """COLOR if the face embeds color bitmap data, MONOCHROME otherwise."""
    if table_length(face, COLOR_BITMAP_TABLE):
        return PixelFormat.COLOR
    return PixelFormat.MONOCHROME


def select_fixed_size(widths: Sequence[int], target: int) -> int:
    """
    Index of the embedded size whose width is closest to ``target``.

    Ties go to the earliest entry.
    """
    if not widths:
        raise ValueError("No embedded bitmap sizes to choose from")
    best = 0
    diff = abs(target - widths[0])
    for index in range(1, len(widths)):
        current = abs(target - widths[index])
        if current < diff:
            best = index
            diff = current
    return best


class GlyphSource:
    """
    One loaded font face.

    ``render_glyph`` overwrites the face's single glyph slot, so ``glyph_size``
    and ``draw`` always refer to the most recent successful render. Do not
    interleave renders of two codepoints on the same source.
    """

    def __init__(
        self,
        face,
        pixel_format: PixelFormat,
        pixel_size: int = DEFAULT_PIXEL_SIZE,
        *,
        path: Path | str | None = None,
    ):
        self.face = face
        self.pixel_format = pixel_format
        self.target_size = int(pixel_size)
        self.path = Path(path) if path is not None else None
        self.fixed_sizes = [size.width for size in face.available_sizes]
        self.load_flags = FT_LOAD_DEFAULT
        self._composite = COMPOSITORS[pixel_format]
        self._rendered = False

        if pixel_format is PixelFormat.COLOR:
            self._setup_color()
        else:
            self._setup_monochrome()

    def __repr__(self) -> str:
        name = self.path.name if self.path else "<face>"
        return f"GlyphSource({name}, {self.pixel_format.value}, {self.pixel_size}px)"

    @property
    def is_color(self) -> bool:
        return self.pixel_format is PixelFormat.COLOR

    def _setup_color(self) -> None:
        if not self.fixed_sizes:
            raise MissingFixedSizesError(self.path, "color bitmap font has no embedded sizes")
        self.load_flags |= FT_LOAD_COLOR
        index = select_fixed_size(self.fixed_sizes, self.target_size)
        try:
            self.face.select_size(index)
        except FT_Exception as exc:
            raise FontOpenError(self.path, f"cannot select embedded size {index}: {exc}") from exc
        self.pixel_size = self.fixed_sizes[index]
        logger.debug(
            "%s: selected embedded size %d (of %s) for target %d",
            self.path, self.pixel_size, self.fixed_sizes, self.target_size,
        )

    def _setup_monochrome(self) -> None:
        try:
            self.face.set_pixel_sizes(0, self.target_size)
        except FT_Exception as exc:
            raise FontOpenError(self.path, f"cannot set pixel size {self.target_size}: {exc}") from exc
        self.pixel_size = self.target_size

    def render_glyph(self, codepoint: int) -> bool:
        """
        Rasterize ``codepoint`` into the face's glyph slot.

        Returns False when the font has no glyph for it or FreeType fails to
        load or render the glyph.
        """
        self._rendered = False
        if self.face is None:
            return False

        glyph_index = self.face.get_char_index(codepoint)
        if not glyph_index:
            return False

        try:
            self.face.load_glyph(glyph_index, self.load_flags)
            self.face.glyph.render(FT_RENDER_MODE_NORMAL)
        except FT_Exception as exc:
            logger.debug("%s: failed to render U+%04X: %s", self.path, codepoint, exc)
            return False

        self._rendered = True
        return True

    def _slot(self):
        if not self._rendered:
            raise RuntimeError("No glyph rendered; call render_glyph() first")
        return self.face.glyph

    def glyph_size(self) -> GlyphSize:
        """Advance and height, in whole pixels, of the last rendered glyph."""
        slot = self._slot()
        return GlyphSize(slot.advance.x >> 6, slot.metrics.height >> 6)

    def draw(self, canvas: PixelCanvas, x: int) -> int:
        """
        Composite the last rendered glyph into ``canvas`` at column ``x``.

        The glyph is bottom-aligned. A glyph taller than the canvas starts at
        row 0 and loses the rows past the bottom edge.

        Returns:
            Horizontal advance in pixels
        """
        slot = self._slot()
        bitmap = slot.bitmap
        rgba = self._composite(bitmap)
        y = max(0, canvas.height - bitmap.rows)
        canvas.blit(rgba, x, y)
        return slot.advance.x >> 6

    def close(self) -> None:
        """Release the face. Later renders fail."""
        self.face = None
        self._rendered = False


class FontLibrary:
    """
    Scoped owner of every face loaded for a run.

    freetype-py keeps the process-wide FT_Library handle itself; this object
    bounds the lifetime of the faces opened through it and is the one thing
    font loading goes through.
    """

    def __init__(
        self,
        face_factory: Callable[[str], object] | None = None,
        table_length: Callable[[object, str], int] = sfnt_table_length,
    ):
        self._face_factory = face_factory or freetype.Face
        self._table_length = table_length
        self.sources: list[GlyphSource] = []

    def __enter__(self) -> "FontLibrary":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def load(self, path: Path | str, pixel_size: int = DEFAULT_PIXEL_SIZE) -> GlyphSource:
        """
        Open ``path`` and wrap it in a GlyphSource.

        Raises:
            FontOpenError: FreeType cannot open the file
            MissingFixedSizesError: color bitmap font without embedded sizes
        """
        path = Path(path)
        try:
            face = self._face_factory(str(path))
        except (FT_Exception, OSError) as exc:
            raise FontOpenError(path, f"cannot open font: {exc}") from exc

        pixel_format = classify_face(face, self._table_length)
        if pixel_format is PixelFormat.COLOR:
            logger.debug("%s is a color font", path)

        source = GlyphSource(face, pixel_format, pixel_size, path=path)
        self.sources.append(source)
        return source

    def close(self) -> None:
        for source in self.sources:
            source.close()
        self.sources.clear()
