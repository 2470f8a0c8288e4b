# this_file: glyphstrip/fallback.py
"""
Ordered font fallback.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator, Sequence

from .base import FontOpenError, GlyphSize
from .constants import DEFAULT_PIXEL_SIZE
from .freetypepy import FontLibrary, GlyphSource

logger = logging.getLogger(__name__)


class FontFallbackChain:
    """
    Glyph sources in priority order.

    The first source that can render a codepoint wins. The order is fixed
    when the chain is built.
    """

    def __init__(self, sources: Iterable[GlyphSource]):
        self._sources = tuple(sources)

    @classmethod
    def from_paths(
        cls,
        library: FontLibrary,
        paths: Sequence[Path | str],
        pixel_size: int = DEFAULT_PIXEL_SIZE,
    ) -> "FontFallbackChain":
        """
        Load every font in ``paths`` through ``library``.

        Fonts that FreeType cannot open are left out with a warning. A color
        font without embedded sizes raises MissingFixedSizesError.
        """
        sources = []
        for path in paths:
            try:
                sources.append(library.load(path, pixel_size))
            except FontOpenError as exc:
                logger.warning("Skipping font %s", exc)
        return cls(sources)

    def __iter__(self) -> Iterator[GlyphSource]:
        return iter(self._sources)

    def __len__(self) -> int:
        return len(self._sources)

    @property
    def sources(self) -> tuple[GlyphSource, ...]:
        return self._sources

    def resolve(self, codepoint: int) -> tuple[GlyphSource, GlyphSize] | None:
        """
        Render ``codepoint`` with the first source that has it.

        Returns:
            The source (whose glyph slot now holds the glyph) and the glyph
            size, or None if no source can render the codepoint
        """
        for source in self._sources:
            if source.render_glyph(codepoint):
                return source, source.glyph_size()
        return None
