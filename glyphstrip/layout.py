# this_file: glyphstrip/layout.py
"""
Two-pass layout of a codepoint sequence into a single horizontal strip.

The canvas size has to be known before anything is drawn, and every render
overwrites the font's glyph slot, so the sequence is resolved twice: once to
measure, once to draw.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from .canvas import PixelCanvas
from .constants import SPACE_CODEPOINT, SPACE_WIDTH
from .fallback import FontFallbackChain

logger = logging.getLogger(__name__)


@dataclass
class RenderResult:
    """Canvas produced by the draw pass plus the codepoints nothing could render."""

    canvas: PixelCanvas
    missing: tuple[int, ...] = field(default_factory=tuple)

    @property
    def width(self) -> int:
        return self.canvas.width

    @property
    def height(self) -> int:
        return self.canvas.height


class LayoutEngine:
    """Measure, allocate, draw."""

    def __init__(self, chain: FontFallbackChain, space_width: int = SPACE_WIDTH):
        self.chain = chain
        self.space_width = int(space_width)

    def measure(self, codepoints: Sequence[int]) -> tuple[int, int]:
        """
        Total advance and tallest glyph height over the sequence.

        Spaces add ``space_width`` and no height; unresolved codepoints add
        nothing.
        """
        width = 0
        height = 0
        for codepoint in codepoints:
            if codepoint == SPACE_CODEPOINT:
                width += self.space_width
                continue
            resolved = self.chain.resolve(codepoint)
            if resolved is None:
                continue
            _, size = resolved
            width += size.advance
            height = max(height, size.height)
        return width, height

    def draw(self, codepoints: Sequence[int], canvas: PixelCanvas) -> tuple[int, tuple[int, ...]]:
        """
        Composite every glyph left to right starting at the canvas cursor.

        Returns:
            Final cursor position and the unresolved codepoints, in order
        """
        missing = []
        for codepoint in codepoints:
            if codepoint == SPACE_CODEPOINT:
                canvas.advance(self.space_width)
                continue
            resolved = self.chain.resolve(codepoint)
            if resolved is None:
                logger.warning("Missing glyph for codepoint U+%04X", codepoint)
                missing.append(codepoint)
                continue
            source, _ = resolved
            canvas.advance(source.draw(canvas, canvas.cursor))
        return canvas.cursor, tuple(missing)

    def render(self, codepoints: Sequence[int]) -> RenderResult:
        codepoints = list(codepoints)
        width, height = self.measure(codepoints)
        logger.debug("Canvas size: %dx%d", width, height)
        canvas = PixelCanvas(width, height)
        _, missing = self.draw(codepoints, canvas)
        return RenderResult(canvas, missing)
