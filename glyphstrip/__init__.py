"""
Render a run of Unicode text into a single RGBA strip with font fallback.

Each codepoint is drawn with the first font in an ordered list that has a
glyph for it. Color emoji fonts (embedded CBDT bitmaps) and ordinary outline
fonts can be mixed freely; no shaping or kerning is done.

```python
from glyphstrip import render_text, save_image

result = render_text("Hi 👋", ["DejaVuSans.ttf", "NotoColorEmoji.ttf"])
save_image(result.canvas, "out.png")
```
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from .base import (
    ExportError,
    FontLoadError,
    FontOpenError,
    GlyphSize,
    GlyphStripError,
    MissingFixedSizesError,
    PixelFormat,
    TextDecodeError,
)
from .canvas import PixelCanvas
from .constants import DEFAULT_PIXEL_SIZE, SPACE_WIDTH
from .export import encode_png, encode_ppm, export_image, save_image
from .fallback import FontFallbackChain
from .freetypepy import FontLibrary, GlyphSource, classify_face, select_fixed_size
from .layout import LayoutEngine, RenderResult
from .text import decode_codepoints, parse_hex_codepoints

__version__ = "0.1.0"


def render_text(
    text: str | bytes | Sequence[int],
    font_paths: Sequence[Path | str],
    pixel_size: int = DEFAULT_PIXEL_SIZE,
    library: FontLibrary | None = None,
) -> RenderResult:
    """
    Load the fonts, lay out ``text`` and return the drawn strip.

    Args:
        text: UTF-8 bytes, a string, or codepoints
        font_paths: Fonts in fallback order
        pixel_size: Target pixel size; a space advances by half of it
        library: Library that owns the faces (a private one is used and
            closed if omitted)

    Returns:
        RenderResult with the canvas and the unresolved codepoints
    """
    if isinstance(text, (str, bytes, bytearray)):
        codepoints = decode_codepoints(text)
    else:
        codepoints = [int(c) for c in text]

    if library is not None:
        chain = FontFallbackChain.from_paths(library, font_paths, pixel_size)
        return LayoutEngine(chain, space_width=pixel_size // 2).render(codepoints)

    with FontLibrary() as own_library:
        chain = FontFallbackChain.from_paths(own_library, font_paths, pixel_size)
        return LayoutEngine(chain, space_width=pixel_size // 2).render(codepoints)


__all__ = [
    "DEFAULT_PIXEL_SIZE",
    "SPACE_WIDTH",
    "ExportError",
    "FontFallbackChain",
    "FontLibrary",
    "FontLoadError",
    "FontOpenError",
    "GlyphSize",
    "GlyphSource",
    "GlyphStripError",
    "LayoutEngine",
    "MissingFixedSizesError",
    "PixelCanvas",
    "PixelFormat",
    "RenderResult",
    "TextDecodeError",
    "classify_face",
    "decode_codepoints",
    "encode_png",
    "encode_ppm",
    "export_image",
    "parse_hex_codepoints",
    "render_text",
    "save_image",
    "select_fixed_size",
    "__version__",
]
