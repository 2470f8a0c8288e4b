#!/usr/bin/env python3
# this_file: toy.py
"""A simple CLI to try glyphstrip on local fonts.

Usage:
    python toy.py render "Hi 👋" DejaVuSans.ttf NotoColorEmoji.ttf
    python toy.py inspect DejaVuSans.ttf NotoColorEmoji.ttf
    python toy.py topng out.ppm
"""

from pathlib import Path

import fire
from PIL import Image

import glyphstrip

SYSTEM_FONT_DIRS = [
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
    Path.home() / ".fonts",
    Path("/System/Library/Fonts"),
    Path("/Library/Fonts"),
]


def find_system_fonts(limit: int = 10) -> list:
    """First few .ttf/.otf files under the usual font directories."""
    found = []
    for font_dir in SYSTEM_FONT_DIRS:
        if not font_dir.is_dir():
            continue
        for pattern in ("*.ttf", "*.otf"):
            found.extend(sorted(font_dir.rglob(pattern)))
        if len(found) >= limit:
            break
    return found[:limit]


class Toy:
    """A simple CLI to try glyphstrip on local fonts."""

    def render(self, text, *fonts, output="toy.png", size=glyphstrip.DEFAULT_PIXEL_SIZE):
        """Render text with the given fonts (system fonts if none given)."""
        font_paths = list(fonts) or find_system_fonts()
        if not font_paths:
            print("Error: no fonts given and none found in the system font directories")
            return 1

        print(f"Fonts: {', '.join(Path(p).name for p in font_paths)}")
        result = glyphstrip.render_text(str(text), font_paths, pixel_size=int(size))
        print(f"Canvas: {result.width}x{result.height}")
        if result.missing:
            print(f"Missing: {' '.join(f'U+{c:04X}' for c in result.missing)}")

        if not result.width or not result.height:
            print("Nothing to save")
            return 1
        written = glyphstrip.save_image(result.canvas, output)
        print(f"Saved {output} ({written} bytes)")
        return 0

    def inspect(self, *fonts, size=glyphstrip.DEFAULT_PIXEL_SIZE):
        """Print classification and selected size of each font."""
        with glyphstrip.FontLibrary() as library:
            for font in fonts or find_system_fonts():
                try:
                    source = library.load(font, int(size))
                except glyphstrip.FontLoadError as e:
                    print(f"  {Path(font).name:40s} ✗ {e}")
                    continue
                print(f"  {Path(font).name:40s} {source.pixel_format.value:10s} {source.pixel_size}px")
        return 0

    def topng(self, input_file, output_file=None):
        """Convert a PPM written by glyphstrip to PNG."""
        input_path = Path(input_file)
        output_path = Path(output_file) if output_file else input_path.with_suffix(".png")

        with Image.open(input_path) as img:
            print(f"Converting {input_path} ({img.width}x{img.height}) to {output_path}")
            img.save(output_path)
        return 0


if __name__ == "__main__":
    fire.Fire(Toy)
