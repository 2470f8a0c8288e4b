# this_file: tests/test_fallback.py

"""Tests for FontFallbackChain."""

import logging

import pytest

from glyphstrip import FontFallbackChain, GlyphSize, GlyphSource, MissingFixedSizesError, PixelFormat

from conftest import FakeFace, solid_bgra, solid_gray


def mono(glyphs):
    return GlyphSource(FakeFace(glyphs), PixelFormat.MONOCHROME)


class TestResolve:
    def test_first_source_wins(self):
        """When both fonts have the glyph, the earlier one is used."""
        first = mono({0x41: (10, 12, solid_gray(12, 8))})
        second = mono({0x41: (20, 30, solid_gray(30, 16))})
        chain = FontFallbackChain([first, second])
        source, size = chain.resolve(0x41)
        assert source is first
        assert size == GlyphSize(10, 12)
        assert second.face.loaded == []

    def test_falls_through_to_later_source(self):
        first = mono({0x41: (10, 12, solid_gray(12, 8))})
        second = mono({0x42: (20, 30, solid_gray(30, 16))})
        source, size = FontFallbackChain([first, second]).resolve(0x42)
        assert source is second
        assert size == GlyphSize(20, 30)

    def test_broken_glyph_falls_through(self):
        """A render failure in one font means trying the next, not aborting."""
        first = GlyphSource(FakeFace(broken={0x41}), PixelFormat.MONOCHROME)
        second = mono({0x41: (7, 9, solid_gray(9, 5))})
        source, _ = FontFallbackChain([first, second]).resolve(0x41)
        assert source is second

    def test_unresolved(self):
        chain = FontFallbackChain([mono({0x41: (10, 12, solid_gray(12, 8))})])
        assert chain.resolve(0x263A) is None

    def test_empty_chain(self):
        chain = FontFallbackChain([])
        assert len(chain) == 0
        assert chain.resolve(0x41) is None

    def test_order_is_preserved(self):
        sources = [mono({}), mono({}), mono({})]
        chain = FontFallbackChain(iter(sources))
        assert list(chain) == sources
        assert chain.sources == tuple(sources)


class TestFromPaths:
    def test_loads_in_order(self, make_library):
        faces = {
            "sans.ttf": FakeFace({0x41: (10, 12, solid_gray(12, 8))}),
            "emoji.ttf": FakeFace({0x1F600: (136, 128, solid_bgra(128, 136))}, fixed_sizes=(136,)),
        }
        library = make_library(faces, color=["emoji.ttf"])
        chain = FontFallbackChain.from_paths(library, ["sans.ttf", "emoji.ttf"], 128)
        assert [s.path.name for s in chain] == ["sans.ttf", "emoji.ttf"]
        assert [s.pixel_format for s in chain] == [PixelFormat.MONOCHROME, PixelFormat.COLOR]

    def test_unopenable_font_is_skipped(self, make_library, caplog):
        library = make_library({"sans.ttf": FakeFace()})
        with caplog.at_level(logging.WARNING, logger="glyphstrip"):
            chain = FontFallbackChain.from_paths(library, ["missing.ttf", "sans.ttf"])
        assert [s.path.name for s in chain] == ["sans.ttf"]
        assert "missing.ttf" in caplog.text

    def test_color_font_without_sizes_is_fatal(self, make_library):
        library = make_library({"emoji.ttf": FakeFace(), "sans.ttf": FakeFace()}, color=["emoji.ttf"])
        with pytest.raises(MissingFixedSizesError):
            FontFallbackChain.from_paths(library, ["sans.ttf", "emoji.ttf"])
