"""
glyphstrip command line interface

Render text into a PPM/PNG strip, trying each font in order for every
character.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Sequence, Tuple

import click

from . import __version__
from .base import ExportError, FontLoadError, MissingFixedSizesError, TextDecodeError
from .constants import (
    DEFAULT_OUTPUT_FILE,
    DEFAULT_PIXEL_SIZE,
    EXIT_BAD_FONT,
    EXIT_BAD_TEXT,
    EXIT_FAILURE,
    EXIT_INTERRUPTED,
    OUTPUT_FORMATS,
)
from .export import format_for_path, save_image
from .fallback import FontFallbackChain
from .freetypepy import FontLibrary
from .layout import LayoutEngine
from .text import decode_codepoints, parse_hex_codepoints


def configure_logging(quiet: bool, verbose: bool) -> None:
    """Route library log records to stderr at the requested verbosity."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(format="%(levelname)s: %(message)s")
    logging.getLogger("glyphstrip").setLevel(level)


def split_arguments(args: Sequence[str], text_file: Optional[str]) -> Tuple[Tuple[str, ...], Optional[str]]:
    """Fonts come first; the last positional is the text unless --text-file is given."""
    if text_file:
        if not args:
            raise click.UsageError("At least one font file is required")
        return tuple(args), None
    if len(args) < 2:
        raise click.UsageError("Expected one or more font files followed by the text")
    return tuple(args[:-1]), args[-1]


def read_codepoints(text: Optional[str], text_file: Optional[str], hex_mode: bool) -> list:
    """Codepoints from the TEXT argument or the raw bytes of --text-file."""
    if text_file:
        raw = Path(text_file).read_bytes()
        if not hex_mode:
            return decode_codepoints(raw)
        text = "".join(chr(c) for c in decode_codepoints(raw))

    if hex_mode:
        return parse_hex_codepoints(text)
    return decode_codepoints(text)


@click.group()
@click.version_option(version=__version__, prog_name="glyphstrip")
def cli():
    """glyphstrip - text to a single image strip with font fallback"""
    pass


@cli.command(name="render")
@click.argument("args", nargs=-1, metavar="FONT... TEXT")
@click.option("-o", "--output-file", default=DEFAULT_OUTPUT_FILE, type=click.Path(), help="Output file path")
@click.option(
    "-O", "--format", "output_format",
    type=click.Choice(OUTPUT_FORMATS, case_sensitive=False),
    help="Output format (default: from the output file suffix, else ppm)",
)
@click.option("-s", "--pixel-size", type=click.IntRange(min=1), default=DEFAULT_PIXEL_SIZE, help="Target pixel size")
@click.option("-u", "--codepoints", "hex_mode", is_flag=True, help="TEXT is a list of hex codepoints, e.g. 1F600 U+41")
@click.option("-T", "--text-file", type=click.Path(exists=True, dir_okay=False), help="Read input text from file")
@click.option("-q", "--quiet", is_flag=True, help="Silent mode (no progress info)")
@click.option("--verbose", is_flag=True, help="Verbose output")
def render(
    args: Tuple[str, ...],
    output_file: str,
    output_format: Optional[str],
    pixel_size: int,
    hex_mode: bool,
    text_file: Optional[str],
    quiet: bool,
    verbose: bool,
):
    """Render TEXT using the first FONT that has each character"""
    configure_logging(quiet, verbose)
    fonts, text = split_arguments(args, text_file)

    try:
        codepoints = read_codepoints(text, text_file, hex_mode)
    except TextDecodeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_BAD_TEXT)

    output_format = (output_format or format_for_path(output_file)).lower()

    try:
        with FontLibrary() as library:
            chain = FontFallbackChain.from_paths(library, fonts, pixel_size)
            if verbose:
                for source in chain:
                    click.echo(f"Loaded {source}", err=True)
            result = LayoutEngine(chain, space_width=pixel_size // 2).render(codepoints)
    except MissingFixedSizesError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_BAD_FONT)

    if not quiet:
        click.echo(f"width: {result.width}, height: {result.height}", err=True)

    try:
        written = save_image(result.canvas, output_file, output_format)
    except ExportError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_FAILURE)

    if not quiet:
        click.echo(f"✓ Rendered {len(codepoints)} codepoints to {output_file}", err=True)
        click.echo(f"  Format: {output_format.upper()}", err=True)
        click.echo(f"  Size: {written} bytes", err=True)
        if result.missing:
            click.echo(f"  Missing glyphs: {len(result.missing)}", err=True)


@cli.command(name="info")
@click.argument("fonts", nargs=-1, required=True, metavar="FONT...")
@click.option("-s", "--pixel-size", type=click.IntRange(min=1), default=DEFAULT_PIXEL_SIZE, help="Target pixel size")
def info(fonts: Tuple[str, ...], pixel_size: int):
    """Show how each FONT is classified and sized"""
    with FontLibrary() as library:
        for font in fonts:
            try:
                source = library.load(font, pixel_size)
            except FontLoadError as e:
                click.echo(f"{font}: unusable ({e})")
                continue
            line = f"{font}: {source.pixel_format.value}, {source.pixel_size}px"
            if source.fixed_sizes:
                line += f" (embedded sizes: {', '.join(str(w) for w in source.fixed_sizes)})"
            click.echo(line)


def main():
    """Main CLI entry point"""
    try:
        cli()
    except KeyboardInterrupt:
        click.echo("\nInterrupted", err=True)
        sys.exit(EXIT_INTERRUPTED)


if __name__ == "__main__":
    main()
