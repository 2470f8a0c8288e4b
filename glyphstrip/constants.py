# this_file: glyphstrip/constants.py
"""
Constants shared across the glyph strip renderer.
"""

# Target pixel size for every font (pixels per em)
DEFAULT_PIXEL_SIZE = 128

# A literal space is never looked up in a font; it advances the cursor by this much
SPACE_WIDTH = DEFAULT_PIXEL_SIZE // 2
SPACE_CODEPOINT = 0x20

# RGBA
BYTES_PER_PIXEL = 4

# Embedded color bitmap data table (color emoji fonts)
COLOR_BITMAP_TABLE = "CBDT"

DEFAULT_OUTPUT_FILE = "out.ppm"
OUTPUT_FORMATS = ("ppm", "png")

# Process exit statuses, one per failure class
EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_BAD_TEXT = 3
EXIT_BAD_FONT = 4
EXIT_INTERRUPTED = 130
