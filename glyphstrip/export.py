# this_file: glyphstrip/export.py
"""
Canvas serialization: binary PPM (P6) and PNG.
"""

from __future__ import annotations

import io
from pathlib import Path

from PIL import Image

from .base import ExportError
from .canvas import PixelCanvas
from .constants import OUTPUT_FORMATS


def encode_ppm(canvas: PixelCanvas) -> bytes:
    """
    P6 header followed by RGB triples, row-major, top to bottom.

    Alpha is dropped, so transparent background comes out black.
    """
    header = f"P6\n{canvas.width} {canvas.height}\n255\n".encode("ascii")
    return header + canvas.rgb().tobytes()


def encode_png(canvas: PixelCanvas) -> bytes:
    """RGBA PNG; unlike PPM this keeps the alpha channel."""
    if not canvas.width or not canvas.height:
        raise ExportError(f"Cannot encode an empty {canvas.width}x{canvas.height} canvas as PNG")
    img = Image.fromarray(canvas.pixels)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


_ENCODERS = {
    "ppm": encode_ppm,
    "png": encode_png,
}


def export_image(canvas: PixelCanvas, output_format: str = "ppm") -> bytes:
    """Encode ``canvas`` in one of OUTPUT_FORMATS."""
    encoder = _ENCODERS.get(output_format.lower())
    if encoder is None:
        raise ExportError(
            f"Unknown output format: {output_format}. Must be one of {', '.join(OUTPUT_FORMATS)}"
        )
    return encoder(canvas)


def format_for_path(path: Path | str, default: str = "ppm") -> str:
    """Output format implied by the file suffix."""
    suffix = Path(path).suffix.lower().lstrip(".")
    return suffix if suffix in _ENCODERS else default


def save_image(canvas: PixelCanvas, output_path: Path | str, output_format: str | None = None) -> int:
    """
    Write ``canvas`` to ``output_path``.

    Returns:
        Number of bytes written
    """
    output_path = Path(output_path)
    data = export_image(canvas, output_format or format_for_path(output_path))

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(data)
    except OSError as exc:
        raise ExportError(f"Failed to save image to {output_path}: {exc}") from exc
    return len(data)
