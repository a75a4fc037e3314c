# -*- coding: utf-8 -*-
"""
QR Code Renderer Module

Rasterizes a module matrix into a flat two-color surface. Every module
becomes a solid pixels_per_module x pixels_per_module block and a quiet zone
of light modules surrounds the symbol. There is no anti-aliasing.

The surface stores one palette index per pixel (1 = dark, 0 = light) next to
the two colors exactly as supplied. Colors are only parsed when the surface
is exported, so rendering never rejects a color string.

Functions:
    render: Build a RenderedSurface from a matrix
    render_svg: Build an SVG document from a matrix
"""

import base64
import html
from io import BytesIO
from typing import Any, Sequence, Tuple

import numpy as np
from PIL import Image, ImageColor

DEFAULT_QUIET_ZONE = 4
DEFAULT_PIXELS_PER_MODULE = 10


def _rows(grid: Any) -> Sequence[Sequence[bool]]:
    # Accept a QRSymbol or a bare matrix
    return getattr(grid, 'matrix', grid)


def _check_geometry(quiet_zone: int, pixels_per_module: int) -> None:
    if quiet_zone < 0:
        raise ValueError(f"Quiet zone must be >= 0, got {quiet_zone}")
    if pixels_per_module < 1:
        raise ValueError(f"Pixels per module must be >= 1, got {pixels_per_module}")


class RenderedSurface:
    """Immutable two-color raster of a QR symbol."""

    def __init__(self, pixels: np.ndarray, dark_color: str, light_color: str,
                 quiet_zone: int, pixels_per_module: int):
        pixels = np.array(pixels, dtype=np.uint8)
        pixels.flags.writeable = False
        self.pixels = pixels
        self.dark_color = dark_color
        self.light_color = light_color
        self.quiet_zone = quiet_zone
        self.pixels_per_module = pixels_per_module

    def __repr__(self) -> str:
        return (f"<RenderedSurface {self.width}x{self.height} "
                f"dark={self.dark_color!r} light={self.light_color!r}>")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RenderedSurface):
            return NotImplemented
        return (self.dark_color == other.dark_color
                and self.light_color == other.light_color
                and np.array_equal(self.pixels, other.pixels))

    __hash__ = None

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def modules_per_side(self) -> int:
        return self.width // self.pixels_per_module

    def palette(self) -> Tuple[Tuple[int, ...], Tuple[int, ...]]:
        """(light, dark) as RGB or RGBA tuples; ValueError on bad colors."""
        light = ImageColor.getrgb(self.light_color)
        dark = ImageColor.getrgb(self.dark_color)
        if len(light) != len(dark):
            light = light + (255,) * (4 - len(light))
            dark = dark + (255,) * (4 - len(dark))
        return light, dark

    def to_image(self) -> Image.Image:
        """Pillow image in RGB (or RGBA when a color has an alpha channel)."""
        light, dark = self.palette()
        lut = np.array([light, dark], dtype=np.uint8)
        return Image.fromarray(lut[self.pixels])

    def to_png(self) -> bytes:
        buf = BytesIO()
        self.to_image().save(buf, format='PNG')
        return buf.getvalue()

    def to_data_url(self) -> str:
        return 'data:image/png;base64,' + base64.b64encode(self.to_png()).decode('ascii')


def render(
    grid: Any,
    dark_color: str = '#000000',
    light_color: str = '#ffffff',
    quiet_zone: int = DEFAULT_QUIET_ZONE,
    pixels_per_module: int = DEFAULT_PIXELS_PER_MODULE
) -> RenderedSurface:
    """
    Rasterize ``grid`` with nearest-neighbour block fill.

    Args:
        grid: QRSymbol or matrix of booleans (True=dark)
        dark_color: Color of dark modules, stored as given
        light_color: Color of light modules and the quiet zone, stored as given
        quiet_zone: Border width in modules
        pixels_per_module: Side of one module block in pixels

    Returns:
        RenderedSurface of (side + 2*quiet_zone) * pixels_per_module pixels per axis

    Example:
        >>> surface = render([[True, False], [False, True]], quiet_zone=1, pixels_per_module=2)
        >>> surface.width
        8
    """
    _check_geometry(quiet_zone, pixels_per_module)
    modules = np.array([[1 if v else 0 for v in row] for row in _rows(grid)], dtype=np.uint8)
    modules = np.pad(modules, quiet_zone, mode='constant', constant_values=0)
    pixels = modules.repeat(pixels_per_module, axis=0).repeat(pixels_per_module, axis=1)
    return RenderedSurface(pixels, dark_color, light_color, quiet_zone, pixels_per_module)


def render_svg(
    grid: Any,
    dark_color: str = '#000000',
    light_color: str = '#ffffff',
    quiet_zone: int = DEFAULT_QUIET_ZONE,
    scale: int = DEFAULT_PIXELS_PER_MODULE
) -> bytes:
    """
    Render ``grid`` as an SVG document, one rect per dark module.

    Returns:
        bytes: UTF-8 encoded SVG content
    """
    _check_geometry(quiet_zone, scale)
    rows = _rows(grid)
    px = (len(rows) + 2 * quiet_zone) * scale
    dark = html.escape(dark_color, quote=True)
    light = html.escape(light_color, quote=True)

    out = []
    out.append('<?xml version="1.0" encoding="UTF-8"?>')
    out.append(f'<svg xmlns="http://www.w3.org/2000/svg" width="{px}" height="{px}" viewBox="0 0 {px} {px}">')
    out.append(f'<rect width="{px}" height="{px}" fill="{light}"/>')
    for r, row in enumerate(rows):
        for c, value in enumerate(row):
            if not value:
                continue
            x = (c + quiet_zone) * scale
            y = (r + quiet_zone) * scale
            out.append(f'<rect x="{x}" y="{y}" width="{scale}" height="{scale}" fill="{dark}"/>')
    out.append('</svg>')
    return "\n".join(out).encode("utf-8")
