# -*- coding: utf-8 -*-
from io import BytesIO

import numpy as np
import pytest
from PIL import Image

from qrstudio.pipeline import make_symbol
from qrstudio.renderer import RenderedSurface, render, render_svg

SMALL = [[True, False], [False, True]]


def test_surface_geometry():
    symbol = make_symbol("geometry")
    surface = render(symbol, quiet_zone=4, pixels_per_module=3)
    expected = (symbol.size + 8) * 3
    assert (surface.width, surface.height) == (expected, expected)
    assert surface.modules_per_side == symbol.size + 8


def test_block_fill_and_quiet_zone():
    surface = render(SMALL, quiet_zone=1, pixels_per_module=2)
    assert surface.pixels.tolist() == [
        [0, 0, 0, 0, 0, 0, 0, 0],
        [0, 0, 0, 0, 0, 0, 0, 0],
        [0, 0, 1, 1, 0, 0, 0, 0],
        [0, 0, 1, 1, 0, 0, 0, 0],
        [0, 0, 0, 0, 1, 1, 0, 0],
        [0, 0, 0, 0, 1, 1, 0, 0],
        [0, 0, 0, 0, 0, 0, 0, 0],
        [0, 0, 0, 0, 0, 0, 0, 0],
    ]


def test_surface_is_read_only():
    surface = render(SMALL)
    with pytest.raises(ValueError):
        surface.pixels[0, 0] = 1


def test_only_two_colors_in_image():
    surface = render(make_symbol("colors"), '#1e3a8a', '#dbeafe', pixels_per_module=2)
    image = surface.to_image()
    assert image.mode == 'RGB'
    colors = {c for _, c in image.getcolors()}
    assert colors == {(0x1e, 0x3a, 0x8a), (0xdb, 0xea, 0xfe)}
    assert image.getpixel((0, 0)) == (0xdb, 0xea, 0xfe)


def test_alpha_colors_give_rgba():
    image = render(SMALL, '#00000080', '#ffffff').to_image()
    assert image.mode == 'RGBA'
    assert image.getpixel((0, 0)) == (255, 255, 255, 255)


def test_png_export_roundtrips_through_pillow():
    surface = render(make_symbol("png"), pixels_per_module=4)
    png = surface.to_png()
    assert png.startswith(b'\x89PNG\r\n\x1a\n')
    image = Image.open(BytesIO(png))
    assert image.size == (surface.width, surface.height)
    assert np.array_equal(np.array(image.convert('L')) < 128, surface.pixels == 1)


def test_data_url():
    url = render(SMALL).to_data_url()
    assert url.startswith('data:image/png;base64,')


def test_invalid_color_only_fails_on_export():
    surface = render(SMALL, 'not-a-color', '#ffffff')
    assert surface.dark_color == 'not-a-color'
    with pytest.raises(ValueError):
        surface.to_png()


def test_equality_and_idempotence():
    symbol = make_symbol("same")
    assert render(symbol, '#000', '#fff') == render(symbol, '#000', '#fff')
    assert render(symbol, '#000', '#fff') != render(symbol, '#111', '#fff')
    assert render(symbol).to_png() == render(symbol).to_png()


@pytest.mark.parametrize("quiet_zone, ppm", [(-1, 10), (4, 0)])
def test_bad_geometry(quiet_zone, ppm):
    with pytest.raises(ValueError):
        render(SMALL, quiet_zone=quiet_zone, pixels_per_module=ppm)


def test_svg_export():
    svg = render_svg(SMALL, '#123456', '#abcdef', quiet_zone=1, scale=5).decode('utf-8')
    assert svg.startswith('<?xml')
    assert 'width="20" height="20"' in svg
    assert svg.count('fill="#123456"') == 2
    assert '<rect width="20" height="20" fill="#abcdef"/>' in svg


def test_surface_repr():
    surface = RenderedSurface(np.zeros((2, 2)), '#000', '#fff', 0, 1)
    assert '2x2' in repr(surface)
