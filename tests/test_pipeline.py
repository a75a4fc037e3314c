# -*- coding: utf-8 -*-
import pytest

from qrstudio import pipeline
from qrstudio.config import QRConfig
from qrstudio.errors import CapacityExceededError, EmptyInputError
from qrstudio.pipeline import generate, make_symbol
from qrstudio.tables import ECLevel


def test_example_url_scenario(decode_qr):
    surface = generate("https://example.com", "#000000", "#ffffff")
    assert surface.width > 0
    assert surface.dark_color == "#000000"
    assert decode_qr(surface.to_image()) == ["https://example.com"]


@pytest.mark.parametrize("text", [
    "HELLO WORLD 2024",
    "0123456789" * 5,
    "Mixed CASE text with digits 1234567890 and symbols !?",
    "https://example.com/search?q=qr+codes&lang=en",
])
def test_decoder_roundtrip(text, decode_qr):
    surface = generate(text, "#1e3a8a", "#dbeafe")
    assert decode_qr(surface.to_image()) == [text]


def test_same_input_gives_identical_surface():
    first = generate("idempotent", "#166534", "#dcfce7")
    second = generate("idempotent", "#166534", "#dcfce7")
    assert first == second
    assert first.to_png() == second.to_png()


def test_config_controls_geometry_and_level():
    config = QRConfig(ec_level='H', quiet_zone=2, pixels_per_module=3)
    symbol = make_symbol("config", config.ec_level)
    surface = generate("config", config=config)
    assert symbol.ec_level is ECLevel.H
    assert surface.width == (symbol.size + 4) * 3
    assert (surface.dark_color, surface.light_color) == ('#000000', '#ffffff')


def test_empty_text_raises():
    with pytest.raises(EmptyInputError):
        generate("  ", "#000000", "#ffffff")


def test_capacity_boundary():
    symbol = make_symbol("a" * 2953, 'L')
    assert (symbol.version, symbol.ec_level) == (40, ECLevel.L)
    assert symbol.size == 177
    with pytest.raises(CapacityExceededError):
        make_symbol("a" * 2954, 'L')


def test_forced_mask_and_version():
    symbol = make_symbol("forced", 'M', version=4, mask=6)
    assert (symbol.version, symbol.mask) == (4, 6)


def test_pipeline_calls_encoder_once(monkeypatch):
    calls = []
    real_encode = pipeline.encode

    def spy(*args, **kwargs):
        calls.append(args)
        return real_encode(*args, **kwargs)

    monkeypatch.setattr(pipeline, 'encode', spy)
    generate("spy")
    assert len(calls) == 1
