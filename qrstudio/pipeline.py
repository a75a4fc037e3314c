# -*- coding: utf-8 -*-
"""
QR Generation Pipeline

Chains segmenter, encoder, matrix builder and renderer. Every call starts
from scratch and returns fresh values; nothing is cached between calls.
"""

import logging
from typing import Optional

from .config import QRConfig
from .encoder import encode
from .matrix import QRSymbol, build
from .renderer import RenderedSurface, render
from .segmenter import segment

logger = logging.getLogger(__name__)


def make_symbol(
    text: str,
    ecc: str = 'M',
    version: Optional[int] = None,
    mask: Optional[int] = None,
    boost_error: bool = False,
    allow_downgrade: bool = True
) -> QRSymbol:
    """
    Encode ``text`` into a finished QR symbol.

    Raises:
        EmptyInputError: If the text is empty or whitespace only
        CapacityExceededError: If the text does not fit any allowed symbol
    """
    segments = segment(text)
    encoded = encode(segments, ecc, version=version, boost_error=boost_error,
                     allow_downgrade=allow_downgrade)
    return build(encoded.version, encoded.ec_level, encoded.codewords, mask=mask)


def generate(
    text: str,
    dark_color: Optional[str] = None,
    light_color: Optional[str] = None,
    config: Optional[QRConfig] = None
) -> RenderedSurface:
    """Run the whole pipeline and return the rendered surface."""
    config = config or QRConfig()
    symbol = make_symbol(text, config.ec_level, boost_error=config.boost_error,
                         allow_downgrade=config.allow_downgrade)
    logger.debug("Rendering version %d-%s mask %d", symbol.version, symbol.ec_level.name, symbol.mask)
    return render(
        symbol,
        dark_color if dark_color is not None else config.dark_color,
        light_color if light_color is not None else config.light_color,
        quiet_zone=config.quiet_zone,
        pixels_per_module=config.pixels_per_module,
    )
