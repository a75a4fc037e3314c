# -*- coding: utf-8 -*-
"""Export helpers: download file names and saving PNG files."""

import logging
import os
import time
from typing import Optional

from .renderer import RenderedSurface

logger = logging.getLogger(__name__)


def export_filename(now: Optional[float] = None) -> str:
    """
    File name for a downloaded code, ``qr-code-<unix epoch millis>.png``.

    Example:
        >>> export_filename(1700000000.123)
        'qr-code-1700000000123.png'
    """
    if now is None:
        now = time.time()
    return f"qr-code-{int(round(now * 1000))}.png"


def save_png(surface: RenderedSurface, directory: str = '.', now: Optional[float] = None) -> str:
    """Write ``surface`` as PNG into ``directory`` and return the path."""
    path = os.path.join(directory, export_filename(now))
    with open(path, 'wb') as fh:
        fh.write(surface.to_png())
    logger.info("Saved QR code to %s", path)
    return path
