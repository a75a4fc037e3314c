#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
QR Studio - Flask Web Application
"""

import logging
from io import BytesIO
from typing import Tuple

from dotenv import load_dotenv
from flask import Flask, jsonify, render_template, request, send_file

from qrstudio.config import QRConfig
from qrstudio.errors import CapacityExceededError, EmptyInputError
from qrstudio.export import export_filename
from qrstudio.pipeline import make_symbol
from qrstudio.presets import PRESETS, get_preset
from qrstudio.renderer import render, render_svg

load_dotenv()
DEFAULTS = QRConfig.from_env()

# Configure logging
logging.basicConfig(level=getattr(logging, DEFAULTS.log_level, logging.INFO))
logger = logging.getLogger(__name__)


def _read_params(req) -> Tuple[str, QRConfig]:
    """Extract QR generation parameters from a Flask request."""
    text = req.values.get('text') or ""
    values = dict(req.values.items())
    preset_name = values.get('preset')
    if preset_name:
        try:
            preset = get_preset(preset_name)
            values['dark_color'] = preset.dark
            values['light_color'] = preset.light
        except KeyError:
            logger.warning(f"Unknown preset: {preset_name}")
    return text, QRConfig.from_values(values, DEFAULTS)


def _build(text: str, config: QRConfig):
    logger.info(f"Generating QR code with parameters: ecc={config.ec_level}, "
                f"border={config.quiet_zone}, scale={config.pixels_per_module}")
    symbol = make_symbol(text, config.ec_level, boost_error=config.boost_error,
                         allow_downgrade=config.allow_downgrade)
    logger.info(f"Successfully generated QR code version {symbol.version}-{symbol.ec_level.name} "
                f"mask {symbol.mask}")
    return symbol


app = Flask(__name__, template_folder='templates')


@app.route('/', methods=['GET', 'POST'])
def index():
    text, config = _read_params(request)
    qr_view = None
    error = None

    if text.strip():
        try:
            symbol = _build(text, config)
            surface = render(symbol, config.dark_color, config.light_color,
                             quiet_zone=config.quiet_zone,
                             pixels_per_module=config.pixels_per_module)
            qr_view = {
                'version': symbol.version,
                'ecc': symbol.ec_level.name,
                'mask': symbol.mask,
                'size': symbol.size,
                'modules': symbol.size ** 2,
                'dark_modules': symbol.dark_modules(),
                'border': config.quiet_zone,
                'img_src': surface.to_data_url(),
            }
        except CapacityExceededError as ex:
            error = f"Text too long for a QR code: {ex}"
            logger.warning(f"QR generation failed: {ex}")
        except ValueError as ex:
            # Pillow rejects the color only when the image is exported
            error = f"Could not render the QR code: {ex}"
            logger.warning(f"QR rendering failed: {ex}")

    return render_template(
        'index.html',
        text=text, config=config, presets=PRESETS,
        qr=qr_view, error=error,
        debounce_ms=int(round(config.debounce_seconds * 1000))
    )


@app.route('/api/qr', methods=['GET', 'POST'])
def api_qr():
    text, config = _read_params(request)
    if not text.strip():
        return jsonify({'image': None})
    try:
        symbol = _build(text, config)
        surface = render(symbol, config.dark_color, config.light_color,
                         quiet_zone=config.quiet_zone,
                         pixels_per_module=config.pixels_per_module)
        image = surface.to_data_url()
    except CapacityExceededError as ex:
        return jsonify({'error': str(ex)}), 413
    except ValueError as ex:
        return jsonify({'error': str(ex)}), 400
    return jsonify({
        'version': symbol.version,
        'ec_level': symbol.ec_level.name,
        'mask': symbol.mask,
        'size': symbol.size,
        'modules': symbol.size ** 2,
        'dark_modules': symbol.dark_modules(),
        'width': surface.width,
        'image': image,
    })


@app.route('/api/presets', methods=['GET'])
def api_presets():
    return jsonify([preset._asdict() for preset in PRESETS])


@app.route('/export/png', methods=['GET'])
def export_png():
    text, config = _read_params(request)
    try:
        symbol = _build(text, config)
        surface = render(symbol, config.dark_color, config.light_color,
                         quiet_zone=config.quiet_zone,
                         pixels_per_module=config.pixels_per_module)
        png = surface.to_png()
    except EmptyInputError:
        return "Missing text", 400
    except CapacityExceededError as ex:
        return str(ex), 413
    except ValueError as ex:
        return str(ex), 400
    return send_file(BytesIO(png), as_attachment=True,
                     download_name=export_filename(), mimetype='image/png')


@app.route('/export/svg', methods=['GET'])
def export_svg():
    text, config = _read_params(request)
    try:
        symbol = _build(text, config)
    except EmptyInputError:
        return "Missing text", 400
    except CapacityExceededError as ex:
        return str(ex), 413
    svg_bytes = render_svg(symbol, config.dark_color, config.light_color,
                           quiet_zone=config.quiet_zone, scale=config.pixels_per_module)
    return send_file(BytesIO(svg_bytes), as_attachment=True,
                     download_name=export_filename().replace('.png', '.svg'),
                     mimetype='image/svg+xml')


if __name__ == "__main__":
    app.run(debug=False, host='127.0.0.1', port=5000)
