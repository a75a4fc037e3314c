# -*- coding: utf-8 -*-
import re
from io import BytesIO

import pytest
from PIL import Image

from app import app


@pytest.fixture
def client():
    app.config['TESTING'] = True
    with app.test_client() as client:
        yield client


def test_index_shows_placeholder(client):
    response = client.get('/')
    assert response.status_code == 200
    assert b'Enter text to generate a QR code' in response.data


def test_index_generates(client):
    response = client.post('/', data={'text': 'https://example.com', 'ecc': 'Q'})
    assert response.status_code == 200
    assert b'data:image/png;base64,' in response.data
    assert b'-Q</strong>' in response.data


def test_index_reports_overflow(client):
    response = client.post('/', data={'text': 'a' * 3000})
    assert response.status_code == 200
    assert b'Text too long' in response.data


def test_api_qr(client):
    response = client.post('/api/qr', data={'text': 'HELLO WORLD', 'ecc': 'M',
                                            'border': '2', 'scale': '5'})
    payload = response.get_json()
    assert response.status_code == 200
    assert (payload['version'], payload['ec_level'], payload['size']) == (1, 'M', 21)
    assert payload['width'] == (21 + 4) * 5
    assert payload['modules'] == 441
    assert 0 < payload['dark_modules'] < 441
    assert payload['image'].startswith('data:image/png;base64,')


def test_api_qr_empty_text(client):
    response = client.get('/api/qr?text=%20%20')
    assert response.status_code == 200
    assert response.get_json() == {'image': None}


def test_api_qr_overflow(client):
    response = client.post('/api/qr', data={'text': 'a' * 3000})
    assert response.status_code == 413
    assert 'error' in response.get_json()


def test_api_qr_bad_color(client):
    response = client.post('/api/qr', data={'text': 'x', 'dark_color': 'nope'})
    assert response.status_code == 400


def test_api_presets(client):
    presets = client.get('/api/presets').get_json()
    assert presets[0] == {'name': 'Classic', 'dark': '#000000', 'light': '#ffffff'}


def test_preset_overrides_colors(client):
    response = client.get('/export/png?text=preset&preset=Forest&border=0&scale=1')
    image = Image.open(BytesIO(response.data)).convert('RGB')
    assert {c for _, c in image.getcolors()} == {(0x16, 0x65, 0x34), (0xdc, 0xfc, 0xe7)}


def test_export_png(client):
    response = client.get('/export/png?text=download&scale=2&border=1')
    assert response.status_code == 200
    assert response.mimetype == 'image/png'
    disposition = response.headers['Content-Disposition']
    assert re.search(r'filename=qr-code-\d+\.png', disposition)
    assert response.data.startswith(b'\x89PNG')


def test_export_png_requires_text(client):
    response = client.get('/export/png')
    assert response.status_code == 400


def test_export_svg(client):
    response = client.get('/export/svg?text=vector')
    assert response.status_code == 200
    assert response.mimetype == 'image/svg+xml'
    assert b'<svg' in response.data


def test_index_wires_debounced_live_preview(client):
    page = client.get('/').data.decode('utf-8')
    assert 'var delay = 300;' in page
    assert "fetch(\"/api/qr\"" in page
    assert 'id="placeholder" hidden' not in page
