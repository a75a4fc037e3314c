# -*- coding: utf-8 -*-
import numpy as np
import pytest


class _Handle:
    def __init__(self, when, callback):
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler:
    """Deterministic stand-in for threading timers; time moves on advance()."""

    def __init__(self):
        self.now = 0.0
        self.handles = []

    def call_later(self, delay, callback):
        handle = _Handle(self.now + delay, callback)
        self.handles.append(handle)
        return handle

    @property
    def pending(self):
        return [h for h in self.handles if not h.cancelled]

    def advance(self, seconds):
        self.now += seconds
        while True:
            due = sorted((h for h in self.pending if h.when <= self.now), key=lambda h: h.when)
            if not due:
                return
            handle = due[0]
            self.handles.remove(handle)
            handle.callback()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture(params=['opencv', 'zbar'])
def decode_qr(request):
    """Decode a Pillow image into the list of QR payloads found in it."""
    if request.param == 'opencv':
        cv2 = pytest.importorskip("cv2", exc_type=ImportError)

        def decode(image):
            gray = np.array(image.convert('L'))
            data, points, _ = cv2.QRCodeDetector().detectAndDecode(gray)
            return [data] if points is not None and data else []
    else:
        # pyzbar raises a plain ImportError when libzbar is not installed
        pyzbar = pytest.importorskip("pyzbar.pyzbar", exc_type=ImportError)

        def decode(image):
            return [r.data.decode('utf-8') for r in pyzbar.decode(image)]
    return decode
