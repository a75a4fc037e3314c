# -*- coding: utf-8 -*-
"""
QR Studio Error Types

All errors raised by the generation pipeline derive from QRStudioError so
callers can catch the whole family at once. The two "expected" failures also
subclass ValueError, like most encoder libraries do for bad input.
"""

from typing import Optional


class QRStudioError(Exception):
    """Base error for QR Studio."""


class EmptyInputError(QRStudioError, ValueError):
    """The text to encode is empty or whitespace only."""

    def __init__(self, message: str = "Nothing to encode: text is empty"):
        super().__init__(message)


class CapacityExceededError(QRStudioError, ValueError):
    """The payload does not fit in any allowed symbol."""

    def __init__(self, bit_length: int, capacity: Optional[int] = None,
                 message: Optional[str] = None):
        self.bit_length = bit_length
        self.capacity = capacity
        if message is None:
            message = f"Data too long: {bit_length} bits"
            if capacity is not None:
                message += f" (largest capacity tried: {capacity} bits)"
        super().__init__(message)


class EncodingInvariantError(QRStudioError, RuntimeError):
    """Internal logic fault inside the encoder or matrix builder."""
