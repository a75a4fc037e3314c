# -*- coding: utf-8 -*-
"""
QR Code Data Segmenter Module

Splits input text into numeric, alphanumeric and byte segments and packs
them into a bitstream. Mode boundaries come from a greedy run merge, not a
full dynamic-programming search: short runs of a compact mode are folded
into a wider neighbour whenever switching modes would not save any bits.
This is good enough for the short URLs and sentences typed into the form,
and it is a known limitation for long mixed inputs.

Functions:
    segment: Classify text into an ordered list of Segment
    classify_char: Narrowest mode able to encode one character
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence

from .errors import EmptyInputError
from .tables import MODE_INDICATORS, char_count_bits

logger = logging.getLogger(__name__)

ALPHANUMERIC_CHARSET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ $%*+-./:"
_ALNUM_INDEX = {ch: i for i, ch in enumerate(ALPHANUMERIC_CHARSET)}


class Mode(Enum):
    """Encoding modes, ordered from most to least compact."""
    NUMERIC = 'numeric'
    ALPHANUMERIC = 'alphanumeric'
    BYTE = 'byte'

    @property
    def indicator(self) -> int:
        return MODE_INDICATORS[self.value]

    @property
    def rank(self) -> int:
        return _MODE_RANK[self]

    def can_encode(self, other: 'Mode') -> bool:
        """True if data classified as ``other`` is encodable in this mode."""
        return self.rank >= other.rank


_MODE_RANK = {Mode.NUMERIC: 0, Mode.ALPHANUMERIC: 1, Mode.BYTE: 2}


class BitBuffer:
    """Append-only list of bits, most significant bit first."""

    def __init__(self) -> None:
        self.bits: List[int] = []

    def __len__(self) -> int:
        return len(self.bits)

    def append_bits(self, value: int, length: int) -> None:
        if length < 0 or value >> length:
            raise ValueError(f"Value {value} does not fit in {length} bits")
        for i in reversed(range(length)):
            self.bits.append((value >> i) & 1)

    def extend(self, other: 'BitBuffer') -> None:
        self.bits.extend(other.bits)

    def to_codewords(self) -> List[int]:
        if len(self.bits) % 8:
            raise ValueError("Bit buffer is not aligned to a byte boundary")
        codewords = []
        for i in range(0, len(self.bits), 8):
            chunk = 0
            for bit in self.bits[i:i + 8]:
                chunk = (chunk << 1) | bit
            codewords.append(chunk)
        return codewords


def classify_char(ch: str) -> Mode:
    if ch in '0123456789':
        return Mode.NUMERIC
    if ch in _ALNUM_INDEX:
        return Mode.ALPHANUMERIC
    return Mode.BYTE


def _data_bit_length(mode: Mode, data: str) -> int:
    if mode is Mode.NUMERIC:
        n = len(data)
        return 10 * (n // 3) + (0, 4, 7)[n % 3]
    if mode is Mode.ALPHANUMERIC:
        n = len(data)
        return 11 * (n // 2) + 6 * (n % 2)
    return 8 * len(data.encode('utf-8'))


@dataclass(frozen=True)
class Segment:
    """A run of characters encoded in a single mode."""
    mode: Mode
    data: str

    @property
    def char_count(self) -> int:
        """Value written to the count indicator (bytes in byte mode)."""
        if self.mode is Mode.BYTE:
            return len(self.data.encode('utf-8'))
        return len(self.data)

    def header_bits(self, version: int) -> int:
        return 4 + char_count_bits(self.mode.value, version)

    def data_bits(self) -> int:
        return _data_bit_length(self.mode, self.data)

    def bit_length(self, version: int) -> int:
        """Mode indicator + count indicator + payload bits."""
        return self.header_bits(version) + self.data_bits()

    def write(self, buffer: BitBuffer, version: int) -> None:
        count_bits = char_count_bits(self.mode.value, version)
        if self.char_count >> count_bits:
            raise ValueError(f"Segment of {self.char_count} characters too long for version {version}")
        buffer.append_bits(self.mode.indicator, 4)
        buffer.append_bits(self.char_count, count_bits)
        if self.mode is Mode.NUMERIC:
            for i in range(0, len(self.data), 3):
                group = self.data[i:i + 3]
                buffer.append_bits(int(group), (4, 7, 10)[len(group) - 1])
        elif self.mode is Mode.ALPHANUMERIC:
            for i in range(0, len(self.data) - 1, 2):
                pair = _ALNUM_INDEX[self.data[i]] * 45 + _ALNUM_INDEX[self.data[i + 1]]
                buffer.append_bits(pair, 11)
            if len(self.data) % 2:
                buffer.append_bits(_ALNUM_INDEX[self.data[-1]], 6)
        else:
            for byte in self.data.encode('utf-8'):
                buffer.append_bits(byte, 8)


def total_bit_length(segments: Sequence[Segment], version: int) -> int:
    return sum(seg.bit_length(version) for seg in segments)


def _initial_runs(text: str) -> List[Segment]:
    runs: List[Segment] = []
    for ch in text:
        mode = classify_char(ch)
        if runs and runs[-1].mode is mode:
            runs[-1] = Segment(mode, runs[-1].data + ch)
        else:
            runs.append(Segment(mode, ch))
    return runs


def _coalesce(runs: List[Segment]) -> List[Segment]:
    merged: List[Segment] = []
    for run in runs:
        if merged and merged[-1].mode is run.mode:
            merged[-1] = Segment(run.mode, merged[-1].data + run.data)
        else:
            merged.append(run)
    return merged


def _merge_pass(runs: List[Segment], version: int) -> bool:
    """Fold one run into a wider neighbour if that is no longer; True if merged."""
    for i, run in enumerate(runs):
        left = runs[i - 1] if i > 0 else None
        right = runs[i + 1] if i + 1 < len(runs) else None
        candidates = [n for n in (left, right)
                      if n is not None and n.mode.rank > run.mode.rank]
        best = None
        for neighbour in candidates:
            target = neighbour.mode
            separate = run.bit_length(version)
            # A run sitting between two runs of the target mode also costs
            # the second neighbour its header.
            if left is not None and right is not None and left.mode is target and right.mode is target:
                separate += right.header_bits(version)
            merged = _data_bit_length(target, run.data)
            if merged <= separate and (best is None or target.rank < best.rank):
                best = target
        if best is not None:
            runs[i] = Segment(best, run.data)
            return True
    return False


def segment(text: str, version: int = 1) -> List[Segment]:
    """
    Classify ``text`` into an ordered list of segments.

    ``version`` only selects the count-indicator widths used to weigh mode
    switches; the result is valid for any version.

    Raises:
        EmptyInputError: If ``text`` is empty or whitespace only

    Example:
        >>> [(s.mode.value, s.data) for s in segment("HELLO 12345678")]
        [('alphanumeric', 'HELLO '), ('numeric', '12345678')]
    """
    if text is None or not text.strip():
        raise EmptyInputError()

    runs = _initial_runs(text)
    while _merge_pass(runs, version):
        runs = _coalesce(runs)
    runs = _coalesce(runs)

    logger.debug("Segmented %d chars into %s", len(text),
                 [(s.mode.value, len(s.data)) for s in runs])
    return runs
