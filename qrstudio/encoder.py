# -*- coding: utf-8 -*-
"""
QR Code Error-Correction Encoder Module

Turns a list of segments into the final codeword sequence of a symbol:
bitstream construction, version selection, block split, Reed-Solomon EC
codewords and interleaving.

Functions:
    encode: Select version/level and produce interleaved codewords
    build_bitstream: Data codewords for a fixed version/level
    interleave: Split data into blocks, add EC, interleave
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

from .errors import CapacityExceededError, EncodingInvariantError
from .reed_solomon import rs_remainder
from .segmenter import BitBuffer, Segment, total_bit_length
from .tables import (
    EC_LEVELS, MAX_VERSION, MIN_VERSION, PAD_CODEWORDS, ECLevel,
    block_layout, check_version, data_capacity_bits, normalize_ec_level,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EncodedData:
    """Output of the encoder, ready for the matrix builder."""
    version: int
    ec_level: ECLevel
    codewords: Tuple[int, ...]
    data_codewords: Tuple[int, ...]

    @property
    def size(self) -> int:
        return 4 * self.version + 17


def _fits(segments: Sequence[Segment], version: int, ec_level: ECLevel) -> bool:
    return total_bit_length(segments, version) <= data_capacity_bits(version, ec_level)


def find_version(segments: Sequence[Segment], ec_level: ECLevel) -> Optional[int]:
    """Smallest version whose capacity at ``ec_level`` holds the segments."""
    for version in range(MIN_VERSION, MAX_VERSION + 1):
        if _fits(segments, version, ec_level):
            return version
    return None


def build_bitstream(segments: Sequence[Segment], version: int, ec_level: ECLevel) -> List[int]:
    """
    Build the padded data codewords for ``version``/``ec_level``.

    Layout: segments (mode + count + data), terminator of up to four zero
    bits, zero bits up to the byte boundary, then 0xEC/0x11 pad codewords
    until the data capacity is reached exactly.
    """
    capacity = data_capacity_bits(version, ec_level)
    buffer = BitBuffer()
    for seg in segments:
        seg.write(buffer, version)
    if len(buffer) > capacity:
        raise EncodingInvariantError(
            f"Bitstream of {len(buffer)} bits exceeds capacity {capacity} of version {version}-{ec_level.name}")

    buffer.append_bits(0, min(4, capacity - len(buffer)))
    buffer.append_bits(0, (8 - len(buffer) % 8) % 8)
    codewords = buffer.to_codewords()

    pad_count = capacity // 8 - len(codewords)
    codewords.extend(PAD_CODEWORDS[i % 2] for i in range(pad_count))
    return codewords


def interleave(data: Sequence[int], version: int, ec_level: ECLevel) -> List[int]:
    """
    Split ``data`` into blocks, append EC codewords and interleave.

    Data codewords are taken column-wise across blocks (long blocks supply
    the last column on their own), followed by the EC codewords taken the
    same way.
    """
    layout = block_layout(version, ec_level)
    if len(data) != layout.data_codewords:
        raise EncodingInvariantError(
            f"Expected {layout.data_codewords} data codewords, got {len(data)}")

    blocks = []
    ec_blocks = []
    offset = 0
    for size in layout.block_sizes():
        block = list(data[offset:offset + size])
        offset += size
        blocks.append(block)
        ec_blocks.append(rs_remainder(block, layout.ec_per_block))

    result = []
    for i in range(max(len(b) for b in blocks)):
        for block in blocks:
            if i < len(block):
                result.append(block[i])
    for i in range(layout.ec_per_block):
        for ec in ec_blocks:
            result.append(ec[i])

    if len(result) != layout.total_codewords:
        raise EncodingInvariantError(
            f"Interleaved {len(result)} codewords, symbol holds {layout.total_codewords}")
    return result


def _select(segments: Sequence[Segment], ec_level: ECLevel,
            allow_downgrade: bool) -> Tuple[int, ECLevel]:
    levels = [ec_level]
    if allow_downgrade:
        levels += [lvl for lvl in reversed(EC_LEVELS) if lvl.ordinal < ec_level.ordinal]

    for level in levels:
        version = find_version(segments, level)
        if version is not None:
            if level is not ec_level:
                logger.warning("Payload does not fit at level %s, downgraded to %s",
                               ec_level.name, level.name)
            return version, level

    last = levels[-1]
    raise CapacityExceededError(total_bit_length(segments, MAX_VERSION),
                                data_capacity_bits(MAX_VERSION, last))


def encode(
    segments: Sequence[Segment],
    ec_level: Union[str, ECLevel, None] = 'M',
    *,
    version: Optional[int] = None,
    boost_error: bool = False,
    allow_downgrade: bool = True
) -> EncodedData:
    """
    Encode segments into the codewords of the smallest fitting symbol.

    Args:
        segments: Output of ``segment``
        ec_level: Requested error correction level ('L', 'M', 'Q', 'H')
        version: Force a version (1-40) instead of picking the smallest
        boost_error: Raise the EC level as far as the chosen version allows
        allow_downgrade: Fall back to lower EC levels when nothing fits

    Returns:
        EncodedData: version, final EC level and interleaved codewords

    Raises:
        CapacityExceededError: If no allowed symbol can hold the payload
    """
    level = normalize_ec_level(ec_level)
    if not segments:
        raise ValueError("Nothing to encode: no segments")

    if version is not None:
        check_version(version)
        if not _fits(segments, version, level):
            raise CapacityExceededError(total_bit_length(segments, version),
                                        data_capacity_bits(version, level))
    else:
        version, level = _select(segments, level, allow_downgrade)

    if boost_error:
        for candidate in EC_LEVELS:
            if candidate.ordinal > level.ordinal and _fits(segments, version, candidate):
                level = candidate

    data = build_bitstream(segments, version, level)
    codewords = interleave(data, version, level)
    logger.debug("Encoded %d data codewords into version %d-%s (%d codewords)",
                 len(data), version, level.name, len(codewords))
    return EncodedData(version, level, tuple(codewords), tuple(data))
