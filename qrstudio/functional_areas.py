# -*- coding: utf-8 -*-
"""
QR Code Functional Areas Module

This module places the functional areas of a QR symbol according to
ISO/IEC 18004. Functional areas include finder patterns with their
separators, timing patterns, alignment patterns, the dark module, format
information and version information. They are drawn into a ModuleGrid
before any data bit, in a fixed order, and reserved so later steps skip them.

Functions:
    compute_alignment_centers: Calculate alignment pattern center positions
    place_function_patterns: Draw every function pattern of a version
    format_information_bits: 15-bit BCH protected format word
    version_information_bits: 18-bit BCH protected version word
    draw_format_information: Write format bits in both copies
"""

from typing import List

from .grid import ModuleGrid
from .tables import ECLevel, check_version, symbol_size

FORMAT_GENERATOR = 0x537
FORMAT_MASK = 0x5412
VERSION_GENERATOR = 0x1F25


def compute_alignment_centers(version: int) -> List[int]:
    """
    Calculate the center positions of alignment patterns for a given QR version.

    Alignment patterns are 5x5 modules used to correct for perspective distortion
    in QR codes. They are placed at every combination of these coordinates,
    except where they would overlap a finder pattern. Version 1 has none.

    Args:
        version (int): QR code version (1-40)

    Returns:
        List[int]: Center coordinates in ascending order

    Example:
        >>> compute_alignment_centers(7)
        [6, 22, 38]
        >>> compute_alignment_centers(32)
        [6, 34, 60, 86, 112, 138]
    """
    check_version(version)
    if version == 1:
        return []

    size = symbol_size(version)
    num = version // 7 + 2
    # Even spacing from the far edge back towards column 6
    step = (version * 8 + num * 3 + 5) // (num * 4 - 4) * 2
    centers = [size - 7 - i * step for i in range(num - 1)] + [6]
    return sorted(centers)


def _place_finder(grid: ModuleGrid, r0: int, c0: int) -> None:
    # Pattern: 1111111
    #          1000001
    #          1011101
    #          1011101
    #          1011101
    #          1000001
    #          1111111
    # plus a light separator ring clipped to the symbol
    for dr in range(-1, 8):
        for dc in range(-1, 8):
            r, c = r0 + dr, c0 + dc
            if not grid.in_bounds(r, c):
                continue
            dist = max(abs(dr - 3), abs(dc - 3))
            grid.set_function(r, c, dist not in (2, 4))


def _place_timing(grid: ModuleGrid) -> None:
    for i in range(grid.size):
        if not grid.is_function(6, i):
            grid.set_function(6, i, i % 2 == 0)
        if not grid.is_function(i, 6):
            grid.set_function(i, 6, i % 2 == 0)


def _place_alignment(grid: ModuleGrid) -> None:
    centers = compute_alignment_centers(grid.version)
    last = len(centers) - 1
    for i, cy in enumerate(centers):
        for j, cx in enumerate(centers):
            # Skip the three corners occupied by finder patterns
            if (i == 0 and j == 0) or (i == 0 and j == last) or (i == last and j == 0):
                continue
            for dr in range(-2, 3):
                for dc in range(-2, 3):
                    grid.set_function(cy + dr, cx + dc, max(abs(dr), abs(dc)) != 1)


def _reserve_format_area(grid: ModuleGrid) -> None:
    size = grid.size
    for i in range(9):
        if i != 6:
            grid.reserve(8, i)
            grid.reserve(i, 8)
    for i in range(8):
        grid.reserve(8, size - 1 - i)
        grid.reserve(size - 1 - i, 8)
    # Dark module, always set
    grid.set_function(size - 8, 8, True)


def version_information_bits(version: int) -> int:
    """
    18-bit version word: 6 version bits followed by 12 BCH(18,6) bits.

    Example:
        >>> hex(version_information_bits(7))
        '0x7c94'
    """
    rem = version
    for _ in range(12):
        rem = (rem << 1) ^ ((rem >> 11) * VERSION_GENERATOR)
    return version << 12 | rem


def _place_version_information(grid: ModuleGrid) -> None:
    if grid.version < 7:
        return
    bits = version_information_bits(grid.version)
    for i in range(18):
        dark = (bits >> i) & 1 == 1
        a = grid.size - 11 + i % 3
        b = i // 3
        grid.set_function(b, a, dark)
        grid.set_function(a, b, dark)


def place_function_patterns(grid: ModuleGrid) -> None:
    """
    Draw all function patterns into an empty grid.

    Order: finders (with separators), timing, alignment, format area
    reservation with the dark module, version information. Later steps rely
    on earlier reservations, so the order must not change.
    """
    size = grid.size
    for (r0, c0) in ((0, 0), (0, size - 7), (size - 7, 0)):
        _place_finder(grid, r0, c0)
    _place_timing(grid)
    _place_alignment(grid)
    _reserve_format_area(grid)
    _place_version_information(grid)


def format_information_bits(ec_level: ECLevel, mask: int) -> int:
    """
    15-bit format word: 2 EC bits + 3 mask bits, BCH(15,5), XOR 0x5412.

    Example:
        >>> bin(format_information_bits(ECLevel.M, 0))
        '0b101010000010010'
    """
    if not 0 <= mask <= 7:
        raise ValueError(f"Mask must be between 0 and 7, got {mask}")
    data = ec_level.format_bits << 3 | mask
    rem = data
    for _ in range(10):
        rem = (rem << 1) ^ ((rem >> 9) * FORMAT_GENERATOR)
    return (data << 10 | rem) ^ FORMAT_MASK


def draw_format_information(grid: ModuleGrid, ec_level: ECLevel, mask: int) -> None:
    """Write both copies of the format word into the reserved area."""
    bits = format_information_bits(ec_level, mask)
    size = grid.size

    def bit(i: int) -> bool:
        return (bits >> i) & 1 == 1

    # Copy around the top-left finder
    for i in range(6):
        grid.set_function(i, 8, bit(i))
    grid.set_function(7, 8, bit(6))
    grid.set_function(8, 8, bit(7))
    grid.set_function(8, 7, bit(8))
    for i in range(9, 15):
        grid.set_function(8, 14 - i, bit(i))

    # Split copy next to the other two finders
    for i in range(8):
        grid.set_function(8, size - 1 - i, bit(i))
    for i in range(8, 15):
        grid.set_function(size - 15 + i, 8, bit(i))
    grid.set_function(size - 8, 8, True)
