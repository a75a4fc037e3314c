# -*- coding: utf-8 -*-
"""
QR Code Symbol Tables

Constants from ISO/IEC 18004:2015 needed by the encoder and the matrix
builder: error correction levels, EC codewords and block counts for every
version/level, character count indicator widths and raw module capacity.

Functions:
    normalize_ec_level: Parse 'L'/'M'/'Q'/'H' (any case) into an ECLevel
    char_count_bits: Width of the character count indicator
    num_raw_data_modules: Data + EC modules available in a version
    block_layout: Block structure for a version/level
"""

from enum import Enum
from typing import NamedTuple, Union

MIN_VERSION = 1
MAX_VERSION = 40


class ECLevel(Enum):
    """Error correction level with its table column and format bits."""
    L = (0, 0b01)  # ~7% recovery
    M = (1, 0b00)  # ~15% recovery
    Q = (2, 0b11)  # ~25% recovery
    H = (3, 0b10)  # ~30% recovery

    @property
    def ordinal(self) -> int:
        return self.value[0]

    @property
    def format_bits(self) -> int:
        return self.value[1]


# Lowest to highest redundancy
EC_LEVELS = (ECLevel.L, ECLevel.M, ECLevel.Q, ECLevel.H)


def normalize_ec_level(level: Union[str, ECLevel, None]) -> ECLevel:
    """Return the ECLevel for ``level``; None means the default 'M'."""
    if isinstance(level, ECLevel):
        return level
    name = (level or 'M').strip().upper()
    try:
        return ECLevel[name]
    except KeyError:
        raise ValueError(f"Unknown error correction level: {level!r}") from None


def check_version(version: int) -> int:
    if not MIN_VERSION <= version <= MAX_VERSION:
        raise ValueError(f"Version must be between {MIN_VERSION} and {MAX_VERSION}, got {version}")
    return version


# Total EC codewords per symbol, indexed [version - 1][level ordinal]
EC_CODEWORDS_TOTAL = (
    (7, 10, 13, 17), (10, 16, 22, 28), (15, 26, 36, 44), (20, 36, 52, 64),
    (26, 48, 72, 88), (36, 64, 96, 112), (40, 72, 108, 130), (48, 88, 132, 156),
    (60, 110, 160, 192), (72, 130, 192, 224), (80, 150, 224, 264), (96, 176, 260, 308),
    (104, 198, 288, 352), (120, 216, 320, 384), (132, 240, 360, 432), (144, 280, 408, 480),
    (168, 308, 448, 532), (180, 338, 504, 588), (196, 364, 546, 650), (224, 416, 600, 700),
    (224, 442, 644, 750), (252, 476, 690, 816), (270, 504, 750, 900), (300, 560, 810, 960),
    (312, 588, 870, 1050), (336, 644, 952, 1110), (360, 700, 1020, 1200), (390, 728, 1050, 1260),
    (420, 784, 1140, 1350), (450, 812, 1200, 1440), (480, 868, 1290, 1530), (510, 924, 1350, 1620),
    (540, 980, 1440, 1710), (570, 1036, 1530, 1800), (570, 1064, 1590, 1890), (600, 1120, 1680, 1980),
    (630, 1204, 1770, 2100), (660, 1260, 1860, 2220), (720, 1316, 1950, 2310), (750, 1372, 2040, 2430),
)

# Number of EC blocks, indexed [version - 1][level ordinal]
EC_BLOCK_COUNT = (
    (1, 1, 1, 1), (1, 1, 1, 1), (1, 1, 2, 2), (1, 2, 2, 4), (1, 2, 4, 4),
    (2, 4, 4, 4), (2, 4, 6, 5), (2, 4, 6, 6), (2, 5, 8, 8), (4, 5, 8, 8),
    (4, 5, 8, 11), (4, 8, 10, 11), (4, 9, 12, 16), (4, 9, 16, 16), (6, 10, 12, 18),
    (6, 10, 17, 16), (6, 11, 16, 19), (6, 13, 18, 21), (7, 14, 21, 25), (8, 16, 20, 25),
    (8, 17, 23, 25), (9, 17, 23, 34), (9, 18, 25, 30), (10, 20, 27, 32), (12, 21, 29, 35),
    (12, 23, 34, 37), (12, 25, 34, 40), (13, 26, 35, 42), (14, 28, 38, 45), (15, 29, 40, 48),
    (16, 31, 43, 51), (17, 33, 45, 54), (18, 35, 48, 57), (19, 37, 51, 60), (19, 38, 53, 63),
    (20, 40, 56, 66), (21, 43, 59, 70), (22, 45, 62, 74), (24, 47, 65, 77), (25, 49, 68, 81),
)

# Character count indicator widths per mode for versions 1-9, 10-26, 27-40
CHAR_COUNT_BITS = {
    'numeric': (10, 12, 14),
    'alphanumeric': (9, 11, 13),
    'byte': (8, 16, 16),
}

MODE_INDICATORS = {
    'numeric': 0b0001,
    'alphanumeric': 0b0010,
    'byte': 0b0100,
}

PAD_CODEWORDS = (0xEC, 0x11)


def char_count_bits(mode: str, version: int) -> int:
    if version <= 9:
        idx = 0
    elif version <= 26:
        idx = 1
    else:
        idx = 2
    return CHAR_COUNT_BITS[mode][idx]


def symbol_size(version: int) -> int:
    return 4 * version + 17


def num_raw_data_modules(version: int) -> int:
    """
    Number of modules available for data and EC codewords, remainder bits
    included, once all function patterns are removed.

    Example:
        >>> num_raw_data_modules(1)
        208
        >>> num_raw_data_modules(40) // 8
        3706
    """
    check_version(version)
    result = (16 * version + 128) * version + 64
    if version >= 2:
        num_align = version // 7 + 2
        result -= (25 * num_align - 10) * num_align - 55
        if version >= 7:
            result -= 36
    return result


class BlockLayout(NamedTuple):
    """Block structure of one version/level combination."""
    num_blocks: int
    ec_per_block: int
    num_short_blocks: int
    short_block_data: int
    total_codewords: int

    @property
    def data_codewords(self) -> int:
        return self.total_codewords - self.num_blocks * self.ec_per_block

    def block_sizes(self):
        """Data codeword count of every block, short blocks first."""
        return [self.short_block_data + (0 if i < self.num_short_blocks else 1)
                for i in range(self.num_blocks)]


def block_layout(version: int, ec_level: ECLevel) -> BlockLayout:
    check_version(version)
    num_blocks = EC_BLOCK_COUNT[version - 1][ec_level.ordinal]
    ec_per_block = EC_CODEWORDS_TOTAL[version - 1][ec_level.ordinal] // num_blocks
    total = num_raw_data_modules(version) // 8
    num_short = num_blocks - total % num_blocks
    short_len = total // num_blocks
    return BlockLayout(num_blocks, ec_per_block, num_short, short_len - ec_per_block, total)


def data_capacity_bits(version: int, ec_level: ECLevel) -> int:
    return block_layout(version, ec_level).data_codewords * 8
