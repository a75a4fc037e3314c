# -*- coding: utf-8 -*-
"""
QR Code Mask Penalty Evaluation Module

This module implements the mask evaluation rules of ISO/IEC 18004:2015
section 7.8.3. Each candidate mask is scored by four rules (N1-N4) and the
mask with the lowest total penalty is used.

Functions:
    penalty_N1: Evaluate adjacent modules in runs (Rule N1)
    penalty_N2: Evaluate 2x2 blocks of same color (Rule N2)
    penalty_N3: Evaluate finder-like patterns (Rule N3)
    penalty_N4: Evaluate dark/light module ratio (Rule N4)
    penalty_breakdown: All four scores by rule name
    compute_mask_penalty: Calculate total penalty score
"""

from itertools import groupby
from typing import Dict, Iterator, List, Sequence

Matrix = Sequence[Sequence[bool]]

# dark:light:dark:dark:dark:light:dark with four light modules on one side
_FINDER_LEFT = '00001011101'
_FINDER_RIGHT = '10111010000'


def _lines(rows: Matrix) -> Iterator[Sequence[bool]]:
    """Every row, then every column."""
    yield from rows
    yield from zip(*rows)


def penalty_N1(rows: Matrix) -> int:
    """
    Calculate penalty for adjacent modules in runs (Rule N1).

    Runs of 5 or more same-colored modules in a row or column score
    3 + (run_length - 5).

    Example:
        >>> penalty_N1([[True] * 5 + [False]])
        3
    """
    score = 0
    for line in _lines(rows):
        for _, group in groupby(line):
            run = sum(1 for _ in group)
            if run >= 5:
                score += 3 + (run - 5)
    return score


def penalty_N2(rows: Matrix) -> int:
    """
    Calculate penalty for 2x2 blocks of same color (Rule N2).

    Each 2x2 block of one color adds 3 points; overlapping blocks count
    separately.
    """
    score = 0
    for upper, lower in zip(rows, rows[1:]):
        for c in range(len(upper) - 1):
            value = upper[c]
            if upper[c + 1] == value and lower[c] == value and lower[c + 1] == value:
                score += 3
    return score


def _count(haystack: str, needle: str) -> int:
    count = 0
    start = haystack.find(needle)
    while start != -1:
        count += 1
        start = haystack.find(needle, start + 1)
    return count


def penalty_N3(rows: Matrix) -> int:
    """
    Calculate penalty for finder-like patterns (Rule N3).

    A 1:1:3:1:1 dark/light pattern with four light modules before or after
    it adds 40 points. Modules beyond the symbol edge count as light, as the
    quiet zone is.
    """
    score = 0
    for line in _lines(rows):
        seq = '0000' + ''.join('1' if v else '0' for v in line) + '0000'
        score += 40 * (_count(seq, _FINDER_LEFT) + _count(seq, _FINDER_RIGHT))
    return score


def penalty_N4(rows: Matrix) -> int:
    """
    Calculate penalty for dark/light module ratio (Rule N4).

    10 points per full 5% step the dark ratio deviates from 50%.

    Example:
        >>> penalty_N4([[True, True, True, False]])  # 75% dark
        50
    """
    total = sum(len(row) for row in rows)
    dark = sum(1 for row in rows for v in row if v)
    k = abs(dark * 100 - total * 50) // (total * 5)
    return k * 10


def penalty_breakdown(matrix: Matrix) -> Dict[str, int]:
    rows: List[List[bool]] = [[bool(v) for v in row] for row in matrix]
    return {
        'N1': penalty_N1(rows),
        'N2': penalty_N2(rows),
        'N3': penalty_N3(rows),
        'N4': penalty_N4(rows),
    }


def compute_mask_penalty(matrix: Matrix) -> int:
    """
    Calculate total mask penalty score for a QR code matrix.

    Args:
        matrix: QR matrix (True=dark, False=light)

    Returns:
        int: Total penalty score (lower is better)
    """
    return sum(penalty_breakdown(matrix).values())
