# -*- coding: utf-8 -*-
"""
QR Code Matrix Builder Module

Builds the final module matrix of a symbol from its interleaved codewords:
function patterns first, then the zig-zag data placement, then masking.
All eight masks are tried and scored with the ISO/IEC 18004 penalty rules;
the lowest score wins and ties go to the lowest mask id.

Functions:
    build: Build a QRSymbol from version, EC level and codewords
    evaluate_all_masks: Score every mask pattern for a placed grid
    choose_mask: Pick the best mask from a score table
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from . import penalties
from .errors import EncodingInvariantError
from .functional_areas import draw_format_information, place_function_patterns
from .grid import ModuleGrid
from .tables import ECLevel, num_raw_data_modules, normalize_ec_level

logger = logging.getLogger(__name__)

# Mask formulas over (row, col); a True result flips the data module
MASK_PATTERNS: Tuple[Callable[[int, int], bool], ...] = (
    lambda i, j: (i + j) % 2 == 0,
    lambda i, j: i % 2 == 0,
    lambda i, j: j % 3 == 0,
    lambda i, j: (i + j) % 3 == 0,
    lambda i, j: (i // 2 + j // 3) % 2 == 0,
    lambda i, j: (i * j) % 2 + (i * j) % 3 == 0,
    lambda i, j: ((i * j) % 2 + (i * j) % 3) % 2 == 0,
    lambda i, j: ((i + j) % 2 + (i * j) % 3) % 2 == 0,
)


@dataclass(frozen=True)
class QRSymbol:
    """A finished, masked QR symbol."""
    version: int
    ec_level: ECLevel
    mask: int
    matrix: Tuple[Tuple[bool, ...], ...]
    scores: Dict[int, int] = field(default_factory=dict, compare=False)

    @property
    def size(self) -> int:
        return len(self.matrix)

    def dark_modules(self) -> int:
        return sum(1 for row in self.matrix for v in row if v)

    def to_text(self, border: int = 4, dark: str = '##', light: str = '  ') -> str:
        """Plain-text drawing, handy for debugging in a terminal."""
        width = self.size + 2 * border
        blank = light * width
        lines = [blank] * border
        for row in self.matrix:
            lines.append(light * border + ''.join(dark if v else light for v in row) + light * border)
        lines.extend([blank] * border)
        return '\n'.join(lines)


def data_module_coords(grid: ModuleGrid) -> List[Tuple[int, int]]:
    """
    Coordinates of non-functional modules in standard placement order.

    Data runs in two-column strips from the right edge, alternating upward
    and downward, and the strip boundary hops over the vertical timing
    pattern in column 6.
    """
    size = grid.size
    coords = []
    upward = True
    col = size - 1

    while col > 0:
        if col == 6:
            col -= 1
        for i in range(size):
            r = (size - 1 - i) if upward else i
            for c in (col, col - 1):
                if not grid.is_function(r, c):
                    coords.append((r, c))
        upward = not upward
        col -= 2

    return coords


def place_codewords(grid: ModuleGrid, codewords: Sequence[int]) -> None:
    """Write codeword bits MSB first; leftover remainder bits stay light."""
    coords = data_module_coords(grid)
    if len(coords) != num_raw_data_modules(grid.version):
        raise EncodingInvariantError(
            f"Found {len(coords)} data modules, expected {num_raw_data_modules(grid.version)}")
    if len(codewords) * 8 > len(coords):
        raise EncodingInvariantError(
            f"{len(codewords)} codewords do not fit in {len(coords)} data modules")

    bits = [(cw >> (7 - k)) & 1 for cw in codewords for k in range(8)]
    for index, (r, c) in enumerate(coords):
        grid.set_data(r, c, index < len(bits) and bits[index] == 1)


def apply_mask(grid: ModuleGrid, mask: int) -> ModuleGrid:
    """Return a copy of ``grid`` with mask ``mask`` XORed into the data region."""
    if not 0 <= mask <= 7:
        raise ValueError(f"Mask must be between 0 and 7, got {mask}")
    pattern = MASK_PATTERNS[mask]
    masked = grid.copy()
    for r in range(grid.size):
        row = masked.modules[r]
        for c in range(grid.size):
            if not grid.is_function(r, c) and pattern(r, c):
                row[c] = not row[c]
    return masked


def _masked_candidate(grid: ModuleGrid, ec_level: ECLevel, mask: int) -> ModuleGrid:
    candidate = apply_mask(grid, mask)
    draw_format_information(candidate, ec_level, mask)
    return candidate


def choose_mask(scores: Dict[int, int]) -> int:
    """Lowest score wins; on a tie the lowest mask id wins."""
    if not scores:
        raise ValueError("No mask scores to choose from")
    return min(scores, key=lambda m: (scores[m], m))


def evaluate_all_masks(grid: ModuleGrid, ec_level: ECLevel) -> Tuple[int, int, Dict[int, int]]:
    """
    Evaluate all mask patterns (0-7) on a grid holding unmasked data.

    Returns:
        Tuple[int, int, Dict[int, int]]: (best_mask, best_score, all_scores)
    """
    scores = {}
    for mask in range(8):
        candidate = _masked_candidate(grid, ec_level, mask)
        scores[mask] = penalties.compute_mask_penalty(candidate.modules)
    best = choose_mask(scores)
    logger.debug("Mask scores for version %d: %s (best %d)", grid.version, scores, best)
    return best, scores[best], scores


def build(
    version: int,
    ec_level: Union[str, ECLevel],
    codewords: Sequence[int],
    mask: Optional[int] = None
) -> QRSymbol:
    """
    Build the final symbol matrix.

    Args:
        version: Symbol version (1-40)
        ec_level: Error correction level used to encode ``codewords``
        codewords: Interleaved data + EC codewords from the encoder
        mask: Force a mask pattern (0-7); None selects by penalty

    Raises:
        EncodingInvariantError: If a placement step breaks an invariant
    """
    level = normalize_ec_level(ec_level)
    grid = ModuleGrid(version)
    place_function_patterns(grid)
    place_codewords(grid, codewords)

    if mask is None:
        mask, _, scores = evaluate_all_masks(grid, level)
    else:
        if not 0 <= mask <= 7:
            raise ValueError(f"Mask must be between 0 and 7, got {mask}")
        scores = {}

    final = _masked_candidate(grid, level, mask)
    if mask not in scores:
        scores[mask] = penalties.compute_mask_penalty(final.modules)
    return QRSymbol(version, level, mask, final.to_matrix(), scores)
