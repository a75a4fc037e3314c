# -*- coding: utf-8 -*-
"""
Reed-Solomon Error Correction Module

GF(2^8) arithmetic and Reed-Solomon remainder computation as used by QR
codes. The field is built on the primitive polynomial
x^8 + x^4 + x^3 + x^2 + 1 (0x11D) with generator alpha = 2.

Functions:
    gf_multiply: Multiply two field elements
    generator_polynomial: Coefficients of prod(x - alpha^i), highest degree first
    rs_remainder: EC codewords for one block of data codewords
"""

from functools import lru_cache
from typing import List, Sequence, Tuple

PRIMITIVE_POLY = 0x11D


def _build_tables() -> Tuple[List[int], List[int]]:
    exp_table = [0] * 512
    log_table = [0] * 256
    x = 1
    for i in range(255):
        exp_table[i] = x
        exp_table[i + 255] = x  # Duplicate so log sums need no modulo
        log_table[x] = i
        x <<= 1
        if x & 0x100:
            x ^= PRIMITIVE_POLY
    return exp_table, log_table


EXP_TABLE, LOG_TABLE = _build_tables()


def gf_multiply(a: int, b: int) -> int:
    """Multiply two GF(256) elements using log tables."""
    if a == 0 or b == 0:
        return 0
    return EXP_TABLE[LOG_TABLE[a] + LOG_TABLE[b]]


@lru_cache(maxsize=None)
def generator_polynomial(degree: int) -> Tuple[int, ...]:
    """
    Generator polynomial g(x) = (x - a^0)(x - a^1)...(x - a^(degree-1)).

    Coefficients are returned highest degree first; the leading 1 is
    included, so the tuple has ``degree + 1`` entries.

    Example:
        >>> generator_polynomial(2)
        (1, 3, 2)
    """
    if not 1 <= degree <= 254:
        raise ValueError(f"Reed-Solomon degree out of range: {degree}")
    coeffs = [1]
    for i in range(degree):
        # Multiply by (x + alpha^i); subtraction is XOR in GF(256)
        root = EXP_TABLE[i]
        product = coeffs + [0]
        for j, c in enumerate(coeffs):
            product[j + 1] ^= gf_multiply(c, root)
        coeffs = product
    return tuple(coeffs)


def rs_remainder(data: Sequence[int], degree: int) -> List[int]:
    """
    Compute the ``degree`` error correction codewords for ``data``.

    This is the remainder of data(x) * x^degree divided by the generator
    polynomial, computed with the usual shift-register loop.
    """
    generator = generator_polynomial(degree)
    result = [0] * degree
    for byte in data:
        factor = byte ^ result[0]
        result = result[1:] + [0]
        if factor:
            for i in range(degree):
                result[i] ^= gf_multiply(generator[i + 1], factor)
    return result
