# -*- coding: utf-8 -*-
import pytest

from qrstudio.reed_solomon import EXP_TABLE, LOG_TABLE, generator_polynomial, gf_multiply, rs_remainder


def test_field_tables():
    assert EXP_TABLE[0] == 1
    assert EXP_TABLE[8] == 29  # 2^8 reduced by 0x11D
    assert EXP_TABLE[255] == 1
    for value in (1, 2, 29, 255):
        assert EXP_TABLE[LOG_TABLE[value]] == value


def test_multiply():
    assert gf_multiply(0, 77) == 0
    assert gf_multiply(1, 77) == 77
    assert gf_multiply(2, 128) == 29
    assert gf_multiply(3, 7) == gf_multiply(7, 3)


def test_generator_polynomial_degree_7():
    # alpha exponents 0, 87, 229, 146, 149, 238, 102, 21
    expected = tuple(EXP_TABLE[e] for e in (0, 87, 229, 146, 149, 238, 102, 21))
    assert generator_polynomial(7) == expected


def test_generator_polynomial_rejects_bad_degree():
    with pytest.raises(ValueError):
        generator_polynomial(0)


def test_remainder_hello_world_1m():
    data = [32, 91, 11, 120, 209, 114, 220, 77, 67, 64, 236, 17, 236, 17, 236, 17]
    assert rs_remainder(data, 10) == [196, 35, 39, 119, 235, 215, 231, 226, 93, 23]


def test_remainder_of_zero_block_is_zero():
    assert rs_remainder([0] * 19, 7) == [0] * 7
