# -*- coding: utf-8 -*-
import pytest

from qrstudio.errors import EmptyInputError
from qrstudio.segmenter import BitBuffer, Mode, Segment, classify_char, segment


def _modes(segments):
    return [(s.mode, s.data) for s in segments]


@pytest.mark.parametrize("text", ["", "   ", "\n\t "])
def test_empty_text_raises(text):
    with pytest.raises(EmptyInputError):
        segment(text)


def test_classify_char():
    assert classify_char('7') is Mode.NUMERIC
    assert classify_char('Q') is Mode.ALPHANUMERIC
    assert classify_char(':') is Mode.ALPHANUMERIC
    assert classify_char('q') is Mode.BYTE
    assert classify_char('é') is Mode.BYTE


def test_single_mode_inputs():
    assert _modes(segment("0123456789")) == [(Mode.NUMERIC, "0123456789")]
    assert _modes(segment("HELLO WORLD")) == [(Mode.ALPHANUMERIC, "HELLO WORLD")]
    assert _modes(segment("hello")) == [(Mode.BYTE, "hello")]


def test_url_collapses_to_byte_mode():
    assert _modes(segment("https://example.com")) == [(Mode.BYTE, "https://example.com")]


def test_long_digit_run_keeps_its_own_segment():
    assert _modes(segment("HELLO 12345678")) == [
        (Mode.ALPHANUMERIC, "HELLO "),
        (Mode.NUMERIC, "12345678"),
    ]


def test_short_digit_run_is_absorbed():
    assert _modes(segment("abc1def")) == [(Mode.BYTE, "abc1def")]
    assert _modes(segment("A1B")) == [(Mode.ALPHANUMERIC, "A1B")]


@pytest.mark.parametrize("text", [
    "https://example.com/path?q=1",
    "Order 12345678901234 shipped",
    "ABC123abc456DEF",
    "ünïcødé 2024",
])
def test_concatenation_equals_input(text):
    segments = segment(text)
    assert "".join(s.data for s in segments) == text
    for left, right in zip(segments, segments[1:]):
        assert left.mode is not right.mode


def test_segment_bit_lengths():
    # groups 012 345 678 9
    assert Segment(Mode.NUMERIC, "0123456789").bit_length(1) == 4 + 10 + 34
    # 11 chars: 5 pairs + 1 single
    assert Segment(Mode.ALPHANUMERIC, "HELLO WORLD").bit_length(1) == 4 + 9 + 5 * 11 + 6
    # count indicator widens from version 10
    assert Segment(Mode.BYTE, "abc").bit_length(10) == 4 + 16 + 24


def test_byte_mode_counts_utf8_bytes():
    seg = Segment(Mode.BYTE, "é")
    assert seg.char_count == 2
    assert seg.data_bits() == 16


def test_alphanumeric_bits_match_reference():
    buffer = BitBuffer()
    Segment(Mode.ALPHANUMERIC, "HELLO WORLD").write(buffer, 1)
    expected = (
        "0010" "000001011"
        "01100001011" "01111000110" "10001011100" "10110111000" "10011010100" "001101"
    )
    assert "".join(str(b) for b in buffer.bits) == expected


def test_numeric_bits_match_reference():
    buffer = BitBuffer()
    Segment(Mode.NUMERIC, "01234567").write(buffer, 1)
    expected = "0001" "0000001000" "0000001100" "0101011001" "1000011"
    assert "".join(str(b) for b in buffer.bits) == expected


def test_bit_buffer_rejects_oversized_value():
    buffer = BitBuffer()
    with pytest.raises(ValueError):
        buffer.append_bits(16, 4)


def test_bit_buffer_to_codewords_requires_alignment():
    buffer = BitBuffer()
    buffer.append_bits(0b101, 3)
    with pytest.raises(ValueError):
        buffer.to_codewords()
    buffer.append_bits(0, 5)
    assert buffer.to_codewords() == [0b10100000]
