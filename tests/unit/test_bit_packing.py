"""
Unit tests for word/offset arithmetic and bit masks.
"""

import pytest

from tilegen.core.bit_packing import (
    WORD_WIDTH,
    is_power_of_two,
    make_mask,
    read_bits,
    texel_location,
    texels_per_word,
    write_bits,
)


class TestMakeMask:
    """Tests for make_mask."""

    def test_low_bits(self):
        """Offset 0 gives the lowest bit_length bits."""
        assert make_mask(0, 2) == 0b11

    def test_shifted(self):
        """Mask is shifted up by offset."""
        assert make_mask(2, 2) == 0b1100

    def test_top_of_word(self):
        """A mask ending exactly at the top bit is allowed."""
        assert make_mask(30, 2) == 0xC0000000

    def test_full_width(self):
        """A full-width mask covers every bit of the word."""
        assert make_mask(0, WORD_WIDTH) == 0xFFFFFFFF

    def test_zero_length(self):
        """Zero-length mask is empty."""
        assert make_mask(5, 0) == 0

    def test_overflow_raises(self):
        """A mask running past the word raises."""
        with pytest.raises(ValueError):
            make_mask(31, 2)

    def test_negative_raises(self):
        """Negative offsets and lengths raise."""
        with pytest.raises(ValueError):
            make_mask(-1, 2)
        with pytest.raises(ValueError):
            make_mask(0, -2)


class TestTexelLocation:
    """Tests for texel index to (word, offset) mapping."""

    def test_power_of_two(self):
        assert is_power_of_two(1)
        assert is_power_of_two(16)
        assert not is_power_of_two(0)
        assert not is_power_of_two(3)

    def test_texels_per_word(self):
        assert texels_per_word(1) == 32
        assert texels_per_word(2) == 16
        assert texels_per_word(32) == 1

    def test_two_bit_texels(self):
        """16 two-bit texels share a word, lowest index in the lowest bits."""
        assert texel_location(0, 2) == (0, 0)
        assert texel_location(1, 2) == (0, 2)
        assert texel_location(15, 2) == (0, 30)
        assert texel_location(16, 2) == (1, 0)

    def test_full_word_texels(self):
        """32-bit texels take one word each."""
        assert texel_location(5, 32) == (5, 0)


class TestReadWriteBits:
    """Tests for field reads and writes."""

    def test_write_clears_field(self):
        """Writing replaces the old field value rather than ORing into it."""
        word = write_bits(0, 4, 2, 0b11)
        word = write_bits(word, 4, 2, 0b01)
        assert read_bits(word, 4, 2) == 0b01

    def test_write_preserves_neighbours(self):
        """Bits outside the field are untouched."""
        word = 0xFFFFFFFF
        word = write_bits(word, 8, 4, 0)
        assert word == 0xFFFFF0FF

    def test_write_masks_value(self):
        """Only the low bit_length bits of the value are stored."""
        word = write_bits(0, 0, 2, 0b111)
        assert word == 0b11

    def test_write_top_field(self):
        """The topmost field stays within 32 bits."""
        word = write_bits(0, 30, 2, 0b10)
        assert word == 0x80000000
        assert read_bits(word, 30, 2) == 0b10
