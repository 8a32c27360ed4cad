"""
Tilegen - Bit Packing

Word/offset arithmetic for texels packed into fixed-width words.
Texels fill a word from the least significant bit upwards:

    word bits: [ ... | texel 2 | texel 1 | texel 0 ]

Every helper works for any power-of-two depth up to WORD_WIDTH.
"""

WORD_WIDTH = 32  # Bits per storage word
WORD_MASK = (1 << WORD_WIDTH) - 1


def is_power_of_two(value: int) -> bool:
    """Return True if value is a positive power of two."""
    return value > 0 and (value & (value - 1)) == 0


def make_mask(offset: int, bit_length: int) -> int:
    """
    Build a mask of bit_length set bits starting at bit offset.

    Args:
        offset: Index of the lowest bit in the mask (0 = LSB)
        bit_length: Number of consecutive set bits

    Returns:
        Integer mask, e.g. make_mask(2, 2) == 0b1100

    Raises:
        ValueError: If the mask would not fit in a single word
    """
    if offset < 0 or bit_length < 0:
        raise ValueError(f"Offset and length must be non-negative, got {offset}, {bit_length}")
    if offset + bit_length > WORD_WIDTH:
        raise ValueError(
            f"Mask of {bit_length} bits at offset {offset} exceeds {WORD_WIDTH}-bit word"
        )

    return ((1 << bit_length) - 1) << offset


def texels_per_word(texel_bits: int) -> int:
    """Number of texels of the given depth held by one word."""
    return WORD_WIDTH // texel_bits


def texel_location(index: int, texel_bits: int) -> tuple[int, int]:
    """
    Map a flat texel index to its storage location.

    Args:
        index: Flat texel index (row-major over the whole atlas)
        texel_bits: Bits per texel

    Returns:
        Tuple of (word_index, bit_offset)
    """
    per_word = texels_per_word(texel_bits)
    return index // per_word, (index % per_word) * texel_bits


def read_bits(word: int, offset: int, bit_length: int) -> int:
    """Extract bit_length bits of word starting at offset."""
    return (word & make_mask(offset, bit_length)) >> offset


def write_bits(word: int, offset: int, bit_length: int, value: int) -> int:
    """
    Return word with bit_length bits at offset replaced by value.

    The field is cleared first, then the low bit_length bits of value are
    ORed in. Bits outside the field are untouched.
    """
    mask = make_mask(offset, bit_length)
    word &= ~mask & WORD_MASK
    word |= (value << offset) & mask
    return word
