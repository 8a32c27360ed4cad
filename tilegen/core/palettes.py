"""
Tilegen - Colour Palettes

Palettes used to colour atlas texels. A tile's palette index selects one of
these palettes; a texel value selects the colour within it, so palettes hold
2 ** texel_bits colours for the default 2-bit atlas.
"""

from typing import List, Tuple

# Type alias for RGB color
RGBColor = Tuple[int, int, int]

# Each palette has 4 colors indexed 0-3
PALETTES: List[List[RGBColor]] = [
    [
        (0xFF, 0x00, 0x00),
        (0xCC, 0x66, 0x1A),
        (0xFF, 0xFF, 0x00),
        (0xCC, 0x33, 0x00),
    ],  # 0: Fire
    [
        (0x00, 0xFF, 0x00),
        (0x00, 0xCC, 0xCC),
        (0x1A, 0xE6, 0x4D),
        (0x80, 0xFF, 0x1A),
    ],  # 1: Grass
    [
        (0x00, 0x00, 0xFF),
        (0x4D, 0x4D, 0xCC),
        (0xB3, 0x33, 0xE6),
        (0x66, 0x00, 0xE6),
    ],  # 2: Water
    [
        (0xFF, 0xFF, 0xFF),
        (0x99, 0x99, 0x99),
        (0x4D, 0x4D, 0x4D),
        (0x00, 0x00, 0x00),
    ],  # 3: Greyscale
]

PALETTE_COUNT = len(PALETTES)
COLORS_PER_PALETTE = 4

# Colour behind the grid (the clear colour of the render pass)
BACKGROUND_COLOR: RGBColor = (0xFF, 0xFF, 0xFF)


def palette_color(palettes: List[List[RGBColor]], palette_index: int, texel: int) -> RGBColor:
    """
    Look up the colour of a texel under a palette.

    Texel values past the end of a palette wrap around it, so atlases deeper
    than 2 bits still render with 4-colour palettes.
    """
    palette = palettes[palette_index % len(palettes)]
    return palette[texel % len(palette)]
