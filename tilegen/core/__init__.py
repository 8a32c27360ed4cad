"""
Core atlas and geometry functionality.

This package contains the bit-packed texture atlas, the tile vertex grid,
the bit packing helpers they share, and palette definitions.
"""

from .bit_packing import WORD_WIDTH, make_mask, texel_location
from .texture_atlas import AtlasConfig, AtlasConfigError, TextureAtlas
from .vertex_grid import Vertex, VertexGrid

__all__ = [
    "WORD_WIDTH",
    "make_mask",
    "texel_location",
    "AtlasConfig",
    "AtlasConfigError",
    "TextureAtlas",
    "Vertex",
    "VertexGrid",
]
