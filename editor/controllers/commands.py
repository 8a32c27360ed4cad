"""
Tilegen - Edit Commands

Discrete edits produced by the key state machine and applied by the
edit controller.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class ModifyTilePalette:
    """Set the palette index of tile (x, y)."""

    palette: int
    x: int
    y: int


@dataclass(frozen=True)
class ModifyTileTexture:
    """Point tile (x, y) at atlas texture (tex_x, tex_y)."""

    tex_x: int
    tex_y: int
    x: int
    y: int


@dataclass(frozen=True)
class GenerateTexture:
    """Regenerate the texels of atlas texture (tex_x, tex_y)."""

    tex_x: int
    tex_y: int


Command = Union[ModifyTilePalette, ModifyTileTexture, GenerateTexture]
