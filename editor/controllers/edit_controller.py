"""
Tilegen - Edit Controller

Routes commands from the key state machine to the tile grid and the atlas.
"""

import logging
import random

from tilegen.core.palettes import PALETTE_COUNT
from tilegen.core.texture_atlas import TextureAtlas
from tilegen.core.vertex_grid import VertexGrid

from .commands import Command, GenerateTexture, ModifyTilePalette, ModifyTileTexture

logger = logging.getLogger(__name__)


class EditController:
    """Owns the atlas and grid and applies edit commands to them."""

    def __init__(
        self,
        atlas: TextureAtlas,
        grid: VertexGrid,
        rng: random.Random | None = None,
    ):
        """
        Args:
            atlas: Texture atlas edited by GenerateTexture
            grid: Tile grid edited by ModifyTilePalette / ModifyTileTexture
            rng: Random source for texture generation (atlas default if omitted)
        """
        self.atlas = atlas
        self.grid = grid
        self.rng = rng
        self.unsaved: bool = False

    def apply(self, command: Command):
        """
        Apply one command.

        Raises:
            IndexError: If the command addresses a tile or texture out of range
            TypeError: If command is not a known command type
        """
        if isinstance(command, ModifyTilePalette):
            self.grid.set_tile_palette(command.x, command.y, command.palette)
        elif isinstance(command, ModifyTileTexture):
            self.grid.set_tile_texture(command.x, command.y, command.tex_x, command.tex_y)
        elif isinstance(command, GenerateTexture):
            self.atlas.generate_tile(command.tex_x, command.tex_y, rng=self.rng)
        else:
            raise TypeError(f"Unknown command: {command!r}")

        self.unsaved = True
        logger.debug("Applied %s", command)

    def randomize(self, rng: random.Random, palette_count: int = PALETTE_COUNT):
        """
        Generate every atlas texture, then give every tile a random
        texture and palette.
        """
        size = self.atlas.atlas_size
        for ty in range(size):
            for tx in range(size):
                self.atlas.generate_tile(tx, ty, rng=rng)

        for ty in range(self.grid.y_size):
            for tx in range(self.grid.x_size):
                self.grid.set_tile_texture(tx, ty, rng.randrange(size), rng.randrange(size))
                self.grid.set_tile_palette(tx, ty, rng.randrange(palette_count))

        self.unsaved = True
        logger.info(
            "Randomized %dx%d grid over %dx%d atlas",
            self.grid.x_size,
            self.grid.y_size,
            size,
            size,
        )

    def is_dirty(self) -> bool:
        """True if either buffer changed since the last mark_clean()."""
        return self.atlas.modified or self.grid.modified

    def mark_clean(self):
        """Record that the renderer has consumed the current buffers."""
        self.atlas.mark_clean()
        self.grid.mark_clean()
