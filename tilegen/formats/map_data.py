"""
Tilegen - Map Data Model

Pairs a texture atlas with the tile grid that samples it and handles loading
from and saving to JSON map files.

File layout:
    {
      "atlas": {"atlas_size": 2, "tex_size": 8, "texel_bits": 2,
                "words": ["0000001B 00000000 ...", ...]},
      "grid": {"width": 4, "height": 4,
               "textures": [[tex_x, tex_y, tex_x, tex_y, ...], ...],
               "palettes": [[p, p, p, p], ...]}
    }

Row i of "textures" and "palettes" holds the tiles with ty == i.
"""

import logging
from typing import Any, Dict, List, Optional

from . import compact_json as json
from . import hex_utils
from ..core.texture_atlas import AtlasConfig, TextureAtlas
from ..core.vertex_grid import VertexGrid

logger = logging.getLogger(__name__)


def _words_per_row(config: AtlasConfig) -> int:
    """One hex row per texel row of the atlas (at least one word)."""
    return max(1, config.side_texels // config.texels_per_word)


def _fill_grid(grid: VertexGrid, texture_rows: List[List[int]], palette_rows: List[List[int]]):
    """Apply per-row texture pairs and palettes to a freshly built grid."""
    width, height = grid.x_size, grid.y_size
    if len(texture_rows) != height or len(palette_rows) != height:
        raise ValueError(f"Expected {height} texture and palette rows")

    for ty in range(height):
        if len(texture_rows[ty]) != width * 2:
            raise ValueError(
                f"Texture row {ty} has {len(texture_rows[ty])} values, expected {width * 2}"
            )
        if len(palette_rows[ty]) != width:
            raise ValueError(
                f"Palette row {ty} has {len(palette_rows[ty])} values, expected {width}"
            )
        for tx in range(width):
            tex_x = texture_rows[ty][tx * 2]
            tex_y = texture_rows[ty][tx * 2 + 1]
            try:
                grid.set_tile_texture(tx, ty, tex_x, tex_y)
            except (IndexError, TypeError) as e:
                raise ValueError(f"Invalid texture at tile ({tx}, {ty}): {e}") from e
            grid.set_tile_palette(tx, ty, palette_rows[ty][tx])


class MapData:
    """An atlas plus the grid of tiles that reference it."""

    def __init__(self, atlas: TextureAtlas, grid: VertexGrid):
        if int(grid.atlas_size) != atlas.atlas_size:
            raise ValueError(
                f"Grid addresses a {int(grid.atlas_size)}-texture atlas, "
                f"atlas has {atlas.atlas_size}"
            )
        self.atlas = atlas
        self.grid = grid
        self.filepath: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON file structure."""
        config = self.atlas.config
        words = [int(w) for w in self.atlas.words]

        textures = []
        palettes = []
        for ty in range(self.grid.y_size):
            texture_row = []
            palette_row = []
            for tx in range(self.grid.x_size):
                texture_row.extend(self.grid.get_tile_texture(tx, ty))
                palette_row.append(self.grid.get_tile_palette(tx, ty))
            textures.append(texture_row)
            palettes.append(palette_row)

        return {
            "atlas": {
                "atlas_size": config.atlas_size,
                "tex_size": config.tex_size,
                "texel_bits": config.texel_bits,
                "words": hex_utils.format_hex_rows(words, _words_per_row(config)),
            },
            "grid": {
                "width": self.grid.x_size,
                "height": self.grid.y_size,
                "textures": textures,
                "palettes": palettes,
            },
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "MapData":
        """
        Build map data from the JSON file structure.

        Raises:
            ValueError: If sections are missing, values have the wrong type,
                or the sections are inconsistent
        """
        for section in ("atlas", "grid"):
            if section not in data:
                raise ValueError(f"Missing '{section}' section in map data")

        atlas_data = data["atlas"]
        grid_data = data["grid"]

        try:
            config = AtlasConfig(
                atlas_data["atlas_size"],
                atlas_data["tex_size"],
                atlas_data["texel_bits"],
            )
            width = grid_data["width"]
            height = grid_data["height"]
            texture_rows = grid_data["textures"]
            palette_rows = grid_data["palettes"]
            word_rows = atlas_data["words"]
        except KeyError as e:
            raise ValueError(f"Missing {e} in map data") from e

        try:
            atlas = TextureAtlas(config)
            atlas.load_words(hex_utils.parse_hex_rows(word_rows))
            grid = VertexGrid(width, height, config.atlas_size)
            _fill_grid(grid, texture_rows, palette_rows)
        except (TypeError, AttributeError) as e:
            raise ValueError(f"Malformed map data: {e}") from e

        return MapData(atlas, grid)

    @staticmethod
    def load(path: str) -> "MapData":
        """Load map data from a JSON file."""
        with open(path, "r") as f:
            data = json.load(f)

        map_data = MapData.from_dict(data)
        map_data.filepath = path
        logger.info(
            "Loaded %s: %dx%d grid, %dx%d atlas",
            path,
            map_data.grid.x_size,
            map_data.grid.y_size,
            map_data.atlas.atlas_size,
            map_data.atlas.atlas_size,
        )
        return map_data

    def save(self, path: Optional[str] = None):
        """Save map data to a JSON file."""
        if path is None:
            path = self.filepath
        if path is None:
            raise ValueError("No save path specified")

        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

        self.filepath = path
        logger.info("Saved %s", path)
