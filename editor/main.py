"""
Tilegen - Editor Main

Command-line entry point for the editor application.

Usage:
    tilegen-editor [options] [map.json]

With an existing map file, the map is loaded from it. Otherwise a random map
is generated (and saved to map.json on F2 if a path was given).
"""

import argparse
import logging
import random
import sys
from pathlib import Path

from tilegen.core.palettes import PALETTE_COUNT
from tilegen.core.texture_atlas import TextureAtlas
from tilegen.core.vertex_grid import VertexGrid
from tilegen.formats.map_data import MapData

from .application import EditorApplication
from .controllers.edit_controller import EditController
from .core.constants import ATLAS_SIZE, GRID_HEIGHT, GRID_WIDTH, TEXEL_BITS, TILE_SIZE
from .data.keymap import Keymap, load_keymap


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tilegen-editor",
        description="Keyboard-driven tile map editor with a generated texture atlas",
    )
    parser.add_argument("map", nargs="?", help="Map JSON file to load or save to")
    parser.add_argument("--seed", type=int, help="Random seed for a new map")
    parser.add_argument("--atlas-size", type=int, default=ATLAS_SIZE, help="Textures per atlas side")
    parser.add_argument("--tex-size", type=int, default=TILE_SIZE, help="Texels per texture side")
    parser.add_argument("--texel-bits", type=int, default=TEXEL_BITS, help="Bits per texel (power of 2)")
    parser.add_argument("--grid-width", type=int, default=GRID_WIDTH, help="Tiles per row")
    parser.add_argument("--grid-height", type=int, default=GRID_HEIGHT, help="Tiles per column")
    parser.add_argument("--keymap", help="Key bindings JSON file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every key and command")
    return parser


def create_map(args: argparse.Namespace) -> tuple[MapData, EditController]:
    """Load the map named on the command line, or generate a new one."""
    rng = random.Random(args.seed)

    if args.map and Path(args.map).exists():
        map_data = MapData.load(args.map)
        return map_data, EditController(map_data.atlas, map_data.grid, rng=rng)

    atlas = TextureAtlas.create(args.atlas_size, args.tex_size, args.texel_bits, rng=rng)
    grid = VertexGrid(args.grid_width, args.grid_height, args.atlas_size)
    map_data = MapData(atlas, grid)
    map_data.filepath = args.map

    controller = EditController(atlas, grid, rng=rng)
    controller.randomize(rng, PALETTE_COUNT)
    controller.unsaved = args.map is not None
    return map_data, controller


def main(argv: list[str] | None = None):
    """Main entry point for the editor."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        map_data, controller = create_map(args)
        keymap = load_keymap(args.keymap) if args.keymap else Keymap.default()
        keymap.validate(
            map_data.grid.x_size,
            map_data.grid.y_size,
            map_data.atlas.atlas_size,
            PALETTE_COUNT,
        )
    except (ValueError, OSError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    app = EditorApplication(map_data, keymap, controller)
    app.run()


if __name__ == "__main__":
    main()
