#!/usr/bin/env python3
"""
Tilegen - Map Visualizer

Renders a map and its texture atlas as PNG images. The map is either loaded
from a JSON file or generated from a seed; an optional key sequence is
replayed through the editor's selection protocol before rendering.
"""

import argparse
import random
import sys
from pathlib import Path

from editor.controllers.edit_controller import EditController
from editor.controllers.key_state import KeyStateMachine
from editor.core.constants import ATLAS_SIZE, GRID_HEIGHT, GRID_WIDTH, TEXEL_BITS, TILE_SIZE
from editor.data.keymap import Keymap, load_keymap
from tilegen.core.palettes import PALETTE_COUNT
from tilegen.core.texture_atlas import TextureAtlas
from tilegen.core.vertex_grid import VertexGrid
from tilegen.formats.map_data import MapData
from tilegen.rendering.pil_renderer import render_atlas_to_image, render_grid_to_image


def replay_keys(controller: EditController, keymap: Keymap, keys: list[str]) -> int:
    """
    Feed key names through the selection protocol.

    Returns:
        Number of commands applied
    """
    machine = KeyStateMachine(keymap)
    applied = 0
    for key in keys:
        command = machine.press(key)
        if command is not None:
            controller.apply(command)
            applied += 1
            print(f"  {key}: {command}")
    return applied


def main():
    parser = argparse.ArgumentParser(
        description="Render a tilegen map and its atlas as PNG images",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Render a random map:
    python tools/visualize.py --seed 7 map.png

  Render a saved map at 8x zoom:
    python tools/visualize.py --map maps/demo.json --scale 8 demo.png

  Paint tile (2,1) with palette 2, then regenerate texture (1,0):
    python tools/visualize.py --seed 7 --keys "e u h return" edited.png
        """,
    )
    parser.add_argument("output", help="Output PNG file for the map")
    parser.add_argument("--map", help="Map JSON file to render (default: random map)")
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument("--atlas-size", type=int, default=ATLAS_SIZE)
    parser.add_argument("--tex-size", type=int, default=TILE_SIZE)
    parser.add_argument("--texel-bits", type=int, default=TEXEL_BITS)
    parser.add_argument("--grid-width", type=int, default=GRID_WIDTH)
    parser.add_argument("--grid-height", type=int, default=GRID_HEIGHT)
    parser.add_argument("--keys", default="", help="Space-separated key names to replay")
    parser.add_argument("--keymap", help="Key bindings JSON file")
    parser.add_argument("--scale", type=int, default=4, help="Pixel scale factor (default: 4)")
    parser.add_argument("--atlas-output", help="Also write the atlas to this PNG file")
    parser.add_argument("--save-map", help="Write the resulting map JSON here")

    args = parser.parse_args()
    rng = random.Random(args.seed)

    try:
        if args.map:
            map_data = MapData.load(args.map)
            controller = EditController(map_data.atlas, map_data.grid, rng=rng)
        else:
            atlas = TextureAtlas.create(args.atlas_size, args.tex_size, args.texel_bits, rng=rng)
            grid = VertexGrid(args.grid_width, args.grid_height, args.atlas_size)
            map_data = MapData(atlas, grid)
            controller = EditController(atlas, grid, rng=rng)
            controller.randomize(rng, PALETTE_COUNT)

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

    if args.keys:
        print("Replaying keys...")
        applied = replay_keys(controller, keymap, args.keys.split())
        print(f"Applied {applied} command(s)")

    img = render_grid_to_image(map_data.atlas, map_data.grid, scale=args.scale)
    Path(args.output).parent.mkdir(parents=True, exist_ok=True)
    img.save(args.output)
    print(f"Saved: {args.output} ({img.width}x{img.height})")

    if args.atlas_output:
        atlas_img = render_atlas_to_image(map_data.atlas, scale=args.scale)
        atlas_img.save(args.atlas_output)
        print(f"Saved: {args.atlas_output} ({atlas_img.width}x{atlas_img.height})")

    if args.save_map:
        map_data.save(args.save_map)
        print(f"Saved: {args.save_map}")


if __name__ == "__main__":
    main()
