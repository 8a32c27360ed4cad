"""
Tilegen - PIL Renderer

PIL-based software rendering of the atlas and the tile grid. Used by the
visualize tool to create static images and by the pygame preview as its
pixel source.

Sampling follows the shader the buffers are built for: each output pixel of
a tile takes the atlas texel under its interpolated UV (nearest filtering,
repeat addressing), and the texel value indexes the tile's palette.
"""

from typing import List, Sequence

import numpy as np

try:
    from PIL import Image
except ImportError:
    raise ImportError("Pillow library required. Install with: pip install Pillow")

from ..core.palettes import PALETTES, RGBColor, palette_color
from ..core.texture_atlas import TextureAtlas
from ..core.vertex_grid import VertexGrid


def _palette_table(palettes: Sequence[Sequence[RGBColor]]) -> np.ndarray:
    """Stack palettes into a (palette, color, rgb) lookup table."""
    width = max(len(p) for p in palettes)
    table = np.zeros((len(palettes), width, 3), dtype=np.uint8)
    for i in range(len(palettes)):
        for j in range(width):
            table[i, j] = palette_color(palettes, i, j)
    return table


def sample_texels(
    texels: np.ndarray,
    uv_min: tuple[float, float],
    uv_max: tuple[float, float],
    size: int,
) -> np.ndarray:
    """
    Sample a size x size block of texels between two UV corners.

    Args:
        texels: Unpacked atlas, indexed [y, x]
        uv_min: UV at the tile's low corner
        uv_max: UV at the tile's high corner
        size: Output pixels per side

    Returns:
        size x size array of texel values, indexed [y, x]
    """
    side = texels.shape[0]
    steps = (np.arange(size) + 0.5) / size
    us = uv_min[0] + steps * (uv_max[0] - uv_min[0])
    vs = uv_min[1] + steps * (uv_max[1] - uv_min[1])
    xs = np.floor(us * side).astype(np.int64) % side
    ys = np.floor(vs * side).astype(np.int64) % side
    return texels[np.ix_(ys, xs)]


def render_grid_to_array(
    atlas: TextureAtlas,
    grid: VertexGrid,
    palettes: Sequence[Sequence[RGBColor]] = PALETTES,
) -> np.ndarray:
    """
    Render the grid to an RGB array, one atlas texel per output pixel.

    The image is in clip-space orientation: clip y = +1 is the top row, so
    tiles with ty == 0 fill the bottom of the image.

    Returns:
        Array of shape (y_size * tex_size, x_size * tex_size, 3), uint8
    """
    size = atlas.tex_size
    out = np.zeros((grid.y_size * size, grid.x_size * size, 3), dtype=np.uint8)
    if not len(grid):
        return out

    texels = atlas.to_texel_array()
    table = _palette_table(palettes)
    colors = table.shape[1]

    for ty in range(grid.y_size):
        row = (grid.y_size - 1 - ty) * size
        for tx in range(grid.x_size):
            quad = grid.tile_vertices(tx, ty)
            # Vertex 0 is the low corner, vertex 5 the high corner.
            # Image rows run from the high-y edge down to the low-y edge.
            lo_uv = quad[0].tex_coord
            hi_uv = quad[5].tex_coord
            block = sample_texels(texels, (lo_uv[0], hi_uv[1]), (hi_uv[0], lo_uv[1]), size)
            palette = table[quad[0].palette_index % len(table)]
            out[row : row + size, tx * size : (tx + 1) * size] = palette[block % colors]

    return out


def render_grid_to_image(
    atlas: TextureAtlas,
    grid: VertexGrid,
    palettes: Sequence[Sequence[RGBColor]] = PALETTES,
    scale: int = 1,
) -> Image.Image:
    """
    Render the tile grid to a PIL Image.

    Args:
        atlas: Atlas the grid samples
        grid: Tile grid
        palettes: Palettes selected by the tiles' palette indices
        scale: Pixel scale factor (default: 1)

    Returns:
        PIL Image (x_size * tex_size * scale wide)
    """
    img = Image.fromarray(render_grid_to_array(atlas, grid, palettes))
    if scale != 1:
        img = img.resize((img.width * scale, img.height * scale), Image.NEAREST)
    return img


def render_atlas_to_image(
    atlas: TextureAtlas,
    palette: List[RGBColor] = PALETTES[3],
    scale: int = 1,
) -> Image.Image:
    """
    Render the whole atlas with a single palette.

    Useful for inspecting generated textures independently of the grid.
    """
    table = _palette_table([palette])[0]
    texels = atlas.to_texel_array()
    img = Image.fromarray(table[texels % len(table)])
    if scale != 1:
        img = img.resize((img.width * scale, img.height * scale), Image.NEAREST)
    return img
