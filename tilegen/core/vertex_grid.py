"""
Tilegen - Vertex Grid

Triangle-list geometry for a grid of tiles. Each tile is a quad of six
vertices (two triangles sharing the lo_x/hi_y - hi_x/lo_y diagonal) covering
one cell of the [-1, 1] x [-1, 1] clip-space square. Positions are fixed at
construction; only texture coordinates and palette indices change afterwards.
"""

from dataclasses import dataclass, replace
from numbers import Integral

import numpy as np

VERTICES_PER_TILE = 6
MAX_PALETTE_INDEX = 0xFFFFFFFF

# Corner of each vertex within its quad, as (is_hi_x, is_hi_y)
QUAD_CORNERS = (
    (0, 0),  # A: bottom-left
    (0, 1),  # A: top-left
    (1, 0),  # A: bottom-right
    (0, 1),  # B: top-left
    (1, 0),  # B: bottom-right
    (1, 1),  # B: top-right
)

VERTEX_DTYPE = np.dtype(
    [
        ("position", "<f4", (2,)),
        ("tex_coord", "<f4", (2,)),
        ("palette_index", "<u4"),
    ]
)


@dataclass(frozen=True)
class Vertex:
    """One vertex of the tile grid."""

    position: tuple[float, float]
    tex_coord: tuple[float, float]
    palette_index: int = 0


class VertexGrid:
    """Vertices for an x_size x y_size grid of tiles sampling a square atlas."""

    def __init__(self, x_size: int, y_size: int, atlas_size: int):
        """
        Build the fixed vertex layout.

        Args:
            x_size: Tiles per row
            y_size: Tiles per column
            atlas_size: Textures per side of the atlas the UVs address

        A zero x_size or y_size gives an empty grid.
        """
        if not (isinstance(x_size, Integral) and isinstance(y_size, Integral)):
            raise TypeError(f"Grid size must be integers, got {x_size!r}x{y_size!r}")
        if x_size < 0 or y_size < 0:
            raise ValueError(f"Grid size must be non-negative, got {x_size}x{y_size}")
        if atlas_size <= 0:
            raise ValueError(f"atlas_size must be positive, got {atlas_size}")

        self.x_size = x_size
        self.y_size = y_size
        self.row_len = x_size
        self.atlas_size = float(atlas_size)
        self.vertices: list[Vertex] = []
        self.modified: bool = False
        self._snapshot: np.ndarray | None = None

        if x_size == 0 or y_size == 0:
            return

        for ty in range(y_size):
            lo_y = -1.0 + 2.0 * ty / y_size
            hi_y = -1.0 + 2.0 * (ty + 1) / y_size
            for tx in range(x_size):
                lo_x = -1.0 + 2.0 * tx / x_size
                hi_x = -1.0 + 2.0 * (tx + 1) / x_size
                for corner_x, corner_y in QUAD_CORNERS:
                    position = (hi_x if corner_x else lo_x, hi_y if corner_y else lo_y)
                    tex_coord = (float(corner_x), float(corner_y))
                    self.vertices.append(Vertex(position, tex_coord, 0))

    def __len__(self) -> int:
        return len(self.vertices)

    def _tile_index(self, tx: int, ty: int) -> int:
        if not (0 <= tx < self.x_size and 0 <= ty < self.y_size):
            raise IndexError(
                f"Tile ({tx}, {ty}) outside {self.x_size}x{self.y_size} grid"
            )
        return ty * self.row_len * VERTICES_PER_TILE + tx * VERTICES_PER_TILE

    def _invalidate(self):
        self.modified = True
        self._snapshot = None

    def set_tile_texture(self, tx: int, ty: int, tex_x: int, tex_y: int):
        """
        Point tile (tx, ty) at atlas texture (tex_x, tex_y).

        The quad's UVs cover exactly that texture's square of the atlas, with
        each vertex taking the UV corner matching its position corner.

        Raises:
            IndexError: If the tile or the atlas texture is out of range
            TypeError: If the atlas texture coordinates are not integers
        """
        index = self._tile_index(tx, ty)
        if not (isinstance(tex_x, Integral) and isinstance(tex_y, Integral)):
            raise TypeError(f"Texture coordinates must be integers, got ({tex_x!r}, {tex_y!r})")
        atlas_size = int(self.atlas_size)
        if not (0 <= tex_x < atlas_size and 0 <= tex_y < atlas_size):
            raise IndexError(
                f"Texture ({tex_x}, {tex_y}) outside {atlas_size}x{atlas_size} atlas"
            )

        step = 1.0 / self.atlas_size
        top_left = (tex_x / self.atlas_size, tex_y / self.atlas_size)
        bottom_right = (top_left[0] + step, top_left[1] + step)

        for i, (corner_x, corner_y) in enumerate(QUAD_CORNERS):
            u = bottom_right[0] if corner_x else top_left[0]
            v = bottom_right[1] if corner_y else top_left[1]
            self.vertices[index + i] = replace(self.vertices[index + i], tex_coord=(u, v))

        self._invalidate()

    def set_tile_palette(self, tx: int, ty: int, palette_index: int):
        """Set the palette index of all six vertices of tile (tx, ty)."""
        index = self._tile_index(tx, ty)
        if not isinstance(palette_index, Integral):
            raise TypeError(f"Palette index must be an integer, got {palette_index!r}")
        if not 0 <= palette_index <= MAX_PALETTE_INDEX:
            raise ValueError(f"Palette index must fit in 32 bits, got {palette_index}")

        for i in range(index, index + VERTICES_PER_TILE):
            self.vertices[i] = replace(self.vertices[i], palette_index=palette_index)

        self._invalidate()

    def tile_vertices(self, tx: int, ty: int) -> tuple[Vertex, ...]:
        """The six vertices of tile (tx, ty), in quad order."""
        index = self._tile_index(tx, ty)
        return tuple(self.vertices[index : index + VERTICES_PER_TILE])

    def get_tile_texture(self, tx: int, ty: int) -> tuple[int, int]:
        """Atlas texture currently sampled by tile (tx, ty)."""
        u, v = self.tile_vertices(tx, ty)[0].tex_coord
        return int(round(u * self.atlas_size)), int(round(v * self.atlas_size))

    def get_tile_palette(self, tx: int, ty: int) -> int:
        return self.tile_vertices(tx, ty)[0].palette_index

    def get_vertices(self) -> tuple[Vertex, ...]:
        """Read-only view of the full vertex sequence."""
        return tuple(self.vertices)

    def snapshot(self) -> np.ndarray:
        """
        Renderer-facing structured copy of the vertices.

        Cached until the next set_tile_texture / set_tile_palette call.
        """
        if self._snapshot is None:
            snapshot = np.zeros(len(self.vertices), dtype=VERTEX_DTYPE)
            for i, vertex in enumerate(self.vertices):
                snapshot[i] = (vertex.position, vertex.tex_coord, vertex.palette_index)
            snapshot.flags.writeable = False
            self._snapshot = snapshot
        return self._snapshot

    def as_bytes(self) -> bytes:
        """Packed vertex buffer: position f32x2, tex_coord f32x2, palette u32."""
        return self.snapshot().tobytes()

    def mark_clean(self):
        self.modified = False
