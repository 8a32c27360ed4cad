"""
Unit tests for the tile vertex grid.
"""

import numpy as np
import pytest

from tilegen.core.vertex_grid import (
    VERTEX_DTYPE,
    VERTICES_PER_TILE,
    Vertex,
    VertexGrid,
)


class TestLayout:
    """Tests for the fixed vertex positions."""

    def test_vertex_count(self, small_grid):
        assert len(small_grid) == 4 * 4 * VERTICES_PER_TILE

    def test_non_square_grid(self):
        grid = VertexGrid(3, 2, 2)
        assert len(grid) == 3 * 2 * 6

    def test_empty_grid(self):
        """Zero width or height gives no vertices."""
        assert len(VertexGrid(0, 4, 2)) == 0
        assert len(VertexGrid(4, 0, 2)) == 0
        assert VertexGrid(0, 0, 2).snapshot().shape == (0,)

    def test_negative_size_rejected(self):
        with pytest.raises(ValueError):
            VertexGrid(-1, 2, 2)

    def test_non_integer_size_rejected(self):
        with pytest.raises(TypeError):
            VertexGrid("4", 4, 2)

    def test_bad_atlas_size_rejected(self):
        with pytest.raises(ValueError):
            VertexGrid(2, 2, 0)

    def test_single_tile_covers_clip_space(self):
        """A 1x1 grid is one quad over [-1, 1] x [-1, 1]."""
        grid = VertexGrid(1, 1, 1)
        positions = [v.position for v in grid.get_vertices()]
        assert positions == [
            (-1.0, -1.0),
            (-1.0, 1.0),
            (1.0, -1.0),
            (-1.0, 1.0),
            (1.0, -1.0),
            (1.0, 1.0),
        ]

    def test_tile_positions(self, small_grid):
        """Tile (tx, ty) spans [-1 + tx/2, -1 + (tx+1)/2] on a 4x4 grid."""
        quad = small_grid.tile_vertices(2, 1)
        assert quad[0].position == (0.0, -0.5)
        assert quad[5].position == (0.5, 0.0)

    def test_row_major_order(self, small_grid):
        """Tiles are laid out row by row, x fastest."""
        vertices = small_grid.get_vertices()
        second_tile = vertices[VERTICES_PER_TILE : 2 * VERTICES_PER_TILE]
        assert second_tile == small_grid.tile_vertices(1, 0)
        second_row = vertices[4 * VERTICES_PER_TILE : 5 * VERTICES_PER_TILE]
        assert second_row == small_grid.tile_vertices(0, 1)

    def test_initial_tex_coords(self, small_grid):
        """Before any assignment each quad spans the unit UV square."""
        quad = small_grid.tile_vertices(0, 0)
        assert [v.tex_coord for v in quad] == [
            (0.0, 0.0),
            (0.0, 1.0),
            (1.0, 0.0),
            (0.0, 1.0),
            (1.0, 0.0),
            (1.0, 1.0),
        ]
        assert all(v.palette_index == 0 for v in quad)


class TestSetTileTexture:
    """Tests for pointing tiles at atlas textures."""

    def test_uv_corners(self, small_grid):
        """Texture (1, 0) of a 2x2 atlas covers u in [0.5, 1], v in [0, 0.5]."""
        small_grid.set_tile_texture(3, 2, 1, 0)
        quad = small_grid.tile_vertices(3, 2)
        assert [v.tex_coord for v in quad] == [
            (0.5, 0.0),
            (0.5, 0.5),
            (1.0, 0.0),
            (0.5, 0.5),
            (1.0, 0.0),
            (1.0, 0.5),
        ]

    def test_positions_unchanged(self, small_grid):
        before = [v.position for v in small_grid.get_vertices()]
        small_grid.set_tile_texture(1, 1, 1, 1)
        assert [v.position for v in small_grid.get_vertices()] == before

    def test_other_tiles_unchanged(self, small_grid):
        """Only the six vertices of the target tile change."""
        # Start from texture (0, 0) so every UV of texture (1, 1) differs
        small_grid.set_tile_texture(1, 0, 0, 0)
        before = small_grid.get_vertices()
        small_grid.set_tile_texture(1, 0, 1, 1)
        after = small_grid.get_vertices()
        changed = [i for i in range(len(before)) if before[i] != after[i]]
        start = 1 * 6
        assert changed == list(range(start, start + 6))

    def test_fractional_texture_rejected(self, small_grid):
        """Texture coordinates address whole atlas textures only."""
        before = small_grid.get_vertices()
        with pytest.raises(TypeError):
            small_grid.set_tile_texture(0, 0, 0.5, 0)
        assert small_grid.get_vertices() == before
        assert not small_grid.modified

    def test_numpy_integer_texture(self, small_grid):
        small_grid.set_tile_texture(0, 0, np.int64(1), np.uint32(0))
        assert small_grid.get_tile_texture(0, 0) == (1, 0)

    def test_get_tile_texture(self, small_grid):
        small_grid.set_tile_texture(0, 3, 0, 1)
        assert small_grid.get_tile_texture(0, 3) == (0, 1)

    def test_tile_out_of_range(self, small_grid):
        with pytest.raises(IndexError):
            small_grid.set_tile_texture(4, 0, 0, 0)

    def test_texture_out_of_range(self, small_grid):
        with pytest.raises(IndexError):
            small_grid.set_tile_texture(0, 0, 2, 0)


class TestSetTilePalette:
    """Tests for palette assignment."""

    def test_all_six_vertices(self, small_grid):
        small_grid.set_tile_palette(1, 2, 3)
        assert all(v.palette_index == 3 for v in small_grid.tile_vertices(1, 2))
        assert small_grid.get_tile_palette(1, 2) == 3

    def test_other_tiles_unchanged(self, small_grid):
        before = small_grid.get_vertices()
        small_grid.set_tile_palette(1, 2, 3)
        after = small_grid.get_vertices()
        changed = [i for i in range(len(before)) if before[i] != after[i]]
        start = (2 * 4 + 1) * 6
        assert changed == list(range(start, start + 6))

    def test_texture_kept(self, small_grid):
        small_grid.set_tile_texture(1, 2, 1, 1)
        small_grid.set_tile_palette(1, 2, 2)
        assert small_grid.get_tile_texture(1, 2) == (1, 1)

    def test_large_palette_index(self, small_grid):
        """Any 32-bit palette index is stored."""
        small_grid.set_tile_palette(0, 0, 0xFFFFFFFF)
        assert small_grid.get_tile_palette(0, 0) == 0xFFFFFFFF

    def test_non_integer_palette_rejected(self, small_grid):
        with pytest.raises(TypeError):
            small_grid.set_tile_palette(0, 0, "1")

    def test_palette_out_of_range(self, small_grid):
        with pytest.raises(ValueError):
            small_grid.set_tile_palette(0, 0, -1)
        with pytest.raises(ValueError):
            small_grid.set_tile_palette(0, 0, 1 << 32)

    def test_tile_out_of_range(self, small_grid):
        with pytest.raises(IndexError):
            small_grid.set_tile_palette(0, 4, 1)


class TestSnapshot:
    """Tests for the renderer-facing buffer."""

    def test_vertices_are_immutable(self, small_grid):
        vertex = small_grid.get_vertices()[0]
        assert isinstance(vertex, Vertex)
        with pytest.raises(AttributeError):
            vertex.palette_index = 5

    def test_snapshot_layout(self, small_grid):
        small_grid.set_tile_palette(0, 0, 2)
        snapshot = small_grid.snapshot()
        assert snapshot.dtype == VERTEX_DTYPE
        assert snapshot.shape == (96,)
        assert tuple(snapshot[0]["position"]) == (-1.0, -1.0)
        assert snapshot[0]["palette_index"] == 2

    def test_snapshot_is_read_only(self, small_grid):
        snapshot = small_grid.snapshot()
        with pytest.raises(ValueError):
            snapshot["palette_index"][0] = 1

    def test_snapshot_cached_until_change(self, small_grid):
        first = small_grid.snapshot()
        assert small_grid.snapshot() is first
        small_grid.set_tile_palette(0, 0, 1)
        second = small_grid.snapshot()
        assert second is not first
        assert first[0]["palette_index"] == 0
        assert second[0]["palette_index"] == 1

    def test_as_bytes_size(self, small_grid):
        """20 bytes per vertex: two float pairs and a u32."""
        assert VERTEX_DTYPE.itemsize == 20
        assert len(small_grid.as_bytes()) == 96 * 20

    def test_modified_flag(self, small_grid):
        assert not small_grid.modified
        small_grid.set_tile_texture(0, 0, 1, 1)
        assert small_grid.modified
        small_grid.mark_clean()
        assert not small_grid.modified
