"""
Unit tests for EditController command routing.
"""

import random

import pytest

from editor.controllers.commands import GenerateTexture, ModifyTilePalette, ModifyTileTexture
from editor.controllers.edit_controller import EditController
from tilegen.core.texture_atlas import TextureAtlas
from tilegen.core.vertex_grid import VertexGrid


class TestApply:
    """Tests for applying single commands."""

    def test_modify_palette(self, controller):
        controller.apply(ModifyTilePalette(2, 2, 1))
        assert controller.grid.get_tile_palette(2, 1) == 2
        assert controller.unsaved

    def test_modify_texture(self, controller):
        controller.apply(ModifyTileTexture(1, 1, 0, 3))
        assert controller.grid.get_tile_texture(0, 3) == (1, 1)

    def test_generate_texture(self, controller):
        before = [controller.atlas.tile_checksum(0, 0), controller.atlas.tile_checksum(0, 1)]
        controller.apply(GenerateTexture(1, 0))
        assert controller.atlas.modified
        assert [controller.atlas.tile_checksum(0, 0), controller.atlas.tile_checksum(0, 1)] == before

    def test_generate_uses_controller_rng(self):
        """Two controllers with equal seeds generate equal textures."""
        results = []
        for _ in range(2):
            atlas = TextureAtlas.create(2, 8, 2)
            controller = EditController(atlas, VertexGrid(4, 4, 2), rng=random.Random(3))
            controller.apply(GenerateTexture(1, 1))
            results.append(atlas.get_tile_texels(1, 1))
        assert results[0] == results[1]

    def test_out_of_range_tile(self, controller):
        with pytest.raises(IndexError):
            controller.apply(ModifyTilePalette(0, 4, 0))
        assert not controller.unsaved

    def test_unknown_command(self, controller):
        with pytest.raises(TypeError):
            controller.apply("generate")


class TestRandomize:
    """Tests for startup randomization."""

    def test_assignments_in_range(self, controller, rng):
        controller.randomize(rng, palette_count=4)
        for ty in range(4):
            for tx in range(4):
                tex_x, tex_y = controller.grid.get_tile_texture(tx, ty)
                assert 0 <= tex_x < 2 and 0 <= tex_y < 2
                assert 0 <= controller.grid.get_tile_palette(tx, ty) < 4

    def test_fills_atlas(self, controller, rng):
        controller.randomize(rng)
        assert controller.atlas.words.any()

    def test_deterministic(self):
        snapshots = []
        for _ in range(2):
            rng = random.Random(11)
            atlas = TextureAtlas.create(2, 8, 2)
            grid = VertexGrid(4, 4, 2)
            EditController(atlas, grid).randomize(rng)
            snapshots.append((atlas.as_bytes(), grid.as_bytes()))
        assert snapshots[0] == snapshots[1]


class TestDirtyTracking:
    """Tests for the renderer's change tracking."""

    def test_clean_after_mark(self, controller):
        controller.apply(ModifyTilePalette(1, 0, 0))
        assert controller.is_dirty()
        controller.mark_clean()
        assert not controller.is_dirty()

    def test_atlas_change_is_dirty(self, controller):
        controller.mark_clean()
        controller.apply(GenerateTexture(0, 0))
        assert controller.is_dirty()

    def test_mark_clean_keeps_unsaved(self, controller):
        """Rendering does not count as saving."""
        controller.apply(ModifyTilePalette(1, 0, 0))
        controller.mark_clean()
        assert controller.unsaved
