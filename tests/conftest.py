"""Shared pytest fixtures for atlas, grid and editor tests."""

import os
import random

import pytest

# Headless pygame for event and rendering tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from editor.controllers.edit_controller import EditController
from editor.data.keymap import Keymap
from tilegen.core.texture_atlas import TextureAtlas
from tilegen.core.vertex_grid import VertexGrid
from tilegen.formats.map_data import MapData


@pytest.fixture
def rng():
    """Seeded random source so generated textures are reproducible."""
    return random.Random(1234)


@pytest.fixture
def small_atlas(rng):
    """2x2 atlas of 8x8 textures at 2 bits per texel (the editor default)."""
    return TextureAtlas.create(atlas_size=2, tex_size=8, texel_bits=2, rng=rng)


@pytest.fixture
def small_grid():
    """4x4 tile grid addressing a 2x2 atlas."""
    return VertexGrid(4, 4, 2)


@pytest.fixture
def keymap():
    """Default key bindings."""
    return Keymap.default()


@pytest.fixture
def controller(small_atlas, small_grid, rng):
    """Edit controller over the small atlas and grid."""
    return EditController(small_atlas, small_grid, rng=rng)


@pytest.fixture
def random_map(rng):
    """Randomized 4x4 map, as the editor builds on startup."""
    atlas = TextureAtlas.create(2, 8, 2, rng=rng)
    grid = VertexGrid(4, 4, 2)
    EditController(atlas, grid, rng=rng).randomize(rng)
    return MapData(atlas, grid)
