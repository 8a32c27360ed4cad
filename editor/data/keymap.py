"""
Tilegen - Keymap

Key bindings for the selection protocol, with JSON serialization so the
bindings can be remapped without touching the state machine.
"""

import json
from pathlib import Path

from editor.core.constants import (
    DEFAULT_ATLAS_KEYS,
    DEFAULT_CONFIRM_KEY,
    DEFAULT_PALETTE_KEYS,
    DEFAULT_TILE_KEYS,
)


class KeymapError(ValueError):
    """Raised when key bindings are malformed or do not fit the grid/atlas."""


def _coords(key: str, value) -> tuple[int, int]:
    """Convert a bound coordinate to an (x, y) pair of ints."""
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise KeymapError(f"Key '{key}' must map to an (x, y) pair, got {value!r}")
    return int(value[0]), int(value[1])


class Keymap:
    """Lookup tables from key names to grid, atlas and palette selections."""

    def __init__(
        self,
        tile_keys: dict[str, tuple[int, int]],
        atlas_keys: dict[str, tuple[int, int]],
        palette_keys: dict[str, int],
        confirm_key: str,
    ):
        self.tile_keys = {k.lower(): _coords(k, v) for k, v in tile_keys.items()}
        self.atlas_keys = {k.lower(): _coords(k, v) for k, v in atlas_keys.items()}
        self.palette_keys = {k.lower(): int(v) for k, v in palette_keys.items()}
        self.confirm_key = confirm_key.lower()

        # Neutral and TileSelect each need an unambiguous key -> action table
        shared = set(self.tile_keys) & set(self.atlas_keys)
        if shared:
            raise KeymapError(
                f"Keys bound to both tile and atlas positions: {sorted(shared)}"
            )
        shared = set(self.palette_keys) & set(self.atlas_keys)
        if shared:
            raise KeymapError(
                f"Keys bound to both palettes and atlas positions: {sorted(shared)}"
            )

    @staticmethod
    def default() -> "Keymap":
        """The 4x4 grid / 2x2 atlas / 4 palette layout."""
        return Keymap(
            DEFAULT_TILE_KEYS,
            DEFAULT_ATLAS_KEYS,
            DEFAULT_PALETTE_KEYS,
            DEFAULT_CONFIRM_KEY,
        )

    def validate(
        self,
        grid_width: int,
        grid_height: int,
        atlas_size: int,
        palette_count: int,
    ):
        """
        Check every binding addresses something that exists.

        Raises:
            KeymapError: If a bound coordinate or palette is out of range
        """
        for key, (x, y) in self.tile_keys.items():
            if not (0 <= x < grid_width and 0 <= y < grid_height):
                raise KeymapError(
                    f"Key '{key}' selects tile ({x}, {y}) outside "
                    f"{grid_width}x{grid_height} grid"
                )
        for key, (x, y) in self.atlas_keys.items():
            if not (0 <= x < atlas_size and 0 <= y < atlas_size):
                raise KeymapError(
                    f"Key '{key}' selects texture ({x}, {y}) outside "
                    f"{atlas_size}x{atlas_size} atlas"
                )
        for key, palette in self.palette_keys.items():
            if not 0 <= palette < palette_count:
                raise KeymapError(
                    f"Key '{key}' selects palette {palette}, only {palette_count} exist"
                )

    def to_dict(self) -> dict:
        """Convert bindings to dictionary for JSON serialization."""
        return {
            "tiles": {k: list(v) for k, v in self.tile_keys.items()},
            "atlas": {k: list(v) for k, v in self.atlas_keys.items()},
            "palettes": dict(self.palette_keys),
            "confirm": self.confirm_key,
        }

    @staticmethod
    def from_dict(data: dict) -> "Keymap":
        """
        Create bindings from dictionary.

        Sections left out fall back to the default bindings.
        """
        try:
            return Keymap(
                tile_keys=data.get("tiles", DEFAULT_TILE_KEYS),
                atlas_keys=data.get("atlas", DEFAULT_ATLAS_KEYS),
                palette_keys=data.get("palettes", DEFAULT_PALETTE_KEYS),
                confirm_key=data.get("confirm", DEFAULT_CONFIRM_KEY),
            )
        except KeymapError:
            raise
        except (TypeError, ValueError, AttributeError) as e:
            raise KeymapError(f"Malformed keymap: {e}") from e


def load_keymap(path: str | Path) -> Keymap:
    """Load key bindings from a JSON file."""
    with open(path) as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise KeymapError(f"Keymap {path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise KeymapError(f"Keymap {path} must contain a JSON object")
    return Keymap.from_dict(data)


def save_keymap(keymap: Keymap, path: str | Path):
    """Save key bindings to a JSON file."""
    with open(path, "w") as f:
        json.dump(keymap.to_dict(), f, indent=2)
        f.write("\n")
