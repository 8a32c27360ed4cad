"""
Tilegen - Key State Machine

Two-stage select-then-act keyboard protocol. The first key picks a tile or an
atlas texture, the second key says what to do with it. Any key the current
stage does not recognise drops the pending selection, so the machine is back
in Neutral after at most one stray key.

    Neutral --tile key--> TileSelect --palette key--> Neutral + ModifyTilePalette
                                     --atlas key----> Neutral + ModifyTileTexture
            --atlas key-> TexSelect  --confirm key--> Neutral + GenerateTexture
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from editor.data.keymap import Keymap

from .commands import Command, GenerateTexture, ModifyTilePalette, ModifyTileTexture

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Neutral:
    """Nothing selected."""


@dataclass(frozen=True)
class TileSelect:
    """Tile (x, y) selected; waiting for a palette or atlas key."""

    x: int
    y: int


@dataclass(frozen=True)
class TexSelect:
    """Atlas texture (x, y) selected; waiting for confirm."""

    x: int
    y: int


KeyState = Union[Neutral, TileSelect, TexSelect]

NEUTRAL = Neutral()


def process_key(
    state: KeyState, key: str, keymap: Keymap
) -> tuple[KeyState, Optional[Command]]:
    """
    Compute the transition for one key press.

    Pure and total: every (state, key) pair yields a next state, and every
    unrecognised key leads back to Neutral.

    Args:
        state: Current selection state
        key: Key name (pygame.key.name style, e.g. "q", "return")
        keymap: Key bindings

    Returns:
        Tuple of (next_state, command or None)
    """
    key = key.lower()

    if isinstance(state, Neutral):
        if key in keymap.tile_keys:
            return TileSelect(*keymap.tile_keys[key]), None
        if key in keymap.atlas_keys:
            return TexSelect(*keymap.atlas_keys[key]), None
        return NEUTRAL, None

    if isinstance(state, TileSelect):
        if key in keymap.palette_keys:
            palette = keymap.palette_keys[key]
            return NEUTRAL, ModifyTilePalette(palette, state.x, state.y)
        if key in keymap.atlas_keys:
            tex_x, tex_y = keymap.atlas_keys[key]
            return NEUTRAL, ModifyTileTexture(tex_x, tex_y, state.x, state.y)
        return NEUTRAL, None

    if isinstance(state, TexSelect):
        if key == keymap.confirm_key:
            return NEUTRAL, GenerateTexture(state.x, state.y)
        return NEUTRAL, None

    raise TypeError(f"Unknown key state: {state!r}")


def describe_state(state: KeyState) -> str:
    """Short human-readable form for the status bar."""
    if isinstance(state, TileSelect):
        return f"Tile ({state.x}, {state.y}): palette or texture key"
    if isinstance(state, TexSelect):
        return f"Texture ({state.x}, {state.y}): confirm to regenerate"
    return "Select a tile or texture"


class KeyStateMachine:
    """Holds the current selection state and feeds keys through process_key."""

    def __init__(self, keymap: Keymap | None = None):
        self.keymap = keymap if keymap is not None else Keymap.default()
        self.state: KeyState = NEUTRAL

    def press(self, key: str) -> Optional[Command]:
        """
        Handle one key press.

        Returns:
            The command completed by this key, if any
        """
        previous = self.state
        self.state, command = process_key(self.state, key, self.keymap)
        logger.debug("Key %r: %s -> %s (%s)", key, previous, self.state, command)
        return command

    def reset(self):
        """Drop any pending selection."""
        self.state = NEUTRAL
