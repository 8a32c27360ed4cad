"""
Tilegen - Controllers Module

Selection state machine, edit commands and event handling.
"""

from .commands import Command, GenerateTexture, ModifyTilePalette, ModifyTileTexture
from .edit_controller import EditController
from .event_handler import EventHandler
from .key_state import KeyStateMachine, Neutral, TexSelect, TileSelect, process_key

__all__ = [
    'Command',
    'GenerateTexture',
    'ModifyTilePalette',
    'ModifyTileTexture',
    'EditController',
    'EventHandler',
    'KeyStateMachine',
    'Neutral',
    'TexSelect',
    'TileSelect',
    'process_key',
]
