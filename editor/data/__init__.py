"""
Tilegen - Editor Data

Key binding configuration.
"""

from .keymap import Keymap, KeymapError, load_keymap, save_keymap

__all__ = ["Keymap", "KeymapError", "load_keymap", "save_keymap"]
