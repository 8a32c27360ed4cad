"""
Tilegen - Editor Package

A Pygame-based, keyboard-driven editor for tile palettes, tile textures and
the generated texture atlas.
"""

from .application import EditorApplication
from .main import main

__all__ = ['EditorApplication', 'main']
