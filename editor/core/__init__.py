"""
Tilegen - Core Module

Editor constants and pygame rendering.
"""

from . import constants

__all__ = ['constants']
