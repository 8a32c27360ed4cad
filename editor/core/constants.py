"""
Tilegen - Editor Constants

All configuration constants for the editor including dimensions,
colors, layout values and the default key bindings.
"""

# Atlas and grid defaults
ATLAS_SIZE = 2  # Textures per side of the atlas
TILE_SIZE = 8  # Texels per side of one texture
TEXEL_BITS = 2  # Bits per texel
GRID_WIDTH = 4  # Tiles per row
GRID_HEIGHT = 4  # Tiles per column

# UI Layout
WINDOW_WIDTH = 512
WINDOW_HEIGHT = 542
STATUS_HEIGHT = 30
FPS = 60

# Colors
COLOR_STATUS = (32, 32, 32)
COLOR_TEXT = (255, 255, 255)

# Save shortcut (outside the selection protocol's keys)
SAVE_KEY = "f2"

# Default key bindings (pygame key names)
DEFAULT_TILE_KEYS = {
    "1": (0, 0), "2": (1, 0), "3": (2, 0), "4": (3, 0),
    "q": (0, 1), "w": (1, 1), "e": (2, 1), "r": (3, 1),
    "a": (0, 2), "s": (1, 2), "d": (2, 2), "f": (3, 2),
    "z": (0, 3), "x": (1, 3), "c": (2, 3), "v": (3, 3),
}  # fmt: skip

DEFAULT_ATLAS_KEYS = {
    "g": (0, 0),
    "h": (1, 0),
    "j": (0, 1),
    "k": (1, 1),
}

DEFAULT_PALETTE_KEYS = {
    "t": 0,
    "y": 1,
    "u": 2,
    "i": 3,
}

DEFAULT_CONFIRM_KEY = "return"
