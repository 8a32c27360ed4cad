"""
Tilegen - Pygame Rendering

Software preview of the tile grid for the editor window. Pixels come from the
shared PIL renderer's sampling so the window and exported PNGs agree.
"""

import pygame
from pygame import Rect, Surface

from tilegen.core.palettes import BACKGROUND_COLOR, PALETTES
from tilegen.rendering.pil_renderer import render_grid_to_array

from editor.controllers.edit_controller import EditController


class GridRenderer:
    """Renders the controller's grid, rebuilding only when it changed."""

    def __init__(self, controller: EditController, palettes=PALETTES):
        self.controller = controller
        self.palettes = palettes
        self._surface: Surface | None = None
        self._scaled: dict[tuple[int, int], Surface] = {}

    def get_surface(self) -> Surface:
        """
        Unscaled map surface, one pixel per texel.

        Rebuilt when the controller reports changes since the last call.
        """
        if self._surface is None or self.controller.is_dirty():
            pixels = render_grid_to_array(
                self.controller.atlas, self.controller.grid, self.palettes
            )
            # surfarray is indexed [x, y]
            self._surface = pygame.surfarray.make_surface(pixels.swapaxes(0, 1))
            self._scaled.clear()
            self.controller.mark_clean()
        return self._surface

    def render(self, screen: Surface, rect: Rect):
        """Draw the map scaled to fill rect."""
        pygame.draw.rect(screen, BACKGROUND_COLOR, rect)

        surface = self.get_surface()
        if surface.get_width() == 0 or surface.get_height() == 0:
            return

        key = (rect.width, rect.height)
        if key not in self._scaled:
            self._scaled[key] = pygame.transform.scale(surface, key)
        screen.blit(self._scaled[key], rect.topleft)
