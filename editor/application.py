"""
Tilegen - Editor Application

Main application class: owns the map, the selection state machine and the
window, and runs the render loop.
"""

import logging
from pathlib import Path
from typing import Optional

import pygame
from pygame import Rect

from tilegen.formats.map_data import MapData

from .controllers.edit_controller import EditController
from .controllers.event_handler import EventHandler
from .controllers.key_state import KeyStateMachine, describe_state
from .core.constants import (
    COLOR_STATUS,
    COLOR_TEXT,
    FPS,
    STATUS_HEIGHT,
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
)
from .core.pygame_rendering import GridRenderer
from .data.keymap import Keymap

logger = logging.getLogger(__name__)


class EditorApplication:
    """Main editor application."""

    def __init__(
        self,
        map_data: MapData,
        keymap: Keymap,
        controller: Optional[EditController] = None,
    ):
        pygame.init()

        self.screen_width = WINDOW_WIDTH
        self.screen_height = WINDOW_HEIGHT
        self.screen = pygame.display.set_mode(
            (self.screen_width, self.screen_height), pygame.RESIZABLE
        )
        pygame.display.set_caption("Tilegen Editor")

        self.font = pygame.font.SysFont("monospace", 14)

        self.map_data = map_data
        self.controller = controller or EditController(map_data.atlas, map_data.grid)
        self.key_state = KeyStateMachine(keymap)
        self.renderer = GridRenderer(self.controller)
        self.status_message: Optional[str] = None

        self.event_handler = EventHandler(
            self.key_state,
            self.controller,
            on_save=self._on_save,
        )

        self.running = True
        self.clock = pygame.time.Clock()

    def _on_save(self):
        """Save the current map to its file."""
        if self.map_data.filepath is None:
            self.status_message = "No map file given; start with a map path to save"
            logger.warning("Save requested without a map path")
            return

        try:
            self.map_data.save()
        except OSError as e:
            self.status_message = f"Save failed: {e}"
            logger.warning("Save to %s failed: %s", self.map_data.filepath, e)
            return

        self.controller.unsaved = False
        self.status_message = f"Saved {Path(self.map_data.filepath).name}"

    def _get_canvas_rect(self) -> Rect:
        """Get the map drawing area."""
        return Rect(0, 0, self.screen_width, self.screen_height - STATUS_HEIGHT)

    def run(self):
        """Main loop."""
        logger.info("Editor started")
        while self.running:
            events = pygame.event.get()
            for event in events:
                if event.type == pygame.VIDEORESIZE:
                    self.screen_width, self.screen_height = event.w, event.h
            self.running = self.event_handler.handle_events(events)
            self._render()
            self.clock.tick(FPS)

        pygame.quit()

    def _render(self):
        """Render the editor."""
        self.renderer.render(self.screen, self._get_canvas_rect())
        self._render_status()
        pygame.display.flip()

    def _render_status(self):
        """Render status bar."""
        status_rect = Rect(
            0, self.screen_height - STATUS_HEIGHT, self.screen_width, STATUS_HEIGHT
        )
        pygame.draw.rect(self.screen, COLOR_STATUS, status_rect)

        status_parts = [describe_state(self.key_state.state)]

        if self.status_message:
            status_parts.append(self.status_message)

        if self.map_data.filepath:
            name = Path(self.map_data.filepath).name
            modified = "*" if self.controller.unsaved else ""
            status_parts.append(f"File: {name}{modified}")

        status_text = "  |  ".join(status_parts)
        text_surf = self.font.render(status_text, True, COLOR_TEXT)
        self.screen.blit(text_surf, (10, self.screen_height - STATUS_HEIGHT + 8))
