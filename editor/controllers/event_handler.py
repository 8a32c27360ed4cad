"""
Tilegen - Event Handler

Handles user input events: window close and key presses. Key presses feed
the selection state machine; completed commands go to the edit controller.
"""

from typing import Callable, List, Optional

import pygame

from editor.core.constants import SAVE_KEY

from .commands import Command
from .edit_controller import EditController
from .key_state import KeyStateMachine


class EventHandler:
    """Handles all user input events."""

    def __init__(
        self,
        key_state: KeyStateMachine,
        controller: EditController,
        on_save: Optional[Callable[[], None]] = None,
    ):
        """
        Initialize event handler.

        Args:
            key_state: Selection state machine
            controller: Edit controller receiving completed commands
            on_save: Callback for the save shortcut
        """
        self.key_state = key_state
        self.controller = controller
        self.on_save = on_save
        self.last_command: Optional[Command] = None

    def handle_events(self, events: List[pygame.event.Event]) -> bool:
        """
        Handle all pygame events.

        Args:
            events: List of pygame events to process

        Returns:
            True if application should continue running, False if quit requested
        """
        for event in events:
            if event.type == pygame.QUIT:
                return False

            if event.type == pygame.KEYDOWN:
                self.handle_key(pygame.key.name(event.key))

        return True

    def handle_key(self, key: str):
        """Handle one key press by name."""
        if key == SAVE_KEY and self.on_save is not None:
            self.key_state.reset()
            self.on_save()
            return

        command = self.key_state.press(key)
        if command is None:
            return

        # Keymap is validated against the map at startup, so bounds hold here
        self.controller.apply(command)
        self.last_command = command
