from __future__ import annotations

from typing import Dict, Iterable, Set

import pygame

from falling_blocks.game import Key

KEY_BINDINGS: Dict[int, Key] = {
    pygame.K_LEFT: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT,
    pygame.K_UP: Key.UP,
    pygame.K_DOWN: Key.DOWN,
    pygame.K_SPACE: Key.SPACE,
}


class PygameKeyboard:
    """Per-frame key state built from pygame events and the held-key table."""

    def __init__(self) -> None:
        self._pressed: Set[Key] = set()
        self._held: Set[Key] = set()

    def begin_frame(self, events: Iterable[pygame.event.Event]) -> None:
        self._pressed = {
            KEY_BINDINGS[e.key]
            for e in events
            if e.type == pygame.KEYDOWN and e.key in KEY_BINDINGS
        }
        state = pygame.key.get_pressed()
        self._held = {key for code, key in KEY_BINDINGS.items() if state[code]}

    def is_held(self, key: Key) -> bool:
        return key in self._held

    def was_pressed(self, key: Key) -> bool:
        return key in self._pressed
