"""Narrow seams between the game core and its input, audio and drawing collaborators."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Protocol

from .grid import BlockColor


class Key(Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"  # rotate
    DOWN = "down"  # soft drop
    SPACE = "space"  # hard drop


class Sound(Enum):
    ROTATE = "rotate"
    PLACE = "place"
    CLEAR = "clear"
    MUSIC = "music"


class InputSource(Protocol):
    def is_held(self, key: Key) -> bool: ...

    def was_pressed(self, key: Key) -> bool: ...


class AudioSink(Protocol):
    def play(self, sound: Sound) -> None: ...


class TileRenderer(Protocol):
    def draw_tile(self, x: int, y: int, color: BlockColor) -> None: ...

    def draw_row_highlight(self, row: int) -> None: ...

    def set_background_time(self, t: float) -> None: ...


@dataclass(frozen=True)
class KeySnapshot:
    """Input state for a single frame."""

    held: FrozenSet[Key] = field(default_factory=frozenset)
    pressed: FrozenSet[Key] = field(default_factory=frozenset)

    @classmethod
    def press(cls, *keys: Key) -> "KeySnapshot":
        return cls(pressed=frozenset(keys))

    @classmethod
    def hold(cls, *keys: Key) -> "KeySnapshot":
        return cls(held=frozenset(keys))

    def is_held(self, key: Key) -> bool:
        return key in self.held

    def was_pressed(self, key: Key) -> bool:
        return key in self.pressed


NO_INPUT = KeySnapshot()


class SilentAudio:
    def play(self, sound: Sound) -> None:
        pass
