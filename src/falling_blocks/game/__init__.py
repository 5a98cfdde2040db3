"""Game module for Falling Blocks.

Exports the core game engine and supporting classes:
- GameGrid: Grid of coloured blocks, overlap tests and line removal
- Piece: Falling tetromino with kind, rotation and board position
- PieceKind / PieceRotation: The seven shapes and their four orientations
- TimingRules: Gravity and animation timing
- FallingBlockGame: Frame-driven state machine (falling, line clearing, game over)
"""

from .grid import Block, BlockColor, GameGrid
from .pieces import Piece, PieceKind, PieceRotation, pattern
from .rules import TimingRules
from .state import Falling, GameOver, LineClearing, LineDestroyAnimation, find_full_rows
from .interfaces import Key, KeySnapshot, NO_INPUT, SilentAudio, Sound
from .core import FallingBlockGame, GameConfig

__all__ = [
    "Block",
    "BlockColor",
    "GameGrid",
    "Piece",
    "PieceKind",
    "PieceRotation",
    "pattern",
    "TimingRules",
    "Falling",
    "GameOver",
    "LineClearing",
    "LineDestroyAnimation",
    "find_full_rows",
    "Key",
    "KeySnapshot",
    "NO_INPUT",
    "SilentAudio",
    "Sound",
    "FallingBlockGame",
    "GameConfig",
]
