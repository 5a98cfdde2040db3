from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from functools import lru_cache
from typing import Dict, Iterator, Tuple

from .grid import Block, BlockColor, Cell, GameGrid


class PieceKind(IntEnum):
    I = 1
    J = 2
    L = 3
    O = 4
    S = 5
    T = 6
    Z = 7

    @property
    def color(self) -> BlockColor:
        return KIND_COLORS[self]

    @classmethod
    def random(cls, rng: random.Random) -> "PieceKind":
        return rng.choice(list(cls))


KIND_COLORS: Dict[PieceKind, BlockColor] = {
    PieceKind.I: BlockColor.CYAN,
    PieceKind.J: BlockColor.BLUE,
    PieceKind.L: BlockColor.RED,
    PieceKind.O: BlockColor.YELLOW,
    PieceKind.S: BlockColor.GREEN,
    PieceKind.T: BlockColor.MAGENTA,
    PieceKind.Z: BlockColor.WHITE,
}


class PieceRotation(IntEnum):
    DEG0 = 0
    DEG90 = 1
    DEG180 = 2
    DEG270 = 3

    def rotate_cw(self) -> "PieceRotation":
        return PieceRotation((self + 1) % 4)

    def rotate_ccw(self) -> "PieceRotation":
        return PieceRotation((self - 1) % 4)


Bitmap = Tuple[str, str, str, str]

# 4x4 occupancy per (kind, rotation); "x" is a block, row 0 is the top.
_I_FLAT: Bitmap = ("....", "xxxx", "....", "....")
_I_TALL: Bitmap = (".x..", ".x..", ".x..", ".x..")
_S_FLAT: Bitmap = (".xx.", "xx..", "....", "....")
_S_TALL: Bitmap = ("x...", "xx..", ".x..", "....")
_Z_FLAT: Bitmap = ("xx..", ".xx.", "....", "....")
_Z_TALL: Bitmap = (".x..", "xx..", "x...", "....")
_O: Bitmap = ("xx..", "xx..", "....", "....")

BITMAPS: Dict[Tuple[PieceKind, PieceRotation], Bitmap] = {
    (PieceKind.I, PieceRotation.DEG0): _I_FLAT,
    (PieceKind.I, PieceRotation.DEG90): _I_TALL,
    (PieceKind.I, PieceRotation.DEG180): _I_FLAT,
    (PieceKind.I, PieceRotation.DEG270): _I_TALL,
    (PieceKind.J, PieceRotation.DEG0): (".x..", ".x..", "xx..", "...."),
    (PieceKind.J, PieceRotation.DEG90): ("x...", "xxx.", "....", "...."),
    (PieceKind.J, PieceRotation.DEG180): (".xx.", ".x..", ".x..", "...."),
    (PieceKind.J, PieceRotation.DEG270): ("....", "xxx.", "..x.", "...."),
    (PieceKind.L, PieceRotation.DEG0): (".x..", ".x..", ".xx.", "...."),
    (PieceKind.L, PieceRotation.DEG90): ("....", "xxx.", "x...", "...."),
    (PieceKind.L, PieceRotation.DEG180): ("xx..", ".x..", ".x..", "...."),
    (PieceKind.L, PieceRotation.DEG270): ("..x.", "xxx.", "....", "...."),
    (PieceKind.O, PieceRotation.DEG0): _O,
    (PieceKind.O, PieceRotation.DEG90): _O,
    (PieceKind.O, PieceRotation.DEG180): _O,
    (PieceKind.O, PieceRotation.DEG270): _O,
    (PieceKind.S, PieceRotation.DEG0): _S_FLAT,
    (PieceKind.S, PieceRotation.DEG90): _S_TALL,
    (PieceKind.S, PieceRotation.DEG180): _S_FLAT,
    (PieceKind.S, PieceRotation.DEG270): _S_TALL,
    (PieceKind.T, PieceRotation.DEG0): (".x..", "xxx.", "....", "...."),
    (PieceKind.T, PieceRotation.DEG90): (".x..", ".xx.", ".x..", "...."),
    (PieceKind.T, PieceRotation.DEG180): ("....", "xxx.", ".x..", "...."),
    (PieceKind.T, PieceRotation.DEG270): (".x..", "xx..", ".x..", "...."),
    (PieceKind.Z, PieceRotation.DEG0): _Z_FLAT,
    (PieceKind.Z, PieceRotation.DEG90): _Z_TALL,
    (PieceKind.Z, PieceRotation.DEG180): _Z_FLAT,
    (PieceKind.Z, PieceRotation.DEG270): _Z_TALL,
}


@lru_cache(maxsize=None)
def pattern(kind: PieceKind, rotation: PieceRotation) -> GameGrid:
    """4x4 grid for ``kind`` at ``rotation``, coloured with the kind's colour.

    The result is shared between callers and must not be modified.
    """
    return GameGrid.from_rows(BITMAPS[(kind, rotation)], Block(kind.color))


@dataclass
class Piece:
    kind: PieceKind
    rotation: PieceRotation = PieceRotation.DEG0
    x: int = 0  # board column of the pattern's left edge
    y: int = 0  # board row of the pattern's top edge

    def pattern(self) -> GameGrid:
        return pattern(self.kind, self.rotation)

    def collides_with(self, grid: GameGrid) -> bool:
        shape = self.pattern()
        return grid.intersects(self.x, self.y, shape) or not grid.contains(self.x, self.y, shape)

    def cells_at(self, origin_x: int, origin_y: int) -> Iterator[Cell]:
        for dx, dy, block in self.pattern().cells():
            yield origin_x + dx, origin_y + dy, block

    def cells(self) -> Iterator[Cell]:
        return self.cells_at(self.x, self.y)
