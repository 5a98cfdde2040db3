from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Iterator, Optional, Sequence, Tuple

import numpy as np


class BlockColor(IntEnum):
    CYAN = 1
    BLUE = 2
    RED = 3
    YELLOW = 4
    GREEN = 5
    MAGENTA = 6
    WHITE = 7


@dataclass(frozen=True)
class Block:
    color: BlockColor


Cell = Tuple[int, int, Block]


class GameGrid:
    """Fixed-size 2D grid of optional blocks.

    The backing array uses 0 for empty cells and the ``BlockColor`` value for
    occupied ones. Rows are indexed top to bottom, so ``y=0`` is the top row.
    Reads outside the grid return ``None``; writes outside it raise.
    """

    def __init__(self, width: int, height: int) -> None:
        if int(width) <= 0 or int(height) <= 0:
            raise ValueError(f"grid dimensions must be positive, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    @classmethod
    def with_data(cls, width: int, height: int, blocks: Sequence[Optional[Block]]) -> "GameGrid":
        """Build a grid from a flat, row-major sequence of ``width * height`` cells."""
        if len(blocks) != int(width) * int(height):
            raise ValueError(f"expected {int(width) * int(height)} cells, got {len(blocks)}")
        grid = cls(width, height)
        values = [0 if b is None else int(b.color) for b in blocks]
        grid.grid[:, :] = np.asarray(values, dtype=np.int8).reshape(grid.height, grid.width)
        return grid

    @classmethod
    def from_rows(cls, rows: Sequence[str], block: Block) -> "GameGrid":
        """Build a grid from text rows where ``x`` marks an occupied cell."""
        width = len(rows[0]) if rows else 0
        if any(len(r) != width for r in rows):
            raise ValueError("all rows must have the same width")
        cells = [block if ch == "x" else None for row in rows for ch in row]
        return cls.with_data(width, len(rows), cells)

    def reset(self) -> None:
        self.grid.fill(0)

    def contains_pos(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def at(self, x: int, y: int) -> Optional[Block]:
        if not self.contains_pos(x, y):
            return None
        v = int(self.grid[y, x])
        return Block(BlockColor(v)) if v else None

    def set(self, x: int, y: int, value: Optional[Block]) -> None:
        if not self.contains_pos(x, y):
            raise IndexError(f"cell ({x}, {y}) outside {self.width}x{self.height} grid")
        self.grid[y, x] = 0 if value is None else int(value.color)

    def _occupied(self) -> Iterable[Tuple[int, int]]:
        for y, x in np.argwhere(self.grid != 0):
            yield int(x), int(y)

    def cells(self) -> Iterator[Cell]:
        for x, y in self._occupied():
            yield x, y, Block(BlockColor(int(self.grid[y, x])))

    def occupied_count(self) -> int:
        return int(np.count_nonzero(self.grid))

    def intersects(self, x: int, y: int, other: "GameGrid") -> bool:
        """True if an occupied cell of ``other`` placed at offset (x, y) overlaps one of ours."""
        for ox, oy in other._occupied():
            if self.at(ox + x, oy + y) is not None:
                return True
        return False

    def contains(self, x: int, y: int, other: "GameGrid") -> bool:
        """True if every occupied cell of ``other`` placed at offset (x, y) is inside this grid."""
        return all(self.contains_pos(ox + x, oy + y) for ox, oy in other._occupied())

    def overlay(self, x: int, y: int, other: "GameGrid") -> None:
        """Merge the occupied cells of ``other`` into this grid at offset (x, y).

        Cells that would land outside this grid are dropped.
        """
        for ox, oy in other._occupied():
            if self.contains_pos(ox + x, oy + y):
                self.grid[oy + y, ox + x] = other.grid[oy, ox]

    def is_row_full(self, y: int) -> bool:
        return bool(np.all(self.grid[y] != 0))

    def clear_line(self, y: int) -> None:
        """Remove row ``y``; every row above it moves down by one and row 0 empties."""
        if not 0 <= y < self.height:
            raise IndexError(f"row {y} outside grid of height {self.height}")
        self.grid[1 : y + 1] = self.grid[0:y].copy()
        self.grid[0].fill(0)

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
