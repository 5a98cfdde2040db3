from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple, Union

import numpy as np

from .grid import GameGrid


@dataclass
class LineDestroyAnimation:
    rows: Tuple[range, ...]
    progress: float = 0.0  # 0.0 to 1.0

    @property
    def finished(self) -> bool:
        return self.progress >= 1.0

    def row_indices(self) -> List[int]:
        return [y for r in self.rows for y in r]


@dataclass
class Falling:
    pass


@dataclass
class LineClearing:
    animation: LineDestroyAnimation


@dataclass
class GameOver:
    pass


GameState = Union[Falling, LineClearing, GameOver]


def find_full_rows(grid: GameGrid) -> Tuple[range, ...]:
    """Group the full rows of ``grid`` into contiguous ranges, top to bottom."""
    full = np.all(grid.grid != 0, axis=1)
    ranges: List[range] = []
    start = None
    for y, is_full in enumerate(full):
        if is_full and start is None:
            start = y
        elif not is_full and start is not None:
            ranges.append(range(start, y))
            start = None
    if start is not None:
        ranges.append(range(start, grid.height))
    return tuple(ranges)
