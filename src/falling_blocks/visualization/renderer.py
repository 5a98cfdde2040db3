from __future__ import annotations

import math
from typing import Dict, Tuple

import pygame

from falling_blocks.game import BlockColor, FallingBlockGame

RGB = Tuple[int, int, int]

PALETTE: Dict[BlockColor, RGB] = {
    BlockColor.CYAN: (0, 255, 255),
    BlockColor.BLUE: (0, 0, 255),
    BlockColor.RED: (255, 0, 0),
    BlockColor.YELLOW: (255, 255, 0),
    BlockColor.GREEN: (0, 255, 0),
    BlockColor.MAGENTA: (255, 0, 255),
    BlockColor.WHITE: (255, 255, 255),
}

BACKGROUND: RGB = (26, 51, 77)
BOARD_BG: RGB = (20, 20, 26)
HIGHLIGHT: RGB = (255, 255, 255)


def _background_for_time(t: float) -> RGB:
    # Slow colour drift; purely cosmetic.
    r, g, b = BACKGROUND
    shift = 0.5 + 0.5 * math.sin(t * 2.0 * math.pi)
    return (r, int(g + 20 * shift), int(b + 30 * (1.0 - shift)))


class Renderer:
    """Draws the board onto a pygame surface, one tile at a time."""

    def __init__(self, width: int = 10, height: int = 16, cell_size: int = 16,
                 origin: Tuple[int, int] = (120, 16)) -> None:
        self.width = width
        self.height = height
        self.cell_size = cell_size
        self.origin = origin
        self.background_time = 0.0
        self._layer: pygame.Surface | None = None

    @property
    def window_size(self) -> Tuple[int, int]:
        ox, oy = self.origin
        return (max(400, ox * 2 + self.width * self.cell_size),
                max(300, oy * 2 + self.height * self.cell_size))

    def _rect(self, x: int, y: int, w: int = 1) -> pygame.Rect:
        return pygame.Rect(
            x * self.cell_size,
            y * self.cell_size,
            w * self.cell_size - 1,
            self.cell_size - 1,
        )

    def set_background_time(self, t: float) -> None:
        self.background_time = t

    def begin(self, surface: pygame.Surface) -> None:
        surface.fill(_background_for_time(self.background_time))
        ox, oy = self.origin
        board = pygame.Rect(ox, oy, self.width * self.cell_size, self.height * self.cell_size)
        pygame.draw.rect(surface, BOARD_BG, board)

    def draw_tile(self, x: int, y: int, color: BlockColor) -> None:
        assert self._layer is not None, "draw() must build the board layer first"
        pygame.draw.rect(self._layer, PALETTE[color], self._rect(x, y))

    def draw_row_highlight(self, row: int) -> None:
        assert self._layer is not None, "draw() must build the board layer first"
        pygame.draw.rect(self._layer, HIGHLIGHT, self._rect(0, row, self.width))

    def draw(self, surface: pygame.Surface, game: FallingBlockGame) -> None:
        """Paint the background, then the board layer, rebuilt only when the game changed."""
        self.begin(surface)
        if self._layer is None or game.needs_redraw:
            self._layer = pygame.Surface((self.width * self.cell_size, self.height * self.cell_size), pygame.SRCALPHA)
            game.render(self)
        surface.blit(self._layer, self.origin)
