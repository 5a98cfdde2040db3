from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

import numpy as np

from .grid import Cell, GameGrid
from .interfaces import AudioSink, InputSource, Key, SilentAudio, Sound, TileRenderer
from .pieces import Piece, PieceKind, PieceRotation
from .rules import TimingRules
from .state import (
    Falling,
    GameOver,
    GameState,
    LineClearing,
    LineDestroyAnimation,
    find_full_rows,
)

logger = logging.getLogger(__name__)


@dataclass
class GameConfig:
    width: int = 10
    height: int = 16
    random_seed: Optional[int] = None
    spawn_x: int = 3
    spawn_y: int = 0
    # First piece of a session; None draws it at random like every later spawn.
    opening_piece: Optional[Tuple[PieceKind, PieceRotation]] = (PieceKind.J, PieceRotation.DEG90)


class FallingBlockGame:
    """Frame-driven falling-block game.

    Call :meth:`update` once per frame with the elapsed time in seconds and the
    frame's input. The game is always in exactly one of three states:

    - ``Falling``: input and gravity move the active piece.
    - ``LineClearing``: full rows are flashing; input and gravity are ignored
      until the animation completes and the rows are removed.
    - ``GameOver``: a freshly spawned piece had no room; only :meth:`reset`
      leaves this state.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[TimingRules] = None,
        audio: Optional[AudioSink] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or TimingRules()
        self.audio: AudioSink = audio or SilentAudio()
        self.rng = random.Random(self.config.random_seed)
        self.grid = GameGrid(self.config.width, self.config.height)
        self.state: GameState = Falling()
        self.piece = Piece(PieceKind.I)
        self.fall_timer = 0.0
        self.lines_cleared_total = 0
        self.pieces_placed = 0
        self.needs_redraw = True
        self.reset()

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.rng.seed(seed)
        self.grid.reset()
        self.state = Falling()
        self.fall_timer = 0.0
        self.lines_cleared_total = 0
        self.pieces_placed = 0
        self.needs_redraw = True
        if self.config.opening_piece is None:
            self._spawn_piece()
        else:
            kind, rotation = self.config.opening_piece
            self.piece = Piece(kind, rotation, x=self.config.spawn_x, y=self.config.spawn_y)
        self._check_spawn()

    @property
    def game_over(self) -> bool:
        return isinstance(self.state, GameOver)

    @property
    def animation(self) -> Optional[LineDestroyAnimation]:
        if isinstance(self.state, LineClearing):
            return self.state.animation
        return None

    # ---------- Frame update ----------
    def update(self, dt: float, controls: InputSource) -> int:
        """Advance one frame. Returns the number of rows removed during it."""
        if isinstance(self.state, LineClearing):
            # Time since the last downward move keeps counting through the animation.
            self.fall_timer += dt
            return self._advance_animation(self.state.animation, dt)
        if isinstance(self.state, Falling):
            self._update_falling(dt, controls)
        return 0

    def _update_falling(self, dt: float, controls: InputSource) -> None:
        if controls.was_pressed(Key.LEFT):
            self.move(-1)
        if controls.was_pressed(Key.RIGHT):
            self.move(1)
        if controls.was_pressed(Key.UP):
            self.rotate()
        interval = self.rules.gravity_interval(soft_drop=controls.is_held(Key.DOWN))
        if controls.was_pressed(Key.SPACE):
            # The drop restarts the fall timer, so gravity has nothing to do this frame.
            self.hard_drop()
            return
        self._apply_gravity(dt, interval)

    def _advance_animation(self, animation: LineDestroyAnimation, dt: float) -> int:
        animation.progress = min(1.0, animation.progress + dt * self.rules.line_clear_rate)
        if not animation.finished:
            return 0
        rows = animation.row_indices()
        # Ascending order: clearing row y only shifts the rows above it.
        for y in rows:
            self.grid.clear_line(y)
        self.lines_cleared_total += len(rows)
        self.state = Falling()
        self.needs_redraw = True
        logger.debug("removed rows %s", rows)
        self._check_spawn()
        return len(rows)

    def _apply_gravity(self, dt: float, interval: float) -> None:
        self.fall_timer += dt
        if self.fall_timer <= interval:
            return
        self.fall_timer = 0.0
        self.needs_redraw = True
        self.piece.y += 1
        if self.piece.collides_with(self.grid):
            self.piece.y -= 1
            self._lock_piece()

    # ---------- Piece actions ----------
    def move(self, dx: int) -> bool:
        if not isinstance(self.state, Falling):
            return False
        self.piece.x += dx
        if self.piece.collides_with(self.grid):
            self.piece.x -= dx
            return False
        self.needs_redraw = True
        return True

    def rotate(self) -> bool:
        if not isinstance(self.state, Falling):
            return False
        self.piece.rotation = self.piece.rotation.rotate_cw()
        if self.piece.collides_with(self.grid):
            self.piece.rotation = self.piece.rotation.rotate_ccw()
            return False
        self.audio.play(Sound.ROTATE)
        self.needs_redraw = True
        return True

    def hard_drop(self) -> bool:
        if not isinstance(self.state, Falling):
            return False
        self.fall_timer = 0.0
        piece = self.piece
        for _ in range(self.grid.height + 1):
            if piece.collides_with(self.grid):
                break
            piece.y += 1
        else:
            raise RuntimeError(f"hard drop of {piece.kind.name} did not reach the floor")
        piece.y -= 1
        self._lock_piece()
        self.needs_redraw = True
        return True

    # ---------- Locking and spawning ----------
    def _lock_piece(self) -> None:
        piece = self.piece
        self.grid.overlay(piece.x, piece.y, piece.pattern())
        self.pieces_placed += 1
        logger.debug("locked %s at (%d, %d)", piece.kind.name, piece.x, piece.y)
        self._spawn_piece()
        self.audio.play(Sound.PLACE)
        rows = find_full_rows(self.grid)
        if rows:
            self.audio.play(Sound.CLEAR)
            self.state = LineClearing(LineDestroyAnimation(rows=rows))
            logger.debug("full rows %s", [(r.start, r.stop) for r in rows])
        else:
            self._check_spawn()

    def _spawn_piece(self) -> None:
        self.piece = Piece(
            kind=PieceKind.random(self.rng),
            rotation=PieceRotation.DEG0,
            x=self.config.spawn_x,
            y=self.config.spawn_y,
        )

    def _check_spawn(self) -> None:
        if self.piece.collides_with(self.grid):
            self.state = GameOver()
            logger.info(
                "game over: no room for %s after %d pieces, %d lines",
                self.piece.kind.name,
                self.pieces_placed,
                self.lines_cleared_total,
            )

    # ---------- Drawing and observation ----------
    def tiles(self) -> Iterator[Cell]:
        """Placed blocks followed by the visible cells of the falling piece."""
        yield from self.grid.cells()
        for x, y, block in self.piece.cells():
            if self.grid.contains_pos(x, y) and self.grid.at(x, y) is None:
                yield x, y, block

    def render(self, renderer: TileRenderer) -> None:
        for x, y, block in self.tiles():
            renderer.draw_tile(x, y, block.color)
        animation = self.animation
        if animation is not None:
            for row in animation.row_indices():
                renderer.draw_row_highlight(row)
        self.needs_redraw = False

    def get_state(self) -> np.ndarray:
        # Falling piece is written as the negated colour value
        state = self.grid.clone_state()
        if not self.game_over:
            for x, y, block in self.piece.cells():
                if self.grid.contains_pos(x, y):
                    state[y, x] = -int(block.color)
        return state
