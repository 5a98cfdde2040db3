# tests/test_game.py
from __future__ import annotations

from typing import List

import pytest

from falling_blocks.game import (
    NO_INPUT,
    Block,
    BlockColor,
    Falling,
    FallingBlockGame,
    GameConfig,
    GameOver,
    Key,
    KeySnapshot,
    LineClearing,
    Piece,
    PieceKind,
    PieceRotation,
    Sound,
    find_full_rows,
)

RED = Block(BlockColor.RED)
GREEN = Block(BlockColor.GREEN)


class RecordingAudio:
    def __init__(self) -> None:
        self.played: List[Sound] = []

    def play(self, sound: Sound) -> None:
        self.played.append(sound)


class RecordingRenderer:
    def __init__(self) -> None:
        self.tiles: List[tuple] = []
        self.rows: List[int] = []

    def draw_tile(self, x: int, y: int, color: BlockColor) -> None:
        self.tiles.append((x, y, color))

    def draw_row_highlight(self, row: int) -> None:
        self.rows.append(row)

    def set_background_time(self, t: float) -> None:
        pass


@pytest.fixture
def audio() -> RecordingAudio:
    return RecordingAudio()


@pytest.fixture
def game(audio: RecordingAudio) -> FallingBlockGame:
    return FallingBlockGame(GameConfig(random_seed=0), audio=audio)


def _fill_row(game: FallingBlockGame, y: int, skip: tuple[int, ...] = ()) -> None:
    for x in range(game.grid.width):
        if x not in skip:
            game.grid.set(x, y, RED)


def test_new_game_opens_with_j_at_fixed_cell(game: FallingBlockGame) -> None:
    assert isinstance(game.state, Falling)
    assert game.piece == Piece(PieceKind.J, PieceRotation.DEG90, x=3, y=0)
    assert game.grid.occupied_count() == 0
    game.piece.x = 0
    game.reset()
    assert game.piece == Piece(PieceKind.J, PieceRotation.DEG90, x=3, y=0)


def test_random_opening_piece_spawns_unrotated() -> None:
    game = FallingBlockGame(GameConfig(random_seed=5, opening_piece=None))
    assert (game.piece.x, game.piece.y) == (3, 0)
    assert game.piece.rotation is PieceRotation.DEG0


def test_later_spawns_are_unrotated(game: FallingBlockGame) -> None:
    game.hard_drop()
    assert (game.piece.x, game.piece.y) == (3, 0)
    assert game.piece.rotation is PieceRotation.DEG0


def test_move_left_until_the_wall(game: FallingBlockGame) -> None:
    game.update(0.0, KeySnapshot.press(Key.LEFT))
    assert (game.piece.x, game.piece.y) == (2, 0)

    for _ in range(8):
        game.update(0.0, KeySnapshot.press(Key.LEFT))
    assert (game.piece.x, game.piece.y) == (0, 0)
    assert not game.move(-1)
    assert game.piece.x == 0


def test_move_right_stops_at_right_wall(game: FallingBlockGame) -> None:
    game.piece = Piece(PieceKind.J, PieceRotation.DEG90, x=3, y=0)
    for _ in range(10):
        game.move(1)
    # The pattern is three columns wide
    assert game.piece.x == 7


def test_move_is_blocked_by_placed_blocks(game: FallingBlockGame) -> None:
    game.piece = Piece(PieceKind.O, PieceRotation.DEG0, x=3, y=0)
    game.grid.set(2, 1, RED)
    assert not game.move(-1)
    assert game.piece.x == 3


def test_rotate_commits_and_plays_sound(game: FallingBlockGame, audio: RecordingAudio) -> None:
    game.piece = Piece(PieceKind.T, PieceRotation.DEG0, x=3, y=0)
    game.update(0.0, KeySnapshot.press(Key.UP))
    assert game.piece.rotation is PieceRotation.DEG90
    assert audio.played == [Sound.ROTATE]


def test_rotate_into_wall_is_undone(game: FallingBlockGame, audio: RecordingAudio) -> None:
    game.piece = Piece(PieceKind.I, PieceRotation.DEG90, x=-1, y=0)
    assert not game.rotate()
    assert game.piece.rotation is PieceRotation.DEG90
    assert audio.played == []


def test_gravity_waits_for_the_interval(game: FallingBlockGame) -> None:
    game.piece = Piece(PieceKind.O, PieceRotation.DEG0, x=3, y=0)
    game.update(0.25, NO_INPUT)
    assert game.piece.y == 0
    game.update(0.25, NO_INPUT)
    assert game.piece.y == 0
    game.update(0.05, NO_INPUT)
    assert game.piece.y == 1
    assert game.fall_timer == 0.0


def test_soft_drop_shortens_the_interval(game: FallingBlockGame) -> None:
    game.piece = Piece(PieceKind.O, PieceRotation.DEG0, x=3, y=0)
    game.update(0.15, NO_INPUT)
    assert game.piece.y == 0
    game.update(0.0, KeySnapshot.hold(Key.DOWN))
    assert game.piece.y == 1


def test_gravity_locks_piece_on_the_floor(game: FallingBlockGame, audio: RecordingAudio) -> None:
    game.piece = Piece(PieceKind.O, PieceRotation.DEG0, x=0, y=14)
    game.update(0.6, NO_INPUT)

    for x, y in [(0, 14), (1, 14), (0, 15), (1, 15)]:
        assert game.grid.at(x, y) == Block(BlockColor.YELLOW)
    assert game.pieces_placed == 1
    assert (game.piece.x, game.piece.y) == (3, 0)
    assert game.piece.rotation is PieceRotation.DEG0
    assert audio.played == [Sound.PLACE]
    assert isinstance(game.state, Falling)


def test_hard_drop_lands_on_the_floor(game: FallingBlockGame, audio: RecordingAudio) -> None:
    game.piece = Piece(PieceKind.J, PieceRotation.DEG90, x=3, y=0)
    game.update(0.0, KeySnapshot.press(Key.SPACE))

    blue = Block(BlockColor.BLUE)
    for x, y in [(3, 14), (3, 15), (4, 15), (5, 15)]:
        assert game.grid.at(x, y) == blue
    assert game.grid.occupied_count() == 4
    assert audio.played == [Sound.PLACE]
    assert game.fall_timer == 0.0


def test_hard_drop_rests_on_stack(game: FallingBlockGame) -> None:
    game.grid.set(1, 9, RED)
    game.piece = Piece(PieceKind.I, PieceRotation.DEG90, x=0, y=0)
    assert game.hard_drop()
    assert [game.grid.at(1, y) is not None for y in range(5, 10)] == [True] * 5
    assert game.grid.at(1, 4) is None


def test_hard_drop_skips_gravity_in_the_same_frame(game: FallingBlockGame) -> None:
    game.piece = Piece(PieceKind.O, PieceRotation.DEG0, x=0, y=0)
    game.update(1.0, KeySnapshot.press(Key.SPACE))
    assert game.piece.y == 0
    assert game.pieces_placed == 1


def test_single_row_clear(game: FallingBlockGame, audio: RecordingAudio) -> None:
    _fill_row(game, 5, skip=(9,))
    game.grid.set(9, 6, GREEN)
    game.grid.set(2, 3, GREEN)
    game.piece = Piece(PieceKind.I, PieceRotation.DEG90, x=8, y=0)

    game.hard_drop()

    assert isinstance(game.state, LineClearing)
    assert game.state.animation.rows == (range(5, 6),)
    assert game.state.animation.progress == 0.0
    assert audio.played == [Sound.PLACE, Sound.CLEAR]

    spawned = (game.piece.x, game.piece.y, game.piece.rotation)
    assert game.update(0.25, KeySnapshot(held=frozenset({Key.DOWN}), pressed=frozenset(Key))) == 0
    assert isinstance(game.state, LineClearing)
    assert game.state.animation.progress == pytest.approx(0.5)
    assert (game.piece.x, game.piece.y, game.piece.rotation) == spawned
    assert game.grid.is_row_full(5)

    assert game.update(0.3, NO_INPUT) == 1
    assert isinstance(game.state, Falling)
    assert game.lines_cleared_total == 1
    assert all(game.grid.at(x, 0) is None for x in range(10))
    assert game.grid.at(2, 4) == GREEN
    assert [game.grid.at(9, y) is not None for y in range(2, 7)] == [False, True, True, True, True]
    assert [x for x in range(10) if game.grid.at(x, 5) is not None] == [9]
    assert game.grid.occupied_count() == 5


def test_separate_ranges_clear_without_index_drift(game: FallingBlockGame) -> None:
    game.grid.set(0, 0, RED)
    _fill_row(game, 2)
    game.grid.set(1, 5, GREEN)
    _fill_row(game, 7, skip=(9,))
    game.grid.set(9, 8, GREEN)
    game.piece = Piece(PieceKind.I, PieceRotation.DEG90, x=8, y=4)
    before = game.grid.occupied_count() + 4

    game.hard_drop()
    assert isinstance(game.state, LineClearing)
    assert game.state.animation.rows == (range(2, 3), range(7, 8))

    game.update(1.0, NO_INPUT)
    assert not game.game_over
    assert game.lines_cleared_total == 2
    assert game.grid.occupied_count() == before - 20
    assert find_full_rows(game.grid) == ()
    assert all(game.grid.at(x, y) is None for x in range(10) for y in (0, 1))
    assert game.grid.at(0, 2) == RED
    assert game.grid.at(1, 6) == GREEN
    for y in (5, 6, 7):
        assert game.grid.at(9, y) is not None
    assert game.grid.at(9, 8) == GREEN


def test_find_full_rows_groups_contiguous_rows(game: FallingBlockGame) -> None:
    for y in (2, 7, 10, 11, 15):
        _fill_row(game, y)
    assert find_full_rows(game.grid) == (range(2, 3), range(7, 8), range(10, 12), range(15, 16))


def test_blocked_spawn_ends_the_game(game: FallingBlockGame) -> None:
    for x in range(3, 7):
        for y in range(0, 3):
            game.grid.set(x, y, RED)
    game.piece = Piece(PieceKind.O, PieceRotation.DEG0, x=0, y=0)

    game.hard_drop()
    assert isinstance(game.state, GameOver)
    assert game.game_over

    frozen = (game.piece.x, game.piece.y)
    assert game.update(5.0, KeySnapshot.press(Key.LEFT, Key.SPACE)) == 0
    assert (game.piece.x, game.piece.y) == frozen
    assert not game.move(1)
    assert not game.hard_drop()

    game.reset()
    assert isinstance(game.state, Falling)
    assert game.grid.occupied_count() == 0
    assert game.pieces_placed == 0


def test_hard_drop_always_terminates(game: FallingBlockGame) -> None:
    for kind in PieceKind:
        for rotation in PieceRotation:
            game.reset()
            game.piece = Piece(kind, rotation, x=3, y=0)
            assert game.hard_drop()
            assert game.grid.occupied_count() == 4


def test_render_draws_board_piece_and_highlights(game: FallingBlockGame) -> None:
    game.piece = Piece(PieceKind.O, PieceRotation.DEG0, x=0, y=0)
    game.grid.set(5, 15, RED)
    renderer = RecordingRenderer()
    game.render(renderer)
    assert sorted(renderer.tiles) == sorted(
        [(5, 15, BlockColor.RED)] + [(x, y, BlockColor.YELLOW) for x in (0, 1) for y in (0, 1)]
    )
    assert renderer.rows == []
    assert not game.needs_redraw

    _fill_row(game, 14, skip=(0,))
    game.piece = Piece(PieceKind.I, PieceRotation.DEG90, x=-1, y=0)
    game.hard_drop()
    renderer = RecordingRenderer()
    game.render(renderer)
    assert renderer.rows == [14]


def test_get_state_marks_falling_piece_negative(game: FallingBlockGame) -> None:
    game.piece = Piece(PieceKind.T, PieceRotation.DEG0, x=3, y=0)
    game.grid.set(0, 15, RED)
    state = game.get_state()
    assert state.shape == (16, 10)
    assert state[15, 0] == int(BlockColor.RED)
    assert state[0, 4] == -int(BlockColor.MAGENTA)
    assert (state < 0).sum() == 4


def test_same_seed_gives_same_pieces() -> None:
    a = FallingBlockGame(GameConfig(random_seed=42))
    b = FallingBlockGame(GameConfig(random_seed=42))
    kinds_a, kinds_b = [], []
    for _ in range(10):
        kinds_a.append(a.piece.kind)
        kinds_b.append(b.piece.kind)
        a.hard_drop()
        b.hard_drop()
        if a.game_over:
            break
    assert kinds_a == kinds_b


def test_gravity_resumes_right_after_rows_are_removed(game: FallingBlockGame) -> None:
    _fill_row(game, 15, skip=(0,))
    game.piece = Piece(PieceKind.I, PieceRotation.DEG90, x=-1, y=0)
    game.hard_drop()
    assert isinstance(game.state, LineClearing)

    frame = 1.0 / 60.0
    for _ in range(40):
        game.update(frame, NO_INPUT)
        if isinstance(game.state, Falling):
            break
    assert isinstance(game.state, Falling)
    assert game.lines_cleared_total == 1

    y0 = game.piece.y
    game.update(frame, NO_INPUT)
    assert game.piece.y == y0 + 1


def _lock_into_row_one(game: FallingBlockGame) -> None:
    # Row 1 is full apart from column 9; a vertical I resting on (9, 4) completes it.
    _fill_row(game, 1, skip=(9,))
    game.grid.set(9, 4, GREEN)
    game.piece = Piece(PieceKind.I, PieceRotation.DEG90, x=8, y=0)
    game.hard_drop()


def test_spawn_blocked_only_by_cleared_rows_keeps_playing(game: FallingBlockGame) -> None:
    _lock_into_row_one(game)

    # Every unrotated piece at (3, 0) covers (4, 1), which sits in the full row.
    assert game.piece.collides_with(game.grid)
    assert isinstance(game.state, LineClearing)

    game.update(1.0, NO_INPUT)
    assert isinstance(game.state, Falling)
    assert not game.piece.collides_with(game.grid)


def test_spawn_still_blocked_after_clear_ends_the_game(game: FallingBlockGame) -> None:
    # Shifts down onto (4, 1) once row 1 is removed.
    game.grid.set(4, 0, RED)
    _lock_into_row_one(game)
    assert isinstance(game.state, LineClearing)

    game.update(0.25, NO_INPUT)
    assert isinstance(game.state, LineClearing)

    assert game.update(0.25, NO_INPUT) == 1
    assert game.grid.at(4, 1) == RED
    assert isinstance(game.state, GameOver)
