"""Session state machine: selection, slides, undo, and round transitions."""

from __future__ import annotations

import random

import pytest

from backend.engine.gamegenerator import GameGenerator, WallStrategy
from backend.engine.gameplay import Phase, Session
from backend.errors import InvalidOperationError, NoLegalTargetError
from backend.models.board import (
    COLORS,
    HUB_CELLS,
    Board,
    Color,
    Direction,
    OccupiedBy,
    Target,
    add_wall,
    wall_count,
)
from backend.models.move import Move

START = {
    Color.BLUE: (0, 0),
    Color.RED: (5, 5),
    Color.GREEN: (10, 3),
    Color.YELLOW: (12, 9),
}

# -- helpers ------------------------------------------------------------------


def _session(with_pocket: bool = True) -> Session:
    """Blue can reach its target at (0, 15) in one slide or in three.

    With *with_pocket*, (3, 3) is the only cell a new target can go to.
    """
    grid = GameGenerator.sealed()
    if with_pocket:
        add_wall(grid, 3, 3, Direction.UP)
        add_wall(grid, 3, 3, Direction.LEFT)
    board = Board.from_layout(grid, dict(START), Target(Color.BLUE, (0, 15)))
    return Session(board, random.Random(0))


def _slide(session: Session, color: Color, direction: Direction) -> Move | None:
    session.select_color(color)
    return session.request_slide(direction)


def _long_route(session: Session) -> None:
    _slide(session, Color.BLUE, Direction.DOWN)
    _slide(session, Color.BLUE, Direction.RIGHT)
    _slide(session, Color.BLUE, Direction.UP)


# -- selection ----------------------------------------------------------------


def test_new_session_is_idle() -> None:
    session = _session()
    assert session.phase is Phase.IDLE
    assert session.active_color is None
    assert session.move_count == 0
    assert session.best_length is None
    assert session.best_solution is None


def test_select_and_deselect() -> None:
    session = _session()
    session.select_color(Color.GREEN)
    assert session.phase is Phase.PIECE_SELECTED
    assert session.active_color is Color.GREEN

    session.select_color(Color.RED)
    assert session.active_color is Color.RED

    session.deselect()
    assert session.phase is Phase.IDLE


# -- sliding ------------------------------------------------------------------


def test_slide_without_selection_is_rejected() -> None:
    session = _session()
    with pytest.raises(InvalidOperationError):
        session.request_slide(Direction.RIGHT)
    assert session.move_count == 0
    assert session.board.layout() == START


def test_string_names_are_accepted() -> None:
    session = _session()
    session.select_color("blue")
    move = session.request_slide("down")

    assert move == Move(Color.BLUE, (0, 0), (15, 0))
    with pytest.raises(ValueError):
        session.request_slide("sideways")


def test_blocked_slide_records_nothing() -> None:
    session = _session()
    assert _slide(session, Color.BLUE, Direction.UP) is None
    assert session.move_count == 0
    assert session.active_color is Color.BLUE


def test_slide_records_move_and_keeps_selection() -> None:
    session = _session()
    move = _slide(session, Color.BLUE, Direction.DOWN)

    assert move == Move(Color.BLUE, (0, 0), (15, 0))
    assert session.history == (move,)
    assert session.active_color is Color.BLUE
    assert session.board.piece_at((15, 0)) is Color.BLUE


def test_reaching_target_sets_best_and_clears_selection() -> None:
    session = _session()
    move = _slide(session, Color.BLUE, Direction.RIGHT)

    assert move is not None and move.to_pos == (0, 15)
    assert session.is_target_reached
    assert session.best_length == 1
    assert session.best_solution == (move,)
    assert session.active_color is None
    assert session.phase is Phase.IDLE


def test_other_colour_on_target_cell_does_not_count() -> None:
    session = _session()
    _slide(session, Color.RED, Direction.UP)
    _slide(session, Color.RED, Direction.RIGHT)

    assert session.board.piece_at((0, 15)) is Color.RED
    assert session.best_length is None
    assert session.active_color is Color.RED


def test_best_solution_only_shrinks() -> None:
    session = _session()
    _long_route(session)
    assert session.best_length == 3

    session.reset_round()
    _slide(session, Color.BLUE, Direction.RIGHT)
    assert session.best_length == 1

    session.reset_round()
    _long_route(session)
    assert session.best_length == 1
    assert session.move_count == 3


# -- undo ---------------------------------------------------------------------


def test_undo_on_empty_history_changes_nothing() -> None:
    session = _session()
    session.select_color(Color.RED)

    assert session.undo_last() is None
    assert session.active_color is Color.RED
    assert session.move_count == 0
    assert session.best_length is None
    assert session.board.layout() == START


def test_undo_reverts_last_move_and_clears_selection() -> None:
    session = _session()
    first = _slide(session, Color.BLUE, Direction.DOWN)
    second = _slide(session, Color.BLUE, Direction.RIGHT)

    assert session.undo_last() == second
    assert session.history == (first,)
    assert session.board.pieces[Color.BLUE].location == (15, 0)
    assert session.board.piece_at((15, 15)) is None
    assert session.active_color is None


def test_undo_keeps_best_solution() -> None:
    session = _session()
    _slide(session, Color.BLUE, Direction.RIGHT)
    session.undo_last()

    assert session.move_count == 0
    assert session.best_length == 1
    assert session.board.layout() == START


# -- round transitions --------------------------------------------------------


def test_reset_round_restores_start_and_keeps_best() -> None:
    session = _session()
    _long_route(session)
    _slide(session, Color.RED, Direction.LEFT)
    session.select_color(Color.GREEN)

    session.reset_round()

    assert session.board.layout() == START
    assert session.move_count == 0
    assert session.best_length == 3
    assert session.active_color is None
    for color, location in START.items():
        assert session.board.grid.at(location).occupancy == OccupiedBy(color)


def test_new_round_replays_best_solution() -> None:
    session = _session()
    _long_route(session)
    session.reset_round()
    _slide(session, Color.BLUE, Direction.RIGHT)
    session.undo_last()
    _slide(session, Color.RED, Direction.DOWN)

    target = session.new_round()

    expected = {**START, Color.BLUE: (0, 15)}
    assert session.board.layout() == expected
    assert session.move_count == 0
    assert session.best_solution is None
    assert session.active_color is None
    assert target.location == (3, 3)
    assert session.target == target


def test_new_round_without_solution_returns_to_start() -> None:
    session = _session()
    _slide(session, Color.GREEN, Direction.UP)
    session.new_round()

    assert session.board.layout() == START
    assert session.target.location == (3, 3)


def test_new_round_without_pocket_keeps_old_target() -> None:
    session = _session(with_pocket=False)
    old = session.target

    with pytest.raises(NoLegalTargetError):
        session.new_round()
    assert session.target == old


# -- randomized play ----------------------------------------------------------


@pytest.mark.parametrize("strategy", list(WallStrategy))
@pytest.mark.parametrize("seed", range(4))
def test_random_play_keeps_invariants(strategy: WallStrategy, seed: int) -> None:
    rng = random.Random(seed)
    session = Session.generate(strategy, random.Random(seed))
    start = session.board.layout()
    best_seen: int | None = None

    for _ in range(300):
        roll = rng.random()
        if roll < 0.1:
            session.undo_last()
        elif roll < 0.13:
            session.reset_round()
            assert session.board.layout() == start
        else:
            session.select_color(rng.choice(COLORS))
            session.request_slide(rng.choice(list(Direction)))

        locations = list(session.board.layout().values())
        assert len(set(locations)) == len(COLORS)
        assert not set(locations) & set(HUB_CELLS)
        for color, piece in session.board.pieces.items():
            assert session.board.grid.at(piece.location).occupancy == OccupiedBy(color)

        best = session.best_length
        if best_seen is not None:
            assert best is not None and best <= best_seen
        best_seen = best

    session.new_round()
    target_cell = session.board.grid.at(session.target.location)
    assert wall_count(target_cell) == 2
    assert session.board.piece_at(session.target.location) is None
