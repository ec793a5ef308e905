"""Terminal frontend: key mapping and board rendering."""

from __future__ import annotations

import random

import pytest

from backend.engine.gamegenerator import GameGenerator, WallStrategy
from backend.engine.gameplay import Session, destinations
from backend.errors import GenerationFailedError
from backend.models.board import Board, Color, Direction, Target
from frontend.cli import input_handler
from frontend.cli.rich import app

# -- key mapping --------------------------------------------------------------


def _feed(monkeypatch: pytest.MonkeyPatch, keys: str) -> None:
    chars = iter(keys)
    monkeypatch.setattr(input_handler, "_getch", lambda: next(chars))


@pytest.mark.parametrize(
    ("keys", "action"),
    [
        ("w", "up"),
        ("D", "right"),
        ("\x1b[B", "down"),
        ("\x1b[D", "left"),
        ("1", "blue"),
        ("4", "yellow"),
        ("u", "undo"),
        ("r", "reset"),
        ("n", "next"),
        ("g", "generate"),
        (" ", "deselect"),
        ("\x1bx", "quit"),
        ("\x03", "quit"),
        ("z", "z"),
        ("\x01", ""),
    ],
)
def test_get_key_maps_actions(monkeypatch: pytest.MonkeyPatch, keys: str, action: str) -> None:
    _feed(monkeypatch, keys)
    assert input_handler.get_key() == action


# -- rendering ----------------------------------------------------------------


def _board() -> Board:
    layout = {
        Color.BLUE: (0, 0),
        Color.RED: (5, 5),
        Color.GREEN: (10, 3),
        Color.YELLOW: (12, 9),
    }
    return Board.from_layout(GameGenerator.sealed(), layout, Target(Color.RED, (0, 15)))


def test_render_board_draws_hub_pieces_and_target() -> None:
    board = _board()
    text = app._render_board(board).plain
    lines = text.split("\n")

    assert len(lines) == 2 * board.size + 1
    assert text.count("▓▓▓") == 4
    assert text.count("●") == 4
    assert text.count("◆") == 1
    assert lines[0] == "+" + "───+" * board.size


def test_render_board_marks_reachable_cells() -> None:
    board = _board()
    text = app._render_board(board, destinations(board, Color.BLUE)).plain
    assert text.count("·") == 1  # (0, 15) shows the target instead


def test_slide_status_messages() -> None:
    board = _board()
    session = Session(board, random.Random(0))

    assert "Select a piece" in app._slide(session, Direction.RIGHT)

    session.select_color(Color.BLUE)
    assert "cannot move" in app._slide(session, Direction.UP)

    session.select_color(Color.RED)
    app._slide(session, Direction.UP)
    assert "Target reached in 2 moves" in app._slide(session, Direction.RIGHT)


# -- regeneration -------------------------------------------------------------


def test_failed_regeneration_keeps_current_session(monkeypatch: pytest.MonkeyPatch) -> None:
    session = Session(_board(), random.Random(0))
    calls = []

    def _fail(strategy, rng):
        calls.append(strategy)
        raise GenerationFailedError("a test board", 1)

    monkeypatch.setattr(Session, "generate", _fail)
    kept, status = app._regenerate(session, WallStrategy.RANDOM, random.Random(0))

    assert kept is session
    assert len(calls) == app.MAX_GENERATION_TRIES
    assert "Keeping the current board" in status
    assert "a playable board" in status


def test_regeneration_swaps_in_new_session() -> None:
    session = Session(_board(), random.Random(0))
    fresh, status = app._regenerate(session, WallStrategy.TEMPLATE, random.Random(3))

    assert fresh is not session
    assert "New board" in status
