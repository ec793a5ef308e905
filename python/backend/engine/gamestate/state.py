"""Tracks the mutable state of a round in progress."""

from __future__ import annotations

from backend.models.board import Board, Color
from backend.models.move import Move


class RoundState:
    """Holds the board, the move log, the best solution, and the selected piece.

    The move log and the best solution have separate lifetimes: undo only
    shortens the log, while the best solution lives until the round ends.
    """

    def __init__(self, board: Board) -> None:
        self.board = board
        self.history: list[Move] = []
        self.best: tuple[Move, ...] | None = None
        self.active_color: Color | None = None

    # -- move log -------------------------------------------------------------

    @property
    def moves(self) -> int:
        return len(self.history)

    def record(self, move: Move) -> None:
        self.history.append(move)

    def pop(self) -> Move | None:
        if not self.history:
            return None
        return self.history.pop()

    # -- best solution --------------------------------------------------------

    @property
    def best_length(self) -> int | None:
        return None if self.best is None else len(self.best)

    def offer_solution(self) -> bool:
        """Keep the current log as the best solution if it is shorter.

        Returns True if the best solution was replaced.
        """
        if self.best is not None and len(self.best) <= len(self.history):
            return False
        self.best = tuple(self.history)
        return True

    # -- round boundary -------------------------------------------------------

    def clear(self) -> None:
        self.history.clear()
        self.best = None
        self.active_color = None

    @property
    def is_solved(self) -> bool:
        return self.board.is_target_reached()
