"""Core gameplay logic: selects pieces, processes slides, tracks rounds."""

from __future__ import annotations

import logging
import random
from enum import StrEnum

from backend.engine.gamegenerator import GameGenerator, WallStrategy
from backend.engine.gamegenerator.placement import select_target
from backend.engine.gameplay.slide import apply_move, invert_move, slide_destination
from backend.engine.gamestate import RoundState
from backend.errors import InvalidOperationError
from backend.models.board import Board, Color, Direction, Target
from backend.models.move import Move

logger = logging.getLogger(__name__)


class Phase(StrEnum):
    IDLE = "idle"
    PIECE_SELECTED = "piece_selected"


class Session:
    """Orchestrates play on a single board across rounds."""

    def __init__(self, board: Board, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()
        self.state = RoundState(board)

    @classmethod
    def generate(
        cls,
        strategy: WallStrategy | str = WallStrategy.RANDOM,
        rng: random.Random | None = None,
    ) -> Session:
        """Create a session on a freshly generated board."""
        rng = rng or random.Random()
        return cls(GameGenerator.generate(strategy, rng), rng)

    # -- queries --------------------------------------------------------------

    @property
    def board(self) -> Board:
        return self.state.board

    @property
    def target(self) -> Target:
        return self.state.board.target

    @property
    def active_color(self) -> Color | None:
        return self.state.active_color

    @property
    def phase(self) -> Phase:
        if self.state.active_color is None:
            return Phase.IDLE
        return Phase.PIECE_SELECTED

    @property
    def history(self) -> tuple[Move, ...]:
        return tuple(self.state.history)

    @property
    def move_count(self) -> int:
        return self.state.moves

    @property
    def best_solution(self) -> tuple[Move, ...] | None:
        return self.state.best

    @property
    def best_length(self) -> int | None:
        return self.state.best_length

    @property
    def is_target_reached(self) -> bool:
        return self.state.is_solved

    # -- selection ------------------------------------------------------------

    def select_color(self, color: Color) -> None:
        self.state.active_color = Color(color)

    def deselect(self) -> None:
        self.state.active_color = None

    # -- movement -------------------------------------------------------------

    def request_slide(self, direction: Direction) -> Move | None:
        """Slide the selected piece as far as it goes in *direction*.

        Returns the recorded move, or ``None`` if the piece cannot move.
        Reaching the target offers the history as the best solution and
        drops the selection.
        """
        color = self.state.active_color
        if color is None:
            logger.debug("Slide %s rejected: no piece selected", direction)
            raise InvalidOperationError("Select a piece before sliding.")

        direction = Direction(direction)
        origin = self.board.pieces[color].location
        destination = slide_destination(self.board, origin, direction)
        if destination == origin:
            return None

        move = Move(color=color, from_pos=origin, to_pos=destination)
        apply_move(self.board, move)
        self.state.record(move)

        target = self.board.target
        if color == target.color and destination == target.location:
            if self.state.offer_solution():
                logger.debug("New best solution: %d moves", self.state.moves)
            self.state.active_color = None
        return move

    def undo_last(self) -> Move | None:
        """Take back the last slide.  Does nothing when the history is empty."""
        move = self.state.pop()
        if move is None:
            return None
        apply_move(self.board, invert_move(move))
        self.state.active_color = None
        return move

    # -- round transitions ----------------------------------------------------

    def reset_round(self) -> None:
        """Roll every piece back to where the round started."""
        self._rollback()
        self.state.active_color = None

    def new_round(self) -> Target:
        """Start the next round from the best solution's final layout.

        The best solution (if any) is replayed from the starting layout, the
        log is cleared, and a fresh target is drawn.  If no pocket is free,
        ``NoLegalTargetError`` propagates and the old target stays in place.
        """
        self._rollback()
        if self.state.best is not None:
            for move in self.state.best:
                apply_move(self.board, move)
        self.state.clear()

        self.board.target = select_target(self.board.grid, self.rng)
        logger.debug(
            "New round: %s target at %s", self.board.target.color, self.board.target.location
        )
        return self.board.target

    def _rollback(self) -> None:
        while self.state.history:
            apply_move(self.board, invert_move(self.state.history.pop()))
