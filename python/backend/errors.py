"""Exceptions raised by the puzzle engine."""

from __future__ import annotations


class PuzzleError(Exception):
    """Base class for recoverable engine errors."""


class NoLegalTargetError(PuzzleError):
    """No unoccupied cell with exactly two walls exists on the grid."""


class GenerationFailedError(PuzzleError):
    """A randomized placement loop ran out of attempts."""

    def __init__(self, what: str, attempts: int) -> None:
        super().__init__(f"Could not place {what} after {attempts} attempts.")
        self.what = what
        self.attempts = attempts


class InvalidOperationError(PuzzleError):
    """The session cannot perform the requested operation in its current state."""
