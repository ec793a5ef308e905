"""A single recorded slide."""

from __future__ import annotations

from dataclasses import dataclass

from backend.models.board import Color, Coord


@dataclass(frozen=True)
class Move:
    color: Color
    from_pos: Coord
    to_pos: Coord

    def inverted(self) -> Move:
        return Move(color=self.color, from_pos=self.to_pos, to_pos=self.from_pos)
