"""Slide rules: how far a piece travels and how moves are applied."""

from __future__ import annotations

from backend.models.board import (
    EMPTY,
    Board,
    Color,
    Coord,
    Direction,
    OccupiedBy,
    is_occupied,
)
from backend.models.move import Move


def max_travel(board: Board, location: Coord, direction: Direction) -> int:
    """Return how many cells a piece at *location* slides in *direction*.

    The piece stops before the first step that would leave the grid, cross
    a wall, or enter an occupied cell.  ``0`` means it cannot move at all.
    """
    grid = board.grid
    steps = 0
    current = location
    for _ in range(grid.size):
        nxt = grid.neighbor(current, direction)
        if nxt is None:
            break
        cell = grid.at(nxt)
        if cell.has_wall(direction.opposite) or is_occupied(cell):
            break
        current = nxt
        steps += 1
    return steps


def slide_destination(board: Board, location: Coord, direction: Direction) -> Coord:
    distance = max_travel(board, location, direction)
    dr, dc = direction.delta
    return (location[0] + dr * distance, location[1] + dc * distance)


def destinations(board: Board, color: Color) -> dict[Direction, Coord]:
    """Stopping cells for the *color* piece, keyed by direction; stuck directions are omitted."""
    origin = board.pieces[color].location
    result: dict[Direction, Coord] = {}
    for direction in Direction:
        stop = slide_destination(board, origin, direction)
        if stop != origin:
            result[direction] = stop
    return result


def apply_move(board: Board, move: Move) -> None:
    """Jump the piece straight from ``move.from_pos`` to ``move.to_pos``."""
    piece = board.pieces[move.color]
    if piece.location != move.from_pos:
        raise ValueError(
            f"The {move.color} piece is at {piece.location}, not {move.from_pos}."
        )
    if move.to_pos != move.from_pos and is_occupied(board.grid.at(move.to_pos)):
        raise ValueError(f"Cell {move.to_pos} is occupied.")

    board.grid.set_occupancy(move.from_pos, EMPTY)
    board.grid.set_occupancy(move.to_pos, OccupiedBy(move.color))
    piece.location = move.to_pos


def invert_move(move: Move) -> Move:
    return move.inverted()
