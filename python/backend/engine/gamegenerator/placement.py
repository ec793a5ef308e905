"""Random placement of pieces and targets on a walled grid."""

from __future__ import annotations

import logging
import random

from backend.errors import GenerationFailedError, NoLegalTargetError
from backend.models.board import (
    COLORS,
    Cell,
    Color,
    Coord,
    Grid,
    OccupiedBy,
    Piece,
    Target,
    is_occupied,
    wall_count,
)

logger = logging.getLogger(__name__)

# Upper bound for every rejection-sampling loop during generation.
MAX_PLACEMENT_ATTEMPTS = 10_000


def sample_free_cell(grid: Grid, rng: random.Random) -> Coord:
    """Return a uniformly sampled cell that is neither blocked nor taken."""
    for _ in range(MAX_PLACEMENT_ATTEMPTS):
        row = rng.randrange(grid.size)
        col = rng.randrange(grid.size)
        if not is_occupied(grid.cell(row, col)):
            return (row, col)

    logger.warning("No free cell found in %d samples", MAX_PLACEMENT_ATTEMPTS)
    raise GenerationFailedError("a free cell", MAX_PLACEMENT_ATTEMPTS)


def place_pieces(grid: Grid, rng: random.Random) -> dict[Color, Piece]:
    """Put one piece of every colour on a free cell, marking each as it lands."""
    pieces: dict[Color, Piece] = {}
    for color in COLORS:
        location = sample_free_cell(grid, rng)
        grid.set_occupancy(location, OccupiedBy(color))
        pieces[color] = Piece(color=color, location=location)
    return pieces


def is_valid_target_cell(cell: Cell) -> bool:
    """A pocket: unoccupied, with exactly two walls."""
    return not is_occupied(cell) and wall_count(cell) == 2


def target_candidates(grid: Grid) -> list[Coord]:
    return [cell.location for cell in grid.iter_cells() if is_valid_target_cell(cell)]


def select_target(grid: Grid, rng: random.Random, fallback: bool = False) -> Target:
    """Pick a target pocket and a colour for it.

    With *fallback* set, a grid without pockets gets a target on any free
    cell instead of raising ``NoLegalTargetError``.
    """
    candidates = target_candidates(grid)
    if candidates:
        location = candidates[rng.randrange(len(candidates))]
    elif fallback:
        logger.debug("No pocket cells; falling back to a free cell")
        location = sample_free_cell(grid, rng)
    else:
        raise NoLegalTargetError("No unoccupied cell has exactly two walls.")

    color = COLORS[rng.randrange(len(COLORS))]
    return Target(color=color, location=location)
