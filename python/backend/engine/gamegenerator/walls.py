"""Wall layouts for a freshly sealed grid.

Two strategies are available.  ``template_walls`` composes four fixed
quadrant layouts, rotating each into the corner it was dealt.
``random_walls`` places edge walls and L-shaped fixtures by rejection
sampling.  Both expect the hub to be sealed already.
"""

from __future__ import annotations

import logging
import random

from backend.engine.gamegenerator.placement import MAX_PLACEMENT_ATTEMPTS
from backend.errors import GenerationFailedError
from backend.models.board import Direction, Grid, add_wall, wall_count

logger = logging.getLogger(__name__)

QUADRANT_SIZE = 8
EDGE_WALL_SPAN = 6
L_FIXTURES_PER_QUADRANT = 4

Placement = tuple[int, int, Direction]

U, R, D, L = Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT

# Authored for the upper-left quadrant; the hub corner is local (7, 7).
QUADRANT_TEMPLATES: tuple[tuple[Placement, ...], ...] = (
    (
        (0, 3, R), (4, 0, D),
        (1, 5, U), (1, 5, R),
        (3, 2, D), (3, 2, L),
        (5, 6, R), (5, 6, D),
        (6, 3, L), (6, 3, U),
    ),
    (
        (0, 5, R), (2, 0, D),
        (2, 3, R), (2, 3, D),
        (4, 6, U), (4, 6, R),
        (5, 1, D), (5, 1, L),
        (6, 4, L), (6, 4, U),
    ),
    (
        (0, 2, R), (5, 0, D),
        (1, 4, L), (1, 4, U),
        (3, 6, D), (3, 6, L),
        (4, 2, R), (4, 2, D),
        (6, 5, U), (6, 5, R),
    ),
    (
        (0, 4, R), (3, 0, D),
        (1, 2, D), (1, 2, L),
        (2, 6, L), (2, 6, U),
        (5, 3, U), (5, 3, R),
        (5, 5, R), (5, 5, D),
    ),
)

# (lower half, right half) for corners in clockwise order from the top-left.
_CORNERS: tuple[tuple[int, int], ...] = ((0, 0), (0, 1), (1, 1), (1, 0))


# -- quadrant templates -------------------------------------------------------


def rotate_placement(placement: Placement, turns: int, half: int = QUADRANT_SIZE) -> Placement:
    """Rotate a quadrant-local wall *turns* quarter turns clockwise."""
    row, col, direction = placement
    for _ in range(turns % 4):
        row, col = col, half - 1 - row
    return row, col, direction.rotated(turns)


def place_in_corner(placement: Placement, corner: int, half: int = QUADRANT_SIZE) -> Placement:
    """Map a template wall into absolute board coordinates for *corner* (0-3)."""
    row, col, direction = rotate_placement(placement, corner, half)
    lower, right = _CORNERS[corner]
    return row + lower * half, col + right * half, direction


def template_walls(grid: Grid, rng: random.Random) -> list[int]:
    """Deal the four templates to the four corners and add their walls.

    Returns the template index used for each corner.
    """
    half = grid.size // 2
    order = list(range(len(QUADRANT_TEMPLATES)))
    rng.shuffle(order)

    for corner, template_index in enumerate(order):
        for placement in QUADRANT_TEMPLATES[template_index]:
            row, col, direction = place_in_corner(placement, corner, half)
            add_wall(grid, row, col, direction)

    logger.debug("Quadrant templates dealt as %s", order)
    return order


# -- randomized layout --------------------------------------------------------


def random_walls(grid: Grid, rng: random.Random) -> None:
    """Add two edge walls and four L fixtures to every quadrant."""
    half = grid.size // 2
    last = grid.size - 1

    for q_row in (0, 1):
        for q_col in (0, 1):
            row_offset = rng.randrange(EDGE_WALL_SPAN) + 1 + q_row * half
            col_offset = rng.randrange(EDGE_WALL_SPAN) + 1 + q_col * half
            add_wall(grid, row_offset - 1, q_col * last, Direction.DOWN)
            add_wall(grid, q_row * last, col_offset - 1, Direction.RIGHT)

    for q_row in (0, 1):
        for q_col in (0, 1):
            for _ in range(L_FIXTURES_PER_QUADRANT):
                _place_l_fixture(grid, rng, q_row, q_col)


def _place_l_fixture(grid: Grid, rng: random.Random, q_row: int, q_col: int) -> None:
    half = grid.size // 2
    directions = tuple(Direction)

    for attempt in range(1, MAX_PLACEMENT_ATTEMPTS + 1):
        row = q_row * half + rng.randrange(half - 1) + 1 - q_row
        col = q_col * half + rng.randrange(half - 1) + 1 - q_col
        direction = directions[rng.randrange(4)]

        if _fits_l_fixture(grid, row, col):
            add_wall(grid, row, col, direction)
            add_wall(grid, row, col, direction.rotated())
            logger.debug(
                "L fixture at (%d, %d) facing %s after %d attempt(s)",
                row, col, direction, attempt,
            )
            return

    logger.warning("Gave up on an L fixture in quadrant (%d, %d)", q_row, q_col)
    raise GenerationFailedError(
        f"an L fixture in quadrant ({q_row}, {q_col})", MAX_PLACEMENT_ATTEMPTS
    )


def _fits_l_fixture(grid: Grid, row: int, col: int) -> bool:
    """A fixture needs a bare cell whose four neighbours are bare too."""
    if wall_count(grid.cell(row, col)):
        return False
    for direction in Direction:
        other = grid.neighbor((row, col), direction)
        if other is not None and wall_count(grid.at(other)):
            return False
    return True
