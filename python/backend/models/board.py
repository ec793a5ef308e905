"""Board model for the ricochet puzzle.

The grid is ``BOARD_SIZE`` x ``BOARD_SIZE`` cells addressed as ``(row, col)``
from the top-left corner.  Walls live on cell sides and are always stored on
both cells that share the edge.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Iterator, Union

BOARD_SIZE = 16

Coord = tuple[int, int]


class Direction(StrEnum):
    UP = "up"
    RIGHT = "right"
    DOWN = "down"
    LEFT = "left"

    @property
    def clockwise_index(self) -> int:
        return _CLOCKWISE.index(self)

    @property
    def delta(self) -> Coord:
        return _DELTAS[self]

    def rotated(self, turns: int = 1) -> Direction:
        """Return the direction after *turns* clockwise quarter turns."""
        return _CLOCKWISE[(self.clockwise_index + turns) % 4]

    @property
    def opposite(self) -> Direction:
        return self.rotated(2)


_CLOCKWISE: tuple[Direction, ...] = (
    Direction.UP,
    Direction.RIGHT,
    Direction.DOWN,
    Direction.LEFT,
)

_DELTAS: dict[Direction, Coord] = {
    Direction.UP: (-1, 0),
    Direction.RIGHT: (0, 1),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
}


class Color(StrEnum):
    BLUE = "blue"
    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"


COLORS: tuple[Color, ...] = tuple(Color)

_HUB_LOW = BOARD_SIZE // 2 - 1
_HUB_HIGH = BOARD_SIZE // 2
HUB_CELLS: tuple[Coord, ...] = (
    (_HUB_LOW, _HUB_LOW),
    (_HUB_LOW, _HUB_HIGH),
    (_HUB_HIGH, _HUB_LOW),
    (_HUB_HIGH, _HUB_HIGH),
)


# -- occupancy ----------------------------------------------------------------


@dataclass(frozen=True)
class Empty:
    pass


@dataclass(frozen=True)
class Blocked:
    pass


@dataclass(frozen=True)
class OccupiedBy:
    color: Color


Occupancy = Union[Empty, Blocked, OccupiedBy]

EMPTY = Empty()
BLOCKED = Blocked()


# -- cells and grid -----------------------------------------------------------


@dataclass
class Cell:
    row: int
    col: int
    walls: set[Direction] = field(default_factory=set)
    occupancy: Occupancy = EMPTY

    @property
    def location(self) -> Coord:
        return (self.row, self.col)

    def has_wall(self, direction: Direction) -> bool:
        return direction in self.walls


def is_occupied(cell: Cell) -> bool:
    """True for piece-occupied and blocked cells alike."""
    return not isinstance(cell.occupancy, Empty)


def wall_count(cell: Cell) -> int:
    return len(cell.walls)


@dataclass
class Grid:
    """Cells of the board, with walls and occupancy."""

    size: int
    cells: list[list[Cell]]

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def cell(self, row: int, col: int) -> Cell:
        if not self.in_bounds(row, col):
            raise ValueError(f"Cell ({row}, {col}) is outside the {self.size}×{self.size} grid.")
        return self.cells[row][col]

    def at(self, location: Coord) -> Cell:
        return self.cell(*location)

    def neighbor(self, location: Coord, direction: Direction) -> Coord | None:
        """Return the adjacent coordinate in *direction*, or ``None`` if off-grid."""
        dr, dc = direction.delta
        row, col = location[0] + dr, location[1] + dc
        if not self.in_bounds(row, col):
            return None
        return (row, col)

    def iter_cells(self) -> Iterator[Cell]:
        for row in self.cells:
            yield from row

    def set_occupancy(self, location: Coord, occupancy: Occupancy) -> None:
        self.at(location).occupancy = occupancy

    def copy(self) -> Grid:
        return Grid(
            size=self.size,
            cells=[
                [Cell(c.row, c.col, set(c.walls), c.occupancy) for c in row]
                for row in self.cells
            ],
        )


def create_empty_grid(size: int = BOARD_SIZE) -> Grid:
    """Return a grid with no walls and every cell empty."""
    return Grid(
        size=size,
        cells=[[Cell(r, c) for c in range(size)] for r in range(size)],
    )


def add_wall(grid: Grid, row: int, col: int, direction: Direction) -> None:
    """Wall side *direction* of ``(row, col)`` and the mirrored side of its neighbour."""
    grid.cell(row, col).walls.add(direction)
    other = grid.neighbor((row, col), direction)
    if other is not None:
        grid.at(other).walls.add(direction.opposite)


def seal_hub(grid: Grid) -> None:
    """Block the centre 2×2 and wall every side of its four cells."""
    for row, col in HUB_CELLS:
        for direction in Direction:
            add_wall(grid, row, col, direction)
        grid.cell(row, col).occupancy = BLOCKED


# -- pieces, target, board ----------------------------------------------------


@dataclass
class Piece:
    color: Color
    location: Coord


@dataclass(frozen=True)
class Target:
    color: Color
    location: Coord


@dataclass
class Board:
    """A walled grid with one piece per colour and the current target."""

    grid: Grid
    pieces: dict[Color, Piece]
    target: Target

    # -- construction helpers -------------------------------------------------

    @classmethod
    def from_layout(
        cls,
        grid: Grid,
        pieces: dict[Color, Coord],
        target: Target,
    ) -> Board:
        """Place pieces on *grid* at explicit coordinates.

        Example::

            Board.from_layout(grid, {Color.BLUE: (0, 0), ...}, Target(Color.BLUE, (3, 4)))
        """
        missing = [color for color in COLORS if color not in pieces]
        if missing:
            raise ValueError(f"Every colour needs a piece; missing {', '.join(missing)}.")
        if len(set(pieces.values())) != len(pieces):
            raise ValueError("Two pieces cannot share a cell.")
        if not grid.in_bounds(*target.location):
            raise ValueError(f"Target {target.location} is outside the grid.")

        # Check every cell before marking any, so a rejected layout leaves the grid untouched.
        for color in COLORS:
            location = pieces[color]
            if is_occupied(grid.at(location)):
                raise ValueError(f"Cell {location} is not free for the {color} piece.")

        placed: dict[Color, Piece] = {}
        for color in COLORS:
            location = pieces[color]
            grid.set_occupancy(location, OccupiedBy(color))
            placed[color] = Piece(color=color, location=location)
        return cls(grid=grid, pieces=placed, target=target)

    # -- queries --------------------------------------------------------------

    @property
    def size(self) -> int:
        return self.grid.size

    def piece_at(self, location: Coord) -> Color | None:
        occupancy = self.grid.at(location).occupancy
        if isinstance(occupancy, OccupiedBy):
            return occupancy.color
        return None

    def layout(self) -> dict[Color, Coord]:
        return {color: piece.location for color, piece in self.pieces.items()}

    def is_target_reached(self) -> bool:
        return self.pieces[self.target.color].location == self.target.location

    def copy(self) -> Board:
        return Board(
            grid=self.grid.copy(),
            pieces={c: Piece(p.color, p.location) for c, p in self.pieces.items()},
            target=self.target,
        )
