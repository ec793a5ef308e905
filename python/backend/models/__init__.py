from backend.models.board import (
    BOARD_SIZE,
    COLORS,
    HUB_CELLS,
    Board,
    Cell,
    Color,
    Coord,
    Direction,
    Grid,
    Piece,
    Target,
)
from backend.models.move import Move

__all__ = [
    "BOARD_SIZE",
    "COLORS",
    "HUB_CELLS",
    "Board",
    "Cell",
    "Color",
    "Coord",
    "Direction",
    "Grid",
    "Move",
    "Piece",
    "Target",
]
