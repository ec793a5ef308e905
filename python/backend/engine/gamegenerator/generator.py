"""Generates ricochet puzzle boards."""

from __future__ import annotations

import logging
import random
from enum import StrEnum

from backend.engine.gamegenerator.placement import place_pieces, select_target
from backend.engine.gamegenerator.walls import random_walls, template_walls
from backend.models.board import Board, Grid, create_empty_grid, seal_hub

logger = logging.getLogger(__name__)


class WallStrategy(StrEnum):
    TEMPLATE = "template"
    RANDOM = "random"


class GameGenerator:
    """Builds boards: sealed hub, walls, pieces, then a target."""

    @staticmethod
    def sealed() -> Grid:
        """Return an empty grid with only the hub blocked and walled."""
        grid = create_empty_grid()
        seal_hub(grid)
        return grid

    @staticmethod
    def walled(strategy: WallStrategy | str, rng: random.Random) -> Grid:
        """Return a sealed grid with walls laid out by *strategy*."""
        try:
            strategy = WallStrategy(strategy)
        except ValueError:
            raise ValueError(
                f"Unknown wall strategy {strategy!r}; "
                f"expected one of {', '.join(WallStrategy)}."
            ) from None

        grid = GameGenerator.sealed()
        if strategy is WallStrategy.TEMPLATE:
            template_walls(grid, rng)
        else:
            random_walls(grid, rng)
        return grid

    @staticmethod
    def generate(
        strategy: WallStrategy | str = WallStrategy.RANDOM,
        rng: random.Random | None = None,
        fallback: bool = False,
    ) -> Board:
        """Return a new board with four pieces and a target.

        Raises ``NoLegalTargetError`` when the layout has no pocket cell
        (unless *fallback* is set) and ``GenerationFailedError`` when a
        sampling loop runs out of attempts.
        """
        rng = rng or random.Random()
        grid = GameGenerator.walled(strategy, rng)
        pieces = place_pieces(grid, rng)
        target = select_target(grid, rng, fallback=fallback)

        logger.debug(
            "Generated %s board: pieces %s, target %s at %s",
            WallStrategy(strategy),
            {str(c): p.location for c, p in pieces.items()},
            target.color,
            target.location,
        )
        return Board(grid=grid, pieces=pieces, target=target)


def generate_board(
    strategy: WallStrategy | str = WallStrategy.RANDOM,
    rng: random.Random | None = None,
    fallback: bool = False,
) -> Board:
    return GameGenerator.generate(strategy, rng, fallback)
