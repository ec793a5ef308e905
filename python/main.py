#!/usr/bin/env python3
"""Ricochet Puzzle.

Usage::

    python main.py                      # random walls
    python main.py -s template          # quadrant-template walls
    python main.py --seed 7 --verbose   # reproducible board, debug log
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import typer

ROOT = Path(__file__).resolve().parent  # python/

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.engine.gamegenerator import WallStrategy  # noqa: E402

# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    strategy: WallStrategy = typer.Option(
        WallStrategy.RANDOM, "-s", "--strategy",
        help="Wall layout: quadrant templates or randomized placement.",
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed",
        help="Seed for board generation and target draws.",
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose",
        help="Log generation and round details to stderr.",
    ),
) -> None:
    """Ricochet Puzzle."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    from frontend.cli.rich.app import run

    run(strategy=strategy, seed=seed)


if __name__ == "__main__":
    app()
