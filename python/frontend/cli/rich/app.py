"""Rich terminal frontend: draws the maze and drives a play session.

Uses the ``rich`` library for styled output and the shared single-key
input handler.  All puzzle rules live in the backend; this module only
renders state and forwards key presses to the session.
"""

from __future__ import annotations

import logging
import random

from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from backend.engine.gamegenerator import WallStrategy
from backend.engine.gameplay import Session, destinations
from backend.errors import (
    GenerationFailedError,
    InvalidOperationError,
    NoLegalTargetError,
    PuzzleError,
)
from backend.models.board import Blocked, Board, Cell, Color, Coord, Direction, OccupiedBy
from backend.models.move import Move
from frontend.cli.input_handler import get_key

logger = logging.getLogger(__name__)

console = Console()

MAX_GENERATION_TRIES = 5

_PIECE_STYLE: dict[Color, str] = {
    Color.BLUE: "bold blue",
    Color.RED: "bold red",
    Color.GREEN: "bold green",
    Color.YELLOW: "bold yellow",
}

_DIRECTIONS: dict[str, Direction] = {d.value: d for d in Direction}
_COLORS: dict[str, Color] = {c.value: c for c in Color}

_WALL = "bold white"


# -- board rendering ----------------------------------------------------------


def _cell_glyph(board: Board, cell: Cell, reach: set[Coord]) -> tuple[str, str]:
    """Return the three-character body of a cell and its style."""
    occupancy = cell.occupancy
    target = board.target
    if isinstance(occupancy, Blocked):
        return "▓▓▓", "dim"
    if isinstance(occupancy, OccupiedBy):
        style = _PIECE_STYLE[occupancy.color]
        if cell.location == target.location:
            return "(●)", style
        return " ● ", style
    if cell.location == target.location:
        return " ◆ ", _PIECE_STYLE[target.color]
    if cell.location in reach:
        return " · ", "cyan"
    return "   ", ""


def _render_board(board: Board, highlight: dict[Direction, Coord] | None = None) -> Text:
    """Return the maze as text: walls as box lines, pieces as coloured dots.

    Cells in *highlight* (stopping cells of the selected piece) are marked.
    """
    grid = board.grid
    reach = set(highlight.values()) if highlight else set()
    text = Text()

    for r in range(grid.size):
        text.append("+", style="dim")
        for c in range(grid.size):
            walled = r == 0 or grid.cell(r, c).has_wall(Direction.UP)
            text.append("───" if walled else "   ", style=_WALL)
            text.append("+", style="dim")
        text.append("\n")

        for c in range(grid.size):
            cell = grid.cell(r, c)
            walled = c == 0 or cell.has_wall(Direction.LEFT)
            text.append("│" if walled else " ", style=_WALL)
            text.append(*_cell_glyph(board, cell, reach))
        text.append("│\n", style=_WALL)

    text.append("+", style="dim")
    for _ in range(grid.size):
        text.append("───", style=_WALL)
        text.append("+", style="dim")
    return text


def _render_stats(session: Session) -> Text:
    target = session.target
    stats = Text()
    stats.append("  Target: ", style="dim")
    stats.append(f"{target.color} ◆ {target.location}", style=_PIECE_STYLE[target.color])
    stats.append("    Selected: ", style="dim")
    if session.active_color is None:
        stats.append("none", style="dim")
    else:
        stats.append(str(session.active_color), style=_PIECE_STYLE[session.active_color])
    stats.append("    Moves: ", style="dim")
    stats.append(str(session.move_count), style="bold yellow")
    stats.append("    Best: ", style="dim")
    best = session.best_length
    stats.append("-" if best is None else str(best), style="bold green")
    return stats


def _render_controls() -> Text:
    controls = Text()
    controls.append("  1-4", style="bold cyan")
    controls.append("  select   ", style="dim")
    controls.append("↑↓←→", style="bold cyan")
    controls.append(" / ", style="dim")
    controls.append("WASD", style="bold cyan")
    controls.append("  slide   ", style="dim")
    controls.append("U", style="bold cyan")
    controls.append("  undo   ", style="dim")
    controls.append("R", style="bold cyan")
    controls.append("  reset   ", style="dim")
    controls.append("N", style="bold cyan")
    controls.append("  next round   ", style="dim")
    controls.append("G", style="bold cyan")
    controls.append("  new board   ", style="dim")
    controls.append("Q", style="bold cyan")
    controls.append("  quit", style="dim")
    return controls


# -- game screen --------------------------------------------------------------


def _draw_game(session: Session, status: str = "") -> None:
    console.clear()

    highlight = None
    if session.active_color is not None:
        highlight = destinations(session.board, session.active_color)

    panel = Panel(
        Align.center(_render_board(session.board, highlight)),
        title="[bold cyan]R I C O C H E T[/bold cyan]",
        border_style="bright_blue",
        padding=(0, 1),
    )

    parts = [Align.center(panel), Align.center(_render_stats(session))]
    if status:
        parts.append(Align.center(Text.from_markup(f"  {status}")))
    parts.append(Align.center(_render_controls()))

    console.print()
    console.print(Group(*parts))


# -- session helpers ----------------------------------------------------------


def _new_session(strategy: WallStrategy, rng: random.Random) -> Session:
    """Generate a playable board, retrying when generation fails."""
    for attempt in range(1, MAX_GENERATION_TRIES + 1):
        try:
            return Session.generate(strategy, rng)
        except PuzzleError as exc:
            logger.warning("Board generation attempt %d failed: %s", attempt, exc)
    raise GenerationFailedError("a playable board", MAX_GENERATION_TRIES)


def _slide(session: Session, direction: Direction) -> str:
    """Forward a slide to the session; return a status line for the result."""
    try:
        move = session.request_slide(direction)
    except InvalidOperationError as exc:
        return f"[yellow]{exc}[/yellow]"

    if move is None:
        return "[dim]That piece cannot move that way.[/dim]"
    if _hits_target(session, move):
        return (
            f"[bold green]★ Target reached in {session.move_count} moves![/bold green]"
            "  [dim]N for the next round, U/R to look for a shorter route.[/dim]"
        )
    return ""


def _hits_target(session: Session, move: Move) -> bool:
    target = session.target
    return move.color == target.color and move.to_pos == target.location


def _next_round(session: Session) -> str:
    try:
        session.new_round()
    except NoLegalTargetError:
        return "[red]No free pocket left for a target.[/red]  [dim]Press G for a new board.[/dim]"
    return "[cyan]New round![/cyan]"


def _regenerate(
    session: Session, strategy: WallStrategy, rng: random.Random
) -> tuple[Session, str]:
    """Swap in a new board; on failure keep *session* and report why."""
    try:
        fresh = _new_session(strategy, rng)
    except PuzzleError as exc:
        logger.error("Keeping the current board: %s", exc)
        return session, f"[red]{exc}[/red]  [dim]Keeping the current board.[/dim]"
    return fresh, "[yellow]New board![/yellow]"


# -- game loop ----------------------------------------------------------------


def _play(strategy: WallStrategy, rng: random.Random) -> None:
    session = _new_session(strategy, rng)
    status = ""

    while True:
        _draw_game(session, status)
        status = ""
        key = get_key()

        if key in _DIRECTIONS:
            status = _slide(session, _DIRECTIONS[key])
        elif key in _COLORS:
            session.select_color(_COLORS[key])
        elif key == "deselect":
            session.deselect()
        elif key == "undo":
            if session.undo_last() is None:
                status = "[dim]Nothing to undo.[/dim]"
        elif key == "reset":
            session.reset_round()
            status = "[yellow]Back to the start of the round.[/yellow]"
        elif key == "next":
            status = _next_round(session)
        elif key == "generate":
            session, status = _regenerate(session, strategy, rng)
        elif key == "help":
            status = (
                "[dim]Get the[/dim] [bold]target colour[/bold] [dim]piece onto"
                " the[/dim] ◆[dim]. Pieces slide until a wall or another piece"
                " stops them.[/dim]"
            )
        elif key == "quit":
            console.clear()
            console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))
            return


# -- public entry point -------------------------------------------------------


def run(strategy: WallStrategy = WallStrategy.RANDOM, seed: int | None = None) -> None:
    """Launch the Rich CLI on a new board."""
    _play(WallStrategy(strategy), random.Random(seed))
