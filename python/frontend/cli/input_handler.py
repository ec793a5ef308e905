"""Cross-platform single-keypress reader for the CLI frontend.

Handles arrow keys, WASD, and the round-control keys without requiring
Enter.  Works on macOS / Linux (tty+termios) and Windows (msvcrt).
"""

from __future__ import annotations

import os
import sys


# -- low-level character readers -----------------------------------------------


def _getch_unix() -> str:
    import termios
    import tty

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        ch = sys.stdin.read(1)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)
    return ch


def _getch_windows() -> str:
    import msvcrt  # type: ignore[import-not-found]

    return msvcrt.getch().decode("utf-8", errors="ignore")


_getch = _getch_windows if os.name == "nt" else _getch_unix


# -- shared key mapping --------------------------------------------------------

_KEY_MAP: dict[str, str] = {
    "w": "up",
    "W": "up",
    "s": "down",
    "S": "down",
    "a": "left",
    "A": "left",
    "d": "right",
    "D": "right",
    "1": "blue",
    "2": "red",
    "3": "green",
    "4": "yellow",
    "u": "undo",
    "U": "undo",
    "\x7f": "undo",  # Backspace
    "r": "reset",
    "R": "reset",
    "n": "next",
    "N": "next",
    "g": "generate",
    "G": "generate",
    "q": "quit",
    "Q": "quit",
    "\x03": "quit",  # Ctrl-C
    "h": "help",
    "?": "help",
    " ": "deselect",
}

_ARROW_MAP: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
}


def _resolve(ch: str) -> str:
    """Map a raw character to its action string."""
    return _KEY_MAP.get(ch, ch if ch.isprintable() else "")


# -- public API ----------------------------------------------------------------


def get_key() -> str:
    """Read a single keypress and return a normalised action string.

    Blocks until a key is pressed.

    Possible return values:
        "up", "down", "left", "right"      : slide the selected piece
        "blue", "red", "green", "yellow"   : select a piece (1-4)
        "deselect"                         : space
        "undo"                             : u / Backspace
        "reset"                            : r (back to the round start)
        "next"                             : n (next round)
        "generate"                         : g (new board)
        "quit"                             : q / Ctrl-C / Escape
        "help"                             : h / ?
        "<char>"                           : unmapped printable char
        ""                                 : unrecognised key
    """
    ch = _getch()

    # Arrow keys (Unix escape sequences: ESC [ A/B/C/D)
    if ch == "\x1b":
        ch2 = _getch()
        if ch2 == "[":
            ch3 = _getch()
            return _ARROW_MAP.get(ch3, "")
        return "quit"  # bare Escape

    return _resolve(ch)
