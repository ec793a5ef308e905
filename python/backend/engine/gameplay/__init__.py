from backend.engine.gameplay.game import Phase, Session
from backend.engine.gameplay.slide import (
    apply_move,
    destinations,
    invert_move,
    max_travel,
    slide_destination,
)

__all__ = [
    "Phase",
    "Session",
    "apply_move",
    "destinations",
    "invert_move",
    "max_travel",
    "slide_destination",
]
