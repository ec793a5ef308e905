from backend.engine.gamegenerator.generator import (
    GameGenerator,
    WallStrategy,
    generate_board,
)

__all__ = ["GameGenerator", "WallStrategy", "generate_board"]
