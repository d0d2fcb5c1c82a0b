"""
Hangman app package initializer.

Re-exports the game engine and its domain types so callers can import
from hangman directly, e.g.:

    from hangman import GameEngine, build_view
"""

# PUBLIC_INTERFACE
from .engine import (
    GameEngine,
    GameError,
    GameRecord,
    GameResult,
    GameView,
    Outcome,
    Session,
    Status,
    build_view,
    compute_score,
    hidden_word,
)

__all__ = [
    "GameEngine",
    "GameError",
    "GameRecord",
    "GameResult",
    "GameView",
    "Outcome",
    "Session",
    "Status",
    "build_view",
    "compute_score",
    "hidden_word",
]
