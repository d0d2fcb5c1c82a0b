"""
Hangman game engine.

Exports:
- GameEngine, the session state machine
- rule helpers (hidden_word, compute_score, build_view, register_guess)
- domain types (Session, GameRecord, GameView, GameResult, GameError)

These modules are framework-agnostic: storage is reached only through the
protocols in ``ports`` so views and services can reuse them without
importing Django at module import time.
"""

from .game_engine import GameEngine
from .rules import (
    COMPLETE_WORD_POINTS,
    MAX_ATTEMPTS,
    POINTS_PER_LETTER,
    build_view,
    compute_score,
    hidden_word,
    normalize_letter,
    register_guess,
)
from .state import GameError, GameRecord, GameResult, GameView, Outcome, Session, Status

__all__ = [
    "GameEngine",
    "COMPLETE_WORD_POINTS",
    "MAX_ATTEMPTS",
    "POINTS_PER_LETTER",
    "build_view",
    "compute_score",
    "hidden_word",
    "normalize_letter",
    "register_guess",
    "GameError",
    "GameRecord",
    "GameResult",
    "GameView",
    "Outcome",
    "Session",
    "Status",
]
