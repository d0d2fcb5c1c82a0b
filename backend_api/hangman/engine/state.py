from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import FrozenSet, Optional, Set


class Status(str, Enum):
    ACTIVE = "ACTIVE"
    WON = "WON"
    LOST = "LOST"


class Outcome(str, Enum):
    """Result stored on a finished game record."""

    WON = "WON"
    LOST = "LOST"


class GameError(str, Enum):
    """Recoverable error kinds reported back to the caller."""

    PLAYER_NOT_FOUND = "PLAYER_NOT_FOUND"
    WORD_POOL_EXHAUSTED = "WORD_POOL_EXHAUSTED"
    NO_ACTIVE_SESSION = "NO_ACTIVE_SESSION"


ERROR_MESSAGES = {
    GameError.PLAYER_NOT_FOUND: "Player not found.",
    GameError.WORD_POOL_EXHAUSTED: "All words have already been used.",
    GameError.NO_ACTIVE_SESSION: "Player has no game in progress.",
}


# PUBLIC_INTERFACE
@dataclass
class Session:
    """An in-progress attempt by one player at one word.

    Fields:
    - player_id: owning player reference
    - word_id / word_text: the word being guessed (never mutated here)
    - attempted_letters: uppercase characters guessed so far
    - remaining_attempts: lives left, only ever decremented
    - started_at: creation time
    - id: store identifier, None until saved
    """

    player_id: int
    word_id: int
    word_text: str
    remaining_attempts: int
    started_at: datetime
    attempted_letters: Set[str] = field(default_factory=set)
    id: Optional[int] = None


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class GameRecord:
    """Immutable history entry written when a session resolves."""

    player_id: int
    word_id: Optional[int]
    word_text: str
    outcome: Outcome
    score: int
    played_at: datetime
    id: Optional[int] = None
    player_name: Optional[str] = None


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class GameView:
    """What a player sees after starting or guessing."""

    hidden_word: str
    attempted_letters: FrozenSet[str]
    remaining_attempts: int
    is_complete: bool
    score: int
    status: Status = Status.ACTIVE

    @property
    def is_terminal(self) -> bool:
        return self.status is not Status.ACTIVE


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class GameResult:
    """Either a view or an error kind, never both."""

    view: Optional[GameView] = None
    error: Optional[GameError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str:
        return ERROR_MESSAGES.get(self.error, "") if self.error else ""

    @classmethod
    def success(cls, view: GameView) -> "GameResult":
        return cls(view=view)

    @classmethod
    def failure(cls, error: GameError) -> "GameResult":
        return cls(error=error)
