from __future__ import annotations

from typing import List, Optional, Protocol, runtime_checkable

from .state import GameRecord, Session


# Light-weight protocols so the engine never imports Django models.
@runtime_checkable
class PlayerLike(Protocol):
    id: int
    name: str


@runtime_checkable
class WordLike(Protocol):
    id: int
    text: str
    used: bool


class PlayerStore(Protocol):
    def find_by_id(self, player_id: int) -> Optional[PlayerLike]: ...


class WordStore(Protocol):
    def find_unused_random(self) -> Optional[WordLike]: ...

    def mark_used(self, word: WordLike) -> bool:
        """Flag the word used; False if it was already used."""
        ...


class SessionStore(Protocol):
    def find_active_by_player_and_word(self, player_id: int, word_id: int) -> Optional[Session]: ...

    def find_all_active_by_player(self, player_id: int) -> List[Session]:
        """Active sessions of a player, most recently started first."""
        ...

    def save(self, session: Session) -> Session: ...

    def delete(self, session: Session) -> None: ...


class GameHistoryStore(Protocol):
    def save(self, record: GameRecord) -> GameRecord: ...

    def find_by_player(self, player_id: int) -> List[GameRecord]: ...

    def find_all(self) -> List[GameRecord]: ...
