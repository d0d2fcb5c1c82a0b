from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, List, Optional

from .ports import GameHistoryStore, PlayerLike, PlayerStore, SessionStore, WordLike, WordStore
from .rules import MAX_ATTEMPTS, build_view, normalize_letter, register_guess
from .state import GameError, GameRecord, GameResult, GameView, Outcome, Session, Status

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# PUBLIC_INTERFACE
@dataclass
class GameEngine:
    """Hangman session state machine.

    The engine owns the rules only; storage goes through the injected
    stores and time through ``clock``. Callers are expected to run each
    operation inside a single store transaction.
    """

    players: PlayerStore
    words: WordStore
    sessions: SessionStore
    history: GameHistoryStore
    max_attempts: int = MAX_ATTEMPTS
    clock: Callable[[], datetime] = field(default=_utcnow)

    # PUBLIC_INTERFACE
    def open_session(self, player: PlayerLike, word: WordLike) -> Optional[Session]:
        """Return the active session for (player, word), creating it if needed.

        A new session consumes the word: it is marked used even if the game
        is later abandoned. Returns None when the word was claimed by another
        start in the meantime.
        """
        existing = self.sessions.find_active_by_player_and_word(player.id, word.id)
        if existing is not None:
            logger.info("Resuming session %s for player=%s word=%s", existing.id, player.id, word.id)
            return existing

        if not self.words.mark_used(word):
            logger.info("Word %s already taken, player=%s must pick another", word.id, player.id)
            return None
        session = Session(
            player_id=player.id,
            word_id=word.id,
            word_text=word.text,
            remaining_attempts=self.max_attempts,
            started_at=self.clock(),
        )
        session = self.sessions.save(session)
        logger.info("Started session %s for player=%s word=%s", session.id, player.id, word.id)
        return session

    # PUBLIC_INTERFACE
    def start_session(self, player_id: int) -> GameResult:
        """Start (or resume) a game for the player on a random unused word."""
        player = self.players.find_by_id(player_id)
        if player is None:
            return self._fail(GameError.PLAYER_NOT_FOUND, player_id)

        # A lost claim leaves the word used, so the pool shrinks every pass.
        while True:
            word = self.words.find_unused_random()
            if word is None:
                return self._fail(GameError.WORD_POOL_EXHAUSTED, player_id)
            session = self.open_session(player, word)
            if session is not None:
                return GameResult.success(build_view(session))

    # PUBLIC_INTERFACE
    def apply_guess(self, player_id: int, letter: str) -> GameResult:
        """Apply one letter to the player's most recently started session.

        Both the letter registration and the life decrement happen before
        terminal detection, so a guess that completes the word on the last
        life is a win.
        """
        player = self.players.find_by_id(player_id)
        if player is None:
            return self._fail(GameError.PLAYER_NOT_FOUND, player_id)

        active = self.sessions.find_all_active_by_player(player_id)
        if not active:
            return self._fail(GameError.NO_ACTIVE_SESSION, player_id)
        session = max(active, key=lambda s: s.started_at)

        session, changed = register_guess(session, normalize_letter(letter))
        view = build_view(session)
        if not changed:
            return GameResult.success(view)

        if view.is_terminal:
            self._finish(player, session, view)
        else:
            self.sessions.save(session)
        return GameResult.success(view)

    def games_for_player(self, player_id: int) -> List[GameRecord]:
        return self.history.find_by_player(player_id)

    def all_games(self) -> List[GameRecord]:
        return self.history.find_all()

    def _finish(self, player: PlayerLike, session: Session, view: GameView) -> GameRecord:
        outcome = Outcome.WON if view.status is Status.WON else Outcome.LOST
        record = self.history.save(
            GameRecord(
                player_id=player.id,
                player_name=player.name,
                word_id=session.word_id,
                word_text=session.word_text,
                outcome=outcome,
                score=view.score,
                played_at=self.clock(),
            )
        )
        self.sessions.delete(session)
        logger.info(
            "Session %s finished: player=%s outcome=%s score=%s",
            session.id,
            player.id,
            outcome.value,
            view.score,
        )
        return record

    @staticmethod
    def _fail(error: GameError, player_id: int) -> GameResult:
        logger.warning("Game operation failed for player=%s: %s", player_id, error.value)
        return GameResult.failure(error)
