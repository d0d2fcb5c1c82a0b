"""Django ORM implementations of the engine's storage protocols.

Rows are converted to the engine's dataclasses on the way out and back
on the way in, so the engine never sees a model instance for sessions or
history records. Locking queries assume the caller holds a transaction.
"""
from __future__ import annotations

from typing import List, Optional

from django.utils import timezone

from .engine.state import GameRecord, Outcome, Session
from .models import Game, GameSession, Player, Word


def _session_from_row(row: GameSession) -> Session:
    return Session(
        id=row.pk,
        player_id=row.player_id,
        word_id=row.word_id,
        word_text=row.word.text,
        attempted_letters=set(row.attempted_letters or []),
        remaining_attempts=row.remaining_attempts,
        started_at=row.started_at,
    )


def _record_from_row(row: Game) -> GameRecord:
    return GameRecord(
        id=row.pk,
        player_id=row.player_id,
        player_name=row.player.name,
        word_id=row.word_id,
        word_text=row.word_text,
        outcome=Outcome(row.outcome),
        score=row.score,
        played_at=row.played_at,
    )


# PUBLIC_INTERFACE
class OrmPlayerStore:
    def find_by_id(self, player_id: int) -> Optional[Player]:
        return Player.objects.filter(pk=player_id).first()


# PUBLIC_INTERFACE
class OrmWordStore:
    """Hands out unused words.

    Candidate rows are locked with SKIP LOCKED where the backend supports
    it, so two concurrent starts never pick the same word.
    """

    def find_unused_random(self) -> Optional[Word]:
        return (
            Word.objects.select_for_update(skip_locked=True)
            .filter(used=False)
            .order_by("?")
            .first()
        )

    def mark_used(self, word: Word) -> bool:
        """Claim the word. Returns False when another start already took it."""
        updated = Word.objects.filter(pk=word.id, used=False).update(used=True)
        word.used = True
        return bool(updated)


# PUBLIC_INTERFACE
class OrmSessionStore:
    def find_active_by_player_and_word(self, player_id: int, word_id: int) -> Optional[Session]:
        row = (
            GameSession.objects.select_related("word")
            .filter(player_id=player_id, word_id=word_id)
            .first()
        )
        return _session_from_row(row) if row else None

    def find_all_active_by_player(self, player_id: int) -> List[Session]:
        rows = (
            GameSession.objects.select_for_update(of=("self",))
            .select_related("word")
            .filter(player_id=player_id)
            .order_by("-started_at", "-id")
        )
        return [_session_from_row(row) for row in rows]

    def save(self, session: Session) -> Session:
        letters = sorted(session.attempted_letters)
        if session.id is None:
            row = GameSession.objects.create(
                player_id=session.player_id,
                word_id=session.word_id,
                attempted_letters=letters,
                remaining_attempts=session.remaining_attempts,
                started_at=session.started_at,
            )
            session.id = row.pk
        else:
            GameSession.objects.filter(pk=session.id).update(
                attempted_letters=letters,
                remaining_attempts=session.remaining_attempts,
                updated_at=timezone.now(),
            )
        return session

    def delete(self, session: Session) -> None:
        GameSession.objects.filter(pk=session.id).delete()


# PUBLIC_INTERFACE
class OrmGameHistoryStore:
    def save(self, record: GameRecord) -> GameRecord:
        row = Game.objects.create(
            player_id=record.player_id,
            word_id=record.word_id,
            word_text=record.word_text,
            outcome=record.outcome.value,
            score=record.score,
            played_at=record.played_at,
        )
        return _record_from_row(row)

    def find_by_player(self, player_id: int) -> List[GameRecord]:
        return [_record_from_row(row) for row in Game.objects.select_related("player").filter(player_id=player_id)]

    def find_all(self) -> List[GameRecord]:
        return [_record_from_row(row) for row in Game.objects.select_related("player")]
