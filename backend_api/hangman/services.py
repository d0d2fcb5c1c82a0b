from __future__ import annotations

import logging
from typing import List, Optional

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from .engine import MAX_ATTEMPTS, GameEngine, GameRecord, GameResult
from .models import Player
from .stores import OrmGameHistoryStore, OrmPlayerStore, OrmSessionStore, OrmWordStore

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
def build_engine() -> GameEngine:
    """Wire a GameEngine to the ORM stores and project settings."""
    return GameEngine(
        players=OrmPlayerStore(),
        words=OrmWordStore(),
        sessions=OrmSessionStore(),
        history=OrmGameHistoryStore(),
        max_attempts=getattr(settings, "HANGMAN_MAX_ATTEMPTS", MAX_ATTEMPTS),
        clock=timezone.now,
    )


# PUBLIC_INTERFACE
def start_game(player_id: int) -> GameResult:
    """Start or resume a game for the player as one transaction."""
    with transaction.atomic():
        return build_engine().start_session(player_id)


# PUBLIC_INTERFACE
def submit_guess(player_id: int, letter: str) -> GameResult:
    """Apply a guess as one transaction.

    The player's session rows are locked for the duration, so overlapping
    guesses from the same player are applied one after the other.
    """
    with transaction.atomic():
        return build_engine().apply_guess(player_id, letter)


# PUBLIC_INTERFACE
def games_for_player(player_id: int) -> List[GameRecord]:
    """Finished games of one player, newest first."""
    return build_engine().games_for_player(player_id)


# PUBLIC_INTERFACE
def all_games() -> List[GameRecord]:
    """Every finished game, newest first."""
    return build_engine().all_games()


# PUBLIC_INTERFACE
def find_player(player_id: int) -> Optional[Player]:
    return OrmPlayerStore().find_by_id(player_id)


def list_players() -> List[Player]:
    return list(Player.objects.all())


# PUBLIC_INTERFACE
def register_player(name: str) -> Player:
    """Create a player with the given display name."""
    player = Player.objects.create(name=name)
    logger.info("Registered player %s (%s)", player.pk, player.name)
    return player
