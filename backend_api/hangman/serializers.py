from __future__ import annotations

from typing import Any, Dict

from rest_framework import serializers

from .engine import GameRecord, GameView
from .models import Player

STATUS_CHOICES = ["ACTIVE", "WON", "LOST"]


def _normalize_name(value: str) -> str:
    """Normalize incoming player names."""
    return (value or "").strip()


# PUBLIC_INTERFACE
class StartGameRequestSerializer(serializers.Serializer):
    """Request payload to start (or resume) a game.

    Fields:
    - player_id: the player starting the game
    """

    player_id = serializers.IntegerField(min_value=1)


# PUBLIC_INTERFACE
class GuessRequestSerializer(serializers.Serializer):
    """Request payload to guess a letter in the player's latest game.

    Fields:
    - player_id: the guessing player
    - letter: exactly one character; case is ignored
    """

    player_id = serializers.IntegerField(min_value=1)
    letter = serializers.CharField(min_length=1, max_length=1, trim_whitespace=False)


# PUBLIC_INTERFACE
class GameViewSerializer(serializers.Serializer):
    """Response payload after starting a game or guessing."""

    hidden_word = serializers.CharField()
    attempted_letters = serializers.ListField(child=serializers.CharField())
    remaining_attempts = serializers.IntegerField()
    is_complete = serializers.BooleanField()
    score = serializers.IntegerField()
    status = serializers.ChoiceField(choices=STATUS_CHOICES)

    @staticmethod
    def from_view(view: GameView) -> Dict[str, Any]:
        """Flatten a GameView; the letter set is sorted for stable output."""
        return {
            "hidden_word": view.hidden_word,
            "attempted_letters": sorted(view.attempted_letters),
            "remaining_attempts": view.remaining_attempts,
            "is_complete": view.is_complete,
            "score": view.score,
            "status": view.status.value,
        }


# PUBLIC_INTERFACE
class GameRecordSerializer(serializers.Serializer):
    """Finished game entry for history listings."""

    game_id = serializers.IntegerField()
    player_id = serializers.IntegerField()
    player_name = serializers.CharField(allow_null=True)
    word = serializers.CharField()
    outcome = serializers.ChoiceField(choices=["WON", "LOST"])
    score = serializers.IntegerField()
    played_at = serializers.DateTimeField()

    @staticmethod
    def from_record(record: GameRecord) -> Dict[str, Any]:
        return {
            "game_id": record.id,
            "player_id": record.player_id,
            "player_name": record.player_name,
            "word": record.word_text,
            "outcome": record.outcome.value,
            "score": record.score,
            "played_at": record.played_at,
        }


# PUBLIC_INTERFACE
class PlayerSerializer(serializers.ModelSerializer):
    """Player read/create payload."""

    class Meta:
        model = Player
        fields = ["id", "name", "created_at"]
        read_only_fields = ["id", "created_at"]

    def validate_name(self, value: str) -> str:
        value = _normalize_name(value)
        if not value:
            raise serializers.ValidationError("Name must not be blank.")
        if Player.objects.filter(name__iexact=value).exists():
            raise serializers.ValidationError("A player with this name already exists.")
        return value
