from __future__ import annotations

from django.db import models
from django.utils import timezone


# PUBLIC_INTERFACE
class TimeStampedModel(models.Model):
    """Abstract base model providing created/updated timestamps.

    Notes:
        Keep this abstract model free of any logic that would access the Django
        app registry or execute queries at module import time.
    """
    created_at = models.DateTimeField(auto_now_add=True, help_text="Time when the record was created.")
    updated_at = models.DateTimeField(auto_now=True, help_text="Time when the record was last updated.")

    class Meta:
        abstract = True


# PUBLIC_INTERFACE
class Player(TimeStampedModel):
    """A person playing games. Only a display name is tracked."""
    name = models.CharField(max_length=64, unique=True, help_text="Player display name.")

    class Meta:
        ordering = ["name"]
        verbose_name = "Player"
        verbose_name_plural = "Players"

    def save(self, *args, **kwargs):
        if self.name:
            self.name = self.name.strip()
        super().save(*args, **kwargs)

    def __str__(self) -> str:  # pragma: no cover
        return self.name


# PUBLIC_INTERFACE
class Word(TimeStampedModel):
    """A secret word. Each word is handed out to at most one session.

    Fields:
    - text: the word or phrase to guess (may contain spaces)
    - used: set once a session has been started on the word
    """
    text = models.CharField(max_length=64, unique=True, db_index=True, help_text="Word or phrase to guess.")
    used = models.BooleanField(default=False, db_index=True, help_text="If true, the word was already handed out.")

    class Meta:
        ordering = ["text"]
        verbose_name = "Word"
        verbose_name_plural = "Words"

    def save(self, *args, **kwargs):
        if self.text:
            self.text = self.text.strip()
        super().save(*args, **kwargs)

    def __str__(self) -> str:  # pragma: no cover
        return self.text


# PUBLIC_INTERFACE
class GameSession(TimeStampedModel):
    """An in-progress game. Rows are deleted once the game resolves.

    Fields:
    - player: who is playing
    - word: the word being guessed
    - attempted_letters: sorted list of uppercase characters already tried
    - remaining_attempts: lives left
    - started_at: when the session was opened; the newest one takes guesses
    """
    player = models.ForeignKey(Player, on_delete=models.CASCADE, related_name="sessions")
    word = models.ForeignKey(Word, on_delete=models.PROTECT, related_name="sessions")
    attempted_letters = models.JSONField(default=list, blank=True, help_text="Uppercase letters already attempted.")
    remaining_attempts = models.PositiveSmallIntegerField(help_text="Lives left before the game is lost.")
    started_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        ordering = ["-started_at"]
        constraints = [
            models.UniqueConstraint(fields=["player", "word"], name="unique_active_session_per_player_word"),
        ]
        verbose_name = "Game Session"
        verbose_name_plural = "Game Sessions"

    def __str__(self) -> str:  # pragma: no cover
        return f"Session #{self.pk} - {self.player} on {self.word}"


# PUBLIC_INTERFACE
class Game(TimeStampedModel):
    """Finished game record, written once and never updated."""
    OUTCOME_CHOICES = (
        ("WON", "Won"),
        ("LOST", "Lost"),
    )

    player = models.ForeignKey(Player, on_delete=models.CASCADE, related_name="games")
    word = models.ForeignKey(Word, on_delete=models.SET_NULL, null=True, blank=True, related_name="games")
    # Copied so history survives word deletion.
    word_text = models.CharField(max_length=64)
    outcome = models.CharField(max_length=8, choices=OUTCOME_CHOICES)
    score = models.IntegerField(default=0)
    played_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        ordering = ["-played_at", "-id"]
        verbose_name = "Game"
        verbose_name_plural = "Games"

    def __str__(self) -> str:  # pragma: no cover
        return f"Game #{self.pk} - {self.player}: {self.outcome} ({self.score})"
