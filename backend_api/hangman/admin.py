from django.contrib import admin

from .models import Player, Word, GameSession, Game


@admin.register(Player)
class PlayerAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "created_at")
    search_fields = ("name",)


@admin.register(Word)
class WordAdmin(admin.ModelAdmin):
    list_display = ("text", "used", "created_at")
    list_filter = ("used",)
    search_fields = ("text",)
    ordering = ("text",)


@admin.register(GameSession)
class GameSessionAdmin(admin.ModelAdmin):
    list_display = ("id", "player", "word", "remaining_attempts", "attempted_letters", "started_at")
    search_fields = ("player__name", "word__text")
    readonly_fields = ("created_at", "updated_at")


@admin.register(Game)
class GameAdmin(admin.ModelAdmin):
    list_display = ("id", "player", "word_text", "outcome", "score", "played_at")
    list_filter = ("outcome",)
    search_fields = ("player__name", "word_text")
    ordering = ("-played_at",)
    # History is append-only.
    readonly_fields = ("player", "word", "word_text", "outcome", "score", "played_at", "created_at", "updated_at")
