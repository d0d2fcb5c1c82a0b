from django.apps import AppConfig


class HangmanConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "hangman"
    verbose_name = "Hangman"
