from django.core.management.base import BaseCommand

from hangman.models import Word
from hangman.seed_utils import ensure_seed_words


class Command(BaseCommand):
    help = "Seed a minimal playable word list if the Words table is empty."

    def handle(self, *args, **options):
        # Idempotent: only an empty table is seeded.
        count_before = Word.objects.count()
        if count_before > 0:
            unused = Word.objects.filter(used=False).count()
            self.stdout.write(
                self.style.WARNING(f"Words already present: {count_before} ({unused} unused). No action taken.")
            )
            return

        inserted = ensure_seed_words()
        self.stdout.write(self.style.SUCCESS(f"Seeded {inserted} words."))
