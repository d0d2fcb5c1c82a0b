from io import StringIO

from django.core.management import call_command
from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework.test import APITestCase

from hangman.engine import GameError
from hangman.models import Game, GameSession, Player, Word
from hangman.seed_utils import DEFAULT_SEED, ensure_seed_words
from hangman import services
from hangman.services import build_engine


class GameFlowTests(APITestCase):
    def setUp(self):
        self.player = Player.objects.create(name="alice")
        # Single word so random selection is deterministic.
        self.word = Word.objects.create(text="dog")

    def _start(self, player_id=None):
        return self.client.post(reverse('start-game'), {"player_id": player_id or self.player.id}, format="json")

    def _guess(self, letter, player_id=None):
        return self.client.post(
            reverse('guess'), {"player_id": player_id or self.player.id, "letter": letter}, format="json"
        )

    def test_start_game_success(self):
        resp = self._start()
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["hidden_word"], "___")
        self.assertEqual(data["attempted_letters"], [])
        self.assertEqual(data["remaining_attempts"], 7)
        self.assertFalse(data["is_complete"])
        self.assertEqual(data["score"], 0)
        self.assertEqual(data["status"], "ACTIVE")
        self.word.refresh_from_db()
        self.assertTrue(self.word.used)
        self.assertEqual(GameSession.objects.count(), 1)

    def test_start_unknown_player(self):
        resp = self._start(player_id=999)
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["code"], "PLAYER_NOT_FOUND")

    def test_start_when_pool_exhausted(self):
        self._start()
        resp = self._start()
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.json()["code"], "WORD_POOL_EXHAUSTED")

    @override_settings(HANGMAN_MAX_ATTEMPTS=3)
    def test_max_attempts_setting(self):
        self.assertEqual(self._start().json()["remaining_attempts"], 3)

    def test_guess_without_game(self):
        resp = self._guess("a")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["code"], "NO_ACTIVE_SESSION")

    def test_guess_rejects_multiple_characters(self):
        self._start()
        resp = self._guess("ab")
        self.assertEqual(resp.status_code, 400)

    def test_guess_persists_progress(self):
        self._start()
        data = self._guess("o").json()
        self.assertEqual(data["hidden_word"], "_O_")
        data = self._guess("x").json()
        self.assertEqual(data["attempted_letters"], ["O", "X"])
        self.assertEqual(data["remaining_attempts"], 6)
        session = GameSession.objects.get()
        self.assertEqual(session.attempted_letters, ["O", "X"])
        self.assertEqual(session.remaining_attempts, 6)

    def test_repeated_guess_changes_nothing(self):
        self._start()
        first = self._guess("x").json()
        second = self._guess("X").json()
        self.assertEqual(first, second)
        self.assertEqual(GameSession.objects.get().remaining_attempts, 6)

    def test_guess_and_win(self):
        self._start()
        for letter in "do":
            self._guess(letter)
        resp = self._guess("g")
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertTrue(data["is_complete"])
        self.assertEqual(data["hidden_word"], "DOG")
        self.assertEqual(data["score"], 20)
        self.assertEqual(data["status"], "WON")
        self.assertFalse(GameSession.objects.exists())
        game = Game.objects.get()
        self.assertEqual(game.outcome, "WON")
        self.assertEqual(game.score, 20)
        self.assertEqual(game.word_text, "dog")

    def test_seven_misses_lose(self):
        self._start()
        data = None
        for letter in "xyzwqrs":
            data = self._guess(letter).json()
        self.assertEqual(data["remaining_attempts"], 0)
        self.assertEqual(data["status"], "LOST")
        self.assertEqual(data["score"], 0)
        self.assertFalse(GameSession.objects.exists())
        self.assertEqual(Game.objects.get().outcome, "LOST")
        # Finished games no longer take guesses.
        self.assertEqual(self._guess("d").status_code, 404)

    def test_history_endpoints(self):
        Word.objects.create(text="ice cream")
        self._start()
        for letter in self._current_word():
            self._guess(letter)
        self._start()
        for letter in "xyzwqbk":
            self._guess(letter)

        games = self.client.get(reverse('games')).json()
        self.assertEqual(len(games), 2)
        self.assertEqual([g["outcome"] for g in games], ["LOST", "WON"])
        self.assertEqual(games[0]["player_name"], "alice")

        mine = self.client.get(reverse('player-games', kwargs={"player_id": self.player.id}))
        self.assertEqual(mine.status_code, 200)
        self.assertEqual(len(mine.json()), 2)

        missing = self.client.get(reverse('player-games', kwargs={"player_id": 999}))
        self.assertEqual(missing.status_code, 404)

    def _current_word(self):
        return "".join(sorted(set(GameSession.objects.get().word.text.replace(" ", ""))))


class PlayerEndpointTests(APITestCase):
    def test_create_and_fetch_player(self):
        resp = self.client.post(reverse('players'), {"name": "  bob "}, format="json")
        self.assertEqual(resp.status_code, 201)
        player_id = resp.json()["id"]
        self.assertEqual(resp.json()["name"], "bob")

        detail = self.client.get(reverse('player-detail', kwargs={"player_id": player_id}))
        self.assertEqual(detail.status_code, 200)
        self.assertEqual(detail.json()["name"], "bob")

        listing = self.client.get(reverse('players')).json()
        self.assertEqual([p["name"] for p in listing], ["bob"])

    def test_duplicate_name_rejected(self):
        Player.objects.create(name="bob")
        resp = self.client.post(reverse('players'), {"name": "Bob"}, format="json")
        self.assertEqual(resp.status_code, 400)

    def test_missing_player(self):
        resp = self.client.get(reverse('player-detail', kwargs={"player_id": 999}))
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["code"], "PLAYER_NOT_FOUND")
        self.assertIsNone(services.find_player(999))

    def test_player_without_games_has_empty_history(self):
        player = services.register_player("erin")
        self.assertEqual(services.find_player(player.pk), player)
        resp = self.client.get(reverse('player-games', kwargs={"player_id": player.pk}))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), [])

    def test_health(self):
        resp = self.client.get(reverse('Health'))
        self.assertEqual(resp.json(), {"message": "Server is up!"})


class OrmStoreTests(TestCase):
    def setUp(self):
        self.player = Player.objects.create(name="carol")
        self.word = Word.objects.create(text="cat mat")

    def test_open_session_is_idempotent_per_player_and_word(self):
        engine = build_engine()
        first = engine.open_session(self.player, self.word)
        again = engine.open_session(self.player, self.word)
        self.assertEqual(first.id, again.id)
        self.assertEqual(GameSession.objects.count(), 1)

    def test_phrase_scenario_against_database(self):
        engine = build_engine()
        engine.start_session(self.player.id)
        view = None
        for letter in "cat":
            view = engine.apply_guess(self.player.id, letter).view
        self.assertEqual(view.hidden_word, "CAT _AT")
        self.assertEqual(view.remaining_attempts, 7)
        self.assertEqual(view.score, 0)
        self.assertEqual(GameSession.objects.get().attempted_letters, ["A", "C", "T"])

    def test_word_taken_by_concurrent_start_is_not_reused(self):
        Word.objects.all().delete()
        dog = Word.objects.create(text="dog")
        dave = Player.objects.create(name="dave")
        first, second = build_engine(), build_engine()
        # Both starts read the word before either claims it.
        w1 = first.words.find_unused_random()
        w2 = second.words.find_unused_random()
        self.assertEqual(w1.pk, w2.pk)

        self.assertIsNotNone(first.open_session(self.player, w1))
        self.assertIsNone(second.open_session(dave, w2))
        self.assertEqual(GameSession.objects.filter(word=dog).count(), 1)
        self.assertIs(second.start_session(dave.id).error, GameError.WORD_POOL_EXHAUSTED)

    def test_start_moves_on_after_losing_a_word(self):
        Word.objects.create(text="owl")
        stale = Word.objects.get(text="cat mat")
        Word.objects.filter(pk=stale.pk).update(used=True)
        engine = build_engine()
        self.assertIsNone(engine.open_session(self.player, stale))
        result = engine.start_session(self.player.id)
        self.assertTrue(result.ok)
        self.assertEqual(GameSession.objects.get().word.text, "owl")

    def test_used_words_are_not_handed_out(self):
        self.word.used = True
        self.word.save()
        self.assertIsNone(build_engine().words.find_unused_random())


class SeedWordsTests(TestCase):
    def test_ensure_seed_words_only_fills_empty_table(self):
        self.assertEqual(ensure_seed_words(), len(DEFAULT_SEED))
        self.assertEqual(ensure_seed_words(), 0)
        self.assertFalse(Word.objects.filter(used=True).exists())

    def test_seed_command(self):
        out = StringIO()
        call_command("seed_words", stdout=out)
        self.assertIn(f"Seeded {len(DEFAULT_SEED)} words.", out.getvalue())
        out = StringIO()
        call_command("seed_words", stdout=out)
        self.assertIn("No action taken.", out.getvalue())
