from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

from django.test import SimpleTestCase

from hangman.engine import GameEngine, GameError, GameRecord, Outcome, Session, Status


@dataclass
class FakePlayer:
    id: int
    name: str


@dataclass
class FakeWord:
    id: int
    text: str
    used: bool = False


class MemoryPlayers:
    def __init__(self, *players):
        self.rows = {p.id: p for p in players}

    def find_by_id(self, player_id):
        return self.rows.get(player_id)


class MemoryWords:
    def __init__(self, *words):
        self.rows = list(words)

    def find_unused_random(self):
        return next((w for w in self.rows if not w.used), None)

    def mark_used(self, word):
        if word.used:
            return False
        word.used = True
        return True


class MemorySessions:
    def __init__(self):
        self.rows: Dict[int, Session] = {}
        self.next_id = 1

    def find_active_by_player_and_word(self, player_id, word_id) -> Optional[Session]:
        for s in self.rows.values():
            if s.player_id == player_id and s.word_id == word_id:
                return self._copy(s)
        return None

    def find_all_active_by_player(self, player_id) -> List[Session]:
        found = [self._copy(s) for s in self.rows.values() if s.player_id == player_id]
        return sorted(found, key=lambda s: s.started_at, reverse=True)

    def save(self, session):
        if session.id is None:
            session.id = self.next_id
            self.next_id += 1
        self.rows[session.id] = self._copy(session)
        return session

    def delete(self, session):
        self.rows.pop(session.id, None)

    @staticmethod
    def _copy(session):
        return replace(session, attempted_letters=set(session.attempted_letters))


class MemoryHistory:
    def __init__(self):
        self.rows: List[GameRecord] = []

    def save(self, record):
        record = replace(record, id=len(self.rows) + 1)
        self.rows.append(record)
        return record

    def find_by_player(self, player_id):
        return [r for r in reversed(self.rows) if r.player_id == player_id]

    def find_all(self):
        return list(reversed(self.rows))


class TickingClock:
    def __init__(self):
        self.now = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self):
        self.now += timedelta(seconds=1)
        return self.now


class GameEngineTests(SimpleTestCase):
    def setUp(self):
        self.alice = FakePlayer(1, "alice")
        self.players = MemoryPlayers(self.alice)
        self.words = MemoryWords()
        self.sessions = MemorySessions()
        self.history = MemoryHistory()
        self.engine = GameEngine(
            players=self.players,
            words=self.words,
            sessions=self.sessions,
            history=self.history,
            clock=TickingClock(),
        )

    def _start(self, text):
        word = FakeWord(len(self.words.rows) + 1, text)
        self.words.rows.append(word)
        result = self.engine.start_session(self.alice.id)
        self.assertTrue(result.ok)
        return word, result.view

    def _guess_all(self, letters):
        view = None
        for letter in letters:
            result = self.engine.apply_guess(self.alice.id, letter)
            self.assertTrue(result.ok)
            view = result.view
        return view

    def test_start_returns_fresh_view_and_consumes_word(self):
        word, view = self._start("DOG")
        self.assertTrue(word.used)
        self.assertEqual(view.hidden_word, "___")
        self.assertEqual(view.remaining_attempts, 7)
        self.assertEqual(view.attempted_letters, frozenset())
        self.assertEqual(len(self.sessions.rows), 1)

    def test_start_unknown_player(self):
        result = self.engine.start_session(99)
        self.assertFalse(result.ok)
        self.assertIs(result.error, GameError.PLAYER_NOT_FOUND)

    def test_start_with_empty_pool(self):
        result = self.engine.start_session(self.alice.id)
        self.assertIs(result.error, GameError.WORD_POOL_EXHAUSTED)
        self.assertEqual(result.message, "All words have already been used.")

    def test_open_session_twice_returns_same_session(self):
        word = FakeWord(1, "DOG")
        first = self.engine.open_session(self.alice, word)
        self.engine.apply_guess(self.alice.id, "d")
        second = self.engine.open_session(self.alice, word)
        self.assertEqual(first.id, second.id)
        self.assertEqual(second.attempted_letters, {"D"})
        self.assertEqual(len(self.sessions.rows), 1)

    def test_guess_without_session(self):
        result = self.engine.apply_guess(self.alice.id, "a")
        self.assertIs(result.error, GameError.NO_ACTIVE_SESSION)

    def test_guess_unknown_player(self):
        result = self.engine.apply_guess(42, "a")
        self.assertIs(result.error, GameError.PLAYER_NOT_FOUND)

    def test_phrase_partially_revealed(self):
        self._start("CAT MAT")
        view = self._guess_all("cat")
        self.assertEqual(view.hidden_word, "CAT _AT")
        self.assertFalse(view.is_complete)
        self.assertEqual(view.score, 0)
        self.assertEqual(view.remaining_attempts, 7)

    def test_seven_misses_lose_and_archive(self):
        self._start("DOG")
        view = self._guess_all("XYZWQRS")
        self.assertEqual(view.remaining_attempts, 0)
        self.assertFalse(view.is_complete)
        self.assertEqual(view.score, 0)
        self.assertIs(view.status, Status.LOST)
        self.assertEqual(self.sessions.rows, {})
        (record,) = self.history.rows
        self.assertIs(record.outcome, Outcome.LOST)
        self.assertEqual(record.score, 0)
        self.assertEqual(record.word_text, "DOG")

    def test_loss_scores_correct_letters(self):
        self._start("DOG")
        view = self._guess_all("DOXYZWQRS")
        self.assertIs(view.status, Status.LOST)
        self.assertEqual(view.score, 2)
        self.assertEqual(self.history.rows[0].score, 2)

    def test_win_and_archive(self):
        self._start("DOG")
        view = self._guess_all("DOG")
        self.assertTrue(view.is_complete)
        self.assertEqual(view.score, 20)
        self.assertIs(view.status, Status.WON)
        self.assertEqual(self.sessions.rows, {})
        (record,) = self.history.rows
        self.assertIs(record.outcome, Outcome.WON)
        self.assertEqual(record.score, 20)
        self.assertEqual(record.player_name, "alice")

    def test_win_after_misses(self):
        self._start("DOG")
        view = self._guess_all("XYZWQRDO")
        self.assertEqual(view.remaining_attempts, 1)
        view = self._guess_all("G")
        self.assertIs(view.status, Status.WON)
        self.assertEqual(view.score, 20)

    def test_repeated_letter_is_a_no_op(self):
        self._start("DOG")
        before = self._guess_all("x")
        stored = MemorySessions._copy(self.sessions.rows[1])
        after = self._guess_all("X")
        self.assertEqual(before, after)
        self.assertEqual(self.sessions.rows[1], stored)

    def test_remaining_attempts_never_increase(self):
        self._start("HANGMAN")
        seen = []
        for letter in "QHZAXNWGVMK":
            result = self.engine.apply_guess(self.alice.id, letter)
            seen.append(result.view.remaining_attempts)
            if result.view.is_terminal:
                break
        self.assertEqual(seen, sorted(seen, reverse=True))
        self.assertTrue(all(r >= 0 for r in seen))

    def test_guesses_target_latest_session(self):
        self._start("DOG")
        self._start("CAT")
        view = self._guess_all("c")
        self.assertEqual(view.hidden_word, "C__")
        older = next(s for s in self.sessions.rows.values() if s.word_text == "DOG")
        self.assertEqual(older.attempted_letters, set())

    def test_history_queries(self):
        self._start("DOG")
        self._guess_all("DOG")
        self._start("CAT")
        self._guess_all("CAT")
        games = self.engine.games_for_player(self.alice.id)
        self.assertEqual([g.word_text for g in games], ["CAT", "DOG"])
        self.assertEqual(len(self.engine.all_games()), 2)

    def test_custom_max_attempts(self):
        engine = GameEngine(
            players=self.players,
            words=MemoryWords(FakeWord(1, "DOG")),
            sessions=MemorySessions(),
            history=MemoryHistory(),
            max_attempts=3,
        )
        self.assertEqual(engine.start_session(self.alice.id).view.remaining_attempts, 3)

    def test_start_skips_word_claimed_elsewhere(self):
        taken = FakeWord(1, "DOG")
        fresh = FakeWord(2, "CAT")

        class StaleFirstWords(MemoryWords):
            # Hands out a word another start already claimed, then the pool.
            def __init__(self):
                super().__init__(fresh)
                self.stale = [taken]

            def find_unused_random(self):
                return self.stale.pop() if self.stale else super().find_unused_random()

        taken.used = True
        self.engine.words = StaleFirstWords()
        result = self.engine.start_session(self.alice.id)
        self.assertTrue(result.ok)
        self.assertEqual(result.view.hidden_word, "___")
        (session,) = self.sessions.rows.values()
        self.assertEqual(session.word_id, fresh.id)
