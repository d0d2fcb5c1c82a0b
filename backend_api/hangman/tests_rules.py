from datetime import datetime, timezone

from django.test import SimpleTestCase

from hangman.engine import (
    COMPLETE_WORD_POINTS,
    Session,
    Status,
    build_view,
    compute_score,
    hidden_word,
    normalize_letter,
    register_guess,
)


def _session(word: str, letters=(), remaining: int = 7) -> Session:
    return Session(
        id=1,
        player_id=1,
        word_id=1,
        word_text=word,
        attempted_letters=set(letters),
        remaining_attempts=remaining,
        started_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


class HiddenWordTests(SimpleTestCase):
    def test_spaces_always_revealed(self):
        self.assertEqual(hidden_word("cat mat", set()), "___ ___")

    def test_reveals_attempted_letters_case_insensitively(self):
        self.assertEqual(hidden_word("Cat Mat", {"C", "A", "T"}), "CAT _AT")

    def test_non_letter_guess_never_reveals_anything(self):
        self.assertEqual(hidden_word("dog", {"1", "?"}), "___")


class ScoreTests(SimpleTestCase):
    def test_complete_word_gets_fixed_bonus(self):
        self.assertEqual(compute_score("DOG", {"D", "O", "G"}, True, 3), COMPLETE_WORD_POINTS)

    def test_in_progress_scores_zero_even_with_correct_letters(self):
        self.assertEqual(compute_score("DOG", {"D", "O"}, False, 5), 0)

    def test_out_of_attempts_counts_correct_letters(self):
        letters = {"D", "O", "X", "Y", "Z", "W", "Q", "R", "S"}
        self.assertEqual(compute_score("DOG", letters, False, 0), 2)


class RegisterGuessTests(SimpleTestCase):
    def test_wrong_letter_costs_a_life(self):
        session, changed = register_guess(_session("DOG"), "X")
        self.assertTrue(changed)
        self.assertEqual(session.remaining_attempts, 6)
        self.assertIn("X", session.attempted_letters)

    def test_right_letter_is_free(self):
        session, _ = register_guess(_session("DOG"), "O")
        self.assertEqual(session.remaining_attempts, 7)

    def test_repeat_is_a_no_op(self):
        session = _session("DOG", letters={"X"}, remaining=6)
        session, changed = register_guess(session, "X")
        self.assertFalse(changed)
        self.assertEqual(session.remaining_attempts, 6)
        self.assertEqual(session.attempted_letters, {"X"})

    def test_remaining_attempts_never_negative(self):
        session, _ = register_guess(_session("DOG", remaining=0), "X")
        self.assertEqual(session.remaining_attempts, 0)


class BuildViewTests(SimpleTestCase):
    def test_partial_phrase(self):
        view = build_view(_session("CAT MAT", letters={"C", "A", "T"}))
        self.assertEqual(view.hidden_word, "CAT _AT")
        self.assertFalse(view.is_complete)
        self.assertEqual(view.score, 0)
        self.assertEqual(view.remaining_attempts, 7)
        self.assertIs(view.status, Status.ACTIVE)

    def test_completion_on_last_life_is_a_win(self):
        view = build_view(_session("DOG", letters={"D", "O", "G"}, remaining=0))
        self.assertTrue(view.is_complete)
        self.assertEqual(view.score, COMPLETE_WORD_POINTS)
        self.assertIs(view.status, Status.WON)

    def test_out_of_lives_is_a_loss(self):
        view = build_view(_session("DOG", letters=set("XYZWQRS"), remaining=0))
        self.assertIs(view.status, Status.LOST)
        self.assertEqual(view.score, 0)


class NormalizeLetterTests(SimpleTestCase):
    def test_uppercases(self):
        self.assertEqual(normalize_letter("a"), "A")

    def test_accepts_non_letters(self):
        self.assertEqual(normalize_letter("7"), "7")

    def test_keeps_characters_that_uppercase_to_several(self):
        self.assertEqual(normalize_letter("ß"), "ß")

    def test_sharp_s_never_matches_double_s(self):
        session, _ = register_guess(_session("STRASSE"), normalize_letter("ß"))
        self.assertEqual(session.attempted_letters, {"ß"})
        self.assertEqual(session.remaining_attempts, 6)
        self.assertEqual(hidden_word("STRASSE", session.attempted_letters), "_______")

    def test_rejects_multiple_characters(self):
        with self.assertRaises(ValueError):
            normalize_letter("ab")
        with self.assertRaises(ValueError):
            normalize_letter("")
