from __future__ import annotations

from typing import AbstractSet, Tuple

from .state import GameView, Session, Status

MAX_ATTEMPTS = 7
COMPLETE_WORD_POINTS = 20
POINTS_PER_LETTER = 1
PLACEHOLDER = "_"


# PUBLIC_INTERFACE
def normalize_letter(letter: str) -> str:
    """Uppercase a single guessed character.

    Non-alphabetic characters are accepted as-is; they simply never match
    a word that does not contain them. Characters whose uppercase form is
    longer than one character (e.g. "ß" -> "SS") are kept unchanged.

    Raises:
        ValueError: if the input is not exactly one character.
    """
    if not isinstance(letter, str) or len(letter) != 1:
        raise ValueError("A guess must be exactly one character.")
    upper = letter.upper()
    return upper if len(upper) == 1 else letter


# PUBLIC_INTERFACE
def hidden_word(word: str, attempted: AbstractSet[str]) -> str:
    """Render the word with unguessed characters replaced by the placeholder.

    Spaces are always shown.
    """
    target = word.upper()
    return "".join(ch if ch == " " or ch in attempted else PLACEHOLDER for ch in target)


def correct_letter_count(word: str, attempted: AbstractSet[str]) -> int:
    target = word.upper()
    return sum(1 for letter in attempted if letter in target)


# PUBLIC_INTERFACE
def compute_score(word: str, attempted: AbstractSet[str], is_complete: bool, remaining_attempts: int) -> int:
    """Score for the current position.

    - complete word: fixed bonus
    - out of attempts: one point per attempted letter present in the word
    - otherwise 0, even mid-game with correct letters
    """
    if is_complete:
        return COMPLETE_WORD_POINTS
    if remaining_attempts == 0:
        return correct_letter_count(word, attempted) * POINTS_PER_LETTER
    return 0


# PUBLIC_INTERFACE
def build_view(session: Session) -> GameView:
    """Derive the player-facing view from a session."""
    attempted = frozenset(session.attempted_letters)
    hidden = hidden_word(session.word_text, attempted)
    complete = hidden == session.word_text.upper()
    remaining = session.remaining_attempts

    if complete:
        status = Status.WON
    elif remaining == 0:
        status = Status.LOST
    else:
        status = Status.ACTIVE

    return GameView(
        hidden_word=hidden,
        attempted_letters=attempted,
        remaining_attempts=remaining,
        is_complete=complete,
        score=compute_score(session.word_text, attempted, complete, remaining),
        status=status,
    )


# PUBLIC_INTERFACE
def register_guess(session: Session, letter: str) -> Tuple[Session, bool]:
    """Apply one normalized letter to the session in place.

    Returns (session, changed). A repeated letter leaves the session
    untouched and reports changed=False.
    """
    if letter in session.attempted_letters:
        return session, False

    session.attempted_letters.add(letter)
    if letter not in session.word_text.upper():
        session.remaining_attempts = max(session.remaining_attempts - 1, 0)
    return session, True
