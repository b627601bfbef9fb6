"""
Constraint Builder
==================

Folds a guess history into one ``WordConstraints``. The constraints are
rebuilt from the full history on every filtering pass.

Duplicate letters: within a single guess, a letter marked absent while the
same letter is also correct/present fixes its exact count (e.g. guessing
SASSY against SALTY gives one green S and two gray S's, so exactly one S).
"""

from collections import Counter
from typing import List, Sequence, Set, Union

from .errors import InvalidWordError
from .models import Clue, GuessResult, LetterClue, WordConstraints
from .patterns import normalize_word


_CLUE_ALIASES = {
    'g': Clue.CORRECT, 'correct': Clue.CORRECT, 'green': Clue.CORRECT,
    'y': Clue.PRESENT, 'present': Clue.PRESENT, 'yellow': Clue.PRESENT,
    'b': Clue.ABSENT, 'x': Clue.ABSENT, '-': Clue.ABSENT, '.': Clue.ABSENT,
    'absent': Clue.ABSENT, 'gray': Clue.ABSENT, 'grey': Clue.ABSENT,
}


def to_clue(value: Union[Clue, int, str]) -> Clue:
    """Accept a Clue, its digit, or a name/letter like 'correct' or 'g'."""
    if isinstance(value, Clue):
        return value
    if isinstance(value, int):
        try:
            return Clue(value)
        except ValueError:
            raise InvalidWordError(f"Invalid clue digit: {value}") from None
    if isinstance(value, str) and value.strip().lower() in _CLUE_ALIASES:
        return _CLUE_ALIASES[value.strip().lower()]
    raise InvalidWordError(f"Invalid clue: {value!r}")


def parse_clues(text: str) -> List[Clue]:
    """Parse a compact clue string such as 'gybbg' (g/y/b, x or - for gray)."""
    text = text.replace(' ', '')
    if len(text) != 5:
        raise InvalidWordError(f"Clue string must have 5 characters: {text!r}")
    return [to_clue(c) for c in text]


def create_guess_result(word: str, clues: Sequence[Union[Clue, int, str]]) -> GuessResult:
    """
    Convert a word and its per-position clues into a GuessResult.

    Raises InvalidWordError unless the word has 5 letters and there are 5 clues.
    """
    w = normalize_word(word)
    if len(clues) != 5:
        raise InvalidWordError('Word and clues must be exactly 5 letters')
    return GuessResult(
        word=w,
        clues=tuple(LetterClue(letter, i, to_clue(c)) for i, (letter, c) in enumerate(zip(w, clues))),
    )


def build_constraints(guesses: Sequence[GuessResult]) -> WordConstraints:
    """
    Build constraints from all previous guesses.

    Min counts merge by max across guesses (each guess is an independent lower
    bound); exact counts are overwritten by later guesses.
    """
    constraints = WordConstraints()

    for guess in guesses:
        letter_counts_in_guess: Counter = Counter()
        absent_letters_in_guess: Set[str] = set()

        for clue in guess.clues:
            letter = clue.letter
            if clue.clue == Clue.CORRECT:
                constraints.correct_positions[clue.position] = letter
                letter_counts_in_guess[letter] += 1
            elif clue.clue == Clue.PRESENT:
                constraints.present_letters.add(letter)
                constraints.wrong_positions.setdefault(letter, set()).add(clue.position)
                letter_counts_in_guess[letter] += 1
            else:
                absent_letters_in_guess.add(letter)

        for letter, count in letter_counts_in_guess.items():
            # Greens count toward presence too
            constraints.present_letters.add(letter)
            constraints.min_letter_count[letter] = max(
                constraints.min_letter_count.get(letter, 0), count)

        for letter in absent_letters_in_guess:
            if letter in letter_counts_in_guess:
                constraints.exact_letter_counts[letter] = letter_counts_in_guess[letter]
            else:
                constraints.absent_letters.add(letter)

    return constraints


def summarize_constraints(constraints: WordConstraints) -> str:
    """Human-readable one-line summary of the constraints."""
    parts = []

    if constraints.correct_positions:
        correct = ', '.join(
            f"{letter} at position {pos}"
            for pos, letter in sorted(constraints.correct_positions.items()))
        parts.append(f"Correct: {correct}")

    if constraints.present_letters:
        parts.append(f"Present: {', '.join(sorted(constraints.present_letters))}")

    if constraints.absent_letters:
        parts.append(f"Absent: {', '.join(sorted(constraints.absent_letters))}")

    if constraints.min_letter_count:
        counts = ', '.join(f"{l}>={n}" for l, n in sorted(constraints.min_letter_count.items()))
        parts.append(f"Min counts: {counts}")

    if constraints.exact_letter_counts:
        counts = ', '.join(f"{l}={n}" for l, n in sorted(constraints.exact_letter_counts.items()))
        parts.append(f"Exact counts: {counts}")

    return ' | '.join(parts) or 'No constraints'
