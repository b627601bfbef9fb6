"""
Pattern Codec
=============

Every guess produces one of 243 feedback patterns (3^5). Each position is a
base-3 digit: 0 = absent (gray), 1 = present (yellow), 2 = correct (green),
least significant digit = position 0.

    [2, 0, 1, 0, 2] -> 2*1 + 0*3 + 1*9 + 0*27 + 2*81 = 173

Feedback for many guess/answer pairs is computed by numba on char-code arrays;
``compute_pattern`` is the string-level entry point.
"""

import numpy as np
from numba import jit, prange
from typing import List, Sequence

from .config import WORD_LENGTH
from .errors import InvalidWordError
from .models import Clue, GuessResult, LetterClue


# ============================================================================
# CONSTANTS
# ============================================================================

GRAY = 0
YELLOW = 1
GREEN = 2
CORRECT_PATTERN = 242  # 2 + 2*3 + 2*9 + 2*27 + 2*81 = 242 (all green)
N_PATTERNS = 243  # 3^5 possible feedback patterns

_SYMBOLS = ('⬜', '🟨', '🟩')
_LETTERS = 'BYG'


# ============================================================================
# NUMBA-ACCELERATED FEEDBACK COMPUTATION
# ============================================================================

@jit(nopython=True, cache=True)
def compute_feedback(guess: np.ndarray, answer: np.ndarray) -> int:
    """
    Compute feedback for a guess against an answer.

    Greens are marked first and consume their answer letter, so yellows are
    only handed out for letters still unmatched.

    Args:
        guess: shape (5,) array of char codes (0-25 for a-z)
        answer: shape (5,) array of char codes

    Returns:
        Integer feedback pattern (0-242)
    """
    feedback = np.zeros(5, dtype=np.int32)
    answer_counts = np.zeros(26, dtype=np.int32)

    for i in range(5):
        answer_counts[answer[i]] += 1

    # First pass: greens
    for i in range(5):
        if guess[i] == answer[i]:
            feedback[i] = GREEN
            answer_counts[guess[i]] -= 1

    # Second pass: yellows from what is left
    for i in range(5):
        if feedback[i] == GRAY:
            c = guess[i]
            if answer_counts[c] > 0:
                feedback[i] = YELLOW
                answer_counts[c] -= 1

    return feedback[0] + 3*feedback[1] + 9*feedback[2] + 27*feedback[3] + 81*feedback[4]


@jit(nopython=True, parallel=True, cache=True)
def compute_feedback_matrix(guess_chars: np.ndarray, answer_chars: np.ndarray) -> np.ndarray:
    """
    Compute feedback for all guess/answer pairs in parallel.

    Args:
        guess_chars: shape (n_guesses, 5) array of char codes
        answer_chars: shape (n_answers, 5) array of char codes

    Returns:
        shape (n_guesses, n_answers) feedback matrix
    """
    n_guesses = guess_chars.shape[0]
    n_answers = answer_chars.shape[0]
    result = np.zeros((n_guesses, n_answers), dtype=np.uint8)

    for i in prange(n_guesses):
        for j in range(n_answers):
            result[i, j] = compute_feedback(guess_chars[i], answer_chars[j])

    return result


# ============================================================================
# WORD CONVERSION
# ============================================================================

def normalize_word(word: str) -> str:
    """Lowercase and validate a 5-letter a-z word."""
    if not isinstance(word, str):
        raise InvalidWordError(f"Expected a string, got {type(word).__name__}")
    w = word.strip().lower()
    if len(w) != WORD_LENGTH:
        raise InvalidWordError(f"'{word}' must be exactly 5 letters")
    if not all('a' <= c <= 'z' for c in w):
        raise InvalidWordError(f"'{word}' must only contain letters a-z")
    return w


def words_to_chars(words: Sequence[str]) -> np.ndarray:
    """Convert words to a (n, 5) char code array."""
    arr = np.zeros((len(words), 5), dtype=np.int32)
    for i, w in enumerate(words):
        for j, c in enumerate(w):
            arr[i, j] = ord(c) - ord('a')
    return arr


# ============================================================================
# CODEC
# ============================================================================

def compute_pattern(guess: str, answer: str) -> int:
    """
    Pattern (0-242) produced by guessing ``guess`` when the answer is ``answer``.

    Case-insensitive. Raises InvalidWordError unless both are 5 letters.

    >>> compute_pattern('audio', 'AUDIO')
    242
    """
    g = normalize_word(guess)
    a = normalize_word(answer)
    chars = words_to_chars([g, a])
    return int(compute_feedback(chars[0], chars[1]))


def encode_digits(digits: Sequence[int]) -> int:
    """Encode 5 ternary digits (position 0 first) into a pattern."""
    if len(digits) != 5:
        raise InvalidWordError("A pattern needs exactly 5 digits")
    pattern = 0
    multiplier = 1
    for d in digits:
        if d not in (GRAY, YELLOW, GREEN):
            raise InvalidWordError(f"Invalid pattern digit: {d}")
        pattern += int(d) * multiplier
        multiplier *= 3
    return pattern


def decode_pattern(pattern: int) -> List[int]:
    """
    Decode a pattern into its 5 digits, position 0 first.

    >>> decode_pattern(242)
    [2, 2, 2, 2, 2]
    """
    if not 0 <= pattern < N_PATTERNS:
        raise ValueError(f"Pattern out of range: {pattern}")
    result = []
    for _ in range(5):
        result.append(pattern % 3)
        pattern //= 3
    return result


def is_winning_pattern(pattern: int) -> bool:
    return pattern == CORRECT_PATTERN


def count_correct_positions(pattern: int) -> int:
    return sum(1 for d in decode_pattern(pattern) if d == GREEN)


def pattern_to_string(pattern: int) -> str:
    """Convert pattern to emoji string, e.g. 🟩⬜🟨⬜🟩."""
    return ''.join(_SYMBOLS[d] for d in decode_pattern(pattern))


def pattern_to_letters(pattern: int) -> str:
    """Convert pattern to a letter string (B=gray, Y=yellow, G=green)."""
    return ''.join(_LETTERS[d] for d in decode_pattern(pattern))


def pattern_from_string(pattern: str) -> int:
    """Convert a letter string (e.g. 'BBYGG') to a pattern."""
    if len(pattern) != 5:
        raise InvalidWordError(f"Pattern string must have 5 characters: {pattern!r}")
    digits = []
    for c in pattern.upper():
        if c not in _LETTERS:
            raise InvalidWordError(f"Invalid pattern char: {c}")
        digits.append(_LETTERS.index(c))
    return encode_digits(digits)


def clues_to_pattern(guess: GuessResult) -> int:
    return encode_digits([int(c.clue) for c in guess.clues])


def guess_result_from_pattern(word: str, pattern: int) -> GuessResult:
    """Build the GuessResult a player would enter for ``word`` and ``pattern``."""
    w = normalize_word(word)
    digits = decode_pattern(pattern)
    return GuessResult(
        word=w,
        clues=tuple(LetterClue(letter, i, Clue(d)) for i, (letter, d) in enumerate(zip(w, digits))),
    )
