"""
Entropy Ranker
==============

For a guess w and a pool of possible answers, group the pool by the pattern
w would produce against each answer:

    H(w)        = sum over patterns of (c/n) * log2(n/c)      bits
    E[remain]   = sum over patterns of (c/n) * c

Higher entropy = more information gained = better guess. Ranking is
O(|candidates| x |pool|) and is the dominant cost of the solver; feedback rows
are computed by numba in chunks so progress can be reported between chunks.
"""

import logging
import math
import numpy as np
from numba import jit
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .models import WordSuggestion
from .patterns import N_PATTERNS, compute_feedback_matrix, normalize_word, words_to_chars

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]

DEFAULT_MAX_RESULTS = 20
DEFAULT_PROGRESS_INTERVAL = 100


# ============================================================================
# NUMBA FUNCTIONS
# ============================================================================

@jit(nopython=True, cache=True)
def get_partition_sizes(feedback_row: np.ndarray) -> np.ndarray:
    """Count how many pool words fall into each of the 243 patterns."""
    sizes = np.zeros(N_PATTERNS, dtype=np.int32)
    for fb in feedback_row:
        sizes[fb] += 1
    return sizes


@jit(nopython=True, cache=True)
def compute_entropy(sizes: np.ndarray, total: int) -> float:
    """Shannon entropy (bits) of a partition distribution."""
    if total <= 1:
        return 0.0

    entropy = 0.0
    for s in sizes:
        if s > 0:
            entropy += (s / total) * np.log2(total / s)

    return entropy


@jit(nopython=True, cache=True)
def compute_expected_remaining(sizes: np.ndarray, total: int) -> float:
    """Expected size of the next pool: sum(size^2) / total."""
    if total == 0:
        return 0.0

    expected = 0.0
    for s in sizes:
        if s > 0:
            expected += s * s

    return expected / total


@jit(nopython=True, cache=True)
def score_feedback_rows(feedback_matrix: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Entropy and expected remaining for every row of a feedback matrix."""
    n_rows = feedback_matrix.shape[0]
    total = feedback_matrix.shape[1]
    entropies = np.zeros(n_rows, dtype=np.float64)
    expected = np.zeros(n_rows, dtype=np.float64)

    for i in range(n_rows):
        sizes = get_partition_sizes(feedback_matrix[i])
        entropies[i] = compute_entropy(sizes, total)
        expected[i] = compute_expected_remaining(sizes, total)

    return entropies, expected


# ============================================================================
# HELPERS
# ============================================================================

def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _prepare(words: Sequence[str]) -> List[str]:
    return [normalize_word(w) for w in words]


def _feedback_row(guess: str, remaining_words: Sequence[str]) -> np.ndarray:
    guess_chars = words_to_chars([normalize_word(guess)])
    answer_chars = words_to_chars(_prepare(remaining_words))
    return compute_feedback_matrix(guess_chars, answer_chars)[0]


# ============================================================================
# SINGLE GUESS
# ============================================================================

def calculate_entropy(guess: str, remaining_words: Sequence[str]) -> float:
    """
    Entropy in bits of guessing ``guess`` against ``remaining_words``.

    >>> round(calculate_entropy('slate', ['slate', 'crate', 'trace']), 3)
    1.585
    """
    n = len(remaining_words)
    if n <= 1:
        return 0.0
    sizes = get_partition_sizes(_feedback_row(guess, remaining_words))
    return float(compute_entropy(sizes, n))


def calculate_expected_remaining(guess: str, remaining_words: Sequence[str]) -> float:
    """Expected number of pool words left after guessing ``guess``."""
    n = len(remaining_words)
    if n == 0:
        return 0.0
    sizes = get_partition_sizes(_feedback_row(guess, remaining_words))
    return float(compute_expected_remaining(sizes, n))


def calculate_information_gain(entropy: float, remaining_count: int) -> float:
    """Entropy as a percentage of the maximum possible, log2(n)."""
    if remaining_count <= 1:
        return 100.0
    return entropy / math.log2(remaining_count) * 100


def get_pattern_distribution(guess: str, remaining_words: Sequence[str],
                             sample_size: int = 5) -> Dict[int, Dict]:
    """
    Pattern distribution for a guess.

    Returns:
        {pattern: {'count', 'percentage', 'sample_words'}} in first-seen order
    """
    words = _prepare(remaining_words)
    n = len(words)
    if n == 0:
        return {}

    pattern_to_words: Dict[int, List[str]] = {}
    for word, fb in zip(words, _feedback_row(guess, words)):
        pattern_to_words.setdefault(int(fb), []).append(word)

    return {
        pattern: {
            'count': len(group),
            'percentage': len(group) / n * 100,
            'sample_words': group[:sample_size],
        }
        for pattern, group in pattern_to_words.items()
    }


def compare_guesses(guess1: str, guess2: str, remaining_words: Sequence[str]) -> int:
    """1 if guess1 is better, -1 if guess2 is better, 0 if nearly equal."""
    entropy1 = calculate_entropy(guess1, remaining_words)
    entropy2 = calculate_entropy(guess2, remaining_words)

    if abs(entropy1 - entropy2) < 0.001:
        return 0
    return 1 if entropy1 > entropy2 else -1


# ============================================================================
# RANKING
# ============================================================================

def rank_words_by_entropy(candidate_words: Sequence[str],
                          remaining_words: Sequence[str],
                          max_results: Optional[int] = DEFAULT_MAX_RESULTS,
                          progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
                          on_progress: Optional[ProgressCallback] = None) -> List[WordSuggestion]:
    """
    Rank candidate guesses by entropy against the remaining pool.

    Args:
        candidate_words: Words to evaluate as guesses
        remaining_words: Words that could still be the answer
        max_results: Keep only the top N (None keeps all)
        progress_interval: Report progress every N candidates
        on_progress: Called with (processed, total)

    Returns:
        Suggestions sorted by entropy descending; ties keep input order
    """
    if not remaining_words:
        return []

    if len(remaining_words) == 1:
        return [WordSuggestion(word=normalize_word(remaining_words[0]), entropy=0.0, remaining_words=1)]

    candidates = _prepare(candidate_words)
    total = len(candidates)
    if total == 0:
        return []

    guess_chars = words_to_chars(candidates)
    answer_chars = words_to_chars(_prepare(remaining_words))

    entropies = np.zeros(total, dtype=np.float64)
    expected = np.zeros(total, dtype=np.float64)

    for start in range(0, total, progress_interval):
        end = min(start + progress_interval, total)
        matrix = compute_feedback_matrix(guess_chars[start:end], answer_chars)
        entropies[start:end], expected[start:end] = score_feedback_rows(matrix)
        if on_progress is not None:
            on_progress(end, total)

    logger.debug("Ranked %d candidates against %d remaining words", total, len(answer_chars))

    # sorted() is stable, so equal entropies keep candidate order
    order = sorted(range(total), key=lambda i: -entropies[i])
    if max_results is not None:
        order = order[:max_results]

    return [
        WordSuggestion(
            word=candidates[i],
            entropy=float(entropies[i]),
            remaining_words=round_half_up(expected[i]),
        )
        for i in order
    ]


def get_best_guess(candidate_words: Sequence[str], remaining_words: Sequence[str]) -> Optional[str]:
    """The highest-entropy candidate, or the answer itself if only one remains."""
    if not candidate_words:
        return None
    if len(remaining_words) == 1:
        return normalize_word(remaining_words[0])

    ranked = rank_words_by_entropy(candidate_words, remaining_words, max_results=1)
    return ranked[0].word if ranked else None
