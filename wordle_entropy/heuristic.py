"""
Heuristic Ranker
================

Fallback for pools too large for exact entropy ranking. Scores each word by
the summed frequency of its unique letters, where a letter's frequency is the
fraction of pool words containing it at least once. This approximates "which
guess splits the pool most evenly" in O(n) instead of O(n^2).

The returned ``entropy`` field holds this score, not bits.
"""

import numpy as np
from typing import Dict, List, Optional, Sequence

from .entropy import DEFAULT_MAX_RESULTS, DEFAULT_PROGRESS_INTERVAL, ProgressCallback
from .models import WordSuggestion
from .patterns import normalize_word


def letter_presence_matrix(words: Sequence[str]) -> np.ndarray:
    """(n, 26) boolean matrix: does word i contain letter j at least once."""
    presence = np.zeros((len(words), 26), dtype=np.bool_)
    for i, w in enumerate(words):
        for c in set(w):
            presence[i, ord(c) - ord('a')] = True
    return presence


def letter_frequencies(words: Sequence[str]) -> Dict[str, float]:
    """Fraction of words containing each letter (duplicates count once)."""
    if not words:
        return {}
    freq = letter_presence_matrix(words).mean(axis=0)
    return {chr(ord('a') + j): float(f) for j, f in enumerate(freq) if f > 0}


def score_word(word: str, frequencies: Dict[str, float]) -> float:
    return sum(frequencies.get(c, 0.0) for c in set(word))


def rank_words_by_frequency(candidate_words: Sequence[str],
                            remaining_words: Sequence[str],
                            max_results: Optional[int] = DEFAULT_MAX_RESULTS,
                            on_progress: Optional[ProgressCallback] = None,
                            progress_interval: int = DEFAULT_PROGRESS_INTERVAL) -> List[WordSuggestion]:
    """
    Rank candidates by unique-letter frequency over the remaining pool.

    Returns:
        Suggestions sorted by score descending; ties keep input order
    """
    if not remaining_words:
        return []

    candidates = [normalize_word(w) for w in candidate_words]
    pool = [normalize_word(w) for w in remaining_words]

    freq = letter_presence_matrix(pool).mean(axis=0)
    presence = letter_presence_matrix(candidates).astype(np.float64)

    total = len(candidates)
    scores = np.zeros(total, dtype=np.float64)
    for start in range(0, total, progress_interval):
        end = min(start + progress_interval, total)
        scores[start:end] = presence[start:end] @ freq
        if on_progress is not None:
            on_progress(end, total)

    order = sorted(range(len(candidates)), key=lambda i: -scores[i])
    if max_results is not None:
        order = order[:max_results]

    return [WordSuggestion(word=candidates[i], entropy=float(scores[i])) for i in order]
