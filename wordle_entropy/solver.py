"""
Solver Orchestrator
===================

Guess history + dictionary -> ranked suggestions:

1. No guesses yet: the precomputed opener table (never recomputed at runtime)
2. Build constraints from the history and filter the possible answers
3. One word left: that word is the answer
4. Nothing left: re-filter the full dictionary (the answer may be missing from
   the curated list); still nothing means no candidates
5. Candidates = remaining words + the first N allowed guesses not already
   included, capped for latency
6. Pools above the heuristic threshold are ranked by letter frequency over the
   pool itself; otherwise by entropy over the candidates
"""

import logging
import time
from typing import List, Optional, Sequence, Tuple

from .config import SolverConfig
from .constraints import build_constraints
from .dictionary import Dictionary
from .entropy import ProgressCallback, rank_words_by_entropy
from .filtering import filter_words
from .heuristic import rank_words_by_frequency
from .models import GuessResult, ScoringMode, SolveResult, WordSuggestion
from .openers import OpenerTable, load_openers

logger = logging.getLogger(__name__)


def find_remaining_words(guesses: Sequence[GuessResult],
                         possible_answers: Sequence[str],
                         all_words: Optional[Sequence[str]] = None) -> Tuple[List[str], bool]:
    """
    Filter the possible answers against the history, falling back to the
    full word list when the strict filter leaves nothing.

    Returns:
        (remaining_words, used_fallback)
    """
    constraints = build_constraints(guesses)
    remaining = filter_words(possible_answers, constraints)

    if not remaining and all_words:
        logger.warning("No possible answer matches the clues; switching to the full dictionary")
        remaining = filter_words(all_words, constraints)
        return remaining, True

    return remaining, False


def build_candidate_words(remaining_words: Sequence[str],
                          allowed_guesses: Sequence[str],
                          top_allowed: int = 100,
                          max_candidates: int = 2000) -> List[str]:
    """All remaining words plus the first ``top_allowed`` other allowed guesses."""
    candidates = dict.fromkeys(remaining_words)

    added = 0
    for word in allowed_guesses:
        if added >= top_allowed:
            break
        if word not in candidates:
            candidates[word] = None
            added += 1

    return list(candidates)[:max_candidates]


def rank_pool(remaining_words: Sequence[str],
              allowed_guesses: Sequence[str],
              config: Optional[SolverConfig] = None,
              on_progress: Optional[ProgressCallback] = None) -> Tuple[List[WordSuggestion], ScoringMode]:
    """Steps 5-6: pick the ranking mode for the pool and rank it."""
    config = config or SolverConfig()

    if len(remaining_words) > config.heuristic_threshold:
        logger.debug("Pool of %d exceeds %d, using letter-frequency ranking",
                     len(remaining_words), config.heuristic_threshold)
        suggestions = rank_words_by_frequency(remaining_words, remaining_words,
                                              max_results=config.max_suggestions,
                                              on_progress=on_progress,
                                              progress_interval=config.progress_interval)
        return suggestions, ScoringMode.HEURISTIC

    candidates = build_candidate_words(remaining_words, allowed_guesses,
                                       config.top_allowed_guesses, config.max_candidates)
    logger.debug("Ranking %d candidates against %d remaining words",
                 len(candidates), len(remaining_words))
    suggestions = rank_words_by_entropy(candidates, remaining_words,
                                        max_results=config.max_suggestions,
                                        progress_interval=config.progress_interval,
                                        on_progress=on_progress)
    return suggestions, ScoringMode.ENTROPY


def suggest_for_pool(remaining_words: Sequence[str],
                     allowed_guesses: Sequence[str],
                     config: Optional[SolverConfig] = None,
                     on_progress: Optional[ProgressCallback] = None,
                     used_fallback: bool = False) -> SolveResult:
    """Steps 3-7 for an already filtered pool."""
    t0 = time.time()
    n = len(remaining_words)

    if n == 0:
        return SolveResult(suggestions=[], mode=ScoringMode.NO_CANDIDATES,
                           remaining_count=0, used_fallback=used_fallback)

    if n == 1:
        only = WordSuggestion(word=remaining_words[0], entropy=0.0, remaining_words=1)
        return SolveResult(suggestions=[only], mode=ScoringMode.SOLVED,
                           remaining_count=1, used_fallback=used_fallback)

    suggestions, mode = rank_pool(remaining_words, allowed_guesses, config, on_progress)
    return SolveResult(suggestions=suggestions, mode=mode,
                       calculation_time=time.time() - t0,
                       remaining_count=n, used_fallback=used_fallback)


def solve(guesses: Sequence[GuessResult],
          dictionary: Dictionary,
          config: Optional[SolverConfig] = None,
          openers: Optional[OpenerTable] = None,
          on_progress: Optional[ProgressCallback] = None) -> SolveResult:
    """
    Compute ranked suggestions for a guess history.

    Args:
        guesses: Accepted guesses with their clues, oldest first
        dictionary: Possible answers (initial pool) and allowed guesses
        config: Thresholds and limits
        openers: Opener table to use for an empty history
        on_progress: Called with (processed, total) while ranking

    Returns:
        SolveResult with suggestions, scoring mode and wall-clock time
    """
    config = config or SolverConfig()
    t0 = time.time()

    if not guesses:
        table = openers or load_openers()
        return SolveResult(suggestions=table.top(config.opener_count), mode=ScoringMode.OPENER,
                           remaining_count=len(dictionary.possible_answers))

    remaining, used_fallback = find_remaining_words(guesses, dictionary.possible_answers,
                                                    dictionary.all_words)
    allowed = dictionary.allowed_guesses or dictionary.all_words
    result = suggest_for_pool(remaining, allowed, config, on_progress, used_fallback)

    return SolveResult(suggestions=result.suggestions, mode=result.mode,
                       calculation_time=time.time() - t0,
                       remaining_count=result.remaining_count,
                       used_fallback=used_fallback)
