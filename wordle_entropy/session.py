"""
Interactive solving session.

Ties the pure game transitions to the ranking worker. The session owns the
current GameState and the latest suggestions; a new guess or a reset discards
any in-flight ranking so stale results never overwrite fresh state.
"""

import logging
from concurrent.futures import Future
from typing import Dict, List, Optional, Sequence, Union

from .config import SolverConfig
from .constraints import create_guess_result
from .dictionary import Dictionary
from .entropy import ProgressCallback
from .errors import CalculationInProgress, GuessRejected, InvalidWordError
from .game import (apply_guess, calculate_game_stats, create_initial_state,
                   game_status_text, get_hint, validate_guess)
from .models import Clue, GameState, GameStatus, ScoringMode, SolveResult, WordSuggestion
from .openers import OpenerTable, load_openers
from .solver import suggest_for_pool
from .worker import RankingWorker

logger = logging.getLogger(__name__)

_TERMINAL_MODES = {
    GameStatus.WON: ScoringMode.SOLVED,
    GameStatus.LOST_NO_CANDIDATES: ScoringMode.NO_CANDIDATES,
    GameStatus.LOST_NO_ATTEMPTS: ScoringMode.OUT_OF_ATTEMPTS,
}


def _resolved(result: SolveResult) -> Future:
    future = Future()
    future.set_result(result)
    return future


class SolverSession:
    """
    One game: submit guesses with their clues, request ranked suggestions.

    With ``use_worker=False`` ranking runs inline on the calling thread and
    every returned future is already resolved.
    """

    def __init__(self, dictionary: Dictionary,
                 config: Optional[SolverConfig] = None,
                 openers: Optional[OpenerTable] = None,
                 worker: Optional[RankingWorker] = None,
                 use_worker: bool = True):
        self.dictionary = dictionary
        self.config = config or SolverConfig()
        self.openers = openers or load_openers()

        self._owns_worker = worker is None and use_worker
        self._worker = worker if worker is not None else (RankingWorker() if use_worker else None)

        self._state = create_initial_state(dictionary.possible_answers)
        self._result: Optional[SolveResult] = self._opener_result()
        self._future: Optional[Future] = None

    # ------------------------------------------------------------------ state

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def status(self) -> GameStatus:
        return self._state.status

    @property
    def remaining_words(self) -> List[str]:
        return list(self._state.remaining_words)

    @property
    def result(self) -> Optional[SolveResult]:
        """Latest suggestions for the current state, or None while stale."""
        return self._result

    @property
    def suggestions(self) -> List[WordSuggestion]:
        return list(self._result.suggestions) if self._result else []

    @property
    def suggestion_mode(self) -> Optional[ScoringMode]:
        return self._result.mode if self._result else None

    @property
    def showing_openers(self) -> bool:
        return self.suggestion_mode == ScoringMode.OPENER

    @property
    def calculation_time(self) -> float:
        return self._result.calculation_time if self._result else 0.0

    @property
    def is_calculating(self) -> bool:
        return self._worker is not None and self._worker.is_calculating

    @property
    def progress(self) -> float:
        return self._worker.progress if self.is_calculating else 0.0

    @property
    def status_text(self) -> str:
        return game_status_text(self._state, self.config.max_guesses)

    @property
    def hint(self) -> str:
        return get_hint(self._state.remaining_words)

    def stats(self) -> Dict:
        return calculate_game_stats(self._state, len(self.dictionary.possible_answers),
                                    self.config.max_guesses)

    # -------------------------------------------------------------- transitions

    def submit_guess(self, word: str, clues: Sequence[Union[Clue, int, str]]) -> GameState:
        """
        Validate and apply one guess.

        Raises:
            GuessRejected: the guess is invalid for the current state
        """
        validate_guess(word, self._state, self.dictionary, self.config.max_guesses)
        try:
            guess = create_guess_result(word, clues)
        except InvalidWordError as e:
            raise GuessRejected(word, str(e)) from e

        self._discard_calculation()
        self._state = apply_guess(self._state, guess, self.dictionary.possible_answers,
                                  self.dictionary.all_words, self.config.max_guesses)
        self._result = None

        logger.debug("Applied %s: %d words remaining, status %s",
                     guess.word, len(self._state.remaining_words), self._state.status.value)
        return self._state

    def reset(self) -> GameState:
        self._discard_calculation()
        self._state = create_initial_state(self.dictionary.possible_answers)
        self._result = self._opener_result()
        logger.info("Session reset")
        return self._state

    # -------------------------------------------------------------- suggestions

    def request_suggestions(self, on_progress: Optional[ProgressCallback] = None) -> Future:
        """
        Start ranking for the current state.

        Returns a future resolving to a SolveResult. Cheap cases (openers, a
        decided or empty pool, a finished game) resolve immediately. While a
        calculation is already running the running request's future is
        returned instead of starting another.
        """
        state = self._state
        immediate = self._immediate_result(state)
        if immediate is not None:
            self._result = immediate
            return _resolved(immediate)

        if self._worker is None:
            result = suggest_for_pool(state.remaining_words, self._allowed_guesses,
                                      self.config, on_progress, state.used_fallback)
            self._result = result
            return _resolved(result)

        try:
            future = self._worker.rank(state.remaining_words, self._allowed_guesses,
                                       self.config, on_progress, state.used_fallback)
        except CalculationInProgress:
            # Busy with a request this session did not make
            if self._future is None:
                raise
            logger.debug("Suggestion request ignored: calculation already in progress")
            return self._future

        self._future = future
        future.add_done_callback(lambda f: self._store_result(state, f))
        return future

    def refresh_suggestions(self, timeout: Optional[float] = None) -> SolveResult:
        """Blocking variant of request_suggestions."""
        state = self._state
        result = self.request_suggestions().result(timeout)
        # Done-callbacks may still be pending on the listener thread
        if state is self._state:
            self._result = result
        return result

    def cancel(self) -> bool:
        return self._discard_calculation()

    # ---------------------------------------------------------------- helpers

    @property
    def _allowed_guesses(self) -> List[str]:
        return self.dictionary.allowed_guesses or self.dictionary.all_words

    def _opener_result(self) -> SolveResult:
        return SolveResult(suggestions=self.openers.top(self.config.opener_count),
                           mode=ScoringMode.OPENER,
                           remaining_count=len(self.dictionary.possible_answers))

    def _immediate_result(self, state: GameState) -> Optional[SolveResult]:
        if not state.guesses:
            return self._opener_result()

        n = len(state.remaining_words)
        if state.is_complete:
            mode = _TERMINAL_MODES[state.status]
            return SolveResult(suggestions=[], mode=mode, remaining_count=n,
                               used_fallback=state.used_fallback)

        if n <= 1:
            return suggest_for_pool(state.remaining_words, self._allowed_guesses,
                                    self.config, used_fallback=state.used_fallback)
        return None

    def _store_result(self, state: GameState, future: Future):
        if future.cancelled() or future.exception() is not None:
            return
        # Drop results computed for a state that has since moved on
        if state is self._state:
            self._result = future.result()

    def _discard_calculation(self) -> bool:
        self._future = None
        if self._worker is not None and self._worker.is_calculating:
            return self._worker.cancel()
        return False

    # -------------------------------------------------------------- lifecycle

    def close(self):
        self._discard_calculation()
        if self._owns_worker and self._worker is not None:
            self._worker.shutdown()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
