"""
Game Session State
==================

Pure transitions over ``GameState``:

    IN_PROGRESS --win-------------------> WON
    IN_PROGRESS --pool empty------------> LOST_NO_CANDIDATES
    IN_PROGRESS --max guesses reached---> LOST_NO_ATTEMPTS

Terminal states ignore further guesses. The pool is recomputed from the full
history on each guess, including the fallback to the full dictionary, and
completion is decided from that broadened pool.
"""

from typing import Dict, Optional, Sequence

from .config import MAX_GUESSES
from .errors import GuessRejected
from .models import Clue, GameState, GameStatus, GuessResult
from .solver import find_remaining_words

_CLUE_SYMBOLS = {Clue.CORRECT: '🟩', Clue.PRESENT: '🟨', Clue.ABSENT: '⬜'}


def create_initial_state(possible_answers: Sequence[str]) -> GameState:
    return GameState(remaining_words=tuple(possible_answers))


def validate_guess(word: str, state: GameState, valid_words,
                   max_guesses: int = MAX_GUESSES):
    """
    Check a guess before it is applied.

    Args:
        valid_words: container supporting ``in`` (set, Dictionary.all_words...)

    Raises:
        GuessRejected: with a human-readable reason
    """
    if state.is_complete:
        raise GuessRejected(word, 'Game is already complete')

    w = word.strip().lower() if isinstance(word, str) else ''
    if len(w) != 5 or not w.isalpha():
        raise GuessRejected(word, 'Word must be exactly 5 letters')

    if w not in valid_words:
        raise GuessRejected(word, 'Word not in dictionary')

    if w in state.guessed_words:
        raise GuessRejected(word, 'Word already guessed')

    if len(state.guesses) >= max_guesses:
        raise GuessRejected(word, 'Maximum guesses reached')


def apply_guess(state: GameState, guess: GuessResult,
                possible_answers: Sequence[str],
                all_words: Optional[Sequence[str]] = None,
                max_guesses: int = MAX_GUESSES) -> GameState:
    """Return the state after ``guess``; terminal states are returned unchanged."""
    if state.is_complete:
        return state

    guesses = state.guesses + (guess,)
    remaining, used_fallback = find_remaining_words(guesses, possible_answers, all_words)

    if guess.is_winning:
        status = GameStatus.WON
    elif not remaining:
        status = GameStatus.LOST_NO_CANDIDATES
    elif len(guesses) >= max_guesses:
        status = GameStatus.LOST_NO_ATTEMPTS
    else:
        status = GameStatus.IN_PROGRESS

    if status == GameStatus.WON:
        solution = guess.word
    elif len(remaining) == 1:
        solution = remaining[0]
    else:
        # The pool may have widened through the fallback
        solution = None

    return GameState(
        guesses=guesses,
        remaining_words=tuple(remaining),
        current_guess='',
        status=status,
        solution=solution,
        used_fallback=used_fallback,
    )


# ============================================================================
# DERIVED STATE
# ============================================================================

def remaining_attempts(state: GameState, max_guesses: int = MAX_GUESSES) -> int:
    return max(0, max_guesses - len(state.guesses))


def game_status_text(state: GameState, max_guesses: int = MAX_GUESSES) -> str:
    n = len(state.guesses)
    if state.status == GameStatus.WON:
        return f"Won in {n} {'guess' if n == 1 else 'guesses'}!"
    if state.status == GameStatus.LOST_NO_ATTEMPTS:
        return 'Game over - no guesses remaining'
    if state.status == GameStatus.LOST_NO_CANDIDATES:
        return 'No candidates - the answer is not in any known dictionary or the clues contradict'

    remaining = remaining_attempts(state, max_guesses)
    return f"{remaining} {'guess' if remaining == 1 else 'guesses'} remaining"


def get_hint(remaining_words: Sequence[str]) -> str:
    count = len(remaining_words)

    if count == 0:
        return 'No possible words remaining - check your clues'
    if count == 1:
        return f"Only one word possible: {remaining_words[0].upper()}"
    if count <= 5:
        return f"{count} words possible: {', '.join(w.upper() for w in remaining_words)}"
    if count <= 20:
        return f"{count} words still possible"
    if count <= 100:
        return f"{count} words remaining - try to eliminate more"
    return f"{count} words remaining - use high-entropy guesses"


def game_progress(state: GameState, max_guesses: int = MAX_GUESSES) -> float:
    """Share of attempts used, 0-100."""
    return min(100.0, len(state.guesses) / max_guesses * 100)


def format_guess_history(guesses: Sequence[GuessResult]) -> str:
    if not guesses:
        return 'No guesses yet'

    return '\n'.join(
        f"{i}. {g.word.upper()} {''.join(_CLUE_SYMBOLS[c.clue] for c in g.clues)}"
        for i, g in enumerate(guesses, 1)
    )


def should_show_openers(state: GameState) -> bool:
    return len(state.guesses) == 0


def should_calculate_entropy(remaining_count: int) -> bool:
    # One word left is the answer; nothing to rank
    return remaining_count > 1


def calculate_game_stats(state: GameState, initial_count: int,
                         max_guesses: int = MAX_GUESSES) -> Dict:
    remaining = len(state.remaining_words)
    eliminated = initial_count - remaining if initial_count else 0
    return {
        'total_guesses': len(state.guesses),
        'remaining_attempts': remaining_attempts(state, max_guesses),
        'remaining_words': remaining,
        'efficiency': eliminated / initial_count * 100 if initial_count else 0.0,
        'is_won': state.status == GameStatus.WON,
        'is_lost': state.status in (GameStatus.LOST_NO_ATTEMPTS, GameStatus.LOST_NO_CANDIDATES),
    }
