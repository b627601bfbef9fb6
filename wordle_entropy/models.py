"""
Data structures shared by the solver core, the worker and the session.

Everything here is picklable so it can cross the worker process boundary.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Dict, List, Optional, Set, Tuple


class Clue(IntEnum):
    """Per-letter feedback. The value is the base-3 digit used in patterns."""
    ABSENT = 0   # gray
    PRESENT = 1  # yellow
    CORRECT = 2  # green


@dataclass(frozen=True)
class LetterClue:
    letter: str
    position: int
    clue: Clue


@dataclass(frozen=True)
class GuessResult:
    """A guessed word with one clue per position (``clues[i].position == i``)."""
    word: str
    clues: Tuple[LetterClue, ...]

    @property
    def is_winning(self) -> bool:
        return all(c.clue == Clue.CORRECT for c in self.clues)


@dataclass
class WordConstraints:
    """Knowledge accumulated from every guess so far."""
    correct_positions: Dict[int, str] = field(default_factory=dict)
    present_letters: Set[str] = field(default_factory=set)
    absent_letters: Set[str] = field(default_factory=set)
    wrong_positions: Dict[str, Set[int]] = field(default_factory=dict)
    min_letter_count: Dict[str, int] = field(default_factory=dict)
    exact_letter_counts: Dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class WordSuggestion:
    word: str
    entropy: float
    # Expected pool size after this guess (None for heuristic scores)
    remaining_words: Optional[int] = None


class ScoringMode(Enum):
    """What the ``entropy`` field of a suggestion list actually holds."""
    OPENER = "opener"          # precomputed table, true bits
    ENTROPY = "entropy"        # Shannon entropy in bits
    HEURISTIC = "heuristic"    # letter-frequency score, not bits
    SOLVED = "solved"          # single remaining candidate
    NO_CANDIDATES = "none"     # nothing left, even after fallback
    OUT_OF_ATTEMPTS = "out_of_attempts"  # lost on guesses, candidates remain


@dataclass(frozen=True)
class SolveResult:
    suggestions: List[WordSuggestion]
    mode: ScoringMode
    calculation_time: float = 0.0
    remaining_count: int = 0
    used_fallback: bool = False

    @property
    def no_candidates(self) -> bool:
        return self.mode == ScoringMode.NO_CANDIDATES


class GameStatus(Enum):
    IN_PROGRESS = "in_progress"
    WON = "won"
    LOST_NO_ATTEMPTS = "lost_no_attempts"
    LOST_NO_CANDIDATES = "lost_no_candidates"


@dataclass(frozen=True)
class GameState:
    """
    One solving session's state. Never mutated; transitions return a new
    instance (see ``wordle_entropy.game``).
    """
    guesses: Tuple[GuessResult, ...] = ()
    remaining_words: Tuple[str, ...] = ()
    current_guess: str = ""
    status: GameStatus = GameStatus.IN_PROGRESS
    solution: Optional[str] = None
    used_fallback: bool = False

    @property
    def is_complete(self) -> bool:
        return self.status != GameStatus.IN_PROGRESS

    @property
    def is_won(self) -> bool:
        return self.status == GameStatus.WON

    @property
    def guessed_words(self) -> List[str]:
        return [g.word for g in self.guesses]
