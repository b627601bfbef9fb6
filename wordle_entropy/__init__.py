"""
Wordle Entropy Solver
=====================

Ranks guesses by the Shannon entropy of the feedback they would produce
against the remaining candidate words, with a letter-frequency heuristic for
large pools and a precomputed opener table for the first turn.
"""

__version__ = "1.0.0"

from .config import SolverConfig, load_config_from_file, save_config
from .constraints import build_constraints, create_guess_result, parse_clues
from .dictionary import Dictionary, load_dictionaries, load_words
from .entropy import calculate_entropy, calculate_expected_remaining, rank_words_by_entropy
from .errors import (CalculationCancelled, CalculationFailed, CalculationInProgress,
                     ComputationError, DictionaryLoadError, GuessRejected,
                     InvalidWordError, WordleError, WorkerCrashed)
from .filtering import filter_words, matches_constraints
from .game import apply_guess, create_initial_state, validate_guess
from .heuristic import rank_words_by_frequency
from .models import (Clue, GameState, GameStatus, GuessResult, LetterClue, ScoringMode,
                     SolveResult, WordConstraints, WordSuggestion)
from .openers import OpenerTable, load_openers
from .patterns import compute_pattern, decode_pattern, encode_digits
from .session import SolverSession
from .solver import solve
from .worker import RankingWorker
