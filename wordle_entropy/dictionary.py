"""
Word list loading.

Wordle uses TWO word lists:
- Possible answers (~2315 words): curated list of daily answers, the initial pool
- Allowed guesses (~10657 words): every valid 5-letter guess

The solver works against their deduplicated union. Lists are plain text (one
word per line) or a JSON array of strings. Loading never silently accepts an
empty or malformed list.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from typing import List, Sequence

from .errors import DictionaryLoadError, InvalidWordError
from .patterns import normalize_word

logger = logging.getLogger(__name__)


def load_words(filepath: str) -> List[str]:
    """
    Load a word list from a .txt (one word per line) or .json (array) file.

    Raises:
        DictionaryLoadError: file missing/unreadable, empty, or holding a
            word that is not 5 letters a-z
    """
    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            if filepath.endswith('.json'):
                raw = json.load(f)
                if not isinstance(raw, list):
                    raise DictionaryLoadError(f"{filepath}: expected a JSON array of words")
            else:
                raw = [line for line in f if line.strip()]
    except OSError as e:
        raise DictionaryLoadError(f"Failed to load word list {filepath}: {e}") from e
    except json.JSONDecodeError as e:
        raise DictionaryLoadError(f"Could not parse JSON from {filepath}: {e}") from e

    try:
        words = dedupe(normalize_word(w) for w in raw)
    except InvalidWordError as e:
        raise DictionaryLoadError(f"{filepath}: {e}") from e

    if not words:
        raise DictionaryLoadError(f"Word list {filepath} is empty")
    return words


def dedupe(words) -> List[str]:
    """Drop repeats, keeping first-seen order."""
    return list(dict.fromkeys(words))


@dataclass(frozen=True)
class Dictionary:
    possible_answers: List[str]
    allowed_guesses: List[str]
    all_words: List[str] = field(init=False)

    def __post_init__(self):
        if not self.possible_answers:
            raise DictionaryLoadError("Possible answers list is empty")
        object.__setattr__(self, 'all_words', all_valid_words(self.possible_answers, self.allowed_guesses))
        object.__setattr__(self, '_valid', frozenset(self.all_words))

    def is_valid(self, word: str) -> bool:
        return word.lower() in self._valid

    def __contains__(self, word: str) -> bool:
        return isinstance(word, str) and self.is_valid(word)

    @classmethod
    def from_words(cls, possible_answers: Sequence[str],
                   allowed_guesses: Sequence[str] = ()) -> "Dictionary":
        try:
            answers = dedupe(normalize_word(w) for w in possible_answers)
            guesses = dedupe(normalize_word(w) for w in allowed_guesses)
        except InvalidWordError as e:
            raise DictionaryLoadError(str(e)) from e
        return cls(answers, guesses)


def load_dictionaries(answers_path: str, guesses_path: str) -> Dictionary:
    """Load both word lists. Any failure is fatal."""
    answers = load_words(answers_path)
    guesses = load_words(guesses_path)
    dictionary = Dictionary(answers, guesses)
    logger.info("Loaded %d possible answers and %d allowed guesses (%d unique words)",
                len(answers), len(guesses), len(dictionary.all_words))
    return dictionary


def load_default_dictionaries(base_dir: str) -> Dictionary:
    """Load ``words/answers.txt`` and ``words/allowed_guesses.txt`` under base_dir."""
    return load_dictionaries(os.path.join(base_dir, "words", "answers.txt"),
                             os.path.join(base_dir, "words", "allowed_guesses.txt"))


def all_valid_words(possible_answers: Sequence[str], allowed_guesses: Sequence[str]) -> List[str]:
    """Union of both lists, answers first, duplicates removed."""
    return dedupe(list(possible_answers) + list(allowed_guesses))


def is_valid_word(word: str, dictionary: Dictionary) -> bool:
    return dictionary.is_valid(word)


def is_possible_answer(word: str, possible_answers: Sequence[str]) -> bool:
    return word.lower() in possible_answers
