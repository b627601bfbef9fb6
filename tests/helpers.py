from itertools import islice, product

from wordle_entropy.dictionary import Dictionary
from wordle_entropy.patterns import compute_pattern, guess_result_from_pattern

ANSWERS = ['crate', 'trace', 'irate', 'slate', 'stare', 'arose', 'snare', 'raise',
           'sassy', 'lasso', 'salty', 'fuzzy', 'jazzy', 'audio', 'pouty', 'mound']
GUESSES = ['soare', 'salet', 'roate', 'tares', 'lares']


def small_dictionary() -> Dictionary:
    return Dictionary.from_words(ANSWERS, GUESSES)


def synthetic_words(n: int, letters: str = 'abcdefghij'):
    """n distinct 5-letter words over a small alphabet."""
    return [''.join(p) for p in islice(product(letters, repeat=5), n)]


def feedback(guess: str, answer: str):
    """GuessResult a player would enter after guessing against ``answer``."""
    return guess_result_from_pattern(guess, compute_pattern(guess, answer))


def clue_list(guess: str, answer: str):
    return [c.clue for c in feedback(guess, answer).clues]
