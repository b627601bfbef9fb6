"""
Word Filter
===========

Applies a ``WordConstraints`` as a predicate over a word list. Checks run
cheapest-first and a word fails on the first violation; the order never
changes which words pass.
"""

from collections import Counter
from typing import List, Sequence

from .models import WordConstraints


def matches_constraints(word: str, constraints: WordConstraints) -> bool:
    """Check if a single lowercase word satisfies all constraints."""
    # 1: greens
    for pos, letter in constraints.correct_positions.items():
        if word[pos] != letter:
            return False

    # 2: every known letter must appear
    for letter in constraints.present_letters:
        if letter not in word:
            return False

    # 3: grays, unless the letter has an exact count
    for letter in constraints.absent_letters:
        if letter in word and letter not in constraints.exact_letter_counts:
            return False

    # 4: yellows can't sit where they were guessed
    for letter, positions in constraints.wrong_positions.items():
        for pos in positions:
            if word[pos] == letter:
                return False

    counts = Counter(word)

    # 5: duplicates
    for letter, min_count in constraints.min_letter_count.items():
        if letter in constraints.exact_letter_counts:
            continue
        if counts[letter] < min_count:
            return False

    # 6: exact counts are authoritative
    for letter, exact in constraints.exact_letter_counts.items():
        if counts[letter] != exact:
            return False

    return True


def filter_words(words: Sequence[str], constraints: WordConstraints) -> List[str]:
    """Words that satisfy all constraints, in input order."""
    return [w for w in words if matches_constraints(w, constraints)]
