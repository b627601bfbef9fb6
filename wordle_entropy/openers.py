"""
Precomputed opening moves.

Ranking every possible answer against every other on the first turn costs
millions of pattern computations, so the top openers are computed once
offline and shipped as ``data/openers.json``. The shipped table ranks every
valid word (answers and allowed guesses) against the possible-answers pool:

    python -m wordle_entropy.openers words/answers.txt -g words/allowed_guesses.txt
"""

import argparse
import json
import logging
import os
import sys
import time
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from .dictionary import all_valid_words, load_words
from .entropy import rank_words_by_entropy
from .models import WordSuggestion

logger = logging.getLogger(__name__)

DEFAULT_OPENERS_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "data", "openers.json")
TABLE_VERSION = 1
ENTROPY_DECIMALS = 3

# What the openers were drawn from; the pool they are scored against is
# always the possible answers
CANDIDATES_ANSWERS = "possible-answers"
CANDIDATES_ALL_WORDS = "all-words"


@dataclass(frozen=True)
class OpenerTable:
    openers: Tuple[WordSuggestion, ...]
    version: int = TABLE_VERSION
    pool: str = "possible-answers"
    candidates: str = CANDIDATES_ANSWERS
    pool_size: int = 0

    @property
    def words(self) -> List[str]:
        return [s.word for s in self.openers]

    def top(self, n: Optional[int] = None) -> List[WordSuggestion]:
        return list(self.openers if n is None else self.openers[:n])

    def to_dict(self) -> Dict:
        return {
            "version": self.version,
            "pool": self.pool,
            "candidates": self.candidates,
            "pool_size": self.pool_size,
            "openers": [
                {"word": s.word, "entropy": s.entropy, "remaining_words": s.remaining_words}
                for s in self.openers
            ],
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "OpenerTable":
        try:
            openers = tuple(
                WordSuggestion(word=o["word"], entropy=float(o["entropy"]),
                               remaining_words=o.get("remaining_words"))
                for o in data["openers"]
            )
            return cls(openers=openers, version=int(data["version"]),
                       pool=data.get("pool", "possible-answers"),
                       candidates=data.get("candidates", CANDIDATES_ANSWERS),
                       pool_size=int(data.get("pool_size", 0)))
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Malformed opener table: {e}") from e


def load_openers(path: Optional[str] = None) -> OpenerTable:
    """Load the opener table (defaults to the one shipped with the package)."""
    path = path or DEFAULT_OPENERS_PATH
    with open(path, 'r', encoding='utf-8') as f:
        table = OpenerTable.from_dict(json.load(f))
    logger.debug("Loaded %d openers (v%d) from %s", len(table.openers), table.version, path)
    return table


def save_openers(table: OpenerTable, path: str):
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(table.to_dict(), f, indent=2)
        f.write("\n")


def build_opener_table(possible_answers: Sequence[str],
                       allowed_guesses: Sequence[str] = (),
                       top_n: int = 10,
                       version: int = TABLE_VERSION, verbose: bool = False) -> OpenerTable:
    """
    Rank opening guesses against the possible-answers pool.

    Candidates are the answers followed by any allowed guesses not already
    among them, so words like SOARE can open even though they are never the
    answer. Without allowed guesses the pool is ranked against itself.
    """
    def report(processed: int, total: int):
        if verbose and (processed % 500 == 0 or processed == total):
            print(f"[{processed}/{total}] candidates ranked")

    candidates = all_valid_words(possible_answers, allowed_guesses)

    t0 = time.time()
    ranked = rank_words_by_entropy(candidates, possible_answers,
                                   max_results=top_n, on_progress=report)
    if verbose:
        print(f"Done in {time.time() - t0:.1f}s")

    openers = tuple(
        WordSuggestion(word=s.word, entropy=round(s.entropy, ENTROPY_DECIMALS),
                       remaining_words=s.remaining_words)
        for s in ranked
    )
    return OpenerTable(openers=openers, version=version,
                       candidates=CANDIDATES_ALL_WORDS if allowed_guesses else CANDIDATES_ANSWERS,
                       pool_size=len(possible_answers))


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Regenerate the precomputed opener table.")
    parser.add_argument("answers", help="possible answers word list (.txt or .json)")
    parser.add_argument("-g", "--guesses", help="allowed guesses word list, also tried as openers")
    parser.add_argument("-o", "--output", default=DEFAULT_OPENERS_PATH)
    parser.add_argument("--top", type=int, default=10)
    parser.add_argument("--version", type=int, default=TABLE_VERSION)
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper())

    answers = load_words(args.answers)
    guesses = load_words(args.guesses) if args.guesses else []
    print(f"Ranking {len(answers) + len(guesses)} words against {len(answers)} answers...")
    table = build_opener_table(answers, guesses, top_n=args.top, version=args.version, verbose=True)
    save_openers(table, args.output)

    for s in table.openers:
        print(f"  {s.word}  {s.entropy:.3f} bits  ~{s.remaining_words} left")
    print(f"Saved to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
