"""
Self-play benchmark: solve every answer in a list by always playing the
top-ranked suggestion, and report the guess distribution.

    python -m wordle_entropy.benchmark words/answers.txt words/allowed_guesses.txt
"""

import argparse
import logging
import sys
import time
from collections import Counter
from typing import Dict, List, Optional, Sequence, Tuple

from .config import SolverConfig, load_config_from_file
from .dictionary import Dictionary, load_dictionaries
from .errors import WordleError
from .models import GameStatus
from .openers import OpenerTable, load_openers
from .patterns import compute_pattern, guess_result_from_pattern
from .session import SolverSession

logger = logging.getLogger(__name__)


def pick_guess(session: SolverSession) -> str:
    """Top suggestion that is a legal, not yet played word."""
    guessed = set(session.state.guessed_words)
    for s in session.suggestions:
        if s.word not in guessed and s.word in session.dictionary:
            return s.word
    # Opener table may not cover a custom dictionary
    return next(w for w in session.remaining_words if w not in guessed)


def play_game(answer: str, session: SolverSession) -> Tuple[int, List[str]]:
    """
    Play one game against a hidden answer.

    Returns:
        (guesses used, or max_guesses + 1 on a loss; words played)
    """
    session.reset()
    while not session.state.is_complete:
        session.refresh_suggestions()
        guess = pick_guess(session)
        clues = guess_result_from_pattern(guess, compute_pattern(guess, answer))
        session.submit_guess(guess, [c.clue for c in clues.clues])

    played = session.state.guessed_words
    if session.status == GameStatus.WON:
        return len(played), played
    return session.config.max_guesses + 1, played


def benchmark(dictionary: Dictionary, test_words: Optional[Sequence[str]] = None,
              config: Optional[SolverConfig] = None,
              openers: Optional[OpenerTable] = None,
              verbose: bool = True) -> Dict:
    """
    Benchmark the solver on a word list.

    Args:
        dictionary: Word lists the solver plays with
        test_words: Answers to solve (default: all possible answers)
        verbose: Print progress

    Returns:
        Dict with results
    """
    if test_words is None:
        test_words = dictionary.possible_answers

    results = []
    dist = Counter()
    failures = []

    start = time.time()
    with SolverSession(dictionary, config, openers, use_worker=False) as session:
        for i, word in enumerate(test_words):
            if verbose and i % 100 == 0:
                elapsed = time.time() - start
                rate = i / elapsed if elapsed > 0 else 0
                avg = sum(results) / len(results) if results else 0
                print(f"[{i}/{len(test_words)}] {rate:.1f} w/s, avg={avg:.4f}")

            try:
                n, _ = play_game(word, session)
            except WordleError as e:
                logger.error("Game for %s aborted: %s", word, e)
                n = session.config.max_guesses + 1
            results.append(n)
            dist[n] += 1
            if n > session.config.max_guesses:
                failures.append(word)

    elapsed = time.time() - start

    return {
        'total': len(test_words),
        'average': sum(results) / len(results) if results else 0.0,
        'distribution': dict(sorted(dist.items())),
        'failures': len(failures),
        'failed_words': failures[:20],
        'time': elapsed,
        'rate': len(test_words) / elapsed if elapsed > 0 else 0.0,
    }


def print_results(results: Dict):
    """Pretty print benchmark results."""
    total = results['total'] or 1
    print("\n" + "=" * 50)
    print("BENCHMARK RESULTS")
    print("=" * 50)
    print(f"Words tested: {results['total']}")
    print(f"Average guesses: {results['average']:.4f}")
    print(f"Failures: {results['failures']} ({100*results['failures']/total:.2f}%)")
    print(f"Time: {results['time']:.1f}s ({results['rate']:.1f} words/sec)")
    print("\nDistribution:")
    for n, count in results['distribution'].items():
        pct = 100 * count / total
        bar = "█" * int(pct / 2)
        print(f"  {n}: {count:5d} ({pct:5.2f}%) {bar}")
    if results['failed_words']:
        print(f"\nFailed words: {results['failed_words']}")
    print("=" * 50)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Benchmark the entropy solver by self-play.")
    parser.add_argument("answers", help="possible answers word list (.txt or .json)")
    parser.add_argument("guesses", help="allowed guesses word list (.txt or .json)")
    parser.add_argument("--config", help="solver config JSON file")
    parser.add_argument("--openers", help="opener table JSON file")
    parser.add_argument("--limit", type=int, help="only play the first N answers")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper())

    dictionary = load_dictionaries(args.answers, args.guesses)
    config = load_config_from_file(args.config) if args.config else SolverConfig()
    openers = load_openers(args.openers)

    words = dictionary.possible_answers[:args.limit] if args.limit else None
    print_results(benchmark(dictionary, words, config, openers))
    return 0


if __name__ == "__main__":
    sys.exit(main())
