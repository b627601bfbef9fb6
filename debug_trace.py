"""Debug script for tracing solver behavior."""

import sys

from wordle_entropy.dictionary import load_default_dictionaries
from wordle_entropy.entropy import calculate_entropy, get_pattern_distribution
from wordle_entropy.game import format_guess_history
from wordle_entropy.patterns import compute_pattern, guess_result_from_pattern, pattern_to_string
from wordle_entropy.session import SolverSession


def trace_solve(answer, dictionary, starting_word=None):
    session = SolverSession(dictionary, use_worker=False)

    print(f"\n=== Tracing solve for: {answer} ===\n")

    max_guesses = session.config.max_guesses
    for i in range(max_guesses):
        cands = session.remaining_words
        print(f"Turn {i+1}: {len(cands)} candidates ({session.hint})")

        result = session.refresh_suggestions()
        print(f"  Mode: {result.mode.value}, {result.calculation_time:.3f}s")
        for s in result.suggestions[:5]:
            print(f"    {s.word}  {s.entropy:.4f}  ~{s.remaining_words}")

        if i == 0 and starting_word:
            guess = starting_word
        else:
            guess = next(s.word for s in result.suggestions
                         if s.word not in session.state.guessed_words)

        if len(cands) <= 10:
            print(f"  Candidates: {cands}")
            for pattern, info in get_pattern_distribution(guess, cands).items():
                print(f"    {pattern_to_string(pattern)} x{info['count']} -> {info['sample_words']}")

        fb = compute_pattern(guess, answer)
        ent = calculate_entropy(guess, cands)
        print(f"  Guess: {guess} -> {pattern_to_string(fb)} (entropy={ent:.4f})")

        clues = guess_result_from_pattern(guess, fb)
        session.submit_guess(guess, [c.clue for c in clues.clues])

        if session.state.is_won:
            print(f"\n✓ Solved in {i+1} guesses!")
            print(format_guess_history(session.state.guesses))
            return i + 1

        # Check if answer is still in candidates
        if answer not in session.remaining_words:
            print(f"  ERROR: {answer} not in remaining candidates!")
            print(f"  Remaining: {session.remaining_words[:20]}")
            break

    print(f"\n✗ Failed to solve in {max_guesses} guesses")
    print(session.status_text)
    return max_guesses + 1


if __name__ == "__main__":
    dictionary = load_default_dictionaries(".")
    # Test problematic words
    for word in sys.argv[1:] or ["jazzy"]:
        trace_solve(word, dictionary)
