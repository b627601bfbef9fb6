import math
import unittest

import numpy as np

from wordle_entropy.entropy import (calculate_entropy, calculate_expected_remaining,
                                    calculate_information_gain, compare_guesses,
                                    compute_entropy, get_best_guess, get_pattern_distribution,
                                    rank_words_by_entropy, round_half_up)
from wordle_entropy.models import WordSuggestion

from tests.helpers import ANSWERS, synthetic_words


class TestCalculateEntropy(unittest.TestCase):
    def test_three_way_split(self):
        self.assertAlmostEqual(calculate_entropy('slate', ['slate', 'crate', 'trace']),
                               math.log2(3), places=6)

    def test_trivial_pools(self):
        self.assertEqual(calculate_entropy('slate', []), 0.0)
        self.assertEqual(calculate_entropy('slate', ['crate']), 0.0)

    def test_single_partition_is_zero(self):
        self.assertEqual(calculate_entropy('fuzzy', ['crate', 'irate', 'slate']), 0.0)

    def test_bounds(self):
        bound = math.log2(min(len(ANSWERS), 243))
        for guess in ANSWERS:
            h = calculate_entropy(guess, ANSWERS)
            self.assertGreaterEqual(h, 0.0)
            self.assertLessEqual(h, bound + 1e-9)

    def test_partition_entropy_kernel(self):
        sizes = np.zeros(243, dtype=np.int32)
        sizes[0] = 2
        sizes[5] = 2
        self.assertAlmostEqual(compute_entropy(sizes, 4), 1.0)
        self.assertEqual(compute_entropy(sizes, 1), 0.0)


class TestExpectedRemaining(unittest.TestCase):
    def test_all_distinct(self):
        self.assertAlmostEqual(calculate_expected_remaining('slate', ['slate', 'crate', 'trace']), 1.0)

    def test_single_bucket(self):
        self.assertAlmostEqual(calculate_expected_remaining('fuzzy', ['crate', 'irate', 'slate']), 3.0)

    def test_edges(self):
        self.assertEqual(calculate_expected_remaining('crate', []), 0.0)
        self.assertEqual(calculate_expected_remaining('crate', ['slate']), 1.0)

    def test_round_half_up(self):
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(2.49), 2)
        self.assertEqual(round_half_up(0.5), 1)


class TestAnalysisHelpers(unittest.TestCase):
    def test_information_gain(self):
        self.assertAlmostEqual(calculate_information_gain(1.0, 4), 50.0)
        self.assertEqual(calculate_information_gain(0.0, 1), 100.0)

    def test_pattern_distribution(self):
        dist = get_pattern_distribution('fuzzy', ['crate', 'irate', 'slate'])
        self.assertEqual(list(dist), [0])
        self.assertEqual(dist[0]['count'], 3)
        self.assertAlmostEqual(dist[0]['percentage'], 100.0)
        self.assertEqual(get_pattern_distribution('fuzzy', ['crate'], sample_size=0)[0]['sample_words'], [])
        self.assertEqual(get_pattern_distribution('fuzzy', []), {})

    def test_compare_guesses(self):
        pool = ['slate', 'crate', 'trace']
        self.assertEqual(compare_guesses('slate', 'fuzzy', pool), 1)
        self.assertEqual(compare_guesses('fuzzy', 'slate', pool), -1)
        self.assertEqual(compare_guesses('jazzy', 'jazzy', pool), 0)

    def test_best_guess(self):
        self.assertIsNone(get_best_guess([], ['crate']))
        self.assertEqual(get_best_guess(['fuzzy'], ['crate']), 'crate')
        self.assertEqual(get_best_guess(['fuzzy', 'slate'], ['slate', 'crate', 'trace']), 'slate')


class TestRankWordsByEntropy(unittest.TestCase):
    def test_empty_pool(self):
        self.assertEqual(rank_words_by_entropy(['crate'], []), [])

    def test_single_word_pool(self):
        self.assertEqual(rank_words_by_entropy(['slate', 'crate'], ['trace']),
                         [WordSuggestion(word='trace', entropy=0.0, remaining_words=1)])

    def test_sorted_descending(self):
        ranked = rank_words_by_entropy(ANSWERS, ANSWERS)
        entropies = [s.entropy for s in ranked]
        self.assertEqual(entropies, sorted(entropies, reverse=True))

    def test_ties_keep_candidate_order(self):
        ranked = rank_words_by_entropy(['qqqqq', 'wwwww', 'zzzzz'], ['crate', 'trace'])
        self.assertEqual([s.word for s in ranked], ['qqqqq', 'wwwww', 'zzzzz'])
        self.assertTrue(all(s.entropy == 0.0 for s in ranked))
        self.assertTrue(all(s.remaining_words == 2 for s in ranked))

    def test_truncated_to_top_twenty(self):
        words = synthetic_words(50)
        self.assertEqual(len(rank_words_by_entropy(words, words)), 20)
        self.assertEqual(len(rank_words_by_entropy(words, words, max_results=5)), 5)
        self.assertEqual(len(rank_words_by_entropy(words, words, max_results=None)), 50)

    def test_remaining_words_is_rounded_expectation(self):
        pool = ['slate', 'crate', 'trace', 'irate']
        for s in rank_words_by_entropy(pool, pool, max_results=None):
            self.assertEqual(s.remaining_words,
                             round_half_up(calculate_expected_remaining(s.word, pool)))
            self.assertAlmostEqual(s.entropy, calculate_entropy(s.word, pool))

    def test_progress_reported_per_interval(self):
        words = synthetic_words(250)
        calls = []
        rank_words_by_entropy(words, words[:30], progress_interval=100,
                              on_progress=lambda done, total: calls.append((done, total)))
        self.assertEqual(calls, [(100, 250), (200, 250), (250, 250)])


if __name__ == '__main__':
    unittest.main()
