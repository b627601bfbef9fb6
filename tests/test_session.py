import unittest
from concurrent.futures import Future
from unittest.mock import MagicMock

from wordle_entropy.dictionary import Dictionary
from wordle_entropy.errors import CalculationInProgress, GuessRejected
from wordle_entropy.models import GameStatus, ScoringMode, SolveResult
from wordle_entropy.session import SolverSession
from wordle_entropy.worker import RankingWorker

from tests.helpers import ANSWERS, clue_list, small_dictionary


class TestSynchronousSession(unittest.TestCase):
    def setUp(self):
        self.session = SolverSession(small_dictionary(), use_worker=False)

    def tearDown(self):
        self.session.close()

    def test_starts_with_openers(self):
        self.assertTrue(self.session.showing_openers)
        self.assertEqual(len(self.session.suggestions), 10)
        self.assertEqual(self.session.status, GameStatus.IN_PROGRESS)
        self.assertEqual(len(self.session.remaining_words), len(ANSWERS))
        self.assertFalse(self.session.is_calculating)
        self.assertEqual(self.session.progress, 0.0)

    def test_guess_then_rank(self):
        self.session.submit_guess('fuzzy', clue_list('fuzzy', 'trace'))
        self.assertIsNone(self.session.result)
        self.assertEqual(self.session.suggestions, [])

        result = self.session.refresh_suggestions()
        self.assertEqual(result.mode, ScoringMode.ENTROPY)
        self.assertEqual(result.remaining_count, 9)
        self.assertIs(self.session.result, result)
        self.assertIn('trace', self.session.remaining_words)

    def test_request_resolves_immediately(self):
        self.session.submit_guess('slate', clue_list('slate', 'trace'))
        future = self.session.request_suggestions()
        self.assertTrue(future.done())

    def test_rejected_guess_leaves_state(self):
        state = self.session.state
        with self.assertRaises(GuessRejected) as ctx:
            self.session.submit_guess('qqqqq', 'bbbbb')
        self.assertEqual(ctx.exception.reason, 'Word not in dictionary')
        with self.assertRaises(GuessRejected):
            self.session.submit_guess('crate', 'bbq')
        self.assertIs(self.session.state, state)
        self.assertTrue(self.session.showing_openers)

    def test_win_completes_game(self):
        self.session.submit_guess('trace', 'ggggg')
        self.assertEqual(self.session.status, GameStatus.WON)
        self.assertEqual(self.session.status_text, 'Won in 1 guess!')

        result = self.session.refresh_suggestions()
        self.assertEqual(result.mode, ScoringMode.SOLVED)
        self.assertEqual(result.suggestions, [])

        with self.assertRaises(GuessRejected) as ctx:
            self.session.submit_guess('crate', 'ggggg')
        self.assertEqual(ctx.exception.reason, 'Game is already complete')

    def test_out_of_attempts_is_not_no_candidates(self):
        misses = ['fuzzy', 'dimly', 'bonks', 'whoop', 'gulps', 'vying']
        dictionary = Dictionary.from_words(['crate', 'trace'], misses)
        with SolverSession(dictionary, use_worker=False) as session:
            for word in misses:
                session.submit_guess(word, 'bbbbb')
            self.assertEqual(session.status, GameStatus.LOST_NO_ATTEMPTS)

            result = session.refresh_suggestions()
            self.assertEqual(result.mode, ScoringMode.OUT_OF_ATTEMPTS)
            self.assertFalse(result.no_candidates)
            self.assertEqual(result.remaining_count, 2)

    def test_out_of_attempts_with_one_word_left(self):
        misses = ['fuzzy', 'dimly', 'bonks', 'whoop', 'gulps']
        dictionary = Dictionary.from_words(['crate', 'trace'], misses)
        with SolverSession(dictionary, use_worker=False) as session:
            for word in misses:
                session.submit_guess(word, 'bbbbb')
            session.submit_guess('crate', clue_list('crate', 'trace'))
            self.assertEqual(session.status, GameStatus.LOST_NO_ATTEMPTS)
            self.assertEqual(session.refresh_suggestions().mode, ScoringMode.OUT_OF_ATTEMPTS)

    def test_contradiction_reports_no_candidates(self):
        self.session.submit_guess('crate', 'ggggb')
        self.assertEqual(self.session.status, GameStatus.LOST_NO_CANDIDATES)
        result = self.session.refresh_suggestions()
        self.assertEqual(result.mode, ScoringMode.NO_CANDIDATES)
        self.assertTrue(result.no_candidates)

    def test_single_candidate_is_solved(self):
        self.session.submit_guess('crate', clue_list('crate', 'trace'))
        result = self.session.refresh_suggestions()
        self.assertEqual(result.mode, ScoringMode.SOLVED)
        self.assertEqual(result.suggestions[0].word, 'trace')
        self.assertEqual(self.session.hint, 'Only one word possible: TRACE')

    def test_fallback_through_session(self):
        dictionary = Dictionary.from_words(['jazzy', 'fizzy', 'dizzy'],
                                           ['crate', 'trace', 'irate', 'fuzzy'])
        with SolverSession(dictionary, use_worker=False) as session:
            session.submit_guess('fuzzy', 'bbbbb')
            self.assertEqual(session.status, GameStatus.IN_PROGRESS)
            self.assertTrue(session.state.used_fallback)
            result = session.refresh_suggestions()
            self.assertTrue(result.used_fallback)
            self.assertEqual(result.remaining_count, 3)
            self.assertTrue(result.suggestions)

    def test_reset(self):
        self.session.submit_guess('slate', clue_list('slate', 'trace'))
        state = self.session.reset()
        self.assertEqual(state.guesses, ())
        self.assertTrue(self.session.showing_openers)

    def test_stats(self):
        self.session.submit_guess('crate', clue_list('crate', 'trace'))
        stats = self.session.stats()
        self.assertEqual(stats['total_guesses'], 1)
        self.assertEqual(stats['remaining_attempts'], 5)


class TestSessionWithWorker(unittest.TestCase):
    """Controller behaviour against a stubbed worker."""

    def setUp(self):
        self.worker = MagicMock(spec=RankingWorker)
        self.worker.is_calculating = False
        self.worker.progress = 0.0
        self.session = SolverSession(small_dictionary(), worker=self.worker)
        self.session.submit_guess('fuzzy', clue_list('fuzzy', 'trace'))

    def test_result_stored_when_resolved(self):
        pending = Future()
        self.worker.rank.return_value = pending
        self.assertIs(self.session.request_suggestions(), pending)

        result = SolveResult(suggestions=[], mode=ScoringMode.ENTROPY, remaining_count=3)
        pending.set_result(result)
        self.assertIs(self.session.result, result)

    def test_in_progress_returns_running_future(self):
        pending = Future()
        self.worker.rank.return_value = pending
        self.session.request_suggestions()

        self.worker.rank.side_effect = CalculationInProgress('busy')
        self.assertIs(self.session.request_suggestions(), pending)

    def test_new_guess_cancels_and_drops_stale_result(self):
        pending = Future()
        self.worker.rank.return_value = pending
        self.session.request_suggestions()

        self.worker.is_calculating = True
        self.session.submit_guess('crate', clue_list('crate', 'trace'))
        self.worker.cancel.assert_called_once()

        pending.set_result(SolveResult(suggestions=[], mode=ScoringMode.ENTROPY))
        self.assertIsNone(self.session.result)

    def test_failed_calculation_keeps_no_result(self):
        pending = Future()
        self.worker.rank.return_value = pending
        self.session.request_suggestions()
        pending.set_exception(RuntimeError('boom'))
        self.assertIsNone(self.session.result)

    def test_close_leaves_injected_worker_running(self):
        self.session.close()
        self.worker.shutdown.assert_not_called()


if __name__ == '__main__':
    unittest.main()
