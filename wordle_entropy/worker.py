"""
Background ranking worker.

Entropy ranking is O(candidates x pool) and can take seconds, so it runs in a
separate process. The controller and the worker exchange plain picklable
messages over a pipe:

    controller -> worker    RankRequest | SolveRequest | None (shut down)
    worker -> controller    ProgressMessage* then ResultMessage | ErrorMessage

At most one request is outstanding. A second request is rejected with
CalculationInProgress rather than queued. Cancelling terminates the process
(the numba kernels have no cancellation points) and starts a fresh one, so
no partial result ever reaches the caller.
"""

import logging
import multiprocessing
import threading
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from .config import SolverConfig
from .dictionary import Dictionary
from .entropy import ProgressCallback
from .errors import (CalculationCancelled, CalculationFailed, CalculationInProgress,
                     WorkerCrashed)
from .models import GuessResult, SolveResult
from .openers import OpenerTable
from .solver import solve, suggest_for_pool

logger = logging.getLogger(__name__)


# ============================================================================
# MESSAGES
# ============================================================================

@dataclass(frozen=True)
class RankRequest:
    """Rank an already filtered pool."""
    request_id: int
    remaining_words: List[str]
    allowed_guesses: List[str]
    config: SolverConfig
    used_fallback: bool = False


@dataclass(frozen=True)
class SolveRequest:
    """Filter the dictionary against a history, then rank."""
    request_id: int
    guesses: List[GuessResult]
    dictionary: Dictionary
    config: SolverConfig
    openers: Optional[OpenerTable] = None


@dataclass(frozen=True)
class ProgressMessage:
    request_id: int
    processed: int
    total: int

    @property
    def percentage(self) -> float:
        return self.processed / self.total * 100 if self.total else 100.0


@dataclass(frozen=True)
class ResultMessage:
    request_id: int
    result: SolveResult


@dataclass(frozen=True)
class ErrorMessage:
    request_id: int
    error: str


def handle_request(request, send: Callable) -> object:
    """
    Run one request, streaming progress through ``send``.

    Returns the final ResultMessage, or an ErrorMessage if the solver raised.
    """
    def report(processed: int, total: int):
        send(ProgressMessage(request.request_id, processed, total))

    try:
        if isinstance(request, RankRequest):
            result = suggest_for_pool(request.remaining_words, request.allowed_guesses,
                                      request.config, report, request.used_fallback)
        elif isinstance(request, SolveRequest):
            result = solve(request.guesses, request.dictionary, request.config,
                           request.openers, report)
        else:
            return ErrorMessage(getattr(request, 'request_id', -1),
                                f"Unknown request type {type(request).__name__}")
    except Exception as e:
        logger.exception("Ranking request %d failed", request.request_id)
        return ErrorMessage(request.request_id, f"{type(e).__name__}: {e}")

    return ResultMessage(request.request_id, result)


def worker_main(conn):
    """Entry point of the worker process."""
    while True:
        try:
            request = conn.recv()
        except EOFError:
            break
        if request is None:
            break
        conn.send(handle_request(request, conn.send))
    conn.close()


# ============================================================================
# CONTROLLER SIDE
# ============================================================================

@dataclass
class _Pending:
    request_id: int
    future: Future
    on_progress: Optional[ProgressCallback]


class RankingWorker:
    """
    Owns one worker process and the single outstanding request.

    Results are delivered through ``concurrent.futures.Future``; a listener
    thread reads the pipe, forwards progress and resolves the future.
    """

    def __init__(self, start_method: str = "spawn", join_timeout: float = 5.0):
        self._ctx = multiprocessing.get_context(start_method)
        self._join_timeout = join_timeout
        self._lock = threading.Lock()
        self._process = None
        self._conn = None
        self._generation = 0
        self._next_id = 0
        self._pending: Optional[_Pending] = None
        self._progress = 0.0
        self._closed = False

    # ------------------------------------------------------------------ state

    @property
    def is_calculating(self) -> bool:
        return self._pending is not None

    @property
    def progress(self) -> float:
        """Percentage of the in-flight request processed so far."""
        return self._progress

    @property
    def is_alive(self) -> bool:
        process = self._process
        return process is not None and process.is_alive()

    # -------------------------------------------------------------- lifecycle

    def start(self) -> "RankingWorker":
        with self._lock:
            if self._closed:
                raise RuntimeError("Worker has been shut down")
            if not self.is_alive:
                self._spawn()
        return self

    def _spawn(self):
        parent_conn, child_conn = self._ctx.Pipe()
        process = self._ctx.Process(target=worker_main, args=(child_conn,),
                                    name="wordle-ranking-worker", daemon=True)
        process.start()
        child_conn.close()

        self._generation += 1
        self._process = process
        self._conn = parent_conn

        listener = threading.Thread(target=self._listen, args=(parent_conn, process, self._generation),
                                    name="wordle-ranking-listener", daemon=True)
        listener.start()
        logger.info("Started ranking worker (pid %s)", process.pid)

    def _terminate(self):
        process = self._process
        # Listener of the old process sees a stale generation and exits quietly
        self._generation += 1
        self._process = None
        self._conn = None
        if process is not None:
            process.terminate()
            process.join(self._join_timeout)
            if process.is_alive():
                process.kill()
                process.join()

    def shutdown(self):
        with self._lock:
            self._closed = True
            pending, self._pending = self._pending, None
            process, conn = self._process, self._conn
            self._generation += 1
            self._process = None
            self._conn = None

        if pending is not None:
            pending.future.set_exception(CalculationCancelled("Worker shut down"))

        if process is not None:
            if process.is_alive():
                try:
                    conn.send(None)
                except OSError:
                    logger.debug("Worker pipe already closed")
            process.join(self._join_timeout)
            if process.is_alive():
                process.terminate()
                process.join()

    def __enter__(self):
        return self.start()

    def __exit__(self, exc_type, exc, tb):
        self.shutdown()

    # --------------------------------------------------------------- requests

    def rank(self, remaining_words: Sequence[str], allowed_guesses: Sequence[str],
             config: Optional[SolverConfig] = None,
             on_progress: Optional[ProgressCallback] = None,
             used_fallback: bool = False) -> Future:
        """Rank a filtered pool in the worker. Raises CalculationInProgress if busy."""
        config = config or SolverConfig()
        return self._submit(
            lambda rid: RankRequest(rid, list(remaining_words), list(allowed_guesses),
                                    config, used_fallback),
            on_progress)

    def solve(self, guesses: Sequence[GuessResult], dictionary: Dictionary,
              config: Optional[SolverConfig] = None,
              openers: Optional[OpenerTable] = None,
              on_progress: Optional[ProgressCallback] = None) -> Future:
        """Filter and rank in the worker. Raises CalculationInProgress if busy."""
        config = config or SolverConfig()
        return self._submit(
            lambda rid: SolveRequest(rid, list(guesses), dictionary, config, openers),
            on_progress)

    def _submit(self, make_request, on_progress: Optional[ProgressCallback]) -> Future:
        with self._lock:
            if self._closed:
                raise RuntimeError("Worker has been shut down")
            if self._pending is not None:
                logger.debug("Request rejected: calculation already in progress")
                raise CalculationInProgress("Calculation already in progress")
            if not self.is_alive:
                self._spawn()

            self._next_id += 1
            request = make_request(self._next_id)
            future = Future()
            self._pending = _Pending(request.request_id, future, on_progress)
            self._progress = 0.0

            try:
                self._conn.send(request)
            except OSError as e:
                self._pending = None
                self._terminate()
                failure = WorkerCrashed(f"Could not send request to worker: {e}")
            else:
                failure = None

        if failure is not None:
            future.set_exception(failure)
        return future

    def cancel(self) -> bool:
        """
        Discard the in-flight request and restart the worker.

        Returns:
            True if a request was cancelled
        """
        with self._lock:
            pending, self._pending = self._pending, None
            if pending is None:
                return False
            self._progress = 0.0
            self._terminate()
            if not self._closed:
                self._spawn()

        logger.debug("Cancelled ranking request %d", pending.request_id)
        pending.future.set_exception(CalculationCancelled("Calculation cancelled"))
        return True

    # --------------------------------------------------------------- listener

    def _listen(self, conn, process, generation: int):
        try:
            while True:
                try:
                    message = conn.recv()
                except (EOFError, OSError):
                    self._on_worker_exit(process, generation)
                    return
                self._dispatch(message, generation)
        finally:
            conn.close()

    def _dispatch(self, message, generation: int):
        with self._lock:
            pending = self._pending
            if (generation != self._generation or pending is None
                    or message.request_id != pending.request_id):
                return
            if isinstance(message, ProgressMessage):
                self._progress = message.percentage
            else:
                self._pending = None
                self._progress = 100.0 if isinstance(message, ResultMessage) else 0.0

        if isinstance(message, ProgressMessage):
            if pending.on_progress is not None:
                pending.on_progress(message.processed, message.total)
        elif isinstance(message, ResultMessage):
            pending.future.set_result(message.result)
        else:
            pending.future.set_exception(CalculationFailed(message.error))

    def _on_worker_exit(self, process, generation: int):
        with self._lock:
            if generation != self._generation or self._closed:
                return
            pending, self._pending = self._pending, None
            self._process = None
            self._conn = None
            self._progress = 0.0

        process.join(self._join_timeout)
        logger.warning("Ranking worker exited unexpectedly (exit code %s)", process.exitcode)
        if pending is not None:
            pending.future.set_exception(WorkerCrashed("Worker calculation failed"))
