"""
Exceptions raised by the solver core, the session controller and the
background ranking worker.
"""


class WordleError(Exception):
    """Base class for all solver errors."""


class InvalidWordError(WordleError, ValueError):
    """A word or clue sequence is malformed (wrong length, non a-z letters)."""


class GuessRejected(WordleError):
    """
    A submitted guess failed validation.

    The session is left untouched; ``reason`` is meant to be shown to the user.
    """

    def __init__(self, word: str, reason: str):
        super().__init__(f"{word!r} rejected: {reason}")
        self.word = word
        self.reason = reason


class DictionaryLoadError(WordleError):
    """A word list could not be read, or is empty or malformed."""


class ComputationError(WordleError):
    """Base class for background ranking outcomes other than a result."""


class CalculationInProgress(ComputationError):
    """A ranking request is already outstanding; retry once it resolves."""


class CalculationCancelled(ComputationError):
    """The in-flight ranking was cancelled and its state discarded."""


class WorkerCrashed(ComputationError):
    """The worker process terminated while a request was pending."""


class CalculationFailed(ComputationError):
    """The worker raised while handling a request."""
