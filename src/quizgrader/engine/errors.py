"""Error taxonomy for the grading core and its collaborators."""

from __future__ import annotations


class QuizGraderError(Exception):
    """Base class for all QuizGrader errors."""


class InvalidInput(QuizGraderError, ValueError):
    """Caller supplied data the core cannot grade."""


class PreconditionFailed(InvalidInput):
    """Raised when ``score()`` is called on an empty question set."""


class QuizNotFound(QuizGraderError, LookupError):
    """No quiz matches the given id or share token."""


class PersistenceError(QuizGraderError):
    """Saving a graded submission failed.

    ``result`` holds the locally graded result (without a submission id)
    so it can still be shown to the user.
    """

    def __init__(self, message: str, result=None):
        super().__init__(message)
        self.result = result
