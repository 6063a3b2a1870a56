from __future__ import annotations

"""Exception types raised by the quiz core."""


class QuizError(Exception):
    """Base class for quizrunner errors."""


class QuestionFormatError(QuizError, ValueError):
    """A question record (or the collection holding it) is malformed."""


class SessionProtocolError(QuizError, RuntimeError):
    """A session command was issued in a state that does not allow it.

    These indicate a bug in the caller (the presenter), not a runtime
    condition to recover from.
    """


class InvalidChoiceError(SessionProtocolError, ValueError):
    """The selected choice index does not address a choice of the question."""
