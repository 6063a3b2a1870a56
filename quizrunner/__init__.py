"""QuizRunner package initialization.

Exposes the session core and its data model so front ends and notebooks can
simply `import quizrunner`.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .errors import InvalidChoiceError, QuestionFormatError, QuizError, SessionProtocolError
from .models import (
    AnswerOutcome,
    AnswerRecord,
    AnsweredRecord,
    Question,
    QuizResults,
    SessionPhase,
    SessionSnapshot,
    SkippedRecord,
)
from .questions import FALLBACK_QUESTIONS, LoadResult, QuestionRepository
from .session.quiz_session import QuizSession
from .util.randomness import shuffle

__all__ = [
    "__version__",
    "AnswerOutcome",
    "AnswerRecord",
    "AnsweredRecord",
    "FALLBACK_QUESTIONS",
    "InvalidChoiceError",
    "LoadResult",
    "Question",
    "QuestionFormatError",
    "QuestionRepository",
    "QuizError",
    "QuizResults",
    "QuizSession",
    "SessionPhase",
    "SessionProtocolError",
    "SessionSnapshot",
    "SkippedRecord",
    "shuffle",
]
