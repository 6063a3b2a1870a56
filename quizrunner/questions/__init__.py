"""Question acquisition: parsing, validation and the fallback set."""

from .fallback import FALLBACK_QUESTIONS
from .repository import LoadResult, QuestionRepository, parse_questions, read_source

__all__ = [
    "FALLBACK_QUESTIONS",
    "LoadResult",
    "QuestionRepository",
    "parse_questions",
    "read_source",
]
