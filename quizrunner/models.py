from __future__ import annotations

"""Quiz data model: questions, answer records, outcomes and results.

All records are immutable. `from_json` accepts the question source format
(camelCase keys) and `to_json` produces it back.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Tuple, Union

from .errors import QuestionFormatError
from .schema import QuestionRecord, ValidationError, describe_errors

QuestionId = Union[str, int, float, bool]


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class Question:
    text: str
    choices: Tuple[str, ...]
    correct_index: int
    id: Optional[QuestionId] = None
    explanation: Optional[str] = None

    def __post_init__(self) -> None:
        if isinstance(self.choices, str):
            raise QuestionFormatError("choices must be a sequence of strings, not a string")
        object.__setattr__(self, "choices", tuple(self.choices))
        if not isinstance(self.text, str) or not self.text.strip():
            raise QuestionFormatError("question text must be a non-empty string")
        if len(self.choices) < 2:
            raise QuestionFormatError(f"question {self.text!r} needs at least 2 choices")
        if not all(isinstance(c, str) for c in self.choices):
            raise QuestionFormatError(f"choices of {self.text!r} must be strings")
        if not _is_int(self.correct_index):
            raise QuestionFormatError(f"correctIndex of {self.text!r} must be an integer")
        if not 0 <= self.correct_index < len(self.choices):
            raise QuestionFormatError(
                f"correctIndex {self.correct_index} out of range for {len(self.choices)} choices"
            )
        if self.explanation is not None and not isinstance(self.explanation, str):
            raise QuestionFormatError(f"explanation of {self.text!r} must be a string")

    @property
    def correct_answer(self) -> str:
        return self.choices[self.correct_index]

    def to_json(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "text": self.text,
            "choices": list(self.choices),
            "correctIndex": self.correct_index,
        }
        if self.id is not None:
            data["id"] = self.id
        if self.explanation is not None:
            data["explanation"] = self.explanation
        return data

    @classmethod
    def from_json(cls, data: Any) -> "Question":
        try:
            rec = QuestionRecord.model_validate(data)
        except ValidationError as exc:
            raise QuestionFormatError(describe_errors(exc)) from exc
        return cls(
            text=rec.text,
            choices=tuple(rec.choices),
            correct_index=rec.correct_index,
            id=rec.id,
            explanation=rec.explanation,
        )


class SessionPhase(str, Enum):
    IDLE = "idle"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


RecordStatus = Literal["correct", "wrong", "skipped"]


@dataclass(frozen=True)
class AnsweredRecord:
    question_id: QuestionId
    question_text: str
    chosen: int
    correct: bool
    correct_answer: str
    explanation: Optional[str] = None

    @property
    def skipped(self) -> bool:
        return False

    @property
    def status(self) -> RecordStatus:
        return "correct" if self.correct else "wrong"

    def to_json(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "questionId": self.question_id,
            "questionText": self.question_text,
            "chosen": self.chosen,
            "correct": self.correct,
            "correctAnswer": self.correct_answer,
        }
        if self.explanation is not None:
            data["explanation"] = self.explanation
        return data


@dataclass(frozen=True)
class SkippedRecord:
    question_id: QuestionId
    question_text: str

    @property
    def skipped(self) -> bool:
        return True

    @property
    def status(self) -> RecordStatus:
        return "skipped"

    def to_json(self) -> Dict[str, Any]:
        return {"questionId": self.question_id, "questionText": self.question_text, "skipped": True}


AnswerRecord = Union[AnsweredRecord, SkippedRecord]


@dataclass(frozen=True)
class AnswerOutcome:
    """What the presenter shows right after an answer."""

    correct: bool
    chosen: int
    correct_answer: str
    explanation: Optional[str] = None


@dataclass(frozen=True)
class SessionSnapshot:
    phase: SessionPhase
    current_index: int
    total: int
    score: int
    answered_count: int
    awaiting_advance: bool
    question: Optional[Question] = None

    @property
    def position(self) -> int:
        """1-based question number, clamped to the total."""
        return min(self.current_index + 1, self.total)


@dataclass(frozen=True)
class QuizResults:
    score: int
    total: int
    percentage: int
    breakdown: Tuple[AnswerRecord, ...] = field(default_factory=tuple)

    def to_json(self) -> Dict[str, Any]:
        entries: List[Dict[str, Any]] = [r.to_json() for r in self.breakdown]
        return {
            "score": self.score,
            "total": self.total,
            "percentage": self.percentage,
            "breakdown": entries,
        }
