from __future__ import annotations

"""Quiz session: the state machine for one quiz attempt.

Phases run Idle -> InProgress -> Completed. `answer` records an outcome but
keeps the question active until `advance`; `skip` records and advances in one
step since there is no feedback to pause on.
"""

import random
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from ..app.explain import trace as xtrace
from ..errors import InvalidChoiceError, SessionProtocolError
from ..models import (
    AnswerOutcome,
    AnswerRecord,
    AnsweredRecord,
    Question,
    QuizResults,
    SessionPhase,
    SessionSnapshot,
    SkippedRecord,
)
from ..stats.stats import compute_results
from ..util.randomness import shuffle as shuffle_items


@dataclass
class RuntimeState:
    questions: Tuple[Question, ...] = ()
    index: int = 0
    score: int = 0
    log: List[AnswerRecord] = field(default_factory=list)
    phase: SessionPhase = SessionPhase.IDLE
    awaiting_advance: bool = False
    started_at: Optional[datetime] = None
    ended_at: Optional[datetime] = None


class QuizSession:
    def __init__(self, *, rng: Optional[random.Random] = None, shuffle: bool = True) -> None:
        self._rng = rng
        self._shuffle = shuffle
        self._state = RuntimeState()
        self._lock = threading.Lock()

    # ---- read side -------------------------------------------------------

    @property
    def phase(self) -> SessionPhase:
        return self._state.phase

    @property
    def questions(self) -> Tuple[Question, ...]:
        return self._state.questions

    @property
    def current_index(self) -> int:
        return self._state.index

    @property
    def score(self) -> int:
        return self._state.score

    @property
    def total(self) -> int:
        return len(self._state.questions)

    @property
    def answer_log(self) -> Tuple[AnswerRecord, ...]:
        return tuple(self._state.log)

    @property
    def awaiting_advance(self) -> bool:
        """True while the active question is answered but not yet advanced past."""
        return self._state.awaiting_advance

    @property
    def answered_count(self) -> int:
        return sum(1 for r in self._state.log if not r.skipped)

    def current_question(self) -> Optional[Question]:
        st = self._state
        if st.phase is SessionPhase.IN_PROGRESS and st.index < len(st.questions):
            return st.questions[st.index]
        return None

    def snapshot(self) -> SessionSnapshot:
        st = self._state
        return SessionSnapshot(
            phase=st.phase,
            current_index=st.index,
            total=len(st.questions),
            score=st.score,
            answered_count=self.answered_count,
            awaiting_advance=st.awaiting_advance,
            question=self.current_question(),
        )

    def results(self) -> QuizResults:
        st = self._state
        if st.phase is not SessionPhase.COMPLETED:
            raise SessionProtocolError(f"results are only available once completed (phase={st.phase.value})")
        return compute_results(st.score, len(st.questions), st.log)

    # ---- commands --------------------------------------------------------

    def start(self, questions: Sequence[Question]) -> SessionSnapshot:
        """Shuffle `questions` and begin a fresh run, discarding any current one."""
        if not questions:
            raise SessionProtocolError("cannot start a session with zero questions")
        with self._lock:
            ordered = shuffle_items(questions, self._rng) if self._shuffle else list(questions)
            self._begin_run(tuple(ordered))
        xtrace("session_started", {"total": self.total, "shuffled": self._shuffle})
        return self.snapshot()

    def answer(self, selected_index: int) -> AnswerOutcome:
        with self._lock:
            q = self._require_active("answer")
            if self._state.awaiting_advance:
                raise SessionProtocolError("the current question was already answered; call advance()")
            if isinstance(selected_index, bool) or not isinstance(selected_index, int):
                raise InvalidChoiceError(f"choice index must be an integer, got {selected_index!r}")
            if not 0 <= selected_index < len(q.choices):
                raise InvalidChoiceError(
                    f"choice index {selected_index} out of range for {len(q.choices)} choices"
                )
            st = self._state
            is_correct = selected_index == q.correct_index
            if is_correct:
                st.score += 1
            st.log.append(
                AnsweredRecord(
                    question_id=self._record_id(q),
                    question_text=q.text,
                    chosen=selected_index,
                    correct=is_correct,
                    correct_answer=q.correct_answer,
                    explanation=q.explanation,
                )
            )
            st.awaiting_advance = True
        xtrace("answered", {"index": st.index, "chosen": selected_index, "correct": is_correct, "score": st.score})
        return AnswerOutcome(
            correct=is_correct,
            chosen=selected_index,
            correct_answer=q.correct_answer,
            explanation=q.explanation,
        )

    def skip(self) -> SessionSnapshot:
        with self._lock:
            q = self._require_active("skip")
            if self._state.awaiting_advance:
                raise SessionProtocolError("cannot skip a question that was already answered")
            st = self._state
            st.log.append(SkippedRecord(question_id=self._record_id(q), question_text=q.text))
            xtrace("skipped", {"index": st.index})
            self._move_next()
        return self.snapshot()

    def advance(self) -> SessionSnapshot:
        with self._lock:
            self._require_active("advance")
            if not self._state.awaiting_advance:
                raise SessionProtocolError("advance() requires the current question to be answered first")
            self._state.awaiting_advance = False
            xtrace("advanced", {"index": self._state.index})
            self._move_next()
        return self.snapshot()

    def retry(self) -> SessionSnapshot:
        """Replay the same questions in the same order."""
        with self._lock:
            if self._state.phase is SessionPhase.IDLE:
                raise SessionProtocolError("nothing to retry; start a session first")
            self._begin_run(self._state.questions)
        xtrace("session_retried", {"total": self.total})
        return self.snapshot()

    def restart_to_start(self) -> SessionSnapshot:
        """Drop the current run entirely and go back to Idle."""
        with self._lock:
            self._state = RuntimeState()
        xtrace("session_reset")
        return self.snapshot()

    # ---- internals -------------------------------------------------------

    def _begin_run(self, questions: Tuple[Question, ...]) -> None:
        self._state = RuntimeState(
            questions=questions,
            phase=SessionPhase.IN_PROGRESS,
            started_at=datetime.now(),
        )

    def _require_active(self, action: str) -> Question:
        q = self.current_question()
        if q is None:
            raise SessionProtocolError(f"cannot {action}: no active question (phase={self._state.phase.value})")
        return q

    def _record_id(self, q: Question):
        # Positional id when the source gave none; a display aid, not a key
        return q.id if q.id is not None else self._state.index

    def _move_next(self) -> None:
        st = self._state
        st.index += 1
        if st.index >= len(st.questions):
            st.phase = SessionPhase.COMPLETED
            st.ended_at = datetime.now()
            xtrace("session_completed", {"score": st.score, "total": len(st.questions)})
