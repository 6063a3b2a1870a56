from __future__ import annotations

"""Presenter: translates user commands into session calls and session state
into an immutable read model for front ends.

Front ends subscribe to `events.RENDER` on the bus and redraw from the
`PresenterView` payload; they never touch the session directly.
"""

from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional, Tuple

from ..models import QuizResults, SessionPhase
from ..policy.feedback import Feedback, FeedbackPolicy, ImmediateReveal, make_policy
from ..questions.repository import LoadResult, QuestionRepository, Source
from ..session.quiz_session import QuizSession
from ..stats.stats import format_summary
from ..util.randomness import make_rng
from . import events
from .events import EventBus

Screen = Literal["start", "quiz", "result"]


@dataclass(frozen=True)
class PresenterView:
    screen: Screen
    question_text: Optional[str] = None
    choices: Tuple[str, ...] = ()
    progress: str = ""
    score_label: str = ""
    feedback: Optional[Feedback] = None
    can_advance: bool = False
    can_skip: bool = False
    using_fallback: bool = False
    notice: Optional[str] = None
    results: Optional[QuizResults] = None
    summary: Optional[str] = None


class QuizPresenter:
    def __init__(
        self,
        repository: QuestionRepository,
        session: QuizSession,
        *,
        source: Source = None,
        policy: Optional[FeedbackPolicy] = None,
        bus: Optional[EventBus] = None,
        show_breakdown: bool = True,
    ) -> None:
        self.repository = repository
        self.session = session
        self.source = source
        self.policy = policy or ImmediateReveal()
        self.bus = bus or EventBus()
        self.show_breakdown = show_breakdown
        self._screen: Screen = "start"
        self._feedback: Optional[Feedback] = None
        self._loaded: Optional[LoadResult] = None

    @classmethod
    def from_config(cls, cfg: Dict[str, Any], *, bus: Optional[EventBus] = None, http: Any = None) -> "QuizPresenter":
        qcfg = cfg.get("questions", {})
        scfg = cfg.get("session", {})
        ucfg = cfg.get("ui", {})
        seed = scfg.get("seed")
        repository = QuestionRepository(timeout_s=float(qcfg.get("timeout_s", 5.0)), http=http)
        session = QuizSession(
            rng=make_rng(seed) if seed is not None else None,
            shuffle=bool(scfg.get("shuffle", True)),
        )
        return cls(
            repository,
            session,
            source=qcfg.get("source"),
            policy=make_policy(str(ucfg.get("feedback_policy", "immediate"))),
            bus=bus,
            show_breakdown=bool(ucfg.get("show_breakdown", True)),
        )

    @property
    def screen(self) -> Screen:
        return self._screen

    # ---- commands --------------------------------------------------------

    def begin(self, uses_fallback: bool) -> LoadResult:
        """Start a run on the built-in set, or on the configured source."""
        loaded = self.repository.builtin() if uses_fallback else self.repository.load(self.source)
        self.session.start(loaded.questions)
        self._loaded = loaded
        self._feedback = None
        self._screen = "quiz"
        self._publish()
        return loaded

    def select_choice(self, index: int) -> Feedback:
        outcome = self.session.answer(index)
        self._feedback = self.policy.decide(outcome)
        self.bus.emit(events.FEEDBACK, self._feedback)
        self._publish()
        return self._feedback

    def advance(self) -> PresenterView:
        self.session.advance()
        return self._after_move()

    def skip(self) -> PresenterView:
        self.session.skip()
        return self._after_move()

    def retry(self) -> PresenterView:
        self.session.retry()
        self._feedback = None
        self._screen = "quiz"
        return self._publish()

    def return_to_start(self) -> PresenterView:
        self.session.restart_to_start()
        self._feedback = None
        self._loaded = None
        self._screen = "start"
        return self._publish()

    # ---- read model ------------------------------------------------------

    def view(self) -> PresenterView:
        loaded = self._loaded
        using_fallback = bool(loaded and loaded.used_fallback)
        notice = None
        if loaded is not None and loaded.failed:
            notice = f"Could not load questions from {loaded.source}; using the built-in set."

        if self._screen == "start":
            return PresenterView(screen="start")

        snap = self.session.snapshot()
        progress = f"Question {snap.position} / {snap.total}"
        score_label = f"Score: {snap.score}"

        if self._screen == "result":
            results = self.session.results()
            return PresenterView(
                screen="result",
                progress=progress,
                score_label=score_label,
                using_fallback=using_fallback,
                notice=notice,
                results=results,
                summary=format_summary(results, show_breakdown=self.show_breakdown),
            )

        q = snap.question
        return PresenterView(
            screen="quiz",
            question_text=q.text if q else None,
            choices=q.choices if q else (),
            progress=progress,
            score_label=score_label,
            feedback=self._feedback,
            can_advance=snap.awaiting_advance,
            can_skip=not snap.awaiting_advance,
            using_fallback=using_fallback,
            notice=notice,
        )

    # ---- internals -------------------------------------------------------

    def _after_move(self) -> PresenterView:
        self._feedback = None
        if self.session.phase is SessionPhase.COMPLETED:
            self._screen = "result"
            view = self._publish()
            self.bus.emit(events.COMPLETED, view.results)
            return view
        return self._publish()

    def _publish(self) -> PresenterView:
        view = self.view()
        self.bus.emit(events.RENDER, view)
        return view
