import io
import unittest
from contextlib import redirect_stderr

from quizrunner.app import events
from quizrunner.app.events import EventBus
from quizrunner.app.presenter import QuizPresenter
from quizrunner.config.config import validate_config
from quizrunner.errors import SessionProtocolError
from quizrunner.models import Question
from quizrunner.questions import FALLBACK_QUESTIONS, QuestionRepository
from quizrunner.session.quiz_session import QuizSession

QS = [
    {"id": "a", "text": "1+1?", "choices": ["1", "2", "3"], "correctIndex": 1},
    {"id": "b", "text": "2+2?", "choices": ["4", "5"], "correctIndex": 0, "explanation": "Two twos."},
]


def make_presenter(source=QS, **kw) -> QuizPresenter:
    return QuizPresenter(QuestionRepository(), QuizSession(shuffle=False), source=source, **kw)


class PresenterFlowTests(unittest.TestCase):
    def test_starts_on_start_screen(self) -> None:
        view = make_presenter().view()
        self.assertEqual(view.screen, "start")
        self.assertIsNone(view.question_text)

    def test_begin_with_fallback(self) -> None:
        p = make_presenter()
        loaded = p.begin(uses_fallback=True)
        self.assertTrue(loaded.used_fallback)
        view = p.view()
        self.assertEqual(view.screen, "quiz")
        self.assertTrue(view.using_fallback)
        self.assertIsNone(view.notice)
        self.assertIn(view.question_text, [q.text for q in FALLBACK_QUESTIONS])

    def test_begin_from_source(self) -> None:
        p = make_presenter()
        p.begin(uses_fallback=False)
        view = p.view()
        self.assertFalse(view.using_fallback)
        self.assertEqual(view.question_text, "1+1?")
        self.assertEqual(view.choices, ("1", "2", "3"))
        self.assertEqual(view.progress, "Question 1 / 2")
        self.assertEqual(view.score_label, "Score: 0")
        self.assertTrue(view.can_skip)
        self.assertFalse(view.can_advance)

    def test_failed_source_shows_notice(self) -> None:
        p = make_presenter(source="/definitely/not/here.json")
        with redirect_stderr(io.StringIO()):
            p.begin(uses_fallback=False)
        view = p.view()
        self.assertTrue(view.using_fallback)
        self.assertIn("/definitely/not/here.json", view.notice)

    def test_answer_advance_and_results(self) -> None:
        p = make_presenter()
        p.begin(uses_fallback=False)
        fb = p.select_choice(1)
        self.assertEqual(fb.message, "Correct!")
        view = p.view()
        self.assertEqual(view.feedback, fb)
        self.assertTrue(view.can_advance)
        self.assertFalse(view.can_skip)
        self.assertEqual(view.score_label, "Score: 1")

        view = p.advance()
        self.assertIsNone(view.feedback)
        self.assertEqual(view.progress, "Question 2 / 2")
        fb = p.select_choice(1)
        self.assertEqual(fb.message, "Wrong. Two twos.")

        view = p.advance()
        self.assertEqual(view.screen, "result")
        self.assertEqual((view.results.score, view.results.total, view.results.percentage), (1, 2, 50))
        self.assertTrue(view.summary.startswith("You scored 1 out of 2 (50%)"))
        self.assertIn("Q2: Wrong - 2+2? (Correct: 4)", view.summary)
        self.assertEqual(view.progress, "Question 2 / 2")

    def test_skip_to_results_then_retry(self) -> None:
        p = make_presenter()
        p.begin(uses_fallback=False)
        p.skip()
        view = p.skip()
        self.assertEqual(view.screen, "result")
        self.assertEqual([r.status for r in view.results.breakdown], ["skipped", "skipped"])

        view = p.retry()
        self.assertEqual(view.screen, "quiz")
        self.assertEqual(view.question_text, "1+1?")
        self.assertEqual(view.score_label, "Score: 0")

    def test_return_to_start(self) -> None:
        p = make_presenter()
        p.begin(uses_fallback=False)
        p.select_choice(0)
        view = p.return_to_start()
        self.assertEqual(view.screen, "start")
        with self.assertRaises(SessionProtocolError):
            p.skip()

    def test_protocol_errors_surface(self) -> None:
        p = make_presenter()
        p.begin(uses_fallback=False)
        with self.assertRaises(SessionProtocolError):
            p.advance()
        p.select_choice(0)
        with self.assertRaises(SessionProtocolError):
            p.select_choice(1)


class PresenterEventTests(unittest.TestCase):
    def test_render_and_completed_events(self) -> None:
        bus = EventBus()
        rendered, finished, feedback = [], [], []
        bus.subscribe(events.RENDER, rendered.append)
        bus.subscribe(events.COMPLETED, finished.append)
        bus.subscribe(events.FEEDBACK, feedback.append)
        p = make_presenter(source=QS[:1], bus=bus)
        p.begin(uses_fallback=False)
        p.select_choice(1)
        p.advance()
        self.assertEqual([v.screen for v in rendered], ["quiz", "quiz", "result"])
        self.assertEqual(len(feedback), 1)
        self.assertEqual(finished[0].score, 1)

    def test_failing_subscriber_does_not_break_others(self) -> None:
        bus = EventBus()
        seen = []

        def broken(_view) -> None:
            raise RuntimeError("boom")

        bus.subscribe(events.RENDER, broken)
        bus.subscribe(events.RENDER, seen.append)
        p = make_presenter(bus=bus)
        p.begin(uses_fallback=True)
        self.assertEqual(len(seen), 1)

    def test_unsubscribe(self) -> None:
        bus = EventBus()
        seen = []
        bus.subscribe(events.RENDER, seen.append)
        bus.unsubscribe(events.RENDER, seen.append)
        bus.emit(events.RENDER, None)
        self.assertEqual(seen, [])


class PresenterConfigTests(unittest.TestCase):
    def test_from_config(self) -> None:
        cfg = validate_config(
            {
                "questions": {"source": None, "timeout_s": 3},
                "session": {"seed": 9, "shuffle": True},
                "ui": {"feedback_policy": "reveal", "show_breakdown": False},
            }
        )
        p = QuizPresenter.from_config(cfg)
        self.assertEqual(p.repository.timeout_s, 3.0)
        self.assertFalse(p.show_breakdown)
        p.begin(uses_fallback=False)
        order = [q.text for q in p.session.questions]

        again = QuizPresenter.from_config(cfg)
        again.begin(uses_fallback=False)
        self.assertEqual([q.text for q in again.session.questions], order)
        for q in p.session.questions:
            self.assertIsInstance(q, Question)


if __name__ == "__main__":
    unittest.main()
