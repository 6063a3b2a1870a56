from __future__ import annotations

"""Feedback policies: turn an answer outcome into the message shown to the user."""

from dataclasses import dataclass
from typing import Literal, Protocol

from ..models import AnswerOutcome


@dataclass(frozen=True)
class Feedback:
    tone: Literal["correct", "wrong"]
    message: str


class FeedbackPolicy(Protocol):
    def decide(self, outcome: AnswerOutcome) -> Feedback: ...


class ImmediateReveal:
    """Correct → praise plus explanation; wrong → explanation, else the correct choice."""

    def decide(self, outcome: AnswerOutcome) -> Feedback:
        if outcome.correct:
            return Feedback(tone="correct", message=f"Correct! {outcome.explanation or ''}".rstrip())
        if outcome.explanation:
            return Feedback(tone="wrong", message=f"Wrong. {outcome.explanation}")
        return Feedback(tone="wrong", message=f"Wrong. Correct answer: {outcome.correct_answer}")


class AlwaysReveal:
    """Like ImmediateReveal, but a wrong answer always names the correct choice."""

    def decide(self, outcome: AnswerOutcome) -> Feedback:
        if outcome.correct:
            return ImmediateReveal().decide(outcome)
        msg = f"Wrong. Correct answer: {outcome.correct_answer}"
        if outcome.explanation:
            msg += f". {outcome.explanation}"
        return Feedback(tone="wrong", message=msg)


POLICIES = {"immediate": ImmediateReveal, "reveal": AlwaysReveal}


def make_policy(name: str) -> FeedbackPolicy:
    try:
        return POLICIES[name]()
    except KeyError:
        raise KeyError(f"Unknown feedback policy: {name}") from None
