from __future__ import annotations

"""Built-in question set used when no source is given or loading fails."""

from typing import Tuple

from ..models import Question

FALLBACK_QUESTIONS: Tuple[Question, ...] = (
    Question(
        id=1,
        text="What is the output of: console.log(typeof []);",
        choices=("'object'", "'array'", "'list'", "'undefined'"),
        correct_index=0,
        explanation="In JS arrays are objects; typeof returns 'object'.",
    ),
    Question(
        id=2,
        text="Which HTTP status means 'Not Found'?",
        choices=("200", "301", "404", "500"),
        correct_index=2,
        explanation="404 indicates resource not found.",
    ),
    Question(
        id=3,
        text="Which method adds an item to the end of an array?",
        choices=("push()", "pop()", "shift()", "unshift()"),
        correct_index=0,
        explanation="push() appends to the array's end.",
    ),
)
