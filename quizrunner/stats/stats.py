from __future__ import annotations

"""Session results: scoring summary and human-readable breakdown."""

from typing import Iterable, List

from ..models import AnswerRecord, QuizResults


def percentage(score: int, total: int) -> int:
    """Integer percentage of `score` over `total`, rounded half-up."""
    if total <= 0:
        raise ValueError("total must be positive")
    return (200 * score + total) // (2 * total)


def compute_results(score: int, total: int, log: Iterable[AnswerRecord]) -> QuizResults:
    return QuizResults(score=score, total=total, percentage=percentage(score, total), breakdown=tuple(log))


def result_line(results: QuizResults) -> str:
    return f"You scored {results.score} out of {results.total} ({results.percentage}%)"


def breakdown_lines(results: QuizResults) -> List[str]:
    lines = []
    for i, rec in enumerate(results.breakdown, start=1):
        if rec.skipped:
            lines.append(f"Q{i}: Skipped - {rec.question_text}")
        elif rec.correct:
            lines.append(f"Q{i}: Correct - {rec.question_text}")
        else:
            line = f"Q{i}: Wrong - {rec.question_text} (Correct: {rec.correct_answer})"
            if rec.explanation:
                line += f"\n    Why: {rec.explanation}"
            lines.append(line)
    return lines


def format_summary(results: QuizResults, *, show_breakdown: bool = True) -> str:
    """Return a human-readable summary of a finished run."""
    lines = [result_line(results)]
    if show_breakdown and results.breakdown:
        lines.append("")
        lines.extend(breakdown_lines(results))
    return "\n".join(lines)
