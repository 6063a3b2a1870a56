from __future__ import annotations

"""Question repository: load a question set from a file, URL or list.

Loading fails soft. Any fetch, parse or validation error is reported as a
warning and answered with the built-in fallback set, so a session is never
started from an invalid or empty collection.
"""

import json
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional, Sequence, Tuple, Union

import requests
import yaml

from ..app.explain import trace as xtrace, warn
from ..errors import QuestionFormatError
from ..models import Question
from .fallback import FALLBACK_QUESTIONS

Source = Union[None, str, Path, Sequence[Any]]

BUILTIN_SOURCE = "built-in"
YAML_SUFFIXES = (".yml", ".yaml")


@dataclass(frozen=True)
class LoadResult:
    questions: Tuple[Question, ...]
    used_fallback: bool
    source: str
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        """True when the requested source could not be used."""
        return self.error is not None


def _is_url(text: str) -> bool:
    return text.lower().startswith(("http://", "https://"))


def describe_source(source: Source) -> str:
    if source is None:
        return BUILTIN_SOURCE
    if isinstance(source, (str, Path)):
        return str(source)
    return f"<{len(source)} in-memory records>"


def _decode(decoder: Callable[[], Any], label: str) -> Any:
    try:
        return decoder()
    except RecursionError as exc:
        raise QuestionFormatError(f"{label} is nested too deeply to decode") from exc


def read_source(source: Union[str, Path, Sequence[Any]], *, timeout_s: float = 5.0, http: Any = None) -> Any:
    """Fetch and decode the payload of a source.

    Raises on network, I/O and syntax errors; does no validation.
    """
    if not isinstance(source, (str, Path)):
        return list(source)
    text = str(source)
    if _is_url(text):
        client = http if http is not None else requests
        resp = client.get(text, timeout=timeout_s)
        resp.raise_for_status()
        return _decode(resp.json, text)
    path = Path(text)
    raw = path.read_text(encoding="utf-8")
    if path.suffix.lower() in YAML_SUFFIXES:
        return _decode(lambda: yaml.safe_load(raw), text)
    return _decode(lambda: json.loads(raw), text)


def parse_questions(data: Any) -> Tuple[Question, ...]:
    """Validate a decoded payload into questions, or raise QuestionFormatError."""
    if not isinstance(data, list):
        raise QuestionFormatError(f"question set must be an array, got {type(data).__name__}")
    if not data:
        raise QuestionFormatError("question set is empty")
    out = []
    for i, item in enumerate(data):
        if isinstance(item, Question):
            out.append(item)
            continue
        try:
            out.append(Question.from_json(item))
        except QuestionFormatError as exc:
            raise QuestionFormatError(f"question #{i}: {exc}") from exc
    return tuple(out)


class QuestionRepository:
    def __init__(
        self,
        *,
        timeout_s: float = 5.0,
        fallback: Sequence[Question] = FALLBACK_QUESTIONS,
        http: Optional[requests.Session] = None,
    ) -> None:
        if not fallback:
            raise ValueError("fallback question set must not be empty")
        self.timeout_s = timeout_s
        self._fallback = tuple(fallback)
        self._http = http

    @property
    def fallback_questions(self) -> Tuple[Question, ...]:
        return self._fallback

    def builtin(self) -> LoadResult:
        """The fallback set, requested on purpose (no diagnostic)."""
        return LoadResult(questions=self._fallback, used_fallback=True, source=BUILTIN_SOURCE)

    def load(self, source: Source) -> LoadResult:
        if source is None:
            return self.builtin()
        label = describe_source(source)
        try:
            data = read_source(source, timeout_s=self.timeout_s, http=self._http)
            questions = parse_questions(data)
        except (requests.RequestException, OSError, ValueError, yaml.YAMLError) as exc:
            # QuestionFormatError and JSON decode errors are ValueErrors
            reason = f"{type(exc).__name__}: {exc}"
            warn(f"Loading questions from {label} failed, using fallback questions. ({reason})")
            xtrace("questions_fallback", {"source": label, "reason": reason})
            return LoadResult(questions=self._fallback, used_fallback=True, source=label, error=reason)

        dupes = sorted(str(k) for k, n in Counter(q.id for q in questions if q.id is not None).items() if n > 1)
        xtrace("questions_loaded", {"source": label, "count": len(questions), "duplicate_ids": dupes})
        return LoadResult(questions=questions, used_fallback=False, source=label)
