from __future__ import annotations

"""CLI for QuizRunner: an interactive terminal front end over QuizPresenter."""

import argparse
from typing import Any, Callable, Dict, Optional

import requests
import yaml

from ..config.config import load_config, validate_config
from ..questions.repository import QuestionRepository, parse_questions, read_source
from ..util.randomness import seed_if_needed
from . import events
from .presenter import PresenterView, QuizPresenter

UI = Dict[str, Callable[..., Any]]


def _build_ui() -> UI:
    def ask(prompt: str) -> str:
        try:
            return input(prompt)
        except EOFError:
            return "q"

    def inform(msg: str) -> None:
        print(msg)

    return {"ask": ask, "inform": inform}


def _make_renderer(inform: Callable[[str], None], *, show_progress: bool, show_feedback: bool) -> Callable[[PresenterView], None]:
    shown = {"notice": None}

    def render(view: PresenterView) -> None:
        if view.screen == "start":
            shown["notice"] = None
            inform("\n== QuizRunner ==")
            return
        if view.notice and view.notice != shown["notice"]:
            inform(f"[!] {view.notice}")
            shown["notice"] = view.notice
        if view.screen == "result":
            inform("\n== Results ==")
            inform(view.summary or "")
            return
        if view.feedback is not None:
            if show_feedback:
                inform(view.feedback.message)
            if show_progress:
                inform(view.score_label)
            return
        if show_progress:
            inform(f"\n{view.progress}    {view.score_label}")
        inform(view.question_text or "")
        for i, choice in enumerate(view.choices, start=1):
            inform(f"  {i}) {choice}")

    return render


def run_interactive(presenter: QuizPresenter, ui: UI, *, show_progress: bool = True, show_feedback: bool = True) -> int:
    """Drive the presenter from typed commands until the user quits."""
    ask = ui["ask"]
    inform = ui["inform"]
    render = _make_renderer(inform, show_progress=show_progress, show_feedback=show_feedback)
    presenter.bus.subscribe(events.RENDER, render)
    try:
        render(presenter.view())
        while True:
            view = presenter.view()
            if view.screen == "start":
                cmd = ask("[s] start built-in questions, [l] load questions, [q] quit: ").strip().lower()
                if cmd == "q":
                    return 0
                if cmd in ("", "s"):
                    presenter.begin(uses_fallback=True)
                elif cmd == "l":
                    presenter.begin(uses_fallback=False)
                else:
                    inform(f"Unknown command: {cmd!r}")
            elif view.screen == "quiz":
                if view.can_advance:
                    cmd = ask("[n] next, [q] quit: ").strip().lower()
                    if cmd == "q":
                        return 0
                    if cmd in ("", "n"):
                        presenter.advance()
                    else:
                        inform(f"Unknown command: {cmd!r}")
                    continue
                n = len(view.choices)
                cmd = ask(f"Choose 1-{n}, [s] skip, [q] quit: ").strip().lower()
                if cmd == "q":
                    return 0
                if cmd == "s":
                    presenter.skip()
                elif cmd.isdecimal() and 1 <= int(cmd) <= n:
                    presenter.select_choice(int(cmd) - 1)
                else:
                    inform(f"Please enter a number between 1 and {n}.")
            else:
                cmd = ask("[r] retry, [m] start screen, [q] quit: ").strip().lower()
                if cmd == "q":
                    return 0
                if cmd == "r":
                    presenter.retry()
                elif cmd == "m":
                    presenter.return_to_start()
                else:
                    inform(f"Unknown command: {cmd!r}")
    finally:
        presenter.bus.unsubscribe(events.RENDER, render)


def _cmd_run(args: argparse.Namespace, ui: Optional[UI]) -> int:
    seed_if_needed()
    if args.explain:
        from .explain import enable as explain_enable
        explain_enable(True)
    cfg = validate_config(load_config(args.config))

    # CLI overrides
    if args.source is not None:
        cfg["questions"]["source"] = args.source
    if args.seed is not None:
        cfg["session"]["seed"] = args.seed
    if args.no_shuffle:
        cfg["session"]["shuffle"] = False

    presenter = QuizPresenter.from_config(cfg)
    ui = ui or _build_ui()
    if args.fallback:
        presenter.begin(uses_fallback=True)
    ucfg = cfg["ui"]
    return run_interactive(
        presenter,
        ui,
        show_progress=bool(ucfg["show_progress"]),
        show_feedback=bool(ucfg["show_feedback"]),
    )


def _cmd_validate(args: argparse.Namespace) -> int:
    try:
        questions = parse_questions(read_source(args.source, timeout_s=args.timeout))
    except (requests.RequestException, OSError, ValueError, yaml.YAMLError) as e:
        print(f"INVALID: {args.source}: {e}")
        return 1
    print(f"OK: {len(questions)} questions in {args.source}")
    return 0


def _cmd_list_questions(args: argparse.Namespace) -> int:
    cfg = validate_config(load_config(args.config))
    source = args.source if args.source is not None else cfg["questions"]["source"]
    repo = QuestionRepository(timeout_s=cfg["questions"]["timeout_s"])
    loaded = repo.load(source)
    label = "built-in questions" if loaded.used_fallback else loaded.source
    print(f"{len(loaded.questions)} questions from {label}:")
    for i, q in enumerate(loaded.questions, start=1):
        prefix = f"[{q.id}] " if q.id is not None else ""
        print(f"{i}. {prefix}{q.text}")
        for j, choice in enumerate(q.choices):
            mark = "*" if j == q.correct_index else " "
            print(f"   {mark} {choice}")
    return 0


def main(argv: list[str] | None = None, *, ui: Optional[UI] = None) -> int:
    p = argparse.ArgumentParser(prog="quizrunner")
    sub = p.add_subparsers(dest="cmd", required=True)

    rp = sub.add_parser("run", help="Play a quiz in the terminal")
    rp.add_argument("--config", default=None)
    rp.add_argument("--source", default=None, help="Question file (.json/.yml) or http(s) URL")
    rp.add_argument("--fallback", action="store_true", help="Skip the start screen and use the built-in questions")
    rp.add_argument("--seed", type=int, default=None)
    rp.add_argument("--no-shuffle", dest="no_shuffle", action="store_true")
    rp.add_argument("--explain", action="store_true")

    vp = sub.add_parser("validate", help="Check that a question source is well-formed")
    vp.add_argument("source")
    vp.add_argument("--timeout", type=float, default=5.0)

    lp = sub.add_parser("list-questions", help="Print the questions a source yields")
    lp.add_argument("--config", default=None)
    lp.add_argument("--source", default=None)

    args = p.parse_args(argv)

    if args.cmd == "run":
        return _cmd_run(args, ui)
    if args.cmd == "validate":
        return _cmd_validate(args)
    if args.cmd == "list-questions":
        return _cmd_list_questions(args)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
