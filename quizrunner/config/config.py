from __future__ import annotations

"""Configuration loading and validation for QuizRunner.

This module loads YAML configuration, applies defaults, and repairs
out-of-range values with a warning instead of refusing to start.
"""

import math
from pathlib import Path
from typing import Any, Dict, Optional

import sys

import yaml

from ..app.explain import warn
from ..policy.feedback import POLICIES

DEFAULT_SOURCE = "questions.json"
DEFAULT_TIMEOUT_S = 5.0


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        print(f"ERROR: Config file not found: {path}", file=sys.stderr)
        sys.exit(1)
    except yaml.YAMLError as e:
        print(f"ERROR: Config file {path} is not valid YAML: {e}", file=sys.stderr)
        sys.exit(1)
    if not isinstance(data, dict):
        print(f"ERROR: Config file {path} must contain a mapping.", file=sys.stderr)
        sys.exit(1)
    return data


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from YAML or defaults.

    Args:
        path: Optional path to a YAML config. If None, use package defaults.

    Returns:
        A dictionary with configuration values.
    """
    if path:
        return _load_yaml(Path(path))
    return _load_yaml(Path(__file__).with_name("defaults.yml"))


def _as_bool(section: Dict[str, Any], key: str, default: bool, where: str) -> None:
    value = section.get(key)
    if not isinstance(value, bool):
        warn(f"{where}.{key} must be true or false, got {value!r}; using {default}.")
        section[key] = default


def validate_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Apply defaults and validate configuration values.

    Args:
        cfg: The raw configuration dictionary.

    Returns:
        The validated and merged configuration dictionary.
    """
    for name in ("questions", "session", "ui"):
        if not isinstance(cfg.get(name), dict):
            cfg[name] = {}

    questions = cfg["questions"]
    session = cfg["session"]
    ui = cfg["ui"]

    questions.setdefault("source", DEFAULT_SOURCE)
    questions.setdefault("timeout_s", DEFAULT_TIMEOUT_S)

    session.setdefault("shuffle", True)
    session.setdefault("seed", None)

    ui.setdefault("feedback_policy", "immediate")
    ui.setdefault("show_feedback", True)
    ui.setdefault("show_progress", True)
    ui.setdefault("show_breakdown", True)

    source = questions.get("source")
    if source is not None and not isinstance(source, str):
        warn(f"questions.source must be a path or URL, got {source!r}; using built-in questions.")
        questions["source"] = None

    timeout = questions.get("timeout_s")
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or not math.isfinite(timeout) or timeout <= 0:
        warn(f"questions.timeout_s must be a finite positive number, got {timeout!r}; using {DEFAULT_TIMEOUT_S}.")
        questions["timeout_s"] = DEFAULT_TIMEOUT_S
    else:
        questions["timeout_s"] = float(timeout)

    _as_bool(session, "shuffle", True, "session")
    seed = session.get("seed")
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
        warn(f"session.seed must be an integer or null, got {seed!r}; ignoring it.")
        session["seed"] = None

    policy = ui.get("feedback_policy")
    if policy not in POLICIES:
        warn(f"Unsupported feedback_policy '{policy}', using 'immediate'.")
        ui["feedback_policy"] = "immediate"
    for key in ("show_feedback", "show_progress", "show_breakdown"):
        _as_bool(ui, key, True, "ui")

    return cfg
