from __future__ import annotations

"""Minimal tracing helpers (Explain Mode).

Enable with the `--explain` CLI flag to get one terse line per milestone
on stderr.
"""

import json
import sys
from typing import Any, Dict, TextIO

_ENABLED = False


def enable(flag: bool = True) -> None:
    global _ENABLED
    _ENABLED = bool(flag)


def enabled() -> bool:
    return _ENABLED


def trace(event: str, payload: Dict[str, Any] | None = None, *, stream: TextIO | None = None) -> None:
    if not _ENABLED:
        return
    out = stream or sys.stderr
    try:
        line = json.dumps(payload or {}, separators=(",", ":"), default=str)
    except (TypeError, ValueError):
        line = "{}"
    print(f"[EXPLAIN] {event} :: {line}", file=out)


def warn(message: str, *, stream: TextIO | None = None) -> None:
    """Print a user-facing warning line."""
    print(f"WARNING: {message}", file=stream or sys.stderr)
