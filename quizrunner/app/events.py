from __future__ import annotations

"""Tiny pub/sub event bus between the presenter and its front ends."""

from typing import Any, Callable, Dict, List

from .explain import trace

RENDER = "render"
FEEDBACK = "feedback"
COMPLETED = "completed"


class EventBus:
    def __init__(self) -> None:
        self._subs: Dict[str, List[Callable[[Any], None]]] = {}

    def subscribe(self, event: str, handler: Callable[[Any], None]) -> None:
        self._subs.setdefault(event, []).append(handler)

    def unsubscribe(self, event: str, handler: Callable[[Any], None]) -> None:
        handlers = self._subs.get(event, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event: str, payload: Any) -> None:
        for h in list(self._subs.get(event, [])):
            try:
                h(payload)
            except Exception as exc:
                # A broken subscriber must not stop the others
                trace("subscriber_failed", {"event": event, "error": repr(exc)})
