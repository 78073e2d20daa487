from __future__ import annotations

"""Tiny pub/sub event bus for quiz session notifications."""

from typing import Any, Callable, Dict, List

from .explain import warn

SESSION_STARTED = "session_started"
PHASE_CHANGED = "phase_changed"
ANSWER_GRADED = "answer_graded"
SESSION_ENDED = "session_ended"


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
            except Exception as e:
                # one bad subscriber must not starve the others
                warn(f"EventBus: handler for '{event}' failed: {e!r}")
