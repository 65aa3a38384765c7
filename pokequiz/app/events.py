from __future__ import annotations

"""Tiny pub/sub event bus for presentation layers.

Quiz events: "question", "answered", "completed", "settings_changed".
"""

from typing import Any, Callable, Dict, List

from .explain import trace as xtrace

Handler = Callable[[Any], None]


class EventBus:
    def __init__(self) -> None:
        self._subs: Dict[str, List[Handler]] = {}

    def subscribe(self, event: str, handler: Handler) -> Callable[[], None]:
        """Register handler; returns a callable that unsubscribes it."""
        self._subs.setdefault(event, []).append(handler)

        def _unsubscribe() -> None:
            self.unsubscribe(event, handler)

        return _unsubscribe

    def unsubscribe(self, event: str, handler: Handler) -> None:
        handlers = self._subs.get(event, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event: str, payload: Any = None) -> None:
        # A failing view must not break the quiz state transition that fired it.
        for h in list(self._subs.get(event, [])):
            try:
                h(payload)
            except Exception as e:
                xtrace("event_handler_failed", {"event": event, "error": repr(e)})
