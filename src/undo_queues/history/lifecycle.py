"""Host session hooks that wipe every undo queue."""

from __future__ import annotations

from typing import Callable, Protocol

from undo_queues.runtime import telemetry

from .registry import UndoRegistry

SESSION_START_EVENT = "session.start"
SESSION_END_EVENT = "session.end"


class EventSource(Protocol):
    def subscribe(self, event: str, callback: Callable[[object], None]) -> None: ...


class SessionLifecycle:
    """Clears the registry when a session starts and again when it ends.

    Histories only make sense for the world they were recorded against, so
    both edges reset everything unconditionally.
    """

    def __init__(self, registry: UndoRegistry) -> None:
        self.registry = registry

    def on_session_start(self, payload: object | None = None) -> None:
        del payload
        telemetry.record_event("lifecycle.session_start")
        self.registry.reset_all()

    def on_session_end(self, payload: object | None = None) -> None:
        del payload
        telemetry.record_event("lifecycle.session_end")
        self.registry.reset_all()

    def bind(
        self,
        source: EventSource,
        *,
        start_event: str = SESSION_START_EVENT,
        end_event: str = SESSION_END_EVENT,
    ) -> None:
        """Subscribe both hooks on any ``subscribe(event, callback)`` source."""

        source.subscribe(start_event, self.on_session_start)
        source.subscribe(end_event, self.on_session_end)


__all__ = [
    "SessionLifecycle",
    "EventSource",
    "SESSION_START_EVENT",
    "SESSION_END_EVENT",
]
