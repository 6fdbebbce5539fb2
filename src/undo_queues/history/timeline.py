"""Bounded linear undo/redo history for a single named queue."""

from __future__ import annotations

import threading
from enum import Enum
from typing import List, Optional, Tuple

from undo_queues.notify import NotificationSink, NullSink
from undo_queues.runtime import telemetry

from .actions import ActionOutcome, UndoAction

DEFAULT_CAPACITY = 50
NOTHING_TO_UNDO = "Nothing to undo."
NOTHING_TO_REDO = "Nothing to redo."


class FailurePolicy(str, Enum):
    """Where the cursor goes when an action raises while being replayed."""

    ADVANCE = "advance"  # move as if the action succeeded
    HOLD = "hold"  # stay put and report the call as unsuccessful


class BoundedHistory:
    """Ordered actions plus a cursor marking the most recently applied one.

    ``cursor == -1`` means nothing is applied and every entry is redoable;
    ``cursor == len(entries) - 1`` means everything is applied. Recording
    from the middle of the history discards the redo branch, and recording
    while an action is being undone or redone is ignored.
    """

    def __init__(
        self,
        *,
        name: str = "default",
        capacity: int = DEFAULT_CAPACITY,
        sink: Optional[NotificationSink] = None,
        failure_policy: FailurePolicy = FailurePolicy.ADVANCE,
        nothing_to_undo: str = NOTHING_TO_UNDO,
        nothing_to_redo: str = NOTHING_TO_REDO,
        logger_name: str | None = None,
    ) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.name = name
        self.sink: NotificationSink = sink if sink is not None else NullSink()
        self.failure_policy = FailurePolicy(failure_policy)
        self.nothing_to_undo = nothing_to_undo
        self.nothing_to_redo = nothing_to_redo
        self._capacity = capacity
        self._entries: List[UndoAction] = []
        self._cursor: int = -1
        self._replaying = False
        self._generation = 0
        self._last_outcome: Optional[ActionOutcome] = None
        self._logger_name = logger_name
        self._lock = threading.RLock()

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def entries(self) -> Tuple[UndoAction, ...]:
        return tuple(self._entries)

    @property
    def replaying(self) -> bool:
        return self._replaying

    @property
    def last_outcome(self) -> Optional[ActionOutcome]:
        return self._last_outcome

    def __len__(self) -> int:
        return len(self._entries)

    def can_undo(self) -> bool:
        return self._cursor >= 0

    def can_redo(self) -> bool:
        return self._cursor < len(self._entries) - 1

    def record(self, action: UndoAction) -> bool:
        """Append ``action`` as the new head; ``False`` while replaying."""

        with self._lock:
            if self._replaying:
                self._event("history.record_suppressed", level="debug")
                return False

            if self.can_redo():
                discarded = len(self._entries) - self._cursor - 1
                self._entries = self._entries[: self._cursor + 1]
                self._event("history.truncated", discarded=discarded)

            overflow = len(self._entries) - self._capacity + 1
            if overflow > 0:
                self._entries = self._entries[overflow:]
                self._cursor = max(self._cursor - overflow, -1)
                self._event("history.evicted", evicted=overflow)

            self._entries.append(action)
            self._cursor = len(self._entries) - 1
            return True

    def undo(self) -> bool:
        with self._lock:
            if not self.can_undo():
                self._notify(self.nothing_to_undo)
                return False

            generation = self._generation
            with telemetry.queue_span(
                "undo", self.name, self._cursor, logger_name=self._logger_name
            ):
                outcome = self._replay(self._entries[self._cursor], undo=True)

            if self._generation != generation:
                # reset while the action ran; the history is already empty
                return True
            if not outcome.ok and self.failure_policy is FailurePolicy.HOLD:
                return False
            self._cursor -= 1
            return True

    def redo(self) -> bool:
        with self._lock:
            if not self.can_redo():
                self._notify(self.nothing_to_redo)
                return False

            generation = self._generation
            with telemetry.queue_span(
                "redo", self.name, self._cursor, logger_name=self._logger_name
            ):
                self._cursor += 1
                outcome = self._replay(self._entries[self._cursor], undo=False)

            if self._generation != generation:
                return True
            if not outcome.ok and self.failure_policy is FailurePolicy.HOLD:
                self._cursor -= 1
                return False
            return True

    def reset(self) -> None:
        with self._lock:
            self._entries = []
            self._cursor = -1
            self._generation += 1
            self._last_outcome = None

    def _replay(self, action: UndoAction, *, undo: bool) -> ActionOutcome:
        verb = "Undo" if undo else "Redo"
        self._replaying = True
        try:
            try:
                if undo:
                    action.undo()
                    message = action.undo_message()
                else:
                    action.redo()
                    message = action.redo_message()
            except Exception as exc:
                outcome = ActionOutcome.failure(exc)
                self._event(
                    "history.action_failed",
                    level="error",
                    direction=verb.lower(),
                    error=outcome.error,
                )
                self._notify(f"{verb} failed: {outcome.error}")
            else:
                outcome = ActionOutcome.success(message)
                self._notify(message)
        finally:
            self._replaying = False
        self._last_outcome = outcome
        return outcome

    def _notify(self, message: str) -> None:
        try:
            self.sink.notify(message, priority=True)
        except Exception as exc:
            self._event("history.sink_failed", level="warning", error=str(exc))

    def _event(self, name: str, *, level: str = "info", **data: object) -> None:
        telemetry.record_queue_event(
            name,
            self.name,
            self._cursor,
            level=level,
            logger_name=self._logger_name,
            **data,
        )


__all__ = [
    "BoundedHistory",
    "FailurePolicy",
    "DEFAULT_CAPACITY",
    "NOTHING_TO_UNDO",
    "NOTHING_TO_REDO",
]
