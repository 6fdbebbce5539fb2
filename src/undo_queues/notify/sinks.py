"""Notification sinks receiving human-readable undo/redo outcomes."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, List, Optional, Protocol

from undo_queues.runtime import telemetry


@dataclass(frozen=True, slots=True)
class Notice:
    """A single message plus whether it should jump the pending queue."""

    text: str
    priority: bool = True


class NotificationSink(Protocol):
    """Anything able to show a message to the user."""

    def notify(self, message: str, *, priority: bool = True) -> None:
        """Deliver ``message``; ``priority`` asks to show it before pending ones."""
        ...


class NullSink:
    """Drops every notice."""

    def notify(self, message: str, *, priority: bool = True) -> None:
        del message, priority


class CallbackSink:
    """Forwards each notice to a plain callable."""

    def __init__(self, callback: Callable[[Notice], None]) -> None:
        self._callback = callback

    def notify(self, message: str, *, priority: bool = True) -> None:
        self._callback(Notice(text=message, priority=priority))


class BufferedSink:
    """Holds notices until a host drains them, like a HUD message queue.

    A priority notice is shown ahead of whatever is already waiting, but
    behind earlier priority notices so they keep their relative order. When
    ``maxlen`` is reached the oldest non-priority notice is dropped first.
    """

    def __init__(self, maxlen: Optional[int] = None) -> None:
        if maxlen is not None and maxlen <= 0:
            raise ValueError("maxlen must be positive")
        self._maxlen = maxlen
        self._priority: Deque[Notice] = deque()
        self._regular: Deque[Notice] = deque()

    def notify(self, message: str, *, priority: bool = True) -> None:
        notice = Notice(text=message, priority=priority)
        if priority:
            self._priority.append(notice)
        else:
            self._regular.append(notice)
        self._enforce_limit()

    def pending(self) -> List[Notice]:
        return [*self._priority, *self._regular]

    def drain(self) -> List[Notice]:
        """Return every pending notice in display order and forget them."""

        notices = self.pending()
        self._priority.clear()
        self._regular.clear()
        return notices

    def __len__(self) -> int:
        return len(self._priority) + len(self._regular)

    def _enforce_limit(self) -> None:
        if self._maxlen is None:
            return
        while len(self) > self._maxlen:
            if self._regular:
                self._regular.popleft()
            else:
                self._priority.popleft()


class TelemetrySink:
    """Writes each notice to the telemetry log instead of a screen."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._logger_name = logger_name

    def notify(self, message: str, *, priority: bool = True) -> None:
        telemetry.record_event(
            "notice",
            data={"text": message, "priority": priority},
            logger_name=self._logger_name,
        )


__all__ = [
    "Notice",
    "NotificationSink",
    "NullSink",
    "CallbackSink",
    "BufferedSink",
    "TelemetrySink",
]
