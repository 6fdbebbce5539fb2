"""Name-keyed registry of independent undo histories."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Dict, Optional

from undo_queues.notify import NotificationSink, NullSink
from undo_queues.runtime.telemetry import record_event, span

from .actions import UndoAction
from .config import RegistryConfig
from .timeline import BoundedHistory


@dataclass(slots=True)
class RegistryStats:
    """Snapshot of every tracked queue."""

    queue_count: int
    entry_count: int
    queues: tuple[str, ...]


class QueueNameError(ValueError):
    """Raised when a queue name is not a non-empty string."""

    def __init__(self, name: object) -> None:
        super().__init__(f"Queue name must be a non-empty string, got {name!r}")
        self.name = name


class UndoRegistry:
    """Owns one ``BoundedHistory`` per queue name.

    Histories are created by the first ``record`` for a name. ``undo`` and
    ``redo`` on a name that was never recorded return ``False`` without
    telling the sink anything, which keeps "unknown queue" apart from
    "nothing to undo".
    """

    def __init__(
        self,
        *,
        config: Optional[RegistryConfig] = None,
        sink: Optional[NotificationSink] = None,
        logger_name: str | None = None,
    ) -> None:
        self.config = config or RegistryConfig()
        self._sink: NotificationSink = sink if sink is not None else NullSink()
        self._queues: Dict[str, BoundedHistory] = {}
        self._logger_name = logger_name
        self._lock = threading.RLock()
        self._revision = 0

    @property
    def sink(self) -> NotificationSink:
        return self._sink

    def attach_sink(self, sink: NotificationSink) -> None:
        """Route notices of every current and future history to ``sink``."""

        with self._lock:
            self._sink = sink
            for history in self._queues.values():
                history.sink = sink

    def revision(self) -> int:
        return self._revision

    def record(self, name: str, action: UndoAction) -> None:
        _validate_name(name)
        with span(
            "registry::record",
            logger_name=self._logger_name,
            component="registry",
            metadata={"queue": name},
        ):
            with self._lock:
                history = self._queues.get(name)
                if history is None:
                    history = self._create_history(name)
            if history.record(action):
                self._touch()

    def undo(self, name: str) -> bool:
        history = self.get_history(name)
        if history is None:
            return False
        changed = history.undo()
        if changed:
            self._touch()
        return changed

    def redo(self, name: str) -> bool:
        history = self.get_history(name)
        if history is None:
            return False
        changed = history.redo()
        if changed:
            self._touch()
        return changed

    def reset_all(self) -> None:
        with self._lock:
            detached = list(self._queues.values())
            self._queues = {}
            self._touch()
        # No registry lock here: a running action may hold its history lock
        # while waiting on the registry.
        for history in detached:
            history.reset()
        dropped = len(detached)
        record_event(
            "registry.reset",
            data={"dropped": dropped},
            logger_name=self._logger_name,
        )

    def get_history(self, name: str) -> Optional[BoundedHistory]:
        _validate_name(name)
        with self._lock:
            return self._queues.get(name)

    def has_queue(self, name: str) -> bool:
        return self.get_history(name) is not None

    def queue_names(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(self._queues)

    def can_undo(self, name: str) -> bool:
        history = self.get_history(name)
        return history is not None and history.can_undo()

    def can_redo(self, name: str) -> bool:
        history = self.get_history(name)
        return history is not None and history.can_redo()

    def stats(self) -> RegistryStats:
        with self._lock:
            return RegistryStats(
                queue_count=len(self._queues),
                entry_count=sum(len(history) for history in self._queues.values()),
                queues=tuple(sorted(self._queues)),
            )

    def _create_history(self, name: str) -> BoundedHistory:
        history = BoundedHistory(
            name=name,
            capacity=self.config.capacity_for(name),
            sink=self._sink,
            failure_policy=self.config.failure_policy,
            nothing_to_undo=self.config.nothing_to_undo,
            nothing_to_redo=self.config.nothing_to_redo,
            logger_name=self._logger_name,
        )
        self._queues[name] = history
        record_event(
            "registry.queue_created",
            data={"queue": name, "capacity": history.capacity},
            logger_name=self._logger_name,
        )
        return history

    def _touch(self) -> None:
        self._revision += 1


def _validate_name(name: object) -> None:
    if not isinstance(name, str) or not name.strip():
        raise QueueNameError(name)


__all__ = [
    "UndoRegistry",
    "RegistryStats",
    "QueueNameError",
]
