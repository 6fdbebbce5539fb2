"""Minimal Textual adapter that routes undo keys and notices to UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from undo_queues.history import UndoRegistry


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


UNDO_KEYS = frozenset({"ctrl+z", "u"})
REDO_KEYS = frozenset({"ctrl+y", "ctrl+r"})


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_status: Callable[[str], None]
    refresh: Callable[[], None] = _noop
    # Optional realtime log callback for debug lines
    log: Callable[[str], None] = _noop


class TextualUndoAdapter:
    """Bridges an ``UndoRegistry`` to a Textual-friendly surface.

    The adapter is also the registry's notification sink: every notice ends
    up on the status line, priority or not, since a status line only shows
    the latest message anyway.
    """

    def __init__(
        self,
        registry: UndoRegistry,
        hooks: TextualUIHooks,
        *,
        queue: str = "default",
        undo_keys: Iterable[str] = UNDO_KEYS,
        redo_keys: Iterable[str] = REDO_KEYS,
    ) -> None:
        self.registry = registry
        self.hooks = hooks
        self.queue = queue
        self._undo_keys = frozenset(key.lower() for key in undo_keys)
        self._redo_keys = frozenset(key.lower() for key in redo_keys)
        self.registry.attach_sink(self)

    def notify(self, message: str, *, priority: bool = True) -> None:
        self._log_state("notice ->", text=message, priority=priority)
        self.hooks.update_status(message)

    def switch_queue(self, name: str) -> None:
        self.queue = name
        self._log_state("queue ->")
        self.hooks.update_status(f"queue: {name}")

    def handle_textual_key(self, key: str) -> Optional[bool]:
        """Run undo or redo for ``key``; ``None`` when the key is not ours."""

        normalized = key.lower()
        if normalized in self._undo_keys:
            handled = self.registry.undo(self.queue)
        elif normalized in self._redo_keys:
            handled = self.registry.redo(self.queue)
        else:
            return None

        if not handled and not self.registry.has_queue(self.queue):
            self.hooks.update_status(f"no history for '{self.queue}'")
        self._log_state("key ->", key=key, handled=handled)
        self.hooks.refresh()
        return handled

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        history = self.registry.get_history(self.queue)
        return {
            "queue": self.queue,
            "cursor": history.cursor if history else None,
            "entries": len(history) if history else 0,
            "revision": self.registry.revision(),
        }


__all__ = ["TextualUndoAdapter", "TextualUIHooks", "UNDO_KEYS", "REDO_KEYS"]
