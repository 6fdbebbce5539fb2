"""Executable Textual app demonstrating an undo queue on a simple counter."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass, replace
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use undo_queues.adapters.textual.app"
    ) from exc

from undo_queues.history import (
    AttributeChange,
    RegistryConfig,
    SessionLifecycle,
    UndoRegistry,
)

from .controller import TextualUIHooks, TextualUndoAdapter


@dataclass
class Counter:
    value: int = 0


def create_registry(capacity: Optional[int] = None) -> UndoRegistry:
    """Build a registry from the environment, optionally forcing a capacity."""

    config = RegistryConfig.from_env()
    if capacity is not None:
        config = replace(config, default_capacity=capacity)
    return UndoRegistry(config=config)


class UndoQueuesApp(App[None]):
    """Counter whose every change can be undone and redone."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#counter-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		content-align: center middle;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, queue: str = "counter", capacity: Optional[int] = None) -> None:
        super().__init__()
        self.counter = Counter()
        self.registry = create_registry(capacity)
        self.lifecycle = SessionLifecycle(self.registry)
        self.adapter: TextualUndoAdapter | None = None
        self._queue = queue
        self._counter_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="counter-area"):
            self._counter_widget = Static("", id="counter-view")
            yield self._counter_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_status=self._update_status,
            refresh=self._refresh_counter,
        )
        self.adapter = TextualUndoAdapter(self.registry, hooks, queue=self._queue)
        self.lifecycle.on_session_start()
        self._refresh_counter()
        self._update_status("+/- change, ctrl+z undo, ctrl+y redo")

    def on_unmount(self) -> None:
        self.lifecycle.on_session_end()

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        if event.character in {"+", "="}:
            self._change_by(1)
        elif event.character == "-":
            self._change_by(-1)
        elif self.adapter.handle_textual_key(event.key) is None:
            return
        event.stop()

    def _change_by(self, delta: int) -> None:
        before = self.counter.value
        self.counter.value = before + delta
        self.registry.record(
            self._queue,
            AttributeChange(
                self.counter, "value", before, self.counter.value, label="counter"
            ),
        )
        self._refresh_counter()

    def _refresh_counter(self) -> None:
        if self._counter_widget:
            self._counter_widget.update(str(self.counter.value))

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the undo queues Textual demo.")
    parser.add_argument(
        "--queue",
        default=os.environ.get("UNDO_QUEUES_DEMO_QUEUE", "counter"),
        help="Name of the undo queue the counter records into (default: counter)",
    )
    parser.add_argument(
        "--capacity",
        type=int,
        default=None,
        help="Maximum undo depth (default: UNDO_QUEUES_CAPACITY or 50)",
    )
    args = parser.parse_args(argv)
    if args.capacity is not None and args.capacity < 1:
        parser.error("--capacity must be at least 1")
    return args


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    app = UndoQueuesApp(queue=args.queue, capacity=args.capacity)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
