from __future__ import annotations

import threading
import time
from typing import List

import pytest

from helpers import TrackingAction
from undo_queues.history import QueueNameError, RegistryConfig, UndoRegistry
from undo_queues.notify import BufferedSink


def make_registry(**config: object) -> tuple[UndoRegistry, BufferedSink]:
    sink = BufferedSink()
    registry = UndoRegistry(config=RegistryConfig(**config), sink=sink)  # type: ignore[arg-type]
    return registry, sink


def test_record_creates_queue_lazily() -> None:
    registry, _ = make_registry()
    assert registry.has_queue("build") is False

    registry.record("build", TrackingAction("a"))

    assert registry.has_queue("build") is True
    assert registry.queue_names() == ("build",)


def test_undo_on_unknown_queue_is_silent() -> None:
    registry, sink = make_registry()

    assert registry.undo("missing") is False
    assert registry.redo("missing") is False

    assert len(sink) == 0
    assert registry.has_queue("missing") is False


def test_undo_on_known_empty_queue_notifies() -> None:
    registry, sink = make_registry()
    registry.record("build", TrackingAction("a"))
    registry.undo("build")
    sink.drain()

    assert registry.undo("build") is False

    assert [notice.text for notice in sink.drain()] == ["Nothing to undo."]


def test_queues_do_not_share_state() -> None:
    registry, _ = make_registry()
    log: List[str] = []
    registry.record("build", TrackingAction("wall", log))

    assert registry.undo("terrain") is False
    assert registry.redo("terrain") is False
    assert registry.can_undo("build") is True

    registry.record("terrain", TrackingAction("hill", log))
    assert registry.undo("terrain") is True
    assert registry.can_undo("build") is True
    assert log == ["undo:hill"]


def test_reset_all_forgets_every_queue() -> None:
    registry, sink = make_registry()
    registry.record("build", TrackingAction("a"))
    registry.record("terrain", TrackingAction("b"))

    registry.reset_all()
    registry.reset_all()

    assert registry.undo("build") is False
    assert registry.undo("terrain") is False
    assert len(sink) == 0
    assert registry.stats().queue_count == 0


def test_per_queue_capacity_override() -> None:
    registry, _ = make_registry(default_capacity=5, capacity_overrides={"tiny": 2})
    for label in "abcd":
        registry.record("tiny", TrackingAction(label))
        registry.record("wide", TrackingAction(label))

    tiny = registry.get_history("tiny")
    wide = registry.get_history("wide")
    assert tiny is not None and wide is not None
    assert tiny.capacity == 2
    assert len(tiny) == 2
    assert len(wide) == 4


def test_stats_and_revision_track_changes() -> None:
    registry, _ = make_registry()
    start = registry.revision()

    registry.record("b", TrackingAction("1"))
    registry.record("a", TrackingAction("2"))
    registry.record("a", TrackingAction("3"))
    registry.undo("a")
    registry.redo("b")  # nothing to redo, revision unchanged

    stats = registry.stats()
    assert stats.queue_count == 2
    assert stats.entry_count == 3
    assert stats.queues == ("a", "b")
    assert registry.revision() == start + 4


def test_record_from_action_on_same_queue_is_ignored() -> None:
    registry, _ = make_registry()
    echo = TrackingAction("echo")
    action = TrackingAction(
        "a", on_undo=lambda: registry.record("build", echo)
    )
    registry.record("build", action)

    registry.undo("build")

    history = registry.get_history("build")
    assert history is not None
    assert history.entries == (action,)


def test_attach_sink_reroutes_existing_histories() -> None:
    registry, old_sink = make_registry()
    registry.record("build", TrackingAction("a"))
    new_sink = BufferedSink()

    registry.attach_sink(new_sink)
    registry.undo("build")

    assert len(old_sink) == 0
    assert [notice.text for notice in new_sink.drain()] == ["undid a"]


@pytest.mark.parametrize("name", ["", "   ", None, 42])
def test_invalid_queue_names_fail_fast(name: object) -> None:
    registry, _ = make_registry()

    with pytest.raises(QueueNameError):
        registry.record(name, TrackingAction("a"))  # type: ignore[arg-type]
    with pytest.raises(QueueNameError):
        registry.undo(name)  # type: ignore[arg-type]


def test_registry_keeps_the_sink_it_was_given() -> None:
    sink = BufferedSink()
    registry = UndoRegistry(sink=sink)
    registry.record("build", TrackingAction("wall"))

    registry.undo("build")

    assert registry.sink is sink
    history = registry.get_history("build")
    assert history is not None and history.sink is sink
    assert [notice.text for notice in sink.drain()] == ["undid wall"]


def test_reset_all_from_inside_an_action() -> None:
    registry, _ = make_registry()
    registry.record("build", TrackingAction("a"))
    registry.record("build", TrackingAction("b", on_undo=registry.reset_all))
    history = registry.get_history("build")
    assert history is not None

    assert registry.undo("build") is True

    assert history.cursor == -1
    assert history.entries == ()
    assert registry.has_queue("build") is False


def test_reset_all_while_action_waits_on_registry() -> None:
    registry, _ = make_registry()
    action_started = threading.Event()

    def touch_other_queue() -> None:
        action_started.set()
        time.sleep(0.2)  # let reset_all start while this history is locked
        registry.has_queue("other")

    registry.record("q", TrackingAction("slow", on_undo=touch_other_queue))
    worker = threading.Thread(target=registry.undo, args=("q",))
    worker.start()
    assert action_started.wait(timeout=2)

    resetter = threading.Thread(target=registry.reset_all)
    resetter.start()
    worker.join(timeout=3)
    resetter.join(timeout=3)

    assert not worker.is_alive()
    assert not resetter.is_alive()
    assert registry.queue_names() == ()


def test_suppressed_record_leaves_revision_alone() -> None:
    registry, _ = make_registry()
    revisions: List[int] = []

    def reenter() -> None:
        before = registry.revision()
        registry.record("build", TrackingAction("echo"))
        revisions.append(registry.revision() - before)

    registry.record("build", TrackingAction("a", on_undo=reenter))
    registry.undo("build")

    assert revisions == [0]
