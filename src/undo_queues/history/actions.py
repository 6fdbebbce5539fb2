"""Reversible action contract and a few ready-made implementations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Protocol, Tuple, runtime_checkable


@runtime_checkable
class UndoAction(Protocol):
    """Caller-supplied unit of work that knows how to revert and replay itself."""

    def undo(self) -> None:
        """Revert whatever the action did."""
        ...

    def redo(self) -> None:
        """Replay whatever the action did."""
        ...

    def undo_message(self) -> str:
        """Text shown after a successful undo."""
        ...

    def redo_message(self) -> str:
        """Text shown after a successful redo."""
        ...


@dataclass(frozen=True, slots=True)
class ActionOutcome:
    """What happened when a history ran one of its actions."""

    ok: bool
    message: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, message: str) -> "ActionOutcome":
        return cls(ok=True, message=message)

    @classmethod
    def failure(cls, exc: BaseException) -> "ActionOutcome":
        return cls(ok=False, error=f"{type(exc).__name__}: {exc}")


@dataclass(slots=True)
class CallbackAction:
    undo_fn: Callable[[], object]
    redo_fn: Callable[[], object]
    undo_text: str = "Undone."
    redo_text: str = "Redone."

    def undo(self) -> None:
        self.undo_fn()

    def redo(self) -> None:
        self.redo_fn()

    def undo_message(self) -> str:
        return self.undo_text

    def redo_message(self) -> str:
        return self.redo_text


@dataclass(slots=True)
class AttributeChange:
    """Flip ``target.attribute`` between ``before`` and ``after``."""

    target: object
    attribute: str
    before: object
    after: object
    label: Optional[str] = None

    def undo(self) -> None:
        setattr(self.target, self.attribute, self.before)

    def redo(self) -> None:
        setattr(self.target, self.attribute, self.after)

    def undo_message(self) -> str:
        return f"Undo {self._describe()}: {self.after!r} -> {self.before!r}"

    def redo_message(self) -> str:
        return f"Redo {self._describe()}: {self.before!r} -> {self.after!r}"

    def _describe(self) -> str:
        return self.label or self.attribute


class CompositeAction:
    """Groups several actions so they are undone and redone as one step.

    Children are undone last-to-first and redone first-to-last. A failing
    child stops the walk and the exception propagates to the history.
    """

    def __init__(
        self,
        actions: Iterable[UndoAction],
        *,
        undo_text: str,
        redo_text: str,
    ) -> None:
        self.actions: Tuple[UndoAction, ...] = tuple(actions)
        if not self.actions:
            raise ValueError("CompositeAction needs at least one action")
        self.undo_text = undo_text
        self.redo_text = redo_text

    def undo(self) -> None:
        for action in reversed(self.actions):
            action.undo()

    def redo(self) -> None:
        for action in self.actions:
            action.redo()

    def undo_message(self) -> str:
        return self.undo_text

    def redo_message(self) -> str:
        return self.redo_text


__all__ = [
    "UndoAction",
    "ActionOutcome",
    "CallbackAction",
    "AttributeChange",
    "CompositeAction",
]
