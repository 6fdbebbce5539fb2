from __future__ import annotations

from typing import Callable, List, Optional


class TrackingAction:
    """Records every call so tests can assert on invocation order."""

    def __init__(
        self,
        label: str,
        log: Optional[List[str]] = None,
        *,
        on_undo: Optional[Callable[[], None]] = None,
        on_redo: Optional[Callable[[], None]] = None,
    ) -> None:
        self.label = label
        self.log = log if log is not None else []
        self.on_undo = on_undo
        self.on_redo = on_redo

    def undo(self) -> None:
        self.log.append(f"undo:{self.label}")
        if self.on_undo:
            self.on_undo()

    def redo(self) -> None:
        self.log.append(f"redo:{self.label}")
        if self.on_redo:
            self.on_redo()

    def undo_message(self) -> str:
        return f"undid {self.label}"

    def redo_message(self) -> str:
        return f"redid {self.label}"

    def __repr__(self) -> str:
        return f"TrackingAction({self.label!r})"


class ExplodingAction(TrackingAction):
    def undo(self) -> None:
        super().undo()
        raise RuntimeError(f"cannot undo {self.label}")

    def redo(self) -> None:
        super().redo()
        raise RuntimeError(f"cannot redo {self.label}")
