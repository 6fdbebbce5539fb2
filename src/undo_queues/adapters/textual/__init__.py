"""Textual integration for undo queues."""

from .controller import REDO_KEYS, UNDO_KEYS, TextualUIHooks, TextualUndoAdapter

__all__ = ["TextualUndoAdapter", "TextualUIHooks", "UNDO_KEYS", "REDO_KEYS"]
