"""Undo/redo histories, their registry, and the reversible action contract."""

from .actions import (
    ActionOutcome,
    AttributeChange,
    CallbackAction,
    CompositeAction,
    UndoAction,
)
from .config import RegistryConfig
from .lifecycle import SessionLifecycle
from .registry import QueueNameError, RegistryStats, UndoRegistry
from .timeline import DEFAULT_CAPACITY, BoundedHistory, FailurePolicy

__all__ = [
    "UndoAction",
    "ActionOutcome",
    "CallbackAction",
    "AttributeChange",
    "CompositeAction",
    "BoundedHistory",
    "FailurePolicy",
    "DEFAULT_CAPACITY",
    "RegistryConfig",
    "UndoRegistry",
    "RegistryStats",
    "QueueNameError",
    "SessionLifecycle",
]
