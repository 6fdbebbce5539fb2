"""Boundary between undo histories and whatever shows messages to a user."""

from .sinks import (
    BufferedSink,
    CallbackSink,
    Notice,
    NotificationSink,
    NullSink,
    TelemetrySink,
)

__all__ = [
    "Notice",
    "NotificationSink",
    "NullSink",
    "CallbackSink",
    "BufferedSink",
    "TelemetrySink",
]
