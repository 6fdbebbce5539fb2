"""Named, bounded undo/redo histories for reversible actions."""

__all__ = [
    "adapters",
    "history",
    "notify",
    "runtime",
]

__version__ = "0.1.0"
