import os

# Keep test output readable; telemetry reads these when first imported.
os.environ.setdefault("UNDO_QUEUES_DISABLE_CONSOLE", "1")
os.environ.setdefault("UNDO_QUEUES_LOG_LEVEL", "ERROR")
