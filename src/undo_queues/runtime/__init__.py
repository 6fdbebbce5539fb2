"""Runtime services shared by every sub-package."""

from . import telemetry

__all__ = ["telemetry"]
