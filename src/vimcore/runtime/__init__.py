"""Runtime services shared by every component."""

from . import telemetry

__all__ = ["telemetry"]
