"""Runtime services (telemetry) shared by the engine and adapters."""

from . import telemetry

__all__ = ["telemetry"]
