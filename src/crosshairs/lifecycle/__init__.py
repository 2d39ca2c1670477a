"""Highlight lifecycle: per-view state machine and its controller."""

from .controller import (
    DISABLED_MESSAGE,
    MIN_TIMER_DELAY,
    HighlightLifecycleController,
    format_position,
)
from .idle import IdleHighlighter
from .state import AxisMode, Expiry, HighlightPhase, ViewHighlightState

__all__ = [
    "DISABLED_MESSAGE",
    "MIN_TIMER_DELAY",
    "AxisMode",
    "Expiry",
    "HighlightLifecycleController",
    "HighlightPhase",
    "IdleHighlighter",
    "ViewHighlightState",
    "format_position",
]
