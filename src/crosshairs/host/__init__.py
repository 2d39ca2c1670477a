"""Host protocols, input events and the in-memory reference host."""

from .events import FRAME_SWITCH, EventHookRegistry, InputEvent
from .memory import ManualScheduler, MemoryHost
from .protocols import (
    ColumnHighlighter,
    EventHooks,
    HostServices,
    IdlePopupFeature,
    PositionMarker,
    RowHighlighter,
    ScrollbarFeature,
    StatusArea,
    TimerHandle,
    TimerScheduler,
    ViewId,
    ViewSurface,
)

__all__ = [
    "FRAME_SWITCH",
    "ColumnHighlighter",
    "EventHookRegistry",
    "EventHooks",
    "HostServices",
    "IdlePopupFeature",
    "InputEvent",
    "ManualScheduler",
    "MemoryHost",
    "PositionMarker",
    "RowHighlighter",
    "ScrollbarFeature",
    "StatusArea",
    "TimerHandle",
    "TimerScheduler",
    "ViewId",
    "ViewSurface",
]
