"""Adapter boundary types: the host capabilities the engine drives."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Hashable, Optional, Protocol

from crosshairs.config import HighlightStyle

from .events import InputEvent

ViewId = Hashable
EventHook = Callable[[InputEvent], None]


@dataclass(slots=True)
class PositionMarker:
    """Cursor position snapshot handed back from activation.

    Hosts that track edits move ``offset`` when text is inserted or deleted
    before it, so the marker keeps pointing at the same character.
    """

    view: ViewId
    offset: int


class RowHighlighter(Protocol):
    """Process-wide current-line highlight shared by every view."""

    def is_engaged(self) -> bool: ...

    def engage(self) -> None: ...

    def disengage(self) -> None: ...

    def refresh(self, view: ViewId) -> None:
        """Redraw the row highlight for the view's current cursor row."""
        ...

    def clear(self) -> None:
        """Remove any row highlight still drawn in any view."""
        ...

    def set_style(self, style: Optional[HighlightStyle]) -> None:
        """Apply ``style``; ``None`` restores the facility's own default."""
        ...


class ColumnHighlighter(Protocol):
    """Per-view current-column highlight."""

    def is_engaged(self, view: ViewId) -> bool: ...

    def engage(self, view: ViewId) -> None: ...

    def disengage(self, view: ViewId) -> None: ...

    def set_style(self, style: Optional[HighlightStyle]) -> None: ...


class ViewSurface(Protocol):
    """Cursor access and synchronous redisplay for a view."""

    def cursor_offset(self, view: ViewId) -> int: ...

    def cursor_marker(self, view: ViewId) -> PositionMarker: ...

    def redisplay(self, view: ViewId) -> None: ...


class EventHooks(Protocol):
    """Pre/post input-event notification scoped per view."""

    def add_pre_event_hook(self, view: ViewId, hook: EventHook) -> None: ...

    def remove_pre_event_hook(self, view: ViewId, hook: EventHook) -> None: ...

    def add_post_event_hook(self, view: ViewId, hook: EventHook) -> None: ...

    def remove_post_event_hook(self, view: ViewId, hook: EventHook) -> None: ...

    def last_input_event(self) -> Optional[InputEvent]: ...


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class TimerScheduler(Protocol):
    def schedule(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class StatusArea(Protocol):
    def message(self, text: str, *, transient: bool = False) -> None:
        """Show ``text``; transient messages never reach the message history."""
        ...


class ScrollbarFeature(Protocol):
    """Optional scrollbar-visibility mode that can shift the column highlight."""

    def is_enabled(self, view: ViewId) -> bool: ...

    def set_enabled(self, view: ViewId, enabled: bool) -> None: ...

    def redraw(self, view: ViewId) -> None: ...


class IdlePopupFeature(Protocol):
    """Optional idle documentation popup with a per-view delay."""

    def get_delay(self, view: ViewId) -> float: ...

    def set_delay(self, view: ViewId, seconds: float) -> None: ...


@dataclass(slots=True)
class HostServices:
    """Everything the controller needs from the host editor."""

    rows: RowHighlighter
    columns: ColumnHighlighter
    surface: ViewSurface
    events: EventHooks
    timers: TimerScheduler
    status: StatusArea
    scrollbar: Optional[ScrollbarFeature] = None
    idle_popup: Optional[IdlePopupFeature] = None


__all__ = [
    "ColumnHighlighter",
    "EventHook",
    "EventHooks",
    "HostServices",
    "IdlePopupFeature",
    "PositionMarker",
    "RowHighlighter",
    "ScrollbarFeature",
    "StatusArea",
    "TimerHandle",
    "TimerScheduler",
    "ViewId",
    "ViewSurface",
]
