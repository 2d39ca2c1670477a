"""Per-view highlight state and the enums describing it."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from crosshairs.host.events import InputEvent
from crosshairs.host.protocols import TimerHandle


class AxisMode(str, Enum):
    BOTH = "both"
    ROW_ONLY = "row"
    COLUMN_ONLY = "column"

    @property
    def includes_row(self) -> bool:
        return self is not AxisMode.COLUMN_ONLY

    @property
    def includes_column(self) -> bool:
        return self is not AxisMode.ROW_ONLY


class Expiry(str, Enum):
    UNTIL_TOGGLED = "until_toggled"
    UNTIL_NEXT_EVENT = "until_next_event"
    FOR_DURATION = "for_duration"


class HighlightPhase(str, Enum):
    INACTIVE = "inactive"
    ACTIVE_UNTIL_TOGGLED = "active_until_toggled"
    ACTIVE_UNTIL_EVENT = "active_until_event"
    ACTIVE_FOR_DURATION = "active_for_duration"


_PHASES = {
    Expiry.UNTIL_TOGGLED: HighlightPhase.ACTIVE_UNTIL_TOGGLED,
    Expiry.UNTIL_NEXT_EVENT: HighlightPhase.ACTIVE_UNTIL_EVENT,
    Expiry.FOR_DURATION: HighlightPhase.ACTIVE_FOR_DURATION,
}

EventHook = Callable[[InputEvent], None]


@dataclass(slots=True)
class ViewHighlightState:
    """What the controller changed for one view, so it can be undone."""

    # Bound once per view so the same objects can be deregistered later.
    report_hook: EventHook = field(repr=False)
    expire_hook: EventHook = field(repr=False)
    active: bool = False
    suspended_scrollbar: bool = False
    saved_idle_delay: Optional[float] = None
    pending_timer: Optional[TimerHandle] = None
    expiry: Optional[Expiry] = None

    @property
    def phase(self) -> HighlightPhase:
        if not self.active or self.expiry is None:
            return HighlightPhase.INACTIVE
        return _PHASES[self.expiry]


__all__ = [
    "AxisMode",
    "Expiry",
    "HighlightPhase",
    "ViewHighlightState",
]
