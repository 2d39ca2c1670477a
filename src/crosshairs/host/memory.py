"""In-memory host used by tests and as a reference for embedders."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Hashable, List, Optional, Set

from crosshairs.config import HighlightStyle

from .events import EventHookRegistry, InputEvent
from .protocols import HostServices, PositionMarker


@dataclass(slots=True)
class MemoryView:
    """Text, cursor and live markers for one view."""

    text: str = ""
    cursor: int = 0
    markers: List[PositionMarker] = field(default_factory=list)
    redisplays: int = 0


@dataclass
class PendingTimer:
    deadline: float
    generation: int
    callback: Callable[[], None]
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Timer scheduler driven by an explicit clock instead of wall time."""

    def __init__(self, *, start: float = 0.0) -> None:
        self.now = start
        self._timers: List[PendingTimer] = []
        self._generation = 0

    def schedule(self, delay: float, callback: Callable[[], None]) -> PendingTimer:
        self._generation += 1
        timer = PendingTimer(
            deadline=self.now + delay,
            generation=self._generation,
            callback=callback,
        )
        self._timers.append(timer)
        return timer

    @property
    def pending(self) -> List[PendingTimer]:
        return [timer for timer in self._timers if not timer.cancelled]

    def advance(self, seconds: float) -> int:
        """Move the clock forward and fire whatever expired; returns the count."""

        self.now += seconds
        return self.process_timeouts()

    def process_timeouts(self) -> int:
        fired = 0
        while True:
            expired = [
                timer
                for timer in self._timers
                if not timer.cancelled and timer.deadline <= self.now
            ]
            if not expired:
                break
            timer = min(expired, key=lambda item: (item.deadline, item.generation))
            self._timers.remove(timer)
            timer.callback()
            fired += 1
        self._timers = [timer for timer in self._timers if not timer.cancelled]
        return fired


class MemoryRows:
    def __init__(self, host: "MemoryHost") -> None:
        self._host = host
        self.engaged = False
        self.style: Optional[HighlightStyle] = None
        self.drawn: Dict[Hashable, int] = {}

    def is_engaged(self) -> bool:
        return self.engaged

    def engage(self) -> None:
        self.engaged = True

    def disengage(self) -> None:
        self.engaged = False

    def refresh(self, view: Hashable) -> None:
        if self.engaged:
            self.drawn[view] = self._host.row_of(view)

    def clear(self) -> None:
        self.drawn.clear()

    def set_style(self, style: Optional[HighlightStyle]) -> None:
        self.style = style


class MemoryColumns:
    def __init__(self) -> None:
        self.engaged: Set[Hashable] = set()
        self.style: Optional[HighlightStyle] = None

    def is_engaged(self, view: Hashable) -> bool:
        return view in self.engaged

    def engage(self, view: Hashable) -> None:
        self.engaged.add(view)

    def disengage(self, view: Hashable) -> None:
        self.engaged.discard(view)

    def set_style(self, style: Optional[HighlightStyle]) -> None:
        self.style = style


class MemoryStatus:
    def __init__(self) -> None:
        self.current: Optional[str] = None
        self.shown: List[str] = []
        self.history: List[str] = []

    def message(self, text: str, *, transient: bool = False) -> None:
        self.current = text
        self.shown.append(text)
        if not transient:
            self.history.append(text)


class MemoryScrollbar:
    def __init__(self) -> None:
        self.enabled: Set[Hashable] = set()
        self.redraws: Dict[Hashable, int] = {}

    def is_enabled(self, view: Hashable) -> bool:
        return view in self.enabled

    def set_enabled(self, view: Hashable, enabled: bool) -> None:
        if enabled:
            self.enabled.add(view)
        else:
            self.enabled.discard(view)

    def redraw(self, view: Hashable) -> None:
        self.redraws[view] = self.redraws.get(view, 0) + 1


class MemoryIdlePopup:
    def __init__(self, default_delay: float = 0.5) -> None:
        self.default_delay = default_delay
        self.delays: Dict[Hashable, float] = {}

    def get_delay(self, view: Hashable) -> float:
        return self.delays.get(view, self.default_delay)

    def set_delay(self, view: Hashable, seconds: float) -> None:
        self.delays[view] = seconds


class MemoryHost:
    """Bundles in-memory implementations of every host protocol.

    ``with_scrollbar`` / ``with_idle_popup`` control whether the optional
    collaborators exist at all.
    """

    def __init__(
        self,
        *,
        with_scrollbar: bool = True,
        with_idle_popup: bool = True,
    ) -> None:
        self.views: Dict[Hashable, MemoryView] = {}
        self.rows = MemoryRows(self)
        self.columns = MemoryColumns()
        self.events = EventHookRegistry()
        self.scheduler = ManualScheduler()
        self.status = MemoryStatus()
        self.scrollbar = MemoryScrollbar() if with_scrollbar else None
        self.idle_popup = MemoryIdlePopup() if with_idle_popup else None

    def services(self) -> HostServices:
        return HostServices(
            rows=self.rows,
            columns=self.columns,
            surface=self,
            events=self.events,
            timers=self.scheduler,
            status=self.status,
            scrollbar=self.scrollbar,
            idle_popup=self.idle_popup,
        )

    def view(self, view: Hashable) -> MemoryView:
        return self.views.setdefault(view, MemoryView())

    def open_view(self, view: Hashable, text: str = "", *, cursor: int = 0) -> MemoryView:
        state = self.view(view)
        state.text = text
        state.cursor = max(0, min(cursor, len(text)))
        return state

    # ViewSurface

    def cursor_offset(self, view: Hashable) -> int:
        return self.view(view).cursor

    def cursor_marker(self, view: Hashable) -> PositionMarker:
        state = self.view(view)
        marker = PositionMarker(view=view, offset=state.cursor)
        state.markers.append(marker)
        return marker

    def redisplay(self, view: Hashable) -> None:
        self.view(view).redisplays += 1

    # Editing helpers

    def row_of(self, view: Hashable) -> int:
        state = self.view(view)
        return state.text.count("\n", 0, state.cursor)

    def move_cursor(self, view: Hashable, offset: int) -> None:
        state = self.view(view)
        state.cursor = max(0, min(offset, len(state.text)))

    def insert_text(self, view: Hashable, offset: int, text: str) -> None:
        state = self.view(view)
        state.text = state.text[:offset] + text + state.text[offset:]
        for marker in state.markers:
            if marker.offset >= offset:
                marker.offset += len(text)
        if state.cursor >= offset:
            state.cursor += len(text)

    def delete_text(self, view: Hashable, start: int, end: int) -> None:
        state = self.view(view)
        removed = end - start
        state.text = state.text[:start] + state.text[end:]
        for marker in state.markers:
            if marker.offset >= end:
                marker.offset -= removed
            elif marker.offset > start:
                marker.offset = start
        if state.cursor >= end:
            state.cursor -= removed
        elif state.cursor > start:
            state.cursor = start

    # Input

    def press(
        self,
        view: Hashable,
        key: str = "x",
        command: Optional[Callable[[], object]] = None,
    ) -> None:
        """Deliver a key event to ``view``, optionally running ``command``."""

        self.events.dispatch(view, InputEvent(kind="key", key=key), command)

    def switch_frame(self, view: Hashable) -> None:
        self.events.dispatch(view, InputEvent(kind="switch-frame"))


__all__ = [
    "ManualScheduler",
    "MemoryHost",
    "MemoryView",
    "PendingTimer",
]
