"""Show the crosshairs automatically once a view has been idle for a while."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Hashable, Optional

from crosshairs.host.events import InputEvent
from crosshairs.host.protocols import TimerHandle
from crosshairs.runtime import telemetry

from .controller import HighlightLifecycleController
from .state import Expiry


@dataclass(slots=True)
class _IdleWatch:
    hook: Callable[[InputEvent], None]
    timer: Optional[TimerHandle] = None


class IdleHighlighter:
    """Re-arms a per-view idle timer after every input event.

    When the timer fires the controller activates with
    ``Expiry.UNTIL_NEXT_EVENT``, so the next keystroke clears it again.
    Views that are already highlighted are left alone.
    """

    def __init__(
        self,
        controller: HighlightLifecycleController,
        *,
        interval: Optional[float] = None,
    ) -> None:
        self.controller = controller
        self.interval = (
            controller.settings.idle_interval if interval is None else interval
        )
        if self.interval < 0:
            raise ValueError("interval cannot be negative")
        self._watches: Dict[Hashable, _IdleWatch] = {}

    def is_enabled(self, view: Hashable) -> bool:
        return view in self._watches

    def enable(self, view: Hashable) -> None:
        if view in self._watches:
            return
        watch = _IdleWatch(hook=lambda event: self._rearm(view))
        self._watches[view] = watch
        self.controller.host.events.add_post_event_hook(view, watch.hook)
        self._rearm(view)
        telemetry.record_event("crosshairs.idle_enabled", data={"view": view})

    def disable(self, view: Hashable) -> None:
        watch = self._watches.pop(view, None)
        if watch is None:
            return
        self.controller.host.events.remove_post_event_hook(view, watch.hook)
        if watch.timer is not None:
            watch.timer.cancel()
        telemetry.record_event("crosshairs.idle_disabled", data={"view": view})

    def toggle(self, view: Hashable, arg: Optional[float] = None) -> bool:
        if arg is None:
            target = not self.is_enabled(view)
        else:
            target = arg > 0
        if target:
            self.enable(view)
            message = "Crosshairs when idle: ON"
        else:
            self.disable(view)
            message = "Crosshairs when idle: OFF"
        self.controller.host.status.message(message, transient=True)
        return target

    def _rearm(self, view: Hashable) -> None:
        watch = self._watches.get(view)
        if watch is None:
            return
        if watch.timer is not None:
            watch.timer.cancel()
        watch.timer = self.controller.host.timers.schedule(
            self.interval, lambda: self._fire(view, watch)
        )

    def _fire(self, view: Hashable, watch: _IdleWatch) -> None:
        if self._watches.get(view) is not watch:
            return
        watch.timer = None
        if self.controller.is_active(view):
            return
        self.controller.activate(view, expiry=Expiry.UNTIL_NEXT_EVENT)


__all__ = ["IdleHighlighter"]
