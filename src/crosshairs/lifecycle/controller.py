"""Lifecycle controller for the crosshair (row + column) highlight."""

from __future__ import annotations

from typing import Dict, Hashable, Iterator, Optional

from crosshairs.config import CrosshairsSettings
from crosshairs.host.events import InputEvent
from crosshairs.host.protocols import HostServices, PositionMarker, TimerHandle
from crosshairs.runtime import telemetry

from .state import AxisMode, Expiry, HighlightPhase, ViewHighlightState

MIN_TIMER_DELAY = 0.01
DISABLED_MESSAGE = "Crosshairs mode disabled"


def format_position(offset: int) -> str:
    return f"Point: {offset}"


class HighlightLifecycleController:
    """Owns per-view highlight state and drives the host facilities.

    Every activation starts from a full deactivation, so repeated or
    interleaved calls never stack styles, hooks or timers. The row highlight
    is process-wide and shared with other views; everything else the
    controller touches is restored per view on deactivation.
    """

    def __init__(
        self,
        host: HostServices,
        settings: Optional[CrosshairsSettings] = None,
    ) -> None:
        self.host = host
        self.settings = settings or CrosshairsSettings()
        self.logger = telemetry.get_logger("crosshairs.lifecycle")
        self._states: Dict[Hashable, ViewHighlightState] = {}

    def state_for(self, view: Hashable) -> ViewHighlightState:
        state = self._states.get(view)
        if state is None:
            state = ViewHighlightState(
                report_hook=lambda event: self._report_position(view, event),
                expire_hook=lambda event: self._expire_on_event(view, event),
            )
            self._states[view] = state
        return state

    def views(self) -> Iterator[Hashable]:
        yield from self._states

    def is_active(self, view: Hashable) -> bool:
        state = self._states.get(view)
        return bool(state and state.active)

    def phase(self, view: Hashable) -> HighlightPhase:
        state = self._states.get(view)
        return state.phase if state else HighlightPhase.INACTIVE

    def forget(self, view: Hashable) -> None:
        """Drop the state for a view the host has destroyed."""

        if view not in self._states:
            return
        self.deactivate(view, force=True)
        self._states.pop(view, None)

    def activate(
        self,
        view: Hashable,
        axis: AxisMode = AxisMode.BOTH,
        *,
        report_position: bool = False,
        expiry: Expiry = Expiry.UNTIL_TOGGLED,
        seconds: Optional[float] = None,
    ) -> PositionMarker:
        """Show the crosshairs for ``view`` and return a cursor marker.

        ``expiry`` picks what ends the highlight: an explicit toggle, the next
        non-frame-switch input event, or a timer of ``seconds`` (falling back
        to ``settings.flash_duration``).
        """

        host = self.host
        with telemetry.span(
            "crosshairs::activate",
            component="lifecycle",
            metadata={"view": view, "axis": axis.value, "expiry": expiry.value},
        ):
            self.deactivate(view, force=True)
            state = self.state_for(view)
            state.active = True
            state.expiry = expiry

            style = self.settings.highlight_style
            if style:
                host.rows.set_style(style)
                host.columns.set_style(style)

            if axis.includes_column:
                scrollbar = host.scrollbar
                if scrollbar is not None and scrollbar.is_enabled(view):
                    state.suspended_scrollbar = True
                    scrollbar.set_enabled(view, False)
                host.columns.engage(view)

            if axis.includes_row:
                if not host.rows.is_engaged():
                    host.rows.engage()
                host.rows.refresh(view)

            host.surface.redisplay(view)

            if host.idle_popup is not None:
                state.saved_idle_delay = host.idle_popup.get_delay(view)
                host.idle_popup.set_delay(view, self.settings.idle_popup_delay)

            host.events.add_post_event_hook(view, state.report_hook)

            if expiry is Expiry.UNTIL_NEXT_EVENT:
                host.events.add_pre_event_hook(view, state.expire_hook)
            elif expiry is Expiry.FOR_DURATION:
                self._schedule_expiry(view, state, seconds)

            if report_position:
                self._report_position(view)

            telemetry.record_event(
                "crosshairs.activate",
                data={"view": view, "axis": axis.value, "expiry": expiry.value},
            )
            return host.surface.cursor_marker(view)

    def deactivate(self, view: Hashable, *, force: bool = False) -> None:
        """Remove the crosshairs from ``view`` and undo every override.

        Unless ``force`` is set, nothing happens when the triggering input
        event is a frame switch, so moving focus between windows does not
        make the highlight flicker off.
        """

        host = self.host
        if not force:
            last = host.events.last_input_event()
            if last is not None and last.is_frame_switch:
                telemetry.record_event(
                    "crosshairs.skip_frame_switch", data={"view": view}
                )
                return

        with telemetry.span(
            "crosshairs::deactivate",
            component="lifecycle",
            metadata={"view": view, "force": force},
        ):
            state = self.state_for(view)
            was_active = state.active

            host.rows.disengage()
            host.rows.clear()
            host.columns.disengage(view)
            host.rows.set_style(None)
            host.columns.set_style(None)

            if state.suspended_scrollbar:
                if host.scrollbar is not None:
                    host.scrollbar.set_enabled(view, True)
                    host.scrollbar.redraw(view)
                state.suspended_scrollbar = False

            state.active = False
            state.expiry = None

            if state.saved_idle_delay is not None:
                if host.idle_popup is not None:
                    host.idle_popup.set_delay(view, state.saved_idle_delay)
                state.saved_idle_delay = None

            host.events.remove_post_event_hook(view, state.report_hook)
            host.events.remove_pre_event_hook(view, state.expire_hook)

            if state.pending_timer is not None:
                state.pending_timer.cancel()
                state.pending_timer = None

            if was_active:
                telemetry.record_event("crosshairs.deactivate", data={"view": view})

    def toggle(
        self,
        view: Hashable,
        arg: Optional[float] = None,
        *,
        explicit: bool = False,
        expiry: Optional[Expiry] = None,
        seconds: Optional[float] = None,
    ) -> bool:
        """Turn the crosshairs on or off; returns whether they are now on.

        With ``arg=None`` and ``explicit=False`` this is a user toggle: the
        current state is inverted, except that the observed host facilities
        win when the global row highlight and this view's column highlight
        agree. This inference can be wrong when something outside the
        controller flipped just one of them.

        Otherwise ``arg`` of ``None`` or above zero turns highlighting on and
        zero or below turns it off. A positive ``arg`` also becomes the
        duration for ``Expiry.FOR_DURATION``.
        """

        state = self.state_for(view)
        if arg is None and not explicit:
            target = self._reconcile(view, state)
        else:
            target = arg is None or arg > 0
            if target and arg is not None:
                seconds = arg

        if target:
            self.activate(
                view,
                AxisMode.BOTH,
                report_position=False,
                expiry=expiry or Expiry.UNTIL_TOGGLED,
                seconds=seconds,
            )
        else:
            self.deactivate(view)
            if not state.active:
                self.host.status.message(DISABLED_MESSAGE, transient=True)
        return state.active

    def flash(self, view: Hashable, seconds: Optional[float] = None) -> PositionMarker:
        """Show the crosshairs for ``seconds`` (default ``flash_duration``)."""

        return self.activate(
            view,
            AxisMode.BOTH,
            report_position=False,
            expiry=Expiry.FOR_DURATION,
            seconds=seconds,
        )

    def pulse_until_next_event(
        self, view: Hashable, extend_until_toggled: bool = False
    ) -> Optional[PositionMarker]:
        if self.is_active(view):
            self.deactivate(view, force=True)
            return None
        expiry = Expiry.UNTIL_TOGGLED if extend_until_toggled else Expiry.UNTIL_NEXT_EVENT
        return self.activate(view, report_position=True, expiry=expiry)

    def _reconcile(self, view: Hashable, state: ViewHighlightState) -> bool:
        rows_on = self.host.rows.is_engaged()
        columns_on = self.host.columns.is_engaged(view)
        if rows_on and columns_on:
            return False
        if not rows_on and not columns_on:
            return True
        return not state.active

    def _schedule_expiry(
        self, view: Hashable, state: ViewHighlightState, seconds: Optional[float]
    ) -> None:
        if state.pending_timer is not None:
            state.pending_timer.cancel()
            state.pending_timer = None
        delay = max(MIN_TIMER_DELAY, seconds or self.settings.flash_duration)
        slot: Dict[str, TimerHandle] = {}

        def fire() -> None:
            self._expire_on_timer(view, slot.get("handle"))

        slot["handle"] = self.host.timers.schedule(delay, fire)
        state.pending_timer = slot["handle"]

    def _expire_on_timer(self, view: Hashable, handle: Optional[TimerHandle]) -> None:
        state = self._states.get(view)
        if state is None or handle is None or state.pending_timer is not handle:
            return
        state.pending_timer = None
        telemetry.record_event("crosshairs.timer_fired", data={"view": view})
        self.deactivate(view, force=True)

    def _expire_on_event(self, view: Hashable, event: InputEvent) -> None:
        del event
        self.deactivate(view)

    def _report_position(
        self, view: Hashable, event: Optional[InputEvent] = None
    ) -> None:
        del event
        offset = self.host.surface.cursor_offset(view)
        self.host.status.message(format_position(offset), transient=True)


__all__ = [
    "DISABLED_MESSAGE",
    "MIN_TIMER_DELAY",
    "HighlightLifecycleController",
    "format_position",
]
