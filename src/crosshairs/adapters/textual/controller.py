"""Textual adapter: turns UI callbacks into host services for the controller."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, List, Optional

from crosshairs.commands import CommandContext, PrefixArgument, run_command
from crosshairs.config import CrosshairsSettings, HighlightStyle
from crosshairs.host import (
    FRAME_SWITCH,
    EventHookRegistry,
    HostServices,
    InputEvent,
    PositionMarker,
)
from crosshairs.lifecycle import HighlightLifecycleController, IdleHighlighter

DEFAULT_VIEW = "editor"


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks a Textual app supplies so the engine can drive its widgets.

    ``set_timer`` must return an object with a ``stop()`` method, which is
    what ``App.set_timer`` returns. Leaving both scrollbar callbacks unset
    means the host has no scrollbar feature to suspend.
    """

    set_row_highlight: Callable[[bool], None]
    set_column_highlight: Callable[[bool], None]
    cursor_offset: Callable[[], int]
    set_timer: Callable[[float, Callable[[], None]], Any]
    apply_style: Callable[[str, Optional[HighlightStyle]], None] = _noop
    update_status: Callable[[str], None] = _noop
    refresh: Callable[[], None] = _noop
    get_scrollbar: Optional[Callable[[], bool]] = None
    set_scrollbar: Optional[Callable[[bool], None]] = None
    log: Callable[[str], None] = _noop


class _Rows:
    def __init__(self, hooks: TextualUIHooks) -> None:
        self._hooks = hooks
        self._engaged = False

    def is_engaged(self) -> bool:
        return self._engaged

    def engage(self) -> None:
        self._engaged = True
        self._hooks.set_row_highlight(True)

    def disengage(self) -> None:
        self._engaged = False
        self._hooks.set_row_highlight(False)

    def refresh(self, view: Hashable) -> None:
        del view
        self._hooks.refresh()

    def clear(self) -> None:
        self._hooks.refresh()

    def set_style(self, style: Optional[HighlightStyle]) -> None:
        self._hooks.apply_style("row", style)


class _Columns:
    def __init__(self, hooks: TextualUIHooks) -> None:
        self._hooks = hooks
        self._engaged: set[Hashable] = set()

    def is_engaged(self, view: Hashable) -> bool:
        return view in self._engaged

    def engage(self, view: Hashable) -> None:
        self._engaged.add(view)
        self._hooks.set_column_highlight(True)

    def disengage(self, view: Hashable) -> None:
        self._engaged.discard(view)
        self._hooks.set_column_highlight(False)

    def set_style(self, style: Optional[HighlightStyle]) -> None:
        self._hooks.apply_style("column", style)


class _Surface:
    def __init__(self, hooks: TextualUIHooks) -> None:
        self._hooks = hooks

    def cursor_offset(self, view: Hashable) -> int:
        del view
        return self._hooks.cursor_offset()

    def cursor_marker(self, view: Hashable) -> PositionMarker:
        return PositionMarker(view=view, offset=self._hooks.cursor_offset())

    def redisplay(self, view: Hashable) -> None:
        del view
        self._hooks.refresh()


class _TimerHandle:
    def __init__(self, timer: Any) -> None:
        self._timer = timer

    def cancel(self) -> None:
        self._timer.stop()


class _Timers:
    def __init__(self, hooks: TextualUIHooks) -> None:
        self._hooks = hooks

    def schedule(self, delay: float, callback: Callable[[], None]) -> _TimerHandle:
        return _TimerHandle(self._hooks.set_timer(delay, callback))


class _Status:
    def __init__(self, hooks: TextualUIHooks) -> None:
        self._hooks = hooks
        self.history: List[str] = []

    def message(self, text: str, *, transient: bool = False) -> None:
        self._hooks.update_status(text)
        if not transient:
            self.history.append(text)


class _Scrollbar:
    def __init__(
        self,
        hooks: TextualUIHooks,
        getter: Callable[[], bool],
        setter: Callable[[bool], None],
    ) -> None:
        self._hooks = hooks
        self._get = getter
        self._set = setter

    def is_enabled(self, view: Hashable) -> bool:
        del view
        return self._get()

    def set_enabled(self, view: Hashable, enabled: bool) -> None:
        del view
        self._set(enabled)

    def redraw(self, view: Hashable) -> None:
        del view
        self._hooks.refresh()


def build_host(
    hooks: TextualUIHooks, events: Optional[EventHookRegistry] = None
) -> HostServices:
    scrollbar = None
    if hooks.get_scrollbar is not None and hooks.set_scrollbar is not None:
        scrollbar = _Scrollbar(hooks, hooks.get_scrollbar, hooks.set_scrollbar)
    return HostServices(
        rows=_Rows(hooks),
        columns=_Columns(hooks),
        surface=_Surface(hooks),
        events=events or EventHookRegistry(),
        timers=_Timers(hooks),
        status=_Status(hooks),
        scrollbar=scrollbar,
    )


class TextualCrosshairsAdapter:
    """Routes Textual input into hook dispatch and crosshairs commands."""

    def __init__(
        self,
        hooks: TextualUIHooks,
        *,
        settings: Optional[CrosshairsSettings] = None,
        view: Hashable = DEFAULT_VIEW,
    ) -> None:
        self.hooks = hooks
        self.view = view
        self.events = EventHookRegistry()
        self.host = build_host(hooks, self.events)
        self.controller = HighlightLifecycleController(self.host, settings)
        self.idle = IdleHighlighter(self.controller)
        self._universal_presses = 0
        self._current_input: Optional[InputEvent] = None
        self._prefix_inputs: List[InputEvent] = []

    @property
    def pending_prefix(self) -> Optional[PrefixArgument]:
        if not self._universal_presses:
            return None
        return PrefixArgument.from_presses(self._universal_presses)

    def universal_argument(self) -> PrefixArgument:
        self._universal_presses += 1
        if self._current_input is not None:
            self._prefix_inputs.append(self._current_input)
        prefix = PrefixArgument.from_presses(self._universal_presses)
        self.hooks.update_status(f"C-u {prefix.value}-")
        return prefix

    def run_command(self, command_id: str) -> object:
        prefix = self.pending_prefix
        self._universal_presses = 0
        context = CommandContext(
            controller=self.controller, view=self.view, idle=self.idle
        )
        self._log_state("command ->", command=command_id, prefix=prefix)
        outcome = run_command(command_id, context, prefix)
        self._log_state("command <-", command=command_id)
        return outcome

    def begin_input(self, key: str) -> InputEvent:
        event = InputEvent(kind="key", key=key)
        self._current_input = event
        self.events.begin(self.view, event)
        return event

    def finish_input(self, event: InputEvent) -> None:
        # A universal argument only reaches the command typed right after it.
        if self._universal_presses and not any(
            armed is event for armed in self._prefix_inputs
        ):
            self._universal_presses = 0
        if not self._universal_presses:
            self._prefix_inputs.clear()
        self.events.finish(self.view, event)

    def handle_key(self, key: str, command_id: Optional[str] = None) -> None:
        """Deliver one key synchronously, running ``command_id`` between hooks."""

        event = self.begin_input(key)
        if command_id is not None:
            self.run_command(command_id)
        self.finish_input(event)

    def focus_changed(self) -> None:
        self.events.dispatch(self.view, InputEvent(kind=FRAME_SWITCH))
        self._log_state("focus ->")

    def _log_state(self, label: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [label] + [f"{key}={value!r}" for key, value in snapshot.items()]
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        state = self.controller.state_for(self.view)
        return {
            "view": self.view,
            "phase": state.phase.value,
            "timer": state.pending_timer is not None,
            "idle": self.idle.is_enabled(self.view),
        }


__all__ = [
    "DEFAULT_VIEW",
    "TextualCrosshairsAdapter",
    "TextualUIHooks",
    "build_host",
]
