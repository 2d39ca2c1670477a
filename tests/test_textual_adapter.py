from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional

from crosshairs.adapters.textual import TextualCrosshairsAdapter, TextualUIHooks
from crosshairs.config import HighlightStyle
from crosshairs.lifecycle import HighlightPhase


@dataclass
class FakeTimer:
    delay: float
    callback: Callable[[], None]
    stopped: bool = False

    def stop(self) -> None:
        self.stopped = True


@dataclass
class FakeUI:
    row: bool = False
    column: bool = False
    offset: int = 0
    scrollbar: bool = True
    styles: List[tuple[str, Optional[HighlightStyle]]] = field(default_factory=list)
    statuses: List[str] = field(default_factory=list)
    timers: List[FakeTimer] = field(default_factory=list)
    logs: List[str] = field(default_factory=list)
    refreshes: int = 0

    def set_timer(self, delay: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(delay, callback)
        self.timers.append(timer)
        return timer

    def hooks(self, *, with_scrollbar: bool = True) -> TextualUIHooks:
        return TextualUIHooks(
            set_row_highlight=lambda on: setattr(self, "row", on),
            set_column_highlight=lambda on: setattr(self, "column", on),
            cursor_offset=lambda: self.offset,
            set_timer=self.set_timer,
            apply_style=lambda axis, style: self.styles.append((axis, style)),
            update_status=self.statuses.append,
            refresh=self._refresh,
            get_scrollbar=(lambda: self.scrollbar) if with_scrollbar else None,
            set_scrollbar=self._set_scrollbar if with_scrollbar else None,
            log=self.logs.append,
        )

    def _refresh(self) -> None:
        self.refreshes += 1

    def _set_scrollbar(self, visible: bool) -> None:
        self.scrollbar = visible


def make_adapter(*, with_scrollbar: bool = True) -> tuple[FakeUI, TextualCrosshairsAdapter]:
    ui = FakeUI(offset=12)
    return ui, TextualCrosshairsAdapter(ui.hooks(with_scrollbar=with_scrollbar))


def test_mode_command_drives_widgets() -> None:
    ui, adapter = make_adapter()

    adapter.handle_key("f5", "crosshairs.mode")

    assert ui.row is True
    assert ui.column is True
    assert ui.scrollbar is False
    assert ("row", HighlightStyle("black", "dark_orange")) in ui.styles
    assert ui.refreshes > 0

    adapter.handle_key("f5", "crosshairs.mode")

    assert ui.row is False
    assert ui.column is False
    assert ui.scrollbar is True
    assert ui.statuses[-1] == "Crosshairs mode disabled"
    assert ui.styles[-1] == ("column", None)


def test_pulse_clears_on_next_key_but_not_focus_change() -> None:
    ui, adapter = make_adapter()

    adapter.handle_key("f6", "crosshairs.pulse")
    assert ui.statuses[-1] == "Point: 12"

    adapter.focus_changed()
    assert adapter.controller.is_active(adapter.view)

    adapter.handle_key("j")
    assert not adapter.controller.is_active(adapter.view)
    assert ui.row is False


def test_universal_argument_sets_flash_duration() -> None:
    ui, adapter = make_adapter()

    event = adapter.begin_input("ctrl+u")
    adapter.universal_argument()
    adapter.finish_input(event)
    adapter.handle_key("f7", "crosshairs.flash")

    assert ui.timers[-1].delay == 4.0
    assert adapter.pending_prefix is None
    assert adapter.controller.phase(adapter.view) is HighlightPhase.ACTIVE_FOR_DURATION

    ui.timers[-1].callback()

    assert not adapter.controller.is_active(adapter.view)


def test_universal_argument_dropped_by_unrelated_key() -> None:
    ui, adapter = make_adapter()

    event = adapter.begin_input("ctrl+u")
    adapter.universal_argument()
    adapter.finish_input(event)
    adapter.handle_key("a")

    assert adapter.pending_prefix is None

    adapter.handle_key("f5", "crosshairs.mode")

    assert adapter.controller.phase(adapter.view) is HighlightPhase.ACTIVE_UNTIL_TOGGLED
    assert ui.timers == []


def test_repeated_universal_argument_survives_late_finish() -> None:
    _ui, adapter = make_adapter()

    first = adapter.begin_input("ctrl+u")
    adapter.universal_argument()
    second = adapter.begin_input("ctrl+u")
    adapter.universal_argument()
    adapter.finish_input(first)
    adapter.finish_input(second)

    prefix = adapter.pending_prefix
    assert prefix is not None and prefix.value == 16


def test_command_log_lines_carry_prefix() -> None:
    ui, adapter = make_adapter()

    adapter.universal_argument()
    adapter.run_command("crosshairs.flash")

    command_lines = [line for line in ui.logs if line.startswith("command ->")]
    assert command_lines
    assert "command='crosshairs.flash'" in command_lines[-1]
    assert "prefix=" in command_lines[-1]


def test_new_flash_stops_previous_timer() -> None:
    ui, adapter = make_adapter()

    adapter.run_command("crosshairs.flash")
    adapter.run_command("crosshairs.flash")

    assert len(ui.timers) == 2
    assert ui.timers[0].stopped is True
    assert ui.timers[1].stopped is False

    ui.timers[0].callback()
    assert adapter.controller.is_active(adapter.view)


def test_position_reported_after_keys() -> None:
    ui, adapter = make_adapter()
    adapter.run_command("crosshairs.mode")

    ui.offset = 20
    adapter.handle_key("l")

    assert ui.statuses[-1] == "Point: 20"
    assert adapter.host.status.history == []  # type: ignore[attr-defined]


def test_adapter_without_scrollbar_hooks() -> None:
    ui, adapter = make_adapter(with_scrollbar=False)

    adapter.run_command("crosshairs.mode")

    assert adapter.host.scrollbar is None
    assert ui.column is True


def test_adapter_emits_log_lines() -> None:
    ui, adapter = make_adapter()

    adapter.run_command("crosshairs.toggle_when_idle")

    assert any(line.startswith("command ->") for line in ui.logs)
    assert any("idle=True" in line for line in ui.logs)
