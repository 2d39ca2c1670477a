from __future__ import annotations

import pytest

from crosshairs.config import CrosshairsSettings
from crosshairs.host import MemoryHost
from crosshairs.lifecycle import (
    HighlightLifecycleController,
    HighlightPhase,
    IdleHighlighter,
)

VIEW = "main"


def make_idle(
    interval: float = 5.0,
) -> tuple[MemoryHost, HighlightLifecycleController, IdleHighlighter]:
    host = MemoryHost()
    host.open_view(VIEW, "one\ntwo", cursor=5)
    controller = HighlightLifecycleController(
        host.services(), CrosshairsSettings(idle_interval=interval)
    )
    return host, controller, IdleHighlighter(controller)


def test_idle_view_gets_crosshairs_until_next_event() -> None:
    host, controller, idle = make_idle()
    idle.enable(VIEW)

    host.scheduler.advance(5.0)
    assert controller.phase(VIEW) is HighlightPhase.ACTIVE_UNTIL_EVENT

    host.press(VIEW)
    assert not controller.is_active(VIEW)

    host.scheduler.advance(5.0)
    assert controller.is_active(VIEW)


def test_input_rearms_the_idle_timer() -> None:
    host, controller, idle = make_idle()
    idle.enable(VIEW)

    host.scheduler.advance(3.0)
    host.press(VIEW)
    host.scheduler.advance(3.0)
    assert not controller.is_active(VIEW)

    host.scheduler.advance(2.0)
    assert controller.is_active(VIEW)


def test_disable_cancels_pending_idle_timer() -> None:
    host, controller, idle = make_idle()
    idle.enable(VIEW)

    idle.disable(VIEW)
    host.scheduler.advance(10.0)

    assert not controller.is_active(VIEW)
    assert not idle.is_enabled(VIEW)
    assert host.events.post_hooks(VIEW) == ()


def test_idle_does_not_replace_persistent_highlight() -> None:
    host, controller, idle = make_idle()
    controller.toggle(VIEW)
    idle.enable(VIEW)

    host.scheduler.advance(5.0)

    assert controller.phase(VIEW) is HighlightPhase.ACTIVE_UNTIL_TOGGLED


def test_toggle_reports_state() -> None:
    host, _controller, idle = make_idle()

    assert idle.toggle(VIEW) is True
    assert host.status.current == "Crosshairs when idle: ON"
    assert idle.toggle(VIEW, 0) is False
    assert host.status.current == "Crosshairs when idle: OFF"
    assert idle.toggle(VIEW, 2) is True


def test_explicit_interval_overrides_settings() -> None:
    host, controller, _idle = make_idle(interval=5.0)
    idle = IdleHighlighter(controller, interval=1.0)
    idle.enable(VIEW)

    host.scheduler.advance(1.0)

    assert controller.is_active(VIEW)


def test_negative_interval_rejected() -> None:
    _host, controller, _idle = make_idle()

    with pytest.raises(ValueError):
        IdleHighlighter(controller, interval=-1.0)
