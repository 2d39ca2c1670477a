"""User-facing crosshairs commands and the numeric prefix they accept."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Hashable, Mapping, Optional

from crosshairs.lifecycle import Expiry, HighlightLifecycleController, IdleHighlighter
from crosshairs.runtime import telemetry


@dataclass(frozen=True, slots=True)
class PrefixArgument:
    """Numeric modifier typed before a command.

    ``universal`` marks a value built from universal-argument presses (4, 16,
    ...) rather than typed digits.
    """

    value: int
    universal: bool = False

    @classmethod
    def from_presses(cls, presses: int) -> "PrefixArgument":
        if presses < 1:
            raise ValueError("presses must be at least 1")
        return cls(value=4**presses, universal=True)

    @classmethod
    def from_digits(cls, digits: str) -> "PrefixArgument":
        cleaned = digits.strip()
        if cleaned in {"", "-"}:
            # A bare minus behaves like -1.
            return cls(value=-1 if cleaned == "-" else 1)
        return cls(value=int(cleaned))


@dataclass(slots=True)
class CommandContext:
    """Services a command runs against."""

    controller: HighlightLifecycleController
    view: Hashable
    idle: Optional[IdleHighlighter] = None


Handler = Callable[[CommandContext, Optional[PrefixArgument]], object]


@dataclass(frozen=True, slots=True)
class CommandRef:
    id: str
    handler: Handler
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("CommandRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")

    def __call__(
        self, context: CommandContext, prefix: Optional[PrefixArgument] = None
    ) -> object:
        return self.handler(context, prefix)


def crosshairs_mode(
    context: CommandContext, prefix: Optional[PrefixArgument] = None
) -> bool:
    """Toggle persistent highlighting; a positive prefix flashes for that many seconds."""

    if prefix is None:
        return context.controller.toggle(context.view)
    return context.controller.toggle(
        context.view, prefix.value, expiry=Expiry.FOR_DURATION
    )


def crosshairs_pulse(
    context: CommandContext, prefix: Optional[PrefixArgument] = None
) -> object:
    return context.controller.pulse_until_next_event(
        context.view, extend_until_toggled=prefix is not None
    )


def crosshairs_flash(
    context: CommandContext, prefix: Optional[PrefixArgument] = None
) -> object:
    seconds = prefix.value if prefix is not None and prefix.value > 0 else None
    return context.controller.flash(context.view, seconds)


def crosshairs_toggle_when_idle(
    context: CommandContext, prefix: Optional[PrefixArgument] = None
) -> bool:
    if context.idle is None:
        raise RuntimeError("CommandContext has no IdleHighlighter")
    arg = prefix.value if prefix is not None else None
    return context.idle.toggle(context.view, arg)


DEFAULT_COMMANDS: tuple[CommandRef, ...] = (
    CommandRef(
        id="crosshairs.mode",
        handler=crosshairs_mode,
        description="Toggle crosshairs until toggled again",
    ),
    CommandRef(
        id="crosshairs.pulse",
        handler=crosshairs_pulse,
        description="Show crosshairs until the next input event",
    ),
    CommandRef(
        id="crosshairs.flash",
        handler=crosshairs_flash,
        description="Show crosshairs for a few seconds",
    ),
    CommandRef(
        id="crosshairs.toggle_when_idle",
        handler=crosshairs_toggle_when_idle,
        description="Toggle showing crosshairs whenever the view is idle",
    ),
)

COMMANDS: Mapping[str, CommandRef] = MappingProxyType(
    {command.id: command for command in DEFAULT_COMMANDS}
)


def get_command(command_id: str) -> CommandRef:
    try:
        return COMMANDS[command_id]
    except KeyError as exc:
        raise KeyError(f"Command '{command_id}' is not registered") from exc


def run_command(
    command_id: str,
    context: CommandContext,
    prefix: Optional[PrefixArgument] = None,
) -> object:
    command = get_command(command_id)
    with telemetry.span(
        f"command::{command_id}",
        component="commands",
        metadata={
            "view": context.view,
            "prefix": prefix.value if prefix is not None else None,
        },
    ):
        return command(context, prefix)


__all__ = [
    "COMMANDS",
    "DEFAULT_COMMANDS",
    "CommandContext",
    "CommandRef",
    "PrefixArgument",
    "crosshairs_flash",
    "crosshairs_mode",
    "crosshairs_pulse",
    "crosshairs_toggle_when_idle",
    "get_command",
    "run_command",
]
