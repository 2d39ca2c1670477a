"""Settings for crosshair highlighting, with ``CROSSHAIRS_*`` env overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

ENV_PREFIX = "CROSSHAIRS_"


@dataclass(frozen=True, slots=True)
class HighlightStyle:
    """Foreground/background pair applied to the row and column highlight."""

    foreground: str
    background: str

    def __post_init__(self) -> None:
        if not self.foreground or not self.background:
            raise ValueError("HighlightStyle needs both foreground and background")

    def __str__(self) -> str:
        return f"{self.foreground} on {self.background}"


DEFAULT_STYLE = HighlightStyle(foreground="black", background="dark_orange")


def parse_style(text: str) -> Optional[HighlightStyle]:
    """Parse ``"<fg> on <bg>"``; an empty string means "facility default"."""

    cleaned = text.strip()
    if not cleaned:
        return None
    parts = cleaned.split(" on ")
    if len(parts) != 2:
        raise ValueError(f"Style must look like '<fg> on <bg>', got {text!r}")
    foreground, background = (part.strip() for part in parts)
    return HighlightStyle(foreground=foreground, background=background)


def _env_seconds(env: Mapping[str, str], name: str, fallback: float) -> float:
    value = env.get(f"{ENV_PREFIX}{name}")
    if value is None:
        return fallback
    try:
        return float(value)
    except ValueError:
        return fallback


@dataclass(frozen=True, slots=True)
class CrosshairsSettings:
    """Host-level options.

    ``highlight_style`` of ``None`` leaves each highlight facility on its own
    default style. Durations are in seconds.
    """

    highlight_style: Optional[HighlightStyle] = field(default=DEFAULT_STYLE)
    flash_duration: float = 2.0
    idle_popup_delay: float = 3.0
    idle_interval: float = 5.0

    def __post_init__(self) -> None:
        for name in ("flash_duration", "idle_popup_delay", "idle_interval"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} cannot be negative")

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None
    ) -> "CrosshairsSettings":
        env = os.environ if environ is None else environ
        defaults = cls()
        raw_style = env.get(f"{ENV_PREFIX}STYLE")
        style = defaults.highlight_style if raw_style is None else parse_style(raw_style)
        return cls(
            highlight_style=style,
            flash_duration=_env_seconds(
                env, "FLASH_SECONDS", defaults.flash_duration
            ),
            idle_popup_delay=_env_seconds(
                env, "IDLE_POPUP_DELAY", defaults.idle_popup_delay
            ),
            idle_interval=_env_seconds(env, "IDLE_INTERVAL", defaults.idle_interval),
        )


__all__ = [
    "DEFAULT_STYLE",
    "CrosshairsSettings",
    "HighlightStyle",
    "parse_style",
]
