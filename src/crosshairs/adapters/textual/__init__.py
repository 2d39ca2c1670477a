"""Textual host for the crosshairs engine."""

from .controller import (
    DEFAULT_VIEW,
    TextualCrosshairsAdapter,
    TextualUIHooks,
    build_host,
)

__all__ = [
    "DEFAULT_VIEW",
    "TextualCrosshairsAdapter",
    "TextualUIHooks",
    "build_host",
]
