"""UI-agnostic row/column crosshair highlighting for text editors."""

__all__ = [
    "adapters",
    "commands",
    "config",
    "host",
    "lifecycle",
    "runtime",
]

__version__ = "0.1.0"
