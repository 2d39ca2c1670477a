"""Executable Textual app demonstrating the crosshairs engine."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Callable, Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from rich.segment import Segment
    from rich.style import Style
    from textual import events
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.strip import Strip
    from textual.widgets import Footer, Header, Static, TextArea
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use crosshairs.adapters.textual.app"
    ) from exc

from crosshairs.config import CrosshairsSettings, HighlightStyle, parse_style
from crosshairs.runtime import telemetry

from .controller import TextualCrosshairsAdapter, TextualUIHooks

SAMPLE_TEXT = """\
Move the cursor around, then try the crosshairs commands:

  F5  toggle crosshairs until toggled again (C-u F5 flashes instead)
  F6  crosshairs until the next key (C-u F6 keeps them on)
  F7  flash crosshairs for a couple of seconds (C-u F7 for 4 seconds)
  F8  show crosshairs whenever the editor is idle

Ctrl+U is the universal argument; press it more than once for 16, 64, ...
"""


class CrosshairTextArea(TextArea):
    """TextArea that can also paint the cursor column."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.column_highlight = False
        self.row_style: Optional[Style] = None
        self.column_style: Style = Style(reverse=True)

    def set_axis_style(self, axis: str, style: Optional[HighlightStyle]) -> None:
        rich_style = Style.parse(str(style)) if style is not None else None
        if axis == "row":
            self.row_style = rich_style
        else:
            self.column_style = rich_style or Style(reverse=True)
        self.refresh()

    def render_line(self, y: int) -> Strip:
        strip = super().render_line(y)
        cursor = self.cursor_screen_offset
        origin = self.content_region
        if (
            self.highlight_cursor_line
            and self.row_style is not None
            and cursor.y - origin.y == y
        ):
            strip = Strip(
                Segment.apply_style(iter(strip), post_style=self.row_style),
                strip.cell_length,
            )
        if not self.column_highlight:
            return strip
        column = cursor.x - origin.x
        if column < 0 or column >= strip.cell_length:
            return strip
        left, cell, right = strip.divide([column, column + 1, strip.cell_length])
        painted = Strip(
            Segment.apply_style(iter(cell), post_style=self.column_style),
            cell.cell_length,
        )
        return Strip.join([left, painted, right])


class CrosshairsApp(App[None]):
    """Single-view editor with crosshairs bound to function keys."""

    CSS = """
	#editor {
		height: 1fr;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        Binding("f5", "crosshairs('crosshairs.mode')", "Crosshairs", priority=True),
        Binding("f6", "crosshairs('crosshairs.pulse')", "Pulse", priority=True),
        Binding("f7", "crosshairs('crosshairs.flash')", "Flash", priority=True),
        Binding(
            "f8", "crosshairs('crosshairs.toggle_when_idle')", "Idle", priority=True
        ),
        Binding("ctrl+u", "universal_argument", "C-u", priority=True),
        Binding("ctrl+q", "quit", "Quit", priority=True),
    ]

    def __init__(
        self,
        *,
        text: str = SAMPLE_TEXT,
        settings: Optional[CrosshairsSettings] = None,
    ) -> None:
        super().__init__()
        self._text = text
        self._settings = settings
        self._scrollbar_size = 2
        self.adapter: TextualCrosshairsAdapter | None = None
        self._editor: CrosshairTextArea | None = None
        self._status: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        self._editor = CrosshairTextArea(self._text, id="editor")
        self._status = Static("", id="status-line")
        yield self._editor
        yield self._status
        yield Footer()

    def on_mount(self) -> None:
        editor = self._require_editor()
        self._scrollbar_size = editor.styles.scrollbar_size_vertical or 2
        hooks = TextualUIHooks(
            set_row_highlight=self._set_row_highlight,
            set_column_highlight=self._set_column_highlight,
            cursor_offset=self._cursor_offset,
            set_timer=self._set_timer,
            apply_style=editor.set_axis_style,
            update_status=self._update_status,
            refresh=editor.refresh,
            get_scrollbar=self._scrollbar_visible,
            set_scrollbar=self._set_scrollbar,
            log=self._log_line,
        )
        self.adapter = TextualCrosshairsAdapter(hooks, settings=self._settings)
        editor.highlight_cursor_line = False
        editor.focus()

    async def on_event(self, event: events.Event) -> None:
        if (
            isinstance(event, events.Key)
            and not event.is_forwarded
            and self.adapter is not None
        ):
            input_event = self.adapter.begin_input(event.key)
            await super().on_event(event)
            # Focused widgets handle keys asynchronously; report after they do.
            self.call_after_refresh(self.adapter.finish_input, input_event)
            return
        await super().on_event(event)

    def on_app_focus(self, event: events.AppFocus) -> None:
        del event
        if self.adapter is not None:
            self.adapter.focus_changed()

    def on_app_blur(self, event: events.AppBlur) -> None:
        del event
        if self.adapter is not None:
            self.adapter.focus_changed()

    def on_text_area_selection_changed(self, event: TextArea.SelectionChanged) -> None:
        del event
        if self._editor is not None and self._editor.column_highlight:
            self._editor.refresh()

    def action_crosshairs(self, command_id: str) -> None:
        if self.adapter is not None:
            self.adapter.run_command(command_id)

    def action_universal_argument(self) -> None:
        if self.adapter is not None:
            self.adapter.universal_argument()

    def _require_editor(self) -> CrosshairTextArea:
        if self._editor is None:
            raise RuntimeError("CrosshairsApp is not composed yet")
        return self._editor

    def _set_row_highlight(self, enabled: bool) -> None:
        self._require_editor().highlight_cursor_line = enabled

    def _set_column_highlight(self, enabled: bool) -> None:
        editor = self._require_editor()
        editor.column_highlight = enabled
        editor.refresh()

    def _cursor_offset(self) -> int:
        editor = self._require_editor()
        return editor.document.get_index_from_location(editor.cursor_location)

    def _set_timer(self, delay: float, callback: Callable[[], None]) -> Any:
        return self.set_timer(delay, callback)

    def _scrollbar_visible(self) -> bool:
        return self._require_editor().styles.scrollbar_size_vertical > 0

    def _set_scrollbar(self, visible: bool) -> None:
        editor = self._require_editor()
        editor.styles.scrollbar_size_vertical = self._scrollbar_size if visible else 0
        editor.refresh(layout=True)

    def _update_status(self, text: str) -> None:
        if self._status is not None:
            self._status.update(text)

    def _log_line(self, line: str) -> None:
        self.log(line)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    defaults = CrosshairsSettings.from_env()
    parser = argparse.ArgumentParser(description="Run the crosshairs Textual demo.")
    parser.add_argument("path", nargs="?", help="File to open (default: sample text)")
    parser.add_argument(
        "--style",
        default=None,
        help="Highlight style as '<fg> on <bg>'; empty for each facility's default",
    )
    parser.add_argument(
        "--flash-seconds",
        type=float,
        default=defaults.flash_duration,
        help="Default flash duration (default: %(default)s)",
    )
    parser.add_argument(
        "--idle-interval",
        type=float,
        default=defaults.idle_interval,
        help="Idle seconds before crosshairs appear when F8 is on",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    defaults = CrosshairsSettings.from_env()
    style = defaults.highlight_style if args.style is None else parse_style(args.style)
    settings = CrosshairsSettings(
        highlight_style=style,
        flash_duration=args.flash_seconds,
        idle_popup_delay=defaults.idle_popup_delay,
        idle_interval=args.idle_interval,
    )
    text = Path(args.path).read_text(encoding="utf-8") if args.path else SAMPLE_TEXT
    telemetry.configure(preset="quiet")
    CrosshairsApp(text=text, settings=settings).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
