"""Executable Textual app hosting the editor core."""

from __future__ import annotations

import argparse
import random
import string
from dataclasses import replace
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Footer, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use canvas_editor.adapters.textual.app"
    ) from exc

from canvas_editor.buffer import TextBuffer
from canvas_editor.editor import EditorConfig, EditorSnapshot, TextEditor
from canvas_editor.runtime import telemetry

from .controller import TextualEditorAdapter, TextualUIHooks, render_snapshot


def demo_text(line_count: int, *, max_width: int = 120, seed: int | None = None) -> str:
    """Random lowercase lines, handy for eyeballing scrolling and wrap."""

    rng = random.Random(seed)
    lines = []
    for _ in range(line_count):
        width = rng.randrange(max_width)
        lines.append("".join(rng.choice(string.ascii_lowercase) for _ in range(width)))
    return "\n".join(lines) + "\n" if lines else ""


class CanvasEditorApp(App[None]):
    """Single-buffer editor view with a status line."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#editor-view {
		height: 1fr;
		padding: 0 1;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, text: str = "", config: Optional[EditorConfig] = None) -> None:
        super().__init__()
        self._text = text
        self._config = config or EditorConfig.from_env()
        self.adapter: TextualEditorAdapter | None = None
        self._view_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        self._view_widget = Static("", id="editor-view")
        self._status_widget = Static("", id="status-line")
        yield self._view_widget
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        # Terminal cells: one row per line.
        config = replace(self._config, height=max(1, self.size.height - 2))
        editor = TextEditor(TextBuffer.from_text(self._text), config=config)
        hooks = TextualUIHooks(
            update_view=self._update_view,
            update_status=self._update_status,
            log=self._log_line,
        )
        self.adapter = TextualEditorAdapter(editor, hooks)
        self.set_interval(config.blink_interval_ms / 1000, self.adapter.tick_blink)
        telemetry.record_event(
            "app.mount", level="debug", data={"lines": editor.document.line_count}
        )

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        if event.key in {"ctrl+c", "ctrl+q"}:
            return
        if self.adapter.handle_textual_key(event.key, text=event.character):
            event.stop()
            event.prevent_default()

    def on_paste(self, event: events.Paste) -> None:
        if self.adapter:
            self.adapter.paste(event.text)
            event.stop()

    def on_app_focus(self, _event: events.AppFocus) -> None:
        if self.adapter:
            self.adapter.focus()

    def on_app_blur(self, _event: events.AppBlur) -> None:
        if self.adapter:
            self.adapter.blur()

    def _update_view(self, snapshot: EditorSnapshot) -> None:
        if self._view_widget:
            self._view_widget.update(render_snapshot(snapshot))

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)

    def _log_line(self, line: str) -> None:
        telemetry.record_event("app.trace", level="debug", data={"line": line})


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the canvas editor demo.")
    parser.add_argument("--text", default="", help="Initial buffer contents")
    parser.add_argument(
        "--demo-lines",
        type=int,
        default=0,
        help="Fill the buffer with N random lines instead of --text",
    )
    parser.add_argument(
        "--blink-ms",
        type=int,
        default=None,
        help="Caret blink interval (default: CANVAS_EDITOR_BLINK_MS or 500)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    config = EditorConfig.from_env()
    if args.blink_ms is not None:
        if args.blink_ms <= 0:
            raise SystemExit("--blink-ms must be positive")
        config = replace(config, blink_interval_ms=args.blink_ms)
    text = demo_text(args.demo_lines) if args.demo_lines > 0 else args.text
    CanvasEditorApp(text=text, config=config).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
