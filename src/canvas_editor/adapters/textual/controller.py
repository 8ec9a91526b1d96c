"""Textual-facing adapter: key translation, caret blink, and rendering."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from rich.text import Text

from canvas_editor.buffer import SelectionChange
from canvas_editor.editor import EditorSnapshot, KeyInput, TextEditor

_NAMED_KEYS = {
    "left": "LEFT",
    "right": "RIGHT",
    "up": "UP",
    "down": "DOWN",
    "backspace": "BACKSPACE",
    "delete": "DELETE",
    "enter": "ENTER",
    "return": "ENTER",
}


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_view: Callable[[EditorSnapshot], None]
    update_status: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


def normalize_key(key: str, text: Optional[str] = None) -> KeyInput:
    """Turn a Textual key name such as ``shift+left`` into a ``KeyInput``."""

    *modifiers, base = key.split("+")
    name = _NAMED_KEYS.get(base.lower(), base)
    return KeyInput(
        key=name,
        modifiers=tuple(mod.upper() for mod in modifiers),
        text=None if name in _NAMED_KEYS.values() else text,
    )


def render_snapshot(
    snapshot: EditorSnapshot,
    *,
    selection_style: str = "reverse",
    caret_style: str = "underline",
) -> Text:
    """Build a rich ``Text`` for the visible lines.

    Each line gets one trailing cell so the caret and end-of-line selection
    have somewhere to show.
    """

    output = Text(no_wrap=True)
    caret_row = snapshot.caret.line - snapshot.scroll_top
    for row, line in enumerate(snapshot.lines):
        content = line[:-1] if line.endswith("\n") else line
        segment = Text(content + " ")
        line_range = snapshot.ranges.get(row)
        if line_range is not None:
            start, end = line_range.resolve(len(content))
            if line_range.to_end_of_line:
                end += 1
            segment.stylize(selection_style, start, end)
        if snapshot.caret_visible and caret_row == row:
            column = snapshot.caret.character
            segment.stylize(caret_style, column, column + 1)
        output.append_text(segment)
        if line.endswith("\n"):
            output.append("\n")
    return output


class TextualEditorAdapter:
    """Bridges a TextEditor to Textual widgets through ``TextualUIHooks``.

    The adapter owns the caret blink phase: ``tick_blink`` toggles it and any
    selection change turns it back on.
    """

    def __init__(self, editor: TextEditor, hooks: TextualUIHooks) -> None:
        self.editor = editor
        self.hooks = hooks
        self._caret_on = True
        editor.selection.subscribe(self._on_selection_change)
        editor.focus()
        self._refresh()

    def handle_textual_key(self, key: str, *, text: Optional[str] = None) -> bool:
        key_input = normalize_key(key, text)
        handled = self.editor.handle_key(key_input)
        self.hooks.log(
            f"key -> {key_input.key} mods={key_input.modifiers!r} handled={handled}"
        )
        if handled:
            self._report_caret()
        return handled

    def paste(self, text: str) -> None:
        """Insert pasted text at the caret, replacing any selection."""

        if not text:
            return
        self.hooks.log(f"paste -> chars={len(text)}")
        self.editor.insert_text_at_cursor(text)
        self._report_caret()

    def _report_caret(self) -> None:
        caret = self.editor.selection.position
        self.hooks.update_status(f"Ln {caret.line + 1}, Col {caret.character + 1}")

    def tick_blink(self) -> None:
        if not self.editor.selection.visible:
            return
        self._caret_on = not self._caret_on
        self._refresh()

    def focus(self) -> None:
        self.editor.focus()
        self._caret_on = True
        self._refresh()

    def blur(self) -> None:
        self.editor.blur()
        self._refresh()

    def snapshot(self) -> EditorSnapshot:
        snapshot = self.editor.snapshot()
        snapshot.caret_visible = snapshot.caret_visible and self._caret_on
        return snapshot

    def _on_selection_change(self, change: SelectionChange) -> None:
        self.hooks.log(f"selection -> anchor={change.anchor} focus={change.focus}")
        self._caret_on = True
        self._refresh()

    def _refresh(self) -> None:
        self.hooks.update_view(self.snapshot())


__all__ = [
    "TextualEditorAdapter",
    "TextualUIHooks",
    "normalize_key",
    "render_snapshot",
]
