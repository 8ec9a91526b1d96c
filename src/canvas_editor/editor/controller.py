"""Editor controller tying a TextBuffer to a SelectionEngine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from canvas_editor.buffer import LineRange, Position, SelectionChange, TextBuffer
from canvas_editor.runtime import telemetry
from canvas_editor.selection import SelectionEngine

from .config import EditorConfig
from .metrics import FontMetrics

_MOTIONS = {
    "LEFT": "move_left",
    "RIGHT": "move_right",
    "UP": "move_up",
    "DOWN": "move_down",
}


@dataclass(slots=True)
class KeyInput:
    """Normalized key event handed to the editor."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None


@dataclass(slots=True)
class EditorSnapshot:
    """Everything a renderer needs to draw one frame.

    ``lines`` and the keys of ``ranges`` are viewport rows, starting at
    document line ``scroll_top``. ``caret`` stays in document coordinates;
    ``caret_offset`` is relative to the viewport.
    """

    version: int
    lines: Tuple[str, ...]
    ranges: Dict[int, LineRange]
    caret: Position
    caret_offset: Tuple[float, float]
    caret_visible: bool
    scroll_top: int = 0


class TextEditor:
    """Routes key presses to buffer edits and caret motions.

    Edits go to the buffer first; the position it returns is then handed to
    the selection engine. The engine itself never edits the buffer.
    """

    def __init__(
        self,
        document: Optional[TextBuffer] = None,
        *,
        config: Optional[EditorConfig] = None,
        metrics: Optional[FontMetrics] = None,
    ) -> None:
        self.config = config or EditorConfig()
        self.metrics = metrics or FontMetrics.for_terminal(
            self.config.font_family, self.config.font_size
        )
        self._document = document if document is not None else TextBuffer()
        self._scroll_top = 0
        self._selection = SelectionEngine(self._document)
        self._selection.subscribe(self._follow_caret)

    @property
    def document(self) -> TextBuffer:
        return self._document

    @property
    def selection(self) -> SelectionEngine:
        return self._selection

    def set_document(self, document: TextBuffer) -> None:
        self._document = document
        self._selection.attach(document)

    def selected_text(self) -> str:
        anchor, focus = self._selection.anchor, self._selection.focus
        return self._document.text_range(
            anchor.character, anchor.line, focus.character, focus.line
        )

    def insert_text_at_cursor(self, text: str) -> Position:
        """Insert ``text`` at the caret, replacing any selected text."""

        with telemetry.span(
            "editor::insert",
            component="editor",
            metadata={"chars": len(text), "version": self._document.version},
        ):
            column, row = self._delete_selection()
            column, row = self._document.insert_text(text, column, row)
            self._selection.set_position(column, row)
        return self._selection.position

    def delete_char_at_cursor(self, forward: bool) -> Position:
        """Delete the selection, or one character next to the caret."""

        with telemetry.span(
            "editor::delete",
            component="editor",
            metadata={"forward": forward, "version": self._document.version},
        ):
            if self._selection.is_empty():
                caret = self._selection.position
                column, row = self._document.delete_char(
                    forward, caret.character, caret.line
                )
            else:
                column, row = self._delete_selection()
            self._selection.set_position(column, row)
        return self._selection.position

    def handle_key(self, key: KeyInput) -> bool:
        """Apply a key press; returns ``False`` when the key is not ours."""

        name = key.key.upper()
        if name == "BACKSPACE":
            self.delete_char_at_cursor(False)
        elif name == "DELETE":
            self.delete_char_at_cursor(True)
        elif name == "ENTER":
            self.insert_text_at_cursor("\n")
        elif name in _MOTIONS:
            extend = "SHIFT" in key.modifiers
            getattr(self._selection, _MOTIONS[name])(1, extend)
        elif key.text and key.text.isprintable() and "CTRL" not in key.modifiers:
            self.insert_text_at_cursor(key.text)
        else:
            return False
        return True

    def focus(self) -> None:
        self._selection.set_visible(True)

    def blur(self) -> None:
        self._selection.set_visible(False)

    @property
    def visible_line_count(self) -> int:
        return self.metrics.visible_line_count(self.config.height)

    @property
    def scroll_top(self) -> int:
        return self._scroll_top

    def snapshot(self) -> EditorSnapshot:
        visible = self.visible_line_count
        top = self._scroll_top
        caret = self._selection.position
        ranges = {
            line - top: line_range
            for line, line_range in self._selection.line_ranges().items()
            if top <= line < top + visible
        }
        return EditorSnapshot(
            version=self._document.version,
            lines=tuple(self._document.snapshot()[top : top + visible]),
            ranges=ranges,
            caret=caret,
            caret_offset=self.metrics.caret_offset(
                Position(line=caret.line - top, character=caret.character)
            ),
            caret_visible=self._selection.visible,
            scroll_top=top,
        )

    def _follow_caret(self, change: SelectionChange) -> None:
        # Keep the caret line inside [scroll_top, scroll_top + visible).
        line = change.engine.position.line
        visible = self.visible_line_count
        if line < self._scroll_top:
            self._scroll_top = line
        elif line >= self._scroll_top + visible:
            self._scroll_top = line - visible + 1
        self._scroll_top = max(
            0, min(self._scroll_top, self._document.line_count - visible)
        )

    def _delete_selection(self) -> Tuple[int, int]:
        anchor, focus = self._selection.anchor, self._selection.focus
        if anchor == focus:
            caret = self._selection.position
            return (caret.character, caret.line)
        telemetry.record_event(
            "editor.delete_selection",
            level="debug",
            data={"anchor": anchor, "focus": focus},
        )
        return self._document.delete_range(
            anchor.character, anchor.line, focus.character, focus.line
        )
