"""Anchor/focus selection state machine with line wraparound."""

from __future__ import annotations

from typing import Dict, List

from canvas_editor.buffer.state import ActiveSide, LineRange, Position, RangeEnd
from canvas_editor.buffer.sync import DocumentReader, SelectionChange, SelectionObserver


class SelectionEngine:
    """Tracks the caret and selection over a read-only document.

    ``anchor`` never compares after ``focus``. While extending, the endpoint
    named by ``active_side`` is the one that moves; if a move would put the
    endpoints out of order they are swapped and the side is flipped.
    """

    def __init__(self, document: DocumentReader) -> None:
        self._document = document
        self.anchor = Position()
        self.focus = Position()
        self.active_side = ActiveSide.END
        self._visible = False
        self._observers: List[SelectionObserver] = []

    @property
    def document(self) -> DocumentReader:
        return self._document

    def attach(self, document: DocumentReader) -> SelectionChange:
        """Point the engine at another document and collapse to its start."""

        self._document = document
        return self.set_position(0, 0)

    @property
    def position(self) -> Position:
        if self.active_side is ActiveSide.START:
            return self.anchor
        return self.focus

    @property
    def visible(self) -> bool:
        return self._visible

    def set_visible(self, visible: bool) -> None:
        self._visible = visible

    def subscribe(self, observer: SelectionObserver) -> None:
        self._observers.append(observer)

    def unsubscribe(self, observer: SelectionObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def is_empty(self) -> bool:
        return self.anchor == self.focus

    def line_ranges(self) -> Dict[int, LineRange]:
        """Split the selection into one highlighted range per line."""

        if self.is_empty():
            return {}
        ranges: Dict[int, LineRange] = {}
        character = self.anchor.character
        for line in range(self.anchor.line, self.focus.line + 1):
            if line == self.focus.line:
                ranges[line] = LineRange(character, self.focus.character)
            else:
                ranges[line] = LineRange(character, RangeEnd.END_OF_LINE)
            character = 0
        return ranges

    def set_position(
        self, character: int, line: int, extend: bool = False
    ) -> SelectionChange:
        """Move the caret, optionally extending the selection.

        Out-of-range targets are forced into the document. Observers are
        notified after the endpoints are updated.
        """

        target = self._force_bounds(character, line)
        self._apply(target, extend)
        change = SelectionChange(engine=self, anchor=self.anchor, focus=self.focus)
        for observer in list(self._observers):
            observer(change)
        return change

    def move_up(self, length: int = 1, extend: bool = False) -> SelectionChange:
        position = self.position
        return self.set_position(position.character, position.line - length, extend)

    def move_down(self, length: int = 1, extend: bool = False) -> SelectionChange:
        position = self.position
        return self.set_position(position.character, position.line + length, extend)

    def move_left(self, length: int = 1, extend: bool = False) -> SelectionChange:
        position = self.position
        return self.set_position(position.character - length, position.line, extend)

    def move_right(self, length: int = 1, extend: bool = False) -> SelectionChange:
        position = self.position
        return self.set_position(position.character + length, position.line, extend)

    def _force_bounds(self, character: int, line: int) -> Position:
        # Wraparound only applies to moves that stay on the caret's line.
        current_line = self.position.line
        last_line = self._document.line_count - 1
        line = max(0, min(line, last_line))

        if character < 0:
            if line == current_line and line > 0:
                line -= 1
                character = self._document.content_length(line)
            else:
                character = 0

        length = self._document.content_length(line)
        if character > length:
            if line == current_line and line < last_line:
                line += 1
                character = 0
            else:
                character = length

        return Position(line=line, character=character)

    def _apply(self, target: Position, extend: bool) -> None:
        if not extend:
            self.anchor = self.focus = target
            self.active_side = ActiveSide.END
            return

        if target < self.anchor and (
            self.is_empty() or target.line < self.anchor.line
        ):
            self.active_side = ActiveSide.START

        if self.active_side is ActiveSide.END:
            self.focus = target
        else:
            self.anchor = target

        if self.anchor > self.focus:
            self.anchor, self.focus = self.focus, self.anchor
            self.active_side = self.active_side.flipped()
