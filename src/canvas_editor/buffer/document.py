"""Line-based text storage and its insert/delete algebra."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from canvas_editor.runtime import telemetry

from .state import Coordinate
from .sync import BufferInvariantError
from .validation import content_length, ensure_lines


def prepare_text(text: str) -> List[str]:
    """Split ``text`` into lines that keep their trailing ``"\\n"``.

    The final fragment never carries a line break and may be empty, so
    ``"".join(prepare_text(text)) == text`` always holds.
    """

    lines: List[str] = []
    index = 0
    while True:
        newline = text.find("\n", index)
        if newline == -1:
            lines.append(text[index:])
            return lines
        lines.append(text[index : newline + 1])
        index = newline + 1


@dataclass(slots=True)
class TextBuffer:
    """Mutable plain-text document stored as a list of lines.

    Every line except the last ends with a single ``"\\n"``; an empty
    document is one empty line. Edit coordinates are ``(column, row)`` where
    ``column`` indexes the line content without its line break. Mutators
    clamp out-of-range coordinates instead of raising.
    """

    _lines: List[str] = field(default_factory=lambda: [""])
    version: int = 0
    dirty: bool = False

    prepare_text = staticmethod(prepare_text)

    def __post_init__(self) -> None:
        if isinstance(self._lines, str):
            raise TypeError("TextBuffer takes a list of lines; use from_text()")
        self._lines = list(self._lines)
        ensure_lines(self._lines)

    @classmethod
    def from_text(cls, text: str = "") -> "TextBuffer":
        return cls(_lines=prepare_text(text))

    def snapshot(self) -> Sequence[str]:
        return tuple(self._lines)

    @property
    def text(self) -> str:
        return "".join(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    @property
    def length(self) -> int:
        return sum(len(line) for line in self._lines)

    def line(self, index: int) -> Optional[str]:
        """Return line ``index`` with its line break, or ``None`` if missing."""

        if 0 <= index < len(self._lines):
            return self._lines[index]
        return None

    def content_length(self, row: int) -> int:
        return content_length(self._lines[row])

    def char_at(self, column: int, row: int) -> Optional[str]:
        line = self.line(row)
        if line is None or not 0 <= column < len(line):
            return None
        return line[column]

    def insert_text(self, text: str, column: int, row: int) -> Coordinate:
        """Insert ``text`` at ``(column, row)`` and return the caret after it."""

        row = self._clamp_row(row)
        column = max(0, min(column, self.content_length(row)))
        if not text:
            return (column, row)

        fragments = prepare_text(text)
        current = self._lines[row]
        head, tail = current[:column], current[column:]

        if len(fragments) == 1:
            self._lines[row] = head + fragments[0] + tail
            result = (column + len(fragments[0]), row)
        else:
            last = fragments[-1]
            self._lines[row] = head + fragments[0]
            self._lines[row + 1 : row + 1] = fragments[1:-1] + [last + tail]
            result = (len(last), row + len(fragments) - 1)

        self._touch(row, row + len(fragments))
        telemetry.record_event(
            "buffer.insert_text",
            level="debug",
            data={"at": (column, row), "chars": len(text), "caret": result},
        )
        return result

    def delete_range(
        self, start_column: int, start_row: int, end_column: int, end_row: int
    ) -> Coordinate:
        """Remove the text between two positions, end exclusive.

        Returns the start position, which is also where the caret belongs.
        """

        start, end = self._clamp_range(start_column, start_row, end_column, end_row)
        if start == end:
            return (start[1], start[0])

        (start_row, start_column), (end_row, end_column) = start, end
        self._lines[start_row] = (
            self._lines[start_row][:start_column] + self._lines[end_row][end_column:]
        )
        del self._lines[start_row + 1 : end_row + 1]

        self._touch(start_row, start_row + 1)
        telemetry.record_event(
            "buffer.delete_range",
            level="debug",
            data={"start": (start_column, start_row), "end": (end_column, end_row)},
        )
        return (start_column, start_row)

    def delete_char(self, forward: bool, column: int, row: int) -> Coordinate:
        """Delete one character or line break next to ``(column, row)``."""

        row = self._clamp_row(row)
        length = self.content_length(row)
        column = max(0, min(column, length))

        if forward:
            if column < length:
                return self.delete_range(column, row, column + 1, row)
            if row < len(self._lines) - 1:
                return self.delete_range(column, row, 0, row + 1)
            return (length, row)

        if column > 0:
            return self.delete_range(column - 1, row, column, row)
        if row > 0:
            return self.delete_range(self.content_length(row - 1), row - 1, column, row)
        return (0, 0)

    def text_range(
        self, start_column: int, start_row: int, end_column: int, end_row: int
    ) -> str:
        """Return the text ``delete_range`` would remove for the same arguments."""

        start, end = self._clamp_range(start_column, start_row, end_column, end_row)
        (start_row, start_column), (end_row, end_column) = start, end
        if start_row == end_row:
            return self._lines[start_row][start_column:end_column]
        parts = [self._lines[start_row][start_column:]]
        parts.extend(self._lines[start_row + 1 : end_row])
        parts.append(self._lines[end_row][:end_column])
        return "".join(parts)

    def _clamp_row(self, row: int) -> int:
        return max(0, min(row, len(self._lines) - 1))

    def _clamp_range(
        self, start_column: int, start_row: int, end_column: int, end_row: int
    ) -> tuple[tuple[int, int], tuple[int, int]]:
        start_row = self._clamp_row(start_row)
        start_column = max(0, min(start_column, self.content_length(start_row)))
        end_row = self._clamp_row(end_row)
        end_column = max(0, min(end_column, self.content_length(end_row)))
        start, end = (start_row, start_column), (end_row, end_column)
        if start > end:
            start, end = end, start
        return start, end

    def _touch(self, start: int, stop: int) -> None:
        self.version += 1
        self.dirty = True
        try:
            ensure_lines(self._lines, start, stop)
        except BufferInvariantError as exc:
            telemetry.record_event(
                "buffer.invariant",
                level="error",
                data={"reason": str(exc), "row": exc.row, "version": self.version},
            )
            raise
