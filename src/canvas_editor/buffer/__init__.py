"""Text storage, positions, and the types shared with selection hosts."""

from .document import TextBuffer, prepare_text
from .state import ActiveSide, Coordinate, LineRange, Position, RangeEnd
from .sync import (
    BufferInvariantError,
    DocumentReader,
    SelectionChange,
    SelectionObserver,
)
from .validation import content_length, ensure_lines

__all__ = [
    "TextBuffer",
    "prepare_text",
    "ActiveSide",
    "Coordinate",
    "LineRange",
    "Position",
    "RangeEnd",
    "BufferInvariantError",
    "DocumentReader",
    "SelectionChange",
    "SelectionObserver",
    "content_length",
    "ensure_lines",
]
