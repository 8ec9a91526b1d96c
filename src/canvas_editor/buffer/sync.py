"""Boundary types shared between the buffer, the selection engine, and hosts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Protocol

from .state import Position

if TYPE_CHECKING:  # pragma: no cover
    from canvas_editor.selection.engine import SelectionEngine


class DocumentReader(Protocol):
    """Read-only view of a document used for selection bounds checks."""

    @property
    def line_count(self) -> int:
        ...

    def content_length(self, row: int) -> int:
        """Length of ``row`` without its trailing line break."""
        ...


@dataclass(frozen=True, slots=True)
class SelectionChange:
    """Emitted after every ``SelectionEngine.set_position`` call."""

    engine: "SelectionEngine"
    anchor: Position
    focus: Position


class SelectionObserver(Protocol):
    def __call__(self, change: SelectionChange) -> None:
        ...


class BufferInvariantError(RuntimeError):
    """Raised when a mutation leaves the line list in an invalid shape."""

    def __init__(self, message: str, *, row: Optional[int] = None) -> None:
        super().__init__(message)
        self.row = row
