"""Positions, selection sides, and per-line highlight ranges."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Tuple, Union

Coordinate = Tuple[int, int]  # (column, row), as returned by buffer edits


@dataclass(frozen=True, order=True, slots=True)
class Position:
    """A caret location; compares lexicographically by ``(line, character)``."""

    line: int = 0
    character: int = 0


class ActiveSide(Enum):
    """Which selection endpoint further motion moves."""

    START = "start"
    END = "end"

    def flipped(self) -> "ActiveSide":
        return ActiveSide.END if self is ActiveSide.START else ActiveSide.START


class RangeEnd(Enum):
    END_OF_LINE = "end_of_line"


class LineRange(NamedTuple):
    """Half-open highlighted column range on a single line.

    ``end`` is either a concrete column or ``RangeEnd.END_OF_LINE`` when the
    selection continues past the line break.
    """

    start: int
    end: Union[int, RangeEnd]

    @property
    def to_end_of_line(self) -> bool:
        return self.end is RangeEnd.END_OF_LINE

    def resolve(self, content_length: int) -> Tuple[int, int]:
        if isinstance(self.end, RangeEnd):
            return (self.start, content_length)
        return (self.start, self.end)
