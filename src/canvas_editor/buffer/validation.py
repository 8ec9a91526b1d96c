"""Line-shape helpers shared across buffer services."""

from __future__ import annotations

from typing import Sequence

from .sync import BufferInvariantError


def content_length(line: str) -> int:
    if line.endswith("\n"):
        return len(line) - 1
    return len(line)


def ensure_lines(lines: Sequence[str], start: int = 0, stop: int | None = None) -> None:
    """Check the line invariants for ``lines[start:stop]``.

    The list must be non-empty, every non-final line must end in exactly one
    line break, and the final line must not end in one.
    """

    if not lines:
        raise BufferInvariantError("Document has no lines")
    last = len(lines) - 1
    stop = last + 1 if stop is None else min(stop, last + 1)
    for row in range(max(0, start), stop):
        line = lines[row]
        breaks = line.count("\n")
        if row == last:
            if breaks:
                raise BufferInvariantError("Last line contains a line break", row=row)
        elif breaks != 1 or not line.endswith("\n"):
            raise BufferInvariantError(
                "Line must end with exactly one line break", row=row
            )
