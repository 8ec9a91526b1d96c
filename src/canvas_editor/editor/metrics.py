"""Font measurements used by renderers to place text and the caret."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from canvas_editor.buffer.state import Position


@dataclass(frozen=True, slots=True)
class FontMetrics:
    """Monospace advance width, line height, and baseline offset in pixels.

    Hosts measure these once per font; the editor core never reads them.
    """

    family: str
    size: int
    width: float
    height: float
    baseline: float

    @classmethod
    def for_terminal(cls, family: str = "terminal", size: int = 1) -> "FontMetrics":
        # One cell per character and per line.
        return cls(family=family, size=size, width=1, height=1, baseline=0)

    def caret_offset(self, position: Position) -> Tuple[float, float]:
        return (position.character * self.width, position.line * self.height)

    def visible_line_count(self, viewport_height: float) -> int:
        if self.height <= 0:
            raise ValueError("Line height must be positive")
        return max(1, math.ceil(viewport_height / self.height))
