"""Editor controller, settings, and font metrics."""

from .config import EditorConfig
from .controller import EditorSnapshot, KeyInput, TextEditor
from .metrics import FontMetrics

__all__ = [
    "EditorConfig",
    "EditorSnapshot",
    "FontMetrics",
    "KeyInput",
    "TextEditor",
]
