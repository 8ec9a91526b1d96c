"""Textual adapter for the editor core."""

from .controller import (
    TextualEditorAdapter,
    TextualUIHooks,
    normalize_key,
    render_snapshot,
)

__all__ = [
    "TextualEditorAdapter",
    "TextualUIHooks",
    "normalize_key",
    "render_snapshot",
]
