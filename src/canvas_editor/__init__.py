"""Plain-text buffer and selection engine for interactive editors."""

__all__ = [
    "adapters",
    "buffer",
    "editor",
    "runtime",
    "selection",
]

__version__ = "0.1.0"
