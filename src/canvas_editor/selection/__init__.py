"""Caret and selection tracking."""

from .engine import SelectionEngine

__all__ = ["SelectionEngine"]
