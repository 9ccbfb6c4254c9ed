"""
Module: history

Purpose:
    Linear undo/redo history over settings and cell order.
"""

from .stack import HistoryEntry, HistoryStack

__all__ = [
    "HistoryEntry",
    "HistoryStack",
]
