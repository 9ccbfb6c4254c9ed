"""
Core Models Package

Immutable data models shared by detection, ordering, history and export.

All value models are frozen dataclasses, so history snapshots can hold
them without copying and a failed mutation never leaves half-updated state.
"""

from .cells import Cell, CellList
from .image import SourceImage
from .presets import GridPreset, GridPresetStore
from .settings import SlicerSettings, SortMode

__all__ = [
    "Cell",
    "CellList",
    "GridPreset",
    "GridPresetStore",
    "SlicerSettings",
    "SortMode",
    "SourceImage",
]
