"""
Core Package

Data models and the error hierarchy for grid_slicer.
"""

from .errors import (
    DecodeError,
    EncodeError,
    ExportCancelledError,
    InvalidSettingsError,
    RasterContextError,
    SlicerError,
)
from .models import Cell, CellList, GridPreset, GridPresetStore, SlicerSettings, SortMode, SourceImage

__all__ = [
    "Cell",
    "CellList",
    "DecodeError",
    "EncodeError",
    "ExportCancelledError",
    "GridPreset",
    "GridPresetStore",
    "InvalidSettingsError",
    "RasterContextError",
    "SlicerError",
    "SlicerSettings",
    "SortMode",
    "SourceImage",
]
