"""Shared constants and thresholds for grid_slicer."""

from .thresholds import (
    DEFAULT_SENSITIVITY,
    MAX_DIVISIONS,
    MAX_SENSITIVITY,
    MIN_SENSITIVITY,
    DetectionThresholds,
    ExportThresholds,
    validate_sensitivity,
)

__all__ = [
    "DEFAULT_SENSITIVITY",
    "MAX_DIVISIONS",
    "MAX_SENSITIVITY",
    "MIN_SENSITIVITY",
    "DetectionThresholds",
    "ExportThresholds",
    "validate_sensitivity",
]
