"""Centralized threshold and limit configuration.

This module contains the numeric limits and sensitivity-derived thresholds
used by grid detection, the settings model and the exporter. Keeping them in
one place makes tuning easier and documents where each value comes from.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from grid_slicer.core.errors import InvalidSettingsError

# Sensitivity knob exposed to the user
MIN_SENSITIVITY = 1
MAX_SENSITIVITY = 10
DEFAULT_SENSITIVITY = 5

# Detection never proposes more divisions than this per axis
MAX_DIVISIONS = 50


@dataclass(frozen=True)
class DetectionThresholds:
    """
    Constants derived from a detection sensitivity.

    Attributes:
        alpha_threshold: Pixels with alpha above this count as content.
        gap_energy_threshold: Lines with energy at or below this are
            candidate separators.
        tolerance_factor: Fraction of the expected cell size allowed as
            slack when matching a separator to a cut line.

    Example:
        >>> DetectionThresholds.from_sensitivity(5)
        DetectionThresholds(alpha_threshold=15, gap_energy_threshold=10, tolerance_factor=0.175)
    """
    alpha_threshold: int
    gap_energy_threshold: int
    tolerance_factor: float

    @classmethod
    def from_sensitivity(cls, sensitivity: int) -> "DetectionThresholds":
        """Derive thresholds; higher sensitivity counts fainter pixels as content."""
        validate_sensitivity(sensitivity)
        return cls(
            alpha_threshold=max(5, 30 - 3 * sensitivity),
            gap_energy_threshold=math.floor(2 * sensitivity),
            tolerance_factor=round(0.25 - 0.015 * sensitivity, 6),
        )


def validate_sensitivity(sensitivity: int) -> None:
    """Raise InvalidSettingsError unless sensitivity is an int in 1..10."""
    if isinstance(sensitivity, bool) or not isinstance(sensitivity, int):
        raise InvalidSettingsError(f"sensitivity must be an integer: {sensitivity!r}")
    if not MIN_SENSITIVITY <= sensitivity <= MAX_SENSITIVITY:
        raise InvalidSettingsError(
            f"sensitivity must be between {MIN_SENSITIVITY} and {MAX_SENSITIVITY}: {sensitivity}"
        )


@dataclass(frozen=True)
class ExportThresholds:
    """Defaults for encoding and discrete hand-off."""

    jpeg_quality: int = 90  # Lossy formats only
    discrete_delay_s: float = 0.1  # Pause between discrete files
    label_stroke_px: int = 3
    export_log_limit: int = 50  # Recent exports kept in memory
