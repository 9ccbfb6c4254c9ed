"""
Module: detection.grid_detector

Purpose:
    Infer (rows, cols) of a sprite-sheet style image from its transparency
    structure. Each axis is solved independently from its energy profile:

    1. Find gaps (runs of low energy) and take their midpoints.
    2. Look for the largest division count whose evenly spaced cut lines
       all land near a distinct gap.
    3. Fall back to counting content regions, then to gaps + 1, then to 1.

Key Functions:
    - detect_grid(): Main entry point
    - find_gaps(): Gap midpoints of a profile
    - find_even_divisions(): Evenly spaced division search
    - count_content_regions(): Distinct content runs

Key Classes:
    - GridDetection: Detected (rows, cols)

Dependencies:
    - numpy: Profiles
    - detection.profiler: Energy projection
    - common.thresholds: Sensitivity-derived constants

Used By:
    - session.SlicerSession.auto_detect
    - cli: detect command
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

from grid_slicer.common.thresholds import (
    DEFAULT_SENSITIVITY,
    MAX_DIVISIONS,
    DetectionThresholds,
)
from grid_slicer.core.models import SourceImage

from .profiler import compute_energy_profiles

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GridDetection:
    """Detected grid dimensions; both values are always >= 1."""
    rows: int
    cols: int


def detect_grid(source: SourceImage, sensitivity: int = DEFAULT_SENSITIVITY) -> GridDetection:
    """
    Detect grid dimensions from transparent separators.

    Args:
        source: Decoded image.
        sensitivity: 1-10; higher counts fainter pixels as content and
            tolerates noisier gaps.

    Returns:
        GridDetection with rows/cols >= 1.

    Raises:
        InvalidSettingsError: Sensitivity outside 1..10.
        RasterContextError: Pixel data unavailable.

    Example:
        >>> detect_grid(SourceImage.open("sheet.png"), sensitivity=5)
        GridDetection(rows=4, cols=6)
    """
    thresholds = DetectionThresholds.from_sensitivity(sensitivity)
    profiles = compute_energy_profiles(source.rgba(), thresholds.alpha_threshold)

    logger.debug(
        f"Detecting grid for {source.filename} ({source.width}x{source.height}) "
        f"at sensitivity {sensitivity}: {thresholds}"
    )

    rows = _detect_axis(profiles.rows, thresholds, "rows")
    cols = _detect_axis(profiles.cols, thresholds, "cols")

    logger.info(f"Detected {rows}x{cols} grid in {source.filename}")
    return GridDetection(rows=rows, cols=cols)


def _detect_axis(energy: np.ndarray, thresholds: DetectionThresholds, axis: str) -> int:
    """Resolve the division count for one axis."""
    size = len(energy)
    gaps = find_gaps(energy, thresholds.gap_energy_threshold)

    divisions = find_even_divisions(gaps, size, thresholds.tolerance_factor)
    method = "even"

    if divisions == 1 and gaps:
        divisions = count_content_regions(energy, thresholds.gap_energy_threshold)
        method = "regions"

    if divisions == 1 and 1 <= len(gaps) < MAX_DIVISIONS:
        divisions = len(gaps) + 1
        method = "gaps"

    if divisions == 1:
        method = "default"

    logger.debug(f"{axis}: {len(gaps)} gaps, {divisions} divisions ({method})")
    return divisions


def find_gaps(energy: Sequence[int], threshold: int) -> List[int]:
    """
    Midpoints of low-energy runs.

    A run is recorded only once a content line closes it, so a run that
    reaches the far edge of the profile is not a separator.

    Args:
        energy: Profile values.
        threshold: Values at or below this are gap lines.

    Returns:
        Ascending gap midpoints, floor((start + end) / 2) with end inclusive.

    Example:
        >>> find_gaps([5, 0, 0, 5, 0, 5, 0], threshold=0)
        [1, 4]
    """
    gaps: List[int] = []
    in_gap = False
    gap_start = 0

    for i, value in enumerate(energy):
        if value <= threshold:
            if not in_gap:
                in_gap = True
                gap_start = i
        elif in_gap:
            gaps.append((gap_start + i - 1) // 2)
            in_gap = False

    return gaps


def find_even_divisions(
    gaps: Sequence[int],
    size: int,
    tolerance_factor: float,
    max_divisions: int = MAX_DIVISIONS,
) -> int:
    """
    Largest division count whose internal cut lines all match distinct gaps.

    For each candidate count, every cut at ``i * size / divisions`` greedily
    takes the nearest unused gap closer than ``step * tolerance_factor``.

    Returns:
        Accepted division count, or 1 when none >= 2 fits.

    Example:
        >>> find_even_divisions([49, 99, 149], 200, 0.175)
        4
    """
    if not gaps:
        return 1

    for divisions in range(min(max_divisions, len(gaps) + 1), 1, -1):
        expected_step = size / divisions
        tolerance = expected_step * tolerance_factor
        used: set[int] = set()

        for i in range(1, divisions):
            expected_pos = i * expected_step
            best_gap = -1
            best_dist = float("inf")

            for gap in gaps:
                if gap in used:
                    continue
                dist = abs(gap - expected_pos)
                if dist < best_dist and dist < tolerance:
                    best_dist = dist
                    best_gap = gap

            if best_gap == -1:
                break
            used.add(best_gap)

        if len(used) == divisions - 1:
            return divisions

    return 1


def count_content_regions(energy: Sequence[int], threshold: int) -> int:
    """
    Number of maximal runs with energy above threshold (at least 1).

    Example:
        >>> count_content_regions([0, 3, 3, 0, 4, 0], threshold=0)
        2
    """
    regions = 0
    in_content = False

    for value in energy:
        if value > threshold:
            if not in_content:
                regions += 1
                in_content = True
        else:
            in_content = False

    return max(1, regions)
