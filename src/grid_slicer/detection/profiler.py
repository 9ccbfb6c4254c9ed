"""
Module: detection.profiler

Purpose:
    Opacity projection profiles. For each row (and column) count the pixels
    whose alpha exceeds a threshold; low-energy lines are candidate grid
    separators.

Key Functions:
    - compute_energy_profiles(): Profiles from an RGBA array
    - profile_image(): Profiles from a SourceImage

Dependencies:
    - numpy: Vectorized projections

Used By:
    - detection.grid_detector
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from grid_slicer.core.models import SourceImage


@dataclass(frozen=True)
class EnergyProfiles:
    """
    Row and column opacity counts.

    Attributes:
        rows: Length-height array; rows[y] = opaque pixel count in row y
        cols: Length-width array; cols[x] = opaque pixel count in column x
    """
    rows: np.ndarray
    cols: np.ndarray


def compute_energy_profiles(rgba: np.ndarray, alpha_threshold: int) -> EnergyProfiles:
    """
    Project alpha coverage onto both axes.

    Args:
        rgba: (height, width, 4) array.
        alpha_threshold: Pixels with alpha strictly greater count as content.

    Returns:
        EnergyProfiles with int64 counts.

    Example:
        >>> arr = np.zeros((2, 3, 4), dtype=np.uint8)
        >>> arr[0, :, 3] = 255
        >>> compute_energy_profiles(arr, 10).rows.tolist()
        [3, 0]
    """
    if rgba.ndim != 3 or rgba.shape[2] != 4:
        raise ValueError(f"Expected (H, W, 4) RGBA array, got shape {rgba.shape}")
    content = rgba[..., 3] > alpha_threshold
    return EnergyProfiles(
        rows=content.sum(axis=1, dtype=np.int64),
        cols=content.sum(axis=0, dtype=np.int64),
    )


def profile_image(source: SourceImage, alpha_threshold: int) -> EnergyProfiles:
    """Energy profiles of a decoded source image."""
    return compute_energy_profiles(source.rgba(), alpha_threshold)
