"""
Module: detection

Purpose:
    Transparency-based grid auto-detection.

Key Modules:
    - profiler: Row/column opacity projections
    - grid_detector: Rows/cols inference from projection gaps

Used By:
    - session.SlicerSession.auto_detect
"""

from .grid_detector import (
    GridDetection,
    count_content_regions,
    detect_grid,
    find_even_divisions,
    find_gaps,
)
from .profiler import EnergyProfiles, compute_energy_profiles, profile_image

__all__ = [
    "EnergyProfiles",
    "GridDetection",
    "compute_energy_profiles",
    "count_content_regions",
    "detect_grid",
    "find_even_divisions",
    "find_gaps",
    "profile_image",
]
