"""
Module: export.config

Purpose:
    Configuration dataclass for exports. Immutable, validated on
    construction.

Key Classes:
    - ExportConfig: Mode, label burn-in, encoder quality, discrete delay

Used By:
    - export.exporter
    - session.SlicerSession.export
    - cli
"""

from __future__ import annotations

from dataclasses import dataclass

from grid_slicer.common.thresholds import ExportThresholds
from grid_slicer.core.errors import InvalidSettingsError

from .models import ExportMode

_DEFAULTS = ExportThresholds()


@dataclass(frozen=True)
class ExportConfig:
    """
    Configuration for one export (immutable).

    Attributes:
        mode: ARCHIVE (one ZIP) or DISCRETE (one file per cell)
        burn_labels: Draw each cell's display id onto its crop
        quality: Encoder quality for lossy formats (1-100)
        discrete_delay_s: Pause between discrete hand-offs

    Example:
        >>> config = ExportConfig(mode=ExportMode.DISCRETE, discrete_delay_s=0)
    """

    mode: ExportMode = ExportMode.ARCHIVE
    burn_labels: bool = False
    quality: int = _DEFAULTS.jpeg_quality
    discrete_delay_s: float = _DEFAULTS.discrete_delay_s

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        try:
            object.__setattr__(self, "mode", ExportMode(self.mode))
        except ValueError as e:
            raise InvalidSettingsError(f"Unknown export mode: {self.mode!r}") from e
        if not 1 <= self.quality <= 100:
            raise InvalidSettingsError(f"quality must be between 1 and 100: {self.quality}")
        if self.discrete_delay_s < 0:
            raise InvalidSettingsError(f"discrete_delay_s must be non-negative: {self.discrete_delay_s}")
