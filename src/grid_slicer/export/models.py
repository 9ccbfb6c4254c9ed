"""
Module: export.models

Purpose:
    Value types produced by the exporter: the export mode, a named encoded
    file (artifact) and the overall export result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from grid_slicer.core.models import Cell


class ExportMode(str, Enum):
    """How per-cell files are handed off."""

    ARCHIVE = "archive"  # One ZIP containing every cell
    DISCRETE = "discrete"  # One file per cell, handed off in sequence


@dataclass(frozen=True)
class ExportArtifact:
    """
    One encoded output file.

    Attributes:
        filename: Output file name, e.g. "sheet_3.png"
        data: Encoded bytes
        mime_type: MIME type of data
        cell: Source cell for per-cell files, None for archives
    """
    filename: str
    data: bytes = field(repr=False)
    mime_type: str
    cell: Optional[Cell] = None

    @property
    def size_bytes(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class ExportResult:
    """
    Complete export result (immutable).

    ``files`` always holds the per-cell artifacts in export order; ``archive``
    is set only in archive mode.
    """
    mode: ExportMode
    files: Tuple[ExportArtifact, ...]
    archive: Optional[ExportArtifact] = None

    @property
    def artifacts(self) -> Tuple[ExportArtifact, ...]:
        """What was handed off: the archive alone, or every per-cell file."""
        if self.archive is not None:
            return (self.archive,)
        return self.files

    @property
    def cell_count(self) -> int:
        return len(self.files)
