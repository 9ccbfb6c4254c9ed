"""
Module: export

Purpose:
    Crop each cell from the source image, encode it in the source format,
    name it by display id and hand it off as a ZIP archive or as discrete
    files.

Key Modules:
    - exporter: export_slices() / export_single()
    - cropper: Cell rectangles, cropping and label burn-in
    - encoder: Re-encoding in the source format
    - zip_writer: Archive packaging
    - sinks: DirectorySink for saving artifacts
    - records: Recent-export log

Dependencies:
    - PIL/Pillow
    - zipfile (std)
"""

from .config import ExportConfig
from .exporter import export_single, export_slices
from .models import ExportArtifact, ExportMode, ExportResult
from .records import ExportLog, ExportRecord
from .sinks import ArtifactSink, DirectorySink

__all__ = [
    "ArtifactSink",
    "DirectorySink",
    "ExportArtifact",
    "ExportConfig",
    "ExportLog",
    "ExportMode",
    "ExportRecord",
    "ExportResult",
    "export_single",
    "export_slices",
]
