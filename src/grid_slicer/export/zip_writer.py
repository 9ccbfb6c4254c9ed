"""
Module: export.zip_writer

Purpose:
    Package per-cell artifacts into a ZIP archive held in memory.

    Archive layout is flat:
        sheet_sliced.zip
        ├── sheet_1.png
        ├── sheet_2.png
        └── ...

Key Functions:
    - build_archive(): ZIP bytes from artifacts

Dependencies:
    - zipfile (std)

Used By:
    - export.exporter: Archive mode
"""

from __future__ import annotations

import logging
import zipfile
from io import BytesIO
from typing import Sequence

from .models import ExportArtifact

logger = logging.getLogger(__name__)


def build_archive(artifacts: Sequence[ExportArtifact]) -> bytes:
    """
    Build a ZIP containing each artifact under its file name.

    Args:
        artifacts: Per-cell files in export order.

    Returns:
        ZIP file contents.

    Raises:
        ValueError: Two artifacts share a file name.
    """
    names = [a.filename for a in artifacts]
    if len(set(names)) != len(names):
        raise ValueError("Archive members must have unique file names")

    buffer = BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
        for artifact in artifacts:
            zf.writestr(artifact.filename, artifact.data)

    data = buffer.getvalue()
    logger.debug(f"Built archive with {len(artifacts)} members ({len(data)} bytes)")
    return data
