"""
Module: export.sinks

Purpose:
    Hand-off targets for finished artifacts. A sink is any callable taking
    an ExportArtifact; DirectorySink saves into a folder.

Key Classes:
    - DirectorySink: Atomic writes into an output directory
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import Callable, List

from .models import ExportArtifact

logger = logging.getLogger(__name__)

ArtifactSink = Callable[[ExportArtifact], None]


class DirectorySink:
    """
    Save artifacts into a directory.

    Writes are atomic (write to temp then replace) so an interrupted save
    never leaves a truncated file under the final name.

    Example:
        >>> sink = DirectorySink(Path("out"))
        >>> session.export(config, sink=sink)
        >>> sink.written
        [PosixPath('out/sheet_sliced.zip')]
    """

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = Path(output_dir)
        self.written: List[Path] = []

    def __call__(self, artifact: ExportArtifact) -> None:
        path = self.output_dir / artifact.filename
        _atomic_write_bytes(artifact.data, path)
        self.written.append(path)
        logger.info(f"Saved {path} ({artifact.size_bytes} bytes)")


def _atomic_write_bytes(data: bytes, path: Path) -> None:
    """Write bytes atomically using temp file."""
    path.parent.mkdir(parents=True, exist_ok=True)

    with tempfile.NamedTemporaryFile(
        mode="wb",
        suffix=path.suffix,
        dir=path.parent,
        delete=False,
    ) as f:
        temp_path = Path(f.name)
        try:
            f.write(data)
        except OSError:
            f.close()
            temp_path.unlink(missing_ok=True)
            raise

    try:
        # Use replace() instead of rename() for Windows compatibility
        temp_path.replace(path)
    except OSError:
        temp_path.unlink(missing_ok=True)
        raise
