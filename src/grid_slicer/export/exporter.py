"""
Module: export.exporter

Purpose:
    Slice the source image into per-cell files and package them.
    Validate → Crop → (Label) → Encode → Package → Hand off

    Cells are processed strictly one after another in list order, so only
    one crop is alive at a time and progress is monotonic. Every cell is
    encoded before anything is handed off: a failure on any cell aborts the
    export with no partial archive and no partial discrete sequence.

Key Functions:
    - export_slices(): Main entry point
    - export_single(): One cell as one file

Dependencies:
    - PIL: Crop, draw, encode (via cropper/encoder)
    - export.zip_writer: Archive packaging

Used By:
    - session.SlicerSession.export
    - cli: slice command
"""

from __future__ import annotations

import logging
import time
from typing import Callable, List, Optional, Sequence

from grid_slicer.core.errors import ExportCancelledError, InvalidSettingsError
from grid_slicer.core.models import Cell, SlicerSettings, SourceImage

from .config import ExportConfig
from .cropper import burn_label, cell_size, crop_cell
from .encoder import encode_image
from .models import ExportArtifact, ExportMode, ExportResult
from .naming import archive_filename, slice_filename
from .sinks import ArtifactSink
from .zip_writer import build_archive

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]
CancelCheck = Callable[[], bool]

ARCHIVE_MIME_TYPE = "application/zip"


def export_slices(
    source: SourceImage,
    settings: SlicerSettings,
    cells: Sequence[Cell],
    config: Optional[ExportConfig] = None,
    *,
    selection: Optional[Sequence[str]] = None,
    progress: Optional[ProgressCallback] = None,
    sink: Optional[ArtifactSink] = None,
    should_cancel: Optional[CancelCheck] = None,
) -> ExportResult:
    """
    Export cells as individually named image files.

    Args:
        source: Decoded source image.
        settings: Grid settings (rows/cols locate cells, font_size sizes labels).
        cells: Cells in export order.
        config: Export configuration (defaults to archive mode).
        selection: Cell ids to export; list order is kept and the archive is
            named ``<base>_selected.zip``.
        progress: Called with (processed, total) after each cell.
        sink: Receives the archive, or each per-cell file in discrete mode.
        should_cancel: Checked before each cell; True aborts the export.

    Returns:
        ExportResult with per-cell files and, in archive mode, the archive.

    Raises:
        InvalidSettingsError: Empty/unknown selection, cells outside the
            grid, grid finer than the image, duplicate file names.
        RasterContextError: Label drawing failed.
        EncodeError: A cell could not be encoded.
        ExportCancelledError: should_cancel returned True.

    Example:
        >>> result = export_slices(src, settings, cells, ExportConfig())
        >>> result.archive.filename
        'sheet_sliced.zip'
    """
    config = config or ExportConfig()
    targets = _select_cells(cells, selection)
    _validate_targets(source, settings, targets)

    total = len(targets)
    start_time = time.perf_counter()
    logger.info(
        f"Exporting {total} cells from {source.filename} "
        f"({settings.rows}x{settings.cols}, {config.mode.value})"
    )

    files: List[ExportArtifact] = []
    for processed, cell in enumerate(targets, start=1):
        if should_cancel is not None and should_cancel():
            raise ExportCancelledError(f"Export cancelled after {processed - 1}/{total} cells")
        files.append(_render_cell(source, settings, cell, config))
        if progress is not None:
            progress(processed, total)

    elapsed = time.perf_counter() - start_time
    logger.info(f"Encoded {total} cells in {elapsed:.2f}s")

    if config.mode is ExportMode.ARCHIVE:
        archive = ExportArtifact(
            filename=archive_filename(source, selected=selection is not None),
            data=build_archive(files),
            mime_type=ARCHIVE_MIME_TYPE,
        )
        if sink is not None:
            sink(archive)
        return ExportResult(mode=config.mode, files=tuple(files), archive=archive)

    if sink is not None:
        for i, artifact in enumerate(files):
            # Pause between hand-offs so the receiver is not flooded
            if i and config.discrete_delay_s:
                time.sleep(config.discrete_delay_s)
            sink(artifact)
    return ExportResult(mode=config.mode, files=tuple(files))


def export_single(
    source: SourceImage,
    settings: SlicerSettings,
    cell: Cell,
    config: Optional[ExportConfig] = None,
) -> ExportArtifact:
    """Export one cell as one file (no archive)."""
    config = config or ExportConfig()
    _validate_targets(source, settings, [cell])
    return _render_cell(source, settings, cell, config)


def _render_cell(
    source: SourceImage,
    settings: SlicerSettings,
    cell: Cell,
    config: ExportConfig,
) -> ExportArtifact:
    """Crop, optionally label, and encode one cell."""
    crop = crop_cell(source.image, cell, settings.rows, settings.cols)
    if config.burn_labels:
        crop = burn_label(crop, str(cell.display_id), settings.font_size)
    data = encode_image(crop, source.format, quality=config.quality)
    return ExportArtifact(
        filename=slice_filename(source, cell.display_id),
        data=data,
        mime_type=source.mime_type,
        cell=cell,
    )


def _select_cells(cells: Sequence[Cell], selection: Optional[Sequence[str]]) -> List[Cell]:
    """Cells to export, keeping list order; selection filters by structural id."""
    if selection is None:
        targets = list(cells)
    else:
        wanted = set(selection)
        unknown = wanted - {cell.id for cell in cells}
        if unknown:
            raise InvalidSettingsError(f"Selection contains unknown cells: {sorted(unknown)}")
        targets = [cell for cell in cells if cell.id in wanted]
    if not targets:
        raise InvalidSettingsError("Nothing to export: no cells selected")
    return targets


def _validate_targets(source: SourceImage, settings: SlicerSettings, cells: Sequence[Cell]) -> None:
    """Reject cells outside the grid and duplicate names before any work starts."""
    cell_size(source.width, source.height, settings.rows, settings.cols)
    for cell in cells:
        if cell.row >= settings.rows or cell.col >= settings.cols:
            raise InvalidSettingsError(
                f"Cell {cell.id} is outside the {settings.rows}x{settings.cols} grid"
            )
    names = [slice_filename(source, cell.display_id) for cell in cells]
    if len(set(names)) != len(names):
        raise InvalidSettingsError("Display ids must be unique within an export")
