"""
Module: session

Purpose:
    Explicit session object for one load-to-export lifecycle over a single
    source image. Owns the mutable triple (settings, cells, history) plus
    the recent-export log, and routes every mutation through the orderer
    and the history stack.

    Every mutating call validates and computes the next state first, then
    pushes history and commits. A call that raises leaves the session
    exactly as it was.

Key Classes:
    - SlicerSession: Settings/order/history/export orchestration

Dependencies:
    - ordering: Cell generation and renumbering
    - history: Undo/redo
    - detection: Grid auto-detection
    - export: Slicing and packaging

Used By:
    - cli
    - UI collaborators driving one image at a time
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Union

from grid_slicer.common.thresholds import DEFAULT_SENSITIVITY
from grid_slicer.core.errors import InvalidSettingsError
from grid_slicer.core.models import Cell, CellList, GridPreset, SlicerSettings, SourceImage
from grid_slicer.detection import GridDetection, detect_grid
from grid_slicer.export import (
    ArtifactSink,
    ExportConfig,
    ExportLog,
    ExportRecord,
    ExportResult,
    export_single,
    export_slices,
)
from grid_slicer.export.exporter import CancelCheck, ProgressCallback
from grid_slicer.export.models import ExportArtifact
from grid_slicer.history import HistoryEntry, HistoryStack
from grid_slicer.ordering import generate_cells, move_cell, renumber_cells, reorder_cells

logger = logging.getLogger(__name__)

_FIELD_LABELS = {
    "rows": "Rows",
    "cols": "Columns",
    "start_id": "Start ID",
    "font_size": "Font size",
    "sort_mode": "Sort",
}


class SlicerSession:
    """
    Single-owner slicing session.

    Not thread-safe; concurrent callers must serialize externally.

    Args:
        source: Decoded source image.
        settings: Initial settings (defaults to 2x2, start 1, normal order).
        history_limit: Cap on past history entries; None is unbounded.

    Example:
        >>> session = SlicerSession.open("sheet.png")
        >>> session.update_settings(rows=4, cols=4)
        >>> session.update_settings(sort_mode="snake-1")
        >>> session.undo()
        >>> session.settings.sort_mode
        <SortMode.NORMAL: 'normal'>
    """

    def __init__(
        self,
        source: SourceImage,
        settings: Optional[SlicerSettings] = None,
        *,
        history_limit: Optional[int] = None,
    ) -> None:
        self.settings = settings or SlicerSettings()
        self.source = source
        self.cells: CellList = self._generate(self.settings)
        self.history = HistoryStack(limit=history_limit)
        self.export_log = ExportLog()

    @classmethod
    def open(cls, path: Union[str, Path], settings: Optional[SlicerSettings] = None) -> "SlicerSession":
        """Decode an image file and start a session on it."""
        return cls(SourceImage.open(path), settings)

    # ─────────────────────────────────────────────────────────────────────────
    # Image lifecycle
    # ─────────────────────────────────────────────────────────────────────────

    def load_image(self, source: SourceImage) -> None:
        """Replace the source image; settings are kept, cells regenerated, history reset."""
        cells = self._generate(self.settings)
        self.source = source
        self.cells = cells
        self.history.clear()
        logger.info(f"Loaded {source.filename} ({source.width}x{source.height})")

    # ─────────────────────────────────────────────────────────────────────────
    # Mutations (each records one history entry)
    # ─────────────────────────────────────────────────────────────────────────

    def update_settings(self, description: Optional[str] = None, **changes: Any) -> bool:
        """
        Change settings fields.

        Rows, cols or sort mode changes regenerate the cells; a start id
        change only renumbers them (keeping any manual order); a font size
        change leaves them alone.

        Returns:
            False when nothing changed (no history entry), True otherwise.

        Raises:
            InvalidSettingsError: Invalid or unknown field value.
        """
        new_settings = self.settings.with_changes(**changes)
        if new_settings == self.settings:
            return False

        if new_settings.structure_changed(self.settings):
            new_cells = self._generate(new_settings)
        elif new_settings.start_id != self.settings.start_id:
            new_cells = renumber_cells(self.cells, new_settings.start_id)
        else:
            new_cells = self.cells

        self._commit(new_settings, new_cells, description or _describe_changes(self.settings, new_settings))
        return True

    def reorder_cells(self, order: Sequence[str], description: str = "Reorder cells") -> None:
        """
        Apply a manual order given as cell ids.

        Raises:
            InvalidSettingsError: order is not a permutation of the cell ids.
        """
        new_cells = reorder_cells(self.cells, order, self.settings.start_id)
        if new_cells == self.cells:
            return
        self._commit(self.settings, new_cells, description)

    def move_cell(self, old_index: int, new_index: int) -> None:
        """Move one cell (drag and drop) and renumber."""
        if old_index == new_index:
            return
        new_cells = move_cell(self.cells, old_index, new_index, self.settings.start_id)
        self._commit(self.settings, new_cells, f"Move cell {self.cells[old_index].id}")

    def apply_preset(self, preset: GridPreset) -> bool:
        """Set rows/cols from a preset."""
        return self.update_settings(
            description=f"Preset {preset.label}",
            rows=preset.rows,
            cols=preset.cols,
        )

    def auto_detect(self, sensitivity: int = DEFAULT_SENSITIVITY) -> GridDetection:
        """
        Detect rows/cols from the image and apply them.

        Raises:
            InvalidSettingsError: Sensitivity outside 1..10.
            RasterContextError: Pixel data unavailable.
        """
        detection = detect_grid(self.source, sensitivity)
        self.update_settings(
            description=f"Auto detect {detection.rows}×{detection.cols}",
            rows=detection.rows,
            cols=detection.cols,
        )
        return detection

    # ─────────────────────────────────────────────────────────────────────────
    # History navigation
    # ─────────────────────────────────────────────────────────────────────────

    def undo(self) -> bool:
        """Restore the previous state; False when there is nothing to undo."""
        entry = self.history.undo(self.settings, self.cells)
        if entry is None:
            return False
        self._restore(entry)
        return True

    def redo(self) -> bool:
        """Re-apply the next undone state; False when there is nothing to redo."""
        entry = self.history.redo(self.settings, self.cells)
        if entry is None:
            return False
        self._restore(entry)
        return True

    def jump_to(self, index: int) -> None:
        """Restore history.past[index]; later states become redo targets."""
        self._restore(self.history.jump_to(index, self.settings, self.cells))

    # ─────────────────────────────────────────────────────────────────────────
    # Export
    # ─────────────────────────────────────────────────────────────────────────

    def export(
        self,
        config: Optional[ExportConfig] = None,
        *,
        selection: Optional[Sequence[str]] = None,
        progress: Optional[ProgressCallback] = None,
        sink: Optional[ArtifactSink] = None,
        should_cancel: Optional[CancelCheck] = None,
    ) -> ExportResult:
        """Export the current cells and record the run in the export log."""
        result = export_slices(
            self.source,
            self.settings,
            self.cells,
            config,
            selection=selection,
            progress=progress,
            sink=sink,
            should_cancel=should_cancel,
        )
        self.export_log.add(ExportRecord.from_result(self.source.filename, self.settings, result))
        return result

    def apply_export_record(self, record_id: str) -> bool:
        """
        Re-apply the settings of an earlier export as one undoable change.

        Returns:
            False when the current settings already match.

        Raises:
            InvalidSettingsError: No export with this id in the log.
        """
        record = self.export_log.get(record_id)
        if record is None:
            raise InvalidSettingsError(f"Unknown export record: {record_id}")
        return self.update_settings(
            description=f"Restore {record.file_name}",
            **record.settings.to_dict(),
        )

    def export_cell(self, cell_id: str, config: Optional[ExportConfig] = None) -> ExportArtifact:
        """Export one cell by id."""
        return export_single(self.source, self.settings, self.cell(cell_id), config)

    def cell(self, cell_id: str) -> Cell:
        for cell in self.cells:
            if cell.id == cell_id:
                return cell
        raise InvalidSettingsError(f"Unknown cell id: {cell_id}")

    def snapshot(self) -> Dict[str, Any]:
        """Plain-dict view of the current state for display or persistence."""
        return {
            "file_name": self.source.filename,
            "size": list(self.source.size),
            "settings": self.settings.to_dict(),
            "cells": [cell.to_dict() for cell in self.cells],
            "can_undo": self.history.can_undo,
            "can_redo": self.history.can_redo,
        }

    # ─────────────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────────────

    @staticmethod
    def _generate(settings: SlicerSettings) -> CellList:
        return generate_cells(settings.rows, settings.cols, settings.start_id, settings.sort_mode)

    def _commit(self, settings: SlicerSettings, cells: CellList, description: str) -> None:
        self.history.push(self.settings, self.cells, description)
        self.settings = settings
        self.cells = cells
        logger.debug(f"{description} -> {settings.rows}x{settings.cols}, {len(cells)} cells")

    def _restore(self, entry: HistoryEntry) -> None:
        self.settings = entry.settings
        self.cells = entry.cells


def _describe_changes(old: SlicerSettings, new: SlicerSettings) -> str:
    """Human-readable summary such as "Rows: 4, Sort: snake-1"."""
    parts = []
    for name, label in _FIELD_LABELS.items():
        before, after = getattr(old, name), getattr(new, name)
        if before != after:
            value = after.value if hasattr(after, "value") else after
            parts.append(f"{label}: {value}")
    return ", ".join(parts)
