"""
Module: export.records

Purpose:
    In-memory log of recent exports (file, settings, cell count) so a
    caller can list earlier slicing runs and re-apply one through
    SlicerSession.apply_export_record. Newest first, capped.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional, Tuple

from grid_slicer.common.thresholds import ExportThresholds
from grid_slicer.core.models import SlicerSettings

from .models import ExportMode, ExportResult


@dataclass(frozen=True)
class ExportRecord:
    """One completed export."""
    file_name: str
    settings: SlicerSettings
    mode: ExportMode
    cell_count: int
    artifact_names: Tuple[str, ...]
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: datetime = field(default_factory=datetime.now)

    @classmethod
    def from_result(cls, file_name: str, settings: SlicerSettings, result: ExportResult) -> "ExportRecord":
        return cls(
            file_name=file_name,
            settings=settings,
            mode=result.mode,
            cell_count=result.cell_count,
            artifact_names=tuple(a.filename for a in result.artifacts),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp.isoformat(),
            "file_name": self.file_name,
            "settings": self.settings.to_dict(),
            "mode": self.mode.value,
            "cell_count": self.cell_count,
            "artifact_names": list(self.artifact_names),
        }


class ExportLog:
    """Recent exports, newest first."""

    def __init__(self, limit: int = ExportThresholds().export_log_limit) -> None:
        self.limit = limit
        self._records: List[ExportRecord] = []

    def __iter__(self) -> Iterator[ExportRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def add(self, record: ExportRecord) -> None:
        self._records.insert(0, record)
        del self._records[self.limit:]

    def get(self, record_id: str) -> Optional[ExportRecord]:
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    def clear(self) -> None:
        self._records.clear()
