"""
Module: presets

Purpose:
    Named grid-size shortcuts. A GridPreset only ever feeds rows/cols into
    the settings; the store keeps user order and refuses duplicates.
    Persisting the list is left to the caller (to_list / from_list).

Key Classes:
    - GridPreset: Immutable (id, rows, cols)
    - GridPresetStore: Ordered, user-managed preset list
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional

from grid_slicer.core.errors import InvalidSettingsError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GridPreset:
    """Grid dimensions saved for reuse."""

    id: str
    rows: int
    cols: int

    def __post_init__(self) -> None:
        if self.rows < 1 or self.cols < 1:
            raise InvalidSettingsError(
                f"preset rows/cols must be >= 1: {self.rows}x{self.cols}"
            )

    @property
    def label(self) -> str:
        return f"{self.rows}×{self.cols}"

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "rows": self.rows, "cols": self.cols}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GridPreset":
        return cls(id=str(data["id"]), rows=int(data["rows"]), cols=int(data["cols"]))


class GridPresetStore:
    """
    Ordered collection of grid presets.

    Example:
        >>> store = GridPresetStore()
        >>> p = store.add(3, 3)
        >>> store.find(3, 3) == p
        True
    """

    def __init__(self, presets: Optional[List[GridPreset]] = None) -> None:
        self._presets: List[GridPreset] = list(presets or [])

    def __iter__(self) -> Iterator[GridPreset]:
        return iter(self._presets)

    def __len__(self) -> int:
        return len(self._presets)

    def find(self, rows: int, cols: int) -> Optional[GridPreset]:
        for preset in self._presets:
            if preset.rows == rows and preset.cols == cols:
                return preset
        return None

    def add(self, rows: int, cols: int) -> GridPreset:
        """
        Append a preset for rows x cols.

        Raises:
            InvalidSettingsError: A preset with these dimensions exists.
        """
        if self.find(rows, cols) is not None:
            raise InvalidSettingsError(f"Preset {rows}×{cols} already exists")
        preset = GridPreset(id=uuid.uuid4().hex, rows=rows, cols=cols)
        self._presets.append(preset)
        logger.debug(f"Added grid preset {preset.label}")
        return preset

    def delete(self, preset_id: str) -> None:
        """Remove a preset; unknown ids raise KeyError."""
        for i, preset in enumerate(self._presets):
            if preset.id == preset_id:
                del self._presets[i]
                return
        raise KeyError(f"Unknown preset id: {preset_id}")

    def move(self, old_index: int, new_index: int) -> None:
        """Move one preset to a new position (drag reorder)."""
        if not (0 <= old_index < len(self._presets) and 0 <= new_index < len(self._presets)):
            raise IndexError(f"Preset index out of range: {old_index} -> {new_index}")
        preset = self._presets.pop(old_index)
        self._presets.insert(new_index, preset)

    def to_list(self) -> List[Dict[str, Any]]:
        return [p.to_dict() for p in self._presets]

    @classmethod
    def from_list(cls, data: List[Dict[str, Any]]) -> "GridPresetStore":
        return cls([GridPreset.from_dict(item) for item in data])
