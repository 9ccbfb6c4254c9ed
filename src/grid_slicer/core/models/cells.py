"""
Module: cells

Purpose:
    Provides the Cell dataclass - one rectangular sub-region of the source
    image addressed by its fixed (row, col) grid coordinate, plus the
    display id it exports under.

Dependencies:
    - dataclasses (std)

Used By:
    - ordering.orderer
    - history.stack
    - export.cropper
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Tuple

from grid_slicer.core.errors import InvalidSettingsError


@dataclass(frozen=True, slots=True)
class Cell:
    """
    Grid cell with a stable structural key.

    ``row`` and ``col`` are source-grid coordinates and are never
    renumbered; ``display_id`` changes whenever ordering or start id do.

    Attributes:
        row: Source row index (0-based)
        col: Source column index (0-based)
        display_id: Export sequence number

    Example:
        >>> cell = Cell(row=1, col=2, display_id=6)
        >>> cell.id
        '1-2'
    """

    row: int
    col: int
    display_id: int = 0

    def __post_init__(self) -> None:
        if self.row < 0:
            raise InvalidSettingsError(f"row must be >= 0: {self.row}")
        if self.col < 0:
            raise InvalidSettingsError(f"col must be >= 0: {self.col}")

    @property
    def id(self) -> str:
        """Structural key, invariant under reordering."""
        return f"{self.row}-{self.col}"

    @property
    def position(self) -> Tuple[int, int]:
        return (self.row, self.col)

    def with_display_id(self, display_id: int) -> "Cell":
        return replace(self, display_id=display_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "row": self.row,
            "col": self.col,
            "display_id": self.display_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Cell":
        return cls(
            row=int(data["row"]),
            col=int(data["col"]),
            display_id=int(data.get("display_id", 0)),
        )


# Ordered cells; position 0 exports first
CellList = Tuple[Cell, ...]
