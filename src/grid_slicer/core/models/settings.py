"""
Module: settings

Purpose:
    Provides SortMode and the SlicerSettings dataclass - the user-controlled
    grid dimensions, numbering start, label font size and traversal order.

Key Functions:
    - SlicerSettings.with_changes(**changes): Validated copy with new values
    - SlicerSettings.structure_changed(other): Whether cells must be regenerated
    - SlicerSettings.to_dict() / from_dict(data): Plain dict round trip

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - ordering.orderer
    - history.stack
    - export.exporter
    - session.SlicerSession
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Dict

from grid_slicer.core.errors import InvalidSettingsError


class SortMode(str, Enum):
    """Traversal pattern used to linearize the grid into an export sequence."""

    NORMAL = "normal"
    REVERSE = "reverse"
    VERTICAL = "vertical"
    VERTICAL_REVERSE = "vertical-reverse"
    SNAKE_1 = "snake-1"
    SNAKE_2 = "snake-2"

    @classmethod
    def parse(cls, value: "SortMode | str") -> "SortMode":
        """Coerce a wire string to a SortMode."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError as e:
            choices = ", ".join(m.value for m in cls)
            raise InvalidSettingsError(
                f"sort_mode must be one of {choices}: {value!r}"
            ) from e


@dataclass(frozen=True)
class SlicerSettings:
    """
    Grid slicing settings (immutable).

    Each change produces a new instance so history snapshots can share
    values safely.

    Attributes:
        rows: Number of grid rows (>= 1)
        cols: Number of grid columns (>= 1)
        start_id: Display id given to the first exported cell
        font_size: Label size in pixels when labels are burned in
        sort_mode: Traversal order for display ids

    Example:
        >>> s = SlicerSettings(rows=3, cols=4)
        >>> s.cell_count
        12
        >>> s.with_changes(start_id=0).start_id
        0
    """

    rows: int = 2
    cols: int = 2
    start_id: int = 1
    font_size: int = 24
    sort_mode: SortMode = SortMode.NORMAL

    def __post_init__(self) -> None:
        """Validate settings on construction."""
        for name in ("rows", "cols"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidSettingsError(f"{name} must be an integer: {value!r}")
            if value < 1:
                raise InvalidSettingsError(f"{name} must be >= 1: {value}")
        if isinstance(self.start_id, bool) or not isinstance(self.start_id, int):
            raise InvalidSettingsError(f"start_id must be an integer: {self.start_id!r}")
        if isinstance(self.font_size, bool) or not isinstance(self.font_size, (int, float)):
            raise InvalidSettingsError(f"font_size must be a number: {self.font_size!r}")
        if self.font_size <= 0:
            raise InvalidSettingsError(f"font_size must be positive: {self.font_size}")
        # Frozen: coerce wire strings through object.__setattr__
        object.__setattr__(self, "sort_mode", SortMode.parse(self.sort_mode))

    @property
    def cell_count(self) -> int:
        return self.rows * self.cols

    def with_changes(self, **changes: Any) -> "SlicerSettings":
        """
        Return a validated copy with the given fields replaced.

        Raises:
            InvalidSettingsError: Unknown field or invalid value.
        """
        known = {f.name for f in fields(self)}
        unknown = set(changes) - known
        if unknown:
            raise InvalidSettingsError(f"Unknown settings fields: {sorted(unknown)}")
        return replace(self, **changes)

    def structure_changed(self, other: "SlicerSettings") -> bool:
        """True when rows, cols or sort mode differ, i.e. cells must be regenerated."""
        return (
            self.rows != other.rows
            or self.cols != other.cols
            or self.sort_mode != other.sort_mode
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rows": self.rows,
            "cols": self.cols,
            "start_id": self.start_id,
            "font_size": self.font_size,
            "sort_mode": self.sort_mode.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SlicerSettings":
        """Build settings from a dict, falling back to defaults for missing keys."""
        defaults = cls()
        return cls(
            rows=data.get("rows", defaults.rows),
            cols=data.get("cols", defaults.cols),
            start_id=data.get("start_id", defaults.start_id),
            font_size=data.get("font_size", defaults.font_size),
            sort_mode=data.get("sort_mode", defaults.sort_mode),
        )
