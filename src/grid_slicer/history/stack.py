"""
Module: history.stack

Purpose:
    Linear undo/redo over (settings, cells) snapshots, modelled as two
    stacks. ``past`` runs oldest to newest; ``future`` runs nearest redo
    first. Only push() clears the future; undo, redo and jump_to move
    entries between the stacks.

    Each entry records the state *before* the operation named by its
    description. When an entry moves to the other stack it keeps the name
    of the operation separating it from its neighbour, so a jump list reads
    the same after an undo.

Key Classes:
    - HistoryEntry: Immutable snapshot with description and timestamp
    - HistoryStack: The past/future pair

Dependencies:
    - datetime (std)
    - core.models: SlicerSettings, Cell

Used By:
    - session.SlicerSession
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from grid_slicer.core.models import Cell, CellList, SlicerSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryEntry:
    """
    Snapshot of session state (immutable).

    Attributes:
        settings: Settings at snapshot time
        cells: Ordered cells at snapshot time
        description: Operation that followed this state, e.g. "Rows: 4"
        timestamp: When the snapshot was taken
    """
    settings: SlicerSettings
    cells: CellList
    description: str = ""
    timestamp: datetime = field(default_factory=datetime.now)

    @classmethod
    def capture(
        cls,
        settings: SlicerSettings,
        cells: Sequence[Cell],
        description: str = "",
    ) -> "HistoryEntry":
        return cls(settings=settings, cells=tuple(cells), description=description)


class HistoryStack:
    """
    Two-stack undo/redo history.

    The caller owns the current state and passes it in; the stack returns
    the entry to restore.

    Args:
        limit: Maximum past entries kept; None keeps everything.

    Example:
        >>> history = HistoryStack()
        >>> history.push(settings, cells, "Rows: 3")
        >>> entry = history.undo(new_settings, new_cells)
        >>> entry.settings == settings
        True
    """

    def __init__(self, limit: Optional[int] = None) -> None:
        if limit is not None and limit < 1:
            raise ValueError(f"limit must be >= 1: {limit}")
        self.limit = limit
        self._past: List[HistoryEntry] = []
        self._future: List[HistoryEntry] = []

    # ─────────────────────────────────────────────────────────────────────────
    # Views
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def past(self) -> Tuple[HistoryEntry, ...]:
        """Older states, oldest first."""
        return tuple(self._past)

    @property
    def future(self) -> Tuple[HistoryEntry, ...]:
        """Undone states, nearest redo first."""
        return tuple(self._future)

    @property
    def can_undo(self) -> bool:
        return bool(self._past)

    @property
    def can_redo(self) -> bool:
        return bool(self._future)

    def entries(self) -> Tuple[HistoryEntry, ...]:
        """Jump list: past entries (oldest first), then undone entries in redo order."""
        return tuple(self._past) + tuple(self._future)

    def __len__(self) -> int:
        return len(self._past) + len(self._future)

    # ─────────────────────────────────────────────────────────────────────────
    # Transitions
    # ─────────────────────────────────────────────────────────────────────────

    def push(self, settings: SlicerSettings, cells: Sequence[Cell], description: str) -> HistoryEntry:
        """
        Record the state prior to a mutation and discard the redo branch.

        Call once per mutating operation, before applying it.
        """
        entry = HistoryEntry.capture(settings, cells, description)
        self._past.append(entry)
        self._future.clear()
        if self.limit is not None and len(self._past) > self.limit:
            dropped = len(self._past) - self.limit
            del self._past[:dropped]
            logger.debug(f"History limit {self.limit} reached, dropped {dropped} oldest entries")
        logger.debug(f"History push: {description!r} (past={len(self._past)})")
        return entry

    def undo(self, settings: SlicerSettings, cells: Sequence[Cell]) -> Optional[HistoryEntry]:
        """
        Step back one state.

        Returns:
            Entry to restore as current, or None when there is nothing to undo.
        """
        if not self._past:
            return None
        entry = self._past.pop()
        self._future.insert(0, HistoryEntry.capture(settings, cells, entry.description))
        logger.debug(f"Undo: {entry.description!r}")
        return entry

    def redo(self, settings: SlicerSettings, cells: Sequence[Cell]) -> Optional[HistoryEntry]:
        """
        Step forward one state.

        Returns:
            Entry to restore as current, or None when there is nothing to redo.
        """
        if not self._future:
            return None
        entry = self._future.pop(0)
        self._past.append(HistoryEntry.capture(settings, cells, entry.description))
        logger.debug(f"Redo: {entry.description!r}")
        return entry

    def jump_to(self, index: int, settings: SlicerSettings, cells: Sequence[Cell]) -> HistoryEntry:
        """
        Restore past[index]; later past entries and the current state become redo targets.

        After the jump, past is past[:index] and future starts with the state
        that immediately followed past[index].

        Raises:
            IndexError: index outside 0 <= index < len(past).
        """
        if not 0 <= index < len(self._past):
            raise IndexError(f"History index out of range: {index} (past={len(self._past)})")

        target = self._past[index]
        following = self._past[index + 1:]
        current = HistoryEntry.capture(settings, cells)

        # Each moved state is reached by redoing the operation recorded just before it
        later_states = following + [current]
        preceding = self._past[index:]
        moved = [
            replace(state, description=prev.description)
            for state, prev in zip(later_states, preceding)
        ]

        self._past = self._past[:index]
        self._future = moved + self._future
        logger.debug(f"Jump to history index {index}: {target.description!r}")
        return target

    def clear(self) -> None:
        self._past.clear()
        self._future.clear()
