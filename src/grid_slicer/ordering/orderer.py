"""
Module: ordering.orderer

Purpose:
    Build and renumber the ordered cell list. ``generate_cells`` linearizes
    the grid under one of the six sort modes; ``renumber_cells`` keeps an
    existing (possibly hand-arranged) order and only reassigns display ids.

Key Functions:
    - generate_cells(): Fresh cell list for rows/cols/start id/sort mode
    - renumber_cells(): Reassign display ids, keep order
    - reorder_cells(): Apply a manual permutation by structural id
    - move_cell(): Single drag gesture (array move)
    - validate_cells(): Check the cell-list invariant

Dependencies:
    - core.models: Cell, SortMode

Used By:
    - session.SlicerSession
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Sequence, Tuple

from grid_slicer.core.errors import InvalidSettingsError
from grid_slicer.core.models import Cell, CellList, SortMode

SortKey = Callable[[Cell], Tuple[int, int]]


def _snake_key(even_left_to_right: bool) -> SortKey:
    def key(cell: Cell) -> Tuple[int, int]:
        left_to_right = (cell.row % 2 == 0) == even_left_to_right
        return (cell.row, cell.col if left_to_right else -cell.col)
    return key


# Ascending total orders over (row, col)
_SORT_KEYS: Dict[SortMode, SortKey] = {
    SortMode.NORMAL: lambda c: (c.row, c.col),
    SortMode.REVERSE: lambda c: (-c.row, -c.col),
    SortMode.VERTICAL: lambda c: (c.col, c.row),
    SortMode.VERTICAL_REVERSE: lambda c: (-c.col, -c.row),
    SortMode.SNAKE_1: _snake_key(even_left_to_right=True),
    SortMode.SNAKE_2: _snake_key(even_left_to_right=False),
}


def generate_cells(
    rows: int,
    cols: int,
    start_id: int = 1,
    sort_mode: SortMode | str = SortMode.NORMAL,
) -> CellList:
    """
    Generate the canonical ordered cell list.

    Args:
        rows: Grid rows (>= 1).
        cols: Grid columns (>= 1).
        start_id: Display id of the first cell.
        sort_mode: Traversal order.

    Returns:
        rows * cols cells with display ids start_id .. start_id + n - 1.

    Raises:
        InvalidSettingsError: rows or cols < 1, unknown sort mode.

    Example:
        >>> [c.display_id for c in generate_cells(2, 3, 1, "snake-1")]
        [1, 2, 3, 4, 5, 6]
        >>> [c.id for c in generate_cells(2, 3, 1, "snake-1")]
        ['0-0', '0-1', '0-2', '1-2', '1-1', '1-0']
    """
    if rows < 1 or cols < 1:
        raise InvalidSettingsError(f"rows and cols must be >= 1: {rows}x{cols}")
    mode = SortMode.parse(sort_mode)

    base = [Cell(row=r, col=c) for r in range(rows) for c in range(cols)]
    ordered = sorted(base, key=_SORT_KEYS[mode])
    return renumber_cells(ordered, start_id)


def renumber_cells(cells: Iterable[Cell], start_id: int) -> CellList:
    """Assign display_id = start_id + position, keeping order and (row, col)."""
    return tuple(cell.with_display_id(start_id + i) for i, cell in enumerate(cells))


def reorder_cells(cells: Sequence[Cell], new_order: Sequence[str], start_id: int) -> CellList:
    """
    Apply a manual permutation given as structural ids.

    Args:
        cells: Current cell list.
        new_order: Every cell id exactly once, in the desired export order.
        start_id: Display id of the first cell.

    Raises:
        InvalidSettingsError: new_order is not a permutation of the cell ids.
    """
    by_id = {cell.id: cell for cell in cells}
    if len(new_order) != len(by_id) or set(new_order) != set(by_id):
        missing = sorted(set(by_id) - set(new_order))
        extra = sorted(set(new_order) - set(by_id))
        raise InvalidSettingsError(
            f"Order must list every cell exactly once (missing={missing}, unknown={extra})"
        )
    return renumber_cells((by_id[cell_id] for cell_id in new_order), start_id)


def move_cell(cells: Sequence[Cell], old_index: int, new_index: int, start_id: int) -> CellList:
    """
    Move one cell to a new position and renumber.

    Raises:
        IndexError: Either index outside the list.
    """
    size = len(cells)
    if not (0 <= old_index < size and 0 <= new_index < size):
        raise IndexError(f"Cell index out of range: {old_index} -> {new_index} (size {size})")
    moved: List[Cell] = list(cells)
    moved.insert(new_index, moved.pop(old_index))
    return renumber_cells(moved, start_id)


def validate_cells(cells: Sequence[Cell], rows: int, cols: int, start_id: int) -> None:
    """
    Check that cells cover the rows x cols grid once each with contiguous ids.

    Raises:
        InvalidSettingsError: Invariant violated.
    """
    expected = {(r, c) for r in range(rows) for c in range(cols)}
    positions = [cell.position for cell in cells]
    if len(positions) != len(expected) or set(positions) != expected:
        raise InvalidSettingsError(
            f"Cells do not cover a {rows}x{cols} grid exactly once ({len(positions)} cells)"
        )
    display_ids = [cell.display_id for cell in cells]
    if display_ids != list(range(start_id, start_id + len(cells))):
        raise InvalidSettingsError(
            f"Display ids must run contiguously from {start_id} in list order"
        )
