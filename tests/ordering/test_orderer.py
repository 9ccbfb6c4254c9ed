"""
Unit Tests for Cell Ordering

Tests for the six sort modes, renumbering and manual reordering.
"""

import pytest

from grid_slicer.core.errors import InvalidSettingsError
from grid_slicer.core.models import Cell, SortMode
from grid_slicer.ordering import (
    generate_cells,
    move_cell,
    renumber_cells,
    reorder_cells,
    validate_cells,
)


def _ids(cells):
    return [cell.id for cell in cells]


def _grid_of_display_ids(cells, rows, cols):
    """display_id laid out by (row, col) for readable assertions."""
    grid = [[0] * cols for _ in range(rows)]
    for cell in cells:
        grid[cell.row][cell.col] = cell.display_id
    return grid


# ─────────────────────────────────────────────────────────────────────────────
# generate_cells
# ─────────────────────────────────────────────────────────────────────────────


class TestGenerateCells:
    """Tests for generate_cells()."""

    def test_normal_2x2(self):
        cells = generate_cells(2, 2, 1, SortMode.NORMAL)
        assert _ids(cells) == ["0-0", "0-1", "1-0", "1-1"]
        assert [c.display_id for c in cells] == [1, 2, 3, 4]

    def test_reverse_2x2(self):
        cells = generate_cells(2, 2, 1, SortMode.REVERSE)
        assert _ids(cells) == ["1-1", "1-0", "0-1", "0-0"]

    def test_vertical_2x3(self):
        cells = generate_cells(2, 3, 1, SortMode.VERTICAL)
        assert _grid_of_display_ids(cells, 2, 3) == [[1, 3, 5], [2, 4, 6]]

    def test_vertical_reverse_2x3(self):
        cells = generate_cells(2, 3, 1, SortMode.VERTICAL_REVERSE)
        assert _grid_of_display_ids(cells, 2, 3) == [[6, 4, 2], [5, 3, 1]]

    def test_snake_1_2x3(self):
        cells = generate_cells(2, 3, 1, SortMode.SNAKE_1)
        assert _grid_of_display_ids(cells, 2, 3) == [[1, 2, 3], [6, 5, 4]]

    def test_snake_2_3x2(self):
        cells = generate_cells(3, 2, 1, SortMode.SNAKE_2)
        assert _grid_of_display_ids(cells, 3, 2) == [[2, 1], [3, 4], [6, 5]]

    def test_accepts_wire_string_sort_mode(self):
        assert generate_cells(2, 3, 1, "snake-1") == generate_cells(2, 3, 1, SortMode.SNAKE_1)

    def test_start_id_offsets_every_display_id(self):
        cells = generate_cells(2, 2, start_id=0)
        assert [c.display_id for c in cells] == [0, 1, 2, 3]

    @pytest.mark.parametrize("mode", list(SortMode))
    @pytest.mark.parametrize("rows,cols", [(1, 1), (1, 5), (4, 1), (3, 4), (5, 5)])
    def test_every_mode_covers_grid_with_contiguous_ids(self, mode, rows, cols):
        cells = generate_cells(rows, cols, 7, mode)
        validate_cells(cells, rows, cols, 7)

    def test_when_zero_rows_then_raises_error(self):
        with pytest.raises(InvalidSettingsError):
            generate_cells(0, 3)

    def test_when_unknown_sort_mode_then_raises_error(self):
        with pytest.raises(InvalidSettingsError, match="sort_mode"):
            generate_cells(2, 2, 1, "diagonal")


# ─────────────────────────────────────────────────────────────────────────────
# renumber / reorder / move
# ─────────────────────────────────────────────────────────────────────────────


class TestRenumberCells:
    """Tests for renumber_cells()."""

    def test_keeps_order_and_positions(self):
        cells = [Cell(1, 1, 9), Cell(0, 0, 3), Cell(0, 1, 4)]
        renumbered = renumber_cells(cells, start_id=10)
        assert _ids(renumbered) == ["1-1", "0-0", "0-1"]
        assert [c.display_id for c in renumbered] == [10, 11, 12]


class TestReorderCells:
    """Tests for reorder_cells()."""

    def test_applies_permutation_and_renumbers(self):
        cells = generate_cells(2, 2)
        reordered = reorder_cells(cells, ["1-1", "0-0", "1-0", "0-1"], start_id=1)
        assert _ids(reordered) == ["1-1", "0-0", "1-0", "0-1"]
        assert [c.display_id for c in reordered] == [1, 2, 3, 4]

    def test_when_id_missing_then_raises_error(self):
        with pytest.raises(InvalidSettingsError, match="missing"):
            reorder_cells(generate_cells(2, 2), ["0-0", "0-1", "1-0"], 1)

    def test_when_id_duplicated_then_raises_error(self):
        with pytest.raises(InvalidSettingsError):
            reorder_cells(generate_cells(2, 2), ["0-0", "0-0", "1-0", "1-1"], 1)

    def test_when_unknown_id_then_raises_error(self):
        with pytest.raises(InvalidSettingsError, match="unknown"):
            reorder_cells(generate_cells(2, 2), ["0-0", "0-1", "1-0", "9-9"], 1)


class TestMoveCell:
    """Tests for move_cell()."""

    def test_moves_cell_and_renumbers(self):
        cells = generate_cells(1, 4)
        moved = move_cell(cells, 0, 2, start_id=1)
        assert _ids(moved) == ["0-1", "0-2", "0-0", "0-3"]
        validate_cells(moved, 1, 4, 1)

    def test_when_index_out_of_range_then_raises_index_error(self):
        with pytest.raises(IndexError):
            move_cell(generate_cells(1, 4), 0, 4, start_id=1)


class TestValidateCells:
    """Tests for validate_cells()."""

    def test_when_gap_in_display_ids_then_raises_error(self):
        cells = [Cell(0, 0, 1), Cell(0, 1, 3)]
        with pytest.raises(InvalidSettingsError, match="contiguously"):
            validate_cells(cells, 1, 2, 1)

    def test_when_position_missing_then_raises_error(self):
        cells = [Cell(0, 0, 1), Cell(0, 0, 2)]
        with pytest.raises(InvalidSettingsError, match="exactly once"):
            validate_cells(cells, 1, 2, 1)
