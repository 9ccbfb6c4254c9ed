"""
Unit Tests for Cell Model

Tests for the structural id and renumbering of grid cells.
"""

import pytest

from grid_slicer.core.errors import InvalidSettingsError
from grid_slicer.core.models.cells import Cell


class TestCell:
    """Tests for Cell dataclass."""

    def test_id_when_created_then_encodes_row_and_col(self):
        assert Cell(row=3, col=11, display_id=1).id == "3-11"

    def test_init_when_negative_row_then_raises_error(self):
        with pytest.raises(InvalidSettingsError, match="row must be >= 0"):
            Cell(row=-1, col=0)

    def test_init_when_negative_col_then_raises_error(self):
        with pytest.raises(InvalidSettingsError, match="col must be >= 0"):
            Cell(row=0, col=-1)

    def test_with_display_id_when_called_then_keeps_structure(self):
        cell = Cell(row=1, col=2, display_id=3)
        renumbered = cell.with_display_id(9)
        assert renumbered.display_id == 9
        assert renumbered.position == (1, 2)
        assert renumbered.id == cell.id
        assert cell.display_id == 3

    def test_from_dict_when_round_trip_then_equal(self):
        cell = Cell(row=4, col=0, display_id=17)
        assert Cell.from_dict(cell.to_dict()) == cell

    def test_to_dict_includes_structural_id(self):
        assert Cell(row=0, col=1, display_id=2).to_dict()["id"] == "0-1"
