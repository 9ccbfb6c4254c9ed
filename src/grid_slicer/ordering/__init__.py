"""
Module: ordering

Purpose:
    Cell list generation under the six traversal orders, renumbering and
    manual reordering.
"""

from .orderer import generate_cells, move_cell, renumber_cells, reorder_cells, validate_cells

__all__ = [
    "generate_cells",
    "move_cell",
    "renumber_cells",
    "reorder_cells",
    "validate_cells",
]
