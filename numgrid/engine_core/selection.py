"""
Selection legality.

The first tile of a move must be one of the mover's own number tiles,
anywhere on the board. Every later tile must be orthogonally adjacent to
the most recently selected tile and not already selected. Once the
selection holds `move.size` tiles the mover did not already own, nothing
more can be added.
"""

from __future__ import annotations

from .board import Board
from .state import CellId, Move, Selection


def possible_selections(board: Board, selection: Selection, move: Move) -> set[CellId]:
    """Cell ids that are legal next choices."""
    if selection.is_empty:
        return {
            cell.cell_id
            for cell in board
            if cell.owner == move.player and cell.is_number
        }

    if len(selection.new_cells(move.player)) >= move.size:
        return set()

    return {
        cell.cell_id
        for cell in board.orthogonal_neighbors(selection.last)
        if not cell.selected
    }


def is_selection_valid(selection: Selection, move: Move) -> bool:
    """
    A selection is valid when it is non-empty, ends on a number and its
    total equals the move target.
    """
    if selection.is_empty:
        return False
    if not selection.last.is_number:
        return False
    return selection.total == move.target
