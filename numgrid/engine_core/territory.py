"""
Territory - Orphan pruning, scoring and game-over detection.

After a move, every tile the other player owns must still connect back to
that player's home row through tiles they own, using 8-directional
adjacency. Tiles that lost the connection revert to unowned.
"""

from __future__ import annotations
import logging

from .board import Board
from .state import Cell, CellId, Player

logger = logging.getLogger(__name__)


def connected_to_home(board: Board, player: Player) -> set[CellId]:
    """
    Ids of the player's tiles reachable from their home row.

    Seeds are the player's number tiles on the home row. The fill uses an
    explicit worklist, so board size never hits the recursion limit.
    """
    home_row = player.home_row(board.height)
    stack = [
        cell for cell in board.row(home_row)
        if cell.is_number and cell.owner == player
    ]
    visited: set[CellId] = set()

    while stack:
        cell = stack.pop()
        if cell.cell_id in visited:
            continue
        visited.add(cell.cell_id)

        for neighbor in board.neighbors8(cell):
            if neighbor.owner == player and neighbor.cell_id not in visited:
                stack.append(neighbor)

    return visited


def prune_orphans(board: Board, mover: Player) -> list[Cell]:
    """
    Reset the opponent's disconnected tiles to unowned.

    The mover's own tiles are never touched. Returns the cells that were
    reset, in board order.
    """
    opponent = mover.opponent
    reachable = connected_to_home(board, opponent)

    pruned = []
    for cell in board:
        if cell.owner == opponent and cell.cell_id not in reachable:
            cell.owner = None
            pruned.append(cell)

    if pruned:
        logger.debug(
            "Pruned %d orphaned tile(s) from player %d", len(pruned), int(opponent)
        )
    return pruned


def calculate_scores(board: Board) -> list[int]:
    """Count owned tiles per player with a full board scan."""
    scores = [0, 0]
    for cell in board:
        if cell.owner is not None:
            scores[cell.owner] += 1
    return scores


def is_game_over(board: Board) -> bool:
    """
    The game ends once either home row is breached: the second player owns
    a tile on the first row or the first player owns one on the last row.
    """
    first_row = board.row(Player.FIRST.home_row(board.height))
    last_row = board.row(Player.SECOND.home_row(board.height))

    if any(cell.owner == Player.SECOND for cell in first_row):
        return True
    return any(cell.owner == Player.FIRST for cell in last_row)
