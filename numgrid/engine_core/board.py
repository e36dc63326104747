"""
Board - Grid generation and geometry.

Number and operator tiles alternate in both directions: a tile is a
number iff exactly one of (row even), (col even) holds. Number tiles on
the first row start owned by Player.FIRST, those on the last row by
Player.SECOND.
"""

from __future__ import annotations
from typing import Iterator, TYPE_CHECKING

from .state import Cell, CellId, Operator, Player, Symbol
from .dice import DicePool, RandomSource

if TYPE_CHECKING:
    from ..settings import GameSettings


ORTHOGONAL_OFFSETS = ((-1, 0), (1, 0), (0, -1), (0, 1))
DIAGONAL_OFFSETS = ((-1, -1), (1, 1), (-1, 1), (1, -1))
ALL_OFFSETS = ORTHOGONAL_OFFSETS + DIAGONAL_OFFSETS

OPERATORS = (Operator.ADD, Operator.SUBTRACT, Operator.MULTIPLY)


def is_number_cell(row: int, col: int) -> bool:
    return (row % 2 == 0) != (col % 2 == 0)


class Board:
    """
    A fixed height x width grid of cells.

    Cells are never added, removed or replaced once the board exists.
    """

    def __init__(self, rows: list[list[Cell]]):
        self._rows = rows

    @property
    def height(self) -> int:
        return len(self._rows)

    @property
    def width(self) -> int:
        return len(self._rows[0]) if self._rows else 0

    @property
    def rows(self) -> list[list[Cell]]:
        return self._rows

    def row(self, index: int) -> list[Cell]:
        return self._rows[index]

    def cell(self, row: int, col: int) -> Cell | None:
        """Get the cell at (row, col), or None when off the board."""
        if 0 <= row < self.height and 0 <= col < self.width:
            return self._rows[row][col]
        return None

    def __getitem__(self, cell_id: CellId) -> Cell:
        cell = self.cell(*cell_id)
        if cell is None:
            raise KeyError(cell_id)
        return cell

    def __iter__(self) -> Iterator[Cell]:
        for row in self._rows:
            yield from row

    def orthogonal_neighbors(self, cell: Cell) -> Iterator[Cell]:
        yield from self._offset_neighbors(cell, ORTHOGONAL_OFFSETS)

    def neighbors8(self, cell: Cell) -> Iterator[Cell]:
        """Orthogonal and diagonal neighbors."""
        yield from self._offset_neighbors(cell, ALL_OFFSETS)

    def _offset_neighbors(self, cell: Cell, offsets) -> Iterator[Cell]:
        for dr, dc in offsets:
            neighbor = self.cell(cell.row + dr, cell.col + dc)
            if neighbor is not None:
                yield neighbor

    def owned_by(self, player: Player) -> list[Cell]:
        return [cell for cell in self if cell.owner == player]


def roll_symbol(row: int, col: int, board_pool: DicePool, rng: RandomSource) -> Symbol:
    if is_number_cell(row, col):
        return board_pool.roll(rng)
    return OPERATORS[rng.randint(0, len(OPERATORS) - 1)]


def generate_board(settings: GameSettings, rng: RandomSource) -> Board:
    """
    Generate a fresh board.

    Tiles are rolled in row-major order, so the same rng state always
    yields the same board.
    """
    board_pool = settings.board_pool
    last_row = settings.height - 1
    rows: list[list[Cell]] = []

    for row in range(settings.height):
        cells = []
        for col in range(settings.width):
            symbol = roll_symbol(row, col, board_pool, rng)
            owner = None
            if not isinstance(symbol, Operator):
                # A single-row board belongs to the first player
                if row == 0:
                    owner = Player.FIRST
                elif row == last_row:
                    owner = Player.SECOND
            cells.append(Cell(row=row, col=col, symbol=symbol, owner=owner))
        rows.append(cells)

    return Board(rows)
