"""
Game State - Cells, moves and the in-progress selection.

Design principles:
- Cells are created once by board generation and never moved
- Only `owner` and `selected` change after generation
- Derived values (scores, legal selections) are recomputed, never patched
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Union


CellId = tuple[int, int]


class GamePhase(Enum):
    """High-level game phases."""
    PLAYING = "playing"
    GAME_OVER = "game_over"


class Player(IntEnum):
    """The two seats. Values double as score indexes."""
    FIRST = 0
    SECOND = 1

    @property
    def opponent(self) -> Player:
        return Player.SECOND if self is Player.FIRST else Player.FIRST

    def home_row(self, height: int) -> int:
        """Row this player starts from: top for FIRST, bottom for SECOND."""
        return 0 if self is Player.FIRST else height - 1


class Operator(str, Enum):
    """Operator tiles."""
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"

    def apply(self, left: int, right: int) -> int:
        if self is Operator.ADD:
            return left + right
        if self is Operator.SUBTRACT:
            return left - right
        return left * right

    def __str__(self) -> str:
        return self.value


Symbol = Union[int, Operator]


@dataclass(eq=False)
class Cell:
    """
    A single board tile.

    Identity is by position: two Cell objects are the same tile only if
    they are the same object on the same board.
    """
    row: int
    col: int
    symbol: Symbol
    owner: Player | None = None
    selected: bool = False

    @property
    def cell_id(self) -> CellId:
        return (self.row, self.col)

    @property
    def key(self) -> str:
        """String form of the id, "row,col"."""
        return f"{self.row},{self.col}"

    @property
    def is_number(self) -> bool:
        return not isinstance(self.symbol, Operator)

    def __repr__(self) -> str:
        owner = "-" if self.owner is None else int(self.owner)
        return f"Cell({self.row},{self.col} {self.symbol} owner={owner})"


@dataclass
class Move:
    """One player's turn and the constraints rolled for it."""
    number: int
    player: Player
    size: int  # Max newly claimed tiles
    target: int  # Value the expression must reach


@dataclass
class Selection:
    """
    Cells chosen so far during the current move.

    Order matters: the cells form a path read as an expression.
    """
    cells: list[Cell] = field(default_factory=list)
    total: int = 0

    @property
    def is_empty(self) -> bool:
        return len(self.cells) == 0

    @property
    def last(self) -> Cell | None:
        return self.cells[-1] if self.cells else None

    def new_cells(self, player: Player) -> list[Cell]:
        """Cells in the selection that the player does not already own."""
        return [cell for cell in self.cells if cell.owner != player]

    def cell_ids(self) -> list[CellId]:
        return [cell.cell_id for cell in self.cells]

    def clear(self):
        """Drop every cell, clearing their selected flags."""
        for cell in self.cells:
            cell.selected = False
        self.cells = []
        self.total = 0


def winner_from_scores(scores: list[int]) -> Player | None:
    """Higher score wins; equal scores is a draw (None)."""
    if scores[Player.FIRST] > scores[Player.SECOND]:
        return Player.FIRST
    if scores[Player.SECOND] > scores[Player.FIRST]:
        return Player.SECOND
    return None
