"""
Game - The command-driven engine.

A Game owns the board, the current move, the in-progress selection and
the scores. Commands mutate it in place and run to completion; callers
that need to compare before/after take a snapshot().

Illegal commands are silent no-ops. Every command returns True when it
changed state and False otherwise, so shells can gate their affordances
on the legality queries and still tell what happened.
"""

from __future__ import annotations
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Mapping
import logging
import random

from ..settings import GameSettings, merge_with_defaults
from .board import Board, generate_board
from .dice import RandomSource
from .expression import evaluate, format_expression
from .selection import possible_selections, is_selection_valid
from .state import Cell, CellId, GamePhase, Move, Player, Selection, winner_from_scores
from .territory import calculate_scores, is_game_over, prune_orphans

logger = logging.getLogger(__name__)

PLAYER_COUNT = 2


@dataclass
class MoveRecord:
    """What a resolved move did. Kept for display, not for undo."""
    move: Move
    passed: bool = False
    expression: str = ""
    claimed: list[CellId] = field(default_factory=list)
    pruned: list[CellId] = field(default_factory=list)


class Game:
    """
    Two-player territory game on a board of number and operator tiles.

    Usage:
        game = Game(rng=random.Random(7))
        game.select_cell(0, 1)
        if game.is_selection_valid:
            game.confirm_move()
    """

    def __init__(
        self,
        settings: GameSettings | Mapping[str, Any] | None = None,
        rng: RandomSource | None = None,
    ):
        self.settings = merge_with_defaults(settings)
        self.rng = rng if rng is not None else random.Random()
        self.player_count = PLAYER_COUNT
        self.move_count = 0
        self.phase = GamePhase.PLAYING
        self.move_history: list[MoveRecord] = []

        self._move_length_pool = self.settings.move_length_pool
        self._move_total_pool = self.settings.move_total_pool

        self.current_move: Move = self._next_move()
        self.current_selection = Selection()
        self.is_selection_valid = False

        self.board: Board = generate_board(self.settings, self.rng)
        self.current_scores = calculate_scores(self.board)
        self.possible_selections: set[CellId] = self._possible_selections()

        logger.debug(
            "New %dx%d game, player %d moves first",
            self.settings.width, self.settings.height, int(self.current_move.player),
        )

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def is_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def winner(self) -> Player | None:
        """Winner by score once the game is over; None while playing or on a draw."""
        if not self.is_over:
            return None
        return winner_from_scores(self.current_scores)

    @property
    def is_draw(self) -> bool:
        return self.is_over and self.current_scores[0] == self.current_scores[1]

    @property
    def expression(self) -> str:
        return format_expression(self.current_selection.cells)

    def cell(self, row: int, col: int) -> Cell | None:
        return self.board.cell(row, col)

    def is_selected(self, row: int, col: int) -> bool:
        cell = self.board.cell(row, col)
        return cell.selected if cell else False

    def is_possible(self, row: int, col: int) -> bool:
        return (row, col) in self.possible_selections

    def new_selected_cells(self) -> list[Cell]:
        """Selected cells the mover does not already own."""
        return self.current_selection.new_cells(self.current_move.player)

    def player_name(self, player: Player) -> str:
        return self.settings.player_names[player]

    def snapshot(self) -> Game:
        """
        Independent deep copy for observers; mutating it never affects this game.

        The rng is shared with the snapshot, not copied.
        """
        return deepcopy(self, {id(self.rng): self.rng})

    # =========================================================================
    # Commands
    # =========================================================================

    def select_cell(self, row: int, col: int) -> bool:
        """Append a legal cell to the selection."""
        cell = self.board.cell(row, col)
        if cell is None or cell.cell_id not in self.possible_selections:
            return False

        if len(self.new_selected_cells()) >= self.current_move.size:
            return False

        cell.selected = True
        self.current_selection.cells.append(cell)
        self._selection_changed()
        return True

    def deselect_cell(self, row: int, col: int) -> bool:
        """Remove a selected cell and every cell selected after it."""
        cells = self.current_selection.cells
        index = next(
            (i for i, cell in enumerate(cells) if cell.row == row and cell.col == col),
            None,
        )
        if index is None:
            return False

        for cell in cells[index:]:
            cell.selected = False
        self.current_selection.cells = cells[:index]
        self._selection_changed()
        return True

    def reset_selection(self) -> bool:
        """Clear the whole selection."""
        if self.is_over:
            return False
        self._clear_selection()
        return True

    def pass_move(self) -> bool:
        """
        Give up the current move without claiming anything.

        Asking the user to confirm is the shell's job.
        """
        if self.is_over:
            return False

        passed = self.current_move
        self.move_history.append(MoveRecord(move=passed, passed=True))
        self.current_move = self._next_move()
        self._clear_selection()

        logger.info("Player %d passed move %d", int(passed.player), passed.number)
        return True

    def confirm_move(self) -> bool:
        """Claim the selected cells if the selection is valid."""
        if self.is_over or not self.is_selection_valid:
            return False

        move = self.current_move
        selected = list(self.current_selection.cells)
        record = MoveRecord(
            move=move,
            expression=self.expression,
            claimed=[cell.cell_id for cell in selected if cell.owner != move.player],
        )

        for cell in selected:
            cell.owner = move.player
            cell.selected = False

        pruned = prune_orphans(self.board, move.player)
        record.pruned = [cell.cell_id for cell in pruned]
        self.current_scores = calculate_scores(self.board)
        self.move_history.append(record)

        logger.info(
            "Player %d confirmed move %d: %s = %d, claimed %d, pruned %d",
            int(move.player), move.number, record.expression, move.target,
            len(record.claimed), len(record.pruned),
        )

        self.current_move = self._next_move()
        self._clear_selection()
        self._check_if_over()
        return True

    # =========================================================================
    # Internals
    # =========================================================================

    def _next_move(self) -> Move:
        if self.move_count == 0:
            player = Player(self.rng.randint(0, PLAYER_COUNT - 1))
        else:
            player = self.current_move.player.opponent

        size = self._move_length_pool.roll(self.rng)
        target = self._move_total_pool.roll(self.rng)

        move = Move(number=self.move_count, player=player, size=size, target=target)
        self.move_count += 1
        return move

    def _selection_changed(self):
        self.current_selection.total = evaluate(self.current_selection.cells)
        self.possible_selections = self._possible_selections()
        self.is_selection_valid = is_selection_valid(
            self.current_selection, self.current_move
        )

    def _clear_selection(self):
        self.current_selection.clear()
        self._selection_changed()

    def _possible_selections(self) -> set[CellId]:
        return possible_selections(self.board, self.current_selection, self.current_move)

    def _check_if_over(self):
        if not is_game_over(self.board):
            return

        self.phase = GamePhase.GAME_OVER
        self.possible_selections = set()

        winner = self.winner
        if winner is None:
            logger.info("Game over: draw at %s", self.current_scores)
        else:
            logger.info("Game over: player %d wins %s", int(winner), self.current_scores)
