"""
Reducer - Applies actions to a game.

The reducer is the single entry point shells use to drive the engine.
It dispatches one command, then hands back a snapshot so observers never
hold a reference to engine-owned cells.

Design principles:
- Validates the action shape before dispatching
- Illegal commands leave the game untouched and report NO_OP
- Returns ActionResult with success/failure
"""

from __future__ import annotations
from dataclasses import dataclass
import logging

from .action import Action, ActionResult, ActionType, CELL_ACTIONS
from .game import Game

logger = logging.getLogger(__name__)


@dataclass
class Reducer:
    """
    Reducer applies actions to a game.

    With snapshot=False the live game is returned as new_state, which is
    only appropriate for callers that own the game exclusively.
    """
    snapshot: bool = True

    def apply(self, game: Game, action: Action) -> ActionResult:
        """
        Apply an action to the game.

        Returns ActionResult with the post-command state or an error.
        """
        validation_error = self._validate_action(game, action)
        if validation_error:
            code, message = validation_error
            return ActionResult.failure(message, error_code=code, state=self._view(game))

        handler = self._get_handler(action.action_type)
        try:
            return handler(game, action)
        except Exception as e:
            logger.exception("Handler for %s failed", action.action_type.value)
            return ActionResult.failure(str(e), error_code="HANDLER_ERROR")

    def _view(self, game: Game) -> Game:
        return game.snapshot() if self.snapshot else game

    def _validate_action(self, game: Game, action: Action) -> tuple[str, str] | None:
        """Returns (error_code, message) if invalid, None if the action may run."""
        if game.is_over:
            return "GAME_OVER", "Game is over - no actions allowed"

        if action.action_type in CELL_ACTIONS:
            if action.row is None or action.col is None:
                return "INVALID_ACTION", f"{action.action_type.value} needs a row and col"

        return None

    def _get_handler(self, action_type: ActionType):
        handlers = {
            ActionType.SELECT_CELL: self._handle_select,
            ActionType.DESELECT_CELL: self._handle_deselect,
            ActionType.RESET_SELECTION: self._handle_reset,
            ActionType.PASS_MOVE: self._handle_pass,
            ActionType.CONFIRM_MOVE: self._handle_confirm,
        }
        return handlers[action_type]

    def _no_op(self, game: Game, message: str) -> ActionResult:
        return ActionResult.failure(message, error_code="NO_OP", state=self._view(game))

    def _handle_select(self, game: Game, action: Action) -> ActionResult:
        if not game.select_cell(action.row, action.col):
            return self._no_op(game, f"Cell {action.row},{action.col} cannot be selected")

        cell = game.cell(action.row, action.col)
        selection = game.current_selection
        return ActionResult.success_with_state(
            self._view(game),
            changes=[
                f"Selected {cell.symbol} at {cell.key}",
                f"{game.expression} = {selection.total}",
            ],
        )

    def _handle_deselect(self, game: Game, action: Action) -> ActionResult:
        removed = len(game.current_selection.cells)
        if not game.deselect_cell(action.row, action.col):
            return self._no_op(game, f"Cell {action.row},{action.col} is not selected")

        removed -= len(game.current_selection.cells)
        return ActionResult.success_with_state(
            self._view(game),
            changes=[f"Deselected {removed} cell(s) from {action.row},{action.col}"],
        )

    def _handle_reset(self, game: Game, action: Action) -> ActionResult:
        game.reset_selection()
        return ActionResult.success_with_state(
            self._view(game), changes=["Selection cleared"]
        )

    def _handle_pass(self, game: Game, action: Action) -> ActionResult:
        player = game.current_move.player
        game.pass_move()
        return ActionResult.success_with_state(
            self._view(game),
            changes=[
                f"{game.player_name(player)} passed",
                f"Move {game.current_move.number}: {game.player_name(game.current_move.player)}"
                f" to make {game.current_move.target} with up to {game.current_move.size} new tile(s)",
            ],
        )

    def _handle_confirm(self, game: Game, action: Action) -> ActionResult:
        if not game.confirm_move():
            return self._no_op(game, "Selection is not valid")

        record = game.move_history[-1]
        mover = record.move.player
        changes = [
            f"{game.player_name(mover)} claimed {len(record.claimed)} tile(s)"
            f" with {record.expression} = {record.move.target}",
        ]
        if record.pruned:
            changes.append(
                f"{game.player_name(mover.opponent)} lost {len(record.pruned)}"
                " tile(s) cut off from home"
            )
        if game.is_over:
            if game.winner is None:
                changes.append("Game over: draw")
            else:
                changes.append(f"Game over: {game.player_name(game.winner)} wins")

        return ActionResult.success_with_state(self._view(game), changes=changes)


def apply_action(game: Game, action: Action) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    return Reducer().apply(game, action)
