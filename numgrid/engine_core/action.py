"""
Action System - Commands, payloads and results.

Actions are the shell's way of driving the engine: one Action per user
interaction, applied by the reducer.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ActionType(Enum):
    """Commands the engine accepts."""
    SELECT_CELL = "select_cell"
    DESELECT_CELL = "deselect_cell"
    RESET_SELECTION = "reset_selection"
    PASS_MOVE = "pass_move"
    CONFIRM_MOVE = "confirm_move"


# Actions that address a single cell
CELL_ACTIONS = {ActionType.SELECT_CELL, ActionType.DESELECT_CELL}


@dataclass
class Action:
    """A command to apply to a game."""
    action_type: ActionType
    row: int | None = None
    col: int | None = None

    @classmethod
    def select(cls, row: int, col: int) -> Action:
        return cls(action_type=ActionType.SELECT_CELL, row=row, col=col)

    @classmethod
    def deselect(cls, row: int, col: int) -> Action:
        return cls(action_type=ActionType.DESELECT_CELL, row=row, col=col)

    @classmethod
    def reset(cls) -> Action:
        return cls(action_type=ActionType.RESET_SELECTION)

    @classmethod
    def pass_move(cls) -> Action:
        return cls(action_type=ActionType.PASS_MOVE)

    @classmethod
    def confirm(cls) -> Action:
        return cls(action_type=ActionType.CONFIRM_MOVE)


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether the command changed anything
    - A snapshot of the game after the command
    - An error and code when it did not
    - Human-readable changes (for UI updates)
    """
    success: bool
    new_state: Any | None = None  # Game snapshot
    error: str | None = None
    error_code: str | None = None

    state_changes: list[str] = field(default_factory=list)

    @classmethod
    def failure(
        cls, error: str, error_code: str | None = None, state: Any | None = None
    ) -> ActionResult:
        """Create a failure result. The state is returned unchanged."""
        return cls(success=False, new_state=state, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
    ) -> ActionResult:
        return cls(success=True, new_state=state, state_changes=changes or [])
