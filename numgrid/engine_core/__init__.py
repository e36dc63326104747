"""
Engine Core - Game state, rules and command dispatch.

The engine is the runtime that:
1. Generates a Board from GameSettings and an injected rng
2. Rolls a Move for every turn
3. Tracks the in-progress Selection and its legal extensions
4. Claims tiles, prunes orphaned territory and scores
5. Applies commands via the reducer
"""

from .state import Cell, Move, Selection, Player, Operator, GamePhase, CellId
from .dice import Die, DicePool
from .board import Board, generate_board, is_number_cell
from .expression import evaluate, format_expression
from .selection import possible_selections, is_selection_valid
from .territory import prune_orphans, calculate_scores, is_game_over
from .game import Game
from .action import Action, ActionType, ActionResult
from .reducer import Reducer, apply_action

__all__ = [
    "Cell",
    "CellId",
    "Move",
    "Selection",
    "Player",
    "Operator",
    "GamePhase",
    "Die",
    "DicePool",
    "Board",
    "generate_board",
    "is_number_cell",
    "evaluate",
    "format_expression",
    "possible_selections",
    "is_selection_valid",
    "prune_orphans",
    "calculate_scores",
    "is_game_over",
    "Game",
    "Action",
    "ActionType",
    "ActionResult",
    "Reducer",
    "apply_action",
]
