"""
API Service - Business logic layer between the HTTP app and the engine.

The service:
1. Translates requests into engine actions
2. Manages sessions
3. Formats game snapshots for display

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
Lookups that fail return an ErrorResponse instead of raising.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .schemas import (
    # Requests
    CreateGameRequest,
    CellRequest,
    PassRequest,
    # Responses
    GameStateResponse,
    CommandResponse,
    ErrorResponse,
    # Shared
    CellInfo,
    MoveInfo,
    PlayerInfo,
    SelectionInfo,
    # Enums
    ErrorCode,
    GameStatus,
)
from ..engine_core.action import Action
from ..engine_core.game import Game
from ..engine_core.state import Player
from ..session import SessionManager


@dataclass
class APIService:
    """
    Main API service for UI shells.

    Usage:
        service = APIService()
        state = service.create_game(CreateGameRequest(width=8, height=8))
        result = service.select_cell(state.game_id, CellRequest(row=0, col=1))
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    def create_game(self, request: CreateGameRequest) -> GameStateResponse:
        """
        Start a new game.

        Raises:
            ConfigurationError: If the settings are malformed
        """
        session = self.session_manager.create_session(
            settings=request.settings_overrides(),
            seed=request.seed,
        )
        return game_state_response(session.session_id, session.game)

    def get_game(self, game_id: str) -> GameStateResponse | ErrorResponse:
        session = self.session_manager.get_session(game_id)
        if not session:
            return _not_found(game_id)
        return game_state_response(game_id, session.game)

    def end_game(self, game_id: str, reason: str = "user_ended") -> bool:
        return self.session_manager.end_session(game_id, reason)

    def list_games(self) -> list[str]:
        return self.session_manager.list_sessions()

    # =========================================================================
    # Commands
    # =========================================================================

    def select_cell(self, game_id: str, request: CellRequest) -> CommandResponse | ErrorResponse:
        return self._apply(game_id, Action.select(request.row, request.col))

    def deselect_cell(self, game_id: str, request: CellRequest) -> CommandResponse | ErrorResponse:
        return self._apply(game_id, Action.deselect(request.row, request.col))

    def reset_selection(self, game_id: str) -> CommandResponse | ErrorResponse:
        return self._apply(game_id, Action.reset())

    def pass_move(self, game_id: str, request: PassRequest) -> CommandResponse | ErrorResponse:
        """Pass only once the user has confirmed it."""
        if not self.session_manager.get_session(game_id):
            return _not_found(game_id)
        if not request.confirmed:
            return ErrorResponse(
                error="Passing gives up the move; confirm with the user first",
                error_code=ErrorCode.PASS_NOT_CONFIRMED,
            )
        return self._apply(game_id, Action.pass_move())

    def confirm_move(self, game_id: str) -> CommandResponse | ErrorResponse:
        return self._apply(game_id, Action.confirm())

    def _apply(self, game_id: str, action: Action) -> CommandResponse | ErrorResponse:
        session = self.session_manager.get_session(game_id)
        if not session:
            return _not_found(game_id)

        result = session.apply(action)
        snapshot = result.new_state if result.new_state is not None else session.game

        return CommandResponse(
            game_id=game_id,
            success=result.success,
            changes=result.state_changes,
            error=result.error,
            error_code=_error_code(result.error_code),
            game_state=game_state_response(game_id, snapshot),
        )


def _not_found(game_id: str) -> ErrorResponse:
    return ErrorResponse(
        error=f"Game {game_id} not found",
        error_code=ErrorCode.GAME_NOT_FOUND,
    )


def _error_code(code: str | None) -> ErrorCode | None:
    if code is None:
        return None
    try:
        return ErrorCode(code)
    except ValueError:
        return ErrorCode.INTERNAL_ERROR


# =============================================================================
# Conversions
# =============================================================================

def player_info(game: Game, player: Player) -> PlayerInfo:
    return PlayerInfo(
        player=int(player),
        name=game.player_name(player),
        score=game.current_scores[player],
        home_row=player.home_row(game.settings.height),
        is_current_turn=not game.is_over and game.current_move.player == player,
    )


def game_state_response(game_id: str, game: Game) -> GameStateResponse:
    """Convert a game (or a snapshot of one) to its display model."""
    board = [
        [
            CellInfo(
                cell_id=cell.key,
                row=cell.row,
                col=cell.col,
                symbol=str(cell.symbol),
                is_number=cell.is_number,
                value=cell.symbol if cell.is_number else None,
                owner=None if cell.owner is None else int(cell.owner),
                selected=cell.selected,
                selectable=cell.cell_id in game.possible_selections,
            )
            for cell in row
        ]
        for row in game.board.rows
    ]

    move = game.current_move
    selection = game.current_selection
    winner = game.winner

    return GameStateResponse(
        game_id=game_id,
        status=GameStatus.GAME_OVER if game.is_over else GameStatus.ACTIVE,
        width=game.board.width,
        height=game.board.height,
        board=board,
        players=[player_info(game, player) for player in Player],
        current_move=MoveInfo(
            number=move.number,
            player=int(move.player),
            player_name=game.player_name(move.player),
            size=move.size,
            target=move.target,
        ),
        selection=SelectionInfo(
            cells=[cell.key for cell in selection.cells],
            total=selection.total,
            expression=game.expression,
            new_cell_count=len(game.new_selected_cells()),
            is_valid=game.is_selection_valid,
        ),
        possible_selections=[f"{r},{c}" for r, c in sorted(game.possible_selections)],
        is_over=game.is_over,
        winner=player_info(game, winner) if winner is not None else None,
        is_draw=game.is_draw,
    )
