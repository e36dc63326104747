"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between a UI shell and the engine.
Cell ids are rendered as "row,col" strings.

Error Codes:
- GAME_NOT_FOUND: Game does not exist or has been ended
- INVALID_SETTINGS: Settings cannot produce a playable board
- PASS_NOT_CONFIRMED: Pass requested without user confirmation
- NO_OP: Command was not legal in the current state; nothing changed
- GAME_OVER: The game has finished; no more commands are accepted
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field

# Largest board side a client may request
MAX_BOARD_SIDE = 100


# =============================================================================
# Enums
# =============================================================================

class GameStatus(str, Enum):
    """Game status values."""
    ACTIVE = "active"
    GAME_OVER = "game_over"


class ErrorCode(str, Enum):
    """Structured error codes."""
    GAME_NOT_FOUND = "GAME_NOT_FOUND"
    INVALID_SETTINGS = "INVALID_SETTINGS"
    PASS_NOT_CONFIRMED = "PASS_NOT_CONFIRMED"
    NO_OP = "NO_OP"
    GAME_OVER = "GAME_OVER"
    INVALID_ACTION = "INVALID_ACTION"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class CellInfo(BaseModel):
    """A board tile for display."""
    cell_id: str = Field(description="row,col")
    row: int
    col: int
    symbol: str = Field(description="Number or one of + - *")
    is_number: bool
    value: Optional[int] = Field(None, description="Numeric value for number tiles")
    owner: Optional[int] = Field(None, description="0, 1 or null when unowned")
    selected: bool = False
    selectable: bool = False


class MoveInfo(BaseModel):
    """The current move and its rolled constraints."""
    number: int
    player: int
    player_name: str
    size: int = Field(description="Max new tiles this move")
    target: int = Field(description="Value the selection must reach")


class SelectionInfo(BaseModel):
    """The in-progress selection."""
    cells: list[str] = Field(default_factory=list)
    total: int = 0
    expression: str = ""
    new_cell_count: int = 0
    is_valid: bool = False


class PlayerInfo(BaseModel):
    """A player and their score."""
    player: int
    name: str
    score: int = 0
    home_row: int
    is_current_turn: bool = False


# =============================================================================
# Request Models
# =============================================================================

class CreateGameRequest(BaseModel):
    """Request to start a game. Missing fields take their defaults."""
    width: Optional[int] = Field(
        None, le=MAX_BOARD_SIDE, description="Board columns (default 12)"
    )
    height: Optional[int] = Field(
        None, le=MAX_BOARD_SIDE, description="Board rows (default 12)"
    )
    board_dice: Optional[list[list[int]]] = Field(
        None, description="Faces of each die rolled for number tiles"
    )
    move_length_dice: Optional[list[list[int]]] = Field(
        None, description="Faces of each die rolled for move size"
    )
    move_total_dice: Optional[list[list[int]]] = Field(
        None, description="Faces of each die rolled for move target"
    )
    player_names: Optional[list[str]] = None
    seed: Optional[int] = Field(None, description="Seed for a reproducible game")

    def settings_overrides(self) -> dict[str, Any]:
        return self.model_dump(exclude={"seed"}, exclude_none=True)


class CellRequest(BaseModel):
    """Request addressing one cell."""
    row: int = Field(..., ge=0)
    col: int = Field(..., ge=0)


class PassRequest(BaseModel):
    """Request to pass. The shell must have asked the user first."""
    confirmed: bool = Field(False, description="User confirmed giving up the move")


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class GameStateResponse(BaseModel):
    """Complete game state for display."""
    game_id: str
    status: GameStatus
    width: int
    height: int
    board: list[list[CellInfo]] = Field(default_factory=list)
    players: list[PlayerInfo] = Field(default_factory=list)
    current_move: MoveInfo
    selection: SelectionInfo = Field(default_factory=SelectionInfo)
    possible_selections: list[str] = Field(default_factory=list)
    is_over: bool = False
    winner: Optional[PlayerInfo] = None
    is_draw: bool = False
    api_version: str = "v1"


class CommandResponse(BaseModel):
    """Response after applying a command."""
    game_id: str
    success: bool
    changes: list[str] = Field(default_factory=list)
    error: Optional[str] = None
    error_code: Optional[ErrorCode] = None
    game_state: Optional[GameStateResponse] = None
    api_version: str = "v1"


class GameListResponse(BaseModel):
    """Response listing games in memory."""
    games: list[str]
    count: int


class EndGameResponse(BaseModel):
    """Response after ending a game."""
    success: bool
    game_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
    environment: str
