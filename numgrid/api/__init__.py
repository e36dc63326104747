"""
API Module - HTTP interface for a UI shell.

Exposes the engine via a REST API. A shell:
1. Starts a game (optionally with settings and a seed)
2. Sends one command per user interaction
3. Renders the returned game state
4. Ends the game when done

All state is session-scoped and in memory.
"""

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
    SelectionInfo,
    PlayerInfo,
    # Enums
    ErrorCode,
    GameStatus,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateGameRequest",
    "CellRequest",
    "PassRequest",
    # Responses
    "GameStateResponse",
    "CommandResponse",
    "ErrorResponse",
    # Shared
    "CellInfo",
    "MoveInfo",
    "SelectionInfo",
    "PlayerInfo",
    # Enums
    "ErrorCode",
    "GameStatus",
    # Service
    "APIService",
    "create_app",
]
