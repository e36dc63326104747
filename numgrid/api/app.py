"""
FastAPI Application - REST API for a UI shell.

Endpoints:
    GET    /api/v1/health                       Health check
    POST   /api/v1/games                        Start a game
    GET    /api/v1/games                        List games
    GET    /api/v1/games/{id}                   Get game state
    DELETE /api/v1/games/{id}                   End a game
    POST   /api/v1/games/{id}/select            Select a cell
    POST   /api/v1/games/{id}/deselect          Deselect a cell (and everything after it)
    POST   /api/v1/games/{id}/reset             Clear the selection
    POST   /api/v1/games/{id}/pass              Pass (requires confirmed=true)
    POST   /api/v1/games/{id}/confirm           Claim the selection

Commands that are not legal in the current state answer 200 with
success=false and error_code=NO_OP; the game is left untouched.

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Optional, Union
import os

from .. import __version__
from ..settings import ConfigurationError

# Environment configuration
NUMGRID_ENV = os.getenv("NUMGRID_ENV", "development")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .service import APIService
    from .schemas import (
        CreateGameRequest,
        CellRequest,
        PassRequest,
        GameStateResponse,
        CommandResponse,
        ErrorResponse,
        GameListResponse,
        EndGameResponse,
        HealthResponse,
        ErrorCode,
    )

    app = FastAPI(
        title="Numgrid Engine API",
        description="""
Two-player arithmetic territory game.

Each move rolls a **target** and a **size**. Select a path of tiles, starting
on one of your own numbers and stepping orthogonally, whose left-to-right
expression equals the target, using at most `size` tiles you do not own yet.

## Error Codes

| Code | Description |
|------|-------------|
| `GAME_NOT_FOUND` | Game does not exist |
| `INVALID_SETTINGS` | Settings cannot produce a playable board |
| `PASS_NOT_CONFIRMED` | Pass sent without `confirmed=true` |
| `NO_OP` | Command not legal now; nothing changed |
| `GAME_OVER` | Game finished; no more commands |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService()

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: dict | None = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    def respond(result):
        """Pass through successes; map ErrorResponse to its HTTP status."""
        if isinstance(result, ErrorResponse):
            status_code = 404 if result.error_code == ErrorCode.GAME_NOT_FOUND else 400
            return make_error_response(
                result.error_code, result.error, status_code, result.details
            )
        return result

    # =========================================================================
    # Health
    # =========================================================================

    @app.get("/api/v1/health", response_model=HealthResponse, tags=["System"])
    async def health() -> HealthResponse:
        return HealthResponse(
            status="ok",
            service="numgrid",
            version=__version__,
            environment=NUMGRID_ENV,
        )

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/games",
        response_model=GameStateResponse,
        responses={400: {"model": ErrorResponse, "description": "Invalid settings"}},
        tags=["Games"],
        summary="Start a new game",
    )
    async def create_game(
        body: Optional[CreateGameRequest] = None,
    ) -> Union[GameStateResponse, JSONResponse]:
        """
        Start a new game. Any omitted setting takes its default
        (12x12 board, one d6 for tiles, two d6 for move size and target).
        """
        body = body or CreateGameRequest()
        try:
            return api_service.create_game(body)
        except ConfigurationError as e:
            return make_error_response(
                ErrorCode.INVALID_SETTINGS,
                str(e),
                details={"errors": e.errors},
            )

    @app.get(
        "/api/v1/games",
        response_model=GameListResponse,
        tags=["Games"],
        summary="List games",
    )
    async def list_games() -> GameListResponse:
        games = api_service.list_games()
        return GameListResponse(games=games, count=len(games))

    @app.get(
        "/api/v1/games/{game_id}",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Get game state",
    )
    async def get_game(game_id: str) -> Union[GameStateResponse, JSONResponse]:
        return respond(api_service.get_game(game_id))

    @app.delete(
        "/api/v1/games/{game_id}",
        response_model=EndGameResponse,
        tags=["Games"],
        summary="End a game",
    )
    async def end_game(game_id: str) -> EndGameResponse:
        success = api_service.end_game(game_id)
        return EndGameResponse(success=success, game_id=game_id)

    # =========================================================================
    # Command Endpoints
    # =========================================================================

    command_responses = {
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse, "description": "Game not found"},
    }

    @app.post(
        "/api/v1/games/{game_id}/select",
        response_model=CommandResponse,
        responses=command_responses,
        tags=["Commands"],
        summary="Add a cell to the selection",
    )
    async def select_cell(game_id: str, body: CellRequest) -> Union[CommandResponse, JSONResponse]:
        return respond(api_service.select_cell(game_id, body))

    @app.post(
        "/api/v1/games/{game_id}/deselect",
        response_model=CommandResponse,
        responses=command_responses,
        tags=["Commands"],
        summary="Remove a cell and every cell selected after it",
    )
    async def deselect_cell(game_id: str, body: CellRequest) -> Union[CommandResponse, JSONResponse]:
        return respond(api_service.deselect_cell(game_id, body))

    @app.post(
        "/api/v1/games/{game_id}/reset",
        response_model=CommandResponse,
        responses=command_responses,
        tags=["Commands"],
        summary="Clear the selection",
    )
    async def reset_selection(game_id: str) -> Union[CommandResponse, JSONResponse]:
        return respond(api_service.reset_selection(game_id))

    @app.post(
        "/api/v1/games/{game_id}/pass",
        response_model=CommandResponse,
        responses=command_responses,
        tags=["Commands"],
        summary="Give up the current move",
    )
    async def pass_move(
        game_id: str,
        body: Optional[PassRequest] = None,
    ) -> Union[CommandResponse, JSONResponse]:
        """The shell must ask the user before sending `confirmed=true`."""
        body = body or PassRequest()
        return respond(api_service.pass_move(game_id, body))

    @app.post(
        "/api/v1/games/{game_id}/confirm",
        response_model=CommandResponse,
        responses=command_responses,
        tags=["Commands"],
        summary="Claim the selected cells",
    )
    async def confirm_move(game_id: str) -> Union[CommandResponse, JSONResponse]:
        return respond(api_service.confirm_move(game_id))

    return app


# For running directly: uvicorn numgrid.api.app:app
app = None
try:
    app = create_app()
except ImportError:
    # FastAPI not installed
    pass
