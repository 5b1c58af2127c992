"""
FastAPI Application - REST API for rendering layers.

Endpoints:
    GET    /api/v1/health                  Health check
    POST   /api/v1/games                   Start a game
    GET    /api/v1/games                   List games
    GET    /api/v1/games/{id}              Get game state
    POST   /api/v1/games/{id}/drop         Drop a piece
    POST   /api/v1/games/{id}/reset        Reset the board
    DELETE /api/v1/games/{id}              End a game

Illegal drops (full column, column off the board, game already won,
wrong player) are not errors: the response is the unchanged game with
`applied=false`.

All responses are JSON with explicit Pydantic schemas.

For running directly: uvicorn dropline.api.app:serve_app --factory
(or `dropline serve`)
"""

from typing import Optional, Union
import logging

from .. import __version__
from ..config import configure_logging, load_settings
from ..engine_core.state import InvalidDimensions

logger = logging.getLogger(__name__)


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI, Request
        from fastapi.exceptions import RequestValidationError
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .service import APIService
    from .schemas import (
        # Request models
        NewGameRequest,
        DropRequest,
        # Response models
        GameSnapshot,
        GameListResponse,
        EndGameResponse,
        HealthResponse,
        ErrorResponse,
        # Enums
        ErrorCode,
    )

    settings = load_settings()

    app = FastAPI(
        title="Dropline Engine API",
        description="""
Connect Four game engine.

## Move Semantics

`POST /drop` never fails for an illegal move. A full column, a column
off the board, a drop after the game is won, or a drop naming the wrong
`player` all return the unchanged game with `applied=false` and a
`reason`.

## Error Codes

| Code | Description |
|------|-------------|
| `INVALID_DIMENSIONS` | Width, height or run length is not positive |
| `GAME_NOT_FOUND` | Game does not exist or has been ended |
| `VALIDATION_ERROR` | Request body could not be parsed |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.allowed_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService(settings=settings)

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
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

    def from_service(response: Union[GameSnapshot, ErrorResponse]):
        if isinstance(response, ErrorResponse):
            return JSONResponse(status_code=404, content=response.model_dump(mode="json"))
        return response

    @app.exception_handler(InvalidDimensions)
    async def invalid_dimensions_handler(request: Request, exc: InvalidDimensions) -> JSONResponse:
        return make_error_response(
            ErrorCode.INVALID_DIMENSIONS,
            str(exc),
            details={"width": exc.width, "height": exc.height, "run_length": exc.run_length},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return make_error_response(
            ErrorCode.VALIDATION_ERROR,
            "Request body could not be parsed",
            status_code=422,
            details={"errors": [str(e.get("msg")) for e in exc.errors()]},
        )

    # =========================================================================
    # Health
    # =========================================================================

    @app.get(
        "/api/v1/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health() -> HealthResponse:
        return HealthResponse(
            version=__version__,
            environment=settings.env,
            active_games=len(api_service.list_games()),
        )

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/games",
        response_model=GameSnapshot,
        responses={400: {"model": ErrorResponse, "description": "Invalid dimensions"}},
        tags=["Games"],
        summary="Start a new game",
    )
    async def new_game(body: Optional[NewGameRequest] = None) -> GameSnapshot:
        """
        Start a game on an empty board with `first` to move.

        Omitted sizes fall back to the server defaults (7 x 6, four in a row).
        Games idle longer than the configured max age are dropped first.
        """
        removed = api_service.cleanup()
        if removed:
            logger.info("Dropped %d idle game(s)", len(removed))
        body = body or NewGameRequest()
        return api_service.new_game(body.width, body.height, body.run_length)

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
        response_model=GameSnapshot,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Get game state",
    )
    async def get_game(game_id: str):
        """Get the board, the player to move and the winner, if any."""
        return from_service(api_service.current_state(game_id))

    @app.post(
        "/api/v1/games/{game_id}/drop",
        response_model=GameSnapshot,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Drop a piece into a column",
    )
    async def drop(game_id: str, body: DropRequest):
        """
        Drop the current player's piece into `column`.

        **Request Body:**
        ```json
        {"column": 3, "player": "first"}
        ```
        """
        return from_service(api_service.drop(game_id, body.column, body.player))

    @app.post(
        "/api/v1/games/{game_id}/reset",
        response_model=GameSnapshot,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Reset the board",
    )
    async def reset(game_id: str):
        return from_service(api_service.reset(game_id))

    @app.delete(
        "/api/v1/games/{game_id}",
        response_model=EndGameResponse,
        tags=["Games"],
        summary="End a game",
    )
    async def end_game(game_id: str) -> EndGameResponse:
        """End a game and release it."""
        success = api_service.end_game(game_id)
        return EndGameResponse(success=success, game_id=game_id)

    logger.debug("Dropline API created (%s)", settings.env)
    return app


def serve_app():
    """Application factory for uvicorn. Sets up logging, then builds the app."""
    configure_logging()
    return create_app()
