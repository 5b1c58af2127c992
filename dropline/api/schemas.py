"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the exact contract between a rendering layer and
the engine. A snapshot carries everything a client needs to draw the
board; clients never see engine objects.

Error Codes:
- INVALID_DIMENSIONS: Width, height or run length is not positive
- GAME_NOT_FOUND: Game does not exist or has been ended
- VALIDATION_ERROR: Request body could not be parsed
"""

from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class PieceValue(str, Enum):
    """Cell contents as sent over the wire."""
    FIRST = "first"
    SECOND = "second"
    EMPTY = "empty"


class PlayerValue(str, Enum):
    """Turn values as sent over the wire."""
    FIRST = "first"
    SECOND = "second"


class GameStatus(str, Enum):
    """Game status values."""
    IN_PROGRESS = "in_progress"
    WON = "won"
    DRAW = "draw"


class ErrorCode(str, Enum):
    """Structured error codes."""
    INVALID_DIMENSIONS = "INVALID_DIMENSIONS"
    GAME_NOT_FOUND = "GAME_NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"


# =============================================================================
# Request Models
# =============================================================================

class NewGameRequest(BaseModel):
    """Request to start a game. Omitted fields use the server defaults."""
    width: Optional[int] = Field(None, description="Number of columns")
    height: Optional[int] = Field(None, description="Number of rows")
    run_length: Optional[int] = Field(None, description="Pieces in a row needed to win")


class DropRequest(BaseModel):
    """Request to drop a piece into a column."""
    column: int = Field(..., description="Zero-based column index, 0 is leftmost")
    player: Optional[PlayerValue] = Field(
        None,
        description="If set, the drop is ignored unless it is this player's turn",
    )


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class GameSnapshot(BaseModel):
    """
    Complete game state for rendering.

    `board` is a list of rows, top row first, each `width` cells long.
    """
    game_id: str
    width: int
    height: int
    run_length: int
    board: list[list[PieceValue]] = Field(..., description="Rows, top row first")
    turn: PlayerValue = Field(..., description="Player to move (meaningless once won)")
    winner: Optional[PlayerValue] = None
    status: GameStatus
    winning_line: Optional[list[tuple[int, int]]] = Field(
        None,
        description="(column, row) cells of the winning run, row 0 at the bottom",
    )
    open_columns: list[int] = Field(default_factory=list)
    applied: bool = Field(True, description="Whether the last command changed the game")
    reason: Optional[str] = Field(None, description="Why the last command was ignored")
    api_version: str = "v1"


class GameListResponse(BaseModel):
    """List of live games."""
    games: list[str]
    count: int


class EndGameResponse(BaseModel):
    """Response from ending a game."""
    success: bool
    game_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "ok"
    version: str
    environment: str
    active_games: int = 0
