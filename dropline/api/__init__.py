"""
API Module - HTTP interface to the engine.

Exposes game handles via a REST API for any rendering layer:
1. Start a game
2. Drop pieces and reset
3. Read the current board, turn and winner

All state is in-memory and scoped to a game id.
"""

from .schemas import (
    # Requests
    NewGameRequest,
    DropRequest,
    # Responses
    GameSnapshot,
    GameListResponse,
    EndGameResponse,
    HealthResponse,
    ErrorResponse,
    # Enums
    ErrorCode,
    GameStatus,
    PieceValue,
    PlayerValue,
)
from .service import APIService

__all__ = [
    # Requests
    "NewGameRequest",
    "DropRequest",
    # Responses
    "GameSnapshot",
    "GameListResponse",
    "EndGameResponse",
    "HealthResponse",
    "ErrorResponse",
    # Enums
    "ErrorCode",
    "GameStatus",
    "PieceValue",
    "PlayerValue",
    # Service
    "APIService",
]
