"""
Engine Core - Pure game state management.

The engine is the runtime that:
1. Creates an initial GameState for a board size
2. Applies drop/reset commands via the reducer
3. Scans the board for a completed run

Nothing in here performs I/O or holds state between calls.
"""

from .state import Board, GamePhase, GameState, InvalidDimensions, Piece, Player
from .rules import DIRECTIONS, check_winner, find_winning_line, is_draw
from .action import Action, ActionResult, ActionType
from .reducer import Reducer, apply_action, drop_piece, initial_state, reset

__all__ = [
    "Board",
    "GamePhase",
    "GameState",
    "InvalidDimensions",
    "Piece",
    "Player",
    "DIRECTIONS",
    "check_winner",
    "find_winning_line",
    "is_draw",
    "Action",
    "ActionResult",
    "ActionType",
    "Reducer",
    "apply_action",
    "drop_piece",
    "initial_state",
    "reset",
]
