"""
Action System - Commands and results.

Actions represent the two user intents the engine understands:
1. Drop a piece into a column
2. Reset the board

All state changes flow through actions. Invalid input is not an error:
the result simply reports that nothing was applied.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from .state import GameState, Player


class ActionType(Enum):
    """Types of actions in the system."""
    DROP = "drop"
    RESET = "reset"


@dataclass(frozen=True)
class Action:
    """
    A command to be applied to the game state.

    `player` is optional on a drop. When given, the drop is ignored
    unless it matches the player whose turn it is.
    """
    action_type: ActionType
    column: int | None = None
    player: Player | None = None

    @classmethod
    def drop(cls, column: int, player: Player | None = None) -> Action:
        """Factory for drop action."""
        return cls(action_type=ActionType.DROP, column=column, player=player)

    @classmethod
    def reset(cls) -> Action:
        """Factory for reset action."""
        return cls(action_type=ActionType.RESET)


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - The resulting state (the input state when nothing changed)
    - Whether the action changed anything
    - Why it was ignored, if it was
    """
    state: GameState
    applied: bool
    reason: str | None = None
    placed_at: tuple[int, int] | None = None

    @classmethod
    def ignored(cls, state: GameState, reason: str) -> ActionResult:
        """Create a no-op result."""
        return cls(state=state, applied=False, reason=reason)

    @classmethod
    def changed(cls, state: GameState, placed_at: tuple[int, int] | None = None) -> ActionResult:
        """Create a result carrying a new state."""
        return cls(state=state, applied=True, placed_at=placed_at)

