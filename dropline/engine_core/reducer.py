"""
Reducer - Applies commands to game state.

The reducer is the single point of state change.
All transitions go through drop_piece() / reset() or Reducer.apply().

Design principles:
- Pure function: (state, command) -> new_state
- Invalid input is ignored, never raised: the input state comes back
- A won game is terminal until reset
"""

from __future__ import annotations
from dataclasses import dataclass
import logging

from .state import DEFAULT_RUN_LENGTH, Board, GameState, InvalidDimensions, Player
from .action import Action, ActionResult, ActionType
from .rules import check_winner

logger = logging.getLogger(__name__)


def initial_state(width: int, height: int, run_length: int = DEFAULT_RUN_LENGTH) -> GameState:
    """
    Create the starting state: empty board, FIRST to move, no winner.

    Raises:
        InvalidDimensions: if any of width, height, run_length is not positive
    """
    if width <= 0 or height <= 0 or run_length <= 0:
        raise InvalidDimensions(width, height, run_length)
    return GameState(
        board=Board.empty(width, height),
        current_turn=Player.FIRST,
        winner=None,
        run_length=run_length,
    )


def reset(width: int, height: int, run_length: int = DEFAULT_RUN_LENGTH) -> GameState:
    """Same as initial_state; any prior state is discarded."""
    return initial_state(width, height, run_length)


def drop_piece(state: GameState, column: int) -> GameState:
    """Drop the current player's piece into `column`."""
    return _drop(state, column).state


def _drop(state: GameState, column: int) -> ActionResult:
    if state.winner is not None:
        return ActionResult.ignored(state, "Game is over")

    row = state.board.lowest_empty_row(column)
    if row is None:
        if not 0 <= column < state.width:
            return ActionResult.ignored(state, f"Column {column} is off the board")
        return ActionResult.ignored(state, f"Column {column} is full")

    mover = state.current_turn
    board = state.board.with_piece(column, row, mover.piece)

    if check_winner(board, board.width, board.height, state.run_length) is not None:
        logger.info("%s wins with a drop at (%d, %d)", mover.value, column, row)
        new_state = state._copy_with(board=board, winner=mover)
    else:
        new_state = state._copy_with(board=board, current_turn=mover.other)

    return ActionResult.changed(new_state, placed_at=(column, row))


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless - all state is in GameState.
    The board size is only needed for reset.
    """
    width: int
    height: int
    run_length: int = DEFAULT_RUN_LENGTH

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with the new state, or the same state and
        a reason when the action was ignored.
        """
        reason = self._validate_action(state, action)
        if reason:
            logger.debug("Ignoring %s: %s", action.action_type.value, reason)
            return ActionResult.ignored(state, reason)

        handler = self._get_handler(action.action_type)
        result = handler(state, action)
        if not result.applied:
            logger.debug("Ignoring %s: %s", action.action_type.value, result.reason)
        return result

    def _validate_action(self, state: GameState, action: Action) -> str | None:
        """Return a reason to ignore the action, or None if it may proceed."""
        if action.action_type == ActionType.DROP:
            if action.column is None:
                return "Drop without a column"
            if action.player is not None and action.player != state.current_turn:
                return f"Not {action.player.value}'s turn"
        return None

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.DROP: self._handle_drop,
            ActionType.RESET: self._handle_reset,
        }
        return handlers[action_type]

    def _handle_drop(self, state: GameState, action: Action) -> ActionResult:
        return _drop(state, action.column)

    def _handle_reset(self, state: GameState, action: Action) -> ActionResult:
        logger.info("Resetting %dx%d board", self.width, self.height)
        return ActionResult.changed(reset(self.width, self.height, self.run_length))


def apply_action(
    state: GameState,
    action: Action,
) -> ActionResult:
    """
    Convenience function to apply an action.

    The reducer is sized from the state itself.
    """
    reducer = Reducer(width=state.width, height=state.height, run_length=state.run_length)
    return reducer.apply(state, action)
