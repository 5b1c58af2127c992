"""
API Service - Business logic layer between API and engine.

The service:
1. Translates requests to session manager calls
2. Builds snapshots from engine state
3. Reports unknown games as ErrorResponse values

This layer is framework-agnostic (can be used with FastAPI, Flask, a CLI, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .schemas import (
    ErrorCode,
    ErrorResponse,
    GameSnapshot,
    GameStatus,
    PieceValue,
    PlayerValue,
)
from ..config import Settings, load_settings
from ..engine_core.action import Action, ActionResult
from ..engine_core.rules import find_winning_line, is_draw
from ..engine_core.state import GameState, Player
from ..session import Session, SessionManager, SessionNotFound


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        snapshot = service.new_game(7, 6)
        snapshot = service.drop(snapshot.game_id, 3)
        snapshot = service.current_state(snapshot.game_id)
        snapshot = service.reset(snapshot.game_id)
    """
    session_manager: SessionManager = field(default_factory=SessionManager)
    settings: Settings = field(default_factory=load_settings)

    def new_game(
        self,
        width: int | None = None,
        height: int | None = None,
        run_length: int | None = None,
    ) -> GameSnapshot:
        """
        Start a game. Missing sizes come from settings.

        Raises:
            InvalidDimensions: for a non-positive width, height or run length
        """
        session = self.session_manager.create_session(
            width=self.settings.default_width if width is None else width,
            height=self.settings.default_height if height is None else height,
            run_length=self.settings.run_length if run_length is None else run_length,
        )
        return self._snapshot(session)

    def drop(
        self,
        game_id: str,
        column: int,
        player: PlayerValue | None = None,
    ) -> GameSnapshot | ErrorResponse:
        """Drop a piece. Ignored moves return the unchanged game."""
        engine_player = Player(player.value) if player is not None else None
        try:
            session = self.session_manager.require_session(game_id)
        except SessionNotFound as e:
            return self._not_found(e)
        return self._snapshot(session, session.apply(Action.drop(column, engine_player)))

    def current_state(self, game_id: str) -> GameSnapshot | ErrorResponse:
        """Get the game as it stands."""
        session = self.session_manager.get_session(game_id)
        if session is None:
            return self._not_found(SessionNotFound(game_id))
        return self._snapshot(session)

    def reset(self, game_id: str) -> GameSnapshot | ErrorResponse:
        """Clear the board; FIRST moves next."""
        try:
            session = self.session_manager.require_session(game_id)
        except SessionNotFound as e:
            return self._not_found(e)
        return self._snapshot(session, session.apply(Action.reset()))

    def end_game(self, game_id: str) -> bool:
        return self.session_manager.end_session(game_id)

    def list_games(self) -> list[str]:
        return self.session_manager.list_sessions()

    def cleanup(self) -> list[str]:
        """Drop games idle longer than the configured max age."""
        return self.session_manager.cleanup_stale_sessions(self.settings.session_max_age)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _snapshot(self, session: Session, result: ActionResult | None = None) -> GameSnapshot:
        """Build a snapshot from the session's current state."""
        state = result.state if result is not None else session.game_state
        line = find_winning_line(state.board, state.run_length) if state.winner else None
        return GameSnapshot(
            game_id=session.session_id,
            width=state.width,
            height=state.height,
            run_length=state.run_length,
            board=[
                [PieceValue(piece.value) for piece in row]
                for row in state.board.rows_top_down()
            ],
            turn=PlayerValue(state.current_turn.value),
            winner=PlayerValue(state.winner.value) if state.winner else None,
            status=self._status(state),
            winning_line=list(line) if line else None,
            open_columns=[] if state.winner else state.board.open_columns(),
            applied=result.applied if result is not None else True,
            reason=result.reason if result is not None else None,
        )

    @staticmethod
    def _status(state: GameState) -> GameStatus:
        if state.winner is not None:
            return GameStatus.WON
        if is_draw(state):
            return GameStatus.DRAW
        return GameStatus.IN_PROGRESS

    @staticmethod
    def _not_found(error: SessionNotFound) -> ErrorResponse:
        return ErrorResponse(
            error=str(error),
            error_code=ErrorCode.GAME_NOT_FOUND,
            details={"game_id": error.session_id},
        )
