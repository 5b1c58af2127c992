"""
Session Manager - Creates and manages game handles.

LIFECYCLE:
1. Caller creates a session -> empty board, FIRST to move
2. During the game:
   - Drops and resets are applied through the reducer
   - The session swaps in the returned state atomically
3. Caller ends the session -> removed from memory

PERSISTENCE RULES:
- NO database
- Sessions are in-memory only and vanish with the process

CONCURRENCY:
- Each session owns a lock; commands on one session are applied
  one at a time, in arrival order
- Different sessions never block each other
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import threading
import time
import uuid

from ..engine_core.action import Action, ActionResult
from ..engine_core.reducer import Reducer, initial_state
from ..engine_core.state import DEFAULT_RUN_LENGTH, GameState, Player

logger = logging.getLogger(__name__)


class SessionNotFound(KeyError):
    """Raised when a session id is unknown or has been ended."""

    def __init__(self, session_id: str):
        super().__init__(session_id)
        self.session_id = session_id

    def __str__(self) -> str:
        return f"Session {self.session_id} not found"


@dataclass
class Session:
    """
    A game handle.

    Holds exactly one GameState at a time and replaces it wholesale on
    every applied command.
    """
    session_id: str
    reducer: Reducer
    game_state: GameState
    created_at: float
    updated_at: float
    last_result: ActionResult | None = None
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def apply(self, action: Action) -> ActionResult:
        """Apply a command under the session lock."""
        with self._lock:
            result = self.reducer.apply(self.game_state, action)
            if result.applied:
                self.game_state = result.state
                self.updated_at = time.time()
            self.last_result = result
            return result

    def is_active(self) -> bool:
        """A session is active until somebody wins."""
        return not self.game_state.is_terminal


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions for a board size
    - Route drop/reset commands to the right session
    - Clean up idle sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self):
        self._sessions: dict[str, Session] = {}
        self._lock = threading.Lock()

    def create_session(
        self,
        width: int,
        height: int,
        run_length: int = DEFAULT_RUN_LENGTH,
    ) -> Session:
        """
        Create a new game session.

        Raises:
            InvalidDimensions: for a non-positive width, height or run length
        """
        state = initial_state(width, height, run_length)
        now = time.time()
        session = Session(
            session_id=str(uuid.uuid4()),
            reducer=Reducer(width=width, height=height, run_length=run_length),
            game_state=state,
            created_at=now,
            updated_at=now,
        )
        with self._lock:
            self._sessions[session.session_id] = session
        logger.info("Created %dx%d game %s", width, height, session.session_id)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def require_session(self, session_id: str) -> Session:
        session = self.get_session(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        return session

    def drop(self, session_id: str, column: int, player: Player | None = None) -> ActionResult:
        """Drop a piece for the session's current player."""
        return self.require_session(session_id).apply(Action.drop(column, player))

    def reset(self, session_id: str) -> ActionResult:
        """Put the session back to an empty board."""
        return self.require_session(session_id).apply(Action.reset())

    def end_session(self, session_id: str) -> bool:
        """
        End a session and forget it.

        Returns False if the session did not exist.
        """
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        logger.info("Ended game %s", session_id)
        return True

    def list_sessions(self) -> list[str]:
        """List IDs of all sessions."""
        with self._lock:
            return list(self._sessions)

    def list_active_sessions(self) -> list[str]:
        """List IDs of sessions without a winner."""
        with self._lock:
            sessions = list(self._sessions.items())
        return [sid for sid, session in sessions if session.is_active()]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> list[str]:
        """
        Remove sessions untouched for longer than max_age_seconds.

        Returns the removed IDs.
        """
        cutoff = time.time() - max_age_seconds
        with self._lock:
            sessions = list(self._sessions.items())
        stale = [
            sid for sid, session in sessions
            if session.updated_at < cutoff
        ]
        for session_id in stale:
            self.end_session(session_id)
        return stale
