"""
Tests for session management.

Tests:
- Session lifecycle
- Commands routed to the right game
- Serialized drops under concurrency
- Stale session cleanup
"""

import threading
import time

import pytest

from ..engine_core.state import InvalidDimensions, Piece, Player
from ..engine_core.reducer import initial_state
from ..session import SessionManager, SessionNotFound


class TestSessionLifecycle:

    def test_create_session(self, session_manager):
        session = session_manager.create_session(7, 6)

        assert session.session_id
        assert session.game_state == initial_state(7, 6)
        assert session.is_active()
        assert session_manager.get_session(session.session_id) is session

    def test_create_invalid_session(self, session_manager):
        with pytest.raises(InvalidDimensions):
            session_manager.create_session(0, 6)
        assert session_manager.list_sessions() == []

    def test_sessions_are_independent(self, session_manager):
        a = session_manager.create_session(7, 6)
        b = session_manager.create_session(7, 6)

        session_manager.drop(a.session_id, 3)

        assert a.game_state.board.cell(3, 0) is Piece.FIRST
        assert b.game_state == initial_state(7, 6)

    def test_end_session(self, session_manager):
        session = session_manager.create_session(7, 6)

        assert session_manager.end_session(session.session_id)
        assert session_manager.get_session(session.session_id) is None
        assert not session_manager.end_session(session.session_id)

    def test_unknown_session(self, session_manager):
        with pytest.raises(SessionNotFound) as excinfo:
            session_manager.drop("nope", 0)
        assert "nope" in str(excinfo.value)

        with pytest.raises(KeyError):
            session_manager.reset("nope")


class TestSessionCommands:

    def test_drop_updates_state(self, session_manager):
        session = session_manager.create_session(7, 6)

        result = session_manager.drop(session.session_id, 2)

        assert result.applied
        assert session.game_state is result.state
        assert session.game_state.current_turn is Player.SECOND
        assert session.last_result is result

    def test_ignored_drop_keeps_state(self, session_manager):
        session = session_manager.create_session(7, 6)
        before = session.game_state

        result = session_manager.drop(session.session_id, 12)

        assert not result.applied
        assert session.game_state is before

    def test_wrong_player_ignored(self, session_manager):
        session = session_manager.create_session(7, 6)

        result = session_manager.drop(session.session_id, 0, player=Player.SECOND)

        assert not result.applied
        assert session.game_state == initial_state(7, 6)

    def test_won_session_is_inactive(self, session_manager):
        session = session_manager.create_session(7, 6)
        for column in [0, 6, 1, 6, 2, 6, 3]:
            session_manager.drop(session.session_id, column)

        assert session.game_state.winner is Player.FIRST
        assert not session.is_active()
        assert session.session_id not in session_manager.list_active_sessions()
        assert session.session_id in session_manager.list_sessions()

    def test_reset(self, session_manager):
        session = session_manager.create_session(5, 4, run_length=3)
        session_manager.drop(session.session_id, 1)

        result = session_manager.reset(session.session_id)

        assert result.applied
        assert session.game_state == initial_state(5, 4, run_length=3)

    def test_concurrent_drops_are_serialized(self, session_manager):
        session = session_manager.create_session(7, 6)

        def fill_column():
            for _ in range(10):
                session_manager.drop(session.session_id, 0)

        threads = [threading.Thread(target=fill_column) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        board = session.game_state.board
        assert [board.cell(0, r) for r in range(6)] == [Piece.FIRST, Piece.SECOND] * 3
        assert session.game_state.current_turn is Player.FIRST

    def test_listing_while_sessions_change(self, session_manager):
        errors = []

        def churn():
            for _ in range(200):
                session = session_manager.create_session(4, 4)
                session_manager.end_session(session.session_id)

        def list_all():
            try:
                for _ in range(200):
                    session_manager.list_active_sessions()
                    session_manager.cleanup_stale_sessions(max_age_seconds=3600)
            except RuntimeError as e:
                errors.append(e)

        threads = [threading.Thread(target=churn) for _ in range(2)]
        threads += [threading.Thread(target=list_all) for _ in range(2)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert session_manager.list_sessions() == []


class TestCleanup:

    def test_cleanup_stale_sessions(self, session_manager):
        old = session_manager.create_session(7, 6)
        fresh = session_manager.create_session(7, 6)
        old.updated_at = time.time() - 7200

        removed = session_manager.cleanup_stale_sessions(max_age_seconds=3600)

        assert removed == [old.session_id]
        assert session_manager.list_sessions() == [fresh.session_id]

    def test_drop_touches_session(self, session_manager):
        session = session_manager.create_session(7, 6)
        session.updated_at = 0.0

        session_manager.drop(session.session_id, 0)

        assert session.updated_at > 0.0
