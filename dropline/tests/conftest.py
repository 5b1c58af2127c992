"""
Pytest fixtures for Dropline tests.
"""

import pytest

from ..engine_core.state import Board, GameState, Piece
from ..engine_core.reducer import drop_piece, initial_state
from ..session import SessionManager
from ..api.service import APIService


def play(state: GameState, columns) -> GameState:
    """Drop into each column in turn."""
    for column in columns:
        state = drop_piece(state, column)
    return state


def board_from_rows(rows: list[str]) -> Board:
    """
    Build a board from strings, top row first.

    'X' is FIRST, 'O' is SECOND, '.' is EMPTY.
    """
    symbols = {"X": Piece.FIRST, "O": Piece.SECOND, ".": Piece.EMPTY}
    height = len(rows)
    width = len(rows[0])
    board = Board.empty(width, height)
    for top_index, line in enumerate(rows):
        row = height - 1 - top_index
        for column, symbol in enumerate(line):
            board = board.with_piece(column, row, symbols[symbol])
    return board


@pytest.fixture
def empty_state() -> GameState:
    """Standard 7 wide, 6 tall board with nothing on it."""
    return initial_state(7, 6)


@pytest.fixture
def first_wins_bottom_row(empty_state: GameState) -> GameState:
    """FIRST fills columns 0-3 of the bottom row; SECOND plays column 6."""
    return play(empty_state, [0, 6, 1, 6, 2, 6, 3])


@pytest.fixture
def session_manager() -> SessionManager:
    return SessionManager()


@pytest.fixture
def service() -> APIService:
    """Create a fresh API service."""
    return APIService()
