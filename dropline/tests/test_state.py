"""
Tests for board and state values.
"""

import pytest

from ..engine_core.state import Board, GamePhase, GameState, InvalidDimensions, Piece, Player


class TestPlayer:

    def test_other_flips(self):
        assert Player.FIRST.other is Player.SECOND
        assert Player.SECOND.other is Player.FIRST

    def test_piece_mapping(self):
        assert Player.FIRST.piece is Piece.FIRST
        assert Player.SECOND.piece is Piece.SECOND


class TestBoard:
    """Tests for the immutable grid."""

    def test_empty_board(self):
        board = Board.empty(7, 6)
        assert board.width == 7
        assert board.height == 6
        assert all(piece is Piece.EMPTY for column in board.columns for piece in column)
        assert sum(len(column) for column in board.columns) == 42
        assert board.open_columns() == list(range(7))
        assert not board.is_full()

    @pytest.mark.parametrize("width,height", [(0, 6), (7, 0), (-1, 6), (7, -3)])
    def test_invalid_dimensions(self, width, height):
        with pytest.raises(InvalidDimensions):
            Board.empty(width, height)

    def test_with_piece_returns_new_board(self):
        board = Board.empty(3, 3)
        placed = board.with_piece(1, 0, Piece.FIRST)

        assert board.cell(1, 0) is Piece.EMPTY
        assert placed.cell(1, 0) is Piece.FIRST
        assert placed != board

    def test_value_equality(self):
        a = Board.empty(4, 4).with_piece(0, 0, Piece.SECOND)
        b = Board.empty(4, 4).with_piece(0, 0, Piece.SECOND)
        assert a == b

    def test_in_bounds(self):
        board = Board.empty(7, 6)
        assert board.in_bounds(0, 0)
        assert board.in_bounds(6, 5)
        assert not board.in_bounds(7, 0)
        assert not board.in_bounds(0, 6)
        assert not board.in_bounds(-1, 0)

    def test_off_board_read_raises(self):
        with pytest.raises(IndexError):
            Board.empty(2, 2).cell(2, 0)

    def test_lowest_empty_row(self):
        board = Board.empty(2, 3).with_piece(0, 0, Piece.FIRST)
        assert board.lowest_empty_row(0) == 1
        assert board.lowest_empty_row(1) == 0
        assert board.lowest_empty_row(2) is None
        assert board.lowest_empty_row(-1) is None

    def test_full_column(self):
        board = Board.empty(2, 2)
        board = board.with_piece(0, 0, Piece.FIRST).with_piece(0, 1, Piece.SECOND)
        assert board.lowest_empty_row(0) is None
        assert board.open_columns() == [1]

    def test_rows_top_down(self):
        board = Board.empty(2, 2).with_piece(1, 0, Piece.FIRST)
        assert board.rows_top_down() == [
            [Piece.EMPTY, Piece.EMPTY],
            [Piece.EMPTY, Piece.FIRST],
        ]


class TestGameState:

    def test_phase(self):
        board = Board.empty(4, 4)
        assert GameState(board=board).phase is GamePhase.IN_PROGRESS
        won = GameState(board=board, winner=Player.SECOND)
        assert won.phase is GamePhase.WON
        assert won.is_terminal

    def test_copy_with(self):
        state = GameState(board=Board.empty(4, 4))
        flipped = state._copy_with(current_turn=Player.SECOND)
        assert flipped.current_turn is Player.SECOND
        assert state.current_turn is Player.FIRST
        assert flipped.board is state.board

    def test_frozen(self):
        state = GameState(board=Board.empty(4, 4))
        with pytest.raises(AttributeError):
            state.winner = Player.FIRST
