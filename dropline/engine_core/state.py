"""
Game State - Immutable board and game state values.

Design principles:
- Immutable: every change returns a new Board / GameState
- Value equality: two states with the same cells compare equal
- Cell content (Piece) and turn (Player) are separate types, so a
  turn can never be EMPTY

Coordinates are (column, row). Row 0 is the bottom of the board, the
closed end of every column; pieces enter from row height - 1.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum


DEFAULT_RUN_LENGTH = 4


class InvalidDimensions(ValueError):
    """Raised when a board is requested with a non-positive size."""

    def __init__(self, width: int, height: int, run_length: int = DEFAULT_RUN_LENGTH):
        super().__init__(
            f"Invalid board dimensions: width={width}, height={height}, "
            f"run_length={run_length} (all must be positive)"
        )
        self.width = width
        self.height = height
        self.run_length = run_length


class Piece(Enum):
    """Content of a single board cell."""
    FIRST = "first"
    SECOND = "second"
    EMPTY = "empty"

    @property
    def is_empty(self) -> bool:
        return self is Piece.EMPTY


class Player(Enum):
    """Whose turn it is. Strictly two-valued."""
    FIRST = "first"
    SECOND = "second"

    @property
    def other(self) -> Player:
        return Player.SECOND if self is Player.FIRST else Player.FIRST

    @property
    def piece(self) -> Piece:
        return Piece(self.value)


class GamePhase(Enum):
    """High-level game phases."""
    IN_PROGRESS = "in_progress"
    WON = "won"


@dataclass(frozen=True)
class Board:
    """
    A fixed-size grid of pieces.

    Stored column-major: columns[c][r] is the cell at column c, row r.
    Within a column every EMPTY cell sits above every filled cell. The
    placement rule keeps it that way; the board does not check it.
    """
    width: int
    height: int
    columns: tuple[tuple[Piece, ...], ...]

    @classmethod
    def empty(cls, width: int, height: int) -> Board:
        """Create a board with every cell EMPTY."""
        if width <= 0 or height <= 0:
            raise InvalidDimensions(width, height)
        column = (Piece.EMPTY,) * height
        return cls(width=width, height=height, columns=(column,) * width)

    def in_bounds(self, column: int, row: int) -> bool:
        return 0 <= column < self.width and 0 <= row < self.height

    def cell(self, column: int, row: int) -> Piece:
        """Read a cell. Callers must bounds-check first."""
        if not self.in_bounds(column, row):
            raise IndexError(f"Cell ({column}, {row}) is off the board")
        return self.columns[column][row]

    def lowest_empty_row(self, column: int) -> int | None:
        """
        Find where a piece dropped into `column` would land.

        Returns None for an out-of-range or full column.
        """
        if not 0 <= column < self.width:
            return None
        for row, piece in enumerate(self.columns[column]):
            if piece is Piece.EMPTY:
                return row
        return None

    def with_piece(self, column: int, row: int, piece: Piece) -> Board:
        """Return new board with one cell replaced."""
        target = list(self.columns[column])
        target[row] = piece
        new_columns = list(self.columns)
        new_columns[column] = tuple(target)
        return Board(width=self.width, height=self.height, columns=tuple(new_columns))

    def open_columns(self) -> list[int]:
        """Columns that can still take a piece."""
        return [c for c in range(self.width) if self.columns[c][-1] is Piece.EMPTY]

    def is_full(self) -> bool:
        return not self.open_columns()

    def rows_top_down(self) -> list[list[Piece]]:
        """Rows as a renderer wants them: top row first, left to right."""
        return [
            [self.columns[c][r] for c in range(self.width)]
            for r in range(self.height - 1, -1, -1)
        ]


@dataclass(frozen=True)
class GameState:
    """
    Complete game state at a point in time.

    Replaced wholesale on every transition. Once `winner` is set the
    state is terminal: only a reset leaves it.
    """
    board: Board
    current_turn: Player = Player.FIRST
    winner: Player | None = None
    run_length: int = DEFAULT_RUN_LENGTH

    @property
    def width(self) -> int:
        return self.board.width

    @property
    def height(self) -> int:
        return self.board.height

    @property
    def phase(self) -> GamePhase:
        return GamePhase.WON if self.winner is not None else GamePhase.IN_PROGRESS

    @property
    def is_terminal(self) -> bool:
        return self.winner is not None

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)
