"""
Rules - Win and draw detection.

Every cell is tried as the start of a run in each of four directions.
Reads are bounds-checked before they happen, so a run that would leave
the board simply fails to match.
"""

from __future__ import annotations
import logging

from .state import DEFAULT_RUN_LENGTH, Board, GameState, Piece

logger = logging.getLogger(__name__)

Coord = tuple[int, int]

# (d_column, d_row), in scan order. The two diagonals mirror each other.
DIRECTIONS: tuple[Coord, ...] = (
    (1, 0),    # horizontal
    (0, 1),    # vertical
    (1, 1),    # diagonal
    (-1, 1),   # anti-diagonal
)


def _run_from(
    board: Board,
    width: int,
    height: int,
    start: Coord,
    direction: Coord,
    run_length: int,
) -> tuple[Coord, ...] | None:
    """Return the run's coordinates if it is uniform and non-empty."""
    column, row = start
    d_col, d_row = direction
    first = None
    line = []
    for step in range(run_length):
        c = column + d_col * step
        r = row + d_row * step
        if not (0 <= c < width and 0 <= r < height and board.in_bounds(c, r)):
            return None
        piece = board.cell(c, r)
        if piece.is_empty:
            return None
        if first is None:
            first = piece
        elif piece is not first:
            return None
        line.append((c, r))
    return tuple(line)


def _scan(board: Board, width: int, height: int, run_length: int):
    """Yield every winning run, bottom row first, left to right."""
    for row in range(height):
        for column in range(width):
            for direction in DIRECTIONS:
                line = _run_from(board, width, height, (column, row), direction, run_length)
                if line is not None:
                    yield line


def check_winner(
    board: Board,
    width: int,
    height: int,
    run_length: int = DEFAULT_RUN_LENGTH,
) -> Piece | None:
    """
    Find the piece that owns a run of `run_length`, if any.

    Args:
        board: Board to scan
        width: Number of columns to scan
        height: Number of rows to scan
        run_length: How many aligned pieces make a win

    Returns:
        The winning Piece, or None when no uniform run exists
    """
    for line in _scan(board, width, height, run_length):
        column, row = line[0]
        winner = board.cell(column, row)
        logger.debug("Run of %d for %s starting at %s", run_length, winner.value, line[0])
        return winner
    return None


def find_winning_line(
    board: Board,
    run_length: int = DEFAULT_RUN_LENGTH,
) -> tuple[Coord, ...] | None:
    """Coordinates of the first winning run, for highlighting."""
    for line in _scan(board, board.width, board.height, run_length):
        return line
    return None


def is_draw(state: GameState) -> bool:
    """Board is full and nobody won."""
    return state.winner is None and state.board.is_full()
