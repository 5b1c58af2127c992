"""
Dropline CLI - Command-line interface for the engine.

Usage:
    dropline play [--width W] [--height H] [--run-length N]
    dropline replay COL [COL ...] [--width W] [--height H] [--run-length N]
    dropline serve [--host HOST] [--port PORT]

Columns are zero-based. In `play`, type a column number and press
enter; `r` resets the board and `q` quits.
"""

import argparse
import sys

from .config import configure_logging, load_settings
from .engine_core import GameState, InvalidDimensions, Piece, drop_piece, initial_state, reset
from .engine_core.rules import find_winning_line, is_draw

SYMBOLS = {
    Piece.FIRST: "X",
    Piece.SECOND: "O",
    Piece.EMPTY: ".",
}


def render(state: GameState) -> str:
    """ASCII picture of the board, top row first."""
    header = " " + " ".join(str(c % 10) for c in range(state.width))
    rows = [
        "|" + "|".join(SYMBOLS[piece] for piece in row) + "|"
        for row in state.board.rows_top_down()
    ]
    return "\n".join([header, *rows])


def describe(state: GameState) -> str:
    """One-line status for the game."""
    if state.winner is not None:
        line = find_winning_line(state.board, state.run_length)
        return f"{SYMBOLS[state.winner.piece]} wins: {list(line) if line else ''}"
    if is_draw(state):
        return "Draw: the board is full."
    return f"{SYMBOLS[state.current_turn.piece]} to move."


def main(argv=None):
    """Main CLI entry point."""
    settings = load_settings()
    parser = argparse.ArgumentParser(
        description="Dropline - Connect Four Game Engine",
        prog="dropline",
    )
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    def add_board_args(sub):
        sub.add_argument("--width", type=int, default=settings.default_width, help="Columns")
        sub.add_argument("--height", type=int, default=settings.default_height, help="Rows")
        sub.add_argument(
            "--run-length", type=int, default=settings.run_length,
            help="Pieces in a row needed to win",
        )

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a two-player game in the terminal")
    add_board_args(play_parser)

    # Replay command
    replay_parser = subparsers.add_parser("replay", help="Apply a list of drops and show the result")
    replay_parser.add_argument("columns", nargs="+", type=int, help="Columns to drop into, in order")
    add_board_args(replay_parser)

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API with uvicorn")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on")

    args = parser.parse_args(argv)
    configure_logging(args.log_level.upper())

    if args.command == "play":
        return cmd_play(args)
    elif args.command == "replay":
        return cmd_replay(args)
    elif args.command == "serve":
        return cmd_serve(args)
    else:
        parser.print_help()
        return 1


def _start(args) -> GameState:
    try:
        return initial_state(args.width, args.height, args.run_length)
    except InvalidDimensions as e:
        print(f"Error: {e}")
        sys.exit(2)


def cmd_play(args, stdin=None):
    """Interactive two-player game."""
    stdin = stdin or sys.stdin
    state = _start(args)
    print(render(state))
    print(describe(state))

    for raw in stdin:
        command = raw.strip().lower()
        if not command:
            continue
        if command == "q":
            break
        if command == "r":
            state = reset(args.width, args.height, args.run_length)
        else:
            try:
                column = int(command)
            except ValueError:
                print(f"Not a column: {command!r}")
                continue
            new_state = drop_piece(state, column)
            if new_state is state:
                print(f"Column {column} is not playable.")
            state = new_state
        print(render(state))
        print(describe(state))
    return 0


def cmd_replay(args):
    """Apply drops in order and print the final board."""
    state = _start(args)
    for column in args.columns:
        state = drop_piece(state, column)
    print(render(state))
    print(describe(state))
    return 0


def cmd_serve(args):
    """Run the HTTP API. Logging is already configured by main()."""
    try:
        import uvicorn
    except ImportError:
        print("uvicorn not installed. Install with: pip install dropline[server]", file=sys.stderr)
        return 1

    from .api.app import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port, log_config=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
