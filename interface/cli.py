"""
Interactive text play against the engine or another human.

Moves are typed as two algebraic squares, "e2 e4" or "e2e4". The board is
printed after every move. Other commands:

    moves   list the moves available to the side to move
    undo    take back the last move (both moves in a computer game)
    quit    leave

Run with: python -m interface.cli [--computer black] [--difficulty hard]
"""

import argparse
import logging
import sys
from typing import Optional

from engine.board import Square, algebraic_to_square, move_to_uci, render_board
from engine.constants import COLORS, COMPUTER, DIFFICULTIES, MEDIUM, TWO_PLAYER
from engine.game import Game
from engine.rules import get_all_valid_moves

logger = logging.getLogger(__name__)


def parse_squares(text: str) -> tuple[Square, Square]:
    """
    Parse "e2 e4", "e2-e4" or "e2e4" into a pair of squares.

    Raises:
        ValueError: If the text is not two algebraic squares.
    """
    compact = text.replace("-", "").replace(" ", "")
    if len(compact) != 4:
        raise ValueError(f"expected two squares, got {text!r}")
    return algebraic_to_square(compact[:2]), algebraic_to_square(compact[2:])


def describe_status(game: Game) -> Optional[str]:
    if game.status.winner is not None:
        return f"Checkmate. {game.status.winner.capitalize()} wins."
    if game.status.is_over:
        return "Stalemate."
    if game.status.in_check:
        return f"{game.current_player.capitalize()} is in check."
    return None


def _print_position(game: Game) -> None:
    print(render_board(game.board))
    message = describe_status(game)
    if message:
        print(message)


def _play_computer(game: Game) -> None:
    if not game.computer_to_move or game.status.is_over:
        return
    side = game.computer_color.capitalize()
    record = game.computer_move()
    if record is None:
        print(f"{side} has no move.")
        return
    print(f"{side} plays {record.notation}")
    _print_position(game)


def run(game: Game, lines=None) -> int:
    """
    Drive ``game`` from ``lines`` (stdin by default) until quit or end of input.

    Returns the number of moves played, which the tests use.
    """
    lines = sys.stdin if lines is None else lines
    _print_position(game)
    _play_computer(game)

    for raw in lines:
        text = raw.strip().lower()
        if not text:
            continue
        if text == "quit":
            break
        if text == "moves":
            moves = get_all_valid_moves(game.board, game.current_player)
            print(" ".join(move_to_uci(m) for m in moves) or "(none)")
            continue
        if text == "undo":
            game.undo()
            if game.computer_to_move:
                game.undo()
            _print_position(game)
            _play_computer(game)
            continue

        try:
            from_square, to_square = parse_squares(text)
        except ValueError as e:
            print(f"? {e}")
            continue
        if not game.make_move(from_square, to_square):
            print(f"? illegal move: {text}")
            continue
        _print_position(game)
        _play_computer(game)

    return game.move_count


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="chessmaster", description="Play chess in the terminal.")
    parser.add_argument("--computer", choices=COLORS, help="color the engine plays (default: nobody)")
    parser.add_argument("--difficulty", choices=DIFFICULTIES, default=MEDIUM)
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, stream=sys.stderr)

    if args.computer:
        game = Game.new(COMPUTER, args.difficulty, args.computer)
    else:
        game = Game.new(TWO_PLAYER)
    logger.info("starting game: computer=%s difficulty=%s", args.computer, args.difficulty)
    run(game)
    return 0


if __name__ == "__main__":
    sys.exit(main())
