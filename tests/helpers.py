"""Shared board builders for the test suite."""

from engine.board import Board, Piece, algebraic_to_square, empty_board
from engine.constants import BISHOP, BLACK, KING, KNIGHT, PAWN, QUEEN, ROOK, WHITE

_KINDS = {"k": KING, "q": QUEEN, "r": ROOK, "b": BISHOP, "n": KNIGHT, "p": PAWN}


def make_board(placements: dict[str, str]) -> Board:
    """
    Build a board from {square: FEN letter}, e.g. {"e1": "K", "e8": "r"}.

    Uppercase letters are White pieces, lowercase are Black.
    """
    board = empty_board()
    for name, letter in placements.items():
        square = algebraic_to_square(name)
        color = WHITE if letter.isupper() else BLACK
        board[square.row][square.col] = Piece(_KINDS[letter.lower()], color)
    return board


def sq(name: str):
    return algebraic_to_square(name)
