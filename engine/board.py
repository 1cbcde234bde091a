"""
Board model: pieces, squares, moves, and the 8x8 board value.

The board is a plain list of eight rows, each a list of eight optional
pieces. Row 0 is rank 8 (Black's back rank) and column 0 is file 'a', so
``board[0][0]`` is a8 and ``board[7][7]`` is h1.

Boards are values owned by their caller. No function in the engine mutates
a board it was given: ``apply_move`` returns a fresh board whose rows are
all copied, so a search can branch on copies and never needs to undo a
move. Pieces are frozen, so sharing one piece instance between copies is
safe.

FEN conversion goes through python-chess, which already knows how to parse
and emit the notation. Only piece placement and side to move are carried
across; castling, en-passant and clock fields have no meaning here.
"""

from dataclasses import dataclass
from typing import NamedTuple, Optional

import chess

from engine.constants import (
    BACK_RANK,
    BLACK,
    BOARD_SIZE,
    FILES,
    PAWN,
    WHITE,
)


@dataclass(frozen=True)
class Piece:
    """A chess piece: one of the six kinds, in one of the two colors."""

    kind: str
    color: str

    @property
    def symbol(self) -> str:
        """FEN letter for the piece: uppercase for White, lowercase for Black."""
        letter = "n" if self.kind == "knight" else self.kind[0]
        return letter.upper() if self.color == WHITE else letter


class Square(NamedTuple):
    row: int
    col: int

    @property
    def on_board(self) -> bool:
        return 0 <= self.row < BOARD_SIZE and 0 <= self.col < BOARD_SIZE


class Move(NamedTuple):
    """
    A move from one square to another.

    A move carries no piece and no legality; it only means something
    relative to the board it was generated from.
    """

    from_square: Square
    to_square: Square


Board = list[list[Optional[Piece]]]


def opponent(color: str) -> str:
    return BLACK if color == WHITE else WHITE


def empty_board() -> Board:
    return [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]


def initialize_board() -> Board:
    """
    Return the standard starting position.

    Black occupies rows 0 (back rank) and 1 (pawns); White occupies rows
    6 (pawns) and 7 (back rank). Every cell gets its own entry, so no two
    squares share a list slot.
    """
    board = empty_board()
    for col, kind in enumerate(BACK_RANK):
        board[0][col] = Piece(kind, BLACK)
        board[1][col] = Piece(PAWN, BLACK)
        board[6][col] = Piece(PAWN, WHITE)
        board[7][col] = Piece(kind, WHITE)
    return board


def copy_board(board: Board) -> Board:
    return [row[:] for row in board]


def apply_move(board: Board, move: Move) -> Board:
    """
    Return a new board with ``move`` played on it.

    The moving piece replaces whatever stands on the destination square and
    its origin square is emptied. No legality check is made; pass only moves
    produced by or checked against the rules module.

    Args:
        board: The position to start from. Not modified.
        move:  The move to play.

    Returns:
        A fresh board. Every row is copied, so the result never aliases
        ``board``.
    """
    new_board = copy_board(board)
    src, dst = move
    new_board[dst.row][dst.col] = new_board[src.row][src.col]
    new_board[src.row][src.col] = None
    return new_board


# ---------------------------------------------------------------------------
# Notation
# ---------------------------------------------------------------------------


def square_to_algebraic(square: Square) -> str:
    """Convert a square to its algebraic name, e.g. ``Square(0, 0) -> "a8"``."""
    return f"{FILES[square.col]}{BOARD_SIZE - square.row}"


def algebraic_to_square(name: str) -> Square:
    """
    Convert an algebraic square name such as ``"e4"`` to a Square.

    Raises:
        ValueError: If ``name`` is not a file a-h followed by a rank 1-8.
    """
    text = name.strip().lower()
    if len(text) != 2 or text[0] not in FILES or text[1] not in "12345678":
        raise ValueError(f"not a square: {name!r}")
    return Square(BOARD_SIZE - int(text[1]), FILES.index(text[0]))


def _from_chess_square(square: chess.Square) -> Square:
    return Square(BOARD_SIZE - 1 - chess.square_rank(square), chess.square_file(square))


def _to_chess_square(square: Square) -> chess.Square:
    return chess.square(square.col, BOARD_SIZE - 1 - square.row)


def parse_uci_move(text: str) -> Move:
    """
    Parse a coordinate move such as ``"e2e4"``.

    Promotion suffixes and the null move are rejected because the engine has
    no promotion choice.

    Raises:
        ValueError: On anything that is not a plain four-character move.
    """
    parsed = chess.Move.from_uci(text.strip().lower())
    if not parsed or parsed.promotion is not None or parsed.drop is not None:
        raise ValueError(f"unsupported move: {text!r}")
    return Move(_from_chess_square(parsed.from_square), _from_chess_square(parsed.to_square))


def move_to_uci(move: Move) -> str:
    return square_to_algebraic(move.from_square) + square_to_algebraic(move.to_square)


def board_from_fen(fen: str) -> tuple[Board, str]:
    """
    Build a board from a FEN string.

    Args:
        fen: A FEN string. Castling, en-passant and clock fields are parsed
             for validity but otherwise ignored.

    Returns:
        Tuple of (board, side_to_move) where side_to_move is "white" or
        "black".

    Raises:
        ValueError: If python-chess rejects the FEN.
    """
    parsed = chess.Board(fen)
    board = empty_board()
    for square, piece in parsed.piece_map().items():
        target = _from_chess_square(square)
        color = WHITE if piece.color == chess.WHITE else BLACK
        board[target.row][target.col] = Piece(chess.piece_name(piece.piece_type), color)
    turn = WHITE if parsed.turn == chess.WHITE else BLACK
    return board, turn


def board_to_fen(board: Board, turn: str = WHITE) -> str:
    """Emit a FEN for ``board`` with ``turn`` to move and no castling rights."""
    out = chess.Board(None)
    for row in range(BOARD_SIZE):
        for col in range(BOARD_SIZE):
            piece = board[row][col]
            if piece is None:
                continue
            out.set_piece_at(
                _to_chess_square(Square(row, col)),
                chess.Piece(chess.PIECE_NAMES.index(piece.kind), piece.color == WHITE),
            )
    out.turn = turn == WHITE
    return out.fen()


def render_board(board: Board) -> str:
    """Render the board as text, rank 8 at the top, with file and rank labels."""
    lines = []
    for row in range(BOARD_SIZE):
        cells = [piece.symbol if piece else "." for piece in board[row]]
        lines.append(f"{BOARD_SIZE - row} " + " ".join(cells))
    lines.append("  " + " ".join(FILES))
    return "\n".join(lines)
