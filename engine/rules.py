"""
Move legality, move enumeration, and check / game-end detection.

Every function here is a pure query over a board: nothing is mutated and
nothing is cached between calls.

Legality is pseudo-legal throughout. ``is_valid_move`` and
``get_all_valid_moves`` apply the per-piece movement rules and the
occupancy constraints, but they do not reject a move that leaves the
mover's own king attacked. The only place where the resulting check is
tested is ``is_checkmate``, which tries every move and asks whether the
king is still attacked afterwards. Castling, en passant and promotion do
not exist.
"""

from typing import Optional

from engine.board import Board, Move, Square, apply_move, opponent
from engine.constants import (
    BISHOP,
    BOARD_SIZE,
    KING,
    KNIGHT,
    PAWN,
    PAWN_DIRECTION,
    PAWN_START_ROW,
    QUEEN,
    ROOK,
)

# Row-major, a8 first. Move enumeration order depends on it.
_ALL_SQUARES = tuple(Square(row, col) for row in range(BOARD_SIZE) for col in range(BOARD_SIZE))


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def is_path_clear(board: Board, from_square: Square, to_square: Square) -> bool:
    """
    Return True if every square strictly between the two squares is empty.

    Walks unit steps along the sign of each delta, so it is only meaningful
    for squares on a common rank, file or diagonal. Both end squares are
    excluded from the test.
    """
    row_step = _sign(to_square.row - from_square.row)
    col_step = _sign(to_square.col - from_square.col)
    row = from_square.row + row_step
    col = from_square.col + col_step
    while row != to_square.row or col != to_square.col:
        if board[row][col] is not None:
            return False
        row += row_step
        col += col_step
    return True


def _is_valid_pawn_move(board: Board, from_square: Square, to_square: Square, color: str) -> bool:
    direction = PAWN_DIRECTION[color]
    row_diff = to_square.row - from_square.row
    col_diff = abs(to_square.col - from_square.col)
    target = board[to_square.row][to_square.col]

    if col_diff == 0:
        if row_diff == direction and target is None:
            return True
        # Double step: both the square passed over and the destination must be empty.
        if (
            from_square.row == PAWN_START_ROW[color]
            and row_diff == 2 * direction
            and target is None
            and board[from_square.row + direction][from_square.col] is None
        ):
            return True
        return False

    # Diagonal step is a capture only; the caller has already excluded own pieces.
    return col_diff == 1 and row_diff == direction and target is not None


def _is_valid_rook_move(board: Board, from_square: Square, to_square: Square) -> bool:
    if from_square.row != to_square.row and from_square.col != to_square.col:
        return False
    return is_path_clear(board, from_square, to_square)


def _is_valid_bishop_move(board: Board, from_square: Square, to_square: Square) -> bool:
    row_diff = abs(to_square.row - from_square.row)
    col_diff = abs(to_square.col - from_square.col)
    if row_diff != col_diff or row_diff == 0:
        return False
    return is_path_clear(board, from_square, to_square)


def _is_valid_queen_move(board: Board, from_square: Square, to_square: Square) -> bool:
    return _is_valid_rook_move(board, from_square, to_square) or _is_valid_bishop_move(
        board, from_square, to_square
    )


def _is_valid_knight_move(from_square: Square, to_square: Square) -> bool:
    row_diff = abs(to_square.row - from_square.row)
    col_diff = abs(to_square.col - from_square.col)
    return (row_diff, col_diff) in ((2, 1), (1, 2))


def _is_valid_king_move(from_square: Square, to_square: Square) -> bool:
    return abs(to_square.row - from_square.row) <= 1 and abs(to_square.col - from_square.col) <= 1


def is_valid_move(board: Board, from_square: Square, to_square: Square) -> bool:
    """
    Return True if the piece on ``from_square`` may move to ``to_square``.

    The generic preconditions are checked first and short-circuit to False:
    there must be a piece on the origin, the destination must not hold a
    piece of the same color, and the two squares must differ. The rule for
    the moving piece's kind decides the rest.

    Args:
        board:       The current position. Not modified.
        from_square: Origin square. Must be on the board.
        to_square:   Destination square. Must be on the board.

    Returns:
        True if the move is pseudo-legal. A move that leaves the mover's own
        king attacked still counts as valid.

    Raises:
        IndexError: If either square lies off the board (caller error).
    """
    piece = board[from_square.row][from_square.col]
    if piece is None:
        return False
    target = board[to_square.row][to_square.col]
    if target is not None and target.color == piece.color:
        return False
    if from_square == to_square:
        return False

    kind = piece.kind
    if kind == PAWN:
        return _is_valid_pawn_move(board, from_square, to_square, piece.color)
    if kind == ROOK:
        return _is_valid_rook_move(board, from_square, to_square)
    if kind == KNIGHT:
        return _is_valid_knight_move(from_square, to_square)
    if kind == BISHOP:
        return _is_valid_bishop_move(board, from_square, to_square)
    if kind == QUEEN:
        return _is_valid_queen_move(board, from_square, to_square)
    if kind == KING:
        return _is_valid_king_move(from_square, to_square)
    return False


def get_all_valid_moves(board: Board, color: str) -> list[Move]:
    """
    Enumerate every pseudo-legal move for ``color``.

    Origins are scanned row-major (a8, b8, ... h1), and for each piece of
    ``color`` the destinations are scanned row-major as well. The search
    relies on this order for its tie-break, so it must not change.

    This is a brute-force 64 x 64 scan per call and dominates search cost.
    """
    moves: list[Move] = []
    for from_square in _ALL_SQUARES:
        piece = board[from_square.row][from_square.col]
        if piece is None or piece.color != color:
            continue
        for to_square in _ALL_SQUARES:
            if is_valid_move(board, from_square, to_square):
                moves.append(Move(from_square, to_square))
    return moves


def find_king(board: Board, color: str) -> Optional[Square]:
    """Return the square of ``color``'s king, or None if it is not on the board."""
    for row in range(BOARD_SIZE):
        for col in range(BOARD_SIZE):
            piece = board[row][col]
            if piece is not None and piece.kind == KING and piece.color == color:
                return Square(row, col)
    return None


def is_king_in_check(board: Board, color: str) -> bool:
    """
    Return True if any opposing move lands on ``color``'s king.

    A board without a king of ``color`` is never in check.
    """
    king_square = find_king(board, color)
    if king_square is None:
        return False
    return any(move.to_square == king_square for move in get_all_valid_moves(board, opponent(color)))


def is_checkmate(board: Board, color: str) -> bool:
    """
    Return True if ``color`` is in check and no move gets the king out.

    Every pseudo-legal move is played on a copy of the board; checkmate holds
    when every resulting position still has the king attacked. A side that
    is in check with no moves at all is therefore also mated.
    """
    if not is_king_in_check(board, color):
        return False
    for move in get_all_valid_moves(board, color):
        if not is_king_in_check(apply_move(board, move), color):
            return False
    return True


def is_stalemate(board: Board, color: str) -> bool:
    """Return True if ``color`` is not in check and has no moves at all."""
    if is_king_in_check(board, color):
        return False
    return not get_all_valid_moves(board, color)
