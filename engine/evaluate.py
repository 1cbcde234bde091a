"""
Static evaluation: material balance plus light positional bonuses.

The search needs a number for every leaf position so it can compare moves.
This evaluator sums, over every piece on the board, the piece's material
value plus a small bonus for where it stands. Pieces belonging to the side
the engine plays for are added; the opponent's are subtracted.

Positional terms are deliberately simple:
- Pawns earn a tenth of a pawn for every row advanced from their start row.
- Knights and bishops earn more the closer they are to the centre.
- The king earns a little for staying away from the centre.
- Rooks and queens get no positional term.

Unlike a negamax evaluator, the score is not relative to the side to move.
It is always from the perspective of ``ai_color``, because the minimax
search keeps one fixed maximizing player for the whole tree.
"""

from engine.board import Board, Piece, Square
from engine.constants import (
    BISHOP,
    BOARD_CENTER,
    BOARD_SIZE,
    KING,
    KING_CENTER_WEIGHT,
    KNIGHT,
    MINOR_CENTER_BASE,
    MINOR_CENTER_WEIGHT,
    PAWN,
    PAWN_ADVANCE_WEIGHT,
    PAWN_START_ROW,
    PIECE_VALUES,
    WHITE,
)


def center_distance(square: Square) -> float:
    """Manhattan distance from the geometric centre (3.5, 3.5)."""
    return abs(BOARD_CENTER - square.row) + abs(BOARD_CENTER - square.col)


def positional_bonus(piece: Piece, square: Square) -> float:
    """
    Positional bonus for ``piece`` standing on ``square``, in pawn units.

    Returns:
        Always the bonus for the piece's owner; the caller applies the sign.
    """
    kind = piece.kind
    if kind == PAWN:
        # Rows advanced from the start row: (6 - row) for White, (row - 1) for Black.
        if piece.color == WHITE:
            advanced = PAWN_START_ROW[WHITE] - square.row
        else:
            advanced = square.row - PAWN_START_ROW[piece.color]
        return advanced * PAWN_ADVANCE_WEIGHT
    if kind in (KNIGHT, BISHOP):
        return (MINOR_CENTER_BASE - center_distance(square)) * MINOR_CENTER_WEIGHT
    if kind == KING:
        return center_distance(square) * KING_CENTER_WEIGHT
    return 0.0


def evaluate(board: Board, ai_color: str) -> float:
    """
    Score ``board`` from ``ai_color``'s point of view.

    Args:
        board:    The position to score. Not modified.
        ai_color: The color the engine is playing. Its pieces count
                  positively, the opponent's negatively.

    Returns:
        Score in pawn units. Positive means ``ai_color`` is ahead.

    Example:
        >>> from engine.board import initialize_board
        >>> abs(evaluate(initialize_board(), "white")) < 1e-9  # symmetric start
        True
    """
    score = 0.0
    for row in range(BOARD_SIZE):
        for col in range(BOARD_SIZE):
            piece = board[row][col]
            if piece is None:
                continue
            value = PIECE_VALUES[piece.kind] + positional_bonus(piece, Square(row, col))
            score += value if piece.color == ai_color else -value
    return score
