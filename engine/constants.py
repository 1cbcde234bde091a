"""
Engine constants: piece identities, piece values, positional weights, and
search parameters.

All numeric constants used throughout the engine are defined here so that
the rules, evaluation and search modules never introduce their own magic
numbers. Centralizing constants makes tuning and experimentation easier.

Piece values are in pawn units (1 pawn = 1.0). Positional bonuses are
fractions of a pawn, which is why scores are floats rather than centipawn
integers.
"""

# ---------------------------------------------------------------------------
# Colors and piece kinds
# ---------------------------------------------------------------------------

WHITE: str = "white"
BLACK: str = "black"
COLORS: tuple[str, str] = (WHITE, BLACK)

KING: str = "king"
QUEEN: str = "queen"
ROOK: str = "rook"
BISHOP: str = "bishop"
KNIGHT: str = "knight"
PAWN: str = "pawn"
PIECE_KINDS: tuple[str, ...] = (KING, QUEEN, ROOK, BISHOP, KNIGHT, PAWN)

# Back rank from file a to file h, identical for both colors.
BACK_RANK: tuple[str, ...] = (ROOK, KNIGHT, BISHOP, QUEEN, KING, BISHOP, KNIGHT, ROOK)

# ---------------------------------------------------------------------------
# Board geometry
# ---------------------------------------------------------------------------
# Row 0 is rank 8 (Black's back rank), row 7 is rank 1 (White's back rank).
# Column 0 is file 'a'.

BOARD_SIZE: int = 8
FILES: str = "abcdefgh"

# Rows where each color's pawns start; the double step is allowed only here.
PAWN_START_ROW: dict[str, int] = {WHITE: 6, BLACK: 1}

# Direction of pawn travel in row terms: White moves toward row 0.
PAWN_DIRECTION: dict[str, int] = {WHITE: -1, BLACK: 1}

# Geometric centre of the board in (row, col) coordinates.
BOARD_CENTER: float = 3.5

# ---------------------------------------------------------------------------
# Piece values (pawn units)
# ---------------------------------------------------------------------------
# The king is worth nothing in material terms; losing it is never scored
# directly because check detection is what keeps it on the board.

PIECE_VALUES: dict[str, int] = {
    PAWN:   1,
    KNIGHT: 3,
    BISHOP: 3,
    ROOK:   5,
    QUEEN:  9,
    KING:   0,
}

# ---------------------------------------------------------------------------
# Positional weights
# ---------------------------------------------------------------------------
# PAWN_ADVANCE_WEIGHT:  bonus per row a pawn has advanced from its start row.
# MINOR_CENTER_WEIGHT:  knights and bishops earn (7 - centre distance) * weight.
# KING_CENTER_WEIGHT:   the king earns centre distance * weight, so it prefers
#                       the edges. This is a crude stand-in for king safety.
# MINOR_CENTER_BASE:    the largest possible Manhattan distance from the centre.

PAWN_ADVANCE_WEIGHT: float = 0.1
MINOR_CENTER_WEIGHT: float = 0.1
MINOR_CENTER_BASE: float = 7.0
KING_CENTER_WEIGHT: float = 0.05

# ---------------------------------------------------------------------------
# Search parameters
# ---------------------------------------------------------------------------
# NO_MOVES_SCORE is returned by minimax when the side to move has no moves
# at all. It does not distinguish checkmate from stalemate and carries no
# mate distance; it only has to dominate any material swing (max ~40).

NO_MOVES_SCORE: float = 1000.0

EASY: str = "easy"
MEDIUM: str = "medium"
HARD: str = "hard"
DIFFICULTIES: tuple[str, ...] = (EASY, MEDIUM, HARD)

# Search depth in plies per difficulty. "easy" does not search at all.
DIFFICULTY_DEPTHS: dict[str, int] = {
    MEDIUM: 2,
    HARD:   4,
}

# ---------------------------------------------------------------------------
# Game modes
# ---------------------------------------------------------------------------

TWO_PLAYER: str = "two_player"
COMPUTER: str = "computer"
GAME_MODES: tuple[str, str] = (TWO_PLAYER, COMPUTER)
