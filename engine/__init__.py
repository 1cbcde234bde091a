"""
ChessMaster engine package.

This package implements the rules engine and the computer opponent: board
representation, per-piece move legality, check / checkmate / stalemate
detection, and a minimax search with alpha-beta pruning.

Modules:
    constants: Piece kinds, piece values, positional weights, difficulty depths
    board:     Piece, Square, Move and Board values; notation and FEN
    rules:     Move legality, move enumeration, check and game-end detection
    evaluate:  Static evaluation (material + simple positional bonuses)
    search:    Minimax with alpha-beta pruning, difficulty-based move selection
    game:      Game state value: history, captures, undo, status
"""

from engine.board import (
    Board,
    Move,
    Piece,
    Square,
    algebraic_to_square,
    apply_move,
    board_from_fen,
    board_to_fen,
    copy_board,
    initialize_board,
    move_to_uci,
    parse_uci_move,
    render_board,
    square_to_algebraic,
)
from engine.evaluate import evaluate
from engine.game import Game, GameStatus, MoveRecord
from engine.rules import (
    get_all_valid_moves,
    is_checkmate,
    is_king_in_check,
    is_stalemate,
    is_valid_move,
)
from engine.search import SearchStats, best_move, minimax, select_move

__all__ = [
    "Board",
    "Game",
    "GameStatus",
    "Move",
    "MoveRecord",
    "Piece",
    "SearchStats",
    "Square",
    "algebraic_to_square",
    "apply_move",
    "best_move",
    "board_from_fen",
    "board_to_fen",
    "copy_board",
    "evaluate",
    "get_all_valid_moves",
    "initialize_board",
    "is_checkmate",
    "is_king_in_check",
    "is_stalemate",
    "is_valid_move",
    "minimax",
    "move_to_uci",
    "parse_uci_move",
    "render_board",
    "select_move",
    "square_to_algebraic",
]
