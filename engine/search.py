"""
Computer move selection: minimax with alpha-beta pruning.

This module defines the interface the UI, the UCI handler and the web API
call to get a move for the computer side. ``select_move`` maps a difficulty
to a strategy:

    easy    uniformly random choice among the pseudo-legal moves
    medium  minimax to depth 2
    hard    minimax to depth 4

The search is plain minimax rather than negamax. One color (the AI color)
is the maximizing player for the whole tree and the static evaluation is
always taken from its point of view. Each node enumerates moves with the
rules module, plays each on a fresh board copy, and recurses; because every
child is a copy, nothing is ever undone.

Simplifications carried by design of the rule set:
    - Moves are pseudo-legal, so the tree may contain positions where a king
      has been captured. The evaluator values the king at zero and does not
      notice.
    - A side with no moves scores a flat -1000 (maximizer) or +1000
      (minimizer). Checkmate and stalemate are not told apart and there is
      no mate-distance encoding.
    - No move ordering, transposition table, iterative deepening or time
      control.

Threading model:
    None. The search is synchronous, keeps no module-level state and may be
    called from several threads at once as long as each caller owns its board.
"""

import logging
import math
import random
from dataclasses import dataclass
from typing import Optional

from engine.board import Board, Move, apply_move, move_to_uci, opponent
from engine.constants import DIFFICULTY_DEPTHS, EASY, NO_MOVES_SCORE
from engine.evaluate import evaluate
from engine.rules import get_all_valid_moves

logger = logging.getLogger(__name__)


@dataclass
class SearchStats:
    """
    Counters for a single search, owned by the caller.

    A fresh instance is passed into one ``select_move`` or ``best_move`` call
    and read back afterwards. The engine never keeps one between calls.

    Attributes:
        nodes:       Positions visited by minimax, leaves included.
        evaluations: Leaf positions scored by the static evaluator.
        cutoffs:     Times a node stopped early because beta <= alpha.
        depth:       Depth in plies requested for the search (0 for random).
    """

    nodes: int = 0
    evaluations: int = 0
    cutoffs: int = 0
    depth: int = 0


def minimax(
    board: Board,
    depth: int,
    alpha: float,
    beta: float,
    maximizing: bool,
    ai_color: str,
    stats: Optional[SearchStats] = None,
) -> float:
    """
    Minimax search with alpha-beta pruning.

    Args:
        board:      Position to search. Not modified; children are copies.
        depth:      Remaining depth in plies. At 0 the position is scored
                    statically.
        alpha:      Best score the maximizer is already guaranteed.
        beta:       Best score the minimizer is already guaranteed.
        maximizing: True when ``ai_color`` is to move at this node.
        ai_color:   The color the search plays for. Fixed for the whole tree.
        stats:      Optional counters to update.

    Returns:
        Score of the position from ``ai_color``'s point of view.
    """
    if stats is not None:
        stats.nodes += 1

    if depth == 0:
        if stats is not None:
            stats.evaluations += 1
        return evaluate(board, ai_color)

    current_color = ai_color if maximizing else opponent(ai_color)
    moves = get_all_valid_moves(board, current_color)

    if not moves:
        return -NO_MOVES_SCORE if maximizing else NO_MOVES_SCORE

    if maximizing:
        max_eval = -math.inf
        for move in moves:
            score = minimax(apply_move(board, move), depth - 1, alpha, beta, False, ai_color, stats)
            max_eval = max(max_eval, score)
            alpha = max(alpha, score)
            if beta <= alpha:
                if stats is not None:
                    stats.cutoffs += 1
                break
        return max_eval

    min_eval = math.inf
    for move in moves:
        score = minimax(apply_move(board, move), depth - 1, alpha, beta, True, ai_color, stats)
        min_eval = min(min_eval, score)
        beta = min(beta, score)
        if beta <= alpha:
            if stats is not None:
                stats.cutoffs += 1
            break
    return min_eval


def best_move(
    board: Board,
    color: str,
    depth: int,
    stats: Optional[SearchStats] = None,
) -> Optional[Move]:
    """
    Return the move with the highest minimax score for ``color``.

    Each root move is searched with a full (-inf, +inf) window and the
    opponent to move. A later move replaces the current best only if it
    scores strictly higher, so among equal scores the first move in
    enumeration order wins.

    Args:
        board: The current position. Not modified.
        color: Side to move, and the side the search plays for.
        depth: Total depth in plies, counting the root move.
        stats: Optional counters to update.

    Returns:
        The chosen move, or None if ``color`` has no moves.
    """
    if stats is not None:
        stats.depth = depth

    chosen: Optional[Move] = None
    best_value = -math.inf
    for move in get_all_valid_moves(board, color):
        value = minimax(apply_move(board, move), depth - 1, -math.inf, math.inf, False, color, stats)
        if value > best_value:
            best_value = value
            chosen = move

    if chosen is not None:
        logger.debug("best move %s for %s at depth %d: %.2f", move_to_uci(chosen), color, depth, best_value)
    return chosen


def random_move(board: Board, color: str, rng: Optional[random.Random] = None) -> Optional[Move]:
    """Return a uniformly random move for ``color``, or None if it has none."""
    moves = get_all_valid_moves(board, color)
    if not moves:
        return None
    return (rng or random).choice(moves)


def select_move(
    board: Board,
    color: str,
    difficulty: str,
    rng: Optional[random.Random] = None,
    stats: Optional[SearchStats] = None,
) -> Optional[Move]:
    """
    Pick the computer's move for ``color`` at the given difficulty.

    This is the stable entry point for every caller. It blocks until the
    search is done and carries no state from one call to the next.

    Args:
        board:      The current position. Not modified.
        color:      The side to move.
        difficulty: "easy", "medium" or "hard".
        rng:        Random source for "easy"; the module-level generator is
                    used when omitted.
        stats:      Optional counters to update.

    Returns:
        The chosen move, or None when ``color`` has no move available. None
        says nothing about checkmate or stalemate; use the rules module for
        that.

    Raises:
        ValueError: If ``difficulty`` is not one of the known levels.
    """
    if difficulty == EASY:
        return random_move(board, color, rng)
    try:
        depth = DIFFICULTY_DEPTHS[difficulty]
    except KeyError:
        raise ValueError(f"unknown difficulty: {difficulty!r}") from None
    return best_move(board, color, depth, stats)
