"""
FastAPI web application for the ChessMaster engine.

The browser UI owns the game: it keeps the board, the move history and the
clock, and calls these endpoints whenever it needs the rules or the
computer opponent.

    GET  /api/new       starting position
    POST /api/validate  is a move legal for the side to move; resulting FEN
    POST /api/status    check / checkmate / stalemate and the legal moves
    POST /api/move      the computer's move at a difficulty

Architecture notes:
- Sync endpoints (not async): FastAPI runs sync handlers in a thread pool,
  which is the right pattern for CPU-bound calls like the search.
- Stateless per request: the client sends the full FEN each time; no server
  side board is kept between requests.
- Positions travel as FEN. Only piece placement and side to move matter.
"""

import logging
from typing import Literal, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, field_validator

from engine.board import (
    Board,
    apply_move,
    board_from_fen,
    board_to_fen,
    initialize_board,
    move_to_uci,
    opponent,
    parse_uci_move,
)
from engine.constants import MEDIUM, WHITE
from engine.rules import get_all_valid_moves, is_checkmate, is_king_in_check, is_stalemate, is_valid_move
from engine.search import SearchStats, select_move

# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------

logging.basicConfig(level=logging.INFO)
_log = logging.getLogger(__name__)

app = FastAPI(title="ChessMaster", version="1.0.0")


# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------


class PositionRequest(BaseModel):
    """A position given as FEN. The side to move comes from the FEN."""

    fen: str


class ValidateRequest(PositionRequest):
    """
    A candidate move for the side to move.

    Fields:
        move: Coordinate notation, e.g. "e2e4". Promotion suffixes are
              rejected since the engine has no promotion choice.
    """

    move: str

    @field_validator("move")
    @classmethod
    def check_move_format(cls, v: str) -> str:
        """Reject anything that is not a plain four-character move."""
        parse_uci_move(v)
        return v.strip().lower()


class MoveRequest(PositionRequest):
    difficulty: Literal["easy", "medium", "hard"] = MEDIUM


class NewGameResponse(BaseModel):
    fen: str
    turn: str


class ValidateResponse(BaseModel):
    """
    Fields:
        valid: Whether the move is legal for the side to move.
        fen:   Position after the move, with the other side to move.
               None when the move is not valid.
    """

    valid: bool
    fen: Optional[str] = None


class StatusResponse(BaseModel):
    """
    Fields:
        turn:        Side to move.
        in_check:    Whether the side to move is in check.
        checkmate:   In check and no move gets out of it.
        stalemate:   Not in check and no move at all.
        game_over:   checkmate or stalemate.
        winner:      The other side when checkmated, else None.
        legal_moves: Pseudo-legal moves for the side to move, in coordinate
                     notation and enumeration order.
    """

    turn: str
    in_check: bool
    checkmate: bool
    stalemate: bool
    game_over: bool
    winner: Optional[str] = None
    legal_moves: list[str]


class MoveResponse(BaseModel):
    """
    Fields:
        move:  The engine's move in coordinate notation.
        fen:   Position after the move is applied.
        nodes: Positions visited by the search (0 for "easy").
    """

    move: str
    fen: str
    nodes: int


def _parse_position(fen: str) -> tuple[Board, str]:
    try:
        return board_from_fen(fen)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid FEN: {exc}") from exc


# ---------------------------------------------------------------------------
# API routes
# ---------------------------------------------------------------------------


@app.get("/api/new", response_model=NewGameResponse)
def api_new() -> NewGameResponse:
    """Return the standard starting position with White to move."""
    return NewGameResponse(fen=board_to_fen(initialize_board(), WHITE), turn=WHITE)


@app.post("/api/validate", response_model=ValidateResponse)
def api_validate(request: ValidateRequest) -> ValidateResponse:
    """
    Check a move against the rules for the side to move.

    A move of the opponent's piece is reported as invalid, the same as a
    move that breaks the movement rules.
    """
    board, turn = _parse_position(request.fen)
    move = parse_uci_move(request.move)

    piece = board[move.from_square.row][move.from_square.col]
    if piece is None or piece.color != turn or not is_valid_move(board, *move):
        return ValidateResponse(valid=False)

    return ValidateResponse(valid=True, fen=board_to_fen(apply_move(board, move), opponent(turn)))


@app.post("/api/status", response_model=StatusResponse)
def api_status(request: PositionRequest) -> StatusResponse:
    """Classify the position for the side to move."""
    board, turn = _parse_position(request.fen)
    checkmate = is_checkmate(board, turn)
    stalemate = is_stalemate(board, turn)
    return StatusResponse(
        turn=turn,
        in_check=is_king_in_check(board, turn),
        checkmate=checkmate,
        stalemate=stalemate,
        game_over=checkmate or stalemate,
        winner=opponent(turn) if checkmate else None,
        legal_moves=[move_to_uci(m) for m in get_all_valid_moves(board, turn)],
    )


@app.post("/api/move", response_model=MoveResponse)
def api_move(request: MoveRequest) -> MoveResponse:
    """
    Compute the computer's move for the side to move.

    Raises:
        HTTPException 400: Malformed FEN, or the side to move has no move.
        HTTPException 500: The search raised.
    """
    board, turn = _parse_position(request.fen)

    stats = SearchStats()
    try:
        move = select_move(board, turn, request.difficulty, stats=stats)
    except Exception as exc:
        _log.exception("Engine search failed for FEN=%s", request.fen)
        raise HTTPException(status_code=500, detail=f"Engine error: {exc}") from exc

    if move is None:
        raise HTTPException(status_code=400, detail=f"No move available for {turn}")

    uci = move_to_uci(move)
    _log.info(
        "Move=%s difficulty=%s nodes=%d fen=%s",
        uci,
        request.difficulty,
        stats.nodes,
        request.fen[:40],
    )

    return MoveResponse(
        move=uci,
        fen=board_to_fen(apply_move(board, move), opponent(turn)),
        nodes=stats.nodes,
    )
