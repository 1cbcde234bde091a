"""
Game state: the position plus everything a front end needs to run a game.

``Game`` bundles the board with the side to move, the move history, the
captured pieces and the current status. The caller owns the instance and
drives it with ``make_move``, ``computer_move`` and ``undo``. Each accepted
move replaces ``board`` with a fresh copy, so a board obtained earlier from
the game is never changed behind the caller's back.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from engine.board import (
    Board,
    Move,
    Piece,
    Square,
    apply_move,
    copy_board,
    initialize_board,
    opponent,
    square_to_algebraic,
)
from engine.constants import BLACK, COLORS, COMPUTER, DIFFICULTIES, GAME_MODES, TWO_PLAYER, WHITE
from engine.rules import get_all_valid_moves, is_checkmate, is_king_in_check, is_stalemate, is_valid_move
from engine.search import select_move

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveRecord:
    """A played move with the piece that moved and the piece it captured, if any."""

    from_square: Square
    to_square: Square
    piece: Piece
    captured: Optional[Piece]
    notation: str


@dataclass(frozen=True)
class GameStatus:
    in_check: bool = False
    is_over: bool = False
    winner: Optional[str] = None


def classify(board: Board, color: str) -> GameStatus:
    """
    Classify the position for ``color``, the side about to move.

    Checkmate ends the game with the other color as winner; stalemate ends
    it with no winner.
    """
    checkmate = is_checkmate(board, color)
    stalemate = is_stalemate(board, color)
    return GameStatus(
        in_check=is_king_in_check(board, color),
        is_over=checkmate or stalemate,
        winner=opponent(color) if checkmate else None,
    )


@dataclass
class Game:
    board: Board = field(default_factory=initialize_board)
    current_player: str = WHITE
    mode: str = TWO_PLAYER
    difficulty: Optional[str] = None
    computer_color: str = BLACK
    history: list[MoveRecord] = field(default_factory=list)
    captured: list[Piece] = field(default_factory=list)
    status: GameStatus = field(default_factory=GameStatus)

    @classmethod
    def new(
        cls,
        mode: str = TWO_PLAYER,
        difficulty: Optional[str] = None,
        computer_color: str = BLACK,
    ) -> "Game":
        """
        Start a game from the initial position.

        Raises:
            ValueError: On an unknown mode or engine color, or a computer
                        game without a valid difficulty.
        """
        if mode not in GAME_MODES:
            raise ValueError(f"unknown game mode: {mode!r}")
        if mode == COMPUTER and difficulty not in DIFFICULTIES:
            raise ValueError(f"computer games need a difficulty, got {difficulty!r}")
        if computer_color not in COLORS:
            raise ValueError(f"unknown computer color: {computer_color!r}")
        return cls(mode=mode, difficulty=difficulty, computer_color=computer_color)

    @property
    def move_count(self) -> int:
        return len(self.history)

    @property
    def computer_to_move(self) -> bool:
        return self.mode == COMPUTER and self.current_player == self.computer_color

    def legal_targets(self, square: Square) -> list[Square]:
        """Destinations for the current player's piece on ``square``."""
        if not square.on_board:
            return []
        piece = self.board[square.row][square.col]
        if piece is None or piece.color != self.current_player:
            return []
        return [
            move.to_square
            for move in get_all_valid_moves(self.board, piece.color)
            if move.from_square == square
        ]

    def make_move(self, from_square: Square, to_square: Square) -> bool:
        """
        Play a move for the current player.

        Returns:
            True if the move was played. False if the game is over, it is
            the computer's turn, a square is off the board, the origin does
            not hold one of the current player's pieces, or the move breaks
            the movement rules.
        """
        if self.status.is_over or self.computer_to_move:
            return False
        if not (from_square.on_board and to_square.on_board):
            return False
        piece = self.board[from_square.row][from_square.col]
        if piece is None or piece.color != self.current_player:
            return False
        if not is_valid_move(self.board, from_square, to_square):
            return False
        self._play(Move(from_square, to_square))
        return True

    def computer_move(self) -> Optional[MoveRecord]:
        """
        Let the engine play for the current player in a computer game.

        Returns:
            The record of the move played, or None in a two-player game, on
            the human's turn, when the game is over, or when the engine finds
            no move.
        """
        if not self.computer_to_move or self.status.is_over or self.difficulty is None:
            return None
        move = select_move(self.board, self.current_player, self.difficulty)
        if move is None:
            logger.info("no move available for %s", self.current_player)
            return None
        return self._play(move)

    def undo(self) -> Optional[MoveRecord]:
        """Take back the last move. Returns the undone record, or None if there is none."""
        if not self.history:
            return None
        record = self.history.pop()
        board = copy_board(self.board)
        board[record.from_square.row][record.from_square.col] = record.piece
        board[record.to_square.row][record.to_square.col] = record.captured
        if record.captured is not None:
            self.captured.pop()
        self.board = board
        self.current_player = opponent(self.current_player)
        self.status = classify(self.board, self.current_player)
        return record

    def _play(self, move: Move) -> MoveRecord:
        src, dst = move
        record = MoveRecord(
            from_square=src,
            to_square=dst,
            piece=self.board[src.row][src.col],
            captured=self.board[dst.row][dst.col],
            notation=f"{square_to_algebraic(src)}-{square_to_algebraic(dst)}",
        )
        self.board = apply_move(self.board, move)
        self.history.append(record)
        if record.captured is not None:
            self.captured.append(record.captured)
        self.current_player = opponent(self.current_player)
        self.status = classify(self.board, self.current_player)
        return record
