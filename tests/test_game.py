"""
Tests for the Game state value: turn order, history, captures, undo, status.
"""

import pytest

from engine.board import Piece, Square, initialize_board
from engine.constants import BLACK, COMPUTER, EASY, PAWN, QUEEN, WHITE
from engine.game import Game, GameStatus, classify
from tests.helpers import make_board, sq

FOOLS_MATE = (("f2", "f3"), ("e7", "e5"), ("g2", "g4"), ("d8", "h4"))


def play(game, *moves):
    for origin, dest in moves:
        assert game.make_move(sq(origin), sq(dest)), f"{origin}-{dest} rejected"


class TestNewGame:
    def test_defaults(self):
        game = Game.new()
        assert game.board == initialize_board()
        assert game.current_player == WHITE
        assert game.history == []
        assert game.captured == []
        assert game.status == GameStatus()
        assert game.move_count == 0

    def test_computer_game_needs_difficulty(self):
        with pytest.raises(ValueError):
            Game.new("computer")

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            Game.new("three_player")

    def test_computer_plays_black_by_default(self):
        assert Game.new("computer", "easy").computer_color == BLACK

    def test_unknown_computer_color(self):
        with pytest.raises(ValueError):
            Game.new("computer", "easy", "green")


class TestMakeMove:
    def test_records_move(self):
        game = Game.new()
        assert game.make_move(sq("e2"), sq("e4"))
        assert game.current_player == BLACK
        record = game.history[-1]
        assert record.notation == "e2-e4"
        assert record.piece == Piece(PAWN, WHITE)
        assert record.captured is None
        assert game.board[4][4] == Piece(PAWN, WHITE)

    def test_replaces_board(self):
        game = Game.new()
        before = game.board
        game.make_move(sq("e2"), sq("e4"))
        assert game.board is not before
        assert before == initialize_board()

    def test_out_of_turn(self):
        game = Game.new()
        assert not game.make_move(sq("e7"), sq("e5"))
        assert game.current_player == WHITE

    def test_illegal(self):
        game = Game.new()
        assert not game.make_move(sq("e2"), sq("e5"))
        assert not game.make_move(sq("e4"), sq("e5"))
        assert game.history == []

    def test_off_board(self):
        game = Game.new()
        assert not game.make_move(sq("e2"), Square(-1, 4))

    def test_capture(self):
        game = Game.new()
        play(game, ("e2", "e4"), ("d7", "d5"), ("e4", "d5"))
        assert game.captured == [Piece(PAWN, BLACK)]
        assert game.history[-1].captured == Piece(PAWN, BLACK)

    def test_check_status(self):
        game = Game.new()
        play(game, ("e2", "e4"), ("f7", "f6"), ("d1", "h5"))
        assert game.status.in_check
        assert not game.status.is_over


class TestGameEnd:
    def test_fools_mate(self):
        game = Game.new()
        play(game, *FOOLS_MATE)
        assert game.status == GameStatus(in_check=True, is_over=True, winner=BLACK)

    def test_no_moves_after_mate(self):
        game = Game.new()
        play(game, *FOOLS_MATE)
        assert not game.make_move(sq("a2"), sq("a3"))

    def test_classify_stalemate(self):
        board = make_board({"a8": "K", "b8": "P", "a7": "P", "b7": "P", "h1": "k"})
        assert classify(board, WHITE) == GameStatus(in_check=False, is_over=True, winner=None)


class TestUndo:
    def test_undo_restores_position(self):
        game = Game.new()
        play(game, ("e2", "e4"), ("d7", "d5"), ("e4", "d5"))
        record = game.undo()
        assert record.notation == "e4-d5"
        assert game.current_player == WHITE
        assert game.captured == []
        assert game.board[3][3] == Piece(PAWN, BLACK)
        assert game.board[4][4] == Piece(PAWN, WHITE)

    def test_undo_all(self):
        game = Game.new()
        play(game, ("e2", "e4"), ("d7", "d5"), ("e4", "d5"), ("d8", "d5"))
        while game.undo() is not None:
            pass
        assert game.board == initialize_board()
        assert game.current_player == WHITE
        assert game.captured == []

    def test_undo_empty(self):
        assert Game.new().undo() is None

    def test_undo_mate(self):
        game = Game.new()
        play(game, *FOOLS_MATE)
        game.undo()
        assert not game.status.is_over
        assert game.current_player == BLACK
        assert game.board[0][3] == Piece(QUEEN, BLACK)


class TestComputer:
    def test_two_player_game_has_no_computer(self):
        assert Game.new().computer_move() is None

    def test_computer_replies(self):
        game = Game.new("computer", "easy")
        play(game, ("e2", "e4"))
        record = game.computer_move()
        assert record is not None
        assert record.piece.color == BLACK
        assert game.current_player == WHITE
        assert game.move_count == 2

    def test_medium_computer_move(self):
        game = Game.new("computer", "medium", WHITE)
        record = game.computer_move()
        assert record is not None
        assert record.piece.color == WHITE

    def test_human_cannot_move_for_computer(self):
        game = Game.new("computer", "easy")
        play(game, ("e2", "e4"))
        assert not game.make_move(sq("e7"), sq("e5"))
        assert game.move_count == 1
        assert game.current_player == BLACK

    def test_computer_waits_for_human(self):
        game = Game.new("computer", "easy")
        assert game.computer_move() is None
        assert game.move_count == 0

    def test_computer_as_white_moves_first(self):
        game = Game.new("computer", "easy", WHITE)
        assert not game.make_move(sq("e2"), sq("e4"))
        assert game.computer_move().piece.color == WHITE
        assert game.make_move(sq("e7"), sq("e5"))

    def test_no_computer_move_when_over(self):
        game = Game.new()
        play(game, *FOOLS_MATE)
        game.mode, game.difficulty, game.computer_color = COMPUTER, EASY, WHITE
        assert game.computer_move() is None


class TestLegalTargets:
    def test_pawn(self):
        assert set(Game.new().legal_targets(sq("e2"))) == {sq("e3"), sq("e4")}

    def test_knight(self):
        assert set(Game.new().legal_targets(sq("g1"))) == {sq("f3"), sq("h3")}

    def test_opponent_piece(self):
        assert Game.new().legal_targets(sq("e7")) == []

    def test_empty_square(self):
        assert Game.new().legal_targets(sq("e4")) == []
