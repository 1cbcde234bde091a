"""
UCI (Universal Chess Interface) protocol handler.

UCI is the standard text protocol between chess GUIs / testing tools and
engines. The engine reads commands from stdin and writes responses to
stdout. Every output line is flushed immediately; GUIs read line by line.

Protocol overview:
    GUI -> Engine: uci, isready, ucinewgame, setoption, position, go, stop, quit
    Engine -> GUI: id name, id author, option, uciok, readyok, info, bestmove

Strength is chosen with the Difficulty option rather than a clock:

    setoption name Difficulty value easy|medium|hard

"go depth N" overrides the difficulty with a fixed-depth minimax search.
Time-control parameters (wtime, movetime, ...) are accepted and ignored,
because the search has no time cutoff.

Threading model:
    "go" starts the search on a daemon thread with its own copy of the board
    so the main thread keeps reading stdin. The search cannot be
    interrupted, so "stop" waits for it to finish and report its move.

stdout carries protocol lines only; diagnostics are written to stderr.

Run with: python -m interface.uci
"""

import sys
import threading
import time
from typing import Optional

from engine.board import (
    Board,
    apply_move,
    board_from_fen,
    copy_board,
    initialize_board,
    move_to_uci,
    opponent,
    parse_uci_move,
)
from engine.constants import DIFFICULTIES, MEDIUM, WHITE
from engine.rules import is_valid_move
from engine.search import SearchStats, best_move, select_move

ENGINE_NAME = "ChessMaster"
ENGINE_AUTHOR = "ChessMaster Project"


def _send(line: str) -> None:
    """
    Write a line to stdout and flush immediately.

    GUIs read line by line; an unflushed buffer leaves them waiting for
    output the engine has already produced.
    """
    print(line, flush=True)


def _log(message: str) -> None:
    """Write a diagnostic line to stderr, keeping stdout clean for the protocol."""
    print(message, file=sys.stderr, flush=True)


class UciHandler:
    """
    Stateful handler for the UCI protocol.

    Attributes:
        board:         Current position, replaced by "position" commands.
        turn:          Side to move in ``board``.
        difficulty:    Strength used by "go" when no depth is given.
        search_thread: The running search thread, or None.
    """

    def __init__(self) -> None:
        self.board: Board = initialize_board()
        self.turn: str = WHITE
        self.difficulty: str = MEDIUM
        self.search_thread: Optional[threading.Thread] = None

    # -----------------------------------------------------------------------
    # Command handlers
    # -----------------------------------------------------------------------

    def handle_uci(self) -> None:
        _send(f"id name {ENGINE_NAME}")
        _send(f"id author {ENGINE_AUTHOR}")
        _send(
            f"option name Difficulty type combo default {MEDIUM} "
            + " ".join(f"var {level}" for level in DIFFICULTIES)
        )
        _send("uciok")

    def handle_isready(self) -> None:
        _send("readyok")

    def handle_ucinewgame(self) -> None:
        self._wait_for_search()
        self.board = initialize_board()
        self.turn = WHITE

    def handle_setoption(self, tokens: list[str]) -> None:
        """
        Apply "setoption name <id> value <x>".

        Only Difficulty is recognised; anything else is logged and ignored.
        """
        if "name" not in tokens or "value" not in tokens:
            _log(f"uci: malformed setoption: {' '.join(tokens)}")
            return
        name_idx = tokens.index("name")
        value_idx = tokens.index("value")
        name = " ".join(tokens[name_idx + 1:value_idx]).lower()
        value = " ".join(tokens[value_idx + 1:]).lower()

        if name != "difficulty":
            _log(f"uci: ignoring unknown option: {name!r}")
            return
        if value not in DIFFICULTIES:
            _log(f"uci: unknown difficulty: {value!r}")
            return
        self.difficulty = value

    def handle_position(self, tokens: list[str]) -> None:
        """
        Parse and apply a "position" command.

        Command formats:
            position startpos [moves e2e4 e7e5 ...]
            position fen <FEN> [moves e2e4 e7e5 ...]

        Each listed move must belong to the side to move and pass the movement
        rules. Replay stops at the first move that does not.

        Args:
            tokens: The command tokens with "position" already stripped.
        """
        if not tokens:
            return

        if "moves" in tokens:
            moves_idx = tokens.index("moves")
            move_tokens = tokens[moves_idx + 1:]
        else:
            moves_idx = len(tokens)
            move_tokens = []

        try:
            if tokens[0] == "startpos":
                board, turn = initialize_board(), WHITE
            elif tokens[0] == "fen":
                board, turn = board_from_fen(" ".join(tokens[1:moves_idx]))
            else:
                _log(f"uci: unknown position type: {tokens[0]}")
                return
        except ValueError as e:
            _log(f"uci: bad position: {e}")
            return

        self.board, self.turn = board, turn

        for uci_move in move_tokens:
            try:
                move = parse_uci_move(uci_move)
            except ValueError:
                _log(f"uci: unparseable move in position command: {uci_move}")
                break
            piece = self.board[move.from_square.row][move.from_square.col]
            if piece is None or piece.color != self.turn or not is_valid_move(self.board, *move):
                _log(f"uci: illegal move in position command: {uci_move}")
                break
            self.board = apply_move(self.board, move)
            self.turn = opponent(self.turn)

    def handle_go(self, tokens: list[str]) -> None:
        """
        Start a search on a background thread and reply with "bestmove".

        "go depth N" runs a fixed-depth minimax; any other "go" uses the
        current Difficulty.
        """
        self._wait_for_search()

        depth = self._parse_go_depth(tokens)
        board_copy = copy_board(self.board)
        color = self.turn
        difficulty = self.difficulty

        def search_and_reply() -> None:
            try:
                stats = SearchStats()
                start = time.monotonic()
                if depth is not None:
                    move = best_move(board_copy, color, depth, stats)
                else:
                    move = select_move(board_copy, color, difficulty, stats=stats)
                elapsed_ms = max(1, int((time.monotonic() - start) * 1000))

                if move is not None:
                    nps = max(1, stats.nodes * 1000 // elapsed_ms)
                    _send(
                        f"info depth {stats.depth} nodes {stats.nodes} "
                        f"nps {nps} time {elapsed_ms}"
                    )
                    _send(f"bestmove {move_to_uci(move)}")
                else:
                    # UCI requires a bestmove reply; "(none)" is the convention.
                    _send("bestmove (none)")

            except Exception as e:
                _log(f"search error: {e}")
                _send("bestmove (none)")

        self.search_thread = threading.Thread(target=search_and_reply, daemon=True)
        self.search_thread.start()

    def handle_stop(self) -> None:
        self._wait_for_search()

    def handle_quit(self) -> None:
        self._wait_for_search()
        sys.exit(0)

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    def _wait_for_search(self) -> None:
        """Block until the running search, if any, has replied."""
        if self.search_thread is not None and self.search_thread.is_alive():
            self.search_thread.join()
        self.search_thread = None

    def _parse_go_depth(self, tokens: list[str]) -> Optional[int]:
        """
        Return N from "go ... depth N ...", or None if absent or not a positive integer.
        """
        if "depth" not in tokens:
            return None
        idx = tokens.index("depth")
        try:
            depth = int(tokens[idx + 1])
        except (ValueError, IndexError):
            _log("uci: bad depth in go command")
            return None
        return depth if depth > 0 else None


def run_uci_loop() -> None:
    """
    Main UCI protocol loop.

    Reads stdin line by line and dispatches each command to a UciHandler
    until "quit" or end of input. A failing command is logged to stderr and
    the loop carries on.
    """
    handler = UciHandler()
    takes_args = {
        "setoption": handler.handle_setoption,
        "position": handler.handle_position,
        "go": handler.handle_go,
    }
    no_args = {
        "uci": handler.handle_uci,
        "isready": handler.handle_isready,
        "ucinewgame": handler.handle_ucinewgame,
        "stop": handler.handle_stop,
        "quit": handler.handle_quit,
    }

    for raw_line in sys.stdin:
        if not raw_line.strip():
            continue
        command, *rest = raw_line.split()

        try:
            if command in takes_args:
                takes_args[command](rest)
            elif command in no_args:
                no_args[command]()
            else:
                # Unknown commands are ignored as the UCI protocol requires.
                _log(f"uci: ignoring unknown command: {command!r}")
        except Exception as e:
            _log(f"uci: unhandled error for command {command!r}: {e}")

    handler.handle_stop()


if __name__ == "__main__":
    run_uci_loop()
