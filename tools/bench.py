#!/usr/bin/env python3
"""
Benchmark: nodes searched and time per move at a fixed depth.

Run before and after any change to the rules or the search. At the same
depth the node count must not move unless move order or pruning changed;
nodes per second shows how fast move generation and evaluation are.

The search runs in-process, so the figures exclude interpreter start-up.

Usage: python -m tools.bench [depth]   (from the repository root)
"""
import sys
import time

from engine.board import board_from_fen, move_to_uci
from engine.search import SearchStats, best_move

DEFAULT_DEPTH = 3

# Fixed positions so runs stay comparable across versions.
POSITIONS = [
    ("Start",         "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w - - 0 1"),
    ("After 1.e4",    "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b - - 0 1"),
    ("Italian",       "r1bqkbnr/pppp1ppp/2n5/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R b - - 3 3"),
    ("Mid-open",      "r1bqkb1r/pppp1ppp/2n2n2/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R w - - 4 4"),
    ("Hanging queen", "7k/8/8/8/8/8/8/R3q2K w - - 0 1"),
    ("Back rank",     "6k1/5ppp/8/8/8/8/5PPP/R5K1 w - - 0 1"),
    ("Rook ending",   "8/5pk1/6p1/7p/7P/6P1/5PK1/8 w - - 0 1"),
    ("Pawn race",     "8/1p4k1/p7/P1K5/8/8/8/8 w - - 0 1"),
]


def bench_position(fen: str, depth: int) -> tuple[str, SearchStats, float]:
    """Search one position and return (move, stats, seconds)."""
    board, turn = board_from_fen(fen)
    stats = SearchStats()
    start = time.perf_counter()
    move = best_move(board, turn, depth, stats)
    elapsed = time.perf_counter() - start
    return (move_to_uci(move) if move else "(none)"), stats, elapsed


def main() -> None:
    depth = int(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_DEPTH
    print(f"ChessMaster benchmark at depth {depth} ({sys.executable})")
    print()
    header = f"{'Position':<14} {'Move':<7} {'Nodes':>9} {'Leaves':>9} {'Cutoffs':>8} {'NPS':>8} {'Time(ms)':>9}"
    print(header)
    print("-" * len(header))

    total_nodes = 0
    total_time = 0.0
    for label, fen in POSITIONS:
        move, stats, elapsed = bench_position(fen, depth)
        total_nodes += stats.nodes
        total_time += elapsed
        nps = int(stats.nodes / elapsed) if elapsed > 0 else 0
        print(
            f"{label:<14} {move:<7} {stats.nodes:>9,} {stats.evaluations:>9,} "
            f"{stats.cutoffs:>8,} {nps:>8,} {elapsed * 1000:>9,.0f}"
        )

    print("-" * len(header))
    overall = int(total_nodes / total_time) if total_time > 0 else 0
    print(f"{'TOTAL':<14} {'':<7} {total_nodes:>9,} {'':>9} {'':>8} {overall:>8,} {total_time * 1000:>9,.0f}")


if __name__ == "__main__":
    main()
