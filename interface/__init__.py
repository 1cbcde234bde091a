"""
Interface package: text front ends for the chess engine.

Modules:
    uci: Universal Chess Interface (UCI) protocol handler.
          Reads commands from stdin, writes responses to stdout.
          Run with: python -m interface.uci
    cli: Interactive terminal play, human vs human or human vs engine.
          Run with: python -m interface.cli
"""
