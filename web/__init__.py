"""
Web application package for the ChessMaster engine.

Provides a FastAPI JSON API that a browser chessboard calls for move
validation, game status and the computer's moves.
"""
