"""Chess rules core and bound-search engine.

The names a presentation layer needs are re-exported here; everything
else lives in :mod:`chesscore.core` and :mod:`chesscore.engine`.  The Qt
worker is in :mod:`chesscore.engine.qt_bridge` and is only imported by
hosts that run a Qt event loop.
"""

from chesscore.core import (
    Board,
    ChessError,
    Color,
    GameResult,
    IllegalMoveError,
    InvalidSquareError,
    Move,
    NoPieceAtSquareError,
    Piece,
    PieceType,
    Position,
    generate_moves,
    is_move_valid,
    parse_square,
    square_name,
)
from chesscore.engine import evaluate, search_best_move

__all__ = [
    "Board",
    "ChessError",
    "Color",
    "GameResult",
    "IllegalMoveError",
    "InvalidSquareError",
    "Move",
    "NoPieceAtSquareError",
    "Piece",
    "PieceType",
    "Position",
    "evaluate",
    "generate_moves",
    "is_move_valid",
    "parse_square",
    "search_best_move",
    "square_name",
]
