"""Core domain layer: pure chess rules with zero external dependencies.

Quick start::

    from chesscore.core import MoveGenerator, Position, parse_square

    pos = Position.initial()
    for move in MoveGenerator(pos).generate_pseudo_legal_moves():
        print(move)
    pos = pos.commit(parse_square("e2"), parse_square("e4"))
"""

from chesscore.core.board import Board
from chesscore.core.enums import Color, GameResult, PieceType
from chesscore.core.errors import (
    ChessError,
    IllegalMoveError,
    InvalidSquareError,
    NoPieceAtSquareError,
)
from chesscore.core.move import Move
from chesscore.core.move_generator import MoveGenerator
from chesscore.core.piece import Piece
from chesscore.core.position import Position
from chesscore.core.rules import (
    PieceRules,
    generate_moves,
    is_move_valid,
    is_path_empty,
    rules_for,
    valid_destinations,
)
from chesscore.core.types import (
    Square,
    ensure_square,
    file_of,
    is_light_square,
    make_square,
    parse_square,
    rank_of,
    square_name,
)

__all__ = [
    # Enums
    "Color",
    "GameResult",
    "PieceType",
    # Errors
    "ChessError",
    "IllegalMoveError",
    "InvalidSquareError",
    "NoPieceAtSquareError",
    # Types / helpers
    "Square",
    "ensure_square",
    "file_of",
    "is_light_square",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "Piece",
    "Position",
    # Rules
    "PieceRules",
    "generate_moves",
    "is_move_valid",
    "is_path_empty",
    "rules_for",
    "valid_destinations",
]
