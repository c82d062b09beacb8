"""Static evaluation: material plus piece-square tables."""

from __future__ import annotations

from typing import Final

from chesscore.core.enums import Color, PieceType
from chesscore.core.move import Move
from chesscore.core.piece import Piece
from chesscore.core.position import Position

_PIECE_VALUES: Final[dict[PieceType, int]] = {
    PieceType.PAWN: 100,
    PieceType.KNIGHT: 280,
    PieceType.BISHOP: 320,
    PieceType.ROOK: 479,
    PieceType.QUEEN: 929,
    # Sentinel, not tradeable material: losing the king outweighs everything.
    PieceType.KING: 60_000,
}

# Tables are indexed [rank][file], rank 0 being White's back rank.
# fmt: off
_PAWN_TABLE = (
    (  0,   0,   0,   0,   0,   0,   0,   0),
    ( 78,  83,  86,  73, 102,  82,  85,  90),
    (  7,  29,  21,  44,  40,  31,  44,   7),
    (-17,  16,  -2,  15,  14,   0,  15, -13),
    (-26,   3,  10,   9,   6,   1,   0, -23),
    (-22,   9,   5, -11, -10,  -2,   3, -19),
    (-31,   8,  -7, -37, -36, -14,   3, -31),
    (  0,   0,   0,   0,   0,   0,   0,   0),
)
_KNIGHT_TABLE = (
    (-66, -53, -75, -75, -10, -55, -58, -70),
    ( -3,  -6, 100, -36,   4,  62,  -4, -14),
    ( 10,  67,   1,  74,  73,  27,  62,  -2),
    ( 24,  24,  45,  37,  33,  41,  25,  17),
    ( -1,   5,  31,  21,  22,  35,   2,   0),
    (-18,  10,  13,  22,  18,  15,  11, -14),
    (-23, -15,   2,   0,   2,   0, -23, -20),
    (-74, -23, -26, -24, -19, -35, -22, -69),
)
_BISHOP_TABLE = (
    (-59, -78, -82, -76, -23, -107, -37, -50),
    (-11,  20,  35, -42, -39,   31,   2, -22),
    ( -9,  39, -32,  41,  52,  -10,  28, -14),
    ( 25,  17,  20,  34,  26,   25,  15,  10),
    ( 13,  10,  17,  23,  17,   16,   0,   7),
    ( 14,  25,  24,  15,   8,   25,  20,  15),
    ( 19,  20,  11,   6,   7,    6,  20,  16),
    ( -7,   2, -15, -12, -14,  -15, -10, -10),
)
_ROOK_TABLE = (
    ( 35,  29,  33,   4,  37,  33,  56,  50),
    ( 55,  29,  56,  67,  55,  62,  34,  60),
    ( 19,  35,  28,  33,  45,  27,  25,  15),
    (  0,   5,  16,  13,  18,  -4,  -9,  -6),
    (-28, -35, -16, -21, -13, -29, -46, -30),
    (-42, -28, -42, -25, -25, -35, -26, -46),
    (-53, -38, -31, -26, -29, -43, -44, -53),
    (-30, -24, -18,   5,  -2, -18, -31, -32),
)
_QUEEN_TABLE = (
    (  6,   1,  -8, -104,  69,  24,  88,  26),
    ( 14,  32,  60,  -10,  20,  76,  57,  24),
    ( -2,  43,  32,   60,  72,  63,  43,   2),
    (  1, -16,  22,   17,  25,  20, -13,  -6),
    (-14, -15,  -2,   -5,  -1, -10, -20, -22),
    (-30,  -6, -13,  -11, -16, -11, -16, -27),
    (-36, -18,   0,  -19, -15, -15, -21, -38),
    (-39, -30, -31,  -13, -31, -36, -46, -28),
)
_KING_TABLE = (
    (  4,  54,  47, -99, -99,  60,  83, -62),
    (-32,  10,  55,  56,  56,  55,  10,   3),
    (-62,  12, -57,  44, -67,  28,  37, -31),
    (-55,  50,  11,  -4, -19,  13,   0, -49),
    (-55, -43, -52, -28, -51, -47,  -8, -50),
    (-47, -42, -43, -79, -64, -32, -29, -32),
    ( -4,   3, -14, -50, -57, -18,  13,   4),
    ( 17,  30,  -3, -14,   6,  -1,  40,  18),
)
# fmt: on

_PST: Final[dict[PieceType, tuple[tuple[int, ...], ...]]] = {
    PieceType.PAWN: _PAWN_TABLE,
    PieceType.KNIGHT: _KNIGHT_TABLE,
    PieceType.BISHOP: _BISHOP_TABLE,
    PieceType.ROOK: _ROOK_TABLE,
    PieceType.QUEEN: _QUEEN_TABLE,
    PieceType.KING: _KING_TABLE,
}


def piece_material_value(piece_type: PieceType) -> int:
    """Fixed material value in centipawns."""
    return _PIECE_VALUES[piece_type]


def position_score(piece_type: PieceType, rank: int, file: int) -> int:
    """Piece-square bonus, *rank* counted from White's side of the board."""
    return _PST[piece_type][rank][file]


def piece_value(piece: Piece) -> int:
    """Material plus positional value of *piece* for its own side."""
    rank = piece.rank if piece.color == Color.WHITE else 7 - piece.rank
    return _PIECE_VALUES[piece.piece_type] + _PST[piece.piece_type][rank][piece.file]


def evaluate(position: Position) -> int:
    """Static score in centipawns from the side to move's point of view."""
    side = position.side_to_move
    score = 0
    for piece in position.board:
        if piece.color == side:
            score += piece_value(piece)
        else:
            score -= piece_value(piece)
    return score


def move_value(move: Move) -> int:
    """Score gained by the side to move by playing *move*.

    ``evaluate(position.apply_move(move))`` equals
    ``-(evaluate(position) + move_value(move))``.
    """
    piece = move.piece
    gain = piece_value(piece.moved_to(move.to_sq)) - piece_value(piece)
    if move.captured is not None:
        gain += piece_value(move.captured)
    return gain
