"""Tests for static evaluation and move scoring."""

import pytest

from chesscore.core.board import Board
from chesscore.core.enums import Color, PieceType
from chesscore.core.move_generator import MoveGenerator
from chesscore.core.piece import Piece
from chesscore.core.position import Position
from chesscore.core.types import parse_square
from chesscore.engine.evaluation import (
    evaluate,
    move_value,
    piece_material_value,
    piece_value,
    position_score,
)


def _mirrored(position: Position) -> Position:
    pieces = (
        Piece(p.color.opposite, p.piece_type, p.square ^ 56) for p in position.board
    )
    return Position(Board(pieces), position.side_to_move.opposite)


class TestMaterial:
    @pytest.mark.parametrize(
        "piece_type, value",
        [
            (PieceType.PAWN, 100),
            (PieceType.KNIGHT, 280),
            (PieceType.BISHOP, 320),
            (PieceType.ROOK, 479),
            (PieceType.QUEEN, 929),
            (PieceType.KING, 60_000),
        ],
    )
    def test_values(self, piece_type: PieceType, value: int) -> None:
        assert piece_material_value(piece_type) == value


class TestPieceSquareTables:
    def test_table_orientation(self) -> None:
        # Row 0 is White's back rank, row 1 the pawns' starting rank.
        assert position_score(PieceType.PAWN, 1, 4) == 102
        assert position_score(PieceType.PAWN, 0, 4) == 0
        assert position_score(PieceType.KNIGHT, 0, 0) == -66
        assert position_score(PieceType.KNIGHT, 7, 0) == -74

    def test_black_pawn_on_start_rank(self) -> None:
        pawn = Piece(Color.BLACK, PieceType.PAWN, parse_square("e7"))
        assert piece_value(pawn) == 100 + 102

    def test_black_reads_mirrored_rank(self) -> None:
        white = Piece(Color.WHITE, PieceType.KNIGHT, parse_square("f3"))
        black = Piece(Color.BLACK, PieceType.KNIGHT, parse_square("f6"))
        assert piece_value(white) == piece_value(black)
        assert piece_value(white) == 280 + position_score(PieceType.KNIGHT, 2, 5)


class TestEvaluate:
    def test_start_is_balanced(self) -> None:
        assert evaluate(Position.initial()) == 0
        assert evaluate(Position.initial().pass_turn()) == 0

    def test_side_to_move_perspective(self) -> None:
        pos = Position.from_pieces(
            [
                Piece(Color.WHITE, PieceType.KING, parse_square("e1")),
                Piece(Color.WHITE, PieceType.QUEEN, parse_square("d1")),
                Piece(Color.BLACK, PieceType.KING, parse_square("e8")),
            ]
        )
        assert evaluate(pos) == 929 + position_score(PieceType.QUEEN, 0, 3)
        assert evaluate(pos.pass_turn()) == -evaluate(pos)

    def test_mirror_gives_same_score(self) -> None:
        pos = Position.initial()
        for name in ("e2e4", "g8f6", "d2d4"):
            pos = pos.commit(parse_square(name[:2]), parse_square(name[2:]))
        assert evaluate(_mirrored(pos)) == evaluate(pos)
        assert evaluate(_mirrored(pos).pass_turn()) == -evaluate(pos)


class TestMoveValue:
    def test_quiet_move_is_positional_gain(self) -> None:
        pos = Position.initial()
        move = pos.move_for(parse_square("e2"), parse_square("e4"))
        expected = position_score(PieceType.PAWN, 3, 4) - position_score(
            PieceType.PAWN, 1, 4
        )
        assert move_value(move) == expected

    def test_capture_counts_victim(self) -> None:
        rook = Piece(Color.WHITE, PieceType.ROOK, parse_square("d1"))
        queen = Piece(Color.BLACK, PieceType.QUEEN, parse_square("d5"))
        pos = Position.from_pieces([rook, queen])
        move = pos.move_for(rook.square, queen.square)
        assert move_value(move) > 900

    def test_matches_evaluation_change(self) -> None:
        pos = Position.initial()
        for name in ("e2e4", "d7d5"):
            pos = pos.commit(parse_square(name[:2]), parse_square(name[2:]))
        before = evaluate(pos)
        for move in MoveGenerator(pos).generate_pseudo_legal_moves():
            after = evaluate(pos.apply_move(move))
            assert after == -(before + move_value(move)), str(move)
