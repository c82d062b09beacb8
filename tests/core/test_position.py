"""Tests for Position transitions, hashing and move commits."""

import pytest

from chesscore.core.board import Board
from chesscore.core.enums import Color, GameResult, PieceType
from chesscore.core.errors import IllegalMoveError, NoPieceAtSquareError
from chesscore.core.move import Move
from chesscore.core.move_generator import MoveGenerator
from chesscore.core.piece import Piece
from chesscore.core.position import Position
from chesscore.core.types import E1, E2, E4, E7, E8, parse_square


class TestApplyMove:
    def test_side_switches(self) -> None:
        pos = Position.initial()
        after = pos.apply_move(pos.move_for(E2, E4))
        assert after.side_to_move == Color.BLACK

    def test_source_position_untouched(self) -> None:
        pos = Position.initial()
        snapshot = pos.board.copy()

        pos.apply_move(pos.move_for(E2, E4))

        assert pos.board == snapshot
        assert pos.side_to_move == Color.WHITE
        assert pos == Position.initial()

    def test_incremental_hash_matches_full_hash(self) -> None:
        pos = Position.initial()
        for _ in range(3):
            for move in MoveGenerator(pos).generate_pseudo_legal_moves():
                after = pos.apply_move(move)
                rebuilt = Position(after.board, after.side_to_move)
                assert after.zobrist_hash == rebuilt.zobrist_hash, str(move)
            pos = pos.apply_move(MoveGenerator(pos).generate_pseudo_legal_moves()[0])

    def test_capture_hash_matches_full_hash(self) -> None:
        rook = Piece(Color.WHITE, PieceType.ROOK, parse_square("d1"))
        queen = Piece(Color.BLACK, PieceType.QUEEN, parse_square("d5"))
        pos = Position.from_pieces([rook, queen])

        after = pos.apply_move(Move(rook, queen.square, queen))

        assert after.zobrist_hash == Position(after.board, Color.BLACK).zobrist_hash
        assert len(after.board) == 1

    def test_transpositions_share_hash(self) -> None:
        pos = Position.initial()
        a = pos.commit(parse_square("g1"), parse_square("f3"))
        a = a.commit(parse_square("g8"), parse_square("f6"))
        a = a.commit(parse_square("b1"), parse_square("c3"))
        b = pos.commit(parse_square("b1"), parse_square("c3"))
        b = b.commit(parse_square("g8"), parse_square("f6"))
        b = b.commit(parse_square("g1"), parse_square("f3"))
        assert a == b
        assert a.zobrist_hash == b.zobrist_hash

    def test_side_to_move_changes_hash(self) -> None:
        pos = Position.initial()
        assert pos.pass_turn().zobrist_hash != pos.zobrist_hash
        assert pos.pass_turn().pass_turn().zobrist_hash == pos.zobrist_hash
        assert pos.pass_turn().board is pos.board

    def test_stale_move_rejected(self) -> None:
        pos = Position.initial()
        pawn = pos.board[E2]
        bogus = Move(pawn, E4, Piece(Color.BLACK, PieceType.PAWN, E4))
        with pytest.raises(ValueError, match="does not match the board"):
            pos.apply_move(bogus)


class TestCommit:
    def test_commit_legal_move(self) -> None:
        pos = Position.initial().commit(E2, E4)
        assert pos.board.is_empty(E2)
        assert pos.board[E4] == Piece(Color.WHITE, PieceType.PAWN, E4)
        assert pos.side_to_move == Color.BLACK

    def test_commit_capture_removes_victim(self) -> None:
        pos = Position.initial()
        for from_name, to_name in (("e2", "e4"), ("d7", "d5"), ("e4", "d5")):
            pos = pos.commit(parse_square(from_name), parse_square(to_name))
        assert len(pos.board.all_pieces(Color.BLACK)) == 15
        assert pos.board[parse_square("d5")].color == Color.WHITE

    def test_empty_origin(self) -> None:
        with pytest.raises(NoPieceAtSquareError):
            Position.initial().commit(E4, parse_square("e5"))

    def test_wrong_side(self) -> None:
        with pytest.raises(IllegalMoveError, match="white to move"):
            Position.initial().commit(E7, parse_square("e5"))

    def test_illegal_shape(self) -> None:
        with pytest.raises(IllegalMoveError, match="Illegal move: e2e5"):
            Position.initial().commit(E2, parse_square("e5"))

    def test_errors_are_value_errors(self) -> None:
        with pytest.raises(ValueError):
            Position.initial().commit(E2, parse_square("d3"))

    def test_no_commit_after_king_capture(self) -> None:
        rook = Piece(Color.WHITE, PieceType.ROOK, E1)
        pos = Position.from_pieces(
            [
                rook,
                Piece(Color.WHITE, PieceType.KING, parse_square("a1")),
                Piece(Color.BLACK, PieceType.KING, E8),
                Piece(Color.BLACK, PieceType.PAWN, parse_square("h7")),
            ]
        )
        pos = pos.commit(E1, E8)
        assert pos.result() == GameResult.WHITE_WINS
        with pytest.raises(IllegalMoveError, match="Game is over"):
            pos.commit(parse_square("h7"), parse_square("h6"))


class TestResult:
    def test_initial_in_progress(self) -> None:
        assert Position.initial().result() == GameResult.IN_PROGRESS

    def test_missing_white_king(self) -> None:
        pos = Position(Board([Piece(Color.BLACK, PieceType.KING, E8)]))
        assert pos.result() == GameResult.BLACK_WINS

    def test_missing_black_king(self) -> None:
        pos = Position(Board([Piece(Color.WHITE, PieceType.KING, E1)]))
        assert pos.result() == GameResult.WHITE_WINS


class TestRepr:
    def test_repr_names_side(self) -> None:
        assert repr(Position.initial()).endswith("white to move")
