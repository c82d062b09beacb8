"""Pseudo-legal move enumeration for a :class:`Position`."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chesscore.core.errors import NoPieceAtSquareError
from chesscore.core.move import Move
from chesscore.core.piece import Piece
from chesscore.core.rules import generate_moves, valid_destinations
from chesscore.core.types import Square, ensure_square

if TYPE_CHECKING:
    from chesscore.core.position import Position


class MoveGenerator:
    """Generates pseudo-legal moves for a given :class:`Position`.

    Moves that leave the mover's own king capturable are not filtered out;
    the search sees such a king captured on the next ply.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Public API ---------------------------------------------------------

    def generate_pseudo_legal_moves(self) -> list[Move]:
        """All pseudo-legal moves for the side to move."""
        moves: list[Move] = []
        for piece in self._board.all_pieces(self._pos.side_to_move):
            self._append_moves(piece, moves)
        return moves

    def moves_from(self, sq: Square) -> list[Move]:
        """Pseudo-legal moves of the piece on *sq*, whichever its color."""
        moves: list[Move] = []
        self._append_moves(self._piece_on(sq), moves)
        return moves

    def highlight_squares(self, sq: Square) -> set[Square]:
        """Squares to highlight for the piece on *sq*."""
        return generate_moves(self._piece_on(sq), self._board)

    # -- Helpers (private) ---------------------------------------------------

    def _piece_on(self, sq: Square) -> Piece:
        piece = self._board[ensure_square(sq)]
        if piece is None:
            raise NoPieceAtSquareError(sq)
        return piece

    def _append_moves(self, piece: Piece, moves: list[Move]) -> None:
        board = self._board
        for to_sq in sorted(valid_destinations(piece, board)):
            moves.append(Move(piece, to_sq, board[to_sq]))
