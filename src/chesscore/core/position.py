"""Position: board snapshot + side to move, with copy-on-write transitions."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from chesscore.core.board import Board
from chesscore.core.enums import Color, GameResult
from chesscore.core.errors import IllegalMoveError, NoPieceAtSquareError
from chesscore.core.move import Move
from chesscore.core.piece import Piece
from chesscore.core.rules import is_move_valid
from chesscore.core.types import Square, ensure_square, square_name
from chesscore.core.zobrist import piece_key, side_to_move_key

_LOGGER = logging.getLogger(__name__)


class Position:
    """Full game state: board + side to move.

    A position is never mutated.  :meth:`apply_move` and :meth:`pass_turn`
    return new positions, so any component may keep reading a position it
    was handed while the game continues from it.
    """

    __slots__ = ("_board", "_side_to_move", "_zobrist_hash")

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
    ) -> None:
        self._board = board if board is not None else Board.initial()
        self._side_to_move = side_to_move
        self._zobrist_hash = self._compute_zobrist_hash()

    @classmethod
    def _from_parts(cls, board: Board, side_to_move: Color, key: int) -> Position:
        pos = cls.__new__(cls)
        pos._board = board
        pos._side_to_move = side_to_move
        pos._zobrist_hash = key
        return pos

    @classmethod
    def initial(cls) -> Position:
        """Standard starting position, White to move."""
        return cls(Board.initial(), Color.WHITE)

    @classmethod
    def from_pieces(
        cls,
        pieces: Iterable[Piece],
        side_to_move: Color = Color.WHITE,
    ) -> Position:
        return cls(Board(pieces), side_to_move)

    # ── Accessors ────────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        return self._board

    @property
    def side_to_move(self) -> Color:
        return self._side_to_move

    @property
    def zobrist_hash(self) -> int:
        """Zobrist key for placement and side to move."""
        return self._zobrist_hash

    # ── Transitions ──────────────────────────────────────────────────────

    def apply_move(self, move: Move) -> Position:
        """Position after *move*; this position is left untouched.

        The move is trusted to be pseudo-legal; only its consistency with
        the board is checked.
        """
        piece = move.piece
        if self._board[move.to_sq] != move.captured:
            raise ValueError(f"Move {move} does not match the board")
        board = self._board.with_move(piece, move.to_sq)

        key = self._zobrist_hash ^ side_to_move_key()
        key ^= piece_key(piece) ^ piece_key(piece.moved_to(move.to_sq))
        if move.captured is not None:
            key ^= piece_key(move.captured)
        return Position._from_parts(board, self._side_to_move.opposite, key)

    def pass_turn(self) -> Position:
        """Same placement with the other side to move (a null move)."""
        return Position._from_parts(
            self._board,
            self._side_to_move.opposite,
            self._zobrist_hash ^ side_to_move_key(),
        )

    def move_for(self, from_sq: Square, to_sq: Square) -> Move:
        """Build the move of the piece on *from_sq* to *to_sq* (unchecked)."""
        piece = self._board[ensure_square(from_sq)]
        if piece is None:
            raise NoPieceAtSquareError(from_sq)
        return Move(piece, ensure_square(to_sq), self._board[to_sq])

    def commit(self, from_sq: Square, to_sq: Square) -> Position:
        """Play the piece on *from_sq* to *to_sq* after full validation.

        Raises :class:`NoPieceAtSquareError` for an empty origin and
        :class:`IllegalMoveError` when the game is over, the piece belongs
        to the side not on move, or the movement rules reject the move.
        """
        move = self.move_for(from_sq, to_sq)
        piece = move.piece
        if self.result() != GameResult.IN_PROGRESS:
            raise IllegalMoveError("Game is over")
        if piece.color != self._side_to_move:
            raise IllegalMoveError(
                f"Cannot move {piece.color} piece on {square_name(from_sq)}: "
                f"{self._side_to_move} to move"
            )
        if not is_move_valid(piece, to_sq, self._board):
            raise IllegalMoveError(f"Illegal move: {move}")

        _LOGGER.debug("Committing %s (captured: %s)", move, move.captured)
        return self.apply_move(move)

    # ── Game state ───────────────────────────────────────────────────────

    def result(self) -> GameResult:
        """Winner once a king has been captured."""
        if not self._board.has_king(Color.WHITE):
            return GameResult.BLACK_WINS
        if not self._board.has_king(Color.BLACK):
            return GameResult.WHITE_WINS
        return GameResult.IN_PROGRESS

    # ── Utilities ────────────────────────────────────────────────────────

    def _compute_zobrist_hash(self) -> int:
        key = side_to_move_key() if self._side_to_move == Color.BLACK else 0
        for piece in self._board:
            key ^= piece_key(piece)
        return key

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return (
            self._side_to_move == other._side_to_move
            and self._board == other._board
        )

    def __hash__(self) -> int:
        return self._zobrist_hash

    def __repr__(self) -> str:
        return f"{self._board!r}\n{self._side_to_move} to move"
