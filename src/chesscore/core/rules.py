"""Per-piece movement rules.

Each piece type has one :class:`PieceRules` variant carrying both rule sets
used by callers:

* :meth:`PieceRules.destinations` is the lightweight generator behind move
  highlighting.  It keeps the historical shape of the game's
  highlighter: rooks, knights and kings never capture, bishops do, queens
  capture only along diagonals, a pawn may step straight onto an enemy
  piece, and the pawn double step does not look at the square it passes.
* :meth:`PieceRules.is_valid` is the authoritative check of one candidate
  move against full movement rules.  Search and move commits go through it.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import ClassVar

from chesscore.core.board import Board
from chesscore.core.enums import Color, PieceType
from chesscore.core.piece import Piece
from chesscore.core.types import Square, ensure_square, file_of, make_square, rank_of

# (file, rank) deltas
KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))

PAWN_START_RANK: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: 6}


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Square, ...], ...]:
    targets: list[tuple[Square, ...]] = []
    for sq in range(64):
        file_idx = sq & 7
        rank_idx = sq >> 3
        moves: list[Square] = []
        for df, dr in offsets:
            af = file_idx + df
            ar = rank_idx + dr
            if 0 <= af < 8 and 0 <= ar < 8:
                moves.append(make_square(af, ar))
        targets.append(tuple(moves))
    return tuple(targets)


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in range(64):
        file_idx = sq & 7
        rank_idx = sq >> 3
        square_rays: list[tuple[Square, ...]] = []
        for df, dr in directions:
            af = file_idx + df
            ar = rank_idx + dr
            ray: list[Square] = []
            while 0 <= af < 8 and 0 <= ar < 8:
                ray.append(make_square(af, ar))
                af += df
                ar += dr
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)
_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def is_path_empty(begin: Square, end: Square, board: Board) -> bool:
    """Whether every square strictly between *begin* and *end* is empty.

    Only squares sharing a file, rank or diagonal have anything between
    them; for any other pair the path is trivially empty.
    """
    df = file_of(end) - file_of(begin)
    dr = rank_of(end) - rank_of(begin)
    if df and dr and abs(df) != abs(dr):
        return True

    step_f = _sign(df)
    step_r = _sign(dr)
    file_idx = file_of(begin)
    rank_idx = rank_of(begin)
    for i in range(1, max(abs(df), abs(dr))):
        if not board.is_empty(make_square(file_idx + i * step_f, rank_idx + i * step_r)):
            return False
    return True


def _scan(
    color: Color,
    rays: tuple[tuple[Square, ...], ...],
    board: Board,
    captures: bool,
    out: set[Square],
) -> None:
    for ray in rays:
        for to_sq in ray:
            target = board[to_sq]
            if target is None:
                out.add(to_sq)
                continue
            if captures and target.color != color:
                out.add(to_sq)
            break


# -- Rule variants -----------------------------------------------------------


class PieceRules:
    """Movement rules for one piece type."""

    piece_type: ClassVar[PieceType]

    def destinations(self, piece: Piece, board: Board) -> set[Square]:
        """Squares highlighted for *piece*; see the module docstring."""
        raise NotImplementedError

    def reach(self, piece: Piece) -> Iterable[Square]:
        """Every square the piece's geometry could ever take it to."""
        raise NotImplementedError

    def is_valid(self, piece: Piece, to_sq: Square, board: Board) -> bool:
        if to_sq == piece.square:
            return False
        if board.color_at(to_sq) == piece.color:
            return False
        return self._shape_allows(piece, to_sq, board)

    def valid_destinations(self, piece: Piece, board: Board) -> set[Square]:
        """All squares accepted by :meth:`is_valid`."""
        return {sq for sq in self.reach(piece) if self.is_valid(piece, sq, board)}

    def _shape_allows(self, piece: Piece, to_sq: Square, board: Board) -> bool:
        raise NotImplementedError


class PawnRules(PieceRules):
    piece_type = PieceType.PAWN

    def destinations(self, piece: Piece, board: Board) -> set[Square]:
        out: set[Square] = set()
        forward = piece.color.forward
        one_rank = piece.rank + forward
        if 0 <= one_rank < 8:
            one_step = make_square(piece.file, one_rank)
            if board.color_at(one_step) != piece.color:
                out.add(one_step)
        if piece.rank == PAWN_START_RANK[piece.color]:
            # The passed-over square is not checked here; is_valid does.
            two_step = make_square(piece.file, piece.rank + 2 * forward)
            if board.is_empty(two_step):
                out.add(two_step)
        return out

    def reach(self, piece: Piece) -> Iterable[Square]:
        forward = piece.color.forward
        rank_idx = piece.rank + forward
        if not 0 <= rank_idx < 8:
            return ()
        squares = [
            make_square(f, rank_idx)
            for f in (piece.file - 1, piece.file, piece.file + 1)
            if 0 <= f < 8
        ]
        if piece.rank == PAWN_START_RANK[piece.color]:
            squares.append(make_square(piece.file, piece.rank + 2 * forward))
        return squares

    def _shape_allows(self, piece: Piece, to_sq: Square, board: Board) -> bool:
        forward = piece.color.forward
        df = file_of(to_sq) - piece.file
        dr = rank_of(to_sq) - piece.rank

        if df == 0:
            if dr == forward:
                return board.is_empty(to_sq)
            if dr == 2 * forward and piece.rank == PAWN_START_RANK[piece.color]:
                passed = make_square(piece.file, piece.rank + forward)
                return board.is_empty(passed) and board.is_empty(to_sq)
            return False

        if abs(df) == 1 and dr == forward:
            return board.color_at(to_sq) == piece.color.opposite
        return False


class KnightRules(PieceRules):
    piece_type = PieceType.KNIGHT

    def destinations(self, piece: Piece, board: Board) -> set[Square]:
        return {sq for sq in _KNIGHT_TARGETS[piece.square] if board.is_empty(sq)}

    def reach(self, piece: Piece) -> Iterable[Square]:
        return _KNIGHT_TARGETS[piece.square]

    def _shape_allows(self, piece: Piece, to_sq: Square, board: Board) -> bool:
        deltas = (abs(file_of(to_sq) - piece.file), abs(rank_of(to_sq) - piece.rank))
        return deltas in ((1, 2), (2, 1))


class BishopRules(PieceRules):
    piece_type = PieceType.BISHOP

    def destinations(self, piece: Piece, board: Board) -> set[Square]:
        out: set[Square] = set()
        _scan(piece.color, _BISHOP_RAYS[piece.square], board, True, out)
        return out

    def reach(self, piece: Piece) -> Iterable[Square]:
        return (sq for ray in _BISHOP_RAYS[piece.square] for sq in ray)

    def _shape_allows(self, piece: Piece, to_sq: Square, board: Board) -> bool:
        df = abs(file_of(to_sq) - piece.file)
        dr = abs(rank_of(to_sq) - piece.rank)
        return df == dr and is_path_empty(piece.square, to_sq, board)


class RookRules(PieceRules):
    piece_type = PieceType.ROOK

    def destinations(self, piece: Piece, board: Board) -> set[Square]:
        out: set[Square] = set()
        _scan(piece.color, _ROOK_RAYS[piece.square], board, False, out)
        return out

    def reach(self, piece: Piece) -> Iterable[Square]:
        return (sq for ray in _ROOK_RAYS[piece.square] for sq in ray)

    def _shape_allows(self, piece: Piece, to_sq: Square, board: Board) -> bool:
        same_line = file_of(to_sq) == piece.file or rank_of(to_sq) == piece.rank
        return same_line and is_path_empty(piece.square, to_sq, board)


class QueenRules(PieceRules):
    piece_type = PieceType.QUEEN

    def destinations(self, piece: Piece, board: Board) -> set[Square]:
        out: set[Square] = set()
        _scan(piece.color, _ROOK_RAYS[piece.square], board, False, out)
        _scan(piece.color, _BISHOP_RAYS[piece.square], board, True, out)
        return out

    def reach(self, piece: Piece) -> Iterable[Square]:
        sq = piece.square
        return (to_sq for ray in _ROOK_RAYS[sq] + _BISHOP_RAYS[sq] for to_sq in ray)

    def _shape_allows(self, piece: Piece, to_sq: Square, board: Board) -> bool:
        df = abs(file_of(to_sq) - piece.file)
        dr = abs(rank_of(to_sq) - piece.rank)
        if not (df == 0 or dr == 0 or df == dr):
            return False
        return is_path_empty(piece.square, to_sq, board)


class KingRules(PieceRules):
    piece_type = PieceType.KING

    def destinations(self, piece: Piece, board: Board) -> set[Square]:
        return {sq for sq in _KING_TARGETS[piece.square] if board.is_empty(sq)}

    def reach(self, piece: Piece) -> Iterable[Square]:
        return _KING_TARGETS[piece.square]

    def _shape_allows(self, piece: Piece, to_sq: Square, board: Board) -> bool:
        df = abs(file_of(to_sq) - piece.file)
        dr = abs(rank_of(to_sq) - piece.rank)
        return max(df, dr) == 1


_RULES: dict[PieceType, PieceRules] = {
    rules.piece_type: rules
    for rules in (
        PawnRules(),
        KnightRules(),
        BishopRules(),
        RookRules(),
        QueenRules(),
        KingRules(),
    )
}


def rules_for(piece_type: PieceType) -> PieceRules:
    return _RULES[piece_type]


# -- Public API --------------------------------------------------------------


def generate_moves(piece: Piece, board: Board) -> set[Square]:
    """Squares to highlight for *piece* on *board* (pseudo-legal)."""
    return _RULES[piece.piece_type].destinations(piece, board)


def is_move_valid(piece: Piece, destination: Square, board: Board) -> bool:
    """Whether *piece* may move to *destination* under full movement rules.

    Raises :class:`~chesscore.core.errors.InvalidSquareError` for an
    off-board destination.  Whether the move exposes the mover's own king
    is not checked.
    """
    ensure_square(destination)
    return _RULES[piece.piece_type].is_valid(piece, destination, board)


def valid_destinations(piece: Piece, board: Board) -> set[Square]:
    """Every destination :func:`is_move_valid` accepts for *piece*."""
    return _RULES[piece.piece_type].valid_destinations(piece, board)
