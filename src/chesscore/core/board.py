"""Board - read-only snapshot of piece placement on an 8x8 board."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

from chesscore.core.enums import Color, PieceType
from chesscore.core.errors import InvalidSquareError
from chesscore.core.piece import Piece
from chesscore.core.types import Square, make_square, square_name

_COLOR_COUNT = 2

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


def _checked(sq: Square) -> Square:
    # Negative indexes would otherwise wrap around the square list.
    if not 0 <= sq < 64:
        raise InvalidSquareError(sq)
    return sq


class Board:
    """Immutable 64-square board with per-color occupancy indexes.

    A board is never changed once built.  :meth:`with_move` returns a new
    board, so a snapshot handed to another component can be read while the
    game moves on.
    """

    __slots__ = ("_squares", "_color_bitboards", "_king_squares")

    def __init__(self, pieces: Iterable[Piece] = ()) -> None:
        self._squares: list[Piece | None] = [None] * 64
        # [color] -> bitboard of all occupied squares for that color.
        self._color_bitboards: list[int] = [0] * _COLOR_COUNT
        # [color] -> king square cache (None once the king is captured).
        self._king_squares: list[Square | None] = [None] * _COLOR_COUNT
        for piece in pieces:
            self._place(piece)

    def _place(self, piece: Piece) -> None:
        sq = piece.square
        if self._squares[sq] is not None:
            raise ValueError(f"Square {square_name(sq)} is already occupied")
        self._squares[sq] = piece
        color_idx = int(piece.color)
        self._color_bitboards[color_idx] |= 1 << sq
        if piece.piece_type == PieceType.KING:
            self._king_squares[color_idx] = sq

    def _lift(self, sq: Square) -> None:
        piece = self._squares[sq]
        if piece is None:
            return
        color_idx = int(piece.color)
        self._squares[sq] = None
        self._color_bitboards[color_idx] &= ~(1 << sq)
        if self._king_squares[color_idx] == sq:
            self._king_squares[color_idx] = None

    @staticmethod
    def _squares_from_bitboard(bitboard: int) -> list[Square]:
        squares: list[Square] = []
        while bitboard:
            lsb = bitboard & -bitboard
            squares.append(lsb.bit_length() - 1)
            bitboard ^= lsb
        return squares

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[_checked(sq)]

    def __iter__(self) -> Iterator[Piece]:
        """Pieces in square order (a1 first)."""
        return (piece for piece in self._squares if piece is not None)

    def __len__(self) -> int:
        return (self._color_bitboards[0] | self._color_bitboards[1]).bit_count()

    def is_empty(self, sq: Square) -> bool:
        return self._squares[_checked(sq)] is None

    def color_at(self, sq: Square) -> Color | None:
        """Color of the piece on *sq*, or ``None`` for an empty square."""
        piece = self._squares[_checked(sq)]
        return None if piece is None else piece.color

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color, piece_type: PieceType) -> list[Piece]:
        """*color*'s pieces of *piece_type*."""
        return [p for p in self.all_pieces(color) if p.piece_type == piece_type]

    def all_pieces_bitboard(self, color: Color) -> int:
        """Bitboard of all squares occupied by *color*."""
        return self._color_bitboards[int(color)]

    def all_pieces(self, color: Color) -> list[Piece]:
        """All of *color*'s pieces, in square order."""
        squares = self._squares
        return [
            squares[sq]  # type: ignore[misc]
            for sq in self._squares_from_bitboard(self.all_pieces_bitboard(color))
        ]

    def has_king(self, color: Color) -> bool:
        return self._king_squares[int(color)] is not None

    def king_square(self, color: Color) -> Square:
        """Return the single king square for *color*."""
        sq = self._king_squares[int(color)]
        if sq is None:
            raise ValueError(f"No {color.name} king on board")
        return sq

    # -- Copy-on-write transitions -----------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._squares = self._squares.copy()
        b._color_bitboards = self._color_bitboards.copy()
        b._king_squares = self._king_squares.copy()
        return b

    def with_move(self, piece: Piece, to_sq: Square) -> Board:
        """New board with *piece* moved to *to_sq*, removing any occupant there."""
        if self._squares[piece.square] != piece:
            raise ValueError(f"{piece} is not on {square_name(piece.square)}")
        b = self.copy()
        b._lift(piece.square)
        b._lift(to_sq)
        b._place(piece.moved_to(to_sq))
        return b

    # -- Factories ----------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        pieces: list[Piece] = []
        for f, pt in enumerate(_BACK_RANK):
            pieces.append(Piece(Color.WHITE, pt, make_square(f, 0)))
            pieces.append(Piece(Color.WHITE, PieceType.PAWN, make_square(f, 1)))
            pieces.append(Piece(Color.BLACK, PieceType.PAWN, make_square(f, 6)))
            pieces.append(Piece(Color.BLACK, pt, make_square(f, 7)))
        return cls(pieces)

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> Board:
        """Build a board from eight text rows, rank 8 first.

        Each row holds eight characters (whitespace ignored): ``.`` for an
        empty square or a FEN piece letter, e.g. ``"r . . . k . . r"``.
        """
        if len(rows) != 8:
            raise ValueError(f"Board needs 8 rows, got {len(rows)}")
        pieces: list[Piece] = []
        for row_idx, row in enumerate(rows):
            cells = row.replace(" ", "")
            if len(cells) != 8:
                raise ValueError(f"Invalid board row: {row!r}")
            rank = 7 - row_idx
            for file, ch in enumerate(cells):
                if ch != ".":
                    pieces.append(Piece.from_char(ch, make_square(file, rank)))
        return cls(pieces)

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __hash__(self) -> int:
        return hash(tuple(self._squares))

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = []
            for file in range(8):
                p = self[make_square(file, rank)]
                row.append(str(p) if p else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
