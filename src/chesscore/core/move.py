"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass

from chesscore.core.piece import Piece
from chesscore.core.types import Square, ensure_square, square_name


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object: a piece, its destination and what it captures."""

    piece: Piece
    to_sq: Square
    captured: Piece | None = None

    def __post_init__(self) -> None:
        ensure_square(self.to_sq)
        if self.captured is not None and self.captured.square != self.to_sq:
            raise ValueError(
                f"Captured piece must stand on {square_name(self.to_sq)}, "
                f"not {square_name(self.captured.square)}"
            )

    @property
    def from_sq(self) -> Square:
        return self.piece.square

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        return f"{square_name(self.from_sq)}{square_name(self.to_sq)}"

    @property
    def uci(self) -> str:
        """Long-algebraic notation, e.g. ``e2e4``."""
        return str(self)
