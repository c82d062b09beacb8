"""Errors reported to callers of the rules core.

Every concrete error is also a :class:`ValueError`, so callers that guard
board input with ``except ValueError`` keep working.
"""

from __future__ import annotations


class ChessError(Exception):
    """Base class for all errors raised by :mod:`chesscore`."""


class InvalidSquareError(ChessError, ValueError):
    """A coordinate outside the 8x8 board."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Invalid square: {value!r}")
        self.value = value


class NoPieceAtSquareError(ChessError, ValueError):
    """A piece-specific query was made for an empty square."""

    def __init__(self, square: int) -> None:
        from chesscore.core.types import square_name

        super().__init__(f"No piece on {square_name(square)}")
        self.square = square


class IllegalMoveError(ChessError, ValueError):
    """A move commit that the movement rules do not allow."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
