"""Two-generation transposition table of search bounds."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TypeAlias

from chesscore.core.enums import Color
from chesscore.core.move import Move

TableKey: TypeAlias = tuple[int, bool]  # (zobrist key, is_root)


@dataclass(slots=True, frozen=True)
class LowerEntry:
    """The true score was proven to be at least ``score`` at ``depth``."""

    depth: int
    score: int
    side_to_move: Color


@dataclass(slots=True, frozen=True)
class UpperEntry:
    """The true score was proven to be at most ``score`` at ``depth``."""

    depth: int
    score: int


@dataclass(slots=True)
class _Generation:
    lower: dict[TableKey, LowerEntry] = field(default_factory=dict)
    upper: dict[TableKey, UpperEntry] = field(default_factory=dict)
    moves: dict[int, Move] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.lower) + len(self.upper)


class TranspositionTable:
    """Bound cache owned by one search session.

    Reads come from the ``old`` generation and writes go to ``new``.
    :meth:`rotate` retires ``old``, promotes ``new`` and starts an empty
    ``new``, which keeps the table from growing without limit across moves.
    Not thread-safe: concurrent searches need one table each.
    """

    __slots__ = ("_old", "_new", "_rotations")

    def __init__(self) -> None:
        self._old = _Generation()
        self._new = _Generation()
        self._rotations = 0

    # -- Bounds ------------------------------------------------------------

    def lookup(
        self,
        key: int,
        root: bool,
    ) -> tuple[LowerEntry | None, UpperEntry | None]:
        """Bounds stored for *key* in the previous generation."""
        table_key = (key, root)
        return self._old.lower.get(table_key), self._old.upper.get(table_key)

    def insert_lower(self, key: int, root: bool, entry: LowerEntry) -> None:
        self._new.lower[(key, root)] = entry

    def insert_upper(self, key: int, root: bool, entry: UpperEntry) -> None:
        self._new.upper[(key, root)] = entry

    # -- Hash moves --------------------------------------------------------

    def best_move(self, key: int) -> Move | None:
        """Most recent move that produced a cutoff for *key*."""
        move = self._new.moves.get(key)
        if move is None:
            move = self._old.moves.get(key)
        return move

    def insert_move(self, key: int, move: Move) -> None:
        self._new.moves[key] = move

    # -- Lifecycle ---------------------------------------------------------

    def rotate(self) -> None:
        """Start a new generation; call once per root search pass."""
        self._old = self._new
        self._new = _Generation()
        self._rotations += 1

    def clear(self) -> None:
        self._old = _Generation()
        self._new = _Generation()

    @property
    def rotations(self) -> int:
        return self._rotations

    @property
    def old_size(self) -> int:
        return len(self._old)

    @property
    def new_size(self) -> int:
        return len(self._new)

    def __len__(self) -> int:
        return self.old_size + self.new_size
