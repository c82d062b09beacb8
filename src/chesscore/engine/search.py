"""Search configuration, results and the engine protocol."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from chesscore.core.move import Move
    from chesscore.core.position import Position

CancelCheck = Callable[[], bool]


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Constraints for one move computation.

    ``max_depth`` bounds iterative deepening.  ``time_limit_ms`` is checked
    between root passes only, so a single pass may overrun it; ``None``
    searches every depth to completion.
    """

    max_depth: int = 3
    time_limit_ms: int | None = 700

    def __post_init__(self) -> None:
        if self.max_depth <= 0:
            raise ValueError(f"Search depth must be >= 1, got {self.max_depth!r}")
        if self.time_limit_ms is not None and self.time_limit_ms < 0:
            raise ValueError(f"Invalid time limit: {self.time_limit_ms!r}")

    def deadline(self, start: float) -> float | None:
        """Absolute stop time for a search started at *start* seconds."""
        if self.time_limit_ms is None:
            return None
        return start + max(self.time_limit_ms, 1) / 1000.0


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Outcome of a search.

    ``depth`` is the deepest fully converged iteration (0 when none
    finished).  ``score_cp`` is from the side to move's point of view.
    """

    best_move: Move | None
    score_cp: int
    depth: int
    nodes: int


class IEngine(Protocol):
    """Anything that can pick a move for a position."""

    def search(
        self,
        position: Position,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult: ...
