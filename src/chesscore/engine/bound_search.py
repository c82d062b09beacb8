"""Fail-soft bound search (negamax + alpha-beta) with MTD-bi driver.

``bound(position, gamma, depth)`` answers "is the true score of *position*
at least *gamma*?".  A result ``>= gamma`` is a lower bound on the true
score and a result ``< gamma`` an upper bound.  :meth:`BoundSearchEngine.search`
bisects gamma around it, one depth at a time.

The engine captures kings instead of detecting mate: a side whose king is
gone scores at most ``-MATE_LOWER`` and the search stops there.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from operator import itemgetter
from time import perf_counter
from typing import Final

from chesscore.core.enums import GameResult, PieceType
from chesscore.core.move import Move
from chesscore.core.move_generator import MoveGenerator
from chesscore.core.position import Position
from chesscore.engine.evaluation import evaluate, move_value
from chesscore.engine.search import CancelCheck, IEngine, SearchLimits, SearchResult
from chesscore.engine.transposition import LowerEntry, TranspositionTable, UpperEntry

_LOGGER = logging.getLogger(__name__)

# A king is worth 60000; the margin exceeds any material swing on the board,
# so a side that lost its king still scores below -MATE_LOWER.
MATE_LOWER: Final = 60_000 - 9_260
MATE_UPPER: Final = 60_000 + 9_260

QS_A: Final = 250  # per-depth widening of the move-value threshold
QS_B: Final = 50  # move-value threshold at depth 0 (quiescence)
EVAL_ROUGHNESS: Final = 17  # MTD-bi stops once the window is this narrow
NULL_LIMIT: Final = 2  # null move only when depth > NULL_LIMIT
IID_LIMIT: Final = 2  # internal iterative deepening only when depth > IID_LIMIT
IID_REDUCE: Final = 3

_NON_PAWN_PIECES: Final = frozenset(
    (PieceType.KNIGHT, PieceType.BISHOP, PieceType.ROOK, PieceType.QUEEN)
)


def _never_cancelled() -> bool:
    return False


class BoundSearchEngine(IEngine):
    """Bound search over a transposition table owned by this engine.

    One engine runs one search at a time.  Searches that must run
    concurrently need one engine (and so one table) each.
    """

    __slots__ = ("_table", "_nodes", "_deadline", "_cancel_check")

    def __init__(self, table: TranspositionTable | None = None) -> None:
        self._table = table if table is not None else TranspositionTable()
        self._nodes = 0
        self._deadline: float | None = None
        self._cancel_check: CancelCheck = _never_cancelled

    @property
    def table(self) -> TranspositionTable:
        return self._table

    @property
    def nodes(self) -> int:
        """Nodes visited since the last :meth:`search` started."""
        return self._nodes

    # ── Driver ───────────────────────────────────────────────────────────

    def search(
        self,
        position: Position,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        self._nodes = 0
        self._cancel_check = is_cancelled or _never_cancelled
        self._deadline = limits.deadline(perf_counter())

        static = evaluate(position)
        if position.result() != GameResult.IN_PROGRESS:
            return SearchResult(None, static, 0, self._nodes)
        root_moves = MoveGenerator(position).generate_pseudo_legal_moves()
        if not root_moves:
            return SearchResult(None, static, 0, self._nodes)

        key = position.zobrist_hash
        best_move = max(root_moves, key=move_value)
        best_score = static
        completed_depth = 0
        gamma = 0

        for depth in range(1, limits.max_depth + 1):
            lower, upper = -MATE_LOWER, MATE_LOWER
            depth_move: Move | None = None
            stopped = False

            while lower < upper - EVAL_ROUGHNESS:
                if self._should_stop():
                    stopped = True
                    break
                self._table.rotate()
                score = self.bound(position, gamma, depth, root=True)
                if score >= gamma:
                    lower = score
                    depth_move = self._table.best_move(key) or depth_move
                else:
                    upper = score
                gamma = (lower + upper + 1) // 2

            if stopped:
                break

            completed_depth = depth
            if depth_move is not None:
                best_move = depth_move
            best_score = lower if lower > -MATE_LOWER else upper
            _LOGGER.debug(
                "depth=%d score=%d move=%s nodes=%d",
                depth,
                best_score,
                best_move,
                self._nodes,
            )

        _LOGGER.info(
            "Search finished: move=%s score=%d depth=%d nodes=%d",
            best_move,
            best_score,
            completed_depth,
            self._nodes,
        )
        return SearchResult(best_move, best_score, completed_depth, self._nodes)

    def _should_stop(self) -> bool:
        if self._cancel_check():
            return True
        return self._deadline is not None and perf_counter() >= self._deadline

    # ── Bound search ─────────────────────────────────────────────────────

    def bound(
        self,
        position: Position,
        gamma: int,
        depth: int,
        root: bool = False,
    ) -> int:
        """Fail-soft test of whether the true score reaches *gamma*."""
        self._nodes += 1
        depth = max(depth, 0)

        static = evaluate(position)
        if static <= -MATE_LOWER:
            return -MATE_LOWER

        key = position.zobrist_hash
        lower, upper = self._table.lookup(key, root)
        # An upper bound equal to gamma is returned as is; callers compare with
        # ``>= gamma`` and so read it as a fail-high.
        if upper is not None and upper.depth >= depth and upper.score <= gamma:
            return upper.score
        if lower is not None:
            if lower.depth >= depth and lower.score >= gamma:
                return lower.score
        else:
            depth = max(depth - 1, 0)

        best: int | None = None
        for move, score in self._candidates(position, gamma, depth, root, static):
            if best is None or score > best:
                best = score
            if best >= gamma:
                if move is not None:
                    self._table.insert_move(key, move)
                break

        if best is None:
            return static

        if best >= gamma:
            self._table.insert_lower(
                key, root, LowerEntry(depth, best, position.side_to_move)
            )
        else:
            self._table.insert_upper(key, root, UpperEntry(depth, best))
        return best

    def _candidates(
        self,
        position: Position,
        gamma: int,
        depth: int,
        root: bool,
        static: int,
    ) -> Iterator[tuple[Move | None, int]]:
        """Scores of the node's options, most promising first."""
        if not root and depth > NULL_LIMIT and self._has_non_pawn_material(position):
            null_score = -self.bound(
                position.pass_turn(), 1 - gamma, depth - 1 - NULL_LIMIT
            )
            yield None, null_score

        # Quiescence: standing pat is always an option.
        if depth == 0 and not root:
            yield None, static

        key = position.zobrist_hash
        moves = MoveGenerator(position).generate_pseudo_legal_moves()

        killer = self._table.best_move(key)
        if killer is None and depth > IID_LIMIT:
            self.bound(position, gamma, depth - IID_REDUCE, root)
            killer = self._table.best_move(key)
        if killer is not None and killer not in moves:
            killer = None

        val_lower = -MATE_UPPER if root else QS_B - depth * QS_A

        if killer is not None and move_value(killer) >= val_lower:
            yield killer, -self.bound(position.apply_move(killer), 1 - gamma, depth - 1)

        scored = sorted(
            ((move_value(move), move) for move in moves),
            key=itemgetter(0),
            reverse=True,
        )
        for value, move in scored:
            if value < val_lower:
                break
            if move == killer:
                continue
            # Futility: the opponent can always stand pat after this move.
            if depth <= 1 and not root and static + value < gamma:
                yield move, static + value if value < MATE_LOWER else MATE_UPPER
                break
            yield move, -self.bound(position.apply_move(move), 1 - gamma, depth - 1)

    def _has_non_pawn_material(self, position: Position) -> bool:
        return any(
            piece.piece_type in _NON_PAWN_PIECES
            for piece in position.board.all_pieces(position.side_to_move)
        )


def search_best_move(position: Position, depth_budget: int) -> tuple[Move | None, int]:
    """Best move and its score for the side to move, searched to *depth_budget*."""
    result = BoundSearchEngine().search(
        position, SearchLimits(max_depth=depth_budget, time_limit_ms=None)
    )
    return result.best_move, result.score_cp
