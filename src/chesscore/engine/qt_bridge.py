"""PyQt6 worker that runs bound searches off the GUI thread.

Move an :class:`EngineWorker` to a ``QThread`` and drive it through its
slots; every request is answered by exactly one signal carrying the
caller's request id.
"""

from __future__ import annotations

import logging
import threading

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from chesscore.core.position import Position
from chesscore.engine.bound_search import BoundSearchEngine
from chesscore.engine.search import IEngine, SearchLimits, SearchResult

_LOGGER = logging.getLogger(__name__)


class EngineWorker(QObject):
    """Answers move requests with one of four signals.

    * ``best_move_ready(request_id, move, score, depth, nodes)``
    * ``search_no_move(request_id, score, depth, nodes)``: game over or
      the side to move has nothing to play.
    * ``search_cancelled(request_id)``
    * ``search_error(request_id, message)``

    The worker owns its engine and therefore its transposition table, so
    two workers never share search state.
    """

    best_move_ready = pyqtSignal(int, object, int, int, int)
    search_cancelled = pyqtSignal(int)
    search_no_move = pyqtSignal(int, int, int, int)
    search_error = pyqtSignal(int, str)

    def __init__(
        self,
        *,
        max_depth: int = 3,
        time_limit_ms: int | None = 700,
    ) -> None:
        super().__init__()
        self._engine: IEngine = BoundSearchEngine()
        self._limits = SearchLimits(max_depth=max_depth, time_limit_ms=time_limit_ms)
        self._stop = threading.Event()

    @property
    def limits(self) -> SearchLimits:
        return self._limits

    @pyqtSlot(object, int)
    def request_move(self, position_obj: object, request_id: int) -> None:
        if not isinstance(position_obj, Position):
            self.search_error.emit(request_id, "Engine received invalid position")
            return

        _LOGGER.debug("Request %d: searching with %s", request_id, self._limits)
        self._stop.clear()
        try:
            result = self._engine.search(position_obj, self._limits, self._stop.is_set)
        except Exception as exc:
            _LOGGER.exception("Engine search %d failed", request_id)
            self.search_error.emit(request_id, str(exc))
            return
        self._publish(request_id, result)

    def _publish(self, request_id: int, result: SearchResult) -> None:
        if self._stop.is_set():
            _LOGGER.debug("Request %d cancelled", request_id)
            self.search_cancelled.emit(request_id)
        elif result.best_move is None:
            self.search_no_move.emit(
                request_id, result.score_cp, result.depth, result.nodes
            )
        else:
            self.best_move_ready.emit(
                request_id,
                result.best_move,
                result.score_cp,
                result.depth,
                result.nodes,
            )

    @pyqtSlot()
    def cancel(self) -> None:
        """Stop the running search at its next root pass."""
        self._stop.set()

    @pyqtSlot(int, int)
    def set_limits(self, max_depth: int, time_limit_ms: int) -> None:
        """Use new limits from the next request on; invalid ones are ignored."""
        try:
            limits = SearchLimits(max_depth=max_depth, time_limit_ms=time_limit_ms)
        except ValueError as exc:
            _LOGGER.warning("Ignoring engine limits: %s", exc)
            return
        self._limits = limits
