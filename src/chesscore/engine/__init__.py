"""Chess engine package: evaluation, bound search and the Qt worker bridge.

The Qt bridge is not imported here, so the search runs without PyQt6
(e.g. in a headless analysis process).
"""

from chesscore.engine.bound_search import (
    EVAL_ROUGHNESS,
    IID_LIMIT,
    IID_REDUCE,
    MATE_LOWER,
    MATE_UPPER,
    NULL_LIMIT,
    QS_A,
    QS_B,
    BoundSearchEngine,
    search_best_move,
)
from chesscore.engine.evaluation import (
    evaluate,
    move_value,
    piece_material_value,
    piece_value,
    position_score,
)
from chesscore.engine.search import IEngine, SearchLimits, SearchResult
from chesscore.engine.transposition import LowerEntry, TranspositionTable, UpperEntry

__all__ = [
    # Tuning constants
    "EVAL_ROUGHNESS",
    "IID_LIMIT",
    "IID_REDUCE",
    "MATE_LOWER",
    "MATE_UPPER",
    "NULL_LIMIT",
    "QS_A",
    "QS_B",
    # Evaluation
    "evaluate",
    "move_value",
    "piece_material_value",
    "piece_value",
    "position_score",
    # Search
    "BoundSearchEngine",
    "IEngine",
    "LowerEntry",
    "SearchLimits",
    "SearchResult",
    "TranspositionTable",
    "UpperEntry",
    "search_best_move",
]
