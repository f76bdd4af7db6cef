"""ttt_engine package.

Board evaluation and exhaustive minimax search for 3x3 Tic-Tac-Toe, plus a
game session record and a simple CLI.

Convenience imports are exposed for common workflows.
"""

from .board import EMPTY, WIN_LINES, Mark, new_board, parse_board, place_mark, serialize_board
from .errors import EngineError, InvalidBoard, InvalidIndex, InvariantViolation
from .evaluator import Outcome, evaluate
from .reachable import iter_reachable, solve_all_reachable
from .search import SearchResult, search
from .session import GameSession

__all__ = [
    "EMPTY",
    "WIN_LINES",
    "Mark",
    "new_board",
    "parse_board",
    "place_mark",
    "serialize_board",
    "Outcome",
    "evaluate",
    "SearchResult",
    "search",
    "iter_reachable",
    "solve_all_reachable",
    "GameSession",
    "EngineError",
    "InvalidBoard",
    "InvalidIndex",
    "InvariantViolation",
]
