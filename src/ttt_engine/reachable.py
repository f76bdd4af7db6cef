"""
Enumeration of every position reachable from the empty board by legal play.

There are 5,478 such positions, 4,520 of them non-terminal.
"""
from collections import deque
from typing import Dict, Iterator, List, Tuple

from .board import empty_cells, new_board, serialize_board, side_to_move
from .evaluator import evaluate
from .search import SearchResult, search


def iter_reachable(include_terminal: bool = True) -> Iterator[Tuple[int, ...]]:
    """Breadth-first walk over distinct reachable boards, empty board first."""
    start = tuple(new_board())
    q = deque([start])
    seen = {start}
    while q:
        s = q.popleft()
        terminal = evaluate(s).is_terminal
        if terminal:
            if include_terminal:
                yield s
            continue
        yield s
        p = side_to_move(s)
        for mv in empty_cells(s):
            child = s[:mv] + (int(p),) + s[mv + 1:]
            if child not in seen:
                seen.add(child)
                q.append(child)


def solve_all_reachable(include_terminal: bool = False) -> Dict[str, SearchResult]:
    """Solve every reachable position for its side to move, keyed by text form."""
    solved: Dict[str, SearchResult] = {}
    for s in iter_reachable(include_terminal=include_terminal):
        board: List[int] = list(s)
        solved[serialize_board(board)] = search(board, side_to_move(board))
    return solved
