"""
Exact minimax over the full game tree, scored from X's perspective.

Selection policy:
- X maximises and O minimises the X-perspective score (+1 X wins, -1 O wins, 0 draw).
- Among equally scored moves, prefer the cell crossed by more winning lines
  (centre 4, corners 3, edges 2), then the lowest index. Every opening move
  draws, so this is what makes the empty board open in the centre.

The board is borrowed, not copied: each candidate mark is placed inside
`speculative_move`, which restores the cell on every exit path. A per-call
transposition table keyed on the board contents avoids re-solving
transpositions; nothing is shared between calls.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, Iterator, Optional, Tuple

from .board import (
    EMPTY,
    SIZE,
    WIN_LINES,
    Board,
    Mark,
    check_board,
    empty_cells,
    side_to_move as derive_side,
)
from .errors import InvariantViolation
from .evaluator import TERMINAL_SCORES, evaluate

logger = logging.getLogger(__name__)

CELL_WEIGHTS = tuple(sum(1 for line in WIN_LINES if i in line) for i in range(SIZE))


@dataclass(frozen=True)
class SearchResult:
    score: int
    move: Optional[int] = None

    @property
    def has_move(self) -> bool:
        return self.move is not None


@contextmanager
def speculative_move(board: Board, index: int, mark: Mark) -> Iterator[Board]:
    """Place `mark` at an empty `index` for the duration of the block."""
    if board[index] != EMPTY:
        raise InvariantViolation(f"Speculative move on occupied cell {index}")
    board[index] = mark
    try:
        yield board
    finally:
        board[index] = EMPTY


def _rank(score: int, index: int, side: Mark) -> Tuple[int, int]:
    return (score if side is Mark.X else -score, CELL_WEIGHTS[index])


def _minimax(board: Board, side: Mark, table: Dict[tuple, SearchResult]) -> SearchResult:
    key = tuple(board)
    cached = table.get(key)
    if cached is not None:
        return cached

    outcome = evaluate(board)
    if outcome.is_terminal:
        result = SearchResult(TERMINAL_SCORES[outcome])
        table[key] = result
        return result

    moves = empty_cells(board)
    if not moves:
        # evaluate() reports every full board as a draw or a win
        raise InvariantViolation("Non-terminal board with no empty cells")

    best: Optional[SearchResult] = None
    best_rank: Optional[Tuple[int, int]] = None
    for mv in moves:
        with speculative_move(board, mv, side):
            score = _minimax(board, side.other, table).score
        rank = _rank(score, mv, side)
        if best_rank is None or rank > best_rank:
            best = SearchResult(score, mv)
            best_rank = rank
    table[key] = best
    return best


def _check_turn(board: Board, side: Mark) -> None:
    expected = derive_side(board)
    if side is not expected:
        raise InvariantViolation(
            f"{side.name} to move, but mark counts say it is {expected.name}'s turn"
        )


def search(board: Board, side_to_move: Mark) -> SearchResult:
    """Best move and its X-perspective score for `side_to_move`.

    Terminal boards are scored directly with no move. For any other board
    `side_to_move` must agree with the mark counts. The board is returned
    to its input state.
    """
    check_board(board)
    side = Mark(side_to_move)
    outcome = evaluate(board)
    if outcome.is_terminal:
        return SearchResult(TERMINAL_SCORES[outcome])
    _check_turn(board, side)

    before = tuple(board)
    table: Dict[tuple, SearchResult] = {}
    result = _minimax(board, side, table)
    if tuple(board) != before:
        raise InvariantViolation("search left the board modified")
    logger.debug("searched %d positions for %s", len(table), side.name)
    return result


def move_scores(board: Board, side_to_move: Mark) -> Dict[int, int]:
    """X-perspective score of every legal move; empty for terminal boards."""
    check_board(board)
    side = Mark(side_to_move)
    if evaluate(board).is_terminal:
        return {}
    _check_turn(board, side)
    table: Dict[tuple, SearchResult] = {}
    scores: Dict[int, int] = {}
    for mv in empty_cells(board):
        with speculative_move(board, mv, side):
            scores[mv] = _minimax(board, side.other, table).score
    return scores


def best_move(board: Board) -> SearchResult:
    """Search for whichever side the mark counts say is to move."""
    check_board(board)
    outcome = evaluate(board)
    if outcome.is_terminal:
        return SearchResult(TERMINAL_SCORES[outcome])
    return search(board, derive_side(board))
