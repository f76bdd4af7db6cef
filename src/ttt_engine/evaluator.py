"""
Terminal-status evaluation of a board.

Pure functions of the board contents: nothing here mutates or caches.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional, Sequence

from .board import EMPTY, WIN_LINES, Mark, line_owner


class Outcome(Enum):
    IN_PROGRESS = "in_progress"
    WIN_X = "win_x"
    WIN_O = "win_o"
    DRAW = "draw"

    @property
    def is_terminal(self) -> bool:
        return self is not Outcome.IN_PROGRESS

    @property
    def winner(self) -> Optional[Mark]:
        if self is Outcome.WIN_X:
            return Mark.X
        if self is Outcome.WIN_O:
            return Mark.O
        return None


# X-perspective value of each terminal outcome.
TERMINAL_SCORES = {
    Outcome.WIN_X: 1,
    Outcome.WIN_O: -1,
    Outcome.DRAW: 0,
}


def winner(board: Sequence[int]) -> Optional[Mark]:
    """Owner of the first complete line in scan order, if any."""
    for line in WIN_LINES:
        owner = line_owner(board, line)
        if owner is not None:
            return owner
    return None


def evaluate(board: Sequence[int]) -> Outcome:
    w = winner(board)
    if w is Mark.X:
        return Outcome.WIN_X
    if w is Mark.O:
        return Outcome.WIN_O
    if EMPTY not in board:
        return Outcome.DRAW
    return Outcome.IN_PROGRESS
