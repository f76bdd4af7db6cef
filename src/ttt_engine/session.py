"""
Game session: the caller-owned record of board, turn owner and mode.

The engine functions never hold this state; a session passes its board into
`search` and applies the returned move through `place_mark` like any other
move.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .board import Mark, new_board, place_mark
from .config import SessionConfig
from .errors import GameOver, InvariantViolation, NotYourTurn
from .evaluator import Outcome, evaluate
from .search import SearchResult, search

logger = logging.getLogger(__name__)


@dataclass
class GameSession:
    config: SessionConfig = field(default_factory=SessionConfig)
    board: List[int] = field(default_factory=new_board)
    to_move: Mark = Mark.X

    @property
    def computer(self) -> Optional[Mark]:
        return self.config.computer_mark

    @property
    def outcome(self) -> Outcome:
        return evaluate(self.board)

    @property
    def game_over(self) -> bool:
        return self.outcome.is_terminal

    @property
    def computer_to_move(self) -> bool:
        return not self.game_over and self.to_move is self.computer

    def reset(self) -> None:
        self.board = new_board()
        self.to_move = Mark.X

    def _apply(self, index: int) -> Outcome:
        if self.game_over:
            raise GameOver(f"Game is over: {self.outcome.value}")
        place_mark(self.board, index, self.to_move)
        logger.debug("%s -> %d", self.to_move.name, index)
        outcome = self.outcome
        if not outcome.is_terminal:
            self.to_move = self.to_move.other
        return outcome

    def play(self, index: int) -> Outcome:
        """Apply a human move for the side to move."""
        if self.computer_to_move:
            raise NotYourTurn(f"It is the computer's turn ({self.to_move.name})")
        return self._apply(index)

    def computer_move(self) -> SearchResult:
        """Let the engine choose and apply a move for the computer's side."""
        if self.game_over:
            raise GameOver(f"Game is over: {self.outcome.value}")
        if not self.computer_to_move:
            raise NotYourTurn(f"It is not the computer's turn ({self.to_move.name} to move)")
        result = search(self.board, self.to_move)
        if result.move is None:
            raise InvariantViolation("search returned no move for a live board")
        self._apply(result.move)
        return result
