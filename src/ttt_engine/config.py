"""Session configuration, resolved environment-first.

Order: explicit argument -> env var (TTT_MODE, TTT_COMPUTER) -> default.
The engine itself has no configuration; this only decides which side, if
any, the computer plays in a session.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from .board import Mark
from .errors import InvalidBoard, InvalidConfig

MODE_COMPUTER = "computer"
MODE_TWO_PLAYERS = "two_players"
MODES = (MODE_COMPUTER, MODE_TWO_PLAYERS)

DEFAULT_MODE = MODE_COMPUTER
DEFAULT_COMPUTER = Mark.O


@dataclass(frozen=True)
class SessionConfig:
    mode: str = DEFAULT_MODE
    computer: Mark = DEFAULT_COMPUTER

    @property
    def computer_mark(self) -> Mark | None:
        """The mark the engine plays, or None in a two-player session."""
        return self.computer if self.mode == MODE_COMPUTER else None


def _normalize_mode(value: str) -> str:
    mode = value.strip().lower().replace("-", "_")
    if mode not in MODES:
        raise InvalidConfig(f"Unknown mode {value!r}; expected one of {', '.join(MODES)}")
    return mode


def _parse_computer(value: str) -> Mark:
    try:
        return Mark.parse(value)
    except InvalidBoard:
        raise InvalidConfig(f"Computer side must be X or O, got {value!r}") from None


def load_config(mode: str | None = None, computer: str | None = None) -> SessionConfig:
    if mode is None:
        mode = os.getenv("TTT_MODE") or DEFAULT_MODE
    if computer is None:
        computer = os.getenv("TTT_COMPUTER") or DEFAULT_COMPUTER.name
    return SessionConfig(mode=_normalize_mode(mode), computer=_parse_computer(computer))
