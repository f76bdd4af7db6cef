"""
Board representation, text form, rules and the public move entry point.
Teaching notes:
- A board is a list of 9 cells in row-major order: 0=empty, 1=X, 2=O. X always starts.
- Mark is an IntEnum, so boards may hold plain ints or marks interchangeably.
- Valid states have counts either equal (X to move) or X has one more (O to move).
"""
from __future__ import annotations

from enum import IntEnum
from typing import List, MutableSequence, Optional, Sequence

from .errors import InvalidBoard, InvalidIndex, InvariantViolation

EMPTY = 0
SIZE = 9

# Scan order matters only for determinism: a legal board has at most one
# completed line when it is evaluated.
WIN_LINES = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)

_EMPTY_CHARS = "0.-_"
_X_CHARS = "1xX"
_O_CHARS = "2oO"


class Mark(IntEnum):
    X = 1
    O = 2

    @property
    def other(self) -> "Mark":
        return Mark.O if self is Mark.X else Mark.X

    @classmethod
    def parse(cls, text: str) -> "Mark":
        raw = str(text).strip()
        if len(raw) == 1 and raw in _X_CHARS:
            return cls.X
        if len(raw) == 1 and raw in _O_CHARS:
            return cls.O
        raise InvalidBoard(f"Unknown mark: {text!r}")


Board = MutableSequence[int]


def new_board() -> List[int]:
    return [EMPTY] * SIZE


def check_board(board: Sequence[int]) -> None:
    """Raise InvalidBoard unless `board` has 9 cells holding 0, 1 or 2."""
    if len(board) != SIZE:
        raise InvalidBoard(f"Board must have {SIZE} cells, got {len(board)}")
    for i, v in enumerate(board):
        if isinstance(v, bool) or not isinstance(v, int) or v not in (EMPTY, Mark.X, Mark.O):
            raise InvalidBoard(f"Cell {i} holds {v!r}; expected 0, 1 or 2")


def empty_cells(board: Sequence[int]) -> List[int]:
    return [i for i, v in enumerate(board) if v == EMPTY]


def get_piece_counts(board: Sequence[int]):
    return board.count(Mark.X), board.count(Mark.O)


def line_owner(board: Sequence[int], line) -> Optional[Mark]:
    a, b, c = line
    v = board[a]
    if v != EMPTY and v == board[b] and v == board[c]:
        return Mark(v)
    return None


def side_to_move(board: Sequence[int]) -> Mark:
    """Derive whose turn it is from the mark counts."""
    x, o = get_piece_counts(board)
    if x == o:
        return Mark.X
    if x == o + 1:
        return Mark.O
    raise InvariantViolation(f"Impossible mark counts: X={x} O={o}")


def is_valid_state(board: Sequence[int]) -> bool:
    """True if the board can arise from legal alternating play starting with X."""
    try:
        check_board(board)
    except InvalidBoard:
        return False
    x, o = get_piece_counts(board)
    if not (x == o or x == o + 1):
        return False
    owners = {line_owner(board, line) for line in WIN_LINES} - {None}
    if len(owners) > 1:
        return False
    if Mark.X in owners and x != o + 1:
        return False
    if Mark.O in owners and x != o:
        return False
    return True


def place_mark(board: Board, index: int, mark: Mark) -> Board:
    """Put `mark` on an empty cell; the board is left untouched on rejection."""
    if isinstance(index, bool) or not isinstance(index, int):
        raise InvalidIndex(f"Cell index must be an int, got {index!r}")
    if not 0 <= index < SIZE:
        raise InvalidIndex(f"Cell index {index} is outside 0-8")
    if board[index] != EMPTY:
        raise InvalidIndex(f"Cell {index} is already taken by {Mark(board[index]).name}")
    board[index] = Mark(mark)
    return board


def serialize_board(board: Sequence[int]) -> str:
    return ''.join(str(int(cell)) for cell in board)


def parse_board(text: str) -> List[int]:
    raw = text.strip()
    if len(raw) != SIZE:
        raise InvalidBoard(f"Board string must be {SIZE} chars, got {len(raw)}: {text!r}")
    board: List[int] = []
    for ch in raw:
        if ch in _EMPTY_CHARS:
            board.append(EMPTY)
        elif ch in _X_CHARS:
            board.append(int(Mark.X))
        elif ch in _O_CHARS:
            board.append(int(Mark.O))
        else:
            raise InvalidBoard(f"Unexpected character {ch!r} in board {text!r}")
    return board


def format_board(board: Sequence[int]) -> str:
    """Render as three rows; empty cells show their index."""
    cells = [Mark(v).name if v != EMPTY else str(i) for i, v in enumerate(board)]
    rows = [" | ".join(cells[r:r + 3]) for r in (0, 3, 6)]
    return "\n---------\n".join(rows)
