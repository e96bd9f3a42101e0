from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .board import Board, Mark, MARK_O, MARK_X

IN_PROGRESS = 'in_progress'
WON = 'won'
TIED = 'tied'

# Rows, columns, then diagonals. winner() reports the first full line in this order.
LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)


@dataclass(frozen=True)
class Outcome:
    """Status of a round: in progress, won by a mark, or tied."""
    status: str = IN_PROGRESS
    winner: Optional[Mark] = None

    @property
    def is_terminal(self) -> bool:
        return self.status != IN_PROGRESS


def winner(board: Board) -> Optional[Mark]:
    """Returns the mark owning the first complete line, or None."""
    cells = board.cells
    for a, b, c in LINES:
        if cells[a] is not None and cells[a] == cells[b] == cells[c]:
            return cells[a]
    return None


def is_tie(board: Board) -> bool:
    return winner(board) is None and board.is_full()


def legal_moves(board: Board) -> List[int]:
    """All empty indices in ascending order."""
    return [i for i, cell in enumerate(board.cells) if cell is None]


def active_mark(board: Board) -> Mark:
    """X moves on an even number of occupied cells, O on odd."""
    return MARK_X if board.occupied_count() % 2 == 0 else MARK_O


def other_mark(mark: Mark) -> Mark:
    return MARK_O if mark == MARK_X else MARK_X


def evaluate(board: Board) -> Outcome:
    # Winner takes precedence over a full board.
    w = winner(board)
    if w is not None:
        return Outcome(WON, w)
    if board.is_full():
        return Outcome(TIED)
    return Outcome()
