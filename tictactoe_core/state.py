from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from .board import Board, CELL_COUNT, Mark
from .rules import Outcome, active_mark, evaluate

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoundState:
    """One round from empty board to a terminal outcome. Transitions return new values."""
    board: Board = field(default_factory=Board)
    outcome: Outcome = field(default_factory=Outcome)

    @property
    def active_mark(self) -> Mark:
        # Derived from the board so it cannot drift out of sync.
        return active_mark(self.board)

    @property
    def is_terminal(self) -> bool:
        return self.outcome.is_terminal


def initial_round() -> RoundState:
    return RoundState()


def move_rejection(rnd: RoundState, index: Any, acting_mark: Mark) -> Optional[str]:
    """Returns why a move would be rejected, or None if it is legal."""
    if rnd.is_terminal:
        return 'round is over'
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < CELL_COUNT:
        return 'index out of range'
    if not rnd.board.is_empty(index):
        return 'cell occupied'
    if acting_mark != rnd.active_mark:
        return 'not your turn'
    return None


def submit_move(rnd: RoundState, index: Any, acting_mark: Mark) -> RoundState:
    """
    Applies acting_mark at index and re-evaluates the outcome.
    A rejected move returns the input round itself, unchanged.
    """
    reason = move_rejection(rnd, index, acting_mark)
    if reason is not None:
        LOGGER.debug('move %r by %s rejected: %s', index, acting_mark, reason)
        return rnd
    board = rnd.board.place(index, acting_mark)
    return RoundState(board=board, outcome=evaluate(board))
