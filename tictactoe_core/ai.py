from __future__ import annotations

import logging
import random
from typing import Optional

from .board import Board, Mark
from .rules import legal_moves, other_mark, winner

LOGGER = logging.getLogger(__name__)


def _first_winning_move(board: Board, mark: Mark) -> Optional[int]:
    """Finds the lowest empty index that would complete a line for mark."""
    for idx in legal_moves(board):
        if winner(board.place(idx, mark)) == mark:
            return idx
    return None


def choose_move(board: Board, own_mark: Mark, rng: Optional[random.Random] = None) -> Optional[int]:
    """
    Picks a move for the automated player with a one-ply greedy rule:
    take an immediate win, otherwise block the opponent's immediate win,
    otherwise play a uniformly random empty cell.
    Returns None when the board has no empty cells.
    """
    moves = legal_moves(board)
    if not moves:
        return None
    win = _first_winning_move(board, own_mark)
    if win is not None:
        LOGGER.debug('ai %s: winning move at %d', own_mark, win)
        return win
    block = _first_winning_move(board, other_mark(own_mark))
    if block is not None:
        LOGGER.debug('ai %s: blocking at %d', own_mark, block)
        return block
    pick = (rng or random).choice(moves)
    LOGGER.debug('ai %s: random move at %d', own_mark, pick)
    return pick
