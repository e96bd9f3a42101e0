from __future__ import annotations

# Facade module that re-exports the tic-tac-toe core.
# The Flask app, the CLI and tests import from here; the logic lives under tictactoe_core/*.

from tictactoe_core.board import Board, Cell, Mark, MARK_O, MARK_X, MARKS
from tictactoe_core.rules import (
    IN_PROGRESS,
    LINES,
    TIED,
    WON,
    Outcome,
    active_mark,
    evaluate,
    is_tie,
    legal_moves,
    other_mark,
    winner,
)
from tictactoe_core.ai import choose_move
from tictactoe_core.state import RoundState, initial_round, move_rejection
from tictactoe_core.state import submit_move as submit_round_move
from tictactoe_core.session import (
    AUTOMATED_MARK,
    HUMAN_MARK,
    MODE_PVC,
    MODE_PVP,
    MODES,
    Score,
    Session,
    is_automated_turn,
    new_session,
    reset_session,
    select_mode,
    start_round,
    submit_move,
)
from tictactoe_core.scheduler import DEFAULT_DELAY, SessionHost
