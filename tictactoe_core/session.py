from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Optional

from .board import MARK_O, MARK_X
from .rules import Outcome, TIED
from . import state as round_sm
from .state import RoundState

LOGGER = logging.getLogger(__name__)

MODE_PVP = 'pvp'  # human vs human
MODE_PVC = 'pvc'  # human vs automated
MODES = (MODE_PVP, MODE_PVC)

HUMAN_MARK = MARK_X
AUTOMATED_MARK = MARK_O


@dataclass(frozen=True)
class Score:
    x: int = 0
    o: int = 0
    ties: int = 0

    def record(self, outcome: Outcome) -> 'Score':
        """Returns a new score with the field for a terminal outcome incremented."""
        if outcome.status == TIED:
            return replace(self, ties=self.ties + 1)
        if outcome.winner == MARK_X:
            return replace(self, x=self.x + 1)
        if outcome.winner == MARK_O:
            return replace(self, o=self.o + 1)
        return self


@dataclass(frozen=True)
class Session:
    """Mode, accumulated score and the current round. Operations return new values."""
    mode: str = MODE_PVP
    score: Score = field(default_factory=Score)
    round: Optional[RoundState] = None
    started: bool = False


def new_session(mode: str = MODE_PVP) -> Session:
    return Session(mode=mode if mode in MODES else MODE_PVP)


def start_round(session: Session) -> Session:
    return replace(session, round=round_sm.initial_round(), started=True)


def submit_move(session: Session, index: Any) -> Session:
    """
    Plays the active mark at index. Returns the same session object when the
    move is rejected; the score is updated once when the round ends.
    """
    rnd = session.round
    if not session.started or rnd is None or rnd.is_terminal:
        LOGGER.debug('move %r rejected: no round in progress', index)
        return session
    nxt = round_sm.submit_move(rnd, index, rnd.active_mark)
    if nxt is rnd:
        return session
    score = session.score
    if nxt.is_terminal:
        score = score.record(nxt.outcome)
        LOGGER.debug('round finished: %s %s', nxt.outcome.status, nxt.outcome.winner or '')
    return replace(session, round=nxt, score=score)


def select_mode(session: Session, mode: str) -> Session:
    """Changes mode only while no round is active; clears the round."""
    if session.started:
        LOGGER.debug('mode change to %r rejected: round active', mode)
        return session
    if mode not in MODES:
        LOGGER.debug('unknown mode %r rejected', mode)
        return session
    return replace(session, mode=mode, round=None)


def reset_session(session: Session) -> Session:
    return Session()


def is_automated_turn(session: Session) -> bool:
    rnd = session.round
    return (
        session.mode == MODE_PVC
        and rnd is not None
        and not rnd.is_terminal
        and rnd.active_mark == AUTOMATED_MARK
    )
