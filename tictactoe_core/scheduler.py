from __future__ import annotations

import logging
import random
import threading
from typing import Any, Optional, Tuple

from . import session as ctl
from .ai import choose_move
from .session import AUTOMATED_MARK, Session
from .state import RoundState, move_rejection

LOGGER = logging.getLogger(__name__)

DEFAULT_DELAY = 0.375  # seconds


class SessionHost:
    """
    Holds the current Session for a presentation layer and schedules the
    automated player's reply.

    After a transition that hands the turn to the automated player, a timer
    is armed with the round snapshot it was computed against. When the timer
    fires the move is applied only if that snapshot is still the current
    round, so a reply never lands on a round that was restarted or reset.
    """

    def __init__(self, session: Optional[Session] = None, delay: float = DEFAULT_DELAY,
                 rng: Optional[random.Random] = None) -> None:
        self._session = session or ctl.new_session()
        self._delay = delay
        self._rng = rng
        self._lock = threading.RLock()
        self._timer: Optional[threading.Timer] = None
        with self._lock:
            self._commit(self._session)

    @property
    def session(self) -> Session:
        return self._session

    @property
    def rng(self) -> Optional[random.Random]:
        return self._rng

    @property
    def pending(self) -> bool:
        """True while an automated reply is scheduled but not yet applied."""
        timer = self._timer
        return timer is not None and timer.is_alive()

    def start_round(self) -> Session:
        with self._lock:
            self._cancel()
            return self._commit(ctl.start_round(self._session))

    def submit_move(self, index: Any) -> Session:
        return self.try_move(index)[0]

    def try_move(self, index: Any) -> Tuple[Session, Optional[str]]:
        """
        Submits a human move and returns (session, reason). The reason is None
        when the move was accepted, otherwise it says why the move was refused.
        Both are decided under the host lock so a concurrent automated reply
        cannot land between the attempt and the verdict.
        """
        with self._lock:
            before = self._session
            rnd = before.round
            if rnd is None or not before.started:
                return before, 'no round in progress'
            if ctl.is_automated_turn(before):
                # The human cannot play the automated mark.
                LOGGER.debug('move %r rejected: automated reply pending', index)
                return before, 'waiting for the computer'
            nxt = ctl.submit_move(before, index)
            if nxt is before:
                reason = move_rejection(rnd, index, rnd.active_mark) or 'move rejected'
                LOGGER.debug('move %r rejected: %s', index, reason)
                return before, reason
            return self._commit(nxt), None

    def select_mode(self, mode: str) -> Session:
        return self.try_select_mode(mode)[0]

    def try_select_mode(self, mode: str) -> Tuple[Session, Optional[str]]:
        with self._lock:
            before = self._session
            nxt = ctl.select_mode(before, mode)
            if nxt is before:
                return before, 'cannot change mode while a game is started'
            self._cancel()
            return self._commit(nxt), None

    def reset_session(self) -> Session:
        with self._lock:
            self._cancel()
            return self._commit(ctl.reset_session(self._session))

    def suggest_move(self) -> Optional[int]:
        """Runs the opponent policy on the current board for its active mark."""
        rnd = self._session.round
        if rnd is None or rnd.is_terminal:
            return None
        return choose_move(rnd.board, rnd.active_mark, self._rng)

    def wait(self, timeout: Optional[float] = None) -> Session:
        """Blocks until a pending automated reply has been applied or discarded."""
        timer = self._timer
        if timer is not None:
            timer.join(timeout)
        return self._session

    def cancel(self) -> None:
        with self._lock:
            self._cancel()

    def _commit(self, nxt: Session) -> Session:
        self._session = nxt
        if ctl.is_automated_turn(nxt):
            self._schedule(nxt.round)
        return self._session

    def _schedule(self, rnd: Optional[RoundState]) -> None:
        if self._delay <= 0:
            self._apply_automated(rnd)
            return
        self._cancel()
        timer = threading.Timer(self._delay, self._apply_automated, args=(rnd,))
        timer.daemon = True
        self._timer = timer
        timer.start()

    def _cancel(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _apply_automated(self, expected: Optional[RoundState]) -> None:
        with self._lock:
            current = self._session.round
            if current is None or current is not expected:
                LOGGER.debug('discarding stale automated move')
                return
            if not ctl.is_automated_turn(self._session):
                return
            idx = choose_move(current.board, AUTOMATED_MARK, self._rng)
            if idx is None:
                return
            LOGGER.debug('automated move at %d', idx)
            self._session = ctl.submit_move(self._session, idx)
