from __future__ import annotations

import argparse
import random
from typing import Callable, List, Optional

from .config import configure_logging, load_settings
from .rules import TIED, legal_moves
from .scheduler import SessionHost
from .session import HUMAN_MARK, MODE_PVC, MODE_PVP, MODES, Session


def parse_cell(text: str) -> Optional[int]:
    """Parses a 1-9 cell number (or 'r,c' with 0-based row/column) into a board index."""
    text = text.strip()
    if ',' in text or ' ' in text:
        sep = ',' if ',' in text else ' '
        try:
            r_s, c_s = [t for t in text.split(sep) if t != '']
            r, c = int(r_s), int(c_s)
        except ValueError:
            return None
        if 0 <= r < 3 and 0 <= c < 3:
            return r * 3 + c
        return None
    try:
        n = int(text)
    except ValueError:
        return None
    return n - 1 if 1 <= n <= 9 else None


def status_line(session: Session) -> str:
    rnd = session.round
    if rnd is None:
        return 'No round in progress.'
    outcome = rnd.outcome
    if outcome.status == TIED:
        return 'Tie game!'
    if outcome.winner is not None:
        if session.mode == MODE_PVC:
            return 'You win!' if outcome.winner == HUMAN_MARK else 'Computer wins!'
        return f'Winner: {outcome.winner}'
    if session.mode == MODE_PVC:
        return 'Your turn' if rnd.active_mark == HUMAN_MARK else "Computer's turn"
    return f'Turn: {rnd.active_mark}'


def score_line(session: Session) -> str:
    s = session.score
    x_name, o_name = ('You', 'Computer') if session.mode == MODE_PVC else ('X', 'O')
    return f'{x_name}: {s.x}  Tie: {s.ties}  {o_name}: {s.o}'


def play(host: SessionHost, read: Callable[[str], str] = input,
         write: Callable[[str], None] = print) -> Session:
    """
    Runs rounds until the user quits. Returns the final session.
    'r' resets the scores and starts over in the same mode.
    """
    mode = host.session.mode
    while True:
        session = host.start_round()
        finished = False
        while not finished:
            session = host.wait()
            rnd = session.round
            write(rnd.board.pretty(numbered=True))
            write(status_line(session))
            if rnd.is_terminal:
                finished = True
                continue
            text = read('Cell (1-9), q to quit, r to reset: ').strip().lower()
            if text == 'q':
                return host.session
            if text == 'r':
                host.reset_session()
                host.select_mode(mode)
                write('Scores reset.')
                break
            idx = parse_cell(text)
            if idx is None or idx not in legal_moves(rnd.board):
                write('Illegal move. Try again.')
                continue
            host.submit_move(idx)
        if not finished:
            continue
        write(score_line(host.session))
        if not _ask_again(read):
            return host.session


def _ask_again(read: Callable[[str], str]) -> bool:
    return read('Play another round? [Y/n] ').strip().lower() not in ('n', 'no', 'q')


def main(argv: Optional[List[str]] = None) -> None:
    settings = load_settings()
    parser = argparse.ArgumentParser(description='Tic-tac-toe in the terminal')
    parser.add_argument('--mode', choices=list(MODES), default=MODE_PVP,
                        help='pvp: two humans, pvc: you (X) against the computer (O)')
    parser.add_argument('--seed', type=int, default=settings.seed, help='RNG seed for the computer player')
    parser.add_argument('--delay', type=float, default=settings.ai_delay,
                        help='Seconds before the computer replies')
    args = parser.parse_args(argv)
    configure_logging(settings)

    host = SessionHost(delay=args.delay, rng=random.Random(args.seed))
    host.select_mode(args.mode)
    try:
        final = play(host)
    except (EOFError, KeyboardInterrupt):
        final = host.session
    host.cancel()
    print(score_line(final))


if __name__ == '__main__':
    main()
