from __future__ import annotations

import random
from typing import Any, Dict, List, Optional

from flask import Flask, jsonify, request

from game import (
    MARKS,
    MODES,
    Board,
    RoundState,
    Session,
    SessionHost,
    choose_move,
    is_automated_turn,
    legal_moves,
    active_mark,
)
from tictactoe_core.config import configure_logging, load_settings

SETTINGS = load_settings()

app = Flask(__name__)

# One session per process; replaced wholesale by tests.
host = SessionHost(delay=SETTINGS.ai_delay, rng=random.Random(SETTINGS.seed))


def _round_to_json(rnd: Optional[RoundState]) -> Optional[Dict[str, Any]]:
    if rnd is None:
        return None
    return {
        "board": list(rnd.board.cells),
        "activeMark": rnd.active_mark,
        "status": rnd.outcome.status,
        "winner": rnd.outcome.winner,
        "legalMoves": [] if rnd.is_terminal else legal_moves(rnd.board),
    }


def session_to_json(s: Session) -> Dict[str, Any]:
    return {
        "mode": s.mode,
        "started": s.started,
        "score": {"x": s.score.x, "o": s.score.o, "ties": s.score.ties},
        "round": _round_to_json(s.round),
        "automatedTurn": is_automated_turn(s),
    }


def _body() -> Dict[str, Any]:
    body = request.get_json(force=True, silent=True)
    return body if isinstance(body, dict) else {}


def _ok(s: Session) -> Any:
    return jsonify({"ok": True, "session": session_to_json(s)})


def _rejected(s: Session, error: str, legal: Optional[List[int]] = None) -> Any:
    body: Dict[str, Any] = {"ok": False, "error": error, "session": session_to_json(s)}
    if legal is not None:
        body["legalMoves"] = legal
    return jsonify(body), 409


@app.get("/api/state")
def api_state() -> Any:
    return _ok(host.session)


@app.post("/api/start")
def api_start() -> Any:
    return _ok(host.start_round())


@app.post("/api/move")
def api_move() -> Any:
    body = _body()
    index = body.get("index")
    if isinstance(index, bool) or not isinstance(index, int):
        return jsonify({"ok": False, "error": "index must be an integer 0-8"}), 400
    s, reason = host.try_move(index)
    if reason is not None:
        app.logger.debug("move %s rejected: %s", index, reason)
        rnd = s.round
        if rnd is None or not s.started:
            return _rejected(s, reason)
        return _rejected(s, reason, [] if rnd.is_terminal else legal_moves(rnd.board))
    return _ok(s)


@app.post("/api/mode")
def api_mode() -> Any:
    body = _body()
    mode = body.get("mode")
    if mode not in MODES:
        return jsonify({"ok": False, "error": f"mode must be one of {list(MODES)}"}), 400
    s, reason = host.try_select_mode(mode)
    if reason is not None:
        return _rejected(s, reason)
    return _ok(s)


@app.post("/api/reset")
def api_reset() -> Any:
    return _ok(host.reset_session())


@app.post("/api/ai")
def api_ai() -> Any:
    """Pure move query: runs the opponent policy without changing the session."""
    body = _body()
    cells = body.get("board")
    if cells is None:
        rnd = host.session.round
        if rnd is None:
            return jsonify({"ok": False, "error": "no round in progress and no board given"}), 400
        board = rnd.board
    else:
        try:
            board = Board.from_cells(cells)
        except (TypeError, ValueError) as e:
            return jsonify({"ok": False, "error": f"bad board: {e}"}), 400
    mark = body.get("mark") or active_mark(board)
    if mark not in MARKS:
        return jsonify({"ok": False, "error": f"mark must be one of {list(MARKS)}"}), 400
    return jsonify({"ok": True, "move": choose_move(board, mark, host.rng), "mark": mark})


# Entrypoint for "python app.py"
if __name__ == "__main__":
    configure_logging(SETTINGS)
    app.run(host=SETTINGS.host, port=SETTINGS.port, debug=SETTINGS.debug)
