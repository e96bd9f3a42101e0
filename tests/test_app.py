import json
import random
import unittest

import app as app_mod             # noqa: E402
from app import app as flask_app  # noqa: E402
from game import SessionHost      # noqa: E402


class TestFlaskAPI(unittest.TestCase):
    def setUp(self):
        # Swap in a host that replies synchronously so tests don't wait on timers
        self._orig_host = app_mod.host
        app_mod.host = SessionHost(delay=0, rng=random.Random(0))
        self.client = flask_app.test_client()

    def tearDown(self):
        app_mod.host.cancel()
        app_mod.host = self._orig_host

    def _post(self, path, payload=None):
        return self.client.post(path, data=json.dumps(payload or {}), content_type="application/json")

    def test_given_fresh_process_when_state_requested_then_idle_session(self):
        r = self.client.get("/api/state")
        self.assertEqual(r.status_code, 200)
        data = r.get_json()
        self.assertTrue(data["ok"])
        s = data["session"]
        self.assertEqual(s["mode"], "pvp")
        self.assertFalse(s["started"])
        self.assertIsNone(s["round"])
        self.assertEqual(s["score"], {"x": 0, "o": 0, "ties": 0})
        self.assertFalse(s["automatedTurn"])

    def test_given_start_when_posted_then_empty_board_and_all_moves_legal(self):
        r = self._post("/api/start")
        self.assertEqual(r.status_code, 200)
        rnd = r.get_json()["session"]["round"]
        self.assertEqual(rnd["board"], [None] * 9)
        self.assertEqual(rnd["activeMark"], "X")
        self.assertEqual(rnd["status"], "in_progress")
        self.assertIsNone(rnd["winner"])
        self.assertEqual(rnd["legalMoves"], list(range(9)))

    def test_given_pvp_round_when_top_row_played_then_x_wins_and_scores(self):
        self._post("/api/start")
        data = None
        for idx in (0, 4, 1, 5, 2):
            r = self._post("/api/move", {"index": idx})
            self.assertEqual(r.status_code, 200)
            data = r.get_json()
        s = data["session"]
        self.assertEqual(s["round"]["status"], "won")
        self.assertEqual(s["round"]["winner"], "X")
        self.assertEqual(s["round"]["legalMoves"], [])
        self.assertEqual(s["score"]["x"], 1)

    def test_given_pvc_when_human_moves_then_computer_replies(self):
        self.assertEqual(self._post("/api/mode", {"mode": "pvc"}).status_code, 200)
        self._post("/api/start")
        r = self._post("/api/move", {"index": 4})
        self.assertEqual(r.status_code, 200)
        s = r.get_json()["session"]
        self.assertEqual(s["mode"], "pvc")
        self.assertEqual(sum(1 for c in s["round"]["board"] if c is not None), 2)
        self.assertEqual(s["round"]["activeMark"], "X")
        self.assertFalse(s["automatedTurn"])

    def test_given_reset_when_posted_then_scores_cleared_and_mode_pvp(self):
        self._post("/api/mode", {"mode": "pvc"})
        self._post("/api/start")
        r = self._post("/api/reset")
        self.assertEqual(r.status_code, 200)
        s = r.get_json()["session"]
        self.assertEqual(s["mode"], "pvp")
        self.assertFalse(s["started"])
        self.assertIsNone(s["round"])

    def test_given_board_when_asking_ai_then_winning_move_returned_without_state_change(self):
        board = ["O", "X", None, "X", "O", None, "X", None, None]
        r = self._post("/api/ai", {"board": board})
        self.assertEqual(r.status_code, 200)
        data = r.get_json()
        self.assertEqual(data["mark"], "O")
        self.assertEqual(data["move"], 8)
        self.assertIsNone(app_mod.host.session.round)

    def test_given_current_round_when_asking_ai_without_board_then_move_for_active_mark(self):
        self._post("/api/start")
        self._post("/api/move", {"index": 0})
        self._post("/api/move", {"index": 4})
        self._post("/api/move", {"index": 1})
        r = self._post("/api/ai")
        data = r.get_json()
        self.assertTrue(data["ok"])
        self.assertEqual(data["mark"], "O")
        self.assertEqual(data["move"], 2)


if __name__ == '__main__':
    unittest.main(verbosity=2)
