"""
Tic-tac-toe core Python package.

Pure game logic with immutable values, kept apart from any front-end.
Modules:
- board.py: Board, marks, text rendering
- rules.py: winner/tie detection, legal moves, turn owner
- ai.py: greedy automated opponent
- state.py: RoundState and move transitions
- session.py: Session, Score, mode and round lifecycle
- scheduler.py: SessionHost with the delayed automated reply
"""
