"""
Tactics: immediate wins and moves that hand the opponent one.
Teaching notes:
- The exhaustive search scores a win in one move and a win in three moves the same,
  so it does not by itself prefer the faster win. These helpers make the short-term
  picture visible to callers.
"""
from typing import List

from .rules import Action, GameState, successor


def immediate_wins(state: GameState) -> List[Action]:
    return [action for action, child in state.transitions() if child.is_win()]


def gives_opponent_immediate_win(state: GameState, action: Action) -> bool:
    child = successor(state, action)
    return len(immediate_wins(child)) > 0
