"""
Rules contract consumed by the search.
Teaching notes:
- A state is a value. Applying an action never mutates it; it yields a new state.
- is_win() describes the player who just moved, not the player about to move.
- transitions() is an ordered list of (action, state) pairs, ascending by
  column, then row, then move number. The search breaks ties by this order.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Tuple


@dataclass(frozen=True, order=True)
class Action:
    """A single move. Field order is the tie-break order."""

    col: int
    row: int
    move: int

    def __str__(self) -> str:
        return f"({self.col},{self.row},{self.move})"


class GameState(ABC):
    @abstractmethod
    def is_win(self) -> bool:
        """True iff the most recent move completed a winning line."""

    @abstractmethod
    def is_tie(self) -> bool:
        """True iff the board is full and nobody has won."""

    @abstractmethod
    def transitions(self) -> List[Tuple[Action, "GameState"]]:
        """Legal moves and the states they produce; empty for terminal states."""

    def is_terminal(self) -> bool:
        return self.is_tie() or self.is_win()


def successor(state: GameState, action: Action) -> GameState:
    """Return the state reached by playing ``action``; ValueError if it is illegal."""
    for candidate, child in state.transitions():
        if candidate == action:
            return child
    raise ValueError(f"Illegal action {action} for this state")
