"""
Exact adversarial search: minimax with alpha-beta pruning down to terminal states.

Perspective:
- The root is searched in the MAX role on behalf of the side to move, so scores are
  WIN/TIE/LOSS for that player.
- A win predicate fires on the state reached after the winning move, i.e. it describes
  the player who just moved. A win seen in the MIN role was made by the root side (+1);
  a win seen in the MAX role was made by the opponent (-1).

Tie-break policy:
- The best action is replaced only on strict improvement, so among equal scores the
  first action in transition order (column, then row, then move number) is kept.
- Faster wins are not preferred over slower ones; all wins score +1.
"""
from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass
from typing import NamedTuple, Optional

from .errors import InvalidInput
from .rules import Action, GameState

logger = logging.getLogger(__name__)


class Role(enum.Enum):
    MAX = "max"
    MIN = "min"

    def flip(self) -> "Role":
        return Role.MIN if self is Role.MAX else Role.MAX


class Score(enum.IntEnum):
    LOSS = -1
    TIE = 0
    WIN = 1


class SearchResult(NamedTuple):
    score: Score
    action: Optional[Action]


@dataclass
class SearchStats:
    """Work counters; collecting them never changes a result."""

    nodes: int = 0
    cutoffs: int = 0


def _terminal_result(state: GameState, role: Role) -> Optional[SearchResult]:
    if state.is_tie():
        return SearchResult(Score.TIE, None)
    if state.is_win():
        return SearchResult(Score.WIN if role is Role.MIN else Score.LOSS, None)
    return None


def search(
    state: GameState,
    alpha: float = -math.inf,
    beta: float = math.inf,
    role: Role = Role.MAX,
    stats: Optional[SearchStats] = None,
) -> SearchResult:
    """Alpha-beta search of ``state`` in ``role`` within the window (alpha, beta)."""
    if stats is not None:
        stats.nodes += 1
    terminal = _terminal_result(state, role)
    if terminal is not None:
        return terminal

    best_action: Optional[Action] = None
    if role is Role.MAX:
        best = -math.inf
        for action, child in state.transitions():
            score = search(child, alpha, beta, Role.MIN, stats).score
            if score > best:
                best = score
                best_action = action
            alpha = max(alpha, best)
            if beta <= alpha:
                if stats is not None:
                    stats.cutoffs += 1
                break
    else:
        best = math.inf
        for action, child in state.transitions():
            score = search(child, alpha, beta, Role.MAX, stats).score
            if score < best:
                best = score
                best_action = action
            beta = min(beta, best)
            if beta <= alpha:
                if stats is not None:
                    stats.cutoffs += 1
                break
    return SearchResult(Score(best), best_action)


def minimax(
    state: GameState,
    role: Role = Role.MAX,
    stats: Optional[SearchStats] = None,
) -> SearchResult:
    """Plain minimax with the same scoring and tie-break as search(), without pruning."""
    if stats is not None:
        stats.nodes += 1
    terminal = _terminal_result(state, role)
    if terminal is not None:
        return terminal

    maximizing = role is Role.MAX
    best = -math.inf if maximizing else math.inf
    best_action: Optional[Action] = None
    for action, child in state.transitions():
        score = minimax(child, role.flip(), stats).score
        if (maximizing and score > best) or (not maximizing and score < best):
            best = score
            best_action = action
    return SearchResult(Score(best), best_action)


def evaluate(state: GameState, stats: Optional[SearchStats] = None) -> SearchResult:
    """Full-window root search: score for the side to move and its best action.

    A terminal state scores TIE, or LOSS when the previous move won.
    """
    return search(state, -math.inf, math.inf, Role.MAX, stats)


def choose(state: GameState, stats: Optional[SearchStats] = None) -> Action:
    """Return the optimal action for the side to move.

    Raises InvalidInput for terminal states and states without legal transitions.
    """
    if state.is_terminal():
        raise InvalidInput("Cannot choose a move from a terminal state")
    if not state.transitions():
        raise InvalidInput("State has no legal transitions")
    result = evaluate(state, stats)
    logger.debug("choose: action=%s score=%s", result.action, result.score.name)
    return result.action  # type: ignore[return-value]
