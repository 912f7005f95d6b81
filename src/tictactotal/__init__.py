"""tictactotal package.

Exact alpha-beta player for tic-tac-toe style games, the rule sets it is
exercised on, and a small CLI.

Convenience imports are exposed for common workflows.
"""

from .errors import InvalidInput
from .game_basics import TicTacToeState
from .rules import Action, GameState, successor
from .search import Role, Score, SearchResult, SearchStats, choose, evaluate, minimax, search
from .total import TotalState

__all__ = [
    "Action",
    "GameState",
    "InvalidInput",
    "Role",
    "Score",
    "SearchResult",
    "SearchStats",
    "TicTacToeState",
    "TotalState",
    "choose",
    "evaluate",
    "minimax",
    "search",
    "successor",
]
