"""
Game basics for classic tic-tac-toe on an n x n board.
Teaching notes:
- Cells hold 0=empty, 1=X, 2=O. X always starts.
- A line wins when every cell on it holds the same symbol.
- The move number of an action is its ply index: the first move of the game is 1.
- Valid states have counts either equal (X to move) or X one ahead (O to move).
"""
from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import List, Optional, Sequence, Tuple

from .board import (
    board_size,
    deserialize_board,
    empty_cells,
    place,
    render,
    serialize_board,
    win_lines,
)
from .rules import Action, GameState


def get_winner(board: Sequence[int], size: int = 3) -> int:
    for line in win_lines(size):
        v = board[line[0]]
        if v != 0 and all(board[i] == v for i in line):
            return v
    return 0


def is_draw(board: Sequence[int], size: int = 3) -> bool:
    return 0 not in board and get_winner(board, size) == 0


def get_piece_counts(board: Sequence[int]) -> Tuple[int, int]:
    return list(board).count(1), list(board).count(2)


def current_player(board: Sequence[int]) -> int:
    x, o = get_piece_counts(board)
    return 1 if x == o else 2


def is_valid_state(board: Sequence[int], size: int = 3) -> bool:
    if len(board) != size * size or any(v not in (0, 1, 2) for v in board):
        return False
    x_count, o_count = get_piece_counts(board)
    if not (x_count == o_count or x_count == o_count + 1):
        return False

    def count_wins(p: int) -> int:
        return sum(1 for line in win_lines(size) if all(board[i] == p for i in line))
    # no double winners
    if count_wins(1) > 0 and count_wins(2) > 0:
        return False
    w = get_winner(board, size)
    if w == 1 and x_count != o_count + 1:
        return False
    if w == 2 and x_count != o_count:
        return False
    return True


@dataclass(frozen=True)
class TicTacToeState(GameState):
    cells: Tuple[int, ...]
    size: int = 3

    def __post_init__(self) -> None:
        if len(self.cells) != self.size * self.size:
            raise ValueError(f"Board must have exactly {self.size * self.size} cells")
        if any(v not in (0, 1, 2) for v in self.cells):
            raise ValueError("Cells must be 0 (empty), 1 (X) or 2 (O)")

    @classmethod
    def from_string(cls, board_str: str) -> "TicTacToeState":
        cells = deserialize_board(board_str, "012")
        return cls(cells=tuple(cells), size=board_size(len(cells)))

    @property
    def to_move(self) -> int:
        return current_player(self.cells)

    @property
    def ply(self) -> int:
        x, o = get_piece_counts(self.cells)
        return x + o

    @cached_property
    def winner(self) -> int:
        return get_winner(self.cells, self.size)

    def is_win(self) -> bool:
        return self.winner != 0

    def is_tie(self) -> bool:
        return 0 not in self.cells and self.winner == 0

    def transitions(self) -> List[Tuple[Action, "TicTacToeState"]]:
        if self.is_terminal():
            return []
        player = self.to_move
        move = self.ply + 1
        out = []
        for col, row in empty_cells(self.cells, self.size):
            child = TicTacToeState(place(self.cells, col, row, self.size, player), self.size)
            out.append((Action(col, row, move), child))
        return out

    def serialize(self) -> str:
        return serialize_board(self.cells)

    def render(self) -> str:
        return render(self.cells, self.size, ".XO")


def empty_board(size: int = 3) -> TicTacToeState:
    return TicTacToeState(cells=(0,) * (size * size), size=size)


def parse_state(board_str: str) -> TicTacToeState:
    """Parse a digit string into a reachable tic-tac-toe state."""
    state = TicTacToeState.from_string(board_str)
    if not is_valid_state(state.cells, state.size):
        raise ValueError("Board is not a valid reachable state.")
    return state


def winner_symbol(state: TicTacToeState) -> Optional[str]:
    return {1: "X", 2: "O"}.get(state.winner)
