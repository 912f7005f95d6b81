"""
Tic-Tac-Total: tic-tac-toe played with numbers.
Teaching notes:
- The odd player writes 1, 3 or 5; the even player writes 2, 4 or 6. Numbers may repeat.
- Whoever fills the last cell of a row, column or diagonal summing to WIN_TARGET wins,
  no matter who wrote the other numbers on that line.
- The move number of an action is the numeral it writes.
"""
from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import List, Optional, Sequence, Tuple

from .board import deserialize_board, empty_cells, place, render, serialize_board, win_lines
from .rules import Action, GameState

SIZE = 3
WIN_TARGET = 13
MAX_MOVE = 6


def numerals(odd_turn: bool) -> Tuple[int, ...]:
    return tuple(range(1 if odd_turn else 2, MAX_MOVE + 1, 2))


def line_totals(cells: Sequence[int]) -> List[Optional[int]]:
    """Sum of each complete line; None for lines with an empty cell."""
    out: List[Optional[int]] = []
    for line in win_lines(SIZE):
        values = [cells[i] for i in line]
        out.append(sum(values) if all(values) else None)
    return out


@dataclass(frozen=True)
class TotalState(GameState):
    cells: Tuple[int, ...]
    odd_turn: bool = True

    def __post_init__(self) -> None:
        if len(self.cells) != SIZE * SIZE:
            raise ValueError(f"Board must have exactly {SIZE * SIZE} cells")
        if any(v < 0 or v > MAX_MOVE for v in self.cells):
            raise ValueError(f"Cells must hold 0 (empty) or a numeral 1..{MAX_MOVE}")

    @classmethod
    def from_string(cls, board_str: str, odd_turn: Optional[bool] = None) -> "TotalState":
        """Parse nine digits; the odd player moves first unless ``odd_turn`` is given."""
        cells = deserialize_board(board_str, "0123456")
        if len(cells) != SIZE * SIZE:
            raise ValueError(f"Board must have exactly {SIZE * SIZE} cells")
        if odd_turn is None:
            filled = sum(1 for v in cells if v)
            odd_turn = filled % 2 == 0
        return cls(cells=tuple(cells), odd_turn=odd_turn)

    @cached_property
    def _totals(self) -> List[Optional[int]]:
        return line_totals(self.cells)

    def is_win(self) -> bool:
        return WIN_TARGET in self._totals

    def is_tie(self) -> bool:
        return 0 not in self.cells and not self.is_win()

    def transitions(self) -> List[Tuple[Action, "TotalState"]]:
        if self.is_terminal():
            return []
        out = []
        for col, row in empty_cells(self.cells, SIZE):
            for n in numerals(self.odd_turn):
                child = TotalState(place(self.cells, col, row, SIZE, n), not self.odd_turn)
                out.append((Action(col, row, n), child))
        return out

    def serialize(self) -> str:
        return serialize_board(self.cells)

    def render(self) -> str:
        return render(self.cells, SIZE, ".123456")


def empty_board(odd_turn: bool = True) -> TotalState:
    return TotalState(cells=(0,) * (SIZE * SIZE), odd_turn=odd_turn)


def get_numeral_counts(cells: Sequence[int]) -> Tuple[int, int]:
    odd = sum(1 for v in cells if v % 2 == 1)
    even = sum(1 for v in cells if v and v % 2 == 0)
    return odd, even


def is_valid_state(cells: Sequence[int], odd_turn: bool) -> bool:
    """True iff the board can arise in a game where the odd player moved first."""
    if len(cells) != SIZE * SIZE or any(v < 0 or v > MAX_MOVE for v in cells):
        return False
    odd, even = get_numeral_counts(cells)
    if odd == even:
        if not odd_turn:
            return False
    elif odd == even + 1:
        if odd_turn:
            return False
    else:
        return False
    if WIN_TARGET not in line_totals(cells):
        return True
    # the game stops at the first win, so undoing one of the last mover's
    # numerals must clear every winning line
    last_mover = numerals(not odd_turn)
    for i, v in enumerate(cells):
        if v in last_mover:
            before = list(cells)
            before[i] = 0
            if WIN_TARGET not in line_totals(before):
                return True
    return False


def parse_state(board_str: str, odd_turn: Optional[bool] = None) -> TotalState:
    """Parse a digit string into a reachable Tic-Tac-Total state."""
    state = TotalState.from_string(board_str, odd_turn)
    if not is_valid_state(state.cells, state.odd_turn):
        raise ValueError("Board is not a valid reachable state.")
    return state
